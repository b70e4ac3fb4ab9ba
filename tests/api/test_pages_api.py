def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_api_root(client) -> None:
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json() == {"service": "Fitness AI Tracker API", "status": "ok"}


def test_index_page_served(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Fitness AI Tracker" in response.text
    assert "/api/calculate-calories" in response.text
    assert "x-ai-provider" in response.text


def test_unknown_route_is_json_404(client) -> None:
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
