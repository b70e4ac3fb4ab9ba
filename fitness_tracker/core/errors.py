from typing import Any, Optional


class APIError(Exception):
    """Failure rendered as a JSON ``{"error", "details"}`` body."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_body(self) -> dict[str, str]:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


REQUIRED_ERROR_TYPES = {"missing", "value_error", "string_too_short"}


def describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    messages: list[str] = []
    for err in errors:
        err_type = err.get("type")
        if err_type == "json_invalid":
            messages.append("Request body is not valid JSON")
            continue
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query"))
        if not field:
            messages.append("Request body is required" if err_type == "missing" else str(err.get("msg")))
        elif err_type in REQUIRED_ERROR_TYPES:
            messages.append(f"{field} is required")
        else:
            messages.append(f"{field}: {err.get('msg')}")
    return "; ".join(dict.fromkeys(messages)) or "Invalid request"
