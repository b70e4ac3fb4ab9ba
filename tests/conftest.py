from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from fitness_tracker.core.config import Settings, get_settings
from fitness_tracker.core.schemas import WorkoutEntry
from fitness_tracker.services.llm import (
    AIProvider,
    GatewayError,
    GatewayErrorKind,
    get_llm_client,
)
from fitness_tracker.services.workout_store import WorkoutStore, get_workout_store


class FakeScenario(str, Enum):
    OK_NUMBER = "OK_NUMBER"
    NO_NUMBER = "NO_NUMBER"
    BACKEND_ERROR = "BACKEND_ERROR"
    MISSING_KEY = "MISSING_KEY"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    CRASH = "CRASH"


class FakeLLMClient:
    def __init__(self, scenario: FakeScenario) -> None:
        self.scenario = scenario
        self.calls: list[tuple[str, str, Optional[str]]] = []

    def _respond(self, provider: AIProvider) -> str:
        if self.scenario == FakeScenario.OK_NUMBER:
            return "Estimated: 452 kcal"
        if self.scenario == FakeScenario.NO_NUMBER:
            return "about a lot"
        if self.scenario == FakeScenario.BACKEND_ERROR:
            raise GatewayError(
                provider=provider,
                kind=GatewayErrorKind.backend_error,
                message="Ollama API error",
                details="model 'llama2' not found",
                status_code=404,
            )
        if self.scenario == FakeScenario.MISSING_KEY:
            raise GatewayError(
                provider=AIProvider.huggingface,
                kind=GatewayErrorKind.misconfigured_credential,
                message="Hugging Face API key not set",
                details="HUGGINGFACE_API_KEY is not configured",
            )
        if self.scenario == FakeScenario.TRANSPORT_ERROR:
            raise GatewayError(
                provider=provider,
                kind=GatewayErrorKind.transport_error,
                message="Ollama request failed",
                details="[Errno 111] Connection refused",
            )
        if self.scenario == FakeScenario.CRASH:
            raise RuntimeError("simulated crash")
        raise ValueError("Unknown fake scenario")

    def generate(self, prompt: str, provider: AIProvider) -> str:
        self.calls.append((prompt, provider.value, None))
        return self._respond(provider)

    def generate_local(self, prompt: str, model: Optional[str] = None) -> str:
        self.calls.append((prompt, AIProvider.ollama.value, model))
        return self._respond(AIProvider.ollama)


class RecordingWorkoutStore(WorkoutStore):
    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self.calls: list[str] = []

    def append(self, entry: WorkoutEntry) -> None:
        self.calls.append("append")
        super().append(entry)

    def list_by_owner(self, owner: str) -> list[dict]:
        self.calls.append("list_by_owner")
        return super().list_by_owner(owner)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(workouts_file=tmp_path / "workouts.json")


@pytest.fixture(scope="session")
def app():
    from fitness_tracker.main import app as fastapi_app

    return fastapi_app


@pytest.fixture
def store(settings: Settings) -> RecordingWorkoutStore:
    return RecordingWorkoutStore(settings.workouts_file)


@pytest.fixture
def client(app, settings: Settings, store: RecordingWorkoutStore):
    app.dependency_overrides = {
        get_settings: lambda: settings,
        get_workout_store: lambda: store,
    }
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}


@pytest.fixture
def override_llm(app) -> Callable[[FakeScenario], FakeLLMClient]:
    def _override(scenario: FakeScenario) -> FakeLLMClient:
        fake = FakeLLMClient(scenario)
        app.dependency_overrides[get_llm_client] = lambda: fake
        return fake

    return _override


@pytest.fixture
def with_settings(app, settings: Settings) -> Callable[..., Settings]:
    def _with(**changes) -> Settings:
        updated = replace(settings, **changes)
        app.dependency_overrides[get_settings] = lambda: updated
        return updated

    return _with
