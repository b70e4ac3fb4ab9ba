import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query

from fitness_tracker.api.ai import gateway_failure
from fitness_tracker.core.calories import build_calorie_prompt, extract_calories
from fitness_tracker.core.config import Settings, get_settings
from fitness_tracker.core.errors import APIError
from fitness_tracker.core.schemas import LogWorkoutRequest, WorkoutEntry, WorkoutHistoryResponse
from fitness_tracker.services.llm import GatewayError, LLMClient, get_llm_client, resolve_provider
from fitness_tracker.services.workout_store import WorkoutStore, get_workout_store

router = APIRouter(prefix="/api", tags=["workouts"])
logger = logging.getLogger("uvicorn.error")


def _now_ms() -> int:
    return int(time.time() * 1000)


@router.post("/calculate-calories", response_model=WorkoutEntry)
def log_workout(
    payload: LogWorkoutRequest,
    x_ai_provider: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    llm_client: LLMClient = Depends(get_llm_client),
    store: WorkoutStore = Depends(get_workout_store),
) -> WorkoutEntry:
    provider = resolve_provider(x_ai_provider, settings.ai_provider)
    prompt = build_calorie_prompt(payload.activity_name, payload.duration_minutes)
    try:
        text = llm_client.generate(prompt, provider)
        entry = WorkoutEntry(
            owner=payload.owner,
            activity_name=payload.activity_name,
            duration_minutes=payload.duration_minutes,
            calories_estimate=extract_calories(text),
            logged_at=_now_ms(),
        )
        store.append(entry)
    except GatewayError as exc:
        logger.warning(
            "log_workout_gateway_error owner=%s provider=%s kind=%s detail=%s",
            payload.owner,
            exc.provider.value,
            exc.kind.value,
            exc.details,
        )
        raise gateway_failure(exc, "Failed to estimate calories") from exc
    except Exception as exc:
        logger.exception("log_workout_unhandled_error owner=%s detail=%s", payload.owner, str(exc))
        raise APIError(500, "Failed to estimate calories", details=str(exc)) from exc
    logger.info(
        "workout_logged owner=%s provider=%s calories=%r",
        entry.owner,
        provider.value,
        entry.calories_estimate,
    )
    return entry


@router.get("/workout-history", response_model=WorkoutHistoryResponse)
def workout_history(
    owner: Optional[str] = Query(default=None),
    store: WorkoutStore = Depends(get_workout_store),
) -> WorkoutHistoryResponse:
    if not owner:
        raise APIError(400, "owner is required")
    try:
        history = store.list_by_owner(owner)
    except Exception as exc:
        logger.exception("workout_history_unhandled_error owner=%s detail=%s", owner, str(exc))
        raise APIError(500, "Failed to fetch workout history", details=str(exc)) from exc
    return WorkoutHistoryResponse(history=history)
