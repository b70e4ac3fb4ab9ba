from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)

# Durations are kept exactly as the caller sent them.
DurationValue = Union[StrictInt, StrictFloat, StrictStr, StrictBool]


class PromptRequest(BaseModel):
    prompt: str = Field(min_length=1)


class RawGenerateRequest(BaseModel):
    prompt: str = Field(min_length=1)
    model: Optional[str] = None


class GeneratedTextResponse(BaseModel):
    response: str


class LogWorkoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner: str
    activity_name: str = Field(alias="activityName")
    duration_minutes: DurationValue = Field(alias="durationMinutes")

    @field_validator("owner", "activity_name", "duration_minutes")
    @classmethod
    def _reject_falsy(cls, value: Any) -> Any:
        if not value:
            raise ValueError("value is required")
        return value


class WorkoutEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner: str
    activity_name: str = Field(alias="activityName")
    duration_minutes: DurationValue = Field(alias="durationMinutes")
    calories_estimate: Union[int, str] = Field(alias="caloriesEstimate")
    logged_at: int = Field(alias="loggedAt")


class WorkoutHistoryResponse(BaseModel):
    history: list[dict[str, Any]]
