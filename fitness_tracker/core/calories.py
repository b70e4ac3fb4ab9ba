import re
from typing import Any, Union

_DIGIT_RUN = re.compile(r"[0-9]+")


def _format_duration(duration_minutes: Any) -> str:
    if isinstance(duration_minutes, bool):
        return "true" if duration_minutes else "false"
    if isinstance(duration_minutes, float) and duration_minutes.is_integer():
        return str(int(duration_minutes))
    return str(duration_minutes)


def build_calorie_prompt(activity_name: str, duration_minutes: Any) -> str:
    return (
        f"Estimate the number of calories burned for this workout: {activity_name}, "
        f"duration: {_format_duration(duration_minutes)} minutes. Respond with only the number."
    )


def extract_calories(text: str) -> Union[int, str]:
    # Best effort: callers store the raw text when no number is present.
    match = _DIGIT_RUN.search(text or "")
    if not match:
        return text
    return int(match.group(0))
