import json
import logging
from pathlib import Path
from typing import Any

from fastapi import Depends

from fitness_tracker.core.config import Settings, get_settings
from fitness_tracker.core.schemas import WorkoutEntry

logger = logging.getLogger("uvicorn.error")


class WorkoutStore:
    """Append-only workout log kept as one JSON array in a single file.

    Every call reads the whole file and ``append`` rewrites it in full. There is
    no locking, so concurrent appends race and the last writer wins.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> list[Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("workout_store_read_error path=%s detail=%s", self.path, str(exc))
            return []
        try:
            loaded = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("workout_store_parse_error path=%s detail=%s", self.path, str(exc))
            return []
        if not isinstance(loaded, list):
            logger.warning("workout_store_not_a_list path=%s type=%s", self.path, type(loaded).__name__)
            return []
        return loaded

    def append(self, entry: WorkoutEntry) -> None:
        workouts = self._read_all()
        workouts.append(entry.model_dump(by_alias=True))
        self.path.write_text(json.dumps(workouts, indent=2), encoding="utf-8")

    def list_by_owner(self, owner: str) -> list[dict[str, Any]]:
        return [
            item
            for item in self._read_all()
            if isinstance(item, dict) and item.get("owner") == owner
        ]


def get_workout_store(settings: Settings = Depends(get_settings)) -> WorkoutStore:
    return WorkoutStore(settings.workouts_file)
