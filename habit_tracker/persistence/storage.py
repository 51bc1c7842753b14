"""
Durable key/value storage for the tracker's four records

Each record is a self-contained serialized string stored under its own key.
There is no transaction across keys; a write replaces one record whole.
"""
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from habit_tracker import config
from habit_tracker.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageKeys:
    """Names of the four storage records"""
    habits: str
    day_logs: str
    weight_logs: str
    daily_goal: str

    @classmethod
    def from_namespace(cls, namespace: str = config.STORAGE_NAMESPACE) -> "StorageKeys":
        return cls(
            habits=f"{namespace}Habits",
            day_logs=f"{namespace}DayLogs",
            weight_logs=f"{namespace}WeightLogs",
            daily_goal=f"{namespace}DailyGoal",
        )

    def all(self) -> Tuple[str, str, str, str]:
        return (self.habits, self.day_logs, self.weight_logs, self.daily_goal)


class StorageBackend(ABC):
    """Whole-value string storage addressed by key"""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent"""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Overwrite the value stored under key"""


class MemoryStorage(StorageBackend):
    """Dict-backed storage, shared by every instance holding the same object"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage(StorageBackend):
    """
    One file per key under a data directory (<data_path>/<key>.json).

    Writes go to a temporary file in the same directory and are moved into
    place, so readers in other processes never see a partial record.
    """

    def __init__(self, data_path: Path = config.DATA_PATH):
        self.data_path = Path(data_path)

    def path_for(self, key: str) -> Path:
        return self.data_path / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}", key=key, operation="read", cause=e) from e

    def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.data_path.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.data_path)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}", key=key, operation="write", cause=e) from e

        logger.debug(f"Wrote {len(value)} bytes to {path}")
