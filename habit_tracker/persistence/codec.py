"""
Serialization of the four storage records

Arrays are stored as JSON using the camelCase field names of the established
format (habitId, updatedAt, createdAt). The daily goal is a bare numeric
string.

Array decoders keep every element that validates and log and skip the rest,
so one damaged entry never costs the valid history around it. They raise
SerializationError only when the value is not a JSON array, or when a
non-empty array holds no usable element; callers decide on the fallback.
"""
import json
import logging
import re
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, TypeAdapter, ValidationError

from habit_tracker.exceptions import SerializationError
from habit_tracker.models.habit import Habit
from habit_tracker.models.logs import DayLog
from habit_tracker.models.weight import WeightLog

logger = logging.getLogger(__name__)

_HABIT = TypeAdapter(Habit)
_DAY_LOG = TypeAdapter(DayLog)
_WEIGHT_LOG = TypeAdapter(WeightLog)

_GOAL_PATTERN = re.compile(r"^\s*\d+\s*$")


def encode_models(models: Sequence[BaseModel]) -> str:
    """Serialize a list of models to a JSON array"""
    return json.dumps(
        [m.model_dump(mode="json", by_alias=True, exclude_none=True) for m in models],
        ensure_ascii=False,
    )


def _parse_array(raw: str, key: Optional[str]) -> List[Any]:
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise SerializationError("Value is not valid JSON", key=key, raw=raw, operation="decode", cause=e) from e

    if not isinstance(parsed, list):
        raise SerializationError(
            f"Expected a JSON array, got {type(parsed).__name__}",
            key=key,
            raw=raw,
            operation="decode",
        )
    return parsed


def _validate_each(adapter: TypeAdapter, items: List[Any], raw: str, key: Optional[str]) -> list:
    valid = []
    for index, item in enumerate(items):
        try:
            valid.append(adapter.validate_python(item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid element {index} of {key}: {e.error_count()} error(s)")

    if items and not valid:
        raise SerializationError(
            f"None of the {len(items)} array elements are valid",
            key=key,
            raw=raw,
            operation="decode",
        )
    return valid


def decode_habits(raw: str, key: Optional[str] = None) -> List[Habit]:
    """
    Decode the habit catalog.

    An empty array decodes to an empty catalog. Later habits reusing an
    earlier id are skipped.
    """
    habits = []
    seen = set()
    for habit in _validate_each(_HABIT, _parse_array(raw, key), raw, key):
        if habit.id in seen:
            logger.warning(f"Skipping duplicate habit id {habit.id!r} in {key}")
            continue
        seen.add(habit.id)
        habits.append(habit)
    return habits


def decode_day_logs(raw: str, key: Optional[str] = None) -> List[DayLog]:
    return _validate_each(_DAY_LOG, _parse_array(raw, key), raw, key)


def decode_weight_logs(raw: str, key: Optional[str] = None) -> List[WeightLog]:
    return _validate_each(_WEIGHT_LOG, _parse_array(raw, key), raw, key)


def encode_goal(goal: int) -> str:
    return str(int(goal))


def decode_goal(raw: str, key: Optional[str] = None) -> int:
    """Decode the daily goal; it must be a positive whole number"""
    if not isinstance(raw, str) or not _GOAL_PATTERN.match(raw):
        raise SerializationError("Daily goal is not a whole number", key=key, raw=raw, operation="decode")

    goal = int(raw)
    if goal < 1:
        raise SerializationError("Daily goal must be at least 1", key=key, raw=raw, operation="decode")
    return goal
