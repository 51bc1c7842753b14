"""
HabitCatalog - ordered set of habit definitions

Catalog order is display order. It is preserved across edits and only
changes through reorder() or a wholesale replace() (load / sync).
"""

import logging
from typing import Any, Dict, Iterator, List, Optional
from uuid import uuid4

from pydantic import ValidationError

from habit_tracker.models.habit import Habit, HabitFields

logger = logging.getLogger(__name__)


class HabitCatalog:
    """
    Ordered collection of habits.

    Invalid input never raises: bad payloads are logged and ignored, and a
    reorder is trusted to be a permutation of the current habits.
    """

    def __init__(self, habits: Optional[List[Habit]] = None):
        self._habits: List[Habit] = list(habits or [])

    def __len__(self) -> int:
        return len(self._habits)

    def __iter__(self) -> Iterator[Habit]:
        return iter(list(self._habits))

    def __contains__(self, habit_id: object) -> bool:
        return self.get(habit_id) is not None

    def all(self) -> List[Habit]:
        """Snapshot of the catalog in display order"""
        return list(self._habits)

    def get(self, habit_id) -> Optional[Habit]:
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        return None

    def by_category(self, category: str) -> List[Habit]:
        return [h for h in self._habits if h.category == category]

    def add(self, data: HabitFields | Dict[str, Any]) -> Optional[Habit]:
        """
        Create a habit with a fresh id and append it to the catalog.

        Args:
            data: Habit fields (any "id" in a dict payload is ignored)

        Returns:
            The new Habit, or None if the fields failed validation
        """
        fields = data.model_dump() if isinstance(data, HabitFields) else dict(data)
        fields.pop("id", None)

        try:
            habit = Habit.model_validate({**fields, "id": self._new_id()})
        except ValidationError as e:
            logger.warning(f"Ignoring invalid habit payload: {e.error_count()} error(s)")
            return None

        self._habits.append(habit)
        logger.info(f"Added habit '{habit.name}' ({habit.id})")
        return habit

    def update(self, habit_id: str, fields: Dict[str, Any]) -> Optional[Habit]:
        """
        Merge fields into an existing habit, keeping its position.

        The id is immutable: an "id" key in the payload is dropped.

        Returns:
            The updated Habit, or None when nothing was changed
        """
        index = self._index_of(habit_id)
        if index is None:
            logger.debug(f"update ignored, unknown habit {habit_id}")
            return None

        updates = dict(fields)
        if "id" in updates:
            logger.warning(f"Rejected id change for habit {habit_id}")
            updates.pop("id")

        current = self._habits[index]
        try:
            merged = Habit.model_validate({**current.model_dump(), **updates, "id": current.id})
        except ValidationError as e:
            logger.warning(f"Ignoring invalid update for habit {habit_id}: {e.error_count()} error(s)")
            return None

        self._habits[index] = merged
        return merged

    def delete(self, habit_id: str) -> bool:
        """Remove a habit. Its historical logs are left in place."""
        index = self._index_of(habit_id)
        if index is None:
            return False

        removed = self._habits.pop(index)
        logger.info(f"Deleted habit '{removed.name}' ({removed.id})")
        return True

    def reorder(self, habits: List[Habit]) -> None:
        """Replace the catalog with a caller-supplied ordering"""
        self._habits = list(habits)

    def replace(self, habits: List[Habit]) -> None:
        """Swap in a whole catalog (startup load or a remote change)"""
        self._habits = list(habits)

    def _index_of(self, habit_id: str) -> Optional[int]:
        for i, habit in enumerate(self._habits):
            if habit.id == habit_id:
                return i
        return None

    def _new_id(self) -> str:
        # ids are unique across the catalog
        while True:
            candidate = str(uuid4())
            if self.get(candidate) is None:
                return candidate
