"""
LogStore - per-day, per-habit completion records

DayLogs are created lazily the first time any habit is touched on a date and
are never deleted. Every mutation goes through _upsert(), which is the only
place records are created, so the value/completed rule in
HabitLog.resolve_completed cannot be bypassed.
"""

import logging
from typing import Callable, Dict, List, Optional

from habit_tracker.models.habit import Habit, Number
from habit_tracker.models.logs import DayLog, HabitLog
from habit_tracker.utils import civil_time

logger = logging.getLogger(__name__)


class LogStore:
    """Append/update log of HabitLogs grouped into DayLogs"""

    def __init__(self, day_logs: Optional[List[DayLog]] = None):
        self._day_logs: List[DayLog] = []
        self._by_date: Dict[str, DayLog] = {}
        self.replace(day_logs or [])

    def day_logs(self) -> List[DayLog]:
        """All DayLogs in creation order"""
        return list(self._day_logs)

    def replace(self, day_logs: List[DayLog]) -> None:
        """Swap in a whole log set (startup load or a remote change)"""
        self._day_logs = list(day_logs)
        self._by_date = {}
        for day_log in self._day_logs:
            # First record wins if stored data repeats a date
            self._by_date.setdefault(day_log.date, day_log)

    def get_day_log(self, date: str) -> Optional[DayLog]:
        return self._by_date.get(date)

    def get_habit_log(self, habit_id: str, date: str) -> Optional[HabitLog]:
        day_log = self._by_date.get(date)
        if day_log is None:
            return None
        return day_log.find(habit_id)

    def is_completed(self, habit_id: str, date: str) -> bool:
        log = self.get_habit_log(habit_id, date)
        return bool(log and log.completed)

    def toggle(self, habit_id: str, date: str) -> HabitLog:
        """
        Flip completion of a boolean habit on a date.

        A missing record is created as completed; an existing one has
        `completed` flipped and `value` left untouched.
        """
        log = self._upsert(
            habit_id,
            date,
            create=lambda now_ms: HabitLog(
                habit_id=habit_id,
                date=date,
                completed=True,
                updated_at=now_ms,
            ),
            update=lambda log, now_ms: log.flip(now_ms),
        )
        logger.debug(f"Toggled {habit_id} on {date} -> {log.completed}")
        return log

    def set_value(
        self,
        habit_id: str,
        date: str,
        value: Number,
        habit: Optional[Habit] = None,
    ) -> HabitLog:
        """
        Record a counter/duration value on a date.

        Args:
            habit_id: Habit the value belongs to (need not be in the catalog)
            date: Civil date string
            value: Stored as given; callers clamp
            habit: Catalog entry supplying the target, if any

        Returns:
            The created or updated HabitLog
        """
        target = habit.target if habit is not None else None

        log = self._upsert(
            habit_id,
            date,
            create=lambda now_ms: HabitLog(
                habit_id=habit_id,
                date=date,
                completed=HabitLog.resolve_completed(value, target),
                value=value,
                updated_at=now_ms,
            ),
            update=lambda log, now_ms: log.record_value(value, target, now_ms),
        )
        logger.debug(f"Set {habit_id} on {date} to {value} (completed={log.completed})")
        return log

    def _upsert(
        self,
        habit_id: str,
        date: str,
        create: Callable[[int], HabitLog],
        update: Callable[[HabitLog, int], None],
    ) -> HabitLog:
        now_ms = civil_time.timestamp_ms()

        day_log = self._by_date.get(date)
        if day_log is None:
            log = create(now_ms)
            day_log = DayLog(date=date, logs=[log], created_at=now_ms)
            self._day_logs.append(day_log)
            self._by_date[date] = day_log
            return log

        log = day_log.find(habit_id)
        if log is None:
            log = create(now_ms)
            day_log.logs.append(log)
            return log

        update(log, now_ms)
        return log
