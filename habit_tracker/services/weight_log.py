"""
WeightLogBook - body-weight entries kept in ascending date order

Ordering is by date string only and the sort is stable, so entries sharing a
date keep their insertion order and latest() resolves ties by position, not
by updated_at.
"""

import logging
import math
from typing import Any, Dict, List, Optional
from uuid import uuid4

from habit_tracker.models.habit import Number
from habit_tracker.models.weight import WeightLog
from habit_tracker.utils import civil_time

logger = logging.getLogger(__name__)


class WeightLogBook:
    """Date-ascending collection of WeightLog entries"""

    def __init__(self, entries: Optional[List[WeightLog]] = None):
        self._entries: List[WeightLog] = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> List[WeightLog]:
        return list(self._entries)

    def replace(self, entries: List[WeightLog]) -> None:
        """Swap in a whole weight log (startup load or a remote change)"""
        self._entries = list(entries)

    def add(self, weight: Number, date: Optional[str] = None) -> Optional[WeightLog]:
        """
        Record a weight measurement.

        Args:
            weight: Kilograms, must be positive and finite
            date: Civil date string (defaults to today)

        Returns:
            The new entry, or None if the weight was rejected
        """
        if isinstance(weight, bool) or not isinstance(weight, (int, float)) \
                or not math.isfinite(weight) or weight <= 0:
            logger.warning(f"Ignoring invalid weight: {weight!r}")
            return None

        entry = WeightLog(
            id=str(uuid4()),
            date=date or civil_time.today(),
            weight=weight,
            updated_at=civil_time.timestamp_ms(),
        )
        self._entries.append(entry)
        self._entries.sort(key=lambda e: e.date)
        logger.info(f"Added weight {weight} kg for {entry.date}")
        return entry

    def delete(self, entry_id: str) -> bool:
        """Remove an entry by id (no-op if absent)"""
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        return len(self._entries) != before

    def latest(self) -> Optional[WeightLog]:
        if not self._entries:
            return None
        return self._entries[-1]

    def summary(self) -> Dict[str, Any]:
        """
        Starting vs current weight

        Returns:
            {
                'current': float | None,
                'starting': float | None,
                'change': float,
                'entries': int,
                'trend': 'up' | 'down' | 'neutral'
            }
        """
        if not self._entries:
            return {"current": None, "starting": None, "change": 0, "entries": 0, "trend": "neutral"}

        ordered = sorted(self._entries, key=lambda e: e.date)
        starting = ordered[0].weight
        current = ordered[-1].weight
        change = current - starting

        if change > 0:
            trend = "up"
        elif change < 0:
            trend = "down"
        else:
            trend = "neutral"

        return {
            "current": current,
            "starting": starting,
            "change": change,
            "entries": len(self._entries),
            "trend": trend,
        }

    def recent(self, limit: int = 10) -> List[WeightLog]:
        """Newest-first entries"""
        if limit <= 0:
            return []
        return sorted(self._entries, key=lambda e: e.date, reverse=True)[:limit]

    def chart_series(self, limit: int = 20) -> List[Dict[str, Any]]:
        """Last `limit` entries oldest-first, for trend display"""
        if limit <= 0:
            return []
        ordered = sorted(self._entries, key=lambda e: e.date)[-limit:]
        return [{"date": e.date, "weight": e.weight} for e in ordered]
