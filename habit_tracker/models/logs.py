"""Daily completion log models"""
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from habit_tracker.models.habit import Number


class HabitLog(BaseModel):
    """One habit's record for one civil date"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    habit_id: str
    date: str  # YYYY-MM-DD (UTC+05:30)
    completed: bool
    value: Optional[Number] = None  # counter/duration only
    notes: Optional[str] = None
    updated_at: int  # epoch milliseconds

    @staticmethod
    def resolve_completed(value: Number, target: Optional[Number]) -> bool:
        """
        Completion rule for counter/duration values

        With a target the day counts once value reaches it; without one any
        positive value counts. A target of 0 is treated as no target.
        """
        if target:
            return value >= target
        return value > 0

    def touch(self, now_ms: int) -> None:
        """Refresh updated_at, keeping it strictly increasing for this record"""
        self.updated_at = max(now_ms, self.updated_at + 1)

    def flip(self, now_ms: int) -> None:
        """Flip completion (boolean habits); value is left alone"""
        self.completed = not self.completed
        self.touch(now_ms)

    def record_value(self, value: Number, target: Optional[Number], now_ms: int) -> None:
        """Store a counter/duration value and the completion it implies"""
        self.value = value
        self.completed = self.resolve_completed(value, target)
        self.touch(now_ms)


class DayLog(BaseModel):
    """All habit records for one civil date"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str
    logs: list[HabitLog]
    created_at: int

    def find(self, habit_id: str) -> Optional[HabitLog]:
        """Get the record for a habit on this day"""
        for log in self.logs:
            if log.habit_id == habit_id:
                return log
        return None

    def completed_count(self) -> int:
        """Number of completed records (orphans included)"""
        return sum(1 for log in self.logs if log.completed)
