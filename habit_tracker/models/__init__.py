"""Pydantic models for habits, daily logs and weight entries"""

from habit_tracker.models.habit import (
    Habit,
    HabitFields,
    HabitType,
    HabitCategory,
    HABIT_CATEGORIES,
)
from habit_tracker.models.logs import HabitLog, DayLog
from habit_tracker.models.weight import WeightLog

__all__ = [
    "Habit",
    "HabitFields",
    "HabitType",
    "HabitCategory",
    "HABIT_CATEGORIES",
    "HabitLog",
    "DayLog",
    "WeightLog",
]
