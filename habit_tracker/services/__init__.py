"""
Tracking services

Each service owns one slice of the in-memory state; StatisticsEngine only
reads the catalog and log store.
"""

from habit_tracker.services.catalog import HabitCatalog
from habit_tracker.services.log_store import LogStore
from habit_tracker.services.weight_log import WeightLogBook
from habit_tracker.services.daily_goal import DailyGoal
from habit_tracker.services.statistics import StatisticsEngine

__all__ = [
    "HabitCatalog",
    "LogStore",
    "WeightLogBook",
    "DailyGoal",
    "StatisticsEngine",
]
