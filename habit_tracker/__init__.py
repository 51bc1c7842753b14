"""
Habit and weight tracking engine

Keeps a habit catalog, daily completion logs, a body-weight log and a daily
goal in memory, persists each record on every change, and synchronizes
several instances that share one store.
"""

from habit_tracker.state import HabitTrackerState

__version__ = "0.1.0"

__all__ = ["HabitTrackerState", "__version__"]
