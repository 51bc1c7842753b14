"""Daily goal: target number of completed habits per day"""
import logging
import math
from typing import Any

from habit_tracker import config

logger = logging.getLogger(__name__)


def is_valid_goal(goal: Any) -> bool:
    """A goal is a whole number of at least 1"""
    if isinstance(goal, bool) or not isinstance(goal, (int, float)):
        return False
    if not math.isfinite(goal) or goal != int(goal):
        return False
    return goal > 0


class DailyGoal:
    """Process-wide daily goal with a permissive setter"""

    def __init__(self, value: int = config.DEFAULT_DAILY_GOAL):
        self._value = int(value) if is_valid_goal(value) else config.DEFAULT_DAILY_GOAL

    @property
    def value(self) -> int:
        return self._value

    def update(self, goal: Any) -> bool:
        """
        Set the goal. Anything but a positive whole number is silently ignored.

        Returns:
            True if the goal was applied
        """
        if not is_valid_goal(goal):
            logger.debug(f"Ignoring daily goal {goal!r}")
            return False

        self._value = int(goal)
        return True
