"""
Statistics Engine

Pure reads over the LogStore, HabitCatalog and the civil calendar:
- Current streak (incomplete today does not break a running streak)
- Best streak over the trailing lookback window
- Completion rates
- Day completion percentages and daily-goal progress
- Dashboard aggregates (weekly completion, category breakdown, active days)

Nothing here mutates state or caches results; every call recomputes from the
live in-memory snapshot. "Today" is read once per call so a scan never
straddles midnight.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List

from habit_tracker import config
from habit_tracker.defaults import CATEGORY_COLORS, CATEGORY_LABELS
from habit_tracker.models.habit import HABIT_CATEGORIES
from habit_tracker.services.catalog import HabitCatalog
from habit_tracker.services.log_store import LogStore
from habit_tracker.utils import civil_time

logger = logging.getLogger(__name__)


class StatisticsEngine:
    """Derived metrics computed on demand"""

    def __init__(
        self,
        catalog: HabitCatalog,
        log_store: LogStore,
        lookback_days: int = config.STATS_LOOKBACK_DAYS,
    ):
        self.catalog = catalog
        self.log_store = log_store
        self.lookback_days = lookback_days

    def _completed_on(self, habit_id: str, day: date) -> bool:
        return self.log_store.is_completed(habit_id, civil_time.format_date(day))

    # ------------------------------------------------------------------
    # Streaks and rates
    # ------------------------------------------------------------------

    def current_streak(self, habit_id: str) -> int:
        """
        Consecutive completed days counting back from today.

        If today is not completed yet, counting starts at yesterday; the first
        non-completed day after that ends the streak.
        """
        today = civil_time.today_date()

        start = 0 if self._completed_on(habit_id, today) else 1
        streak = 0
        for offset in range(start, self.lookback_days):
            if not self._completed_on(habit_id, today - timedelta(days=offset)):
                break
            streak += 1

        return streak

    def best_streak(self, habit_id: str) -> int:
        """Longest run of completed days inside the lookback window"""
        today = civil_time.today_date()

        best = 0
        running = 0
        for offset in range(self.lookback_days - 1, -1, -1):
            if self._completed_on(habit_id, today - timedelta(days=offset)):
                running += 1
                best = max(best, running)
            else:
                running = 0

        return best

    def completion_rate(self, habit_id: str, days: int) -> float:
        """
        Percentage (0-100) of the trailing `days` days, today included,
        on which the habit was completed.
        """
        if days <= 0:
            return 0.0

        today = civil_time.today_date()
        completed = sum(
            1 for offset in range(days)
            if self._completed_on(habit_id, today - timedelta(days=offset))
        )
        return completed / days * 100

    # ------------------------------------------------------------------
    # Daily aggregates
    # ------------------------------------------------------------------

    def day_completion_percentage(self, date_str: str) -> float:
        """
        Percentage of habits in the current catalog completed on a date.

        The denominator is today's catalog size, so deleting or adding habits
        changes historical percentages. Logs of deleted habits are ignored.
        """
        habits = self.catalog.all()
        if not habits:
            return 0.0

        day_log = self.log_store.get_day_log(date_str)
        if day_log is None:
            return 0.0

        completed = sum(1 for habit in habits if (log := day_log.find(habit.id)) and log.completed)
        return completed / len(habits) * 100

    def total_completed_today(self) -> int:
        """Completed records in today's DayLog"""
        day_log = self.log_store.get_day_log(civil_time.today())
        if day_log is None:
            return 0
        return day_log.completed_count()

    def daily_goal_progress(self, goal: int) -> Dict[str, Any]:
        """
        Today's completions against the daily goal

        Returns:
            {
                'completed': int,
                'goal': int,
                'percentage': float,  # capped at 100
                'reached': bool
            }
        """
        completed = self.total_completed_today()
        percentage = min(completed / goal * 100, 100.0) if goal > 0 else 0.0
        return {
            "completed": completed,
            "goal": goal,
            "percentage": percentage,
            "reached": goal > 0 and completed >= goal,
        }

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def habit_summary(self, habit_id: str, days: int = 7) -> Dict[str, Any]:
        return {
            "habit_id": habit_id,
            "current": self.current_streak(habit_id),
            "best": self.best_streak(habit_id),
            "rate": self.completion_rate(habit_id, days),
        }

    def weekly_completion(self) -> float:
        """Mean day completion percentage over today and the previous 6 days"""
        today = civil_time.today_date()
        total = sum(
            self.day_completion_percentage(civil_time.format_date(today - timedelta(days=offset)))
            for offset in range(7)
        )
        return total / 7

    def week_chart(self) -> List[Dict[str, Any]]:
        """Last 7 days oldest-first with short weekday names"""
        today = civil_time.today_date()
        chart = []
        for offset in range(6, -1, -1):
            day = today - timedelta(days=offset)
            date_str = civil_time.format_date(day)
            chart.append({
                "date": date_str,
                "name": day.strftime("%a"),
                "completion": self.day_completion_percentage(date_str),
            })
        return chart

    def category_breakdown(self, days: int = 7) -> List[Dict[str, Any]]:
        """Mean completion rate of each category's habits, in category order"""
        breakdown = []
        for category in HABIT_CATEGORIES:
            habits = self.catalog.by_category(category)
            if habits:
                value = sum(self.completion_rate(h.id, days) for h in habits) / len(habits)
            else:
                value = 0.0
            breakdown.append({
                "category": category,
                "label": CATEGORY_LABELS[category],
                "color": CATEGORY_COLORS[category],
                "value": value,
            })
        return breakdown

    def active_days(self) -> int:
        """Number of logged days with any completed catalog habit"""
        return sum(
            1 for day_log in self.log_store.day_logs()
            if self.day_completion_percentage(day_log.date) > 0
        )

    def dashboard(self, goal: int) -> Dict[str, Any]:
        """All dashboard figures in one pass over the catalog"""
        streaks = [self.habit_summary(habit.id) for habit in self.catalog]

        summary = {
            "today_completion": self.day_completion_percentage(civil_time.today()),
            "weekly_completion": self.weekly_completion(),
            "best_current_streak": max((s["current"] for s in streaks), default=0),
            "best_ever_streak": max((s["best"] for s in streaks), default=0),
            "week_chart": self.week_chart(),
            "category_breakdown": self.category_breakdown(),
            "streaks": streaks,
            "active_days": self.active_days(),
            "total_completed": self.total_completed_today(),
            "goal": self.daily_goal_progress(goal),
        }
        logger.debug(
            f"Dashboard computed for {len(streaks)} habits: "
            f"today {summary['today_completion']:.0f}%, week {summary['weekly_completion']:.0f}%"
        )
        return summary
