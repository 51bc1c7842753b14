"""Unit tests for Statistics Engine (habit_tracker/services/statistics.py)"""
import pytest

from habit_tracker.models.habit import Habit
from habit_tracker.services import HabitCatalog, StatisticsEngine
from habit_tracker.utils import civil_time


def complete(log_store, habit_id, *offsets):
    """Mark a boolean habit completed on each of the given days-ago offsets"""
    for offset in offsets:
        log_store.toggle(habit_id, civil_time.days_ago(offset))


def uncomplete(log_store, habit_id, offset):
    """Leave an explicit not-completed record on a day"""
    date = civil_time.days_ago(offset)
    log_store.toggle(habit_id, date)
    log_store.toggle(habit_id, date)


# ============================================================================
# Empty History Tests
# ============================================================================

def test_never_logged_habit_has_zero_stats(frozen_time, stats):
    assert stats.current_streak("gym") == 0
    assert stats.best_streak("gym") == 0
    assert stats.completion_rate("gym", 7) == 0


# ============================================================================
# Current Streak Tests
# ============================================================================

def test_streak_three_days_ending_today(frozen_time, stats, log_store):
    """Test completed today, -1, -2 with -3 not completed"""
    complete(log_store, "gym", 0, 1, 2)
    uncomplete(log_store, "gym", 3)

    assert stats.current_streak("gym") == 3
    assert stats.best_streak("gym") == 3


def test_streak_today_only(frozen_time, stats, log_store):
    complete(log_store, "gym", 0)

    assert stats.current_streak("gym") == 1


def test_incomplete_today_does_not_break_streak(frozen_time, stats, log_store):
    """Test counting starts at yesterday when today is not done yet"""
    complete(log_store, "gym", 1, 2)

    assert stats.current_streak("gym") == 2


def test_explicitly_unchecked_today_counts_from_yesterday(frozen_time, stats, log_store):
    complete(log_store, "gym", 1, 2)
    uncomplete(log_store, "gym", 0)

    assert stats.current_streak("gym") == 2


def test_gap_ends_streak(frozen_time, stats, log_store):
    complete(log_store, "gym", 1, 3, 4)

    assert stats.current_streak("gym") == 1


def test_streak_zero_when_yesterday_missing(frozen_time, stats, log_store):
    complete(log_store, "gym", 2, 3)

    assert stats.current_streak("gym") == 0


def test_streak_capped_by_lookback(frozen_time, stats, log_store):
    """Test a 400-day run is counted over at most 365 days"""
    complete(log_store, "gym", *range(400))

    assert stats.current_streak("gym") == 365
    assert stats.best_streak("gym") == 365


def test_streak_from_yesterday_stays_inside_window(frozen_time, stats, log_store):
    complete(log_store, "gym", *range(1, 400))

    assert stats.current_streak("gym") == 364


# ============================================================================
# Best Streak Tests
# ============================================================================

def test_best_streak_finds_older_longer_run(frozen_time, stats, log_store):
    complete(log_store, "gym", 0, *range(5, 11))

    assert stats.current_streak("gym") == 1
    assert stats.best_streak("gym") == 6


def test_best_streak_ignores_history_outside_window(frozen_time, stats, log_store):
    complete(log_store, "gym", *range(370, 380))

    assert stats.best_streak("gym") == 0


@pytest.mark.parametrize("offsets", [
    (0, 1, 2),
    (1, 2, 3, 7, 8),
    (0, 2, 4, 6),
    (10, 11, 12, 13, 1),
])
def test_best_streak_at_least_current(frozen_time, stats, log_store, offsets):
    complete(log_store, "gym", *offsets)

    assert stats.best_streak("gym") >= stats.current_streak("gym")


# ============================================================================
# Completion Rate Tests
# ============================================================================

def test_completion_rate_counts_trailing_days(frozen_time, stats, log_store):
    complete(log_store, "gym", 0, 2, 6, 7)

    assert stats.completion_rate("gym", 7) == pytest.approx(3 / 7 * 100)
    assert stats.completion_rate("gym", 1) == 100


@pytest.mark.parametrize("days", [0, -5])
def test_completion_rate_non_positive_days(frozen_time, stats, log_store, days):
    complete(log_store, "gym", 0)

    assert stats.completion_rate("gym", days) == 0


def test_counter_habit_counts_only_when_target_met(frozen_time, catalog, log_store, stats):
    water = catalog.get("water")
    log_store.set_value("water", civil_time.days_ago(0), 8, habit=water)
    log_store.set_value("water", civil_time.days_ago(1), 5, habit=water)

    assert stats.current_streak("water") == 1
    assert stats.completion_rate("water", 2) == 50


# ============================================================================
# Day Aggregate Tests
# ============================================================================

def test_day_completion_half(frozen_time, stats, log_store):
    """Test 2 of 4 habits completed gives 50%"""
    complete(log_store, "gym", 0)
    complete(log_store, "vitamins", 0)

    assert stats.day_completion_percentage(civil_time.today()) == 50


def test_day_completion_empty_catalog(frozen_time, log_store):
    engine = StatisticsEngine(HabitCatalog(), log_store)
    complete(log_store, "gym", 0)

    assert engine.day_completion_percentage(civil_time.today()) == 0


def test_day_completion_without_day_log(frozen_time, stats):
    assert stats.day_completion_percentage("2024-01-01") == 0


def test_day_completion_uses_current_catalog(frozen_time, catalog, stats, log_store):
    """Test deleting a habit changes a historical percentage"""
    date = civil_time.days_ago(10)
    log_store.toggle("gym", date)
    log_store.toggle("vitamins", date)
    before = stats.day_completion_percentage(date)

    catalog.delete("water")

    after = stats.day_completion_percentage(date)
    assert before == 50
    assert after == pytest.approx(2 / 3 * 100)
    assert after != before


def test_orphaned_logs_are_inert(frozen_time, catalog, stats, log_store):
    complete(log_store, "gym", 0)
    complete(log_store, "vitamins", 0)

    catalog.delete("gym")

    assert stats.day_completion_percentage(civil_time.today()) == pytest.approx(1 / 3 * 100)
    assert stats.current_streak("gym") == 1


def test_total_completed_today(frozen_time, stats, log_store):
    complete(log_store, "gym", 0, 1)
    complete(log_store, "vitamins", 0)
    uncomplete(log_store, "reading", 0)

    assert stats.total_completed_today() == 2


def test_total_completed_today_without_log(frozen_time, stats):
    assert stats.total_completed_today() == 0


# ============================================================================
# Goal & Dashboard Tests
# ============================================================================

def test_daily_goal_progress(frozen_time, stats, log_store):
    complete(log_store, "gym", 0)
    complete(log_store, "vitamins", 0)

    progress = stats.daily_goal_progress(4)

    assert progress == {"completed": 2, "goal": 4, "percentage": 50.0, "reached": False}


def test_daily_goal_progress_capped(frozen_time, stats, log_store):
    complete(log_store, "gym", 0)
    complete(log_store, "vitamins", 0)

    progress = stats.daily_goal_progress(1)

    assert progress["percentage"] == 100.0
    assert progress["reached"] is True


def test_week_chart_is_oldest_first(frozen_time, stats, log_store):
    complete(log_store, "gym", 0)

    chart = stats.week_chart()

    assert len(chart) == 7
    assert chart[0]["date"] == "2024-03-09"
    assert chart[-1]["date"] == "2024-03-15"
    assert chart[-1]["name"] == "Fri"
    assert chart[-1]["completion"] == 25


def test_weekly_completion_average(frozen_time, stats, log_store):
    complete(log_store, "gym", 0)
    complete(log_store, "vitamins", 0)
    complete(log_store, "gym", 1)

    assert stats.weekly_completion() == pytest.approx((50 + 25) / 7)


def test_category_breakdown(frozen_time, stats, log_store):
    complete(log_store, "gym", *range(7))

    breakdown = {row["category"]: row for row in stats.category_breakdown()}

    assert list(breakdown) == ["fitness", "nutrition", "wellness", "discipline"]
    assert breakdown["fitness"]["value"] == 100
    assert breakdown["nutrition"]["value"] == 0
    assert breakdown["fitness"]["label"] == "💪 Fitness"


def test_category_breakdown_empty_category(frozen_time, log_store):
    engine = StatisticsEngine(HabitCatalog([Habit(id="gym", name="Gym")]), log_store)

    breakdown = {row["category"]: row["value"] for row in engine.category_breakdown()}

    assert breakdown["wellness"] == 0


def test_active_days(frozen_time, stats, log_store):
    complete(log_store, "gym", 0, 3)
    uncomplete(log_store, "vitamins", 5)
    complete(log_store, "ghost", 6)

    assert stats.active_days() == 2


def test_dashboard(frozen_time, stats, log_store):
    complete(log_store, "gym", 0, 1, 2)
    complete(log_store, "vitamins", *range(5, 12))

    dashboard = stats.dashboard(goal=5)

    assert dashboard["best_current_streak"] == 3
    assert dashboard["best_ever_streak"] == 7
    assert dashboard["total_completed"] == 1
    assert dashboard["today_completion"] == 25
    assert len(dashboard["streaks"]) == 4
    assert dashboard["goal"]["goal"] == 5
    assert dashboard["active_days"] == 10


def test_dashboard_empty_catalog(frozen_time, log_store):
    engine = StatisticsEngine(HabitCatalog(), log_store)

    dashboard = engine.dashboard(goal=5)

    assert dashboard["best_current_streak"] == 0
    assert dashboard["best_ever_streak"] == 0
    assert dashboard["streaks"] == []
