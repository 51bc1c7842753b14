"""Global test fixtures and utilities for habit-tracker tests"""
import pytest
from unittest.mock import patch
from datetime import datetime, timezone

from habit_tracker.models.habit import Habit
from habit_tracker.persistence import BroadcastChannel, MemoryStorage, StorageKeys
from habit_tracker.services import HabitCatalog, LogStore, StatisticsEngine
from habit_tracker.state import HabitTrackerState


# ============================================================================
# Time Fixtures
# ============================================================================

# 17:30 on Friday 2024-03-15 at UTC+05:30
FROZEN_UTC = datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)
FROZEN_TODAY = "2024-03-15"


@pytest.fixture
def frozen_time():
    """Freeze the civil clock so "today" is 2024-03-15"""
    with patch('habit_tracker.utils.civil_time.now_utc', return_value=FROZEN_UTC):
        yield FROZEN_UTC


@pytest.fixture
def freeze_at():
    """Factory freezing the clock at an arbitrary UTC instant"""
    patchers = []

    def _freeze(moment: datetime):
        patcher = patch('habit_tracker.utils.civil_time.now_utc', return_value=moment)
        patcher.start()
        patchers.append(patcher)
        return moment

    yield _freeze

    for patcher in reversed(patchers):
        patcher.stop()


# ============================================================================
# Catalog & Log Fixtures
# ============================================================================

@pytest.fixture
def four_habits():
    """Small catalog: two boolean habits, a counter and a duration"""
    return [
        Habit(id="gym", name="Gym Session", emoji="🏋️", type="boolean", category="fitness", color="#10b981"),
        Habit(id="vitamins", name="Vitamins", emoji="💊", type="boolean", category="nutrition", color="#eab308"),
        Habit(
            id="water",
            name="Water",
            emoji="💧",
            type="counter",
            target=8,
            unit="glasses",
            category="wellness",
            color="#0ea5e9",
        ),
        Habit(
            id="reading",
            name="Reading",
            emoji="📚",
            type="duration",
            unit="minutes",
            category="discipline",
            color="#a855f7",
        ),
    ]


@pytest.fixture
def catalog(four_habits):
    return HabitCatalog(four_habits)


@pytest.fixture
def log_store():
    return LogStore()


@pytest.fixture
def stats(catalog, log_store):
    return StatisticsEngine(catalog, log_store)


# ============================================================================
# Persistence Fixtures
# ============================================================================

@pytest.fixture
def storage_keys():
    return StorageKeys.from_namespace("test")


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def channel():
    return BroadcastChannel()


@pytest.fixture
def loaded_state(frozen_time, memory_storage, storage_keys):
    """Loaded state over empty storage (default catalog, goal 5)"""
    state = HabitTrackerState(memory_storage, keys=storage_keys)
    state.load()
    yield state
    state.close()
