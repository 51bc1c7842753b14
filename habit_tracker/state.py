"""
HabitTrackerState - application state container

Owns the habit catalog, log store, weight log and daily goal for one running
instance, and is the whole surface presentation code talks to.

Lifecycle:
1. Construct with a storage backend and (optionally) a change channel
2. load() reads each record independently, falling back per key
3. Every mutation updates memory, then re-serializes and writes the one
   affected record and publishes it on the channel
4. Changes published by other instances replace the matching in-memory
   record wholesale (apply_remote_change)
5. close() detaches from the channel
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from habit_tracker import config
from habit_tracker.defaults import default_habits
from habit_tracker.exceptions import SerializationError, StorageError
from habit_tracker.models.habit import Habit, HabitFields, Number
from habit_tracker.models.logs import DayLog, HabitLog
from habit_tracker.models.weight import WeightLog
from habit_tracker.persistence import codec
from habit_tracker.persistence.storage import StorageBackend, StorageKeys
from habit_tracker.persistence.sync import ChangeChannel, NullChannel
from habit_tracker.services.catalog import HabitCatalog
from habit_tracker.services.daily_goal import DailyGoal
from habit_tracker.services.log_store import LogStore
from habit_tracker.services.statistics import StatisticsEngine
from habit_tracker.services.weight_log import WeightLogBook

logger = logging.getLogger(__name__)

# Receives the storage key whose in-memory state changed
StateListener = Callable[[str], None]


class HabitTrackerState:
    """
    In-memory tracker state with load/save lifecycle and cross-instance sync.

    Mutations made before load() completes stay in memory only.
    """

    def __init__(
        self,
        storage: StorageBackend,
        channel: Optional[ChangeChannel] = None,
        keys: Optional[StorageKeys] = None,
    ):
        self.storage = storage
        self.channel = channel or NullChannel()
        self.keys = keys or StorageKeys.from_namespace(config.STORAGE_NAMESPACE)

        self.catalog = HabitCatalog(default_habits())
        self.logs = LogStore()
        self.weights = WeightLogBook()
        self.goal = DailyGoal(config.DEFAULT_DAILY_GOAL)
        self.stats = StatisticsEngine(self.catalog, self.logs)

        self.is_loading = True
        self._listeners: List[StateListener] = []
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Read all four records and start listening for remote changes"""
        for key in self.keys.all():
            self._load_key(key)

        self.is_loading = False
        if self._unsubscribe is None:
            self._unsubscribe = self.channel.subscribe(self.apply_remote_change, source=self)

        logger.info(
            f"Loaded tracker state: {len(self.catalog)} habits, "
            f"{len(self.logs.day_logs())} days, {len(self.weights)} weight entries, "
            f"daily goal {self.goal.value}"
        )

    def _load_key(self, key: str) -> None:
        try:
            raw = self.storage.read(key)
        except StorageError:
            logger.warning(f"Using defaults for {key}: record could not be read")
            self._reset_key(key)
            return

        if raw is None:
            self._reset_key(key)
            return

        try:
            self._apply(key, raw)
        except SerializationError:
            logger.warning(f"Using defaults for {key}: stored value is malformed")
            self._reset_key(key)
            return

        if key == self.keys.habits and len(self.catalog) == 0:
            logger.info(f"Using defaults for {key}: stored catalog is empty")
            self._reset_key(key)

    def _reset_key(self, key: str) -> None:
        if key == self.keys.habits:
            self.catalog.replace(default_habits())
        elif key == self.keys.day_logs:
            self.logs.replace([])
        elif key == self.keys.weight_logs:
            self.weights.replace([])
        elif key == self.keys.daily_goal:
            self.goal = DailyGoal(config.DEFAULT_DAILY_GOAL)

    def _apply(self, key: str, raw: str) -> None:
        """Decode raw and replace the in-memory copy of key"""
        if key == self.keys.habits:
            self.catalog.replace(codec.decode_habits(raw, key))
        elif key == self.keys.day_logs:
            self.logs.replace(codec.decode_day_logs(raw, key))
        elif key == self.keys.weight_logs:
            self.weights.replace(codec.decode_weight_logs(raw, key))
        elif key == self.keys.daily_goal:
            self.goal = DailyGoal(codec.decode_goal(raw, key))

    def _encode(self, key: str) -> str:
        if key == self.keys.habits:
            return codec.encode_models(self.catalog.all())
        if key == self.keys.day_logs:
            return codec.encode_models(self.logs.day_logs())
        if key == self.keys.weight_logs:
            return codec.encode_models(self.weights.entries())
        if key == self.keys.daily_goal:
            return codec.encode_goal(self.goal.value)
        raise KeyError(key)

    def save(self, key: Optional[str] = None) -> None:
        """
        Serialize and write one record (or all four), then publish it.

        Write failures are logged; in-memory state stays authoritative and
        the next mutation of that record retries the write.
        """
        for record_key in ([key] if key else self.keys.all()):
            value = self._encode(record_key)
            try:
                self.storage.write(record_key, value)
            except StorageError:
                logger.error(f"Failed to save {record_key} to storage")
                continue
            self.channel.publish(record_key, value, source=self)

    def close(self) -> None:
        """Stop receiving remote changes"""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ------------------------------------------------------------------
    # Change propagation
    # ------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Be told which record changed after any local or remote change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, key: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(key)
            except Exception:
                logger.exception(f"State listener failed for key {key}")

    def apply_remote_change(self, key: str, value: Optional[str]) -> bool:
        """
        Replace one record with a value written by another instance.

        Removed records (value None), unknown keys and undecodable values are
        ignored. An empty habit array empties the catalog. Remote values are
        not written back to storage.

        Returns:
            True if in-memory state was replaced
        """
        if value is None or key not in self.keys.all():
            return False

        try:
            self._apply(key, value)
        except SerializationError:
            logger.warning(f"Ignoring undecodable remote change to {key}")
            return False

        logger.debug(f"Applied remote change to {key}")
        self._notify(key)
        return True

    def _commit(self, key: str) -> None:
        if self.is_loading:
            logger.debug(f"Change to {key} before load; not persisted")
        else:
            self.save(key)
        self._notify(key)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def habits(self) -> List[Habit]:
        return self.catalog.all()

    @property
    def day_logs(self) -> List[DayLog]:
        return self.logs.day_logs()

    @property
    def weight_logs(self) -> List[WeightLog]:
        return self.weights.entries()

    @property
    def daily_goal(self) -> int:
        return self.goal.value

    # ------------------------------------------------------------------
    # Habit management
    # ------------------------------------------------------------------

    def add_habit(self, data: HabitFields | Dict[str, Any]) -> Optional[Habit]:
        habit = self.catalog.add(data)
        if habit is not None:
            self._commit(self.keys.habits)
        return habit

    def update_habit(self, habit_id: str, updates: Dict[str, Any]) -> Optional[Habit]:
        habit = self.catalog.update(habit_id, updates)
        if habit is not None:
            self._commit(self.keys.habits)
        return habit

    def delete_habit(self, habit_id: str) -> bool:
        deleted = self.catalog.delete(habit_id)
        if deleted:
            self._commit(self.keys.habits)
        return deleted

    def reorder_habits(self, habits: List[Habit]) -> None:
        self.catalog.reorder(habits)
        self._commit(self.keys.habits)

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        return self.catalog.get(habit_id)

    def get_habits_by_category(self, category: str) -> List[Habit]:
        return self.catalog.by_category(category)

    # ------------------------------------------------------------------
    # Habit logs
    # ------------------------------------------------------------------

    def toggle_habit(self, habit_id: str, date: str) -> HabitLog:
        log = self.logs.toggle(habit_id, date)
        self._commit(self.keys.day_logs)
        return log

    def update_habit_value(self, habit_id: str, date: str, value: Number) -> HabitLog:
        log = self.logs.set_value(habit_id, date, value, habit=self.catalog.get(habit_id))
        self._commit(self.keys.day_logs)
        return log

    def get_habit_log(self, habit_id: str, date: str) -> Optional[HabitLog]:
        return self.logs.get_habit_log(habit_id, date)

    def get_day_log(self, date: str) -> Optional[DayLog]:
        return self.logs.get_day_log(date)

    # ------------------------------------------------------------------
    # Weight tracking
    # ------------------------------------------------------------------

    def add_weight_log(self, weight: Number, date: Optional[str] = None) -> Optional[WeightLog]:
        entry = self.weights.add(weight, date)
        if entry is not None:
            self._commit(self.keys.weight_logs)
        return entry

    def delete_weight_log(self, entry_id: str) -> bool:
        deleted = self.weights.delete(entry_id)
        if deleted:
            self._commit(self.keys.weight_logs)
        return deleted

    def get_latest_weight(self) -> Optional[WeightLog]:
        return self.weights.latest()

    def get_weight_summary(self) -> Dict[str, Any]:
        return self.weights.summary()

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_streak(self, habit_id: str) -> int:
        return self.stats.current_streak(habit_id)

    def get_best_streak(self, habit_id: str) -> int:
        return self.stats.best_streak(habit_id)

    def get_completion_rate(self, habit_id: str, days: int) -> float:
        return self.stats.completion_rate(habit_id, days)

    def get_day_completion_percentage(self, date: str) -> float:
        return self.stats.day_completion_percentage(date)

    def get_total_completed_today(self) -> int:
        return self.stats.total_completed_today()

    def get_daily_goal_progress(self) -> Dict[str, Any]:
        return self.stats.daily_goal_progress(self.goal.value)

    def get_dashboard(self) -> Dict[str, Any]:
        return self.stats.dashboard(self.goal.value)

    # ------------------------------------------------------------------
    # Daily goal
    # ------------------------------------------------------------------

    def update_daily_goal(self, goal: Any) -> bool:
        applied = self.goal.update(goal)
        if applied:
            self._commit(self.keys.daily_goal)
        return applied
