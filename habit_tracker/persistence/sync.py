"""
Change channels for cross-instance synchronization

Several tracker instances (views, processes) can share one durable store.
When one of them writes a record, the others receive (key, new_value) through
a ChangeChannel and replace their in-memory copy of that key. There is no
merge and no conflict detection: the last write observed wins.

Channels:
- NullChannel: single-instance deployments, delivers nothing
- BroadcastChannel: in-process fan-out between instances
- FileWatchChannel: polls a JsonFileStorage directory for records written by
  other processes
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from habit_tracker.exceptions import StorageError
from habit_tracker.persistence.storage import JsonFileStorage

logger = logging.getLogger(__name__)

# Receives (key, new serialized value or None when the record was removed)
ChangeListener = Callable[[str, Optional[str]], None]


class ChangeChannel(ABC):
    """Delivers whole-value record changes between instances"""

    @abstractmethod
    def subscribe(self, listener: ChangeListener, source: object = None) -> Callable[[], None]:
        """
        Register a listener.

        Args:
            listener: Called with (key, value) for each change
            source: Identity of the subscriber; changes it publishes itself
                are not delivered back to it

        Returns:
            Function that removes the subscription
        """

    @abstractmethod
    def publish(self, key: str, value: Optional[str], source: object = None) -> None:
        """Announce that key now holds value"""


class NullChannel(ChangeChannel):
    """Channel for single-instance use"""

    def subscribe(self, listener: ChangeListener, source: object = None) -> Callable[[], None]:
        return lambda: None

    def publish(self, key: str, value: Optional[str], source: object = None) -> None:
        return None


class BroadcastChannel(ChangeChannel):
    """
    In-process fan-out.

    A publisher never hears its own change, matching how storage events
    reach every view except the one that wrote.
    """

    def __init__(self):
        self._subscribers: List[Tuple[ChangeListener, object]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, listener: ChangeListener, source: object = None) -> Callable[[], None]:
        entry = (listener, source)
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    def publish(self, key: str, value: Optional[str], source: object = None) -> None:
        self._deliver(key, value, source)

    def _deliver(self, key: str, value: Optional[str], source: object) -> None:
        for listener, subscriber in list(self._subscribers):
            if source is not None and subscriber is source:
                continue
            try:
                listener(key, value)
            except Exception:
                logger.exception(f"Change listener failed for key {key}")


class FileWatchChannel(BroadcastChannel):
    """
    Detects records changed on disk by other processes.

    The host calls poll() whenever it wants to pick up external writes (a
    timer, an idle hook). Writes published through this channel are recorded
    as already seen so they are not echoed back by the next poll.
    """

    def __init__(self, storage: JsonFileStorage, keys: Iterable[str]):
        super().__init__()
        self.storage = storage
        self._seen: Dict[str, Optional[str]] = {}
        for key in keys:
            self._seen[key] = self._read(key)

    def _read(self, key: str) -> Optional[str]:
        try:
            return self.storage.read(key)
        except StorageError:
            return self._seen.get(key)

    def publish(self, key: str, value: Optional[str], source: object = None) -> None:
        self._seen[key] = value
        super().publish(key, value, source)

    def poll(self) -> List[str]:
        """
        Compare each watched record with the last seen value and deliver
        changes to every subscriber.

        Returns:
            Keys that changed since the previous poll
        """
        changed = []
        for key, previous in list(self._seen.items()):
            current = self._read(key)
            if current == previous:
                continue

            self._seen[key] = current
            changed.append(key)
            logger.info(f"Detected external change to {key}")
            self._deliver(key, current, source=None)

        return changed
