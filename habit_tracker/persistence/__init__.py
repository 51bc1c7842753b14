"""Durable storage, record codecs and cross-instance change channels"""

from habit_tracker.persistence.storage import (
    StorageKeys,
    StorageBackend,
    MemoryStorage,
    JsonFileStorage,
)
from habit_tracker.persistence.sync import (
    ChangeChannel,
    NullChannel,
    BroadcastChannel,
    FileWatchChannel,
)

__all__ = [
    "StorageKeys",
    "StorageBackend",
    "MemoryStorage",
    "JsonFileStorage",
    "ChangeChannel",
    "NullChannel",
    "BroadcastChannel",
    "FileWatchChannel",
]
