"""Configuration management"""
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

from habit_tracker.exceptions import ConfigurationError

load_dotenv()

# Storage
DATA_PATH: Path = Path(os.getenv("DATA_PATH", "./data"))

# Prefix for the four storage keys (habits, day logs, weight logs, daily goal)
STORAGE_NAMESPACE: str = os.getenv("STORAGE_NAMESPACE", "muscleUp")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Tracking
DEFAULT_DAILY_GOAL: int = int(os.getenv("DEFAULT_DAILY_GOAL", "5"))

# Streak and best-streak scans never look further back than this
STATS_LOOKBACK_DAYS: int = 365


def validate_config() -> None:
    """Validate configuration"""
    if not isinstance(logging.getLevelName(LOG_LEVEL.upper()), int):
        raise ConfigurationError(
            f"Unknown LOG_LEVEL '{LOG_LEVEL}'",
            config_key="LOG_LEVEL",
        )
    if DEFAULT_DAILY_GOAL < 1:
        raise ConfigurationError(
            "DEFAULT_DAILY_GOAL must be at least 1",
            config_key="DEFAULT_DAILY_GOAL",
        )
    if DATA_PATH.exists() and not DATA_PATH.is_dir():
        raise ConfigurationError(
            f"DATA_PATH '{DATA_PATH}' is not a directory",
            config_key="DATA_PATH",
        )
