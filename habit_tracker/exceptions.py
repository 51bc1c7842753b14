"""
Exception hierarchy for habit-tracker
Provides structured context and consistent logging at the storage, codec and
configuration seams.

The tracking operations themselves never raise these to callers: the state
container catches storage and serialization failures, logs them and falls
back to defaults or keeps the in-memory state.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class HabitTrackerError(Exception):
    """
    Base exception for all habit-tracker errors

    Provides:
    - Automatic timestamping
    - Structured context
    - Automatic logging

    Example:
        raise HabitTrackerError(
            message="Failed to write record",
            operation="save",
            context={"key": "muscleUpHabits"}
        )
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for diagnostics"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "operation": self.operation,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


# ==========================================
# Storage Errors
# ==========================================

class StorageError(HabitTrackerError):
    """Reading or writing a storage record failed"""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        **kwargs
    ):
        self.key = key
        super().__init__(
            message=message,
            context={"key": key},
            **kwargs
        )


class SerializationError(HabitTrackerError):
    """
    A stored value could not be decoded into the expected shape

    Example:
        raise SerializationError(
            message="Expected a JSON array",
            key="muscleUpDayLogs",
            raw='{"not": "a list"}'
        )
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        raw: Optional[str] = None,
        **kwargs
    ):
        self.key = key
        self.raw = raw
        preview = str(raw)[:80] if raw is not None else None
        super().__init__(
            message=message,
            context={"key": key, "raw": preview},
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(HabitTrackerError):
    """System configuration is invalid"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            context={"config_key": config_key},
            **kwargs
        )
