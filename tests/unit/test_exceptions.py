"""Unit tests for custom exception hierarchy"""
import logging
from datetime import datetime

from habit_tracker.exceptions import (
    ConfigurationError,
    HabitTrackerError,
    SerializationError,
    StorageError,
)


class TestHabitTrackerError:
    """Test base exception class"""

    def test_basic_exception(self):
        error = HabitTrackerError("Test error")

        assert error.message == "Test error"
        assert str(error) == "Test error"
        assert error.context == {}
        assert isinstance(error.timestamp, datetime)

    def test_exception_with_cause(self):
        original_error = OSError("disk full")
        error = HabitTrackerError("Write failed", operation="write", cause=original_error)

        assert error.cause is original_error
        assert error.operation == "write"

    def test_to_dict(self):
        error = HabitTrackerError("Test error", operation="load", context={"key": "k"})

        error_dict = error.to_dict()

        assert error_dict["error"] == "HabitTrackerError"
        assert error_dict["message"] == "Test error"
        assert error_dict["operation"] == "load"
        assert error_dict["context"] == {"key": "k"}
        assert "timestamp" in error_dict

    def test_logs_on_creation(self, caplog):
        with caplog.at_level(logging.ERROR, logger="habit_tracker.exceptions"):
            HabitTrackerError("Logged error", operation="save")

        assert "HabitTrackerError: Logged error" in caplog.text
        assert caplog.records[-1].operation == "save"


class TestSubclasses:
    """Test specialized exceptions"""

    def test_storage_error(self):
        error = StorageError("Read failed", key="muscleUpHabits", operation="read")

        assert isinstance(error, HabitTrackerError)
        assert error.key == "muscleUpHabits"
        assert error.to_dict()["context"] == {"key": "muscleUpHabits"}

    def test_serialization_error_previews_raw(self):
        error = SerializationError("Bad value", key="muscleUpDayLogs", raw="y" * 500)

        assert error.raw == "y" * 500
        assert error.context["raw"] == "y" * 80

    def test_serialization_error_without_raw(self):
        error = SerializationError("Bad value")

        assert error.context["raw"] is None

    def test_configuration_error(self):
        error = ConfigurationError("Bad level", config_key="LOG_LEVEL")

        assert error.config_key == "LOG_LEVEL"
        assert error.context == {"config_key": "LOG_LEVEL"}
