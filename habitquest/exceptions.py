"""Exceptions raised by HabitQuest.

None of these are fatal: the coordinator either reports them to the caller
with the state unchanged, or (HabitNotFoundError, PersistenceUnavailableError)
logs and carries on.
"""

from __future__ import annotations

from typing import Any


class HabitQuestError(Exception):
    """Base class for all HabitQuest errors."""


class PersistenceUnavailableError(HabitQuestError):
    """Raised by a storage backend when it cannot read or write.

    Attributes:
        key: Storage key being accessed
        operation: "read" or "write"
    """

    def __init__(self, key: str, operation: str, reason: str) -> None:
        """Initialize PersistenceUnavailableError.

        Args:
            key: Storage key being accessed
            operation: "read" or "write"
            reason: Underlying error text
        """
        self.key = key
        self.operation = operation
        super().__init__(f"Storage {operation} failed for key '{key}': {reason}")


class HabitValidationError(HabitQuestError):
    """Validation error with field-specific information.

    Raised when a create or edit request breaks a habit business rule. The
    field attribute lets a front-end highlight the offending input.

    Attributes:
        field: The DATA_HABIT_* key that failed validation
        message: Human-readable reason
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize HabitValidationError."""
        self.field = field
        self.message = message
        super().__init__(message)


class InvalidScheduleSelectionError(HabitValidationError):
    """Custom schedule chosen with no weekdays selected."""


class InvalidImportFormatError(HabitQuestError):
    """Import file is not JSON, or has neither a habit list nor a habits key."""


class InvalidHabitRecordError(HabitQuestError):
    """An imported record failed structural validation.

    Attributes:
        record_index: Position of the first failing record
        field: Field that failed, when known
    """

    def __init__(self, record_index: int | None, field: str | None, message: str) -> None:
        """Initialize InvalidHabitRecordError."""
        self.record_index = record_index
        self.field = field
        super().__init__(message)


class HabitNotFoundError(HabitQuestError):
    """Operation addressed a habit id that no longer exists."""

    def __init__(self, habit_id: Any) -> None:
        """Initialize HabitNotFoundError."""
        self.habit_id = habit_id
        super().__init__(f"Habit not found: {habit_id}")


class ConfigurationError(HabitQuestError):
    """Configuration file could not be read or failed schema validation."""
