# File: store.py
"""Handles persistent data storage for HabitQuest.

The habit collection and the theme live in a small key-value store:

    "habits" -> JSON array of habit records
    "theme"  -> "light" | "dark"

Storage is best effort. Backends raise PersistenceUnavailableError; HabitStore
catches it, logs it and falls back to defaults (on load) or keeps the
in-memory state (on save). Nothing here ever stops the application.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import contextlib
import json
import os
from pathlib import Path
import tempfile
from typing import Any

from . import const
from .exceptions import PersistenceUnavailableError
from .type_defs import HabitData


class StorageBackend(ABC):
    """Minimal string key-value interface the store persists through."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value under key."""

    @property
    def path(self) -> str | None:
        """Location of the underlying storage, if it has one."""
        return None


class MemoryBackend(StorageBackend):
    """Pure in-memory backend, used by tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Initialize with optional pre-seeded values."""
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileBackend(StorageBackend):
    """Single JSON document on disk mapping keys to string values.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a crash never leaves a half-written file.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        """Initialize the backend.

        Args:
            path: Storage file location; parent directories are created on
                first write.
        """
        self._path = Path(path).expanduser()

    @property
    def path(self) -> str:
        return str(self._path)

    def _read_all(self, key: str) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            content = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as err:
            raise PersistenceUnavailableError(key, "read", str(err)) from err
        except json.JSONDecodeError as err:
            raise PersistenceUnavailableError(
                key, "read", f"corrupt storage file: {err.msg}"
            ) from err
        except UnicodeDecodeError as err:
            raise PersistenceUnavailableError(
                key, "read", f"corrupt storage file: {err.reason}"
            ) from err
        if not isinstance(content, dict):
            raise PersistenceUnavailableError(
                key, "read", "storage file is not a JSON object"
            )
        return content

    def get(self, key: str) -> str | None:
        value = self._read_all(key).get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            content = self._read_all(key)
        except PersistenceUnavailableError as err:
            const.LOGGER.warning(
                "WARNING: Overwriting unreadable storage file %s: %s", self._path, err
            )
            content = {}
        content[key] = value

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
        except OSError as err:
            raise PersistenceUnavailableError(key, "write", str(err)) from err

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                json.dump(content, tmp_file, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except OSError as err:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise PersistenceUnavailableError(key, "write", str(err)) from err


class HabitStore:
    """Loads and saves the habit collection and theme through a backend.

    Holds no application state of its own beyond the backend reference; the
    coordinator owns the in-memory collection.
    """

    def __init__(self, backend: StorageBackend | None = None) -> None:
        """Initialize the store.

        Args:
            backend: Storage backend (defaults to a fresh MemoryBackend)
        """
        self._backend = backend or MemoryBackend()

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> HabitStore:
        """Create a store persisting to a JSON file."""
        return cls(JsonFileBackend(path))

    def get_storage_path(self) -> str | None:
        """Return the storage file path (None for in-memory storage)."""
        return self._backend.path

    # ------------------------------------------------------------------
    # Habits
    # ------------------------------------------------------------------

    def load_habits(self) -> list[HabitData]:
        """Load the habit collection.

        Returns:
            Stored habits, or an empty list when nothing is stored or the
            stored value is unreadable.
        """
        try:
            raw = self._backend.get(const.STORAGE_KEY_HABITS)
        except PersistenceUnavailableError as err:
            const.LOGGER.error("ERROR: Failed to load habits, starting empty: %s", err)
            return []

        if raw is None:
            const.LOGGER.info("INFO: No existing habit storage found. Starting empty")
            return []

        try:
            habits = json.loads(raw)
        except json.JSONDecodeError as err:
            const.LOGGER.error(
                "ERROR: Stored habits are not valid JSON, starting empty: %s", err
            )
            return []

        if not isinstance(habits, list):
            const.LOGGER.error(
                "ERROR: Stored habits are not a list (%s), starting empty",
                type(habits).__name__,
            )
            return []

        valid = [habit for habit in habits if isinstance(habit, dict)]
        if len(valid) != len(habits):
            const.LOGGER.warning(
                "WARNING: Dropped %s malformed habit record(s) from storage",
                len(habits) - len(valid),
            )
        const.LOGGER.debug("DEBUG: Loaded %s habit(s) from storage", len(valid))
        return valid

    def save_habits(self, habits: list[HabitData]) -> bool:
        """Write the habit collection.

        Returns:
            True on success. Failures are logged, never raised.
        """
        try:
            payload = json.dumps(habits, ensure_ascii=False)
        except (TypeError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to save habits due to non-serializable data: %s", err
            )
            return False

        try:
            self._backend.set(const.STORAGE_KEY_HABITS, payload)
        except PersistenceUnavailableError as err:
            const.LOGGER.error(
                "ERROR: Failed to save habits: %s. Check disk space and file "
                "permissions for %s",
                err,
                self.get_storage_path(),
            )
            return False

        const.LOGGER.debug("DEBUG: Saved %s habit(s) to storage", len(habits))
        return True

    # ------------------------------------------------------------------
    # Theme
    # ------------------------------------------------------------------

    def load_theme(self, default: str = const.DEFAULT_THEME) -> str:
        """Load the theme, falling back to default when missing or invalid."""
        try:
            theme = self._backend.get(const.STORAGE_KEY_THEME)
        except PersistenceUnavailableError as err:
            const.LOGGER.error("ERROR: Failed to load theme: %s", err)
            return default
        if theme not in const.THEME_OPTIONS:
            if theme is not None:
                const.LOGGER.warning("WARNING: Ignoring unknown stored theme '%s'", theme)
            return default
        return theme

    def save_theme(self, theme: str) -> bool:
        """Write the theme. Failures are logged, never raised."""
        try:
            self._backend.set(const.STORAGE_KEY_THEME, theme)
        except PersistenceUnavailableError as err:
            const.LOGGER.error("ERROR: Failed to save theme: %s", err)
            return False
        return True
