"""Shared fixtures for HabitQuest tests."""

from __future__ import annotations

from collections.abc import Callable
import json
from typing import Any

import pytest

from habitquest import const
from habitquest.coordinator import HabitTrackerCoordinator
from habitquest.store import HabitStore, MemoryBackend
from tests.helpers import FIXED_NOW, TODAY


@pytest.fixture
def memory_backend() -> MemoryBackend:
    """Return an empty in-memory storage backend."""
    return MemoryBackend()


@pytest.fixture
def store(memory_backend: MemoryBackend) -> HabitStore:
    """Return a HabitStore over the in-memory backend."""
    return HabitStore(memory_backend)


@pytest.fixture
def make_coordinator(
    memory_backend: MemoryBackend,
) -> Callable[..., HabitTrackerCoordinator]:
    """Return a factory building a coordinator pinned to TODAY.

    Habits passed in are written to storage first, so the coordinator
    loads them exactly like persisted state.
    """

    def _factory(
        habits: list[dict[str, Any]] | None = None, **kwargs: Any
    ) -> HabitTrackerCoordinator:
        if habits is not None:
            memory_backend.set(const.STORAGE_KEY_HABITS, json.dumps(habits))
        kwargs.setdefault("today_provider", lambda: TODAY)
        kwargs.setdefault("now_provider", lambda: FIXED_NOW)
        return HabitTrackerCoordinator(HabitStore(memory_backend), **kwargs)

    return _factory


@pytest.fixture
def coordinator(
    make_coordinator: Callable[..., HabitTrackerCoordinator],
) -> HabitTrackerCoordinator:
    """Return a coordinator with an empty collection."""
    return make_coordinator()
