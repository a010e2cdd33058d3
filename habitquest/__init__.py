# File: __init__.py
"""HabitQuest - gamified habit tracking.

Habits carry an XP value and a schedule (daily, weekly or selected weekdays).
Completing a habit on a due day earns XP, extends its streak and feeds levels,
weekly statistics and achievements.

Key Features:
- Pure calculation engines (schedule, completion ledger, streaks, XP,
  statistics, achievements) that take an explicit as-of date.
- HabitTrackerCoordinator owning the habit collection, theme and page.
- Best-effort JSON file persistence and JSON import/export.
- YAML configuration and a command-line front-end (python -m habitquest).
"""

from __future__ import annotations

from .coordinator import HabitTrackerCoordinator
from .store import HabitStore, JsonFileBackend, MemoryBackend

__version__ = "1.0.0"

__all__ = [
    "HabitStore",
    "HabitTrackerCoordinator",
    "JsonFileBackend",
    "MemoryBackend",
    "__version__",
]
