"""Test helpers for HabitQuest tests.

This module re-exports the helpers for convenient imports:

    from tests.helpers import (
        # Dates (Wednesday 2026-01-14, week Sun 01-11 .. Sat 01-17)
        TODAY, WEEK_START, WEEK_END, FIXED_NOW,

        # Factories
        make_habit, completions_for, days_back,
    )
"""

from tests.helpers.habits import (
    FIXED_NOW,
    TODAY,
    WEEK_END,
    WEEK_START,
    completions_for,
    days_back,
    make_habit,
)

__all__ = [
    "FIXED_NOW",
    "TODAY",
    "WEEK_END",
    "WEEK_START",
    "completions_for",
    "days_back",
    "make_habit",
]
