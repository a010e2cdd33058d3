"""Completion Ledger - per-habit record of which dates were completed.

A habit's `completions` dict maps canonical date keys to True. Absence means
not completed; an explicit False is never written.

User-driven writes consult ScheduleEngine and silently ignore dates the habit
is not due on. Programmatic writes (imports, tests, migrations) pass
enforce_schedule=False.

Every mutator returns True only when the ledger actually changed, so the
caller knows whether a streak recompute and a save are needed.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.dt_utils import dt_to_key
from .schedule_engine import ScheduleEngine

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping


class CompletionLedger:
    """Static operations over a habit's completion map."""

    @staticmethod
    def _completions(habit: MutableMapping[str, Any]) -> dict[str, bool]:
        """Return the habit's completion map, creating it if missing."""
        completions = habit.get(const.DATA_HABIT_COMPLETIONS)
        if not isinstance(completions, dict):
            completions = {}
            habit[const.DATA_HABIT_COMPLETIONS] = completions
        return completions

    @staticmethod
    def _stored(habit: Mapping[str, Any]) -> Mapping[str, Any]:
        """Return the habit's completion map read-only ({} if missing or malformed)."""
        completions = habit.get(const.DATA_HABIT_COMPLETIONS)
        return completions if isinstance(completions, dict) else {}

    @staticmethod
    def is_completed_on(habit: Mapping[str, Any], on_date: date) -> bool:
        """Return True if a completion is stored for the date."""
        completions = CompletionLedger._stored(habit)
        return bool(completions.get(dt_to_key(on_date)))

    @staticmethod
    def completed_dates(habit: Mapping[str, Any]) -> list[str]:
        """Return the date keys with a stored (truthy) completion."""
        completions = CompletionLedger._stored(habit)
        return [key for key, done in completions.items() if done]

    @staticmethod
    def _accepts_write(
        habit: Mapping[str, Any], on_date: date, enforce_schedule: bool
    ) -> bool:
        if enforce_schedule and not ScheduleEngine.is_active_on(habit, on_date):
            const.LOGGER.debug(
                "Ignoring completion change for habit %s on %s: not scheduled",
                habit.get(const.DATA_HABIT_ID),
                dt_to_key(on_date),
            )
            return False
        return True

    @staticmethod
    def set_completed(
        habit: MutableMapping[str, Any],
        on_date: date,
        *,
        enforce_schedule: bool = True,
    ) -> bool:
        """Mark the date completed.

        Returns:
            True if a new completion was stored; False for an already
            completed date or a rejected (not scheduled) date.
        """
        if not CompletionLedger._accepts_write(habit, on_date, enforce_schedule):
            return False
        if CompletionLedger.is_completed_on(habit, on_date):
            return False
        CompletionLedger._completions(habit)[dt_to_key(on_date)] = True
        return True

    @staticmethod
    def clear(
        habit: MutableMapping[str, Any],
        on_date: date,
        *,
        enforce_schedule: bool = True,
    ) -> bool:
        """Remove the completion for the date.

        Returns:
            True if a completion was removed.
        """
        if not CompletionLedger._accepts_write(habit, on_date, enforce_schedule):
            return False
        completions = CompletionLedger._completions(habit)
        key = dt_to_key(on_date)
        if key not in completions:
            return False
        del completions[key]
        return True

    @staticmethod
    def toggle(
        habit: MutableMapping[str, Any],
        on_date: date,
        *,
        enforce_schedule: bool = True,
    ) -> bool:
        """Flip the completion state of the date.

        Returns:
            True if the ledger changed (False only for rejected writes).
        """
        if CompletionLedger.is_completed_on(habit, on_date):
            return CompletionLedger.clear(
                habit, on_date, enforce_schedule=enforce_schedule
            )
        return CompletionLedger.set_completed(
            habit, on_date, enforce_schedule=enforce_schedule
        )
