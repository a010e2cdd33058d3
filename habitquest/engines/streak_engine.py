"""Streak Engine - consecutive due-and-completed days for a habit.

The streak is walked backward from a reference date (normally today):

    inactive day            -> skipped, neither breaks nor extends
    active and completed    -> counted
    active and not complete -> streak ends here

The walk is bounded to STREAK_MAX_LOOKBACK_DAYS so a habit whose schedule
never matches cannot loop forever. Today counts as the most recent due day:
a due-but-open today yields 0 even with a long history behind it.

The streak is always recomputed from the full ledger after a mutation. It is
never incremented or decremented in place.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

from .. import const
from .completion_engine import CompletionLedger
from .schedule_engine import ScheduleEngine

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping


class StreakEngine:
    """Pure streak calculation plus the single writer of habit["streak"]."""

    @staticmethod
    def calculate(
        habit: Mapping[str, Any],
        reference_date: date,
        max_lookback_days: int = const.STREAK_MAX_LOOKBACK_DAYS,
    ) -> int:
        """Count consecutive due-and-completed days ending at reference_date.

        Args:
            habit: Habit record
            reference_date: Day the walk starts from (inclusive)
            max_lookback_days: Furthest offset (in days) that is still visited

        Returns:
            Non-negative streak length.
        """
        streak = 0
        for offset in range(max_lookback_days + 1):
            current = reference_date - timedelta(days=offset)
            if not ScheduleEngine.is_active_on(habit, current):
                continue
            if not CompletionLedger.is_completed_on(habit, current):
                break
            streak += 1
        return streak

    @staticmethod
    def stored_streak(habit: Mapping[str, Any]) -> int:
        """Return the streak stored on the record, 0 when missing or not an int."""
        streak = habit.get(const.DATA_HABIT_STREAK)
        if isinstance(streak, bool) or not isinstance(streak, int):
            return 0
        return streak

    @staticmethod
    def recompute(habit: MutableMapping[str, Any], reference_date: date) -> int:
        """Recalculate the habit's streak and store it on the habit.

        Returns:
            The new streak value.
        """
        streak = StreakEngine.calculate(habit, reference_date)
        previous = habit.get(const.DATA_HABIT_STREAK)
        habit[const.DATA_HABIT_STREAK] = streak
        if previous != streak:
            const.LOGGER.debug(
                "Streak for habit %s changed: %s -> %s",
                habit.get(const.DATA_HABIT_ID),
                previous,
                streak,
            )
        return streak

    @staticmethod
    def best_streak(habits: list[Mapping[str, Any]]) -> int:
        """Return the highest stored streak across habits (0 when empty)."""
        return max(
            (StreakEngine.stored_streak(habit) for habit in habits),
            default=0,
        )
