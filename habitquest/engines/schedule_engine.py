"""Schedule Engine for HabitQuest.

Decides whether a habit is due ("active") on a calendar date:
- daily: every day
- weekly: every day (a weekly habit may be completed on any day of its week;
  the once-per-week rule lives in StatisticsEngine.is_completed_this_week)
- custom: only on the selected weekdays
- anything else: every day (fail-open)

IMPORTANT: This module must NOT import from coordinator.py.
Only import from const.py, type_defs.py and utils.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, ClassVar

from .. import const
from ..utils.dt_utils import day_abbrev, day_of_week

if TYPE_CHECKING:
    from collections.abc import Mapping


class ScheduleEngine:
    """Pure evaluator of habit schedules.

    All methods are static - no instance state, no clock access. The caller
    supplies the date being asked about.
    """

    # Schedules that are due every day of the week
    EVERY_DAY_SCHEDULES: ClassVar[frozenset[str]] = frozenset(
        {const.SCHEDULE_DAILY, const.SCHEDULE_WEEKLY}
    )

    @staticmethod
    def custom_days(habit: Mapping[str, Any]) -> list[int]:
        """Return the habit's selected weekdays, filtered to the valid 0-6 range.

        Invalid entries (non-integers, out of range) are dropped rather than
        raising, because imported records are trusted structurally but not
        field by field.
        """
        raw_days = habit.get(const.DATA_HABIT_CUSTOM_DAYS)
        if not isinstance(raw_days, list):
            return []
        return [
            day
            for day in raw_days
            if isinstance(day, int) and not isinstance(day, bool) and 0 <= day <= 6
        ]

    @staticmethod
    def is_active_on(habit: Mapping[str, Any], on_date: date) -> bool:
        """Return True if the habit is due on the given date.

        Args:
            habit: Habit record
            on_date: Local calendar date

        Returns:
            True for daily/weekly/unknown schedules; for custom schedules,
            True only when the date's weekday is one of customDays.
        """
        schedule = habit.get(const.DATA_HABIT_SCHEDULE)
        if schedule in ScheduleEngine.EVERY_DAY_SCHEDULES:
            return True
        if schedule == const.SCHEDULE_CUSTOM:
            return day_of_week(on_date) in ScheduleEngine.custom_days(habit)

        const.LOGGER.debug(
            "Unknown schedule '%s' for habit %s, treating as active",
            schedule,
            habit.get(const.DATA_HABIT_ID),
        )
        return True

    @staticmethod
    def schedule_label(habit: Mapping[str, Any]) -> str:
        """Return a short human-readable description of the schedule.

        Examples:
            "Daily", "Weekly", "Every day", "Mon, Wed, Fri"
        """
        schedule = habit.get(const.DATA_HABIT_SCHEDULE)
        if schedule == const.SCHEDULE_WEEKLY:
            return const.SCHEDULE_LABEL_WEEKLY
        if schedule != const.SCHEDULE_CUSTOM:
            return const.SCHEDULE_LABEL_DAILY

        days = sorted(set(ScheduleEngine.custom_days(habit)))
        if not days:
            return const.SENTINEL_EMPTY
        if len(days) == const.DAYS_PER_WEEK:
            return const.SCHEDULE_LABEL_EVERY_DAY
        return ", ".join(day_abbrev(day) for day in days)
