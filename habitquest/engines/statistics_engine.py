"""Statistics Engine - weekly and aggregate statistics over a habit collection.

Design Principles:
    - Stateless: operates only on the habits and the as-of date passed in
    - Week window is Sunday..Saturday containing the as-of date
    - Only (habit, day) pairs where the habit is due count toward any rate;
      days a habit is not scheduled impose no requirement
"""

from __future__ import annotations

from datetime import date
import math
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.dt_utils import day_abbrev, day_of_week, dt_to_key, week_dates
from .completion_engine import CompletionLedger
from .economy_engine import EconomyEngine
from .schedule_engine import ScheduleEngine
from .streak_engine import StreakEngine

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..type_defs import DayChartEntry, WeekSummary


def _round_percent(numerator: int, denominator: int) -> int:
    """Return numerator/denominator as a whole percent, rounding halves up."""
    if denominator <= 0:
        return 0
    return math.floor(numerator * 100 / denominator + 0.5)


class StatisticsEngine:
    """Stateless calculations for the week view and the stats page.

    Example:
        stats = StatisticsEngine()
        rate = stats.week_completion_rate(habits, today)
        chart = stats.weekly_chart_data(habits, today)
    """

    # ────────────────────────────────────────────────────────────────
    # Pair Counting
    # ────────────────────────────────────────────────────────────────

    def _week_pairs(
        self, habits: Sequence[dict[str, Any]], today: date
    ) -> tuple[int, int, int]:
        """Count active pairs, completed pairs and base XP over the week.

        Returns:
            (active_pairs, completed_pairs, base_xp)
        """
        active_pairs = 0
        completed_pairs = 0
        base_xp = 0
        for habit in habits:
            for day in week_dates(today):
                if not ScheduleEngine.is_active_on(habit, day):
                    continue
                active_pairs += 1
                if CompletionLedger.is_completed_on(habit, day):
                    completed_pairs += 1
                    base_xp += EconomyEngine.base_xp(habit)
        return active_pairs, completed_pairs, base_xp

    # ────────────────────────────────────────────────────────────────
    # Weekly Statistics
    # ────────────────────────────────────────────────────────────────

    def week_completion_rate(
        self, habits: Sequence[dict[str, Any]], today: date
    ) -> int:
        """Return the percentage of due (habit, day) pairs completed this week.

        Returns:
            Whole percent 0-100; 0 when no pair is due.
        """
        active_pairs, completed_pairs, _ = self._week_pairs(habits, today)
        return _round_percent(completed_pairs, active_pairs)

    def week_xp(self, habits: Sequence[dict[str, Any]], today: date) -> int:
        """Return base XP (no streak bonus) of completed due pairs this week."""
        return self._week_pairs(habits, today)[2]

    def is_perfect_week(self, habits: Sequence[dict[str, Any]], today: date) -> bool:
        """Return True if every due (habit, day) pair of the week is completed.

        An empty collection is never a perfect week. Days later in the week
        that are still due count as open, so the flag can only turn on once
        the last due day of the week is done.
        """
        if not habits:
            return False
        return all(
            CompletionLedger.is_completed_on(habit, day)
            for day in week_dates(today)
            for habit in habits
            if ScheduleEngine.is_active_on(habit, day)
        )

    def weekly_chart_data(
        self, habits: Sequence[dict[str, Any]], today: date
    ) -> list[DayChartEntry]:
        """Return per-day due and completed counts for the week."""
        chart: list[DayChartEntry] = []
        for day in week_dates(today):
            total = 0
            completed = 0
            for habit in habits:
                if ScheduleEngine.is_active_on(habit, day):
                    total += 1
                    if CompletionLedger.is_completed_on(habit, day):
                        completed += 1
            chart.append(
                {
                    "day": day_abbrev(day_of_week(day)),
                    "date": dt_to_key(day),
                    "completed": completed,
                    "total": total,
                    "percent": _round_percent(completed, total),
                }
            )
        return chart

    def week_summary(
        self, habits: Sequence[dict[str, Any]], today: date
    ) -> WeekSummary:
        """Return the headline numbers of the current week."""
        active_pairs, completed_pairs, base_xp = self._week_pairs(habits, today)
        return {
            "weekStart": dt_to_key(week_dates(today)[0]),
            "completionRate": _round_percent(completed_pairs, active_pairs),
            "weekXP": base_xp,
            "perfectWeek": self.is_perfect_week(habits, today),
        }

    # ────────────────────────────────────────────────────────────────
    # Daily / Aggregate Statistics
    # ────────────────────────────────────────────────────────────────

    def completed_today_count(
        self, habits: Sequence[dict[str, Any]], today: date
    ) -> int:
        """Return how many habits are due today and completed today."""
        return sum(
            1
            for habit in habits
            if ScheduleEngine.is_active_on(habit, today)
            and CompletionLedger.is_completed_on(habit, today)
        )

    def best_streak(self, habits: Sequence[dict[str, Any]]) -> int:
        """Return the highest current streak (0 for an empty collection)."""
        return StreakEngine.best_streak(list(habits))

    def is_completed_this_week(self, habit: dict[str, Any], today: date) -> bool:
        """Return whether the habit has met its goal for the current period.

        Weekly habits need one completion anywhere in the week; every other
        schedule needs today's completion.
        """
        if habit.get(const.DATA_HABIT_SCHEDULE) == const.SCHEDULE_WEEKLY:
            return any(
                CompletionLedger.is_completed_on(habit, day)
                for day in week_dates(today)
            )
        return CompletionLedger.is_completed_on(habit, today)
