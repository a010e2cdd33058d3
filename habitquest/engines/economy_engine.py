"""Economy Engine - Pure logic for experience points and levels.

This engine provides stateless functions for:
- Per-completion XP with the streak bonus
- Lifetime XP across all stored completions
- Today's XP
- Level derivation (100 XP per level, starting at level 1)

Streak bonus: floor(xp * 0.2) is added to every completion of a habit whose
CURRENT streak is at least 7. Lifetime XP applies that same current-streak
rule to historical completions; the bonus is not re-derived per date, so
old completions gain or lose the bonus as today's streak changes.
"""

from __future__ import annotations

from datetime import date
import math
from typing import TYPE_CHECKING, Any

from .. import const
from .completion_engine import CompletionLedger
from .schedule_engine import ScheduleEngine
from .streak_engine import StreakEngine

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class EconomyEngine:
    """Pure logic engine for XP calculations.

    All methods are static - no instance state.
    """

    @staticmethod
    def base_xp(habit: Mapping[str, Any]) -> int:
        """Return the habit's base XP per completion (0 if missing or not a number)."""
        xp = habit.get(const.DATA_HABIT_XP)
        if isinstance(xp, bool) or not isinstance(xp, (int, float)):
            return 0
        return xp

    @staticmethod
    def streak_bonus(habit: Mapping[str, Any]) -> int:
        """Return the bonus XP earned per completion at the current streak.

        Returns:
            floor(xp * STREAK_BONUS_RATIO) when streak >= STREAK_BONUS_THRESHOLD,
            otherwise 0.
        """
        if StreakEngine.stored_streak(habit) < const.STREAK_BONUS_THRESHOLD:
            return 0
        return math.floor(EconomyEngine.base_xp(habit) * const.STREAK_BONUS_RATIO)

    @staticmethod
    def completion_xp(habit: Mapping[str, Any]) -> int:
        """Return the XP a single completion of this habit is worth now."""
        return EconomyEngine.base_xp(habit) + EconomyEngine.streak_bonus(habit)

    @staticmethod
    def total_xp(habits: Iterable[Mapping[str, Any]]) -> int:
        """Return lifetime XP over every stored completion of every habit."""
        total = 0
        for habit in habits:
            completions = len(CompletionLedger.completed_dates(habit))
            total += completions * EconomyEngine.completion_xp(habit)
        return total

    @staticmethod
    def today_xp(habits: Iterable[Mapping[str, Any]], today: date) -> int:
        """Return XP earned today by habits that are due and completed today."""
        return sum(
            EconomyEngine.completion_xp(habit)
            for habit in habits
            if ScheduleEngine.is_active_on(habit, today)
            and CompletionLedger.is_completed_on(habit, today)
        )

    @staticmethod
    def level_for(total_xp: int) -> int:
        """Return the level reached with the given lifetime XP (always >= 1)."""
        return int(max(0, total_xp) // const.XP_PER_LEVEL) + const.BASE_LEVEL

    @staticmethod
    def xp_to_next_level(total_xp: int) -> int:
        """Return how much XP is still needed to reach the next level."""
        return int(const.XP_PER_LEVEL - (max(0, total_xp) % const.XP_PER_LEVEL))
