"""Gamification Engine - Pure logic for achievement evaluation.

Achievements are a fixed, read-only catalog (const.ACHIEVEMENT_CATALOG). Each
entry names a metric and a target value; the engine compares the metric from
an AchievementContext snapshot with the target.

PURITY CONTRACT:
- All data comes via the `context` parameter (built with build_context())
- No side effects, no caching, no persistence
- Evaluation order is irrelevant; every achievement is independent

The coordinator builds the context from its current habits each time the
achievements are displayed.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .. import const

if TYPE_CHECKING:
    from ..type_defs import AchievementContext, AchievementStatus


# Handler function signature: context -> current metric value
MetricHandler = Callable[["AchievementContext"], int]


class GamificationEngine:
    """Pure logic engine for achievement evaluation.

    All methods are class/static methods - no instance state.
    """

    # Maps achievement metric to a handler reading it from the context
    _METRIC_HANDLERS: dict[str, MetricHandler] = {}

    @classmethod
    def _register_handlers(cls) -> None:
        """Register metric handlers once."""
        if cls._METRIC_HANDLERS:
            return

        cls._METRIC_HANDLERS = {
            const.ACHIEVEMENT_METRIC_HABIT_COUNT: cls._metric_habit_count,
            const.ACHIEVEMENT_METRIC_BEST_STREAK: cls._metric_best_streak,
            const.ACHIEVEMENT_METRIC_TOTAL_XP: cls._metric_total_xp,
            const.ACHIEVEMENT_METRIC_PERFECT_WEEK: cls._metric_perfect_week,
        }

    # =========================================================================
    # CONTEXT
    # =========================================================================

    @staticmethod
    def build_context(
        *,
        habit_count: int,
        best_streak: int,
        total_xp: int,
        perfect_week: bool,
    ) -> AchievementContext:
        """Build the immutable snapshot achievements are evaluated against."""
        return {
            "habit_count": habit_count,
            "best_streak": best_streak,
            "total_xp": total_xp,
            "perfect_week": perfect_week,
        }

    # =========================================================================
    # MAIN EVALUATION METHODS
    # =========================================================================

    @classmethod
    def evaluate_achievement(
        cls,
        context: AchievementContext,
        achievement_data: dict[str, Any],
    ) -> AchievementStatus:
        """Evaluate one achievement against the context.

        Args:
            context: Snapshot of the habit collection
            achievement_data: Catalog entry (id, name, description, metric, target_value)

        Returns:
            AchievementStatus with unlocked flag and progress (0.0-1.0)
        """
        cls._register_handlers()

        achievement_id = str(achievement_data.get(const.DATA_ACHIEVEMENT_ID, "unknown"))
        metric = achievement_data.get(const.DATA_ACHIEVEMENT_METRIC)
        threshold = int(achievement_data.get(const.DATA_ACHIEVEMENT_TARGET_VALUE) or 0)

        handler = cls._METRIC_HANDLERS.get(str(metric))
        if handler is None:
            const.LOGGER.warning(
                "Unknown achievement metric: %s for achievement %s",
                metric,
                achievement_id,
            )
            current_value = 0
            unlocked = False
        else:
            current_value = handler(context)
            unlocked = current_value >= threshold

        progress = min(1.0, current_value / threshold) if threshold > 0 else 0.0

        return {
            "id": achievement_id,
            "name": str(achievement_data.get(const.DATA_ACHIEVEMENT_NAME, "")),
            "description": str(
                achievement_data.get(const.DATA_ACHIEVEMENT_DESCRIPTION, "")
            ),
            "unlocked": unlocked,
            "progress": progress,
            "current_value": current_value,
            "target_value": threshold,
        }

    @classmethod
    def evaluate_all(
        cls,
        context: AchievementContext,
        catalog: tuple[dict[str, Any], ...] = const.ACHIEVEMENT_CATALOG,
    ) -> list[AchievementStatus]:
        """Evaluate every catalog entry, preserving catalog order."""
        return [cls.evaluate_achievement(context, entry) for entry in catalog]

    # =========================================================================
    # METRIC HANDLERS
    # =========================================================================

    @staticmethod
    def _metric_habit_count(context: AchievementContext) -> int:
        return context["habit_count"]

    @staticmethod
    def _metric_best_streak(context: AchievementContext) -> int:
        return context["best_streak"]

    @staticmethod
    def _metric_total_xp(context: AchievementContext) -> int:
        return context["total_xp"]

    @staticmethod
    def _metric_perfect_week(context: AchievementContext) -> int:
        return 1 if context["perfect_week"] else 0
