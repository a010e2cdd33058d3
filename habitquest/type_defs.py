"""Type definitions for HabitQuest data structures.

Habits are stored and exported as plain dicts so that a collection survives an
export/import cycle unchanged. TypedDict gives static structure to those dicts
without changing their runtime shape.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Records coming from storage or an
import are structurally validated once and then read with .get() defaults,
so engines stay tolerant of legacy records that miss optional keys.

IMPORTANT: This file must NOT import from coordinator.py or the engines.
Only typing machinery is imported here.
"""

from typing import Any, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

HabitId = str  # UUID string for new habits; legacy imports may carry ints
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"
CompletionMap = dict[ISODate, bool]


# =============================================================================
# Entity Types
# =============================================================================


class HabitData(TypedDict):
    """A user-defined recurring habit.

    Created via data_builders.build_habit(). Keys are camelCase because they
    are the persisted and exported field names.
    """

    id: HabitId
    name: str
    xp: int
    schedule: str  # daily, weekly, custom
    customDays: list[int]  # 0=Sunday..6=Saturday, only for custom
    category: str
    description: str
    streak: int  # derived, written only by StreakEngine.recompute()
    completions: CompletionMap
    createdAt: ISODatetime


class AchievementDefinition(TypedDict):
    """Static achievement catalog entry (see const.ACHIEVEMENT_CATALOG)."""

    id: str
    name: str
    description: str
    metric: str
    target_value: int


# =============================================================================
# Engine Results
# =============================================================================


class AchievementContext(TypedDict):
    """Immutable snapshot the achievement predicates are evaluated against."""

    habit_count: int
    best_streak: int
    total_xp: int
    perfect_week: bool


class AchievementStatus(TypedDict):
    """Result of evaluating one achievement."""

    id: str
    name: str
    description: str
    unlocked: bool
    progress: float  # 0.0 - 1.0
    current_value: int
    target_value: int


class DayChartEntry(TypedDict):
    """One bar of the weekly chart."""

    day: str  # "Sun".."Sat"
    date: ISODate
    completed: int
    total: int
    percent: int


class WeekDayCell(TypedDict):
    """One day of a habit's row in the week view."""

    date: ISODate
    day: str
    day_of_month: int
    completed: bool
    active: bool
    is_today: bool


class WeekRow(TypedDict):
    """A habit together with its seven week cells."""

    habit: HabitData
    schedule_label: str
    days: list[WeekDayCell]


class StatsSnapshot(TypedDict):
    """Aggregate statistics shown on the stats page."""

    totalXP: int
    completedTodayCount: int
    todayXP: int
    bestStreak: int
    habitCount: int
    currentLevel: int
    xpToNextLevel: int


class WeekSummary(TypedDict):
    """Headline numbers for the current week."""

    weekStart: ISODate
    completionRate: int
    weekXP: int
    perfectWeek: bool


# =============================================================================
# Import / Export
# =============================================================================


class ExportDocument(TypedDict):
    """Export file layout."""

    habits: list[HabitData]
    exportDate: ISODatetime
    version: str


class ImportValidationError(TypedDict):
    """First failing record and field of a rejected import."""

    record_index: int | None  # None when the container itself is malformed
    field: str | None
    message: str


class ImportValidationResult(TypedDict):
    """Tagged result of validate_import_payload()."""

    valid: bool
    habits: list[HabitData]
    error: NotRequired[ImportValidationError]


# Dynamic structure - validated user input for create/edit
HabitInput = dict[str, Any]
"""User input for build_habit() and HabitTrackerCoordinator.edit_habit().

Keys are the DATA_HABIT_* constants; any subset may be present.
"""
