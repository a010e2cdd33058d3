# File: coordinator.py
"""Coordinator for HabitQuest.

HabitTrackerCoordinator owns the single in-memory habit collection, the theme
and the current page. Every front-end talks to it; nothing else mutates habits.

Mutation pipeline (strict order):
    1. apply the change (ledger write, create, edit, delete, import)
    2. recompute the affected habit's streak (StreakEngine.recompute)
    3. persist the collection (write-through, failures logged)
    4. notify listeners so the front-end re-renders

Queries never mutate and are always computed from the current collection and
the injected clock, so they always reflect the latest streaks.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from . import const
from .data_builders import build_habit
from .engines import (
    CompletionLedger,
    EconomyEngine,
    GamificationEngine,
    ScheduleEngine,
    StatisticsEngine,
    StreakEngine,
)
from .exceptions import HabitNotFoundError, HabitValidationError
from .helpers import backup_helpers
from .store import HabitStore
from .type_defs import (
    AchievementStatus,
    DayChartEntry,
    HabitData,
    HabitInput,
    StatsSnapshot,
    WeekDayCell,
    WeekRow,
    WeekSummary,
)
from .utils.dt_utils import (
    day_abbrev,
    day_of_week,
    dt_coerce_date,
    dt_now_iso,
    dt_to_key,
    dt_today_local,
    week_dates,
)

# Called with (current_count, incoming_count); returns True to proceed
ImportConfirmCallback = Callable[[int, int], bool]


class HabitTrackerCoordinator:
    """Application state plus the operations and queries front-ends call."""

    def __init__(
        self,
        store: HabitStore | None = None,
        *,
        today_provider: Callable[[], date] = dt_today_local,
        now_provider: Callable[[], str] = dt_now_iso,
        default_theme: str = const.DEFAULT_THEME,
    ) -> None:
        """Initialize the coordinator and load persisted state.

        Args:
            store: Persistence (defaults to in-memory storage)
            today_provider: Returns the local "today" used by every query
            now_provider: Returns the current ISO timestamp for createdAt/exports
            default_theme: Theme used when none is stored
        """
        self.store = store or HabitStore()
        self._today_provider = today_provider
        self._now_provider = now_provider
        self.statistics = StatisticsEngine()
        self._listeners: list[Callable[[], None]] = []

        self.habits: list[HabitData] = self.store.load_habits()
        self.theme: str = self.store.load_theme(default_theme)
        self.current_page: str = const.PAGE_TODAY

        const.LOGGER.debug(
            "DEBUG: Coordinator initialized with %s habit(s), theme '%s'",
            len(self.habits),
            self.theme,
        )

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    @property
    def today(self) -> date:
        """Return the as-of date for all calculations."""
        return self._today_provider()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, update_callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback run after every persisted mutation.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(update_callback)

        def remove_listener() -> None:
            if update_callback in self._listeners:
                self._listeners.remove(update_callback)

        return remove_listener

    def _update_listeners(self) -> None:
        for update_callback in list(self._listeners):
            update_callback()

    def _persist_and_update(self) -> None:
        """Save the collection, then notify listeners."""
        self.store.save_habits(self.habits)
        self._update_listeners()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_habit(self, habit_id: Any) -> HabitData:
        """Return the habit with the given id.

        Ids are compared as strings, so legacy integer ids from old exports
        can be addressed with their text form.

        Raises:
            HabitNotFoundError: No habit has that id
        """
        wanted = str(habit_id)
        for habit in self.habits:
            if str(habit.get(const.DATA_HABIT_ID)) == wanted:
                return habit
        raise HabitNotFoundError(habit_id)

    def _find_habit(self, habit_id: Any) -> HabitData | None:
        """Return the habit or None, logging stale ids at debug level."""
        try:
            return self.get_habit(habit_id)
        except HabitNotFoundError as err:
            const.LOGGER.debug("Ignoring operation on stale habit: %s", err)
            return None

    # ------------------------------------------------------------------
    # Habit CRUD
    # ------------------------------------------------------------------

    def create_habit(self, user_input: HabitInput) -> HabitData:
        """Create and store a new habit.

        Raises:
            InvalidScheduleSelectionError: Custom schedule with no weekdays
            HabitValidationError: Any other invalid input (state unchanged)
        """
        habit = build_habit(user_input, created_at=self._now_provider())
        StreakEngine.recompute(habit, self.today)
        self.habits.append(habit)
        const.LOGGER.info("INFO: Created habit '%s' (%s)", habit["name"], habit["id"])
        self._persist_and_update()
        return habit

    def edit_habit(self, habit_id: Any, user_input: HabitInput) -> bool:
        """Update a habit's name, XP, category or description.

        Keys outside const.HABIT_EDITABLE_FIELDS are ignored.

        Returns:
            False for an unknown id.

        Raises:
            HabitValidationError: Invalid new values (state unchanged)
        """
        habit = self._find_habit(habit_id)
        if habit is None:
            return False

        changes = {
            key: value
            for key, value in user_input.items()
            if key in const.HABIT_EDITABLE_FIELDS
        }
        updated = build_habit(changes, existing=habit)
        habit.update(updated)
        const.LOGGER.debug("DEBUG: Edited habit %s fields %s", habit_id, list(changes))
        self._persist_and_update()
        return True

    def delete_habit(self, habit_id: Any) -> bool:
        """Remove a habit. Returns False for an unknown id."""
        habit = self._find_habit(habit_id)
        if habit is None:
            return False
        self.habits.remove(habit)
        const.LOGGER.info("INFO: Deleted habit '%s'", habit.get(const.DATA_HABIT_NAME))
        self._persist_and_update()
        return True

    def replace_habits(self, habits: list[HabitData]) -> None:
        """Replace the entire collection (programmatic, no validation)."""
        self.habits = list(habits)
        self._persist_and_update()

    # ------------------------------------------------------------------
    # Completions
    # ------------------------------------------------------------------

    def _apply_ledger_change(self, habit: HabitData, changed: bool) -> bool:
        if not changed:
            return False
        StreakEngine.recompute(habit, self.today)
        self._persist_and_update()
        return True

    def complete_habit(self, habit_id: Any) -> bool:
        """Mark a habit completed today.

        No-op (False) when the id is unknown, the habit is not due today or
        it is already completed.
        """
        habit = self._find_habit(habit_id)
        if habit is None:
            return False
        return self._apply_ledger_change(
            habit, CompletionLedger.set_completed(habit, self.today)
        )

    def uncomplete_habit(self, habit_id: Any) -> bool:
        """Remove today's completion. No-op (False) if there is none."""
        habit = self._find_habit(habit_id)
        if habit is None:
            return False
        return self._apply_ledger_change(
            habit, CompletionLedger.clear(habit, self.today)
        )

    def toggle_habit_day(self, habit_id: Any, on_date: date | datetime | str) -> bool:
        """Flip the completion of any day (past, present or future).

        Returns:
            False when the id is unknown or the habit is not due that day.

        Raises:
            ValueError: on_date is a string that is not a YYYY-MM-DD date
        """
        target = dt_coerce_date(on_date)
        habit = self._find_habit(habit_id)
        if habit is None:
            return False
        return self._apply_ledger_change(
            habit, CompletionLedger.toggle(habit, target)
        )

    def refresh_streaks(self) -> None:
        """Recompute every habit's streak against today and persist if any moved.

        Streaks are stored values; after midnight a stored streak may no
        longer match the ledger until something recomputes it.
        """
        changed = False
        for habit in self.habits:
            previous = habit.get(const.DATA_HABIT_STREAK)
            if StreakEngine.recompute(habit, self.today) != previous:
                changed = True
        if changed:
            self._persist_and_update()

    # ------------------------------------------------------------------
    # Import / Export
    # ------------------------------------------------------------------

    def export_data(self) -> tuple[str, str]:
        """Serialize the collection for download.

        Returns:
            (suggested file name, JSON text)
        """
        document = backup_helpers.build_export_document(
            self.habits, self._now_provider()
        )
        return (
            backup_helpers.export_filename(self.today),
            backup_helpers.serialize_export(document),
        )

    def import_data(
        self,
        text: str,
        filename: str | None = None,
        confirm: ImportConfirmCallback | None = None,
    ) -> int:
        """Replace the collection with the habits of an import file.

        Args:
            text: File content
            filename: Original file name (must end in .json when given)
            confirm: Asked before overwriting a non-empty collection

        Returns:
            Number of imported habits; 0 if the user declined.

        Raises:
            InvalidImportFormatError: Wrong file type or unrecognized layout
            InvalidHabitRecordError: A record failed validation
            (the collection is unchanged in every failure case)
        """
        incoming = backup_helpers.load_import(text, filename)

        if self.habits and confirm is not None:
            if not confirm(len(self.habits), len(incoming)):
                const.LOGGER.info("INFO: Import of %s habit(s) cancelled", len(incoming))
                return 0

        self.habits = incoming
        const.LOGGER.info("INFO: Imported %s habit(s)", len(incoming))
        self._persist_and_update()
        return len(incoming)

    # ------------------------------------------------------------------
    # Theme & Navigation
    # ------------------------------------------------------------------

    def set_theme(self, theme: str) -> None:
        """Set and persist the theme.

        Raises:
            HabitValidationError: Unknown theme name
        """
        if theme not in const.THEME_OPTIONS:
            raise HabitValidationError(
                const.STORAGE_KEY_THEME,
                f"Theme must be one of: {', '.join(const.THEME_OPTIONS)}",
            )
        self.theme = theme
        self.store.save_theme(theme)
        self._update_listeners()

    def toggle_theme(self) -> str:
        """Switch between light and dark. Returns the new theme."""
        new_theme = (
            const.THEME_LIGHT if self.theme == const.THEME_DARK else const.THEME_DARK
        )
        self.set_theme(new_theme)
        return new_theme

    def set_page(self, page: str) -> None:
        """Switch the current page (today, week, stats)."""
        if page not in const.PAGE_ORDER:
            raise ValueError(f"Unknown page: {page}")
        self.current_page = page

    def next_page(self) -> str:
        """Move to the next page, wrapping around."""
        index = const.PAGE_ORDER.index(self.current_page)
        self.current_page = const.PAGE_ORDER[(index + 1) % len(const.PAGE_ORDER)]
        return self.current_page

    def previous_page(self) -> str:
        """Move to the previous page, wrapping around."""
        index = const.PAGE_ORDER.index(self.current_page)
        self.current_page = const.PAGE_ORDER[(index - 1) % len(const.PAGE_ORDER)]
        return self.current_page

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_active_today(self) -> list[HabitData]:
        """Return habits due today, in collection order."""
        today = self.today
        return [
            habit for habit in self.habits if ScheduleEngine.is_active_on(habit, today)
        ]

    def is_completed_today(self, habit: HabitData) -> bool:
        """Return True if the habit has a completion for today."""
        return CompletionLedger.is_completed_on(habit, self.today)

    def list_for_week(self) -> list[WeekRow]:
        """Return every habit with its seven cells for the current week."""
        today = self.today
        rows: list[WeekRow] = []
        for habit in self.habits:
            cells: list[WeekDayCell] = [
                {
                    "date": dt_to_key(day),
                    "day": day_abbrev(day_of_week(day)),
                    "day_of_month": day.day,
                    "completed": CompletionLedger.is_completed_on(habit, day),
                    "active": ScheduleEngine.is_active_on(habit, day),
                    "is_today": day == today,
                }
                for day in week_dates(today)
            ]
            rows.append(
                {
                    "habit": habit,
                    "schedule_label": ScheduleEngine.schedule_label(habit),
                    "days": cells,
                }
            )
        return rows

    def categories(self) -> list[str]:
        """Return distinct categories in first-seen order."""
        seen: list[str] = []
        for habit in self.habits:
            category = habit.get(const.DATA_HABIT_CATEGORY, const.DEFAULT_CATEGORY)
            if category not in seen:
                seen.append(category)
        return seen

    def filtered_and_sorted(
        self,
        habits: list[HabitData] | None = None,
        category_filter: str | None = const.CATEGORY_FILTER_ALL,
        sort_key: str = const.SORT_BY_NAME,
    ) -> list[HabitData]:
        """Filter by category and sort for display.

        Args:
            habits: Habits to arrange (defaults to the whole collection)
            category_filter: Category name, or "all"/None for no filter
            sort_key: "name" (ascending, case-insensitive), "xp" or "streak"
                (both descending); unknown keys sort by name

        Returns:
            A new list; the collection order is not changed.
        """
        source = self.habits if habits is None else habits
        if category_filter and category_filter != const.CATEGORY_FILTER_ALL:
            source = [
                habit
                for habit in source
                if habit.get(const.DATA_HABIT_CATEGORY) == category_filter
            ]

        if sort_key == const.SORT_BY_XP:
            return sorted(source, key=EconomyEngine.base_xp, reverse=True)
        if sort_key == const.SORT_BY_STREAK:
            return sorted(source, key=StreakEngine.stored_streak, reverse=True)
        return sorted(
            source, key=lambda h: str(h.get(const.DATA_HABIT_NAME, "")).casefold()
        )

    def stats_snapshot(self) -> StatsSnapshot:
        """Return the aggregate numbers of the stats page."""
        today = self.today
        total_xp = EconomyEngine.total_xp(self.habits)
        return {
            "totalXP": total_xp,
            "completedTodayCount": self.statistics.completed_today_count(
                self.habits, today
            ),
            "todayXP": EconomyEngine.today_xp(self.habits, today),
            "bestStreak": self.statistics.best_streak(self.habits),
            "habitCount": len(self.habits),
            "currentLevel": EconomyEngine.level_for(total_xp),
            "xpToNextLevel": EconomyEngine.xp_to_next_level(total_xp),
        }

    def week_summary(self) -> WeekSummary:
        """Return completion rate, XP and perfect-week flag for this week."""
        return self.statistics.week_summary(self.habits, self.today)

    def weekly_chart_data(self) -> list[DayChartEntry]:
        """Return the seven bars of the weekly chart."""
        return self.statistics.weekly_chart_data(self.habits, self.today)

    def achievements_snapshot(self) -> list[AchievementStatus]:
        """Evaluate every achievement against the current collection."""
        context = GamificationEngine.build_context(
            habit_count=len(self.habits),
            best_streak=self.statistics.best_streak(self.habits),
            total_xp=EconomyEngine.total_xp(self.habits),
            perfect_week=self.statistics.is_perfect_week(self.habits, self.today),
        )
        return GamificationEngine.evaluate_all(context)
