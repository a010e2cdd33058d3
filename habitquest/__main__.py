"""Command-line front-end for HabitQuest.

Usage:
    python -m habitquest [--config PATH] [--storage PATH] <command> [args]

Habits are addressed by id, their name (case-insensitive) or a unique id prefix.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Any

from . import const
from .config import configure_logging, load_config
from .coordinator import HabitTrackerCoordinator
from .engines import CompletionLedger, ScheduleEngine
from .exceptions import (
    ConfigurationError,
    HabitNotFoundError,
    HabitValidationError,
    InvalidHabitRecordError,
    InvalidImportFormatError,
)
from .store import HabitStore
from .utils.dt_utils import dt_coerce_date


class CommandError(Exception):
    """User-facing failure of a command (reported on stderr, exit code 1)."""


# ==============================================================================
# Argument helpers
# ==============================================================================


def _parse_days(raw: str) -> list[int]:
    """Parse "mon,wed,fri" or "1,3,5" into Sunday-based weekday indices."""
    abbreviations = [abbr.lower() for abbr in const.WEEKDAY_ABBREVIATIONS]
    days: list[int] = []
    for part in raw.split(","):
        token = part.strip().lower()
        if not token:
            continue
        if token.isdigit():
            days.append(int(token))
        elif token[:3] in abbreviations:
            days.append(abbreviations.index(token[:3]))
        else:
            raise argparse.ArgumentTypeError(f"Unknown weekday: {part.strip()}")
    return days


def _resolve_habit_id(coordinator: HabitTrackerCoordinator, ref: str) -> Any:
    """Return the id of the habit matching ref (id, name or id prefix)."""
    try:
        return coordinator.get_habit(ref)[const.DATA_HABIT_ID]
    except HabitNotFoundError:
        pass

    named = [
        habit
        for habit in coordinator.habits
        if str(habit.get(const.DATA_HABIT_NAME, "")).casefold() == ref.casefold()
    ]
    if len(named) == 1:
        return named[0][const.DATA_HABIT_ID]

    prefixed = [
        habit
        for habit in coordinator.habits
        if str(habit.get(const.DATA_HABIT_ID, "")).startswith(ref)
    ]
    if len(prefixed) == 1 and not named:
        return prefixed[0][const.DATA_HABIT_ID]
    if len(prefixed) > 1 or len(named) > 1:
        raise CommandError(f"'{ref}' matches more than one habit, use the full id")
    raise CommandError(f"No habit matches '{ref}'")


def _short_id(habit: dict[str, Any]) -> str:
    return str(habit.get(const.DATA_HABIT_ID, ""))[:8]


def _habit_line(coordinator: HabitTrackerCoordinator, habit: dict[str, Any]) -> str:
    mark = "x" if coordinator.is_completed_today(habit) else " "
    return (
        f"[{mark}] {_short_id(habit):<8} {habit.get(const.DATA_HABIT_NAME, '')} "
        f"({habit.get(const.DATA_HABIT_XP, 0)} XP, "
        f"streak {habit.get(const.DATA_HABIT_STREAK, 0)}, "
        f"{habit.get(const.DATA_HABIT_CATEGORY, const.DEFAULT_CATEGORY)}, "
        f"{ScheduleEngine.schedule_label(habit) or '-'})"
    )


# ==============================================================================
# Commands
# ==============================================================================


def cmd_add(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    user_input: dict[str, Any] = {
        const.DATA_HABIT_NAME: args.name,
        const.DATA_HABIT_XP: args.xp,
        const.DATA_HABIT_SCHEDULE: args.schedule,
        const.DATA_HABIT_CATEGORY: args.category,
        const.DATA_HABIT_DESCRIPTION: args.description,
    }
    if args.schedule == const.SCHEDULE_CUSTOM:
        user_input[const.DATA_HABIT_CUSTOM_DAYS] = args.days or []
    habit = coordinator.create_habit(user_input)
    print(f"Added habit {_short_id(habit)}: {habit['name']}")


def cmd_edit(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    habit_id = _resolve_habit_id(coordinator, args.habit)
    changes = {
        field: value
        for field, value in (
            (const.DATA_HABIT_NAME, args.name),
            (const.DATA_HABIT_XP, args.xp),
            (const.DATA_HABIT_CATEGORY, args.category),
            (const.DATA_HABIT_DESCRIPTION, args.description),
        )
        if value is not None
    }
    if not changes:
        raise CommandError("Nothing to change")
    coordinator.edit_habit(habit_id, changes)
    print(f"Updated habit {str(habit_id)[:8]}")


def cmd_delete(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    habit_id = _resolve_habit_id(coordinator, args.habit)
    coordinator.delete_habit(habit_id)
    print(f"Deleted habit {str(habit_id)[:8]}")


def cmd_done(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    habit_id = _resolve_habit_id(coordinator, args.habit)
    habit = coordinator.get_habit(habit_id)
    if coordinator.complete_habit(habit_id):
        print(f"Completed {habit['name']} (streak {habit.get('streak', 0)})")
    elif coordinator.is_completed_today(habit):
        print(f"{habit['name']} is already completed today")
    else:
        print(f"{habit['name']} is not scheduled today")


def cmd_undo(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    habit_id = _resolve_habit_id(coordinator, args.habit)
    habit = coordinator.get_habit(habit_id)
    if coordinator.uncomplete_habit(habit_id):
        print(f"Removed today's completion of {habit['name']}")
    else:
        print(f"{habit['name']} was not completed today")


def cmd_toggle(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    habit_id = _resolve_habit_id(coordinator, args.habit)
    habit = coordinator.get_habit(habit_id)
    try:
        changed = coordinator.toggle_habit_day(habit_id, args.date)
    except ValueError as err:
        raise CommandError(str(err)) from err
    if not changed:
        print(f"{habit['name']} is not scheduled on {args.date}")
        return
    completed = CompletionLedger.is_completed_on(habit, dt_coerce_date(args.date))
    state = "completed" if completed else "open"
    print(f"{habit['name']} on {args.date}: {state}")


def cmd_today(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    habits = coordinator.filtered_and_sorted(
        coordinator.list_active_today(), args.category, args.sort
    )
    if not habits:
        print("No habits scheduled today.")
        return
    for habit in habits:
        print(_habit_line(coordinator, habit))


def cmd_week(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    rows = coordinator.list_for_week()
    if not rows:
        print("No habits yet.")
        return
    header = " ".join(cell["day"] for cell in rows[0]["days"])
    print(f"{'':<24} {header}")
    for row in rows:
        cells = " ".join(
            " x " if cell["completed"] else (" . " if cell["active"] else "   ")
            for cell in row["days"]
        )
        print(f"{str(row['habit'].get('name', ''))[:24]:<24} {cells}")
    summary = coordinator.week_summary()
    print(
        f"Week of {summary['weekStart']}: {summary['completionRate']}% complete, "
        f"{summary['weekXP']} XP"
        + (", perfect week!" if summary["perfectWeek"] else "")
    )


def cmd_stats(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    stats = coordinator.stats_snapshot()
    print(f"Level:           {stats['currentLevel']}")
    print(f"Total XP:        {stats['totalXP']} ({stats['xpToNextLevel']} to next level)")
    print(f"Today:           {stats['completedTodayCount']} done, {stats['todayXP']} XP")
    print(f"Best streak:     {stats['bestStreak']}")
    print(f"Habits:          {stats['habitCount']}")
    for entry in coordinator.weekly_chart_data():
        bar = "#" * (entry["percent"] // 10)
        print(f"  {entry['day']} {bar:<10} {entry['completed']}/{entry['total']}")


def cmd_achievements(
    coordinator: HabitTrackerCoordinator, args: argparse.Namespace
) -> None:
    for status in coordinator.achievements_snapshot():
        mark = "*" if status["unlocked"] else " "
        print(
            f"[{mark}] {status['name']:<16} {status['description']} "
            f"({status['current_value']}/{status['target_value']})"
        )


def cmd_categories(
    coordinator: HabitTrackerCoordinator, args: argparse.Namespace
) -> None:
    for category in coordinator.categories():
        print(category)


def cmd_export(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    filename, text = coordinator.export_data()
    target = Path(args.output) if args.output else Path(filename)
    if target.is_dir():
        target = target / filename
    try:
        target.write_text(text, encoding="utf-8")
    except OSError as err:
        raise CommandError(f"Cannot write {target}: {err}") from err
    print(f"Exported {len(coordinator.habits)} habit(s) to {target}")


def cmd_import(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    source = Path(args.file)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as err:
        raise CommandError(f"Cannot read {source}: {err}") from err
    except UnicodeDecodeError as err:
        raise CommandError(f"Cannot read {source}: not a UTF-8 text file") from err

    def confirm(current: int, incoming: int) -> bool:
        if args.yes:
            return True
        answer = input(
            f"Replace your {current} habit(s) with {incoming} imported habit(s)? [y/N] "
        )
        return answer.strip().lower() in ("y", "yes")

    count = coordinator.import_data(text, source.name, confirm)
    if count == 0 and coordinator.habits:
        print("Import cancelled.")
        return
    print(f"Imported {count} habit(s).")


def cmd_theme(coordinator: HabitTrackerCoordinator, args: argparse.Namespace) -> None:
    if args.theme == "toggle":
        coordinator.toggle_theme()
    elif args.theme:
        coordinator.set_theme(args.theme)
    print(coordinator.theme)


# ==============================================================================
# Parser
# ==============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="habitquest", description=f"{const.HABITQUEST_TITLE} habit tracker"
    )
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--storage", help="Storage file (overrides configuration)")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Create a habit")
    add.add_argument("name", help="Habit name")
    add.add_argument("--xp", type=int, default=const.DEFAULT_HABIT_XP)
    add.add_argument(
        "--schedule", choices=const.SCHEDULE_OPTIONS, default=const.SCHEDULE_DAILY
    )
    add.add_argument(
        "--days", type=_parse_days, help="Weekdays for custom schedules (mon,wed,fri)"
    )
    add.add_argument("--category", default=const.DEFAULT_CATEGORY)
    add.add_argument("--description", default=const.DEFAULT_DESCRIPTION)
    add.set_defaults(func=cmd_add)

    edit = sub.add_parser("edit", help="Change a habit's name, XP, category or description")
    edit.add_argument("habit", help="Habit id, id prefix or name")
    edit.add_argument("--name")
    edit.add_argument("--xp", type=int)
    edit.add_argument("--category")
    edit.add_argument("--description")
    edit.set_defaults(func=cmd_edit)

    delete = sub.add_parser("delete", help="Delete a habit")
    delete.add_argument("habit", help="Habit id, id prefix or name")
    delete.set_defaults(func=cmd_delete)

    done = sub.add_parser("done", help="Complete a habit for today")
    done.add_argument("habit", help="Habit id, id prefix or name")
    done.set_defaults(func=cmd_done)

    undo = sub.add_parser("undo", help="Remove today's completion")
    undo.add_argument("habit", help="Habit id, id prefix or name")
    undo.set_defaults(func=cmd_undo)

    toggle = sub.add_parser("toggle", help="Flip a habit's completion on a date")
    toggle.add_argument("habit", help="Habit id, id prefix or name")
    toggle.add_argument("date", help="Date (YYYY-MM-DD)")
    toggle.set_defaults(func=cmd_toggle)

    today = sub.add_parser("today", help="List habits scheduled today")
    today.add_argument("--category", default=const.CATEGORY_FILTER_ALL)
    today.add_argument("--sort", choices=const.SORT_OPTIONS, default=const.SORT_BY_NAME)
    today.set_defaults(func=cmd_today)

    week = sub.add_parser("week", help="Show the current week")
    week.set_defaults(func=cmd_week)

    stats = sub.add_parser("stats", help="Show XP, level and weekly chart")
    stats.set_defaults(func=cmd_stats)

    achievements = sub.add_parser("achievements", help="Show achievements")
    achievements.set_defaults(func=cmd_achievements)

    categories = sub.add_parser("categories", help="List categories")
    categories.set_defaults(func=cmd_categories)

    export = sub.add_parser("export", help="Export habits to a JSON file")
    export.add_argument("--output", help="Target file or directory")
    export.set_defaults(func=cmd_export)

    import_cmd = sub.add_parser("import", help="Replace habits from a JSON export")
    import_cmd.add_argument("file", help="Export file (.json)")
    import_cmd.add_argument("--yes", action="store_true", help="Do not ask before replacing")
    import_cmd.set_defaults(func=cmd_import)

    theme = sub.add_parser("theme", help="Show or change the theme")
    theme.add_argument(
        "theme", nargs="?", choices=[*const.THEME_OPTIONS, "toggle"], default=None
    )
    theme.set_defaults(func=cmd_theme)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    configure_logging(config[const.CONF_LOG_LEVEL])

    store = HabitStore.from_path(args.storage or config[const.CONF_STORAGE_PATH])
    coordinator = HabitTrackerCoordinator(
        store, default_theme=config[const.CONF_DEFAULT_THEME]
    )
    coordinator.refresh_streaks()

    try:
        args.func(coordinator, args)
    except HabitValidationError as err:
        print(f"Error: {err.field}: {err.message}", file=sys.stderr)
        return 1
    except (
        CommandError,
        InvalidImportFormatError,
        InvalidHabitRecordError,
    ) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
