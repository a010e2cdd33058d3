"""Habit lifecycle helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- Habit field defaults
- Business logic validation
- Complete habit structure building

### Build Function
`build_habit()` handles both create (existing=None) and update
(existing=HabitData):
- Generates the id (UUID) and createdAt timestamp for new habits
- Applies field defaults
- Preserves derived/runtime fields (streak, completions) on update
- Returns a complete habit dict ready for storage

### Validation Function
`validate_habit_data()` checks business rules and returns a dict of
{field: message}; `build_habit()` raises the first failure as a
HabitValidationError (or InvalidScheduleSelectionError).

Consumers:
- coordinator.py (create/edit)
- __main__.py (through the coordinator)
"""

from __future__ import annotations

from typing import Any
import uuid

from . import const
from .exceptions import HabitValidationError, InvalidScheduleSelectionError
from .type_defs import HabitData, HabitInput
from .utils.dt_utils import dt_now_iso

# ==============================================================================
# HELPER FUNCTIONS FOR FIELD NORMALIZATION
# ==============================================================================


def _normalize_days(value: Any) -> list[Any]:
    """Normalize customDays input into a de-duplicated list, order preserved.

    Accepts a list/tuple/set, a single int, or None.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        items = [value]
    seen: list[Any] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def _coerce_xp(value: Any) -> int | None:
    """Return value as an int, or None if it is not a whole number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ==============================================================================
# HABITS
# ==============================================================================


def validate_habit_data(
    data: HabitInput,
    *,
    is_update: bool = False,
) -> dict[str, str]:
    """Validate habit business rules.

    Args:
        data: Habit data dict with DATA_HABIT_* keys
        is_update: True when editing; only provided fields are checked

    Returns:
        Dict of errors {field: message}. Empty dict means validation passed.

    Validation Rules:
        1. Name not empty
        2. XP is a positive whole number
        3. Schedule is daily, weekly or custom
        4. Custom schedule has at least one weekday, all within 0-6
    """
    errors: dict[str, str] = {}

    # === 1. Name ===
    if not is_update or const.DATA_HABIT_NAME in data:
        name = data.get(const.DATA_HABIT_NAME, "")
        if not isinstance(name, str) or not name.strip():
            errors[const.DATA_HABIT_NAME] = "Habit name must not be empty"
            return errors

    # === 2. XP ===
    if not is_update or const.DATA_HABIT_XP in data:
        xp = _coerce_xp(data.get(const.DATA_HABIT_XP, const.DEFAULT_HABIT_XP))
        if xp is None or xp <= 0:
            errors[const.DATA_HABIT_XP] = "XP must be a positive whole number"
            return errors

    # === 3. Schedule ===
    if is_update and const.DATA_HABIT_SCHEDULE not in data:
        return errors
    schedule = data.get(const.DATA_HABIT_SCHEDULE, const.SCHEDULE_DAILY)
    if schedule not in const.SCHEDULE_OPTIONS:
        errors[const.DATA_HABIT_SCHEDULE] = (
            f"Schedule must be one of: {', '.join(const.SCHEDULE_OPTIONS)}"
        )
        return errors

    # === 4. Custom days ===
    if schedule == const.SCHEDULE_CUSTOM:
        days = _normalize_days(data.get(const.DATA_HABIT_CUSTOM_DAYS))
        if not days:
            errors[const.DATA_HABIT_CUSTOM_DAYS] = (
                "Please select at least one day for your custom schedule"
            )
            return errors
        for day in days:
            if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
                errors[const.DATA_HABIT_CUSTOM_DAYS] = (
                    f"Invalid weekday {day!r}: expected 0 (Sunday) to 6 (Saturday)"
                )
                return errors

    return errors


def build_habit(
    user_input: HabitInput,
    existing: HabitData | None = None,
    *,
    created_at: str | None = None,
) -> HabitData:
    """Build habit data for create or update operations.

    Args:
        user_input: Data with DATA_HABIT_* keys (may have missing fields)
        existing: None for create, existing HabitData for update
        created_at: Creation timestamp override (defaults to now)

    Returns:
        Complete HabitData ready for storage. On update a new dict is
        returned; the caller replaces the stored record.

    Raises:
        InvalidScheduleSelectionError: Custom schedule with no weekdays
        HabitValidationError: Any other rule failure

    Examples:
        # CREATE mode - generates UUID, applies defaults for missing fields
        habit = build_habit({"name": "Read", "xp": 15})

        # UPDATE mode - preserves fields not in user_input
        habit = build_habit({"xp": 20}, existing=old_habit)
    """
    is_create = existing is None

    errors = validate_habit_data(user_input, is_update=not is_create)
    if errors:
        field, message = next(iter(errors.items()))
        if field == const.DATA_HABIT_CUSTOM_DAYS and not _normalize_days(
            user_input.get(const.DATA_HABIT_CUSTOM_DAYS)
        ):
            raise InvalidScheduleSelectionError(field, message)
        raise HabitValidationError(field, message)

    def get_field(data_key: str, default: Any) -> Any:
        """Get field value: user_input > existing > default."""
        if data_key in user_input:
            return user_input[data_key]
        if existing is not None:
            return existing.get(data_key, default)
        return default

    schedule = get_field(const.DATA_HABIT_SCHEDULE, const.SCHEDULE_DAILY)
    custom_days = (
        _normalize_days(get_field(const.DATA_HABIT_CUSTOM_DAYS, []))
        if schedule == const.SCHEDULE_CUSTOM
        else []
    )
    category = str(get_field(const.DATA_HABIT_CATEGORY, const.DEFAULT_CATEGORY) or "")
    description = str(
        get_field(const.DATA_HABIT_DESCRIPTION, const.DEFAULT_DESCRIPTION) or ""
    )

    if existing is None:
        habit_id: Any = str(uuid.uuid4())
        created = created_at or dt_now_iso()
        streak = const.DEFAULT_STREAK
        completions: dict[str, bool] = {}
    else:
        habit_id = existing.get(const.DATA_HABIT_ID)
        created = existing.get(const.DATA_HABIT_CREATED_AT) or created_at or dt_now_iso()
        streak = existing.get(const.DATA_HABIT_STREAK, const.DEFAULT_STREAK)
        completions = existing.get(const.DATA_HABIT_COMPLETIONS) or {}

    if existing is not None and const.DATA_HABIT_XP not in user_input:
        xp = existing.get(const.DATA_HABIT_XP, const.DEFAULT_HABIT_XP)
    else:
        xp = (
            _coerce_xp(user_input.get(const.DATA_HABIT_XP, const.DEFAULT_HABIT_XP))
            or const.DEFAULT_HABIT_XP
        )

    return HabitData(
        id=habit_id,
        name=str(get_field(const.DATA_HABIT_NAME, "")).strip(),
        xp=xp,
        schedule=schedule,
        customDays=custom_days,
        category=category.strip() or const.DEFAULT_CATEGORY,
        description=description.strip(),
        streak=streak,
        completions=completions,
        createdAt=created,
    )
