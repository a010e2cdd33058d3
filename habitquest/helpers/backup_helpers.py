"""Backup utilities for HabitQuest.

Handles building export documents and validating import payloads.

Supported import formats:
    1. Export document (current):
        {
            "habits": [ {...}, ... ],
            "exportDate": "2026-10-18T09:00:00+02:00",
            "version": "1.0"
        }

    2. Legacy format (bare habit list):
        [ {...}, ... ]

Each habit record must carry a non-null `id`, a string `name`, a numeric
`xp` and an object `completions`. Other keys are kept untouched so an
exported collection re-imports unchanged. The first failing record rejects
the whole import.
"""

from __future__ import annotations

from datetime import date
import json
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from .. import const
from ..exceptions import InvalidHabitRecordError, InvalidImportFormatError
from ..utils.dt_utils import dt_to_key

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..type_defs import (
        ExportDocument,
        HabitData,
        ImportValidationError,
        ImportValidationResult,
    )


# ==============================================================================
# Schema
# ==============================================================================


def _defined(value: Any) -> Any:
    """Reject a null id."""
    if value is None:
        raise vol.Invalid("id must be defined")
    return value


def _number(value: Any) -> Any:
    """Accept ints and floats, reject booleans and everything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise vol.Invalid("expected a number")
    return value


HABIT_RECORD_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_HABIT_ID): _defined,
        vol.Required(const.DATA_HABIT_NAME): str,
        vol.Required(const.DATA_HABIT_XP): _number,
        vol.Required(const.DATA_HABIT_COMPLETIONS): dict,
    },
    extra=vol.ALLOW_EXTRA,
)


# ==============================================================================
# Export
# ==============================================================================


def build_export_document(
    habits: Sequence[HabitData], exported_at: str
) -> ExportDocument:
    """Wrap the habit collection in the export document layout.

    Args:
        habits: Current habit collection
        exported_at: ISO 8601 timestamp of the export

    Returns:
        {"habits": [...], "exportDate": ..., "version": "1.0"}
    """
    return {
        const.EXPORT_KEY_HABITS: list(habits),
        const.EXPORT_KEY_EXPORT_DATE: exported_at,
        const.EXPORT_KEY_VERSION: const.EXPORT_FORMAT_VERSION,
    }


def serialize_export(document: ExportDocument) -> str:
    """Serialize an export document to indented JSON text."""
    return json.dumps(document, indent=const.EXPORT_JSON_INDENT, ensure_ascii=False)


def export_filename(today: date) -> str:
    """Return the suggested export file name for a date.

    Example:
        export_filename(date(2026, 10, 18)) -> "habit_tracker_backup_2026-10-18.json"
    """
    return f"{const.EXPORT_FILENAME_PREFIX}{dt_to_key(today)}{const.EXPORT_FILE_EXTENSION}"


# ==============================================================================
# Import
# ==============================================================================


def _error(
    record_index: int | None, field: str | None, message: str
) -> ImportValidationResult:
    error: ImportValidationError = {
        "record_index": record_index,
        "field": field,
        "message": message,
    }
    return {"valid": False, "habits": [], "error": error}


def validate_import_payload(parsed: Any) -> ImportValidationResult:
    """Validate a parsed import document.

    Args:
        parsed: JSON-decoded content of the import file

    Returns:
        ImportValidationResult. On success `habits` holds the records exactly
        as imported; on failure `error` names the first failing record and
        field (record_index None means the container itself was wrong).
    """
    if isinstance(parsed, list):
        records = parsed
    elif isinstance(parsed, dict) and isinstance(
        parsed.get(const.EXPORT_KEY_HABITS), list
    ):
        records = parsed[const.EXPORT_KEY_HABITS]
    else:
        const.LOGGER.debug("Import payload is neither a list nor an export document")
        return _error(None, None, "Invalid data format")

    seen_ids: set[str] = set()
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            return _error(index, None, f"Habit #{index + 1} is not an object")
        try:
            HABIT_RECORD_SCHEMA(record)
        except vol.MultipleInvalid as err:
            first = err.errors[0]
            field = str(first.path[0]) if first.path else None
            return _error(
                index,
                field,
                f"Invalid habit data structure: habit #{index + 1} "
                f"field '{field}': {first.msg}",
            )

        # Ids are compared as strings so 5 and "5" cannot both be imported
        habit_id = str(record[const.DATA_HABIT_ID])
        if habit_id in seen_ids:
            return _error(
                index,
                const.DATA_HABIT_ID,
                f"Invalid habit data structure: duplicate id {habit_id!r}",
            )
        seen_ids.add(habit_id)

    return {"valid": True, "habits": records}


def parse_import_text(text: str, filename: str | None = None) -> Any:
    """Decode the text of an import file.

    Args:
        text: File content
        filename: Original file name; must end with ".json" when given

    Raises:
        InvalidImportFormatError: Wrong extension or malformed JSON
    """
    if filename is not None and not filename.lower().endswith(
        const.EXPORT_FILE_EXTENSION
    ):
        raise InvalidImportFormatError("Please select a valid JSON file.")
    try:
        return json.loads(text)
    except json.JSONDecodeError as err:
        raise InvalidImportFormatError(f"Malformed JSON: {err.msg}") from err


def load_import(text: str, filename: str | None = None) -> list[HabitData]:
    """Parse and validate an import file in one step.

    Returns:
        The validated habit records.

    Raises:
        InvalidImportFormatError: Bad file name, bad JSON or bad container
        InvalidHabitRecordError: A record failed structural validation
    """
    result = validate_import_payload(parse_import_text(text, filename))
    if result["valid"]:
        return result["habits"]

    error = result["error"]
    if error["record_index"] is None:
        raise InvalidImportFormatError(error["message"])
    raise InvalidHabitRecordError(
        error["record_index"], error["field"], error["message"]
    )
