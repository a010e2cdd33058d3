"""Configuration loading for HabitQuest.

Configuration is an optional YAML file:

    storage_path: ~/.local/share/habitquest/habitquest_storage.json
    default_theme: dark
    log_level: DEBUG

Resolution order for the file: explicit path, then the HABITQUEST_CONFIG
environment variable, then built-in defaults. HABITQUEST_LOG_LEVEL overrides
the file's log_level.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import voluptuous as vol
from voluptuous.humanize import humanize_error
import yaml

from . import const
from .exceptions import ConfigurationError


def default_storage_path() -> str:
    """Return the default storage file location under the XDG data directory."""
    data_home = os.environ.get("XDG_DATA_HOME") or str(
        Path.home() / ".local" / "share"
    )
    return str(Path(data_home) / "habitquest" / const.DEFAULT_STORAGE_FILENAME)


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(const.CONF_STORAGE_PATH, default=default_storage_path): vol.All(
            str, vol.Length(min=1)
        ),
        vol.Optional(const.CONF_DEFAULT_THEME, default=const.DEFAULT_THEME): vol.In(
            const.THEME_OPTIONS
        ),
        vol.Optional(const.CONF_LOG_LEVEL, default=const.DEFAULT_LOG_LEVEL): vol.All(
            str, vol.Upper, vol.In(const.LOG_LEVEL_OPTIONS)
        ),
    }
)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as err:
        raise ConfigurationError(f"Cannot read configuration {path}: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigurationError(f"Invalid YAML in configuration {path}: {err}") from err

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Configuration {path} must be a mapping, got {type(raw).__name__}"
        )
    return raw


def load_config(path: str | os.PathLike[str] | None = None) -> dict[str, Any]:
    """Load and validate configuration.

    Args:
        path: Explicit configuration file (optional)

    Returns:
        Validated configuration with defaults applied.

    Raises:
        ConfigurationError: Unreadable file, bad YAML or schema violation
    """
    raw: dict[str, Any] = {}
    config_path = path or os.environ.get(const.ENV_CONFIG_PATH)
    if config_path:
        resolved = Path(config_path).expanduser()
        if resolved.exists():
            raw = _read_yaml(resolved)
            const.LOGGER.debug("Loaded configuration from %s", resolved)
        else:
            const.LOGGER.warning(
                "Configuration file %s not found, using defaults", resolved
            )

    env_level = os.environ.get(const.ENV_LOG_LEVEL)
    if env_level:
        raw = {**raw, const.CONF_LOG_LEVEL: env_level}

    try:
        return CONFIG_SCHEMA(raw)
    except vol.Invalid as err:
        raise ConfigurationError(
            f"Invalid configuration: {humanize_error(raw, err)}"
        ) from err


def configure_logging(level_name: str = const.DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging for the command-line front-end."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level, format=const.LOG_FORMAT)
    const.LOGGER.setLevel(level)
