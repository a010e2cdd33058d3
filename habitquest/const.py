# File: const.py
"""Constants for HabitQuest.

This file centralizes storage keys, habit field names, schedule values,
defaults, gamification thresholds and the achievement catalog so that every
engine, the store and the coordinator agree on the same names.
"""

import logging
from typing import Final

# ------------------------------------------------------------------------------------------------
# General / Application Information
# ------------------------------------------------------------------------------------------------
HABITQUEST_TITLE = "HabitQuest"

# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Storage
# ------------------------------------------------------------------------------------------------
STORAGE_KEY_HABITS = "habits"
STORAGE_KEY_THEME = "theme"
DEFAULT_STORAGE_FILENAME = "habitquest_storage.json"

# ------------------------------------------------------------------------------------------------
# Habit Data Keys (persisted field names, camelCase to stay compatible with exports)
# ------------------------------------------------------------------------------------------------
DATA_HABIT_ID = "id"
DATA_HABIT_NAME = "name"
DATA_HABIT_XP = "xp"
DATA_HABIT_SCHEDULE = "schedule"
DATA_HABIT_CUSTOM_DAYS = "customDays"
DATA_HABIT_CATEGORY = "category"
DATA_HABIT_DESCRIPTION = "description"
DATA_HABIT_STREAK = "streak"
DATA_HABIT_COMPLETIONS = "completions"
DATA_HABIT_CREATED_AT = "createdAt"

# Fields a user may change after creation
HABIT_EDITABLE_FIELDS: Final[frozenset[str]] = frozenset(
    {
        DATA_HABIT_NAME,
        DATA_HABIT_XP,
        DATA_HABIT_CATEGORY,
        DATA_HABIT_DESCRIPTION,
    }
)

# ------------------------------------------------------------------------------------------------
# Schedules
# ------------------------------------------------------------------------------------------------
SCHEDULE_DAILY = "daily"
SCHEDULE_WEEKLY = "weekly"
SCHEDULE_CUSTOM = "custom"
SCHEDULE_OPTIONS = [SCHEDULE_DAILY, SCHEDULE_WEEKLY, SCHEDULE_CUSTOM]

SCHEDULE_LABEL_DAILY = "Daily"
SCHEDULE_LABEL_WEEKLY = "Weekly"
SCHEDULE_LABEL_EVERY_DAY = "Every day"

# Weekday indices use 0=Sunday..6=Saturday throughout HabitQuest
WEEKDAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]
WEEKDAY_ABBREVIATIONS = [name[:3] for name in WEEKDAY_NAMES]
DAYS_PER_WEEK = 7

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_CATEGORY = "General"
DEFAULT_DESCRIPTION = ""
DEFAULT_HABIT_XP = 10
DEFAULT_STREAK = 0
SENTINEL_EMPTY = ""

# ------------------------------------------------------------------------------------------------
# Streaks & XP
# ------------------------------------------------------------------------------------------------
STREAK_MAX_LOOKBACK_DAYS = 365
STREAK_BONUS_THRESHOLD = 7
STREAK_BONUS_RATIO = 0.2
XP_PER_LEVEL = 100
BASE_LEVEL = 1

# ------------------------------------------------------------------------------------------------
# Sorting & Filtering
# ------------------------------------------------------------------------------------------------
SORT_BY_NAME = "name"
SORT_BY_XP = "xp"
SORT_BY_STREAK = "streak"
SORT_OPTIONS = [SORT_BY_NAME, SORT_BY_XP, SORT_BY_STREAK]
CATEGORY_FILTER_ALL = "all"

# ------------------------------------------------------------------------------------------------
# Pages (navigation state owned by the coordinator)
# ------------------------------------------------------------------------------------------------
PAGE_TODAY = "today"
PAGE_WEEK = "week"
PAGE_STATS = "stats"
PAGE_ORDER = [PAGE_TODAY, PAGE_WEEK, PAGE_STATS]

# ------------------------------------------------------------------------------------------------
# Theme
# ------------------------------------------------------------------------------------------------
THEME_LIGHT = "light"
THEME_DARK = "dark"
THEME_OPTIONS = [THEME_LIGHT, THEME_DARK]
DEFAULT_THEME = THEME_LIGHT

# ------------------------------------------------------------------------------------------------
# Import / Export
# ------------------------------------------------------------------------------------------------
EXPORT_KEY_HABITS = "habits"
EXPORT_KEY_EXPORT_DATE = "exportDate"
EXPORT_KEY_VERSION = "version"
EXPORT_FORMAT_VERSION = "1.0"
EXPORT_FILENAME_PREFIX = "habit_tracker_backup_"
EXPORT_FILE_EXTENSION = ".json"
EXPORT_JSON_INDENT = 2

# ------------------------------------------------------------------------------------------------
# Achievements
# ------------------------------------------------------------------------------------------------
ACHIEVEMENT_FIRST_HABIT = "first_habit"
ACHIEVEMENT_STREAK_7 = "streak_7"
ACHIEVEMENT_STREAK_30 = "streak_30"
ACHIEVEMENT_XP_1000 = "xp_1000"
ACHIEVEMENT_PERFECT_WEEK = "perfect_week"
ACHIEVEMENT_HABIT_MASTER = "habit_master"

# Metrics an achievement can be measured against (keys of AchievementContext)
ACHIEVEMENT_METRIC_HABIT_COUNT = "habit_count"
ACHIEVEMENT_METRIC_BEST_STREAK = "best_streak"
ACHIEVEMENT_METRIC_TOTAL_XP = "total_xp"
ACHIEVEMENT_METRIC_PERFECT_WEEK = "perfect_week"

DATA_ACHIEVEMENT_ID = "id"
DATA_ACHIEVEMENT_NAME = "name"
DATA_ACHIEVEMENT_DESCRIPTION = "description"
DATA_ACHIEVEMENT_METRIC = "metric"
DATA_ACHIEVEMENT_TARGET_VALUE = "target_value"

ACHIEVEMENT_CATALOG: Final[tuple[dict[str, object], ...]] = (
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_FIRST_HABIT,
        DATA_ACHIEVEMENT_NAME: "Getting Started",
        DATA_ACHIEVEMENT_DESCRIPTION: "Create your first habit",
        DATA_ACHIEVEMENT_METRIC: ACHIEVEMENT_METRIC_HABIT_COUNT,
        DATA_ACHIEVEMENT_TARGET_VALUE: 1,
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_STREAK_7,
        DATA_ACHIEVEMENT_NAME: "Week Warrior",
        DATA_ACHIEVEMENT_DESCRIPTION: "Maintain a 7-day streak",
        DATA_ACHIEVEMENT_METRIC: ACHIEVEMENT_METRIC_BEST_STREAK,
        DATA_ACHIEVEMENT_TARGET_VALUE: 7,
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_STREAK_30,
        DATA_ACHIEVEMENT_NAME: "Month Master",
        DATA_ACHIEVEMENT_DESCRIPTION: "Maintain a 30-day streak",
        DATA_ACHIEVEMENT_METRIC: ACHIEVEMENT_METRIC_BEST_STREAK,
        DATA_ACHIEVEMENT_TARGET_VALUE: 30,
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_XP_1000,
        DATA_ACHIEVEMENT_NAME: "XP Collector",
        DATA_ACHIEVEMENT_DESCRIPTION: "Earn 1000 total XP",
        DATA_ACHIEVEMENT_METRIC: ACHIEVEMENT_METRIC_TOTAL_XP,
        DATA_ACHIEVEMENT_TARGET_VALUE: 1000,
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_PERFECT_WEEK,
        DATA_ACHIEVEMENT_NAME: "Perfect Week",
        DATA_ACHIEVEMENT_DESCRIPTION: "Complete all habits for 7 days",
        DATA_ACHIEVEMENT_METRIC: ACHIEVEMENT_METRIC_PERFECT_WEEK,
        DATA_ACHIEVEMENT_TARGET_VALUE: 1,
    },
    {
        DATA_ACHIEVEMENT_ID: ACHIEVEMENT_HABIT_MASTER,
        DATA_ACHIEVEMENT_NAME: "Habit Master",
        DATA_ACHIEVEMENT_DESCRIPTION: "Maintain 10 active habits",
        DATA_ACHIEVEMENT_METRIC: ACHIEVEMENT_METRIC_HABIT_COUNT,
        DATA_ACHIEVEMENT_TARGET_VALUE: 10,
    },
)

# ------------------------------------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------------------------------------
CONF_STORAGE_PATH = "storage_path"
CONF_DEFAULT_THEME = "default_theme"
CONF_LOG_LEVEL = "log_level"

ENV_CONFIG_PATH = "HABITQUEST_CONFIG"
ENV_LOG_LEVEL = "HABITQUEST_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_OPTIONS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
