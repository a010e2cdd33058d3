"""Engine modules for HabitQuest.

Contains the pure computation engines:
- schedule_engine: Whether a habit is due on a date
- completion_engine: Per-habit completion ledger
- streak_engine: Backward streak walk
- economy_engine: XP, streak bonus and levels
- statistics_engine: Weekly and aggregate statistics
- gamification_engine: Achievement evaluation
"""

# Use relative imports within package to avoid mypy module resolution issues
from .completion_engine import CompletionLedger
from .economy_engine import EconomyEngine
from .gamification_engine import GamificationEngine
from .schedule_engine import ScheduleEngine
from .statistics_engine import StatisticsEngine
from .streak_engine import StreakEngine

__all__ = [
    "CompletionLedger",
    "EconomyEngine",
    "GamificationEngine",
    "ScheduleEngine",
    "StatisticsEngine",
    "StreakEngine",
]
