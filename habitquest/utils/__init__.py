"""Pure utility modules for HabitQuest.

Nothing in this package imports from the engines, the store or the
coordinator.
"""

from . import dt_utils

__all__ = ["dt_utils"]
