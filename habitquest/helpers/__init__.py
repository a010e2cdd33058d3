"""Helper modules for HabitQuest (import/export)."""
