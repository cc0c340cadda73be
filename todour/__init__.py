"""Manage todo.txt task lists: thresholds, due dates, recurrence and undo."""

__version__ = "2.24.0"