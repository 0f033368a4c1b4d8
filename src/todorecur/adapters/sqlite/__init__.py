"""SQLite adapters for the task and recurrence pattern stores."""

from todorecur.adapters.sqlite.pattern_repository import SqlitePatternRepository
from todorecur.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = ["SqlitePatternRepository", "SqliteTaskRepository"]
