"""Wiring of repositories and services for the configured local store.

Commands build everything through :func:`get_storage` so the database path is
resolved once, from configuration.
"""

from __future__ import annotations

from todorecur.adapters.sqlite import SqlitePatternRepository, SqliteTaskRepository
from todorecur.services.batch_runner import BatchRunner
from todorecur.services.config_service import get_config_service
from todorecur.services.instance_generator import InstanceGenerator
from todorecur.services.pattern_service import PatternService
from todorecur.services.task_service import TaskService
from todorecur.utils.clock import Clock, SystemClock


class LocalStorage:
    """Holds the SQLite repositories for one database file."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.task_repository = SqliteTaskRepository(db_path=db_path)
        self.pattern_repository = SqlitePatternRepository(db_path=db_path)

    def task_service(self) -> TaskService:
        return TaskService(self.task_repository)

    def pattern_service(self) -> PatternService:
        return PatternService(self.pattern_repository, self.task_repository)

    def instance_generator(self) -> InstanceGenerator:
        return InstanceGenerator(self.task_repository, self.pattern_repository)

    def batch_runner(self, clock: Clock, max_workers: int = 1) -> BatchRunner:
        return BatchRunner(
            self.pattern_repository,
            self.instance_generator(),
            clock,
            max_workers=max_workers,
        )


def get_storage() -> LocalStorage:
    """Build the storage for the configured database path."""
    return LocalStorage(get_config_service().database_path)


def get_clock() -> Clock:
    """System clock in the configured timezone."""
    return SystemClock(get_config_service().config.scheduler.timezone)
