"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state: the log
file, config.json and the SQLite database all land in ``tmp_path``.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from unittest.mock import patch

import pytest

from todorecur.adapters.sqlite.migrations import ALL_MIGRATIONS, migrate
from todorecur.adapters.sqlite.pattern_repository import SqlitePatternRepository
from todorecur.adapters.sqlite.task_repository import SqliteTaskRepository
from todorecur.models import RecurrencePattern

# ---------------------------------------------------------------------------
# Logger isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Point the application log file at tmp_path and reset the singleton."""
    import todorecur.utils.logger as logger_mod

    def _reset():
        root = logging.getLogger("todorecur")
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        logger_mod._logger = None

    _reset()
    with patch("todorecur.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    _reset()


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path, monkeypatch):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from todorecur.services.config_service import ConfigService, get_config_service

    monkeypatch.delenv("TODORECUR_DB", raising=False)
    get_config_service.cache_clear()
    with patch("todorecur.services.config_service.user_config_dir", return_value=str(tmp_path)):
        with patch("todorecur.services.config_service.user_data_dir", return_value=str(tmp_path)):
            yield ConfigService()
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# SQLite stores
# ---------------------------------------------------------------------------


@pytest.fixture()
def db():
    """In-memory database with every migration applied."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    migrate(conn, ALL_MIGRATIONS)
    yield conn
    conn.close()


@pytest.fixture()
def task_repo(db) -> SqliteTaskRepository:
    return SqliteTaskRepository(connection=db)


@pytest.fixture()
def pattern_repo(db) -> SqlitePatternRepository:
    return SqlitePatternRepository(connection=db)


# ---------------------------------------------------------------------------
# Pattern factory
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_pattern():
    """Build a RecurrencePattern with sensible defaults (daily from 2025-01-01)."""

    def _make(**overrides) -> RecurrencePattern:
        data = {
            "id": "pattern-1",
            "task_id": "task-1",
            "frequency": "DAILY",
            "interval_value": 1,
            "start_date": date(2025, 1, 1),
        }
        data.update(overrides)
        return RecurrencePattern(**data)

    return _make
