"""Connection to the local SQLite store.

One connection per process, opened on first use for the configured path with
WAL journaling and foreign keys on, and migrated to the current schema.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
import time
from pathlib import Path

from platformdirs import user_data_dir

from todorecur.adapters.sqlite.migrations import ALL_MIGRATIONS, migrate

DEFAULT_DB_NAME = "todorecur.db"

# Attempts for a write that hits "database is locked", and the first backoff
LOCKED_ATTEMPTS = 3
LOCKED_BACKOFF = 0.1


def default_db_path() -> Path:
    """Database location used when no path is configured."""
    return Path(user_data_dir("todorecur")) / DEFAULT_DB_NAME


def open_database(db_path: Path) -> sqlite3.Connection:
    """Open ``db_path`` and bring its schema up to date.

    A new file is created readable by its owner only.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    is_new_database = not db_path.exists()

    connection = sqlite3.connect(str(db_path), check_same_thread=False, timeout=30.0)
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    connection.execute("PRAGMA journal_mode = WAL")

    if is_new_database:
        os.chmod(db_path, 0o600)

    migrate(connection, ALL_MIGRATIONS)
    return connection


class DatabaseConnection:
    """Process-wide holder of the open store connection.

    Asking for a different path closes the current connection first.
    """

    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None
    _close_registered = False

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        path = default_db_path() if db_path is None else Path(db_path)
        if cls._connection is not None and cls._db_path == path:
            return cls._connection

        cls.close_connection()
        cls._connection = open_database(path)
        cls._db_path = path

        if not cls._close_registered:
            atexit.register(cls.close_connection)
            cls._close_registered = True
        return cls._connection

    @classmethod
    def close_connection(cls) -> None:
        """Flush and close the connection, if one is open."""
        connection, cls._connection, cls._db_path = cls._connection, None, None
        if connection is None:
            return
        try:
            connection.commit()
        finally:
            connection.close()

    @staticmethod
    def execute_with_retry(
        connection: sqlite3.Connection,
        sql: str,
        params: tuple | dict = (),
    ) -> sqlite3.Cursor:
        """Execute a write, backing off while another writer holds the lock.

        Raises:
            sqlite3.OperationalError: On any other error, or when the database
                is still locked after the last attempt
        """
        delay = LOCKED_BACKOFF
        for _ in range(LOCKED_ATTEMPTS - 1):
            try:
                return connection.execute(sql, params)
            except sqlite3.OperationalError as e:
                if "database is locked" not in str(e):
                    raise
            time.sleep(delay)
            delay *= 2
        return connection.execute(sql, params)


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)
