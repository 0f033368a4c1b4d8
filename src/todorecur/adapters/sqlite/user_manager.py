"""Local user profile management for the SQLite store.

Tasks require an owner; when none is given the single local user is used,
created on first access with the system timezone.
"""

from __future__ import annotations

import sqlite3
import uuid
from datetime import UTC, datetime

import tzlocal


def get_system_timezone() -> str:
    """Detect system timezone (e.g. "America/New_York")."""
    tz = tzlocal.get_localzone()
    return str(tz.key) if hasattr(tz, "key") else str(tz)


def create_default_user(
    connection: sqlite3.Connection, timezone: str | None = None
) -> str:
    """Create default local user profile.

    Args:
        connection: Database connection
        timezone: Optional timezone string. If None, auto-detects system timezone.

    Returns:
        User ID (UUID string)
    """
    user_id = str(uuid.uuid4())

    if timezone is None:
        timezone = get_system_timezone()

    now = datetime.now(UTC).isoformat()

    connection.execute(
        """
        INSERT INTO users (id, email, name, timezone, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        (user_id, "local@todorecur.local", "Local User", timezone, now, now),
    )
    connection.commit()

    return user_id


def ensure_user(connection: sqlite3.Connection, user_id: str) -> str:
    """Make sure a user row exists for ``user_id`` (tasks reference it)."""
    cursor = connection.execute("SELECT id FROM users WHERE id = ?", (user_id,))
    if cursor.fetchone() is None:
        now = datetime.now(UTC).isoformat()
        connection.execute(
            """
            INSERT INTO users (id, email, name, timezone, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (user_id, f"{user_id}@todorecur.local", None, "UTC", now, now),
        )
    return user_id


def get_or_create_local_user(connection: sqlite3.Connection) -> str:
    """Get existing local user or create one if it doesn't exist."""
    cursor = connection.execute("SELECT id FROM users ORDER BY created_at LIMIT 1")
    row = cursor.fetchone()

    if row:
        return row[0]

    return create_default_user(connection)
