"""Utility functions for SQLite adapter."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime
from typing import Any


def generate_uuid() -> str:
    """Generate a new UUID as string."""
    return str(uuid.uuid4())


def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(UTC).isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary.

    Args:
        row: sqlite3.Row object

    Returns:
        Dictionary with column names as keys
    """
    if row is None:
        return {}
    return dict(row)


def date_to_iso(value: date | datetime | None) -> str | None:
    """Serialize a date or datetime for storage, keeping None as NULL."""
    if value is None:
        return None
    return value.isoformat()
