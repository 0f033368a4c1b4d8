"""SQLite implementation of RecurrencePatternRepository."""

from __future__ import annotations

import sqlite3
from datetime import date
from typing import Any

from todorecur.adapters.sqlite.connection import DatabaseConnection, get_connection
from todorecur.adapters.sqlite.utils import (
    date_to_iso,
    generate_uuid,
    now_iso,
    row_to_dict,
)
from todorecur.exceptions import PatternNotFoundError
from todorecur.models import RecurrencePattern, RecurrencePatternFilters
from todorecur.repositories import RecurrencePatternRepository
from todorecur.utils.logger import get_logger
from todorecur.utils.recurrence import next_occurrence

# Coarse pre-filter; the exact next-occurrence check happens in Python
_PENDING_QUERY = """
    SELECT * FROM recurrence_patterns
    WHERE start_date <= ?
      AND (max_occurrences IS NULL OR generated_count < max_occurrences)
      AND (end_date IS NULL OR last_generated_date IS NULL OR last_generated_date < end_date)
    ORDER BY start_date ASC, id ASC
"""


def serialize_days(pattern: RecurrencePattern) -> str | None:
    """Store weekdays as a comma-separated list of names, Monday first."""
    if not pattern.days_of_week:
        return None
    return ",".join(day.value for day in pattern.sorted_days())


class SqlitePatternRepository(RecurrencePatternRepository):
    """SQLite implementation of recurrence pattern repository.

    All writes go through one connection, so saves of the same pattern from
    overlapping passes are serialised by SQLite's write lock.
    """

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = connection
        self.logger = get_logger("pattern_repository")

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    @staticmethod
    def _row_to_pattern(row: Any) -> RecurrencePattern:
        return RecurrencePattern.model_validate(row_to_dict(row))

    async def find_pending_patterns(self, as_of: date) -> list[RecurrencePattern]:
        """Return patterns whose next occurrence falls on or before ``as_of``."""
        cursor = self.connection.execute(_PENDING_QUERY, (as_of.isoformat(),))

        pending: list[RecurrencePattern] = []
        seen: set[str] = set()
        for row in cursor.fetchall():
            pattern = self._row_to_pattern(row)
            if pattern.id in seen or pattern.is_completed():
                continue
            try:
                occurrence = next_occurrence(pattern)
            except (OverflowError, ValueError):
                self.logger.warning(
                    "Skipping recurrence pattern %s: next occurrence is out of date range",
                    pattern.id,
                )
                continue
            if occurrence > as_of:
                continue
            if pattern.end_date is not None and occurrence > pattern.end_date:
                continue
            seen.add(pattern.id)
            pending.append(pattern)
        return pending

    async def save(self, pattern: RecurrencePattern) -> RecurrencePattern:
        """Insert a new pattern or overwrite the stored one with the same id."""
        now = now_iso()
        values = (
            pattern.task_id,
            pattern.user_id,
            pattern.frequency.value,
            pattern.interval_value,
            date_to_iso(pattern.start_date),
            date_to_iso(pattern.end_date),
            serialize_days(pattern),
            pattern.day_of_month,
            pattern.max_occurrences,
            pattern.generated_count,
            date_to_iso(pattern.last_generated_date),
        )

        if pattern.id is None:
            pattern_id = generate_uuid()
            DatabaseConnection.execute_with_retry(
                self.connection,
                """INSERT INTO recurrence_patterns (
                    task_id, user_id, frequency, interval_value, start_date,
                    end_date, days_of_week, day_of_month, max_occurrences,
                    generated_count, last_generated_date,
                    id, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (*values, pattern_id, now, now),
            )
        else:
            pattern_id = pattern.id
            cursor = DatabaseConnection.execute_with_retry(
                self.connection,
                """UPDATE recurrence_patterns SET
                    task_id = ?, user_id = ?, frequency = ?, interval_value = ?,
                    start_date = ?, end_date = ?, days_of_week = ?,
                    day_of_month = ?, max_occurrences = ?, generated_count = ?,
                    last_generated_date = ?, updated_at = ?
                WHERE id = ?""",
                (*values, now, pattern_id),
            )
            if cursor.rowcount == 0:
                self.connection.rollback()
                raise PatternNotFoundError(pattern_id)

        self.connection.commit()
        return await self.get(pattern_id)

    async def delete_by_id(self, pattern_id: str) -> bool:
        """Delete a pattern; generated task instances are left alone."""
        cursor = self.connection.execute(
            "DELETE FROM recurrence_patterns WHERE id = ?", (pattern_id,)
        )
        self.connection.commit()
        return cursor.rowcount > 0

    async def get(self, pattern_id: str) -> RecurrencePattern:
        """Get a pattern by ID."""
        cursor = self.connection.execute(
            "SELECT * FROM recurrence_patterns WHERE id = ?", (pattern_id,)
        )
        row = cursor.fetchone()
        if not row:
            raise PatternNotFoundError(pattern_id)
        return self._row_to_pattern(row)

    async def find_by_task_id(self, task_id: str) -> RecurrencePattern | None:
        cursor = self.connection.execute(
            "SELECT * FROM recurrence_patterns WHERE task_id = ?", (task_id,)
        )
        row = cursor.fetchone()
        return self._row_to_pattern(row) if row else None

    async def list_all(
        self, filters: RecurrencePatternFilters
    ) -> list[RecurrencePattern]:
        """List patterns ordered by start date."""
        query = "SELECT * FROM recurrence_patterns WHERE 1 = 1"
        params: list[Any] = []

        if filters.user_id:
            query += " AND user_id = ?"
            params.append(filters.user_id)

        if filters.task_id:
            query += " AND task_id = ?"
            params.append(filters.task_id)

        query += " ORDER BY start_date ASC, id ASC"

        cursor = self.connection.execute(query, params)
        patterns = [self._row_to_pattern(row) for row in cursor.fetchall()]
        if filters.active_only:
            patterns = [p for p in patterns if not p.is_completed()]
        return patterns

    async def delete_by_task_id(self, task_id: str) -> bool:
        cursor = self.connection.execute(
            "DELETE FROM recurrence_patterns WHERE task_id = ?", (task_id,)
        )
        self.connection.commit()
        return cursor.rowcount > 0
