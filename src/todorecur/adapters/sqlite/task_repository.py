"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from datetime import date, datetime
from typing import Any

from todorecur.adapters.sqlite.connection import DatabaseConnection, get_connection
from todorecur.adapters.sqlite.user_manager import ensure_user, get_or_create_local_user
from todorecur.adapters.sqlite.utils import generate_uuid, now_iso, row_to_dict
from todorecur.exceptions import TaskNotFoundError
from todorecur.models import Task, TaskCreate, TaskFilters, TaskSnapshot
from todorecur.repositories import TaskRepository


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Optional already-open connection (takes precedence over db_path).
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = connection
        self._user_id: str | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _get_user_id(self) -> str:
        """Get the local user ID, creating the profile on first use."""
        if self._user_id is None:
            self._user_id = get_or_create_local_user(self.connection)
        return self._user_id

    def _fetch_row(self, task_id: str) -> dict[str, Any]:
        cursor = self.connection.execute(
            "SELECT * FROM tasks WHERE id = ?", (task_id,)
        )
        row = cursor.fetchone()
        if not row:
            raise TaskNotFoundError(task_id)
        return row_to_dict(row)

    def _insert(self, task_data: TaskCreate) -> str:
        task_id = generate_uuid()
        now = now_iso()

        if task_data.user_id is not None:
            user_id = ensure_user(self.connection, task_data.user_id)
        else:
            user_id = self._get_user_id()

        DatabaseConnection.execute_with_retry(
            self.connection,
            """INSERT INTO tasks (
                id, description, priority, category, user_id, is_completed,
                due_date, created_at, updated_at, completed_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                task_id,
                task_data.description,
                task_data.priority.value,
                task_data.category,
                user_id,
                task_data.is_completed,
                task_data.due_date.isoformat() if task_data.due_date else None,
                now,
                now,
                now if task_data.is_completed else None,
            ),
        )
        self.connection.commit()
        return task_id

    async def create_task_instance(self, template_task_id: str, due_date: date) -> str:
        """Insert an incomplete copy of the template due at the start of ``due_date``."""
        template = await self.find_template_task(template_task_id)
        return self._insert(template.to_instance(due_date))

    async def find_template_task(self, template_task_id: str) -> TaskSnapshot:
        """Read description, priority, category and owner of a template task."""
        task_dict = self._fetch_row(template_task_id)
        return TaskSnapshot(
            description=task_dict["description"],
            priority=task_dict["priority"],
            category=task_dict["category"],
            user_id=task_dict["user_id"],
        )

    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task."""
        task_id = self._insert(task_data)
        return await self.get(task_id)

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        return Task(**self._task_fields(self._fetch_row(task_id)))

    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List all tasks with filtering."""
        query = "SELECT t.* FROM tasks t WHERE 1 = 1"
        params: list[Any] = []

        if filters.user_id:
            query += " AND t.user_id = ?"
            params.append(filters.user_id)

        if filters.status == "active":
            query += " AND t.is_completed = 0"
        elif filters.status == "completed":
            query += " AND t.is_completed = 1"
        # "all" means no filter on is_completed

        if filters.due_before:
            query += " AND t.due_date <= ?"
            params.append(
                filters.due_before.isoformat()
                if isinstance(filters.due_before, datetime)
                else filters.due_before
            )

        query += " ORDER BY t.due_date IS NULL, t.due_date ASC, t.created_at ASC"

        if filters.limit is not None:
            query += " LIMIT ?"
            params.append(filters.limit)

        cursor = self.connection.execute(query, params)
        return [Task(**self._task_fields(row_to_dict(row))) for row in cursor.fetchall()]

    @staticmethod
    def _task_fields(task_dict: dict[str, Any]) -> dict[str, Any]:
        """Convert SQLite column values to Task field types."""
        task_dict["is_completed"] = bool(task_dict.get("is_completed"))
        return task_dict
