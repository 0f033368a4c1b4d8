"""Task service - Business logic for template task operations.

This service layer sits between commands and repositories, providing
a clean API for the task operations the CLI needs.
"""

from __future__ import annotations

from datetime import datetime

from todorecur.models import Priority, Task, TaskCreate, TaskFilters
from todorecur.repositories import TaskRepository


class TaskService:
    """Service for task business logic."""

    def __init__(self, task_repository: TaskRepository):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def list_tasks(
        self,
        *,
        status: str | None = None,
        due_before: datetime | None = None,
        limit: int | None = None,
    ) -> list[Task]:
        """List tasks with filtering.

        Args:
            status: Filter by status ("active", "completed", "all")
            due_before: Only tasks due on or before this moment
            limit: Maximum number of results
        """
        filters = TaskFilters(status=status, due_before=due_before, limit=limit)
        return await self.repository.list_all(filters)

    async def get_task(self, task_id: str) -> Task:
        return await self.repository.get(task_id)

    async def add_task(
        self,
        description: str,
        *,
        priority: Priority | str = Priority.MEDIUM,
        category: str | None = None,
        due_date: datetime | None = None,
    ) -> Task:
        """Create a new task.

        Raises:
            pydantic.ValidationError: If the description is blank
        """
        task_data = TaskCreate(
            description=description,
            priority=priority,
            category=category,
            due_date=due_date,
        )
        return await self.repository.add(task_data)
