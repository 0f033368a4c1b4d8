"""Repository abstraction layer for todorecur.

This module defines the abstract base classes (interfaces) the recurrence
engine talks to, following the hexagonal architecture (Ports & Adapters)
pattern. The engine only needs to create task instances, read template tasks,
and load/save recurrence patterns; concrete storage lives in
``todorecur.adapters``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from todorecur.models import (
    RecurrencePattern,
    RecurrencePatternFilters,
    Task,
    TaskCreate,
    TaskFilters,
    TaskSnapshot,
)


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def create_task_instance(self, template_task_id: str, due_date: date) -> str:
        """Insert an incomplete copy of a template task.

        Description, priority, category and user are copied from the template.

        Args:
            template_task_id: Task whose attributes are copied
            due_date: Occurrence date; stored as the start of that day

        Returns:
            ID of the new task

        Raises:
            TaskNotFoundError: If the template task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.create_task_instance() must be implemented by adapter"
        )

    @abstractmethod
    async def find_template_task(self, template_task_id: str) -> TaskSnapshot:
        """Read the attributes a template task contributes to its instances.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.find_template_task() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Args:
            task_data: TaskCreate object with task details

        Returns:
            Created Task object with generated ID and timestamps
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks with optional filtering."""
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )


class RecurrencePatternRepository(ABC):
    """Abstract base class for recurrence pattern persistence.

    Implementations are responsible for per-pattern mutual exclusion between
    reading a pending pattern and saving its advanced state.
    """

    @abstractmethod
    async def find_pending_patterns(self, as_of: date) -> list[RecurrencePattern]:
        """Return patterns with an instance due on or before ``as_of``.

        A pattern is pending when it is not completed, has started, and its
        next occurrence is on or before both ``as_of`` and its end date (if
        any). Each pattern appears at most once.
        """
        raise NotImplementedError(
            "RecurrencePatternRepository.find_pending_patterns() must be implemented by adapter"
        )

    @abstractmethod
    async def save(self, pattern: RecurrencePattern) -> RecurrencePattern:
        """Insert a new pattern (``id`` is None) or overwrite an existing one.

        Returns:
            The stored pattern, with ``id`` and timestamps set
        """
        raise NotImplementedError(
            "RecurrencePatternRepository.save() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_by_id(self, pattern_id: str) -> bool:
        """Delete a pattern. Tasks it already generated are left alone.

        Returns:
            True if a pattern was deleted
        """
        raise NotImplementedError(
            "RecurrencePatternRepository.delete_by_id() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, pattern_id: str) -> RecurrencePattern:
        """Get a pattern by ID.

        Raises:
            PatternNotFoundError: If the pattern does not exist
        """
        raise NotImplementedError(
            "RecurrencePatternRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_task_id(self, task_id: str) -> RecurrencePattern | None:
        """Get the pattern attached to a template task, if any."""
        raise NotImplementedError(
            "RecurrencePatternRepository.find_by_task_id() must be implemented by adapter"
        )

    @abstractmethod
    async def list_all(
        self, filters: RecurrencePatternFilters
    ) -> list[RecurrencePattern]:
        """List patterns with optional filtering."""
        raise NotImplementedError(
            "RecurrencePatternRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_by_task_id(self, task_id: str) -> bool:
        """Delete the pattern attached to a template task, if any."""
        raise NotImplementedError(
            "RecurrencePatternRepository.delete_by_task_id() must be implemented by adapter"
        )
