"""Pattern service - Business logic for managing recurrence patterns.

This service layer sits between commands and repositories. Every create and
update goes through the RecurrencePattern model, so invalid rules are rejected
with a pydantic ValidationError before anything is stored.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

from todorecur.exceptions import PatternExistsError
from todorecur.models import Frequency, RecurrencePattern, RecurrencePatternFilters
from todorecur.repositories import RecurrencePatternRepository, TaskRepository
from todorecur.utils.logger import get_logger


class PatternService:
    """Service for recurrence pattern business logic."""

    def __init__(
        self,
        pattern_repository: RecurrencePatternRepository,
        task_repository: TaskRepository,
    ):
        """Initialize the pattern service.

        Args:
            pattern_repository: RecurrencePatternRepository implementation
            task_repository: TaskRepository used to resolve template tasks
        """
        self.repository = pattern_repository
        self.task_repository = task_repository
        self.logger = get_logger("pattern_service")

    async def create_pattern(
        self,
        task_id: str,
        *,
        frequency: Frequency | str,
        start_date: date,
        interval_value: int = 1,
        end_date: date | None = None,
        days_of_week: Iterable[Any] | None = None,
        day_of_month: int | None = None,
        max_occurrences: int | None = None,
    ) -> RecurrencePattern:
        """Attach a new recurrence rule to a template task.

        Args:
            task_id: Template task to repeat
            frequency: DAILY, WEEKLY or MONTHLY
            start_date: First day of the series
            interval_value: Repeat every N days/weeks/months
            end_date: Optional last day of the series
            days_of_week: Weekdays for WEEKLY rules
            day_of_month: Day (1-31) for MONTHLY rules
            max_occurrences: Optional cap on generated instances

        Returns:
            The stored pattern

        Raises:
            TaskNotFoundError: If the template task does not exist
            PatternExistsError: If the task already has a pattern
            pydantic.ValidationError: If the rule is invalid
        """
        template = await self.task_repository.find_template_task(task_id)

        if await self.repository.find_by_task_id(task_id) is not None:
            raise PatternExistsError(task_id)

        pattern = RecurrencePattern(
            task_id=task_id,
            user_id=template.user_id,
            frequency=frequency,
            interval_value=interval_value,
            start_date=start_date,
            end_date=end_date,
            days_of_week=days_of_week,
            day_of_month=day_of_month,
            max_occurrences=max_occurrences,
        )
        saved = await self.repository.save(pattern)
        self.logger.info("Created recurrence pattern %s for task %s", saved.id, task_id)
        return saved

    async def update_pattern(
        self,
        pattern_id: str,
        *,
        frequency: Frequency | str,
        interval_value: int,
        end_date: date | None = None,
        days_of_week: Iterable[Any] | None = None,
        day_of_month: int | None = None,
        max_occurrences: int | None = None,
    ) -> RecurrencePattern:
        """Replace the rule of an existing pattern.

        ``end_date`` and ``max_occurrences`` are always overwritten (None
        clears them). ``days_of_week`` and ``day_of_month`` keep their stored
        values when not supplied. Generation progress is preserved.

        Raises:
            PatternNotFoundError: If the pattern does not exist
            pydantic.ValidationError: If the edited rule is invalid
        """
        pattern = await self.repository.get(pattern_id)

        changes: dict[str, Any] = {
            "frequency": frequency,
            "interval_value": interval_value,
            "end_date": end_date,
            "max_occurrences": max_occurrences,
        }
        if days_of_week is not None:
            changes["days_of_week"] = days_of_week
        if day_of_month is not None:
            changes["day_of_month"] = day_of_month

        saved = await self.repository.save(pattern.with_changes(**changes))
        self.logger.info("Updated recurrence pattern %s", pattern_id)
        return saved

    async def delete_pattern(self, pattern_id: str) -> bool:
        """Delete a pattern. Task instances it already generated are kept."""
        deleted = await self.repository.delete_by_id(pattern_id)
        if deleted:
            self.logger.info("Deleted recurrence pattern %s", pattern_id)
        return deleted

    async def get_pattern(self, pattern_id: str) -> RecurrencePattern:
        return await self.repository.get(pattern_id)

    async def get_by_task_id(self, task_id: str) -> RecurrencePattern | None:
        """Get the pattern attached to a task, or None."""
        return await self.repository.find_by_task_id(task_id)

    async def list_patterns(
        self, *, active_only: bool = False, user_id: str | None = None
    ) -> list[RecurrencePattern]:
        filters = RecurrencePatternFilters(active_only=active_only, user_id=user_id)
        return await self.repository.list_all(filters)
