"""Instance generator - produces the next task instance of a recurrence pattern."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from todorecur.models import RecurrencePattern
from todorecur.repositories import RecurrencePatternRepository, TaskRepository
from todorecur.utils.logger import get_logger
from todorecur.utils.recurrence import next_occurrence


@dataclass(frozen=True)
class PlannedInstance:
    """Occurrence to materialize and the pattern state after materializing it."""

    occurrence: date
    pattern: RecurrencePattern


class InstanceGenerator:
    """Materializes one task instance per call for a recurrence pattern.

    The generator holds no state of its own; the pattern's progress lives in
    the pattern store.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        pattern_repository: RecurrencePatternRepository,
    ):
        """Initialize the generator.

        Args:
            task_repository: Store that creates task instances
            pattern_repository: Store that persists the advanced pattern
        """
        self.task_repository = task_repository
        self.pattern_repository = pattern_repository
        self.logger = get_logger("instance_generator")

    def plan_next_instance(self, pattern: RecurrencePattern) -> PlannedInstance | None:
        """Decide the next occurrence without touching any store.

        Returns:
            The planned instance, or None if the pattern is completed or the
            next occurrence lies beyond its end date
        """
        if pattern.is_completed():
            self.logger.debug("Pattern %s is completed", pattern.id)
            return None

        occurrence = next_occurrence(pattern)

        if pattern.end_date is not None and occurrence > pattern.end_date:
            self.logger.debug(
                "Pattern %s: next occurrence %s is after end date %s",
                pattern.id,
                occurrence,
                pattern.end_date,
            )
            return None

        return PlannedInstance(occurrence=occurrence, pattern=pattern.advanced(occurrence))

    async def generate_next_instance(self, pattern: RecurrencePattern) -> date | None:
        """Create the next task instance and persist the advanced pattern.

        Store errors propagate. If the task write fails the pattern is not
        advanced; if the pattern write fails the created task remains.

        Returns:
            The occurrence date of the created instance, or None if nothing
            was generated
        """
        planned = self.plan_next_instance(pattern)
        if planned is None:
            return None

        task_id = await self.task_repository.create_task_instance(
            pattern.task_id, planned.occurrence
        )
        await self.pattern_repository.save(planned.pattern)

        cap = planned.pattern.max_occurrences
        self.logger.info(
            "Generated task %s for pattern %s on %s (count: %d/%s)",
            task_id,
            pattern.id,
            planned.occurrence,
            planned.pattern.generated_count,
            cap if cap is not None else "unlimited",
        )
        return planned.occurrence
