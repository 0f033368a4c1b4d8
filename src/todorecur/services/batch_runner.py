"""Batch runner - one generation pass over every pending recurrence pattern."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date

from todorecur.models import RecurrencePattern
from todorecur.repositories import RecurrencePatternRepository
from todorecur.services.instance_generator import InstanceGenerator
from todorecur.utils.clock import Clock
from todorecur.utils.logger import get_logger


@dataclass(frozen=True)
class PatternFailure:
    """A pattern whose generation raised during a pass."""

    pattern_id: str | None
    error: str


@dataclass
class BatchReport:
    """Outcome of one pass.

    Attributes:
        as_of: Date the pass ran for
        pending: Number of distinct patterns the store reported as pending
        generated: Patterns that produced an instance
        skipped: Patterns that produced nothing (completed or past end date)
        failures: Patterns whose generation raised
    """

    as_of: date
    pending: int = 0
    generated: int = 0
    skipped: int = 0
    failures: list[PatternFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def to_dict(self) -> dict:
        return {
            "as_of": self.as_of.isoformat(),
            "pending": self.pending,
            "generated": self.generated,
            "skipped": self.skipped,
            "failed": self.failed,
            "failures": [
                {"pattern_id": f.pattern_id, "error": f.error} for f in self.failures
            ],
        }


class BatchRunner:
    """Runs the instance generator over every pattern due on the clock's date.

    One pattern failing never stops the pass; the failure is logged and
    recorded in the report.
    """

    def __init__(
        self,
        pattern_repository: RecurrencePatternRepository,
        generator: InstanceGenerator,
        clock: Clock,
        max_workers: int = 1,
    ):
        """Initialize the runner.

        Args:
            pattern_repository: Store answering the pending query
            generator: Generator invoked once per pending pattern
            clock: Source of "today"
            max_workers: Patterns processed concurrently (1 = sequential)
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.pattern_repository = pattern_repository
        self.generator = generator
        self.clock = clock
        self.max_workers = max_workers
        self.logger = get_logger("batch_runner")

    async def run(self) -> BatchReport:
        """Run one pass and return its full report."""
        today = self.clock.today()
        report = BatchReport(as_of=today)

        patterns = _unique_by_id(await self.pattern_repository.find_pending_patterns(today))
        report.pending = len(patterns)

        if not patterns:
            self.logger.debug("No pending recurrence patterns for %s", today)
            return report

        self.logger.info("Processing %d pending recurrence patterns for %s", len(patterns), today)

        semaphore = asyncio.Semaphore(self.max_workers)

        async def process(pattern: RecurrencePattern) -> None:
            async with semaphore:
                try:
                    occurrence = await self.generator.generate_next_instance(pattern)
                except Exception as e:
                    self.logger.exception("Error processing recurrence pattern %s", pattern.id)
                    report.failures.append(PatternFailure(pattern_id=pattern.id, error=str(e)))
                    return
                if occurrence is None:
                    report.skipped += 1
                else:
                    report.generated += 1

        await asyncio.gather(*(process(pattern) for pattern in patterns))

        self.logger.info(
            "Recurrence pass for %s: %d generated, %d skipped, %d failed",
            today,
            report.generated,
            report.skipped,
            report.failed,
        )
        return report

    async def process_pending_recurrences(self) -> int:
        """Run one pass.

        Returns:
            Number of patterns that produced an instance
        """
        report = await self.run()
        return report.generated


def _unique_by_id(patterns: list[RecurrencePattern]) -> list[RecurrencePattern]:
    """Drop repeated patterns, keeping store order."""
    seen: set[str] = set()
    unique: list[RecurrencePattern] = []
    for pattern in patterns:
        if pattern.id is not None:
            if pattern.id in seen:
                continue
            seen.add(pattern.id)
        unique.append(pattern)
    return unique
