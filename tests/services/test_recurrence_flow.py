"""End-to-end generation passes over the SQLite stores."""

from __future__ import annotations

from datetime import date, datetime

import pytest
import pytest_asyncio

from todorecur.models import TaskCreate, TaskFilters
from todorecur.services import BatchRunner, InstanceGenerator, PatternService
from todorecur.utils.clock import FixedClock


@pytest_asyncio.fixture
async def template(task_repo):
    return await task_repo.add(
        TaskCreate(description="Team standup", priority="HIGH", category="work")
    )


@pytest.fixture
def pattern_service(pattern_repo, task_repo):
    return PatternService(pattern_repo, task_repo)


def _runner(task_repo, pattern_repo, day: date, max_workers: int = 1) -> BatchRunner:
    generator = InstanceGenerator(task_repo, pattern_repo)
    return BatchRunner(pattern_repo, generator, FixedClock(day), max_workers=max_workers)


async def _instances(task_repo, template_id: str):
    tasks = await task_repo.list_all(TaskFilters(status="all"))
    return [t for t in tasks if t.id != template_id]


@pytest.mark.asyncio
async def test_one_instance_per_pass_until_caught_up(
    task_repo, pattern_repo, pattern_service, template
):
    await pattern_service.create_pattern(
        template.id,
        frequency="WEEKLY",
        start_date=date(2025, 1, 6),
        days_of_week=["MON", "WED", "FRI"],
    )
    runner = _runner(task_repo, pattern_repo, date(2025, 1, 10))

    counts = [await runner.process_pending_recurrences() for _ in range(4)]

    assert counts == [1, 1, 1, 0]
    instances = await _instances(task_repo, template.id)
    assert [t.due_date for t in instances] == [
        datetime(2025, 1, 6),
        datetime(2025, 1, 8),
        datetime(2025, 1, 10),
    ]
    assert all(t.description == "Team standup" for t in instances)
    assert all(t.category == "work" and not t.is_completed for t in instances)


@pytest.mark.asyncio
async def test_pattern_stops_at_cap(task_repo, pattern_repo, pattern_service, template):
    pattern = await pattern_service.create_pattern(
        template.id, frequency="DAILY", start_date=date(2025, 1, 1), max_occurrences=2
    )
    runner = _runner(task_repo, pattern_repo, date(2025, 1, 31))

    for _ in range(5):
        await runner.run()

    stored = await pattern_repo.get(pattern.id)
    assert stored.generated_count == 2
    assert stored.is_completed()
    assert len(await _instances(task_repo, template.id)) == 2


@pytest.mark.asyncio
async def test_monthly_series_respects_end_date(
    task_repo, pattern_repo, pattern_service, template
):
    await pattern_service.create_pattern(
        template.id,
        frequency="MONTHLY",
        start_date=date(2025, 1, 31),
        end_date=date(2025, 4, 15),
        day_of_month=31,
    )
    runner = _runner(task_repo, pattern_repo, date(2025, 12, 31))

    reports = [await runner.run() for _ in range(4)]

    assert [r.generated for r in reports] == [1, 1, 0, 0]
    instances = await _instances(task_repo, template.id)
    assert [t.due_date.date() for t in instances] == [date(2025, 2, 28), date(2025, 3, 31)]


@pytest.mark.asyncio
async def test_concurrent_workers_process_every_pattern(task_repo, pattern_repo, pattern_service):
    for name in ("Water plants", "Check mail", "Backup"):
        task = await task_repo.add(TaskCreate(description=name))
        await pattern_service.create_pattern(
            task.id, frequency="DAILY", start_date=date(2025, 1, 1)
        )

    report = await _runner(task_repo, pattern_repo, date(2025, 1, 1), max_workers=3).run()

    assert report.pending == 3
    assert report.generated == 3
    assert report.failed == 0


@pytest.mark.asyncio
async def test_pattern_beyond_calendar_range_does_not_block_pass(
    task_repo, pattern_repo, pattern_service, template
):
    await pattern_service.create_pattern(
        template.id, frequency="DAILY", start_date=date(2025, 1, 1)
    )
    other = await task_repo.add(TaskCreate(description="Renew passport"))
    await pattern_service.create_pattern(
        other.id, frequency="DAILY", start_date=date(2025, 1, 1), interval_value=10**7
    )
    runner = _runner(task_repo, pattern_repo, date(2025, 1, 10))

    assert await runner.process_pending_recurrences() == 1
    instances = [t for t in await _instances(task_repo, template.id) if t.id != other.id]
    assert [t.description for t in instances] == ["Team standup"]
