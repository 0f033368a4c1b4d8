"""Tests for PatternService backed by the in-memory SQLite stores."""

from __future__ import annotations

from datetime import date

import pytest
import pytest_asyncio
from pydantic import ValidationError

from todorecur.exceptions import PatternExistsError, PatternNotFoundError, TaskNotFoundError
from todorecur.models import Frequency, TaskCreate, Weekday
from todorecur.services.pattern_service import PatternService


@pytest.fixture
def service(pattern_repo, task_repo) -> PatternService:
    return PatternService(pattern_repo, task_repo)


@pytest_asyncio.fixture
async def template(task_repo):
    return await task_repo.add(TaskCreate(description="Stand-up notes", user_id="u1"))


# ---------------------------------------------------------------------------
# create_pattern
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_pattern_copies_owner(service, template):
    pattern = await service.create_pattern(
        template.id,
        frequency="weekly",
        start_date=date(2025, 1, 6),
        days_of_week=["mon", "wed"],
    )

    assert pattern.id is not None
    assert pattern.user_id == "u1"
    assert pattern.frequency is Frequency.WEEKLY
    assert pattern.sorted_days() == [Weekday.MONDAY, Weekday.WEDNESDAY]
    assert pattern.generated_count == 0


@pytest.mark.asyncio
async def test_create_pattern_unknown_task(service):
    with pytest.raises(TaskNotFoundError):
        await service.create_pattern("missing", frequency="DAILY", start_date=date(2025, 1, 1))


@pytest.mark.asyncio
async def test_create_pattern_invalid_rule_stores_nothing(service, template, pattern_repo):
    with pytest.raises(ValidationError):
        await service.create_pattern(template.id, frequency="MONTHLY", start_date=date(2025, 1, 1))

    assert await pattern_repo.find_by_task_id(template.id) is None


@pytest.mark.asyncio
async def test_create_second_pattern_for_task_rejected(service, template):
    await service.create_pattern(template.id, frequency="DAILY", start_date=date(2025, 1, 1))

    with pytest.raises(PatternExistsError):
        await service.create_pattern(template.id, frequency="DAILY", start_date=date(2025, 1, 1))


# ---------------------------------------------------------------------------
# update_pattern
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_keeps_days_when_not_supplied(service, template):
    created = await service.create_pattern(
        template.id,
        frequency="WEEKLY",
        start_date=date(2025, 1, 6),
        days_of_week=["fri"],
        max_occurrences=4,
    )

    updated = await service.update_pattern(
        created.id, frequency="WEEKLY", interval_value=2
    )

    assert updated.interval_value == 2
    assert updated.sorted_days() == [Weekday.FRIDAY]
    # Cap is overwritten, not kept
    assert updated.max_occurrences is None


@pytest.mark.asyncio
async def test_update_preserves_progress(service, template, pattern_repo):
    created = await service.create_pattern(
        template.id, frequency="DAILY", start_date=date(2025, 1, 1)
    )
    await pattern_repo.save(created.advanced(date(2025, 1, 1)))

    updated = await service.update_pattern(
        created.id, frequency="MONTHLY", interval_value=1, day_of_month=15
    )

    assert updated.generated_count == 1
    assert updated.last_generated_date == date(2025, 1, 1)
    assert updated.day_of_month == 15


@pytest.mark.asyncio
async def test_update_invalid_rule_leaves_stored_pattern(service, template):
    created = await service.create_pattern(
        template.id, frequency="DAILY", start_date=date(2025, 1, 1)
    )

    with pytest.raises(ValidationError):
        await service.update_pattern(created.id, frequency="WEEKLY", interval_value=1)

    stored = await service.get_pattern(created.id)
    assert stored.frequency is Frequency.DAILY


@pytest.mark.asyncio
async def test_update_end_before_start_rejected(service, template):
    created = await service.create_pattern(
        template.id, frequency="DAILY", start_date=date(2025, 1, 10)
    )

    with pytest.raises(ValidationError):
        await service.update_pattern(
            created.id, frequency="DAILY", interval_value=1, end_date=date(2025, 1, 1)
        )


@pytest.mark.asyncio
async def test_update_unknown_pattern(service):
    with pytest.raises(PatternNotFoundError):
        await service.update_pattern("missing", frequency="DAILY", interval_value=1)


# ---------------------------------------------------------------------------
# delete / lookup
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_delete_and_lookup(service, template):
    created = await service.create_pattern(
        template.id, frequency="DAILY", start_date=date(2025, 1, 1)
    )

    assert (await service.get_by_task_id(template.id)).id == created.id
    assert await service.delete_pattern(created.id) is True
    assert await service.get_by_task_id(template.id) is None
    assert await service.delete_pattern(created.id) is False


@pytest.mark.asyncio
async def test_list_patterns_active_only(service, task_repo, pattern_repo):
    first = await task_repo.add(TaskCreate(description="A"))
    second = await task_repo.add(TaskCreate(description="B"))
    active = await service.create_pattern(first.id, frequency="DAILY", start_date=date(2025, 1, 1))
    done = await service.create_pattern(
        second.id, frequency="DAILY", start_date=date(2025, 1, 2), max_occurrences=1
    )
    await pattern_repo.save(done.advanced(date(2025, 1, 2)))

    all_ids = [p.id for p in await service.list_patterns()]
    active_ids = [p.id for p in await service.list_patterns(active_only=True)]

    assert all_ids == [active.id, done.id]
    assert active_ids == [active.id]
