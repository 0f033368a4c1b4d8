"""Calendar arithmetic for recurrence patterns.

Every function here is pure: it takes a base date and rule parameters and
returns the next occurrence date. Edge cases such as short months are resolved
by policy, never by raising.
"""

from __future__ import annotations

import calendar
from collections.abc import Callable, Iterable
from datetime import date, timedelta
from typing import Any

from dateutil.relativedelta import relativedelta

from todorecur.models import Frequency, RecurrencePattern, Weekday

# Multiplier applied to the interval to bound the weekly day-by-day scan.
WEEKLY_SCAN_FACTOR = 4

_UNITS: dict[Frequency, str] = {
    Frequency.DAILY: "day",
    Frequency.WEEKLY: "week",
    Frequency.MONTHLY: "month",
}


def next_daily(base: date, interval: int) -> date:
    """Return ``base`` plus ``interval`` days."""
    return base + timedelta(days=interval)


def next_weekly(base: date, interval: int, days_of_week: Iterable[Any]) -> date:
    """Return the next weekly occurrence after ``base``.

    With ``interval == 1`` this is simply the first matching weekday after
    ``base``. With larger intervals a matching day is taken if it is the day
    right after ``base`` or lies at least ``interval`` whole weeks after it;
    once the scan passes ``WEEKLY_SCAN_FACTOR * interval`` days it resyncs to
    ``base + interval weeks`` and takes the first matching day on/after that.
    Mid-series, not every matching weekday of the target week is produced.

    Args:
        base: Date the series last produced (or the day before it starts)
        interval: Number of weeks between occurrences
        days_of_week: Weekdays (members, names or 0-6 indices) to match

    Returns:
        The next occurrence date

    Raises:
        ValueError: If ``days_of_week`` is empty
    """
    wanted = {Weekday.parse(day).ordinal for day in days_of_week}
    if not wanted:
        raise ValueError("days_of_week must not be empty")

    candidate = base + timedelta(days=1)

    if interval == 1:
        while candidate.weekday() not in wanted:
            candidate += timedelta(days=1)
        return candidate

    scan_limit = base + timedelta(days=WEEKLY_SCAN_FACTOR * interval)
    while candidate <= scan_limit:
        if candidate.weekday() in wanted:
            weeks_between = (candidate - base).days // 7
            if weeks_between >= interval or candidate == base + timedelta(days=1):
                return candidate
        candidate += timedelta(days=1)

    # Resync to the target week and take its first matching day
    candidate = base + timedelta(weeks=interval)
    while candidate.weekday() not in wanted:
        candidate += timedelta(days=1)
    return candidate


def next_monthly(base: date, interval: int, day_of_month: int) -> date:
    """Return the next monthly occurrence after ``base``.

    The target month is ``base`` plus ``interval`` calendar months. When the
    month is shorter than ``day_of_month`` the month's last day is used
    (day 31 in February yields the 28th or 29th).
    """
    target = base + relativedelta(months=interval)
    days_in_month = calendar.monthrange(target.year, target.month)[1]
    return date(target.year, target.month, min(day_of_month, days_in_month))


_CALCULATORS: dict[Frequency, Callable[[date, RecurrencePattern], date]] = {
    Frequency.DAILY: lambda base, p: next_daily(base, p.interval_value),
    Frequency.WEEKLY: lambda base, p: next_weekly(base, p.interval_value, p.days_of_week),
    Frequency.MONTHLY: lambda base, p: next_monthly(
        base, p.interval_value, p.day_of_month
    ),
}


def next_occurrence(pattern: RecurrencePattern) -> date:
    """Compute the next occurrence of ``pattern`` from its base date.

    Completion and end date are not checked here.
    """
    return _CALCULATORS[pattern.frequency](pattern.base_date(), pattern)


def upcoming_occurrence(pattern: RecurrencePattern) -> date | None:
    """Next occurrence the generator would produce, or None if there is none.

    A next date beyond the calendar's range (``date.max``) counts as none.
    """
    if pattern.is_completed():
        return None
    try:
        occurrence = next_occurrence(pattern)
    except (OverflowError, ValueError):
        return None
    if pattern.end_date is not None and occurrence > pattern.end_date:
        return None
    return occurrence


def preview_occurrences(pattern: RecurrencePattern, count: int) -> list[date]:
    """List the next ``count`` occurrence dates without touching any store.

    Stops early when the pattern reaches its cap or end date.
    """
    dates: list[date] = []
    current = pattern
    for _ in range(count):
        occurrence = upcoming_occurrence(current)
        if occurrence is None:
            break
        dates.append(occurrence)
        current = current.advanced(occurrence)
    return dates


def describe_pattern(pattern: RecurrencePattern) -> str:
    """Convert a pattern to a human-readable description.

    Example: ``"every 2 weeks on Mon, Wed, Fri from 2025-01-06, 10 times"``
    """
    unit = _UNITS[pattern.frequency]
    if pattern.interval_value == 1:
        text = f"every {unit}"
    else:
        text = f"every {pattern.interval_value} {unit}s"

    if pattern.frequency is Frequency.WEEKLY:
        text += " on " + ", ".join(day.short for day in pattern.sorted_days())
    elif pattern.frequency is Frequency.MONTHLY:
        text += f" on day {pattern.day_of_month}"

    text += f" from {pattern.start_date.isoformat()}"
    if pattern.end_date is not None:
        text += f" until {pattern.end_date.isoformat()}"
    if pattern.max_occurrences is not None:
        text += f", {pattern.max_occurrences} times"
    return text


def pattern_to_dict(pattern: RecurrencePattern) -> dict[str, Any]:
    """Serialize a pattern for display, with computed progress fields."""
    data = pattern.model_dump(mode="json", exclude={"created_at", "updated_at"})
    data["days_of_week"] = [day.value for day in pattern.sorted_days()]
    data["completed"] = pattern.is_completed()
    upcoming = upcoming_occurrence(pattern)
    data["next_occurrence"] = upcoming.isoformat() if upcoming else None
    data["summary"] = describe_pattern(pattern)
    return data
