"""Clock abstraction so "today" can be fixed in tests."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from zoneinfo import ZoneInfo

import tzlocal


class Clock(ABC):
    """Source of the current date."""

    @abstractmethod
    def today(self) -> date:
        """Return the current date."""


class SystemClock(Clock):
    """Clock reading the wall clock in a given timezone.

    Args:
        timezone: IANA zone name. If None, the system timezone is used.
    """

    def __init__(self, timezone: str | None = None):
        self.timezone = timezone

    def _zone(self):
        if self.timezone:
            return ZoneInfo(self.timezone)
        return tzlocal.get_localzone()

    def today(self) -> date:
        return datetime.now(self._zone()).date()


class FixedClock(Clock):
    """Clock frozen on a single day."""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day
