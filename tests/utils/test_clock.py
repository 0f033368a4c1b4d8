"""Tests for the clock abstraction."""

from __future__ import annotations

from datetime import date, datetime
from unittest.mock import patch
from zoneinfo import ZoneInfo

from todorecur.utils.clock import FixedClock, SystemClock


def test_fixed_clock():
    assert FixedClock(date(2025, 1, 6)).today() == date(2025, 1, 6)


def test_system_clock_uses_configured_zone():
    clock = SystemClock("Pacific/Kiritimati")
    assert clock.today() == datetime.now(ZoneInfo("Pacific/Kiritimati")).date()


def test_system_clock_falls_back_to_local_zone():
    with patch(
        "todorecur.utils.clock.tzlocal.get_localzone", return_value=ZoneInfo("UTC")
    ) as get_localzone:
        today = SystemClock().today()

    get_localzone.assert_called_once()
    assert today == datetime.now(ZoneInfo("UTC")).date()
