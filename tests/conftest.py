from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tests.fakes import InMemoryAttendance, InMemorySessions


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 8, 0, 0)


@pytest.fixture
def clock(fixed_now):
    """Returns a callable yielding strictly increasing timestamps."""
    ticks = iter(range(10_000))
    return lambda: fixed_now + timedelta(seconds=next(ticks))


@pytest.fixture
def sessions_repo() -> InMemorySessions:
    return InMemorySessions()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()
