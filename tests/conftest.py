"""Shared fixtures."""
from datetime import datetime, timedelta, timezone

import pytest

from maintlog import RecordStore


class FakeClock:
    """Returns a new timestamp one minute later on every call."""

    def __init__(self, start=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return RecordStore(clock=clock)
