"""Shared fixtures for the scheduler tests."""

from datetime import datetime

import pytest

from models.entities import Role, TimeSlot
from services.scheduling_engine import SchedulingEngine

DAY = datetime(2025, 3, 10)


def at(hour: int, minute: int = 0, day: datetime = DAY) -> datetime:
    return day.replace(hour=hour, minute=minute)


def slot(start_hour, end_hour, day: datetime = DAY) -> TimeSlot:
    """Slot on `day`; fractional hours are turned into minutes."""
    def to_dt(h):
        return at(int(h), int(round((h - int(h)) * 60)), day)
    return TimeSlot(to_dt(start_hour), to_dt(end_hour))


@pytest.fixture
def engine():
    return SchedulingEngine()


@pytest.fixture
def pair(engine):
    """An HR manager and an interviewer, both free 09:00-17:00."""
    hr_id = engine.register_participant("Alice Johnson", "alice@cloudfit.com", Role.HR_MANAGER)
    interviewer_id = engine.register_participant("Carol Davis", "carol@cloudfit.com", Role.INTERVIEWER)
    engine.add_availability(hr_id, slot(9, 17))
    engine.add_availability(interviewer_id, slot(9, 17))
    return hr_id, interviewer_id
