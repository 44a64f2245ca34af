"""Synthetic demo data for the scheduler UI."""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

import pytz

from config import Settings, get_settings
from models.entities import Role, TimeSlot
from services.exceptions import SchedulingError
from services.scheduling_engine import SchedulingEngine

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    ("Alice Johnson", "alice@cloudfit.com", Role.HR_MANAGER),
    ("Bob Smith", "bob@cloudfit.com", Role.HR_MANAGER),
    ("Carol Davis", "carol@cloudfit.com", Role.INTERVIEWER),
    ("David Wilson", "david@cloudfit.com", Role.INTERVIEWER),
    ("Eve Brown", "eve@cloudfit.com", Role.INTERVIEWER),
]


def business_day_window(day: date, start_hour: int, end_hour: int, tz) -> TimeSlot:
    """Availability window covering [start_hour, end_hour) of `day` in `tz`.

    Hours of 24 or more roll over to the following day(s), so `end_hour=24`
    ends at the next local midnight.
    """
    return TimeSlot(start=_local_hour(day, start_hour, tz), end=_local_hour(day, end_hour, tz))


def _local_hour(day: date, hour: int, tz) -> datetime:
    extra_days, hour = divmod(hour, 24)
    return tz.localize(datetime.combine(day + timedelta(days=extra_days), time(hour, 0)))


def _hours_after(day: date, start_hour: int, offset: int, length: int, tz) -> TimeSlot:
    """Slot starting `offset` hours after the business-day start, `length` hours long."""
    return business_day_window(day, start_hour + offset, start_hour + offset + length, tz)


def seed_sample_data(
    engine: SchedulingEngine,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None
) -> dict[str, int]:
    """
    Register demo users, their availability and two sample interviews.

    Args:
        engine: Engine to populate
        now: Reference time (defaults to the current time in the configured zone)
        settings: Settings providing the timezone and business hours

    Returns:
        dict mapping each sample user's name to their participant id
    """
    settings = settings or get_settings()
    tz = settings.tz
    start_hour = settings.business_hours_start

    if now is None:
        now = datetime.now(pytz.UTC)
    today = now.astimezone(tz).date() if now.tzinfo else now.date()
    tomorrow = today + timedelta(days=1)
    day_after = today + timedelta(days=2)

    ids = {
        name: engine.register_participant(name, email, role)
        for name, email, role in SAMPLE_USERS
    }

    engine.add_availability(
        ids["Alice Johnson"],
        business_day_window(tomorrow, start_hour, settings.business_hours_end, tz)
    )
    engine.add_availability(ids["Alice Johnson"], _hours_after(day_after, start_hour, 0, 6, tz))

    engine.add_availability(ids["Carol Davis"], _hours_after(tomorrow, start_hour, 0, 4, tz))
    engine.add_availability(
        ids["Carol Davis"],
        business_day_window(day_after, start_hour, settings.business_hours_end, tz)
    )

    engine.add_availability(ids["David Wilson"], _hours_after(tomorrow, start_hour, 2, 4, tz))

    samples = [
        ("John Doe", "Software Engineer", _hours_after(tomorrow, start_hour, 1, 1, tz)),
        ("Jane Smith", "Product Manager", _hours_after(day_after, start_hour, 2, 1, tz)),
    ]
    for candidate, position, slot in samples:
        try:
            engine.book_interview(
                candidate, position,
                hr_id=ids["Alice Johnson"],
                interviewer_id=ids["Carol Davis"],
                slot=slot,
            )
        except SchedulingError as e:
            logger.warning(f"Could not seed interview for {candidate}: {e}")

    return ids
