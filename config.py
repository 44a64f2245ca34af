"""Application settings loaded from the environment (and an optional .env file)."""

import os
from dataclasses import dataclass
from datetime import time
from functools import lru_cache

import pytz
from dotenv import find_dotenv, load_dotenv


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the scheduler and its UI."""
    timezone: str = "UTC"
    log_level: str = "INFO"
    business_hours_start: int = 9
    business_hours_end: int = 17
    seed_sample_data: bool = True
    default_interview_minutes: int = 60

    def __post_init__(self):
        try:
            pytz.timezone(self.timezone)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {self.timezone}")

        if not 0 <= self.business_hours_start < self.business_hours_end <= 24:
            raise ValueError(
                "Business hours must satisfy 0 <= start < end <= 24, got "
                f"{self.business_hours_start}-{self.business_hours_end}"
            )

        if self.default_interview_minutes <= 0:
            raise ValueError("DEFAULT_INTERVIEW_MINUTES must be positive")

    @property
    def tz(self):
        return pytz.timezone(self.timezone)

    @property
    def availability_end_time(self) -> time:
        """Latest time-of-day a form can offer for the business-day end."""
        if self.business_hours_end >= 24:
            return time(23, 59)
        return time(self.business_hours_end, 0)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, loading .env first."""
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            timezone=os.getenv("SCHEDULER_TIMEZONE", "UTC"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            business_hours_start=_get_int("BUSINESS_HOURS_START", 9),
            business_hours_end=_get_int("BUSINESS_HOURS_END", 17),
            seed_sample_data=_get_bool("SEED_SAMPLE_DATA", True),
            default_interview_minutes=_get_int("DEFAULT_INTERVIEW_MINUTES", 60),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
