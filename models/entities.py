"""Domain models for the Interview Scheduler."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Role a participant plays in an interview."""
    HR_MANAGER = "HR_MANAGER"
    INTERVIEWER = "INTERVIEWER"

    @property
    def label(self) -> str:
        return "HR Manager" if self is Role.HR_MANAGER else "Interviewer"


class InterviewStatus(str, Enum):
    """Lifecycle status of an interview."""
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    RESCHEDULED = "RESCHEDULED"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class TimeSlot:
    """A half-open time interval [start, end)."""
    start: datetime
    end: datetime

    def __post_init__(self):
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValueError("Time slot start and end must both be naive or both be timezone-aware")
        if self.start >= self.end:
            raise ValueError(
                f"Time slot start ({self.start}) must be before end ({self.end})"
            )

    @property
    def is_aware(self) -> bool:
        return self.start.tzinfo is not None

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: "TimeSlot") -> bool:
        """Touching endpoints do not overlap."""
        return self.start < other.end and self.end > other.start

    def contains(self, other: "TimeSlot") -> bool:
        """Check whether `other` lies entirely within this slot."""
        return self.start <= other.start and other.end <= self.end

    def to_string(self, tz=None) -> str:
        """
        Format as "YYYY-MM-DD HH:MM - HH:MM".

        Args:
            tz: Optional pytz timezone; aware slots are converted into it
                before formatting. Naive slots are formatted unchanged.
        """
        start, end = self.start, self.end
        if tz is not None and start.tzinfo is not None:
            start = start.astimezone(tz)
            end = end.astimezone(tz)
        return f"{start.strftime('%Y-%m-%d %H:%M')} - {end.strftime('%H:%M')}"


@dataclass
class Participant:
    """An HR manager or interviewer known to the scheduler."""
    id: int
    name: str
    email: str
    role: Role
    availability: list[TimeSlot] = field(default_factory=list)
    active_bookings: set[int] = field(default_factory=set)

    def add_availability(self, slot: TimeSlot):
        """Append an availability window. Overlapping windows are kept as-is."""
        self.availability.append(slot)

    def is_available(self, slot: TimeSlot) -> bool:
        """True if any availability window fully contains the slot."""
        return any(window.contains(slot) for window in self.availability)

    def add_scheduled_interview(self, interview_id: int):
        self.active_bookings.add(interview_id)

    def remove_scheduled_interview(self, interview_id: int):
        self.active_bookings.discard(interview_id)


@dataclass
class Interview:
    """
    A booked interview between an HR manager and an interviewer.

    Instances are created by the SchedulingEngine only; the record itself
    performs no validation.
    """
    id: int
    candidate_name: str
    position: str
    hr_manager_id: int
    interviewer_id: int
    slot: TimeSlot
    status: InterviewStatus = InterviewStatus.SCHEDULED
    notes: Optional[str] = None

    @property
    def participant_ids(self) -> tuple[int, int]:
        return (self.hr_manager_id, self.interviewer_id)

    def set_status(self, new_status: InterviewStatus):
        self.status = new_status

    def set_notes(self, text: Optional[str]):
        self.notes = text

    def set_slot(self, new_slot: TimeSlot):
        self.slot = new_slot


class BookingErrorKind(str, Enum):
    """Reasons a booking can be rejected, in check order."""
    UNKNOWN_PARTICIPANT = "UNKNOWN_PARTICIPANT"
    ROLE_MISMATCH = "ROLE_MISMATCH"
    NOT_AVAILABLE = "NOT_AVAILABLE"
    SLOT_CONFLICT = "SLOT_CONFLICT"


@dataclass
class BookingResult:
    """Outcome of a booking attempt: an interview id or an error kind."""
    interview_id: Optional[int] = None
    error: Optional[BookingErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None
