"""Exceptions raised by the scheduling engine."""

from typing import Optional

from models.entities import BookingErrorKind


class SchedulingError(Exception):
    """Base exception for all scheduling errors."""
    kind: Optional[BookingErrorKind] = None


class UnknownParticipant(SchedulingError):
    """Raised when a participant id does not resolve."""
    kind = BookingErrorKind.UNKNOWN_PARTICIPANT


class RoleMismatch(SchedulingError):
    """Raised when the HR slot or interviewer slot holds the wrong role."""
    kind = BookingErrorKind.ROLE_MISMATCH


class NotAvailable(SchedulingError):
    """Raised when a slot is outside every availability window of a participant."""
    kind = BookingErrorKind.NOT_AVAILABLE


class SlotConflict(SchedulingError):
    """Raised when a slot overlaps a participant's existing scheduled interview."""
    kind = BookingErrorKind.SLOT_CONFLICT


class UnknownInterview(SchedulingError):
    """Raised when an interview id does not resolve."""
    pass


class InvalidStatusTransition(SchedulingError):
    """Raised when an interview is not in a state that allows the change."""
    pass


BOOKING_ERRORS = (UnknownParticipant, RoleMismatch, NotAvailable, SlotConflict)
