"""Core scheduling engine: participant/interview registries and conflict checks."""

import itertools
import logging
from datetime import timedelta
from threading import RLock
from typing import Optional

from models.entities import (
    BookingResult,
    Interview,
    InterviewStatus,
    Participant,
    Role,
    TimeSlot,
)
from services.exceptions import (
    BOOKING_ERRORS,
    InvalidStatusTransition,
    NotAvailable,
    RoleMismatch,
    SlotConflict,
    UnknownInterview,
    UnknownParticipant,
)

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """
    Owns participants and interviews and books interviews without double-booking.

    Every booking runs all validation before touching any state, so a
    rejected request leaves the registries and booking sets unchanged.
    Mutations are serialized behind a single re-entrant lock.
    """

    def __init__(self):
        """Initialize empty registries and per-entity id sequences."""
        self.participants: dict[int, Participant] = {}
        self.interviews: dict[int, Interview] = {}
        self._participant_ids = itertools.count(1)
        self._interview_ids = itertools.count(1)
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Participants
    # ------------------------------------------------------------------

    def register_participant(self, name: str, email: str, role: Role) -> int:
        """Create a participant and return its id."""
        with self._lock:
            participant = Participant(
                id=next(self._participant_ids),
                name=name,
                email=email,
                role=Role(role),
            )
            self.participants[participant.id] = participant
        logger.info(f"[Register] {participant.role.label} {name} -> id {participant.id}")
        return participant.id

    def lookup_participant(self, participant_id: int) -> Optional[Participant]:
        return self.participants.get(participant_id)

    def participants_with_role(self, role: Role) -> list[Participant]:
        """Participants holding `role`, in ascending id order."""
        with self._lock:
            return [
                p for _, p in sorted(self.participants.items())
                if p.role == role
            ]

    def add_availability(self, participant_id: int, slot: TimeSlot):
        """Add an availability window to a registered participant."""
        with self._lock:
            participant = self._require_participant(participant_id)
            if _mixes_awareness(participant.availability, slot):
                raise ValueError(
                    f"{_describe(slot)} window cannot be added to {participant.name}, "
                    f"whose availability uses {_describe(slot, opposite=True)} times"
                )
            participant.add_availability(slot)
        logger.debug(f"[Availability] {participant.name}: {slot.to_string()}")

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    def book_interview(
        self,
        candidate: str,
        position: str,
        hr_id: int,
        interviewer_id: int,
        slot: TimeSlot
    ) -> int:
        """
        Book an interview between an HR manager and an interviewer.

        Checks run in this order and the first failure is raised:
        unknown participant, role mismatch, availability, conflicts.

        Returns:
            The new interview id

        Raises:
            UnknownParticipant, RoleMismatch, NotAvailable, SlotConflict
        """
        with self._lock:
            try:
                hr_manager, interviewer = self._validate_booking(hr_id, interviewer_id, slot)
            except BOOKING_ERRORS as e:
                logger.warning(f"[Book] Rejected {candidate} ({position}): {e}")
                raise

            interview = Interview(
                id=next(self._interview_ids),
                candidate_name=candidate,
                position=position,
                hr_manager_id=hr_manager.id,
                interviewer_id=interviewer.id,
                slot=slot,
            )
            hr_manager.add_scheduled_interview(interview.id)
            interviewer.add_scheduled_interview(interview.id)
            self.interviews[interview.id] = interview

        logger.info(
            f"[Book] Interview {interview.id} for {candidate} ({position}) "
            f"at {slot.to_string()} with {hr_manager.name} and {interviewer.name}"
        )
        return interview.id

    def try_book_interview(
        self,
        candidate: str,
        position: str,
        hr_id: int,
        interviewer_id: int,
        slot: TimeSlot
    ) -> BookingResult:
        """Like book_interview, but reports failures as a BookingResult."""
        try:
            interview_id = self.book_interview(candidate, position, hr_id, interviewer_id, slot)
        except BOOKING_ERRORS as e:
            return BookingResult(error=e.kind, message=str(e))
        return BookingResult(interview_id=interview_id)

    def _validate_booking(
        self,
        hr_id: int,
        interviewer_id: int,
        slot: TimeSlot
    ) -> tuple[Participant, Participant]:
        """Run every booking check without mutating anything."""
        hr_manager = self.lookup_participant(hr_id)
        interviewer = self.lookup_participant(interviewer_id)

        if hr_manager is None or interviewer is None:
            missing = hr_id if hr_manager is None else interviewer_id
            raise UnknownParticipant(f"Unknown participant id: {missing}")

        if hr_manager.role != Role.HR_MANAGER:
            raise RoleMismatch(f"{hr_manager.name} is not an HR manager")

        if interviewer.role != Role.INTERVIEWER:
            raise RoleMismatch(f"{interviewer.name} is not an interviewer")

        self._check_slot(hr_manager, interviewer, slot)
        return hr_manager, interviewer

    def _check_slot(
        self,
        hr_manager: Participant,
        interviewer: Participant,
        slot: TimeSlot,
        ignore_id: Optional[int] = None
    ):
        """Availability first for both, then conflicts for both."""
        for participant in (hr_manager, interviewer):
            if _mixes_awareness(participant.availability, slot):
                raise NotAvailable(
                    f"{_describe(slot)} slot {slot.to_string()} cannot be matched against "
                    f"{participant.name}'s availability, which uses {_describe(slot, opposite=True)} times"
                )

        if not hr_manager.is_available(slot):
            raise NotAvailable(f"HR manager {hr_manager.name} is not available at {slot.to_string()}")

        if not interviewer.is_available(slot):
            raise NotAvailable(f"Interviewer {interviewer.name} is not available at {slot.to_string()}")

        for participant in (hr_manager, interviewer):
            if self._has_conflict(participant, slot, ignore_id):
                raise SlotConflict(
                    f"{slot.to_string()} conflicts with an existing interview for {participant.name}"
                )

    def conflict_check(self, participant_id: int, slot: TimeSlot) -> bool:
        """True if the participant has a scheduled interview overlapping `slot`."""
        with self._lock:
            participant = self.lookup_participant(participant_id)
            if participant is None:
                return False
            booked = [
                self.interviews[i].slot for i in participant.active_bookings
                if i in self.interviews
            ]
            if _mixes_awareness(booked, slot):
                raise ValueError(
                    f"{_describe(slot)} slot cannot be compared with {participant.name}'s "
                    f"{_describe(slot, opposite=True)} bookings"
                )
            return self._has_conflict(participant, slot)

    def _has_conflict(
        self,
        participant: Participant,
        slot: TimeSlot,
        ignore_id: Optional[int] = None
    ) -> bool:
        for interview_id in participant.active_bookings:
            if interview_id == ignore_id:
                continue
            interview = self.interviews.get(interview_id)
            if (
                interview is not None
                and interview.status == InterviewStatus.SCHEDULED
                and interview.slot.overlaps(slot)
            ):
                return True
        return False

    # ------------------------------------------------------------------
    # Interview lifecycle
    # ------------------------------------------------------------------

    def get_interview(self, interview_id: int) -> Optional[Interview]:
        return self.interviews.get(interview_id)

    def cancel_interview(self, interview_id: int) -> bool:
        """
        Cancel an interview and free its slot for both participants.

        Returns False only when the id is unknown. Repeat calls are no-ops.
        """
        with self._lock:
            interview = self.get_interview(interview_id)
            if interview is None:
                logger.warning(f"[Cancel] Interview {interview_id} not found")
                return False

            interview.set_status(InterviewStatus.CANCELLED)
            self._release(interview)

        logger.info(f"[Cancel] Interview {interview_id} cancelled")
        return True

    def complete_interview(self, interview_id: int, notes: Optional[str] = None) -> bool:
        """
        Mark a scheduled interview as completed. False if the id is unknown.

        `notes`, when given, are stored only if the transition succeeds.
        """
        with self._lock:
            interview = self.get_interview(interview_id)
            if interview is None:
                return False
            if interview.status != InterviewStatus.SCHEDULED:
                raise InvalidStatusTransition(
                    f"Interview {interview_id} is {interview.status.label}, not Scheduled"
                )

            interview.set_status(InterviewStatus.COMPLETED)
            if notes:
                interview.set_notes(notes)
            self._release(interview)

        logger.info(f"[Complete] Interview {interview_id} completed")
        return True

    def reschedule_interview(self, interview_id: int, new_slot: TimeSlot) -> Interview:
        """
        Move a scheduled interview to `new_slot`.

        Availability and conflicts are re-checked for both participants,
        with the interview's current slot treated as free. Nothing changes
        unless every check passes. The interview keeps its id and stays
        Scheduled.

        Raises:
            UnknownInterview, InvalidStatusTransition, NotAvailable, SlotConflict
        """
        with self._lock:
            interview = self.get_interview(interview_id)
            if interview is None:
                raise UnknownInterview(f"Unknown interview id: {interview_id}")
            if interview.status != InterviewStatus.SCHEDULED:
                raise InvalidStatusTransition(
                    f"Interview {interview_id} is {interview.status.label}, not Scheduled"
                )

            hr_manager = self._require_participant(interview.hr_manager_id)
            interviewer = self._require_participant(interview.interviewer_id)
            try:
                self._check_slot(hr_manager, interviewer, new_slot, ignore_id=interview_id)
            except (NotAvailable, SlotConflict) as e:
                logger.warning(f"[Reschedule] Rejected interview {interview_id}: {e}")
                raise

            old_slot = interview.slot
            interview.set_slot(new_slot)

        logger.info(
            f"[Reschedule] Interview {interview_id} moved from "
            f"{old_slot.to_string()} to {new_slot.to_string()}"
        )
        return interview

    def _release(self, interview: Interview):
        for participant_id in interview.participant_ids:
            participant = self.lookup_participant(participant_id)
            if participant:
                participant.remove_scheduled_interview(interview.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def interviews_for_participant(self, participant_id: int) -> list[Interview]:
        """Active (not cancelled or completed) interviews for a participant."""
        with self._lock:
            participant = self.lookup_participant(participant_id)
            if participant is None:
                return []
            return [
                self.interviews[interview_id]
                for interview_id in sorted(participant.active_bookings)
                if interview_id in self.interviews
            ]

    def all_interviews(self) -> list[Interview]:
        """Every interview ever booked, including cancelled ones."""
        with self._lock:
            return [interview for _, interview in sorted(self.interviews.items())]

    def suggest_slots(
        self,
        hr_id: int,
        interviewer_id: int,
        duration: timedelta,
        limit: int = 5
    ) -> list[TimeSlot]:
        """
        Find bookable slots of `duration` for a pair of participants.

        Args:
            hr_id: HR manager id
            interviewer_id: Interviewer id
            duration: Length of each proposed slot
            limit: Maximum number of slots to return

        Returns:
            Conflict-free slots inside both participants' availability,
            earliest first
        """
        if duration <= timedelta(0):
            raise ValueError("Duration must be positive")

        with self._lock:
            hr_manager = self._require_participant(hr_id)
            interviewer = self._require_participant(interviewer_id)
            if any(
                _mixes_awareness(interviewer.availability, window)
                for window in hr_manager.availability
            ):
                raise ValueError(
                    f"{hr_manager.name} and {interviewer.name} mix naive and "
                    "timezone-aware availability windows"
                )

            shared = self._intersect_slots(hr_manager.availability, interviewer.availability)
            candidates = self._split_slots_by_duration(shared, duration)

            result = []
            seen = set()
            for slot in sorted(candidates, key=lambda s: (s.start, s.end)):
                if slot in seen:
                    continue
                seen.add(slot)
                if self._has_conflict(hr_manager, slot) or self._has_conflict(interviewer, slot):
                    continue
                result.append(slot)
                if len(result) >= limit:
                    break

        return result

    def _intersect_slots(
        self,
        slots1: list[TimeSlot],
        slots2: list[TimeSlot]
    ) -> list[TimeSlot]:
        """Find intersection of two slot lists."""
        result = []

        for slot1 in slots1:
            for slot2 in slots2:
                overlap_start = max(slot1.start, slot2.start)
                overlap_end = min(slot1.end, slot2.end)

                if overlap_start < overlap_end:
                    result.append(TimeSlot(start=overlap_start, end=overlap_end))

        return result

    def _split_slots_by_duration(
        self,
        slots: list[TimeSlot],
        duration: timedelta
    ) -> list[TimeSlot]:
        """Split long slots into meeting-sized chunks."""
        result = []

        for slot in slots:
            current_start = slot.start
            while current_start + duration <= slot.end:
                result.append(TimeSlot(start=current_start, end=current_start + duration))
                current_start += duration

        return result

    def statistics(self) -> dict[str, int]:
        """Counts of users by role and interviews by status."""
        with self._lock:
            stats = {
                "total_users": len(self.participants),
                "hr_managers": len(self.participants_with_role(Role.HR_MANAGER)),
                "interviewers": len(self.participants_with_role(Role.INTERVIEWER)),
                "total_interviews": len(self.interviews),
            }
            for status in InterviewStatus:
                stats[status.value.lower()] = sum(
                    1 for i in self.interviews.values() if i.status == status
                )
        return stats

    def _require_participant(self, participant_id: int) -> Participant:
        participant = self.lookup_participant(participant_id)
        if participant is None:
            raise UnknownParticipant(f"Unknown participant id: {participant_id}")
        return participant


def _mixes_awareness(windows: list[TimeSlot], slot: TimeSlot) -> bool:
    """Naive and timezone-aware datetimes cannot be compared."""
    return any(window.is_aware != slot.is_aware for window in windows)


def _describe(slot: TimeSlot, opposite: bool = False) -> str:
    return "timezone-aware" if slot.is_aware != opposite else "naive"
