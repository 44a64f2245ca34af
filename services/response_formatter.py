"""Markdown formatting for participants, interviews and booking outcomes."""

from typing import List, Dict, Optional

from models.entities import (
    BookingErrorKind,
    BookingResult,
    Interview,
    Participant,
    Role,
    TimeSlot,
)


class ResponseFormatter:
    """Formats scheduler data as markdown for the UI."""

    ERROR_TITLES = {
        BookingErrorKind.UNKNOWN_PARTICIPANT: "Unknown Participant",
        BookingErrorKind.ROLE_MISMATCH: "Role Mismatch",
        BookingErrorKind.NOT_AVAILABLE: "Not Available",
        BookingErrorKind.SLOT_CONFLICT: "Time Slot Conflict",
    }

    ERROR_SUGGESTIONS = {
        BookingErrorKind.UNKNOWN_PARTICIPANT: ["Pick participants from the user list"],
        BookingErrorKind.ROLE_MISMATCH: [
            "The first participant must be an HR manager",
            "The second participant must be an interviewer",
        ],
        BookingErrorKind.NOT_AVAILABLE: [
            "Choose a time inside both participants' availability",
            "Use the suggested slots to find a shared window",
        ],
        BookingErrorKind.SLOT_CONFLICT: [
            "Pick a time that does not overlap an existing interview",
            "Cancel or reschedule the conflicting interview first",
        ],
    }

    @staticmethod
    def format_section(title: str, content: List[str], icon: str = "📋") -> str:
        """Format a section with title and content."""
        lines = [f"**{icon} {title}**", ""]
        lines.extend(content)
        return "\n".join(lines)

    @staticmethod
    def format_participant(participant: Participant) -> str:
        return (
            f"ID: {participant.id}, Name: {participant.name}, "
            f"Email: {participant.email}, Role: {participant.role.label}"
        )

    @staticmethod
    def format_participants(participants: List[Participant]) -> str:
        """Format participants grouped by role, HR managers first."""
        lines = []
        for role, heading in ((Role.HR_MANAGER, "HR Managers"), (Role.INTERVIEWER, "Interviewers")):
            lines.append(f"**{heading}:**")
            lines.append("")
            members = [p for p in participants if p.role == role]
            if not members:
                lines.append("• None")
            for participant in members:
                lines.append(f"• {ResponseFormatter.format_participant(participant)}")
            lines.append("")

        return ResponseFormatter.format_section("All Users", lines, icon="👥").rstrip()

    @staticmethod
    def format_interview(
        interview: Interview,
        participants: Dict[int, Participant],
        tz=None
    ) -> str:
        """Format an interview's details, resolving participant names."""
        hr_manager = participants.get(interview.hr_manager_id)
        interviewer = participants.get(interview.interviewer_id)

        lines = [
            f"**Interview ID:** {interview.id}",
            f"• **Candidate:** {interview.candidate_name}",
            f"• **Position:** {interview.position}",
            f"• **HR Manager:** {hr_manager.name if hr_manager else 'Unknown'}",
            f"• **Interviewer:** {interviewer.name if interviewer else 'Unknown'}",
            f"• **Time:** {interview.slot.to_string(tz)}",
            f"• **Status:** {interview.status.label}",
        ]
        if interview.notes:
            lines.append(f"• **Notes:** {interview.notes}")

        return "\n".join(lines)

    @staticmethod
    def format_interviews(
        interviews: List[Interview],
        participants: Dict[int, Participant],
        title: str = "All Interviews",
        tz=None
    ) -> str:
        if not interviews:
            return ResponseFormatter.format_info(title, "No interviews found.")

        blocks = [
            ResponseFormatter.format_interview(interview, participants, tz)
            for interview in interviews
        ]
        return ResponseFormatter.format_section(title, ["\n\n---\n\n".join(blocks)], icon="🗓️")

    @staticmethod
    def format_statistics(stats: Dict[str, int]) -> str:
        """Format engine statistics."""
        content = [
            f"• **Total Users:** {stats.get('total_users', 0)}",
            f"• **HR Managers:** {stats.get('hr_managers', 0)}",
            f"• **Interviewers:** {stats.get('interviewers', 0)}",
            f"• **Total Interviews:** {stats.get('total_interviews', 0)}",
            f"• **Scheduled:** {stats.get('scheduled', 0)}",
            f"• **Completed:** {stats.get('completed', 0)}",
            f"• **Cancelled:** {stats.get('cancelled', 0)}",
            f"• **Rescheduled:** {stats.get('rescheduled', 0)}",
        ]
        return ResponseFormatter.format_section("Scheduling Statistics", content, icon="📊")

    @staticmethod
    def format_suggestions(slots: List[TimeSlot], tz=None) -> str:
        if not slots:
            return ResponseFormatter.format_error(
                "No Available Times Found",
                "The selected participants have no shared free time of that length.",
                suggestions=[
                    "Add availability for one of the participants",
                    "Consider a shorter interview",
                ]
            )

        lines = [f"{i}. {slot.to_string(tz)}" for i, slot in enumerate(slots, 1)]
        return ResponseFormatter.format_section("Suggested Times", lines, icon="🎯")

    @staticmethod
    def format_booking_result(result: BookingResult) -> str:
        """Format a booking outcome with a precise failure reason."""
        if result.ok:
            return ResponseFormatter.format_success(
                "Interview Scheduled",
                f"Interview **{result.interview_id}** has been booked."
            )

        return ResponseFormatter.format_error(
            ResponseFormatter.ERROR_TITLES.get(result.error, "Booking Failed"),
            result.message,
            suggestions=ResponseFormatter.ERROR_SUGGESTIONS.get(result.error)
        )

    @staticmethod
    def format_success(title: str, message: str, details: Optional[List[str]] = None) -> str:
        """Format a success message."""
        lines = [
            f"**✅ {title}**",
            "",
            message
        ]

        if details:
            lines.append("")
            lines.append("**Details:**")
            for detail in details:
                lines.append(f"• {detail}")

        return "\n".join(lines)

    @staticmethod
    def format_error(title: str, message: str, suggestions: Optional[List[str]] = None) -> str:
        """Format an error message."""
        lines = [
            f"**❌ {title}**",
            "",
            message
        ]

        if suggestions:
            lines.append("")
            lines.append("**Suggestions:**")
            for suggestion in suggestions:
                lines.append(f"• {suggestion}")

        return "\n".join(lines)

    @staticmethod
    def format_info(title: str, message: str, items: Optional[List[str]] = None) -> str:
        """Format an informational message."""
        lines = [
            f"**ℹ️ {title}**",
            "",
            message
        ]

        if items:
            lines.append("")
            for item in items:
                lines.append(f"• {item}")

        return "\n".join(lines)
