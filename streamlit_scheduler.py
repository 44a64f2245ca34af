"""Interview Scheduler - Streamlit front end over the scheduling engine."""

from datetime import datetime, time, timedelta
from typing import Optional

import streamlit as st

from config import get_settings
from logging_config import setup_logger
from models.entities import InterviewStatus, Role, TimeSlot
from services.exceptions import SchedulingError
from services.response_formatter import ResponseFormatter
from services.sample_data import seed_sample_data
from services.scheduling_engine import SchedulingEngine

# ============================================================================
# CONFIGURATION
# ============================================================================

settings = get_settings()
for namespace in ("services", __name__):
    setup_logger(namespace, settings.log_level)

st.set_page_config(
    page_title="Interview Scheduler",
    page_icon="🗓️",
    layout="wide"
)

# ============================================================================
# SERVICE INITIALIZATION
# ============================================================================

@st.cache_resource
def get_engine(_cache_version="v1"):
    """Create the shared engine, seeded with demo data when enabled."""
    engine = SchedulingEngine()
    if settings.seed_sample_data:
        seed_sample_data(engine, settings=settings)
    return engine


engine = get_engine()
tz = settings.tz

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def participant_label(participant_id: int) -> str:
    participant = engine.lookup_participant(participant_id)
    return f"{participant.name} (ID {participant.id})"


def interview_label(interview_id: int) -> str:
    i = engine.get_interview(interview_id)
    return f"#{i.id} {i.candidate_name} - {i.slot.to_string(tz)} ({i.status.label})"


def build_slot(day, start: time, minutes: int) -> TimeSlot:
    """Localize a form date/time in the configured zone."""
    local_start = tz.localize(datetime.combine(day, start))
    return TimeSlot(start=local_start, end=tz.normalize(local_start + timedelta(minutes=minutes)))


def select_participant(label: str, role: Role, key: str) -> Optional[int]:
    options = [p.id for p in engine.participants_with_role(role)]
    if not options:
        st.warning(f"No {role.label.lower()}s registered.")
        return None
    return st.selectbox(label, options, format_func=participant_label, key=key)


def select_interview(label: str, key: str, scheduled_only: bool = True) -> Optional[int]:
    options = [
        i.id for i in engine.all_interviews()
        if not scheduled_only or i.status == InterviewStatus.SCHEDULED
    ]
    if not options:
        st.info("No matching interviews.")
        return None
    return st.selectbox(label, options, format_func=interview_label, key=key)


# ============================================================================
# SIDEBAR
# ============================================================================

with st.sidebar:
    st.subheader("➕ Register User")
    with st.form("register_user", clear_on_submit=True):
        name = st.text_input("Name")
        email = st.text_input("Email")
        role = st.selectbox("Role", list(Role), format_func=lambda r: r.label)
        if st.form_submit_button("Register") and name:
            new_id = engine.register_participant(name, email, role)
            st.success(f"Registered {name} with ID {new_id}")

    st.markdown("---")
    st.subheader("🕒 Add Availability")
    all_participants = sorted(engine.participants)
    if all_participants:
        with st.form("add_availability"):
            who = engine.lookup_participant(st.selectbox("User", all_participants, format_func=participant_label))
            day = st.date_input("Date", key="avail_day")
            start = st.time_input("From", value=time(settings.business_hours_start, 0))
            end = st.time_input("Until", value=settings.availability_end_time)
            if st.form_submit_button("Add window"):
                try:
                    window = TimeSlot(
                        start=tz.localize(datetime.combine(day, start)),
                        end=tz.localize(datetime.combine(day, end)),
                    )
                    engine.add_availability(who.id, window)
                    st.success(f"Added {window.to_string(tz)} for {who.name}")
                except (ValueError, SchedulingError) as e:
                    st.error(str(e))

    st.markdown("---")
    st.caption(f"Times shown in {settings.timezone}")

# ============================================================================
# MAIN CONTENT
# ============================================================================

st.title("🗓️ Interview Scheduler")
st.caption("Book interviews between HR managers and interviewers without double-booking.")

users_tab, interviews_tab, schedule_tab, manage_tab, user_tab, stats_tab = st.tabs([
    "👥 Users",
    "🗓️ Interviews",
    "➕ Schedule",
    "✏️ Manage",
    "👤 User's Interviews",
    "📊 Statistics",
])

with users_tab:
    st.markdown(ResponseFormatter.format_participants(
        sorted(engine.participants.values(), key=lambda p: p.id)
    ))

with interviews_tab:
    st.markdown(ResponseFormatter.format_interviews(
        engine.all_interviews(), engine.participants, tz=tz
    ))

with schedule_tab:
    hr_id = select_participant("HR Manager", Role.HR_MANAGER, key="book_hr")
    interviewer_id = select_participant("Interviewer", Role.INTERVIEWER, key="book_interviewer")
    minutes = st.number_input(
        "Duration (minutes)", min_value=15, max_value=480, step=15,
        value=settings.default_interview_minutes
    )

    if hr_id and interviewer_id and st.button("🎯 Suggest times"):
        try:
            suggestions = engine.suggest_slots(hr_id, interviewer_id, timedelta(minutes=int(minutes)))
            st.markdown(ResponseFormatter.format_suggestions(suggestions, tz))
        except ValueError as e:
            st.error(str(e))

    with st.form("book_interview"):
        candidate = st.text_input("Candidate name")
        position = st.text_input("Position")
        day = st.date_input("Date", key="book_day")
        start = st.time_input("Start", value=time(settings.business_hours_start, 0), key="book_start")
        submitted = st.form_submit_button("Schedule interview")

    if submitted:
        if not (hr_id and interviewer_id and candidate and position):
            st.error("Candidate, position and both participants are required.")
        else:
            result = engine.try_book_interview(
                candidate, position,
                hr_id=hr_id,
                interviewer_id=interviewer_id,
                slot=build_slot(day, start, int(minutes)),
            )
            st.markdown(ResponseFormatter.format_booking_result(result))

with manage_tab:
    st.subheader("Cancel")
    cancel_id = select_interview("Interview to cancel", key="cancel_id", scheduled_only=False)
    if cancel_id and st.button("❌ Cancel interview"):
        if engine.cancel_interview(cancel_id):
            st.success("Interview cancelled successfully.")
        else:
            st.error("Interview not found.")

    st.markdown("---")
    st.subheader("Complete")
    complete_id = select_interview("Interview to complete", key="complete_id")
    notes = st.text_area("Notes", key="complete_notes")
    if complete_id and st.button("✅ Mark completed"):
        try:
            engine.complete_interview(complete_id, notes=notes or None)
            st.success("Interview marked as completed.")
        except SchedulingError as e:
            st.error(str(e))

    st.markdown("---")
    st.subheader("Reschedule")
    move_id = select_interview("Interview to reschedule", key="move_id")
    if move_id:
        current = engine.get_interview(move_id)
        with st.form("reschedule"):
            day = st.date_input("New date", key="move_day")
            start = st.time_input("New start", key="move_start")
            moved = st.form_submit_button("Reschedule")
        if moved:
            try:
                new_slot = build_slot(day, start, int(current.slot.duration.total_seconds() // 60))
                engine.reschedule_interview(move_id, new_slot)
                st.success(f"Interview moved to {new_slot.to_string(tz)}")
            except SchedulingError as e:
                st.error(str(e))

with user_tab:
    everyone = sorted(engine.participants)
    if everyone:
        who = engine.lookup_participant(
            st.selectbox("User", everyone, format_func=participant_label, key="view_user")
        )
        st.markdown(ResponseFormatter.format_interviews(
            engine.interviews_for_participant(who.id),
            engine.participants,
            title=f"Interviews for {who.name}",
            tz=tz,
        ))
        if who.availability:
            st.markdown(ResponseFormatter.format_section(
                "Availability",
                [f"• {window.to_string(tz)}" for window in who.availability],
                icon="🕒",
            ))

with stats_tab:
    st.markdown(ResponseFormatter.format_statistics(engine.statistics()))
