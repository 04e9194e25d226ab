import streamlit as st

from core.helpers import flash
from core.session_manager import dispatch
from core.state import SESSION_TYPES, AppState, ConfirmSession, ReturnToPatients
from services.patient_service import get_patient
from services.session_service import record_missed_session

DURATIONS = [30, 45, 60, 90]


def render(db, state: AppState):
    patient = get_patient(db, state.selected_patient_id)

    if st.button("Back to Patients"):
        dispatch(ReturnToPatients())
        st.rerun()

    st.subheader("Patient Information")
    st.write(f"**{patient.name}** — {patient.age} years • {patient.gender}")

    st.subheader("Session Configuration")
    session_type = st.radio(
        "Session Type",
        SESSION_TYPES,
        format_func=lambda t: "In-Person" if t == "in-person" else "Remote",
        horizontal=True,
    )
    duration = st.selectbox("Duration (minutes)", DURATIONS, index=DURATIONS.index(60))
    purpose = st.text_input("Session Purpose", placeholder="e.g., Follow-up, initial assessment")

    start_col, missed_col = st.columns(2)
    with start_col:
        if st.button("Start Session", type="primary"):
            dispatch(ConfirmSession(session_type, duration, purpose.strip()))
            st.rerun()
    with missed_col:
        if st.button("Mark as Missed"):
            record_missed_session(db, patient.patient_id, session_type, purpose.strip())
            flash(f"Missed session recorded for {patient.name}.", "warning")
            dispatch(ReturnToPatients())
            st.rerun()
