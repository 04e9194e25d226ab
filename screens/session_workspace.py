import streamlit as st

from core import config
from core.helpers import flash
from core.session_manager import dispatch, get_draft, get_task_group
from core.state import AppState, ReturnToPatients, View
from core.time_utils import today
from services.patient_service import get_patient
from services.session_service import append_transcript, complete_session, send_prescription, toggle_recording


def render(db, state: AppState):
    session = state.active_session
    patient = get_patient(db, session.patient_id)
    draft = get_draft()
    tasks = get_task_group(View.SESSION)

    top = st.columns([2, 1])
    with top[0]:
        if st.button("Back to Patients"):
            dispatch(ReturnToPatients())
            st.rerun()
    with top[1]:
        st.info("Remote Session" if session.session_type == "remote" else "In-Person Session")

    st.subheader(f"{patient.name} — {today():%A, %B %d, %Y}")
    if session.purpose:
        st.caption(f"Purpose: {session.purpose} • {session.duration_minutes} min")

    physical, mental, medicines, voice = st.tabs(["Physical Health", "Mental Health", "Medicines", "Voice Notes"])

    with physical:
        draft.physical_notes = st.text_area(
            "Physical health observations", value=draft.physical_notes, height=250,
        )

    with mental:
        draft.mental_notes = st.text_area(
            "Mental health observations", value=draft.mental_notes, height=250,
        )

    with medicines:
        draft.medicines = st.text_area(
            "Prescribed medicines", value=draft.medicines, height=200,
        )
        if session.session_type == "remote":
            photo = st.file_uploader("Upload Prescription Photo", type=["jpg", "jpeg", "png"])
            if photo is not None:
                draft.prescription_photo = photo.name
            if st.button("Send Prescription"):
                try:
                    sent = send_prescription(draft, session.session_type)
                    st.success(f"Prescription {sent} sent.")
                except ValueError as e:
                    st.error(str(e))
            for name in draft.sent_prescriptions:
                st.caption(f"Sent: {name}")

    with voice:
        transcribing = tasks.is_running("transcribe")
        label = "Stop Recording" if draft.recording else "Start Recording"
        if st.button(label, disabled=transcribing):
            if toggle_recording(draft):
                # Cancelled with this screen's task group, so it never writes to a discarded draft
                tasks.start("transcribe", config.TRANSCRIBE_DELAY_SECONDS, lambda: append_transcript(draft))
            st.rerun()
        if draft.recording:
            st.caption("Recording...")
        elif transcribing:
            st.caption("Transcribing...")
        draft.voice_note = st.text_area(
            "Voice transcription", value=draft.voice_note, height=200, disabled=draft.recording,
        )

    st.markdown("---")
    if not draft.is_empty():
        st.caption("Unsaved notes are discarded when you leave this session.")
    if st.button("Save Session", type="primary"):
        try:
            record = complete_session(db, session, draft)
        except ValueError as e:
            st.error(str(e))
            return
        if record is None:
            st.error("Patient not found.")
            return
        flash(f"Session saved for {patient.name}.")
        dispatch(ReturnToPatients())
        st.rerun()
