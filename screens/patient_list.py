import streamlit as st

from core.helpers import flash
from core.session_manager import confirm_delete, dispatch
from core.state import (
    AppState,
    CancelDelete,
    Navigate,
    RequestDelete,
    SelectPatient,
    StartSession,
    View,
)
from services.patient_service import get_patient, list_patients


def render_delete_prompt(db, state: AppState):
    """Show the pending delete confirmation, if any. Returns True while it is shown."""
    prompt = state.pending_delete
    if prompt is None:
        return False

    patient = get_patient(db, prompt.patient_id)
    if not patient:
        dispatch(CancelDelete())
        st.rerun()

    st.warning(f"Delete **{patient.name}** ({patient.patient_id})? {prompt.message}")
    c1, c2 = st.columns(2)
    with c1:
        if st.button("Yes, delete patient", type="primary", key="confirm_delete"):
            if confirm_delete(prompt.patient_id, db):
                flash(f"Deleted {patient.name}.")
            else:
                flash("Failed to delete patient.", "error")
            st.rerun()
    with c2:
        if st.button("Cancel", key="cancel_delete"):
            dispatch(CancelDelete())
            st.rerun()
    st.markdown("---")
    return True


def render(db, state: AppState):
    st.write("Manage your patients and sessions.")

    if st.button("Add New Patient", type="primary"):
        dispatch(Navigate(View.ADD_PATIENT))
        st.rerun()

    render_delete_prompt(db, state)

    search = st.text_input("Search patients by name", placeholder="e.g., Sarah or P003")
    patients = list_patients(db, search)

    if not patients:
        st.info("No patients found.")
        return

    for p in patients:
        with st.container():
            left, right = st.columns([3, 2])
            with left:
                st.write(f"**{p.name}**  —  {p.patient_id}")
                st.caption(f"{p.age} years • {p.gender}")
            with right:
                st.write(f"Last session: {p.last_session or '—'} ({p.session_type})")
                st.write(f"Total sessions: {p.total_sessions}")

            c1, c2, c3, c4 = st.columns(4)
            with c1:
                if st.button("Start Session", key=f"start_{p.patient_id}"):
                    dispatch(StartSession(p.patient_id))
                    st.rerun()
            with c2:
                if st.button("View", key=f"view_{p.patient_id}"):
                    dispatch(SelectPatient(p.patient_id, View.PATIENT_DETAIL))
                    st.rerun()
            with c3:
                if st.button("Edit", key=f"edit_{p.patient_id}"):
                    dispatch(SelectPatient(p.patient_id, View.EDIT_PATIENT))
                    st.rerun()
            with c4:
                if st.button("Delete", key=f"delete_{p.patient_id}"):
                    dispatch(RequestDelete(p.patient_id))
                    st.rerun()
        st.markdown("---")
