import re

import streamlit as st
from streamlit_searchbox import st_searchbox

from core.database import get_db_context
from core.helpers import flash
from core.session_manager import dispatch
from core.state import AppState, Navigate, View
from core.time_utils import today
from services.appointment_service import APPOINTMENT_TYPES, TIME_SLOTS, create_appointment
from services.patient_service import search_patient_names


def patient_lookup(term: str):
    with get_db_context() as db:
        return search_patient_names(db, term or "")


def split_selection(selection: str | None):
    """'Sarah Johnson (P001)' -> ('Sarah Johnson', 'P001'); free text keeps no code."""
    text = (selection or "").strip()
    m = re.match(r"^(.*?)\s*\((P\d+)\)$", text)
    if m:
        return m.group(1).strip(), m.group(2)
    return text, None


def render(db, state: AppState):
    if st.button("Back to Appointments"):
        dispatch(Navigate(View.APPOINTMENTS))
        st.rerun()

    st.subheader("Patient *")
    selection = st_searchbox(
        patient_lookup,
        key="appointment_patient_search",
        placeholder="Type a patient name...",
    )

    c1, c2 = st.columns(2)
    with c1:
        appointment_date = st.date_input("Date *", value=today(), min_value=today())
    with c2:
        time = st.selectbox("Time *", [""] + TIME_SLOTS)

    kind = st.radio(
        "Appointment Type",
        APPOINTMENT_TYPES,
        format_func=lambda t: "In-Person" if t == "in-person" else "Remote",
        horizontal=True,
    )
    notes = st.text_area("Notes", placeholder="Optional notes for this appointment")

    if st.button("Schedule Appointment", type="primary"):
        patient_name, patient_code = split_selection(selection)
        try:
            appointment = create_appointment(
                db, patient_name, appointment_date, time, kind,
                patient_code=patient_code, notes=notes,
            )
        except ValueError as e:
            st.error(str(e))
            return
        flash(f"Appointment scheduled for {appointment.patient_name} on {appointment.date} at {appointment.time}.")
        dispatch(Navigate(View.APPOINTMENTS))
        st.rerun()
