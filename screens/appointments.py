import streamlit as st

from core.session_manager import dispatch
from core.state import AppState, Navigate, View
from core.time_utils import today
from services.appointment_service import (
    appointments_for_date,
    appointments_for_week,
    filter_by_patient_name,
    list_appointments,
    set_status,
)

STATUS_ICONS = {
    "scheduled": "🟡",
    "attended": "🟢",
    "missed": "🔴",
    "rescheduled": "🔵",
}

ACTIONS = [("attended", "Attended"), ("missed", "Missed"), ("rescheduled", "Reschedule")]


def _render_appointment(db, a):
    left, right = st.columns([3, 2])
    with left:
        st.write(f"**{a.time}** — {a.patient_name}")
        st.caption(f"{a.type} • {STATUS_ICONS.get(a.status, '')} {a.status}")
    with right:
        if a.status == "scheduled":
            cols = st.columns(len(ACTIONS))
            for col, (status, label) in zip(cols, ACTIONS):
                with col:
                    if st.button(label, key=f"{status}_{a.appointment_id}"):
                        set_status(db, a.appointment_id, status)
                        st.rerun()
        elif st.button("Reset", key=f"reset_{a.appointment_id}"):
            set_status(db, a.appointment_id, "scheduled")
            st.rerun()


def render(db, state: AppState):
    if st.button("New Appointment", type="primary"):
        dispatch(Navigate(View.NEW_APPOINTMENT))
        st.rerun()

    c1, c2, c3 = st.columns([2, 1, 2])
    with c1:
        selected = st.date_input("Date", value=today())
    with c2:
        mode = st.radio("View", ["day", "week"], horizontal=True)
    with c3:
        search = st.text_input("Search by patient name")

    appointments = filter_by_patient_name(list_appointments(db), search)

    if mode == "day":
        todays = appointments_for_date(appointments, selected)
        st.subheader(f"Appointments for {selected:%A, %B %d}")
        if not todays:
            st.info("No appointments scheduled for this date.")
        for a in todays:
            _render_appointment(db, a)
            st.markdown("---")
        return

    week = appointments_for_week(appointments, selected)
    cols = st.columns(7)
    for col, (day, items) in zip(cols, week.items()):
        with col:
            st.markdown(f"**{day:%a %d}**")
            for a in items:
                st.caption(f"{a.time} {a.patient_name} {STATUS_ICONS.get(a.status, '')}")
