import streamlit as st

from core.helpers import format_money
from core.session_manager import dispatch
from core.state import AppState, Navigate, View
from services.report_service import dashboard_stats, todays_activity


def render(db, state: AppState):
    stats = dashboard_stats(db, active_sessions=1 if state.active_session else 0)

    cards = [
        ("Total Patients", stats.total_patients, "View All", View.PATIENTS),
        ("Today's Appointments", stats.todays_appointments, "View Schedule", View.APPOINTMENTS),
        ("Active Sessions", stats.active_sessions, "View Sessions", View.SESSION),
        ("Monthly Revenue", format_money(stats.monthly_income), "View Reports", View.REPORTS),
    ]
    cols = st.columns(len(cards))
    for col, (title, value, action, view) in zip(cols, cards):
        with col:
            st.metric(title, value)
            if st.button(action, key=f"card_{view.value}"):
                dispatch(Navigate(view))
                st.rerun()

    st.subheader("Today's Activity")
    activity = todays_activity(db)
    if not activity:
        st.info("Nothing scheduled today.")
    for a in activity:
        st.write(f"**{a.time}** — {a.patient_name} • {a.type} • {a.status}")
