import streamlit as st

from core import config
from core.database import get_db_context
from core.session_manager import dispatch, get_task_group
from core.state import AppState, RequestDelete, ReturnToPatients, SelectPatient, StartSession, View
from screens.patient_list import render_delete_prompt
from services.appointment_service import next_appointment
from services.medicine_service import DELIVERY_STATUSES, add_medicine, attach_image, list_medicines, update_delivery_status
from services.patient_service import get_patient
from services.session_service import get_sessions_for_patient


def _upload_done(medicine_id: int):
    def on_done():
        with get_db_context() as db:
            attach_image(db, medicine_id)
    return on_done


def _render_medicines(db, patient):
    st.subheader("Medicines")
    tasks = get_task_group(View.PATIENT_DETAIL)
    medicines = list_medicines(db, patient.patient_id)
    if not medicines:
        st.info("No medicines recorded.")

    for med in medicines:
        c1, c2, c3 = st.columns([3, 2, 2])
        with c1:
            st.write(f"**{med.name}** {med.dosage or ''}")
            st.caption(med.frequency or "")
        with c2:
            status = st.selectbox(
                "Delivery",
                DELIVERY_STATUSES,
                index=DELIVERY_STATUSES.index(med.delivery_status) if med.delivery_status in DELIVERY_STATUSES else 2,
                key=f"delivery_{med.id}",
            )
            if status != med.delivery_status:
                update_delivery_status(db, med.id, status)
                st.rerun()
        with c3:
            upload_name = f"upload_{med.id}"
            if med.image:
                st.caption(f"Image: {med.image}")
            elif tasks.is_running(upload_name):
                st.caption("Uploading...")
            elif st.button("Upload Image", key=upload_name):
                tasks.start(upload_name, config.UPLOAD_DELAY_SECONDS, _upload_done(med.id))
                st.rerun()

    with st.expander("Add Medicine", expanded=False):
        with st.form("medicine_form", clear_on_submit=True):
            name = st.text_input("Name")
            dosage = st.text_input("Dosage", placeholder="e.g., 50mg")
            frequency = st.text_input("Frequency", placeholder="e.g., Once daily")
            if st.form_submit_button("Add"):
                try:
                    add_medicine(db, patient.patient_id, name, dosage, frequency)
                    st.rerun()
                except ValueError as e:
                    st.error(str(e))


def render(db, state: AppState):
    patient = get_patient(db, state.selected_patient_id)

    top = st.columns(3)
    with top[0]:
        if st.button("Back to Patients"):
            dispatch(ReturnToPatients())
            st.rerun()
    with top[1]:
        if st.button("Edit Patient"):
            dispatch(SelectPatient(patient.patient_id, View.EDIT_PATIENT))
            st.rerun()
    with top[2]:
        if st.button("Start Session"):
            dispatch(StartSession(patient.patient_id))
            st.rerun()

    render_delete_prompt(db, state)

    st.subheader(f"{patient.name} ({patient.patient_id})")
    st.caption(f"{patient.age} years • {patient.gender}")

    c1, c2, c3 = st.columns(3)
    c1.metric("Total Sessions", patient.total_sessions)
    c2.metric("Last Session", str(patient.last_session or "—"))
    c3.metric("Session Type", patient.session_type or "—")

    with st.expander("Contact & Medical Information", expanded=True):
        st.write(f"Phone: {patient.phone or '—'}")
        st.write(f"Email: {patient.email or '—'}")
        st.write(f"Address: {patient.address or '—'}")
        st.write(f"Emergency Contact: {patient.emergency_contact or '—'}")
        st.write(f"Medical History: {patient.medical_history or '—'}")
        st.write(f"Current Medications: {patient.current_medications or '—'}")
        st.write(f"Allergies: {patient.allergies or '—'}")
        if patient.notes:
            st.write(f"Notes: {patient.notes}")

    upcoming = next_appointment(db, patient.patient_id, patient.name)
    st.subheader("Next Appointment")
    if upcoming:
        st.write(f"{upcoming.date} at {upcoming.time} ({upcoming.type})")
    else:
        st.info("No upcoming appointment.")

    st.subheader("Visit History")
    sessions = get_sessions_for_patient(db, patient.patient_id)
    if not sessions:
        st.info("No prior sessions found for this patient.")
    for s in sessions:
        with st.container():
            st.write(f"**{s.date}** • {s.type} • {s.status}")
            if s.notes:
                st.caption(s.notes)

    _render_medicines(db, patient)

    st.markdown("---")
    if st.button("Delete Patient", help="Irreversible action"):
        dispatch(RequestDelete(patient.patient_id))
        st.rerun()
