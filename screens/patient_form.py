import streamlit as st

from core.helpers import flash
from core.session_manager import dispatch
from core.state import AppState, Navigate, ReturnToPatients, View
from services.patient_service import GENDERS, get_patient, patient_form_defaults, save_patient


def render(db, state: AppState, edit: bool = False):
    patient = get_patient(db, state.selected_patient_id) if edit else None
    values = patient_form_defaults(patient)

    if st.button("Back to Patients"):
        dispatch(ReturnToPatients())
        st.rerun()

    st.write("Update patient information" if patient else "Enter patient information")

    with st.form("patient_form"):
        st.subheader("Basic Information")
        name = st.text_input("Full Name *", value=values["name"])
        c1, c2 = st.columns(2)
        with c1:
            age = st.text_input("Age *", value=str(values["age"]))
        with c2:
            gender = st.selectbox(
                "Gender *",
                GENDERS,
                index=GENDERS.index(values["gender"]) if values["gender"] in GENDERS else 0,
            )

        st.subheader("Contact Information")
        phone = st.text_input("Phone", value=values["phone"])
        email = st.text_input("Email", value=values["email"])
        address = st.text_area("Address", value=values["address"])
        emergency_contact = st.text_input("Emergency Contact", value=values["emergency_contact"])

        st.subheader("Medical Information")
        medical_history = st.text_area("Medical History", value=values["medical_history"])
        current_medications = st.text_area("Current Medications", value=values["current_medications"])
        allergies = st.text_area("Allergies", value=values["allergies"])
        notes = st.text_area("Additional Notes", value=values["notes"])

        submitted = st.form_submit_button("Update Patient" if patient else "Save Patient", type="primary")

    if submitted:
        data = {
            "name": name,
            "age": age,
            "gender": gender,
            "phone": phone,
            "email": email,
            "address": address,
            "emergency_contact": emergency_contact,
            "medical_history": medical_history,
            "current_medications": current_medications,
            "allergies": allergies,
            "notes": notes,
        }
        if patient:
            data["patient_id"] = patient.patient_id
        try:
            saved = save_patient(db, data)
        except ValueError as e:
            st.error(str(e))
            return
        if saved is None:
            st.error("Patient not found.")
            return
        flash(f"Saved {saved.name} ({saved.patient_id}).")
        dispatch(Navigate(View.PATIENTS))
        st.rerun()
