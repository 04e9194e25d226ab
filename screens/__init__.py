from functools import partial

from core.state import View

from . import (
    appointments,
    dashboard,
    expenses,
    new_appointment,
    patient_detail,
    patient_form,
    patient_list,
    reports,
    session_workspace,
    start_session,
)

# One renderer per View; app.py falls back to the patient list for anything else
SCREENS = {
    View.DASHBOARD: dashboard.render,
    View.PATIENTS: patient_list.render,
    View.PATIENT_DETAIL: patient_detail.render,
    View.ADD_PATIENT: partial(patient_form.render, edit=False),
    View.EDIT_PATIENT: partial(patient_form.render, edit=True),
    View.START_SESSION: start_session.render,
    View.SESSION: session_workspace.render,
    View.APPOINTMENTS: appointments.render,
    View.NEW_APPOINTMENT: new_appointment.render,
    View.EXPENSES: expenses.render,
    View.REPORTS: reports.render,
}


def screen_for(view: View):
    return SCREENS.get(view, patient_list.render)
