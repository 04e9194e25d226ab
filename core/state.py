"""
Application state and the reducer that updates it.
---------------------------------------------------
The shell keeps exactly one AppState. Screens never modify it; they
dispatch one of the action dataclasses below and `reduce` returns the next
state.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum

logger = logging.getLogger(__name__)


class View(str, Enum):
    DASHBOARD = "dashboard"
    PATIENTS = "patients"
    PATIENT_DETAIL = "patient-detail"
    ADD_PATIENT = "add-patient"
    EDIT_PATIENT = "edit-patient"
    START_SESSION = "start-session"
    SESSION = "session"
    APPOINTMENTS = "appointments"
    NEW_APPOINTMENT = "new-appointment"
    EXPENSES = "expenses"
    REPORTS = "reports"

    @classmethod
    def parse(cls, value) -> "View":
        """Map a view name to a View; unknown names resolve to the patient list."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            logger.warning("Unknown view %r, falling back to patient list", value)
            return cls.PATIENTS

    @property
    def title(self) -> str:
        return self.value.replace("-", " ").title()


SESSION_TYPES = ("in-person", "remote")

# Screens that render the selected patient
PATIENT_VIEWS = frozenset({View.PATIENT_DETAIL, View.EDIT_PATIENT, View.START_SESSION})


@dataclass(frozen=True)
class ActiveSession:
    patient_id: str
    session_type: str = "in-person"
    duration_minutes: int = 60
    purpose: str = ""


@dataclass(frozen=True)
class ConfirmationPrompt:
    """A pending irreversible action waiting for the user to confirm."""

    patient_id: str
    message: str = "This will permanently delete the patient and their history. This cannot be undone."


@dataclass(frozen=True)
class AppState:
    active_view: View = View.DASHBOARD
    selected_patient_id: str | None = None
    active_session: ActiveSession | None = None
    pending_delete: ConfirmationPrompt | None = None


# -----------------------------
# Actions
# -----------------------------
@dataclass(frozen=True)
class Navigate:
    view: View | str


@dataclass(frozen=True)
class SelectPatient:
    patient_id: str
    view: View | str


@dataclass(frozen=True)
class StartSession:
    patient_id: str


@dataclass(frozen=True)
class ConfirmSession:
    session_type: str = "in-person"
    duration_minutes: int = 60
    purpose: str = ""


@dataclass(frozen=True)
class ReturnToPatients:
    pass


@dataclass(frozen=True)
class RequestDelete:
    patient_id: str


@dataclass(frozen=True)
class CancelDelete:
    pass


@dataclass(frozen=True)
class PatientDeleted:
    patient_id: str


# -----------------------------
# Reducer
# -----------------------------
def _apply(state: AppState, action) -> AppState:
    if isinstance(action, Navigate):
        return replace(state, active_view=View.parse(action.view))

    if isinstance(action, SelectPatient):
        return replace(
            state,
            selected_patient_id=action.patient_id,
            active_view=View.parse(action.view),
        )

    if isinstance(action, StartSession):
        return replace(
            state,
            selected_patient_id=action.patient_id,
            active_view=View.START_SESSION,
        )

    if isinstance(action, ConfirmSession):
        if state.selected_patient_id is None:
            logger.warning("Session confirmation ignored: no patient selected")
            return state
        if action.session_type not in SESSION_TYPES:
            raise ValueError(f"Invalid session type: {action.session_type}")
        session = ActiveSession(
            patient_id=state.selected_patient_id,
            session_type=action.session_type,
            duration_minutes=int(action.duration_minutes),
            purpose=action.purpose,
        )
        return replace(state, active_session=session, active_view=View.SESSION)

    if isinstance(action, ReturnToPatients):
        return replace(
            state,
            selected_patient_id=None,
            active_session=None,
            pending_delete=None,
            active_view=View.PATIENTS,
        )

    if isinstance(action, RequestDelete):
        return replace(state, pending_delete=ConfirmationPrompt(patient_id=action.patient_id))

    if isinstance(action, CancelDelete):
        return replace(state, pending_delete=None)

    if isinstance(action, PatientDeleted):
        state = replace(state, pending_delete=None)
        session_gone = (
            state.active_session is not None
            and state.active_session.patient_id == action.patient_id
        )
        if state.selected_patient_id == action.patient_id or session_gone:
            return replace(
                state,
                selected_patient_id=None,
                active_session=None,
                active_view=View.PATIENTS,
            )
        return state

    raise TypeError(f"Unknown action: {action!r}")


def reduce(state: AppState, action) -> AppState:
    """Return the state after `action`.

    A pending delete confirmation belongs to the screen it was requested on
    and is dropped as soon as the active view or selection changes.
    """
    new = _apply(state, action)
    moved = (
        new.active_view is not state.active_view
        or new.selected_patient_id != state.selected_patient_id
    )
    if new.pending_delete is not None and moved:
        new = replace(new, pending_delete=None)
    return new


def resolve_view(state: AppState, patient_exists: bool = True) -> View:
    """Return the screen to render for `state`.

    Screens that need a selected patient or an active session fall back to
    the patient list when that entity is missing; every other view renders
    as requested.
    """
    view = state.active_view
    if view in PATIENT_VIEWS:
        if state.selected_patient_id is None or not patient_exists:
            return View.PATIENTS
        return view
    if view is View.SESSION:
        if state.active_session is None or not patient_exists:
            return View.PATIENTS
        return view
    if view in (
        View.DASHBOARD,
        View.PATIENTS,
        View.ADD_PATIENT,
        View.APPOINTMENTS,
        View.NEW_APPOINTMENT,
        View.EXPENSES,
        View.REPORTS,
    ):
        return view
    return View.PATIENTS


@dataclass
class SessionDraft:
    """Unsaved notes for the active session."""

    physical_notes: str = ""
    mental_notes: str = ""
    medicines: str = ""
    voice_note: str = ""
    recording: bool = False
    prescription_photo: str | None = None
    sent_prescriptions: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(
            (self.physical_notes.strip(), self.mental_notes.strip(),
             self.medicines.strip(), self.voice_note.strip())
        )
