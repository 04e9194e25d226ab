"""Tests for dispatching intents against a session store."""

from core.session_manager import (
    DRAFT_KEY,
    clear_session,
    confirm_delete,
    dispatch,
    get_draft,
    get_state,
    get_task_group,
)
from core.state import (
    ConfirmSession,
    Navigate,
    RequestDelete,
    SelectPatient,
    StartSession,
    View,
)
from services.patient_service import get_patient, save_patient


def test_dispatch_stores_new_state(store):
    state = dispatch(Navigate(View.APPOINTMENTS), store)
    assert get_state(store) is state
    assert state.active_view is View.APPOINTMENTS


def test_leaving_screen_cancels_its_tasks(store):
    dispatch(Navigate(View.PATIENT_DETAIL), store)
    ran = []
    task = get_task_group(View.PATIENT_DETAIL, store).start("upload_1", 0, lambda: ran.append(1))

    dispatch(Navigate(View.PATIENTS), store)

    assert task.cancelled
    assert ran == []
    # A fresh group is created when the screen is entered again
    assert get_task_group(View.PATIENT_DETAIL, store).pending() == []


def test_staying_on_screen_keeps_tasks(store):
    dispatch(Navigate(View.PATIENT_DETAIL), store)
    group = get_task_group(View.PATIENT_DETAIL, store)
    task = group.start("upload_1", 10, lambda: None)
    dispatch(Navigate(View.PATIENT_DETAIL), store)
    assert not task.cancelled
    assert group.pending() == [task]


def test_leaving_session_discards_draft(store):
    dispatch(StartSession("P001"), store)
    dispatch(ConfirmSession("in-person"), store)
    get_draft(store).mental_notes = "Calmer this week"

    dispatch(Navigate(View.EXPENSES), store)

    assert DRAFT_KEY not in store
    assert get_draft(store).mental_notes == ""


def test_transcription_after_leaving_is_dropped(store):
    dispatch(StartSession("P001"), store)
    dispatch(ConfirmSession("remote"), store)
    draft = get_draft(store)
    group = get_task_group(View.SESSION, store)
    group.start("transcribe", 0, lambda: setattr(draft, "voice_note", "late"))

    dispatch(Navigate(View.PATIENTS), store)
    group.poll()

    assert draft.voice_note == ""


def test_confirm_delete_selected_patient(db, store, ann_form):
    patient = save_patient(db, ann_form)
    dispatch(SelectPatient(patient.patient_id, View.PATIENT_DETAIL), store)
    dispatch(RequestDelete(patient.patient_id), store)

    assert confirm_delete(patient.patient_id, db, store) is True

    state = get_state(store)
    assert get_patient(db, patient.patient_id) is None
    assert state.selected_patient_id is None
    assert state.active_view is View.PATIENTS
    assert state.pending_delete is None


def test_confirm_delete_other_patient_keeps_selection(db, store, ann_form):
    ann = save_patient(db, ann_form)
    bob = save_patient(db, {"name": "Bob", "age": 52, "gender": "Male"})
    dispatch(SelectPatient(ann.patient_id, View.PATIENT_DETAIL), store)
    dispatch(RequestDelete(bob.patient_id), store)

    confirm_delete(bob.patient_id, db, store)

    state = get_state(store)
    assert state.selected_patient_id == ann.patient_id
    assert state.active_view is View.PATIENT_DETAIL


def test_clear_session(store):
    dispatch(Navigate(View.REPORTS), store)
    clear_session(store)
    assert get_state(store).active_view is View.DASHBOARD
