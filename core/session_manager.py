import logging

import streamlit as st

from core.state import AppState, PatientDeleted, SessionDraft, View, reduce
from core.tasks import TaskGroup

logger = logging.getLogger(__name__)

STATE_KEY = "app_state"
DRAFT_KEY = "session_draft"
TASKS_KEY = "screen_tasks"


def _store(store=None):
    return st.session_state if store is None else store


def init_session_state(store=None):
    """Ensure required session keys exist."""
    store = _store(store)
    if STATE_KEY not in store:
        store[STATE_KEY] = AppState()
    if TASKS_KEY not in store:
        store[TASKS_KEY] = {}


def get_state(store=None) -> AppState:
    init_session_state(store)
    return _store(store)[STATE_KEY]


def get_task_group(view: View, store=None) -> TaskGroup:
    """Return the task group owned by `view`, creating it on first use."""
    init_session_state(store)
    groups = _store(store)[TASKS_KEY]
    if view.value not in groups:
        groups[view.value] = TaskGroup(owner=view.value)
    return groups[view.value]


def get_draft(store=None) -> SessionDraft:
    store = _store(store)
    if DRAFT_KEY not in store:
        store[DRAFT_KEY] = SessionDraft()
    return store[DRAFT_KEY]


def discard_draft(store=None):
    _store(store).pop(DRAFT_KEY, None)


def _leave(view: View, store):
    """Drop everything owned by the screen being left."""
    groups = store.get(TASKS_KEY) or {}
    group = groups.pop(view.value, None)
    if group is not None:
        group.cancel_all()
    if view is View.SESSION:
        discard_draft(store)


def dispatch(action, store=None) -> AppState:
    """Apply an intent to the application state and return the new state."""
    store = _store(store)
    old = get_state(store)
    new = reduce(old, action)
    if old.active_view is not new.active_view:
        _leave(old.active_view, store)
    if old.active_session is not None and new.active_session != old.active_session:
        discard_draft(store)
    store[STATE_KEY] = new
    logger.debug("%s: %s -> %s", type(action).__name__, old.active_view.value, new.active_view.value)
    return new


def confirm_delete(patient_id: str, db, store=None) -> bool:
    """Second step of the delete flow: remove the patient, then update the view state."""
    from services.patient_service import delete_patient

    removed = delete_patient(db, patient_id)
    dispatch(PatientDeleted(patient_id), store)
    return removed


def clear_session(store=None):
    """Reset the application state without touching stored records."""
    store = _store(store)
    for key in (STATE_KEY, DRAFT_KEY):
        store.pop(key, None)
    for group in (store.pop(TASKS_KEY, None) or {}).values():
        group.cancel_all()
