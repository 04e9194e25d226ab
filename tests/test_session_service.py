"""Tests for session completion and the session draft."""

from datetime import date

import pytest

from core.state import ActiveSession, SessionDraft
from services.patient_service import delete_patient, get_patient, save_patient
from services.session_service import (
    TRANSCRIPT_PLACEHOLDER,
    append_transcript,
    complete_session,
    get_sessions_for_patient,
    record_missed_session,
    send_prescription,
    toggle_recording,
)


@pytest.fixture
def ann(db, ann_form):
    return save_patient(db, ann_form)


def test_complete_session_updates_patient(db, ann):
    draft = SessionDraft(physical_notes="Sleeping better", mental_notes="Less anxious")
    record = complete_session(db, ActiveSession(ann.patient_id, "remote", 45, "Follow-up"), draft)

    patient = get_patient(db, ann.patient_id)
    assert patient.total_sessions == 1
    assert patient.session_type == "remote"
    assert patient.last_session == date.today()
    assert record.status == "completed"
    assert record.duration_minutes == 45
    assert "Less anxious" in record.notes


def test_history_newest_first(db, ann):
    record_missed_session(db, ann.patient_id, "remote")
    complete_session(db, ActiveSession(ann.patient_id), SessionDraft())
    history = get_sessions_for_patient(db, ann.patient_id)
    assert [s.status for s in history] == ["completed", "missed"]
    # Missed sessions do not count
    assert get_patient(db, ann.patient_id).total_sessions == 1


def test_complete_session_for_deleted_patient(db, ann):
    delete_patient(db, ann.patient_id)
    assert complete_session(db, ActiveSession(ann.patient_id), SessionDraft()) is None


def test_cannot_save_while_recording(db, ann):
    with pytest.raises(ValueError, match="recording"):
        complete_session(db, ActiveSession(ann.patient_id), SessionDraft(recording=True))
    assert get_patient(db, ann.patient_id).total_sessions == 0


def test_toggle_recording_and_transcript():
    draft = SessionDraft()
    assert toggle_recording(draft) is False
    assert draft.recording
    assert toggle_recording(draft) is True
    append_transcript(draft)
    append_transcript(draft, "second")
    assert draft.voice_note == f"{TRANSCRIPT_PLACEHOLDER}\nsecond"


def test_send_prescription_remote_only():
    draft = SessionDraft(prescription_photo="rx.jpg")
    with pytest.raises(ValueError, match="remote"):
        send_prescription(draft, "in-person")
    assert send_prescription(draft, "remote") == "rx.jpg"
    assert draft.sent_prescriptions == ["rx.jpg"]
    with pytest.raises(ValueError, match="photo"):
        send_prescription(draft, "remote")


def test_draft_is_empty():
    assert SessionDraft().is_empty()
    assert not SessionDraft(voice_note="hi").is_empty()
