import logging

from sqlalchemy.orm import Session

from core.state import ActiveSession, SESSION_TYPES, SessionDraft
from core.time_utils import today
from models.session_record import SessionRecord
from services.patient_service import get_patient

logger = logging.getLogger(__name__)

TRANSCRIPT_PLACEHOLDER = "[Voice note transcribed]"


# -----------------------------
# Complete the active session
# -----------------------------
def complete_session(db: Session, session: ActiveSession, draft: SessionDraft):
    """Store the draft as a session record and update the patient's counters.

    Returns the new record, or None when the patient no longer exists.
    """
    if session.session_type not in SESSION_TYPES:
        raise ValueError(f"Invalid session type: {session.session_type}")
    if draft.recording:
        raise ValueError("Stop the voice recording before saving the session.")

    patient = get_patient(db, session.patient_id)
    if not patient:
        return None

    record = SessionRecord(
        patient_id=patient.id,
        date=today(),
        type=session.session_type,
        status="completed",
        duration_minutes=session.duration_minutes,
        purpose=session.purpose or None,
        physical_notes=draft.physical_notes or None,
        mental_notes=draft.mental_notes or None,
        medicines=draft.medicines or None,
        voice_note=draft.voice_note or None,
    )
    db.add(record)

    patient.total_sessions = (patient.total_sessions or 0) + 1
    patient.last_session = record.date
    patient.session_type = session.session_type

    db.commit()
    db.refresh(record)
    logger.info("Completed %s session for %s (total %d)",
                session.session_type, patient.patient_id, patient.total_sessions)
    return record


def record_missed_session(db: Session, patient_id: str, session_type: str, notes: str = ""):
    patient = get_patient(db, patient_id)
    if not patient:
        return None
    record = SessionRecord(
        patient_id=patient.id,
        date=today(),
        type=session_type,
        status="missed",
        mental_notes=notes or None,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


# -----------------------------
# History
# -----------------------------
def get_sessions_for_patient(db: Session, patient_id: str):
    """Session records for a patient, newest first."""
    patient = get_patient(db, patient_id)
    if not patient:
        return []
    return (
        db.query(SessionRecord)
        .filter(SessionRecord.patient_id == patient.id)
        .order_by(SessionRecord.date.desc(), SessionRecord.id.desc())
        .all()
    )


# -----------------------------
# Draft helpers
# -----------------------------
def toggle_recording(draft: SessionDraft) -> bool:
    """Flip the recording flag; returns True when recording just stopped."""
    draft.recording = not draft.recording
    return not draft.recording


def append_transcript(draft: SessionDraft, text: str = TRANSCRIPT_PLACEHOLDER):
    draft.voice_note = f"{draft.voice_note}\n{text}".strip() if draft.voice_note else text


def send_prescription(draft: SessionDraft, session_type: str) -> str:
    """Send the attached prescription photo; remote sessions only."""
    if session_type != "remote":
        raise ValueError("Prescriptions can only be sent during remote sessions.")
    if not draft.prescription_photo:
        raise ValueError("Attach a prescription photo first.")
    draft.sent_prescriptions.append(draft.prescription_photo)
    sent = draft.prescription_photo
    draft.prescription_photo = None
    logger.info("Prescription %s sent", sent)
    return sent
