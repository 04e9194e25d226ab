import logging
from datetime import date

from sqlalchemy.orm import Session

from core.helpers import timestamp_id
from core.time_utils import parse_date, today, week_dates
from models.appointment import Appointment

logger = logging.getLogger(__name__)

STATUSES = ("scheduled", "attended", "missed", "rescheduled")
APPOINTMENT_TYPES = ("in-person", "remote")

TIME_SLOTS = [
    "09:00 AM", "09:30 AM", "10:00 AM", "10:30 AM", "11:00 AM", "11:30 AM",
    "12:00 PM", "12:30 PM", "01:00 PM", "01:30 PM", "02:00 PM", "02:30 PM",
    "03:00 PM", "03:30 PM", "04:00 PM", "04:30 PM", "05:00 PM", "05:30 PM",
]


def _new_appointment_id(db: Session) -> str:
    code = timestamp_id()
    while db.query(Appointment).filter(Appointment.appointment_id == code).first():
        code = str(int(code) + 1)
    return code


# -----------------------------
# Create an appointment
# -----------------------------
def create_appointment(
    db: Session,
    patient_name: str,
    appointment_date,
    time: str,
    type: str = "in-person",
    *,
    patient_code: str | None = None,
    notes: str = "",
    appointment_id: str | None = None,
):
    patient_name = (patient_name or "").strip()
    time = (time or "").strip()
    appointment_date = parse_date(appointment_date)
    if not appointment_date or not time or not patient_name:
        raise ValueError("Please fill in all required fields")
    if type not in APPOINTMENT_TYPES:
        raise ValueError(f"Invalid appointment type: {type}")

    appointment = Appointment(
        appointment_id=appointment_id or _new_appointment_id(db),
        patient_name=patient_name,
        patient_code=patient_code,
        date=appointment_date,
        time=time,
        type=type,
        status="scheduled",
        notes=(notes or "").strip() or None,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    logger.info("Scheduled appointment %s for %s on %s %s",
                appointment.appointment_id, patient_name, appointment_date, time)
    return appointment


# -----------------------------
# Status transitions
# -----------------------------
def set_status(db: Session, appointment_id: str, new_status: str):
    """Replace the status of one appointment. Any status may follow any other."""
    if new_status not in STATUSES:
        raise ValueError(f"Invalid status: {new_status}")

    appointment = get_appointment(db, appointment_id)
    if not appointment:
        return None

    appointment.status = new_status
    db.commit()
    db.refresh(appointment)
    logger.info("Appointment %s marked %s", appointment_id, new_status)
    return appointment


# -----------------------------
# Queries
# -----------------------------
def get_appointment(db: Session, appointment_id: str):
    return db.query(Appointment).filter(Appointment.appointment_id == appointment_id).first()


def list_appointments(db: Session):
    return db.query(Appointment).order_by(Appointment.id.asc()).all()


def filter_by_patient_name(appointments, search: str):
    q = (search or "").strip().lower()
    if not q:
        return list(appointments)
    return [a for a in appointments if q in (a.patient_name or "").lower()]


def appointments_for_date(appointments, day: date):
    return [a for a in appointments if a.date == day]


def appointments_for_week(appointments, day: date):
    """Appointments grouped per day of the week containing `day`."""
    return {d: appointments_for_date(appointments, d) for d in week_dates(day)}


def next_appointment(db: Session, patient_code: str | None, patient_name: str | None, on_or_after: date | None = None):
    """The earliest scheduled appointment matching the patient's code or name."""
    start = on_or_after or today()
    candidates = [
        a for a in list_appointments(db)
        if a.status == "scheduled"
        and a.date >= start
        and ((patient_code and a.patient_code == patient_code)
             or (patient_name and a.patient_name == patient_name))
    ]
    candidates.sort(key=lambda a: (a.date, TIME_SLOTS.index(a.time) if a.time in TIME_SLOTS else len(TIME_SLOTS)))
    return candidates[0] if candidates else None
