import logging

from sqlalchemy.orm import Session

from core.helpers import coerce_age
from core.time_utils import today
from models.medicine import Medicine
from models.patient import Patient
from models.session_record import SessionRecord

logger = logging.getLogger(__name__)

GENDERS = ["Male", "Female", "Other"]

# Fields the add/edit form is allowed to change
EDITABLE_FIELDS = (
    "name",
    "age",
    "gender",
    "phone",
    "email",
    "address",
    "emergency_contact",
    "medical_history",
    "current_medications",
    "allergies",
    "notes",
)


def _normalize_gender(value) -> str:
    text = (value or "").strip()
    for g in GENDERS:
        if text.lower() == g.lower():
            return g
    raise ValueError(f"Invalid gender: {value!r}. Expected one of {', '.join(GENDERS)}.")


def _clean_form(data: dict) -> dict:
    name = (data.get("name") or "").strip()
    if not name:
        raise ValueError("Name cannot be empty.")

    cleaned = {}
    for field in EDITABLE_FIELDS:
        value = data.get(field)
        if isinstance(value, str):
            value = value.strip() or None
        cleaned[field] = value
    cleaned["name"] = name
    cleaned["age"] = coerce_age(data.get("age"))
    cleaned["gender"] = _normalize_gender(data.get("gender"))
    return cleaned


# ------------------------------------------
# Create or update a patient from form data
# ------------------------------------------
def save_patient(db: Session, data: dict):
    """Create a patient, or update one in place when data has a patient_id.

    Updates never touch last_session, session_type or total_sessions.
    Returns None when the patient_id does not exist.
    """
    cleaned = _clean_form(data)
    patient_code = (data.get("patient_id") or "").strip()

    if patient_code:
        patient = get_patient(db, patient_code)
        if not patient:
            return None
        for field, value in cleaned.items():
            setattr(patient, field, value)
        db.commit()
        db.refresh(patient)
        logger.info("Updated patient %s", patient.patient_id)
        return patient

    patient = Patient(
        **cleaned,
        last_session=today(),
        session_type="in-person",
        total_sessions=0,
    )
    db.add(patient)
    db.flush()  # assigns the primary key the code is derived from
    patient.patient_id = f"P{patient.id:03d}"
    db.commit()
    db.refresh(patient)
    logger.info("Created patient %s", patient.patient_id)
    return patient


def create_patient(db: Session, name: str, age, gender: str, **extra):
    return save_patient(db, {"name": name, "age": age, "gender": gender, **extra})


# ------------------------------------------
# Fetch patients
# ------------------------------------------
def list_patients(db: Session, search: str = ""):
    """All patients in insertion order, optionally filtered by name or code."""
    patients = db.query(Patient).order_by(Patient.id.asc()).all()
    q = (search or "").strip().lower()
    if q:
        patients = [
            p for p in patients
            if q in (p.name or "").lower() or q in (p.patient_id or "").lower()
        ]
    return patients


def get_patient(db: Session, patient_id: str | None):
    if not patient_id:
        return None
    return db.query(Patient).filter(Patient.patient_id == patient_id).first()


def search_patient_names(db: Session, term: str, limit: int = 10):
    """Suggestions for the appointment patient picker: 'Name (P001)'."""
    return [f"{p.name} ({p.patient_id})" for p in list_patients(db, term)][:limit]


# ------------------------------------------
# Delete a patient and their history
# ------------------------------------------
def delete_patient(db: Session, patient_id: str) -> bool:
    patient = get_patient(db, patient_id)
    if not patient:
        return False

    # Delete dependent rows first to avoid FK constraint issues
    db.query(SessionRecord).filter(SessionRecord.patient_id == patient.id).delete()
    db.query(Medicine).filter(Medicine.patient_id == patient.id).delete()
    db.delete(patient)
    db.commit()
    logger.info("Deleted patient %s", patient_id)
    return True


def patient_form_defaults(patient: Patient | None = None) -> dict:
    """Initial values for the add/edit form."""
    values = {field: "" for field in EDITABLE_FIELDS}
    if patient is None:
        values["gender"] = GENDERS[0]
        return values
    for field in EDITABLE_FIELDS:
        value = getattr(patient, field)
        values[field] = value if value is not None else ""
    values["patient_id"] = patient.patient_id
    return values
