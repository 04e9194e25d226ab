import logging
from datetime import timedelta

from core.database import get_db_context
from core.time_utils import today
from models.patient import Patient
from services.appointment_service import create_appointment
from services.expense_service import add_transaction
from services.medicine_service import add_medicine
from services.patient_service import save_patient

logger = logging.getLogger(__name__)

DEMO_PATIENTS = [
    {"name": "Sarah Johnson", "age": 34, "gender": "Female", "phone": "555-0101", "email": "sarah.j@example.com"},
    {"name": "Michael Chen", "age": 42, "gender": "Male", "phone": "555-0102"},
    {"name": "Emma Davis", "age": 28, "gender": "Female"},
    {"name": "David Wilson", "age": 51, "gender": "Male"},
]


def seed_demo_data(db) -> bool:
    """Insert demo records into an empty store. Returns True when data was added."""
    if db.query(Patient).first():
        return False

    patients = [save_patient(db, data) for data in DEMO_PATIENTS]

    day = today()
    schedule = [
        (patients[0], day, "10:00 AM", "remote"),
        (patients[1], day, "02:00 PM", "in-person"),
        (patients[2], day + timedelta(days=1), "11:00 AM", "remote"),
        (patients[3], day, "09:00 AM", "in-person"),
    ]
    for patient, when, slot, kind in schedule:
        create_appointment(db, patient.name, when, slot, kind, patient_code=patient.patient_id)

    add_medicine(db, patients[0].patient_id, "Sertraline", "50mg", "Once daily", "delivered")
    add_medicine(db, patients[0].patient_id, "Lorazepam", "0.5mg", "As needed", "in-transit")

    ledger = [
        ("income", "150", "Consultation - Sarah Johnson", "Session Fee", day - timedelta(days=3)),
        ("income", "200", "Consultation - Michael Chen", "Session Fee", day - timedelta(days=2)),
        ("expense", "50", "Medical supplies", "Equipment", day - timedelta(days=1)),
        ("expense", "120", "Software subscription", "Software", day),
    ]
    for tx_type, amount, description, category, when in ledger:
        add_transaction(db, {
            "type": tx_type, "amount": amount, "description": description,
            "category": category, "date": when,
        })

    logger.info("Demo data created.")
    return True


def ensure_demo_data():
    with get_db_context() as db:
        return seed_demo_data(db)
