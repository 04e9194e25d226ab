import logging

from sqlalchemy.orm import Session

from models.medicine import Medicine
from services.patient_service import get_patient

logger = logging.getLogger(__name__)

DELIVERY_STATUSES = ("delivered", "in-transit", "not-shipped")
PLACEHOLDER_IMAGE = "placeholder-medicine.jpg"


def add_medicine(db: Session, patient_id: str, name: str, dosage: str = "", frequency: str = "",
                 delivery_status: str = "not-shipped"):
    name = (name or "").strip()
    if not name:
        raise ValueError("Medicine name cannot be empty.")
    if delivery_status not in DELIVERY_STATUSES:
        raise ValueError(f"Invalid delivery status: {delivery_status}")

    patient = get_patient(db, patient_id)
    if not patient:
        return None

    medicine = Medicine(
        patient_id=patient.id,
        name=name,
        dosage=(dosage or "").strip() or None,
        frequency=(frequency or "").strip() or None,
        delivery_status=delivery_status,
    )
    db.add(medicine)
    db.commit()
    db.refresh(medicine)
    return medicine


def list_medicines(db: Session, patient_id: str):
    patient = get_patient(db, patient_id)
    if not patient:
        return []
    return db.query(Medicine).filter(Medicine.patient_id == patient.id).order_by(Medicine.id).all()


def update_delivery_status(db: Session, medicine_id: int, status: str):
    if status not in DELIVERY_STATUSES:
        raise ValueError(f"Invalid delivery status: {status}")
    medicine = db.query(Medicine).filter(Medicine.id == medicine_id).first()
    if not medicine:
        return None
    medicine.delivery_status = status
    db.commit()
    db.refresh(medicine)
    return medicine


def attach_image(db: Session, medicine_id: int, image: str = PLACEHOLDER_IMAGE):
    """Store the uploaded image reference. Runs when the simulated upload finishes."""
    medicine = db.query(Medicine).filter(Medicine.id == medicine_id).first()
    if not medicine:
        # Medicine removed while the upload was pending
        logger.info("Upload for missing medicine %s dropped", medicine_id)
        return None
    medicine.image = image
    db.commit()
    db.refresh(medicine)
    return medicine
