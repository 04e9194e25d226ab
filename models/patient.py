# models/patient.py

from datetime import date

from sqlalchemy import Column, Integer, String, Date, Text
from core.database import Base


class Patient(Base):
    __tablename__ = "patients"
    # Never hand out a deleted patient's number again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)

    # Short human-friendly patient identifier (P001, P002...)
    patient_id = Column(String, unique=True, index=True, nullable=True)

    # Demographics
    name = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String, nullable=False)

    # Contact
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)
    emergency_contact = Column(String, nullable=True)

    # Clinical free text
    medical_history = Column(Text, nullable=True)
    current_medications = Column(Text, nullable=True)
    allergies = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Session tracking, only changed by completing a session
    last_session = Column(Date, default=date.today)
    session_type = Column(String, default="in-person")
    total_sessions = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Patient {self.patient_id} - {self.name}>"
