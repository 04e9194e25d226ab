from sqlalchemy import Column, Integer, String, Date, Text
from core.database import Base


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(String, unique=True, index=True, nullable=False)

    # Denormalized; not kept in sync with the patients table
    patient_name = Column(String, nullable=False)
    patient_code = Column(String, index=True, nullable=True)  # e.g., P001

    date = Column(Date, nullable=False, index=True)
    time = Column(String, nullable=False)  # slot label, e.g. "10:00 AM"
    type = Column(String, default="in-person", nullable=False)
    status = Column(String, default="scheduled", nullable=False)
    notes = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Appointment {self.appointment_id} {self.patient_name} {self.date} {self.time} ({self.status})>"
