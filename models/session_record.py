# models/session_record.py

from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from core.database import Base


class SessionRecord(Base):
    __tablename__ = "session_records"

    id = Column(Integer, primary_key=True, index=True)

    # Link to patient
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)

    date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    type = Column(String, nullable=False)  # in-person | remote
    status = Column(String, default="completed")  # completed | missed
    duration_minutes = Column(Integer, nullable=True)
    purpose = Column(String, nullable=True)

    physical_notes = Column(Text, nullable=True)
    mental_notes = Column(Text, nullable=True)
    medicines = Column(Text, nullable=True)
    voice_note = Column(Text, nullable=True)

    # ORM relationships
    patient = relationship("Patient", backref="sessions")

    @property
    def notes(self) -> str:
        parts = [self.mental_notes, self.physical_notes, self.voice_note]
        return "\n".join(p.strip() for p in parts if p and p.strip())

    def __repr__(self):
        return f"<SessionRecord {self.id} for Patient {self.patient_id} on {self.date}>"
