from .patient import Patient
from .appointment import Appointment
from .transaction import Transaction
from .session_record import SessionRecord
from .medicine import Medicine

__all__ = ["Patient", "Appointment", "Transaction", "SessionRecord", "Medicine"]
