from collections import Counter
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from core.time_utils import month_key, today
from models.appointment import Appointment
from models.patient import Patient
from models.session_record import SessionRecord
from services.appointment_service import TIME_SLOTS
from services.expense_service import ledger_totals, list_transactions


@dataclass(frozen=True)
class DashboardStats:
    total_patients: int
    todays_appointments: int
    active_sessions: int
    monthly_income: Decimal


def dashboard_stats(db: Session, active_sessions: int = 0) -> DashboardStats:
    day = today()
    this_month = month_key(day)
    month_tx = [t for t in list_transactions(db) if month_key(t.date) == this_month]
    return DashboardStats(
        total_patients=db.query(Patient).count(),
        todays_appointments=db.query(Appointment).filter(Appointment.date == day).count(),
        active_sessions=active_sessions,
        monthly_income=ledger_totals(month_tx).income,
    )


def todays_activity(db: Session):
    """Today's appointments in slot order, for the dashboard activity list."""
    appointments = db.query(Appointment).filter(Appointment.date == today()).all()
    return sorted(
        appointments,
        key=lambda a: TIME_SLOTS.index(a.time) if a.time in TIME_SLOTS else len(TIME_SLOTS),
    )


def monthly_summary(transactions, sessions):
    """Per month (oldest first): income and completed session count."""
    months = {}
    keys = sorted({month_key(t.date) for t in transactions} | {month_key(s.date) for s in sessions})
    for key in keys:
        months[key] = {"month": key, "revenue": Decimal("0"), "sessions": 0}
    for t in transactions:
        if t.type == "income":
            months[month_key(t.date)]["revenue"] += t.amount
    for s in sessions:
        if s.status == "completed":
            months[month_key(s.date)]["sessions"] += 1
    return list(months.values())


def session_type_breakdown(sessions) -> dict:
    counts = Counter(s.type for s in sessions if s.status == "completed")
    return {t: counts.get(t, 0) for t in ("in-person", "remote")}


def build_report(db: Session) -> dict:
    transactions = list_transactions(db)
    sessions = db.query(SessionRecord).all()
    totals = ledger_totals(transactions)
    completed = sum(1 for s in sessions if s.status == "completed")
    avg = (totals.income / completed).quantize(Decimal("0.01")) if completed else Decimal("0.00")
    return {
        "total_revenue": totals.income,
        "total_expenses": totals.expenses,
        "net": totals.net,
        "total_sessions": completed,
        "average_session_value": avg,
        "monthly": monthly_summary(transactions, sessions),
        "session_types": session_type_breakdown(sessions),
        "recent_transactions": transactions[:5],
    }
