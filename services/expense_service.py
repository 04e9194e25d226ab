import csv
import io
import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from core.helpers import parse_amount, timestamp_id, to_cents
from core.time_utils import month_key, parse_date, today
from models.transaction import Transaction

logger = logging.getLogger(__name__)

TRANSACTION_TYPES = ("income", "expense")
CATEGORIES = ["Session Fee", "Equipment", "Software", "Rent", "Utilities", "Other"]


@dataclass(frozen=True)
class LedgerTotals:
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


def empty_transaction_form() -> dict:
    return {
        "type": "income",
        "amount": "",
        "description": "",
        "category": CATEGORIES[0],
        "date": today().isoformat(),
    }


def _new_transaction_id(db: Session) -> str:
    code = timestamp_id()
    while db.query(Transaction).filter(Transaction.transaction_id == code).first():
        code = str(int(code) + 1)
    return code


# -----------------------------
# Add a transaction
# -----------------------------
def add_transaction(db: Session, form: dict):
    """Validate the entry form and store a new ledger record.

    Raises ValueError without touching the ledger when amount,
    description or category is missing.
    """
    amount_text = str(form.get("amount") or "").strip()
    description = (form.get("description") or "").strip()
    category = (form.get("category") or "").strip()
    if not amount_text or not description or not category:
        raise ValueError("Please fill in all required fields")

    tx_type = form.get("type") or "income"
    if tx_type not in TRANSACTION_TYPES:
        raise ValueError(f"Invalid transaction type: {tx_type}")

    amount = parse_amount(amount_text)
    tx_date = parse_date(form.get("date")) or today()

    transaction = Transaction(
        transaction_id=form.get("transaction_id") or _new_transaction_id(db),
        type=tx_type,
        amount_cents=to_cents(amount),
        description=description,
        category=category,
        date=tx_date,
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info("Recorded %s %s (%s)", tx_type, amount, category)
    return transaction


# -----------------------------
# Queries and derived values
# -----------------------------
def list_transactions(db: Session):
    """Newest entry first."""
    return db.query(Transaction).order_by(Transaction.id.desc()).all()


def filter_transactions(transactions, tx_type: str = "all", month: str | None = None):
    result = list(transactions)
    if tx_type and tx_type != "all":
        result = [t for t in result if t.type == tx_type]
    if month:
        result = [t for t in result if month_key(t.date) == month]
    return result


def ledger_totals(transactions) -> LedgerTotals:
    income = sum((t.amount for t in transactions if t.type == "income"), Decimal("0"))
    expenses = sum((t.amount for t in transactions if t.type == "expense"), Decimal("0"))
    return LedgerTotals(income=income, expenses=expenses)


def available_months(transactions):
    return sorted({month_key(t.date) for t in transactions}, reverse=True)


def export_csv(transactions) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(["id", "date", "type", "category", "description", "amount"])
    for t in transactions:
        writer.writerow([t.transaction_id, t.date.isoformat(), t.type, t.category, t.description, f"{t.amount:.2f}"])
    return buf.getvalue()
