from decimal import Decimal

from sqlalchemy import Column, Integer, String, Date
from core.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    transaction_id = Column(String, unique=True, index=True, nullable=False)

    type = Column(String, nullable=False)  # income | expense
    amount_cents = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    category = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)

    @property
    def amount(self) -> Decimal:
        return Decimal(self.amount_cents) / 100

    def __repr__(self):
        return f"<Transaction {self.transaction_id} {self.type} {self.amount}>"
