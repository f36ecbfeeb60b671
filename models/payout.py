# models/payout.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum, func
from .base import Base


class PayoutKind(str, enum.Enum):
     """Which pool a payout was drawn from."""
     RENTAL_REVENUE = "RENTAL_REVENUE"
     TOKEN_REVENUE = "TOKEN_REVENUE"


class Payout(Base):
     """
     Payout model - record of value sent out of the registry.
     Append-only, like the treasury's other history.
     """
     __tablename__ = "payouts"

     id = Column(Integer, primary_key=True, autoincrement=True)
     recipient = Column(String(42), nullable=False, index=True)
     amount = Column(Numeric(30, 8), nullable=False)
     kind = Column(
          Enum(PayoutKind, name="payout_kind", create_constraint=True),
          nullable=False,
     )
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<Payout(id={self.id}, recipient='{self.recipient}', amount={self.amount}, kind='{self.kind.value}')>"
