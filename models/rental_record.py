# models/rental_record.py
"""
RentalRecord model - the current usage grant for a unit.

Records are never cleared when they lapse. An expired row keeps its stale
user/expiry/price until a new grant overwrites it or the unit is burned.
Whether a record is live is always derived from expires_at and the clock.
"""
from decimal import Decimal

from sqlalchemy import Column, BigInteger, Boolean, String, Numeric
from .base import Base


ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def is_actively_rented(current_user: str, expires_at: int, now: int) -> bool:
     """A grant is live iff it names a user and expires strictly after now."""
     return current_user != ZERO_ADDRESS and expires_at > now


class RentalRecord(Base):
     __tablename__ = "rental_records"

     unit_id = Column(BigInteger, primary_key=True, autoincrement=False)
     paid_price = Column(Numeric(30, 8), default=Decimal(0), nullable=False)
     current_user = Column(String(42), default=ZERO_ADDRESS, nullable=False)
     expires_at = Column(BigInteger, default=0, nullable=False)  # unix seconds, 0 = never rented

     @classmethod
     def empty(cls, unit_id: int) -> "RentalRecord":
          return cls(unit_id=unit_id, paid_price=Decimal(0), current_user=ZERO_ADDRESS, expires_at=0)

     def is_active(self, now: int) -> bool:
          return is_actively_rented(self.current_user, self.expires_at, now)

     def reset(self) -> None:
          """Back to the all-zero state; only burn does this."""
          self.paid_price = Decimal(0)
          self.current_user = ZERO_ADDRESS
          self.expires_at = 0

     def __repr__(self):
          return f"<RentalRecord(unit_id={self.unit_id}, user='{self.current_user}', expires_at={self.expires_at})>"


class RentalPermission(Base):
     """When permissioned is set, self-service rent is refused for the unit."""
     __tablename__ = "rental_permissions"

     unit_id = Column(BigInteger, primary_key=True, autoincrement=False)
     permissioned = Column(Boolean, default=False, nullable=False)
