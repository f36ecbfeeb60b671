# models/registry_treasury.py
"""
RegistryTreasury model - the single row holding the registry's funds.

held_balance is everything the registry currently holds. The slice of it that
came from paid rentals and has not been withdrawn is unclaimed_rental_revenue;
the remainder is other income (primary sales, plain deposits).
unclaimed_rental_revenue <= held_balance holds after every committed transaction.
"""
from decimal import Decimal

from sqlalchemy import Column, Integer, BigInteger, Numeric
from .base import Base


TREASURY_ID = 1


class RegistryTreasury(Base):
     __tablename__ = "registry_treasury"

     id = Column(Integer, primary_key=True, autoincrement=False, default=TREASURY_ID)
     held_balance = Column(Numeric(30, 8), default=Decimal(0), nullable=False)
     unclaimed_rental_revenue = Column(Numeric(30, 8), default=Decimal(0), nullable=False)
     total_minted = Column(BigInteger, default=0, nullable=False)

     @property
     def other_income(self) -> Decimal:
          return self.held_balance - self.unclaimed_rental_revenue

     def __repr__(self):
          return (
               f"<RegistryTreasury(held={self.held_balance}, "
               f"unclaimed_rental={self.unclaimed_rental_revenue}, minted={self.total_minted})>"
          )
