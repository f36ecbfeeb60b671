# models/rental_specs.py
from sqlalchemy import Column, String, Integer, Numeric, DateTime, func
from .base import Base


class RentalSpecs(Base):
     """
     RentalSpecs model - pricing policy keyed by the configuring address.

     Looked up through the unit's *current* owner at rental time, so a
     transferred unit is priced by its new owner's entry.
     """
     __tablename__ = "rental_specs"

     address = Column(String(42), primary_key=True)
     price_per_day = Column(Numeric(30, 8), default=0, nullable=False)
     max_days_per_rental = Column(Integer, default=0, nullable=False)

     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     def __repr__(self):
          return f"<RentalSpecs(address='{self.address}', price_per_day={self.price_per_day}, max_days={self.max_days_per_rental})>"
