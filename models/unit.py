# models/unit.py
from sqlalchemy import Column, BigInteger, String, Boolean, DateTime, PrimaryKeyConstraint, func
from .base import Base


class Unit(Base):
     """
     Unit model - one row per minted asset in the ownership ledger.

     Ownership is independent of usage rights; see RentalRecord.
     """
     __tablename__ = "units"

     id = Column(BigInteger, primary_key=True, autoincrement=False)
     owner = Column(String(42), nullable=False, index=True)
     approved = Column(String(42), nullable=True)  # single-unit approval, cleared on transfer

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<Unit(id={self.id}, owner='{self.owner}')>"


class OperatorApproval(Base):
     """Blanket approval of an operator over every unit held by an owner."""
     __tablename__ = "operator_approvals"
     __table_args__ = (PrimaryKeyConstraint("owner", "operator"),)

     owner = Column(String(42), nullable=False)
     operator = Column(String(42), nullable=False)
     approved = Column(Boolean, default=False, nullable=False)

     def __repr__(self):
          return f"<OperatorApproval(owner='{self.owner}', operator='{self.operator}', approved={self.approved})>"
