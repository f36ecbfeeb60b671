# models/user_updated_event.py
"""
UserUpdatedEvent model - append-only log of usage-right grants.

One row per successful setUser/rent, consumed by indexers through the
events endpoint or the optional webhook. Rows are never updated or deleted.
"""
from sqlalchemy import Column, Integer, BigInteger, String, DateTime, func
from .base import Base


class UserUpdatedEvent(Base):
     __tablename__ = "user_updated_events"

     id = Column(Integer, primary_key=True, autoincrement=True)
     unit_id = Column(BigInteger, nullable=False, index=True)
     user = Column(String(42), nullable=False)
     expires_at = Column(BigInteger, nullable=False)
     emitted_at = Column(DateTime, server_default=func.now(), nullable=False)

     def to_payload(self) -> dict:
          return {"unit_id": self.unit_id, "user": self.user, "expires_at": self.expires_at}

     def __repr__(self):
          return f"<UserUpdatedEvent(unit_id={self.unit_id}, user='{self.user}', expires_at={self.expires_at})>"
