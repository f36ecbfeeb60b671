# services/notification_service.py
"""
Rights-change notifications.

Each grant is appended to the user_updated_events log inside the same
transaction as the grant. Delivery to an external indexer happens afterwards,
via a background task, so a slow or failing webhook never holds the registry
lock or undoes a committed rental.
"""
import logging
import os
from typing import List

import requests
from dotenv import load_dotenv
from sqlalchemy.orm import Session

from models import UserUpdatedEvent

load_dotenv()

logger = logging.getLogger(__name__)

NOTIFY_WEBHOOK_URL = os.getenv("NOTIFY_WEBHOOK_URL")
WEBHOOK_TIMEOUT_SECONDS = 5


def emit_user_updated(db: Session, unit_id: int, user: str, expires_at: int) -> UserUpdatedEvent:
     event = UserUpdatedEvent(unit_id=unit_id, user=user, expires_at=expires_at)
     db.add(event)
     db.flush()
     logger.info("UpdateUser unit=%s user=%s expires=%s", unit_id, user, expires_at)
     return event


def list_user_updated(db: Session, unit_id: int) -> List[UserUpdatedEvent]:
     return (
          db.query(UserUpdatedEvent)
          .filter(UserUpdatedEvent.unit_id == unit_id)
          .order_by(UserUpdatedEvent.id)
          .all()
     )


def publish_user_updated(payload: dict, url: str = None) -> bool:
     """POST an event to the configured webhook. Returns False if nothing was delivered."""
     url = url or NOTIFY_WEBHOOK_URL
     if not url:
          return False
     try:
          response = requests.post(
               url,
               json={"event": "UpdateUser", "data": payload},
               timeout=WEBHOOK_TIMEOUT_SECONDS,
          )
     except requests.RequestException as e:
          logger.warning("Webhook delivery failed for unit %s: %s", payload.get("unit_id"), e)
          return False
     if response.status_code not in [200, 201, 202, 204]:
          logger.warning("Webhook rejected event for unit %s: %s", payload.get("unit_id"), response.status_code)
          return False
     return True
