# services/__init__.py
from .clock import Clock, SECONDS_PER_DAY, days_between, system_clock
from .ownership_service import OwnershipService
from .rental_service import RentalService
from .treasury_service import PayoutGateway, TreasuryService, lock_treasury, read_treasury
from .interface_service import supports_interface
from .notification_service import emit_user_updated, list_user_updated, publish_user_updated

__all__ = [
     "Clock",
     "SECONDS_PER_DAY",
     "days_between",
     "system_clock",
     "OwnershipService",
     "RentalService",
     "PayoutGateway",
     "TreasuryService",
     "lock_treasury",
     "read_treasury",
     "supports_interface",
     "emit_user_updated",
     "list_user_updated",
     "publish_user_updated",
]
