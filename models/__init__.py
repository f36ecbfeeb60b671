# models/__init__.py
from .base import Base
from .unit import Unit, OperatorApproval
from .rental_specs import RentalSpecs
from .rental_record import RentalRecord, RentalPermission, ZERO_ADDRESS, is_actively_rented
from .registry_treasury import RegistryTreasury, TREASURY_ID
from .user_updated_event import UserUpdatedEvent
from .payout import Payout, PayoutKind

__all__ = [
     "Base",
     "Unit",
     "OperatorApproval",
     "RentalSpecs",
     "RentalRecord",
     "RentalPermission",
     "ZERO_ADDRESS",
     "is_actively_rented",
     "RegistryTreasury",
     "TREASURY_ID",
     "UserUpdatedEvent",
     "Payout",
     "PayoutKind",
]
