# services/rental_service.py
"""
Rental Service - time-bounded usage rights layered on the ownership ledger.

Two ways to grant a unit's usage right:
1. set_user: the owner (or an approved party) assigns a user for free
2. rent: anyone pays the owner's configured price and becomes the user

A grant is live while expires_at is strictly in the future. Nothing runs at
expiry; every read re-derives liveness from the clock, and the stale record
stays in place until the next grant or a burn.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from models import RentalRecord, RentalPermission, RentalSpecs, UserUpdatedEvent, ZERO_ADDRESS
from services.clock import Clock, days_between, system_clock
from services.errors import (
     AlreadyRented,
     ExceedsMaxRentalDays,
     InsufficientFunds,
     InvalidExpiration,
     InvalidUser,
     NotApprovedOrOwner,
     NotMinted,
     PermissionedRental,
)
from services.notification_service import emit_user_updated
from services.ownership_service import OwnershipService
from services.treasury_service import TreasuryService, lock_treasury
from utils.address import normalize_address

logger = logging.getLogger(__name__)


class RentalService:

     def __init__(
          self,
          db: Session,
          clock: Clock = system_clock,
          ownership: Optional[OwnershipService] = None,
          treasury: Optional[TreasuryService] = None,
     ):
          self.db = db
          self.clock = clock
          self.treasury = treasury or TreasuryService(db, operator=None)
          self.ownership = ownership or OwnershipService(db, treasury=self.treasury)
          self.emitted: List[UserUpdatedEvent] = []  # grants announced through this service

     # ------------------------------------------------------------------
     # Rental specs & permission flag
     # ------------------------------------------------------------------

     def set_rental_specs(self, caller: str, price_per_day: Decimal, max_days_per_rental: int) -> RentalSpecs:
          """Replace the caller's own pricing policy. No ownership check: it's keyed by caller."""
          caller = normalize_address(caller)
          lock_treasury(self.db)
          specs = self.db.query(RentalSpecs).filter(RentalSpecs.address == caller).first()
          if specs is None:
               specs = RentalSpecs(address=caller)
               self.db.add(specs)
          specs.price_per_day = price_per_day
          specs.max_days_per_rental = max_days_per_rental
          self.db.flush()
          return specs

     def get_rental_specs(self, address: str) -> RentalSpecs:
          """Stored specs for address, or a zero-valued pair if it never configured any."""
          address = normalize_address(address)
          specs = self.db.query(RentalSpecs).filter(RentalSpecs.address == address).first()
          if specs is None:
               return RentalSpecs(address=address, price_per_day=Decimal(0), max_days_per_rental=0)
          return specs

     def set_permissioned_rental(self, caller: str, unit_id: int, permissioned: bool) -> RentalPermission:
          lock_treasury(self.db)
          if not self.ownership.is_approved_or_owner(caller, unit_id):
               raise NotApprovedOrOwner(f"{caller} is not approved for unit {unit_id}")
          flag = self.db.get(RentalPermission, unit_id)
          if flag is None:
               flag = RentalPermission(unit_id=unit_id)
               self.db.add(flag)
          flag.permissioned = permissioned
          self.db.flush()
          return flag

     def get_permissioned_rental(self, unit_id: int) -> bool:
          flag = self.db.get(RentalPermission, unit_id)
          return bool(flag and flag.permissioned)

     # ------------------------------------------------------------------
     # Pricing
     # ------------------------------------------------------------------

     def _estimate(self, specs: RentalSpecs, now: int, expires_at: int) -> Tuple[int, Decimal]:
          # Both the duration cap and the price use this same rounding
          days = days_between(now, expires_at)
          return days, Decimal(specs.price_per_day) * days

     def get_rental_estimate(self, owner: str, expires_at: int) -> Tuple[int, Decimal]:
          """
          Days (rounded up) and total price to rent until expires_at from owner.

          Raises:
               InvalidExpiration: expires_at is not in the future
          """
          now = self.clock()
          if expires_at <= now:
               raise InvalidExpiration(f"Expiration {expires_at} is not after {now}")
          return self._estimate(self.get_rental_specs(owner), now, expires_at)

     # ------------------------------------------------------------------
     # Records & queries
     # ------------------------------------------------------------------

     def get_rental_info(self, unit_id: int) -> RentalRecord:
          """Raw record, expired or not. Never-rented units read as the empty record."""
          record = self.db.get(RentalRecord, unit_id)
          return record if record is not None else RentalRecord.empty(unit_id)

     def _writable_record(self, unit_id: int) -> RentalRecord:
          record = self.db.get(RentalRecord, unit_id)
          if record is None:
               record = RentalRecord.empty(unit_id)
               self.db.add(record)
          return record

     def user_of(self, unit_id: int) -> str:
          """Current user if the grant is live right now, else the zero address."""
          record = self.get_rental_info(unit_id)
          if record.is_active(self.clock()):
               return record.current_user
          return ZERO_ADDRESS

     def user_expires(self, unit_id: int) -> int:
          return self.get_rental_info(unit_id).expires_at

     def _check_max_days(self, specs: RentalSpecs, days: int) -> None:
          if days > specs.max_days_per_rental:
               raise ExceedsMaxRentalDays(
                    f"{days} days exceeds the maximum of {specs.max_days_per_rental}"
               )

     # ------------------------------------------------------------------
     # Grants
     # ------------------------------------------------------------------

     def set_user(self, caller: str, unit_id: int, user: str, expires_at: int) -> RentalRecord:
          """
          Assign usage of a unit without payment.

          Checks run in a fixed order so each failure is reported the same way
          every time: minted, not rented, valid user, future expiry, within the
          owner's day cap, caller approved.
          """
          lock_treasury(self.db)
          now = self.clock()

          if not self.ownership.exists(unit_id):
               raise NotMinted(f"Unit {unit_id} has not been minted")
          if self.get_rental_info(unit_id).is_active(now):
               raise AlreadyRented(f"Unit {unit_id} is already rented")
          user = normalize_address(user)
          if user == ZERO_ADDRESS:
               raise InvalidUser("User cannot be the zero address")
          if expires_at <= now:
               raise InvalidExpiration(f"Expiration {expires_at} is not after {now}")

          specs = self.get_rental_specs(self.ownership.owner_of(unit_id))
          self._check_max_days(specs, days_between(now, expires_at))

          if not self.ownership.is_approved_or_owner(caller, unit_id):
               raise NotApprovedOrOwner(f"{caller} is not approved for unit {unit_id}")

          record = self._writable_record(unit_id)
          record.paid_price = Decimal(0)
          record.current_user = user
          record.expires_at = expires_at
          self.db.flush()

          self.emitted.append(emit_user_updated(self.db, unit_id, user, expires_at))
          return record

     def rent(self, caller: str, unit_id: int, expires_at: int, payment: Decimal) -> RentalRecord:
          """
          Pay for and take the usage right of a unit until expires_at.

          The full payment is kept, including any amount above the estimate, and
          all of it goes to the rental pool.
          """
          lock_treasury(self.db)
          now = self.clock()

          if self.get_rental_info(unit_id).is_active(now):
               raise AlreadyRented(f"Unit {unit_id} is already rented")
          caller = normalize_address(caller)
          if caller == ZERO_ADDRESS:
               raise InvalidUser("Renter cannot be the zero address")
          if expires_at <= now:
               raise InvalidExpiration(f"Expiration {expires_at} is not after {now}")
          if self.get_permissioned_rental(unit_id):
               raise PermissionedRental(f"Unit {unit_id} can only be assigned by its owner")

          specs = self.get_rental_specs(self.ownership.owner_of(unit_id))
          days, price = self._estimate(specs, now, expires_at)
          self._check_max_days(specs, days)
          if payment < price:
               raise InsufficientFunds(f"Rental costs {price}, received {payment}")

          record = self._writable_record(unit_id)
          record.paid_price = payment
          record.current_user = caller
          record.expires_at = expires_at
          self.treasury.receive(payment, rental=True)
          self.db.flush()

          self.emitted.append(emit_user_updated(self.db, unit_id, caller, expires_at))
          logger.info("Unit %s rented by %s for %s days at %s", unit_id, caller, days, payment)
          return record

     # ------------------------------------------------------------------
     # Lifecycle
     # ------------------------------------------------------------------

     def burn(self, caller: str, unit_id: int) -> None:
          """
          Destroy a unit that is not currently rented and clear its rental record.
          A lapsed grant does not block the burn.
          """
          lock_treasury(self.db)
          if not self.ownership.is_approved_or_owner(caller, unit_id):
               raise NotApprovedOrOwner(f"{caller} is not approved for unit {unit_id}")
          record = self.db.get(RentalRecord, unit_id)
          if record is not None and record.is_active(self.clock()):
               raise AlreadyRented(f"Unit {unit_id} is rented until {record.expires_at}")

          self.ownership.destroy(unit_id)
          if record is not None:
               record.reset()
          self.db.flush()
          logger.info("Burned unit %s", unit_id)
