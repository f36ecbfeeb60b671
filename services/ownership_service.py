# services/ownership_service.py
"""
Ownership Ledger - who owns each unit and who may act for them.

A deliberately small ledger: mint, approve, operator approval, transfer and
destroy. The rental layer only relies on owner_of, exists and
is_approved_or_owner.
"""
import logging
import os
from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Unit, OperatorApproval, ZERO_ADDRESS
from services.errors import (
     InsufficientFunds,
     InvalidUser,
     MaxSupplyReached,
     NotApprovedOrOwner,
     NotMinted,
)
from services.treasury_service import TreasuryService, lock_treasury
from utils.address import normalize_address

load_dotenv()

logger = logging.getLogger(__name__)

MINT_PRICE = Decimal(os.getenv("MINT_PRICE", "0"))
MAX_SUPPLY = int(os.getenv("MAX_SUPPLY", "0"))  # 0 = unlimited


class OwnershipService:

     def __init__(
          self,
          db: Session,
          treasury: Optional[TreasuryService] = None,
          mint_price: Decimal = MINT_PRICE,
          max_supply: int = MAX_SUPPLY,
     ):
          self.db = db
          self.treasury = treasury or TreasuryService(db, operator=None)
          self.mint_price = mint_price
          self.max_supply = max_supply

     def get_unit(self, unit_id: int) -> Unit:
          unit = self.db.query(Unit).filter(Unit.id == unit_id).first()
          if unit is None:
               raise NotMinted(f"Unit {unit_id} has not been minted")
          return unit

     def exists(self, unit_id: int) -> bool:
          return self.db.query(Unit.id).filter(Unit.id == unit_id).first() is not None

     def owner_of(self, unit_id: int) -> str:
          return self.get_unit(unit_id).owner

     def get_approved(self, unit_id: int) -> Optional[str]:
          return self.get_unit(unit_id).approved

     def balance_of(self, owner: str) -> int:
          owner = normalize_address(owner)
          return self.db.query(func.count(Unit.id)).filter(Unit.owner == owner).scalar() or 0

     def is_approved_for_all(self, owner: str, operator: str) -> bool:
          row = (
               self.db.query(OperatorApproval)
               .filter(
                    OperatorApproval.owner == normalize_address(owner),
                    OperatorApproval.operator == normalize_address(operator),
               )
               .first()
          )
          return bool(row and row.approved)

     def is_approved_or_owner(self, spender: str, unit_id: int) -> bool:
          """True if spender owns the unit, is approved for it, or operates for its owner."""
          spender = normalize_address(spender)
          unit = self.get_unit(unit_id)
          return (
               spender == unit.owner
               or spender == unit.approved
               or self.is_approved_for_all(unit.owner, spender)
          )

     def mint(self, to: str, payment: Decimal) -> Unit:
          """
          Primary sale of the next unit to `to`.

          The payment is credited to the treasury as other income, never to the
          rental pool.
          """
          to = normalize_address(to)
          if to == ZERO_ADDRESS:
               raise InvalidUser("Cannot mint to the zero address")
          if payment < self.mint_price:
               raise InsufficientFunds(f"Mint price is {self.mint_price}, received {payment}")

          treasury = lock_treasury(self.db)
          if self.max_supply and treasury.total_minted >= self.max_supply:
               raise MaxSupplyReached(f"All {self.max_supply} units have been minted")

          treasury.total_minted += 1
          unit = Unit(id=treasury.total_minted, owner=to)
          self.db.add(unit)
          if payment:
               self.treasury.receive(payment)
          self.db.flush()

          logger.info("Minted unit %s to %s for %s", unit.id, to, payment)
          return unit

     def approve(self, caller: str, to: Optional[str], unit_id: int) -> Unit:
          caller = normalize_address(caller)
          lock_treasury(self.db)
          unit = self.get_unit(unit_id)
          if caller != unit.owner and not self.is_approved_for_all(unit.owner, caller):
               raise NotApprovedOrOwner(f"{caller} cannot approve for unit {unit_id}")
          to = normalize_address(to) if to else ZERO_ADDRESS
          unit.approved = None if to == ZERO_ADDRESS else to
          self.db.flush()
          return unit

     def set_approval_for_all(self, caller: str, operator: str, approved: bool) -> OperatorApproval:
          caller = normalize_address(caller)
          operator = normalize_address(operator)
          if operator == ZERO_ADDRESS:
               raise InvalidUser("Operator cannot be the zero address")
          lock_treasury(self.db)
          row = (
               self.db.query(OperatorApproval)
               .filter(OperatorApproval.owner == caller, OperatorApproval.operator == operator)
               .first()
          )
          if row is None:
               row = OperatorApproval(owner=caller, operator=operator)
               self.db.add(row)
          row.approved = approved
          self.db.flush()
          return row

     def transfer_from(self, caller: str, from_address: str, to: str, unit_id: int) -> Unit:
          """
          Move a unit to a new owner.

          Usage rights are left untouched: an active renter keeps the unit until
          expiry, and later rentals are priced by the new owner's specs.
          """
          caller = normalize_address(caller)
          from_address = normalize_address(from_address)
          to = normalize_address(to)
          lock_treasury(self.db)
          if not self.is_approved_or_owner(caller, unit_id):
               raise NotApprovedOrOwner(f"{caller} is not approved for unit {unit_id}")
          unit = self.get_unit(unit_id)
          if unit.owner != from_address:
               raise NotApprovedOrOwner(f"Unit {unit_id} is not owned by {from_address}")
          if to == ZERO_ADDRESS:
               raise InvalidUser("Cannot transfer to the zero address")

          unit.owner = to
          unit.approved = None
          self.db.flush()

          logger.info("Transferred unit %s from %s to %s", unit_id, from_address, to)
          return unit

     def destroy(self, unit_id: int) -> None:
          unit = self.get_unit(unit_id)
          self.db.delete(unit)
          self.db.flush()
