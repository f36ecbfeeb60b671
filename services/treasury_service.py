# services/treasury_service.py
"""
Treasury Service - revenue accounting for the registry.

The registry holds one balance split into two pools:
1. unclaimed rental revenue: grows with every paid rental, drained only by
   withdraw_rental_revenue()
2. other income: everything else held (primary sales, deposits), drained by withdraw()

Withdrawals settle the books first and only then hand value to the payout
gateway, so a gateway that calls back into the treasury sees the pools
already emptied.
"""
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from models import RegistryTreasury, Payout, PayoutKind, TREASURY_ID
from services.errors import NoRentalRevenue, NoTokenRevenue, NotOperator
from utils.address import normalize_address

logger = logging.getLogger(__name__)


def lock_treasury(db: Session) -> RegistryTreasury:
     """
     Fetch the treasury row under a write lock.

     Every mutating registry operation goes through here first, which
     serialises writers for the rest of the transaction. The row is seeded
     by the first migration and by `database.init_db`; creating it here only
     covers a schema built some other way.
     """
     treasury = (
          db.query(RegistryTreasury)
          .filter(RegistryTreasury.id == TREASURY_ID)
          .with_for_update()
          .first()
     )
     if treasury is None:
          treasury = RegistryTreasury(
               id=TREASURY_ID,
               held_balance=Decimal(0),
               unclaimed_rental_revenue=Decimal(0),
               total_minted=0,
          )
          db.add(treasury)
          db.flush()
     return treasury


def read_treasury(db: Session) -> RegistryTreasury:
     """Unlocked read; an untouched registry reads as all zeros."""
     treasury = db.query(RegistryTreasury).filter(RegistryTreasury.id == TREASURY_ID).first()
     if treasury is None:
          return RegistryTreasury(
               id=TREASURY_ID,
               held_balance=Decimal(0),
               unclaimed_rental_revenue=Decimal(0),
               total_minted=0,
          )
     return treasury


class PayoutGateway:
     """
     Moves value out of the registry.

     The default gateway records the payout; a deployment that settles on an
     external rail subclasses this and overrides send(). Raising from send()
     aborts the surrounding transaction.
     """

     def __init__(self, db: Session):
          self.db = db

     def send(self, recipient: str, amount: Decimal, kind: PayoutKind) -> Payout:
          payout = Payout(recipient=recipient, amount=amount, kind=kind)
          self.db.add(payout)
          self.db.flush()
          logger.info("Payout %s of %s to %s", kind.value, amount, recipient)
          return payout


class TreasuryService:
     """Receipts and withdrawals against the registry's held balance."""

     def __init__(self, db: Session, operator: Optional[str], payouts: Optional[PayoutGateway] = None):
          self.db = db
          self.operator = normalize_address(operator) if operator else None
          self.payouts = payouts or PayoutGateway(db)

     def _require_operator(self, caller: str) -> str:
          caller = normalize_address(caller)
          if self.operator is None or caller != self.operator:
               raise NotOperator(f"{caller} is not the registry operator")
          return caller

     def balances(self) -> RegistryTreasury:
          return read_treasury(self.db)

     def receive(self, amount: Decimal, rental: bool = False) -> RegistryTreasury:
          """
          Credit incoming value. Rental payments also grow the rental pool.
          """
          treasury = lock_treasury(self.db)
          treasury.held_balance += amount
          if rental:
               treasury.unclaimed_rental_revenue += amount
          self.db.flush()
          return treasury

     def deposit(self, amount: Decimal) -> RegistryTreasury:
          treasury = self.receive(amount)
          logger.info("Deposit of %s received", amount)
          return treasury

     def withdraw_rental_revenue(self, caller: str) -> Payout:
          """
          Pay out the whole rental pool to the operator.

          Raises:
               NotOperator: caller is not the configured operator
               NoRentalRevenue: the rental pool is empty
          """
          recipient = self._require_operator(caller)
          treasury = lock_treasury(self.db)
          amount = treasury.unclaimed_rental_revenue
          if amount == 0:
               raise NoRentalRevenue("No rental revenue to withdraw")

          treasury.unclaimed_rental_revenue = Decimal(0)
          treasury.held_balance -= amount
          self.db.flush()

          return self.payouts.send(recipient, amount, PayoutKind.RENTAL_REVENUE)

     def withdraw(self, caller: str) -> Payout:
          """
          Pay out everything held except the rental pool.

          Raises:
               NotOperator: caller is not the configured operator
               NoTokenRevenue: held balance does not exceed the rental pool
          """
          recipient = self._require_operator(caller)
          treasury = lock_treasury(self.db)
          if treasury.held_balance <= treasury.unclaimed_rental_revenue:
               raise NoTokenRevenue("No token revenue to withdraw")

          amount = treasury.held_balance - treasury.unclaimed_rental_revenue
          treasury.held_balance = treasury.unclaimed_rental_revenue
          self.db.flush()

          return self.payouts.send(recipient, amount, PayoutKind.TOKEN_REVENUE)
