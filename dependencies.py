# dependencies.py
"""
Shared FastAPI dependencies: caller identity, clock and service wiring.
"""
import os

from dotenv import load_dotenv
from fastapi import Depends, HTTPException, Request
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from database import get_session
from services.clock import Clock, system_clock
from services.ownership_service import OwnershipService
from services.rental_service import RentalService
from services.treasury_service import PayoutGateway, TreasuryService
from utils.address import normalize_address

load_dotenv()

SECRET_KEY = os.getenv("JWT_SECRET")
ALGORITHM = "HS256"
REGISTRY_OPERATOR = os.getenv("REGISTRY_OPERATOR")


def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=401, detail="Missing token")
     token = auth.split(" ")[1]
     try:
          payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=403, detail="Invalid token")
     return payload


def get_caller(token: dict = Depends(verify_token)) -> str:
     """Address of the authenticated caller, taken from the token's `address` claim."""
     try:
          return normalize_address(token.get("address"))
     except ValueError:
          raise HTTPException(status_code=403, detail="Token carries no valid address")


def get_clock() -> Clock:
     return system_clock


def get_operator() -> str:
     return REGISTRY_OPERATOR


def get_payout_gateway(db: Session = Depends(get_session)) -> PayoutGateway:
     return PayoutGateway(db)


def get_treasury_service(
     db: Session = Depends(get_session),
     operator: str = Depends(get_operator),
     payouts: PayoutGateway = Depends(get_payout_gateway),
) -> TreasuryService:
     return TreasuryService(db, operator=operator, payouts=payouts)


def get_ownership_service(
     db: Session = Depends(get_session),
     treasury: TreasuryService = Depends(get_treasury_service),
) -> OwnershipService:
     return OwnershipService(db, treasury=treasury)


def get_rental_service(
     db: Session = Depends(get_session),
     clock: Clock = Depends(get_clock),
     ownership: OwnershipService = Depends(get_ownership_service),
     treasury: TreasuryService = Depends(get_treasury_service),
) -> RentalService:
     return RentalService(db, clock=clock, ownership=ownership, treasury=treasury)
