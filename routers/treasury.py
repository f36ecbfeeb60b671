# routers/treasury.py
from fastapi import APIRouter, Depends, status

from dependencies import get_caller, get_treasury_service
from schemas.treasury import DepositRequest, TreasuryResponse, PayoutResponse
from services.treasury_service import TreasuryService

router = APIRouter(prefix="/api/treasury", tags=["treasury"])


@router.get("", response_model=TreasuryResponse)
def get_treasury(treasury: TreasuryService = Depends(get_treasury_service)):
     return treasury.balances()


@router.post("/deposit", response_model=TreasuryResponse, status_code=status.HTTP_201_CREATED)
def deposit(
     body: DepositRequest,
     treasury: TreasuryService = Depends(get_treasury_service),
     caller: str = Depends(get_caller),
):
     return treasury.deposit(body.value)


@router.post("/withdraw", response_model=PayoutResponse, summary="Withdraw non-rental income")
def withdraw(
     treasury: TreasuryService = Depends(get_treasury_service),
     caller: str = Depends(get_caller),
):
     return treasury.withdraw(caller)


@router.post("/withdraw-rental-revenue", response_model=PayoutResponse, summary="Withdraw rental income")
def withdraw_rental_revenue(
     treasury: TreasuryService = Depends(get_treasury_service),
     caller: str = Depends(get_caller),
):
     return treasury.withdraw_rental_revenue(caller)
