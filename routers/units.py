# routers/units.py
"""
Ownership ledger API: mint, approvals, transfer and burn.

Burn lives here but is enforced by the rental service, since a unit under an
active rental cannot be destroyed.
"""
from fastapi import APIRouter, Depends, Path, status

from dependencies import get_caller, get_ownership_service, get_rental_service
from schemas.unit import (
     MintRequest,
     ApproveRequest,
     OperatorApprovalRequest,
     TransferRequest,
     UnitResponse,
     BalanceResponse,
)
from services.ownership_service import OwnershipService
from services.rental_service import RentalService
from utils.address import ADDRESS_PATTERN

router = APIRouter(prefix="/api/units", tags=["units"])


@router.post("/mint", response_model=UnitResponse, status_code=status.HTTP_201_CREATED, summary="Mint a unit")
def mint_unit(
     body: MintRequest,
     ownership: OwnershipService = Depends(get_ownership_service),
     caller: str = Depends(get_caller),
):
     return ownership.mint(body.to, body.value)


@router.post("/operators", summary="Approve or revoke an operator for all of the caller's units")
def set_approval_for_all(
     body: OperatorApprovalRequest,
     ownership: OwnershipService = Depends(get_ownership_service),
     caller: str = Depends(get_caller),
):
     row = ownership.set_approval_for_all(caller, body.operator, body.approved)
     return {"owner": row.owner, "operator": row.operator, "approved": row.approved}


@router.get("/balance/{address}", response_model=BalanceResponse)
def balance_of(address: str = Path(..., pattern=ADDRESS_PATTERN), ownership: OwnershipService = Depends(get_ownership_service)):
     return BalanceResponse(owner=address.lower(), balance=ownership.balance_of(address))


@router.get("/{unit_id}", response_model=UnitResponse)
def get_unit(unit_id: int, ownership: OwnershipService = Depends(get_ownership_service)):
     return ownership.get_unit(unit_id)


@router.post("/{unit_id}/approve", response_model=UnitResponse)
def approve(
     unit_id: int,
     body: ApproveRequest,
     ownership: OwnershipService = Depends(get_ownership_service),
     caller: str = Depends(get_caller),
):
     return ownership.approve(caller, body.to, unit_id)


@router.post("/{unit_id}/transfer", response_model=UnitResponse)
def transfer(
     unit_id: int,
     body: TransferRequest,
     ownership: OwnershipService = Depends(get_ownership_service),
     caller: str = Depends(get_caller),
):
     return ownership.transfer_from(caller, body.from_address, body.to, unit_id)


@router.post("/{unit_id}/burn", status_code=status.HTTP_200_OK)
def burn(
     unit_id: int,
     rentals: RentalService = Depends(get_rental_service),
     caller: str = Depends(get_caller),
):
     rentals.burn(caller, unit_id)
     return {"unit_id": unit_id, "burned": True}
