# routers/rentals.py
"""
Rental API routes.

Writes require a bearer token; the caller's address comes from the token.
Reads are public. Grant routes commit before queueing webhook delivery, so
an indexer only ever hears about grants that are already stored.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, Path, Query

from dependencies import get_caller, get_rental_service
from schemas.rental import (
     RentalSpecsUpdate,
     RentalSpecsResponse,
     PermissionUpdate,
     PermissionResponse,
     SetUserRequest,
     RentRequest,
     RentalInfoResponse,
     UserOfResponse,
     UserExpiresResponse,
     RentalEstimateResponse,
     UserUpdatedEventList,
     UserUpdatedEventResponse,
)
from services.notification_service import list_user_updated, publish_user_updated
from services.rental_service import RentalService
from utils.address import ADDRESS_PATTERN, normalize_address

router = APIRouter(prefix="/api/rentals", tags=["rentals"])


# ---------------------------------------------------------------------------
# Specs & permission
# ---------------------------------------------------------------------------

@router.put("/specs", response_model=RentalSpecsResponse, summary="Set the caller's rental pricing")
def set_rental_specs(
     body: RentalSpecsUpdate,
     rentals: RentalService = Depends(get_rental_service),
     caller: str = Depends(get_caller),
):
     return rentals.set_rental_specs(caller, body.price_per_day, body.max_days_per_rental)


@router.get("/specs/{address}", response_model=RentalSpecsResponse)
def get_rental_specs(address: str = Path(..., pattern=ADDRESS_PATTERN), rentals: RentalService = Depends(get_rental_service)):
     return rentals.get_rental_specs(address)


@router.get("/estimate", response_model=RentalEstimateResponse)
def get_rental_estimate(
     owner: str = Query(..., pattern=ADDRESS_PATTERN),
     expires_at: int = Query(..., ge=0),
     rentals: RentalService = Depends(get_rental_service),
):
     days, total = rentals.get_rental_estimate(owner, expires_at)
     return RentalEstimateResponse(
          owner=normalize_address(owner),
          expires_at=expires_at,
          days=days,
          total_price=total,
     )


@router.put("/{unit_id}/permission", response_model=PermissionResponse)
def set_permissioned_rental(
     unit_id: int,
     body: PermissionUpdate,
     rentals: RentalService = Depends(get_rental_service),
     caller: str = Depends(get_caller),
):
     flag = rentals.set_permissioned_rental(caller, unit_id, body.permissioned)
     return PermissionResponse(unit_id=unit_id, permissioned=flag.permissioned)


@router.get("/{unit_id}/permission", response_model=PermissionResponse)
def get_permissioned_rental(unit_id: int, rentals: RentalService = Depends(get_rental_service)):
     return PermissionResponse(unit_id=unit_id, permissioned=rentals.get_permissioned_rental(unit_id))


# ---------------------------------------------------------------------------
# Grants
# ---------------------------------------------------------------------------

def _publish_after_commit(rentals: RentalService, background_tasks: BackgroundTasks) -> None:
     # Indexers must never hear about a grant that could still roll back
     rentals.db.commit()
     for event in rentals.emitted:
          background_tasks.add_task(publish_user_updated, event.to_payload())


@router.post("/{unit_id}/user", response_model=RentalInfoResponse, summary="Assign a user without payment")
def set_user(
     unit_id: int,
     body: SetUserRequest,
     background_tasks: BackgroundTasks,
     rentals: RentalService = Depends(get_rental_service),
     caller: str = Depends(get_caller),
):
     record = rentals.set_user(caller, unit_id, body.user, body.expires_at)
     _publish_after_commit(rentals, background_tasks)
     return record


@router.post("/{unit_id}/rent", response_model=RentalInfoResponse, summary="Rent a unit")
def rent(
     unit_id: int,
     body: RentRequest,
     background_tasks: BackgroundTasks,
     rentals: RentalService = Depends(get_rental_service),
     caller: str = Depends(get_caller),
):
     record = rentals.rent(caller, unit_id, body.expires_at, body.value)
     _publish_after_commit(rentals, background_tasks)
     return record


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

@router.get("/{unit_id}/user", response_model=UserOfResponse)
def user_of(unit_id: int, rentals: RentalService = Depends(get_rental_service)):
     return UserOfResponse(unit_id=unit_id, user=rentals.user_of(unit_id))


@router.get("/{unit_id}/expires", response_model=UserExpiresResponse)
def user_expires(unit_id: int, rentals: RentalService = Depends(get_rental_service)):
     return UserExpiresResponse(unit_id=unit_id, expires_at=rentals.user_expires(unit_id))


@router.get("/{unit_id}/events", response_model=UserUpdatedEventList)
def get_user_updated_events(unit_id: int, rentals: RentalService = Depends(get_rental_service)):
     events = list_user_updated(rentals.db, unit_id)
     return UserUpdatedEventList(
          events=[UserUpdatedEventResponse.model_validate(e) for e in events],
          total=len(events),
     )


@router.get("/{unit_id}", response_model=RentalInfoResponse)
def get_rental_info(unit_id: int, rentals: RentalService = Depends(get_rental_service)):
     return rentals.get_rental_info(unit_id)
