"""
Pydantic schemas for the rental API.
"""
from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field, ConfigDict

from utils.address import ADDRESS_PATTERN


class RentalSpecsUpdate(BaseModel):
     """Body for PUT /api/rentals/specs."""
     price_per_day: Decimal = Field(..., ge=0, decimal_places=8, description="Price per started day of rental")
     max_days_per_rental: int = Field(..., ge=0, description="Longest rental allowed, in days")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "price_per_day": "0.1",
                    "max_days_per_rental": 10
               }
          }
     )


class RentalSpecsResponse(BaseModel):
     address: str
     price_per_day: Decimal
     max_days_per_rental: int

     model_config = ConfigDict(from_attributes=True)


class PermissionUpdate(BaseModel):
     permissioned: bool = Field(..., description="When true, only the owner may assign users")


class PermissionResponse(BaseModel):
     unit_id: int
     permissioned: bool


class SetUserRequest(BaseModel):
     """Body for POST /api/rentals/{unit_id}/user."""
     user: str = Field(..., pattern=ADDRESS_PATTERN)
     expires_at: int = Field(..., ge=0, description="Unix timestamp the right lapses at")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "user": "0x5b38da6a701c568545dcfcb03fcb875f56beddc4",
                    "expires_at": 1767225600
               }
          }
     )


class RentRequest(BaseModel):
     """Body for POST /api/rentals/{unit_id}/rent."""
     expires_at: int = Field(..., ge=0, description="Unix timestamp the right lapses at")
     value: Decimal = Field(..., ge=0, decimal_places=8, description="Payment attached to the rental")


class RentalInfoResponse(BaseModel):
     unit_id: int
     paid_price: Decimal
     current_user: str
     expires_at: int

     model_config = ConfigDict(from_attributes=True)


class UserOfResponse(BaseModel):
     unit_id: int
     user: str


class UserExpiresResponse(BaseModel):
     unit_id: int
     expires_at: int


class RentalEstimateResponse(BaseModel):
     owner: str
     expires_at: int
     days: int
     total_price: Decimal


class UserUpdatedEventResponse(BaseModel):
     id: int
     unit_id: int
     user: str
     expires_at: int

     model_config = ConfigDict(from_attributes=True)


class UserUpdatedEventList(BaseModel):
     events: List[UserUpdatedEventResponse]
     total: int
