"""
Pydantic schemas for treasury receipts and withdrawals.
"""
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict

from models.payout import PayoutKind


class DepositRequest(BaseModel):
     value: Decimal = Field(..., gt=0, decimal_places=8)


class TreasuryResponse(BaseModel):
     """Current split of the registry's held balance."""
     held_balance: Decimal
     unclaimed_rental_revenue: Decimal
     other_income: Decimal
     total_minted: int

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "held_balance": "1.5",
                    "unclaimed_rental_revenue": "0.5",
                    "other_income": "1.0",
                    "total_minted": 3
               }
          }
     )


class PayoutResponse(BaseModel):
     id: int
     recipient: str
     amount: Decimal
     kind: PayoutKind

     model_config = ConfigDict(from_attributes=True)
