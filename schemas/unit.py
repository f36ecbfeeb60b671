"""
Pydantic schemas for the ownership ledger API.
"""
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from utils.address import ADDRESS_PATTERN


class MintRequest(BaseModel):
     to: str = Field(..., pattern=ADDRESS_PATTERN)
     value: Decimal = Field(default=Decimal(0), ge=0, decimal_places=8, description="Payment for the primary sale")


class ApproveRequest(BaseModel):
     to: Optional[str] = Field(None, pattern=ADDRESS_PATTERN, description="Omit to clear the approval")


class OperatorApprovalRequest(BaseModel):
     operator: str = Field(..., pattern=ADDRESS_PATTERN)
     approved: bool


class TransferRequest(BaseModel):
     from_address: str = Field(..., alias="from", pattern=ADDRESS_PATTERN)
     to: str = Field(..., pattern=ADDRESS_PATTERN)

     model_config = ConfigDict(
          populate_by_name=True,
          json_schema_extra={
               "example": {
                    "from": "0x5b38da6a701c568545dcfcb03fcb875f56beddc4",
                    "to": "0xab8483f64d9c6d1ecf9b849ae677dd3315835cb2"
               }
          }
     )


class UnitResponse(BaseModel):
     id: int
     owner: str
     approved: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class BalanceResponse(BaseModel):
     owner: str
     balance: int


class InterfaceResponse(BaseModel):
     interface_id: str
     supported: bool
