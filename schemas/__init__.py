from .rental import (
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
     UserUpdatedEventResponse,
     UserUpdatedEventList,
)
from .unit import (
     MintRequest,
     ApproveRequest,
     OperatorApprovalRequest,
     TransferRequest,
     UnitResponse,
     BalanceResponse,
     InterfaceResponse,
)
from .treasury import DepositRequest, TreasuryResponse, PayoutResponse

__all__ = [
     "RentalSpecsUpdate",
     "RentalSpecsResponse",
     "PermissionUpdate",
     "PermissionResponse",
     "SetUserRequest",
     "RentRequest",
     "RentalInfoResponse",
     "UserOfResponse",
     "UserExpiresResponse",
     "RentalEstimateResponse",
     "UserUpdatedEventResponse",
     "UserUpdatedEventList",
     "MintRequest",
     "ApproveRequest",
     "OperatorApprovalRequest",
     "TransferRequest",
     "UnitResponse",
     "BalanceResponse",
     "InterfaceResponse",
     "DepositRequest",
     "TreasuryResponse",
     "PayoutResponse",
]
