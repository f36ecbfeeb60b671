# services/errors.py
"""
Failure kinds raised by the registry services.

Every failure aborts the whole operation: the session dependency rolls the
transaction back, so callers never observe partial state. main.py turns these
into JSON responses using `kind` and `status_code`.
"""


class RegistryError(ValueError):
     kind = "RegistryError"
     status_code = 400

     def __init__(self, message: str = ""):
          super().__init__(message or self.kind)
          self.message = message or self.kind


class NotMinted(RegistryError):
     kind = "NotMinted"
     status_code = 404


class AlreadyRented(RegistryError):
     kind = "AlreadyRented"
     status_code = 409


class InvalidUser(RegistryError):
     kind = "InvalidUser"


class InvalidExpiration(RegistryError):
     kind = "InvalidExpiration"


class ExceedsMaxRentalDays(RegistryError):
     kind = "ExceedsMaxRentalDays"


class NotApprovedOrOwner(RegistryError):
     kind = "NotApprovedOrOwner"
     status_code = 403


class PermissionedRental(RegistryError):
     kind = "PermissionedRental"
     status_code = 403


class InsufficientFunds(RegistryError):
     kind = "InsufficientFunds"
     status_code = 402


class NoRentalRevenue(RegistryError):
     kind = "NoRentalRevenue"
     status_code = 409


class NoTokenRevenue(RegistryError):
     kind = "NoTokenRevenue"
     status_code = 409


class NotOperator(RegistryError):
     kind = "NotOperator"
     status_code = 403


class MaxSupplyReached(RegistryError):
     kind = "MaxSupplyReached"
     status_code = 409
