# services/interface_service.py
"""Capability discovery by fixed interface id."""

CAPABILITY_DISCOVERY = "0x01ffc9a7"
OWNERSHIP = "0x80ac58cd"
METADATA = "0x5b5e139f"
USAGE_RIGHTS = "0xad092b5c"

SUPPORTED_INTERFACES = frozenset({CAPABILITY_DISCOVERY, OWNERSHIP, METADATA, USAGE_RIGHTS})


def supports_interface(interface_id: str) -> bool:
     return interface_id.lower() in SUPPORTED_INTERFACES
