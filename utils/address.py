# utils/address.py
import re

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)


def normalize_address(address: str) -> str:
     """Lower-case a 0x address so lookups don't depend on checksum casing."""
     if address is None or not _ADDRESS_RE.match(address):
          raise ValueError(f"Invalid address: {address!r}")
     return address.lower()
