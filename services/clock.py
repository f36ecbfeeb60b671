# services/clock.py
import time
from typing import Callable

SECONDS_PER_DAY = 86400

# Returns the current time as integer unix seconds
Clock = Callable[[], int]


def system_clock() -> int:
     return int(time.time())


def days_between(now: int, expires_at: int) -> int:
     """Whole days from now to expires_at, any partial day counted as a full day."""
     span = expires_at - now
     return -(-span // SECONDS_PER_DAY)
