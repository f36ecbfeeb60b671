"""
Pytest fixtures: an in-memory SQLite registry, a hand-driven clock and the
services wired the way the API wires them.
"""
import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import init_db
from services.clock import SECONDS_PER_DAY
from services.ownership_service import OwnershipService
from services.rental_service import RentalService
from services.treasury_service import TreasuryService

OWNER = "0x5b38da6a701c568545dcfcb03fcb875f56beddc4"
RENTER = "0xab8483f64d9c6d1ecf9b849ae677dd3315835cb2"
OTHER = "0x4b20993bc481177ec7e8f571cecae8a9e22c02db"
STRANGER = "0x78731d3ca6b7e34ac0f824c42a7cc18a495cabab"
OPERATOR = "0x617f2e2fd72fd9d5503197092ac168c91465e7f2"

START = 1_700_000_000
DAY = SECONDS_PER_DAY


class FakeClock:
    """Clock the tests move by hand."""

    def __init__(self, now: int = START):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def warp(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def treasury(db):
    return TreasuryService(db, operator=OPERATOR)


@pytest.fixture
def ownership(db, treasury):
    return OwnershipService(db, treasury=treasury, mint_price=Decimal(0), max_supply=0)


@pytest.fixture
def rentals(db, clock, ownership, treasury):
    return RentalService(db, clock=clock, ownership=ownership, treasury=treasury)


@pytest.fixture
def unit(ownership):
    """Unit 1, owned by OWNER."""
    return ownership.mint(OWNER, Decimal(0))


@pytest.fixture
def priced(rentals):
    """OWNER charges 0.1 per day for up to 10 days."""
    return rentals.set_rental_specs(OWNER, Decimal("0.1"), 10)
