from decimal import Decimal

import pytest

from models import UserUpdatedEvent, ZERO_ADDRESS, is_actively_rented
from services.clock import days_between
from services.errors import (
    AlreadyRented,
    ExceedsMaxRentalDays,
    InsufficientFunds,
    InvalidExpiration,
    InvalidUser,
    NotApprovedOrOwner,
    NotMinted,
    PermissionedRental,
)
from tests.conftest import DAY, OPERATOR, OTHER, OWNER, RENTER, START, STRANGER


def test_liveness_requires_user_and_future_expiry():
    assert is_actively_rented(RENTER, START + 1, START)
    assert not is_actively_rented(RENTER, START, START)
    assert not is_actively_rented(ZERO_ADDRESS, START + DAY, START)


def test_days_between_rounds_up():
    assert days_between(START, START + DAY) == 1
    assert days_between(START, START + DAY + 1) == 2
    assert days_between(START, START + 1) == 1


# ---------------------------------------------------------------------------
# Specs, permission flag, estimate
# ---------------------------------------------------------------------------

def test_specs_default_to_zero(rentals):
    specs = rentals.get_rental_specs(OTHER)
    assert specs.price_per_day == 0
    assert specs.max_days_per_rental == 0


def test_set_rental_specs_replaces_previous(rentals):
    rentals.set_rental_specs(OWNER, Decimal("0.1"), 10)
    rentals.set_rental_specs(OWNER.upper().replace("0X", "0x"), Decimal("2"), 3)

    specs = rentals.get_rental_specs(OWNER)
    assert specs.price_per_day == Decimal("2")
    assert specs.max_days_per_rental == 3


def test_estimate_counts_partial_day_as_full(rentals, clock, priced):
    days, price = rentals.get_rental_estimate(OWNER, clock() + DAY + 1)
    assert days == 2
    assert price == Decimal("0.2")


def test_estimate_whole_days(rentals, clock, priced):
    assert rentals.get_rental_estimate(OWNER, clock() + 5 * DAY) == (5, Decimal("0.5"))


def test_estimate_rejects_past_expiry(rentals, clock, priced):
    with pytest.raises(InvalidExpiration):
        rentals.get_rental_estimate(OWNER, clock())


def test_permission_flag_defaults_false_and_is_owner_gated(rentals, unit):
    assert rentals.get_permissioned_rental(unit.id) is False
    with pytest.raises(NotApprovedOrOwner):
        rentals.set_permissioned_rental(STRANGER, unit.id, True)

    rentals.set_permissioned_rental(OWNER, unit.id, True)
    assert rentals.get_permissioned_rental(unit.id) is True


# ---------------------------------------------------------------------------
# set_user
# ---------------------------------------------------------------------------

def test_set_user_grants_without_payment(rentals, treasury, db, clock, unit, priced):
    expires = clock() + 3 * DAY
    record = rentals.set_user(OWNER, unit.id, OTHER, expires)

    assert record.paid_price == 0
    assert rentals.user_of(unit.id) == OTHER
    assert rentals.user_expires(unit.id) == expires
    assert treasury.balances().held_balance == 0

    events = db.query(UserUpdatedEvent).all()
    assert [(e.unit_id, e.user, e.expires_at) for e in events] == [(unit.id, OTHER, expires)]


def test_set_user_by_approved_and_operator(rentals, ownership, clock, unit, priced):
    ownership.approve(OWNER, STRANGER, unit.id)
    rentals.set_user(STRANGER, unit.id, OTHER, clock() + DAY)

    clock.warp(DAY)
    ownership.approve(OWNER, None, unit.id)
    ownership.set_approval_for_all(OWNER, RENTER, True)
    rentals.set_user(RENTER, unit.id, OTHER, clock() + DAY)
    assert rentals.user_of(unit.id) == OTHER


def test_set_user_unminted(rentals, clock, priced):
    with pytest.raises(NotMinted):
        rentals.set_user(OWNER, 99, OTHER, clock() + DAY)


def test_set_user_while_rented(rentals, clock, unit, priced):
    rentals.set_user(OWNER, unit.id, OTHER, clock() + DAY)
    with pytest.raises(AlreadyRented):
        rentals.set_user(OWNER, unit.id, RENTER, clock() + DAY)


def test_set_user_validation_order(rentals, clock, unit, priced):
    # A stranger naming the zero address hears about the user first
    with pytest.raises(InvalidUser):
        rentals.set_user(STRANGER, unit.id, ZERO_ADDRESS, clock() + DAY)
    with pytest.raises(InvalidExpiration):
        rentals.set_user(STRANGER, unit.id, OTHER, clock())
    with pytest.raises(ExceedsMaxRentalDays):
        rentals.set_user(STRANGER, unit.id, OTHER, clock() + 10 * DAY + 1)
    with pytest.raises(NotApprovedOrOwner):
        rentals.set_user(STRANGER, unit.id, OTHER, clock() + 10 * DAY)


def test_set_user_without_specs_always_exceeds(rentals, clock, unit):
    with pytest.raises(ExceedsMaxRentalDays):
        rentals.set_user(OWNER, unit.id, OTHER, clock() + 60)


def test_set_user_allowed_on_permissioned_unit(rentals, clock, unit, priced):
    rentals.set_permissioned_rental(OWNER, unit.id, True)
    rentals.set_user(OWNER, unit.id, OTHER, clock() + DAY)
    assert rentals.user_of(unit.id) == OTHER


# ---------------------------------------------------------------------------
# rent
# ---------------------------------------------------------------------------

def test_rent_end_to_end(rentals, treasury, clock, unit, priced):
    expires = clock() + 5 * DAY
    rentals.rent(RENTER, unit.id, expires, Decimal("0.5"))

    info = rentals.get_rental_info(unit.id)
    assert (info.paid_price, info.current_user, info.expires_at) == (Decimal("0.5"), RENTER, expires)
    assert treasury.balances().unclaimed_rental_revenue == Decimal("0.5")

    with pytest.raises(AlreadyRented):
        rentals.rent(OTHER, unit.id, clock() + DAY, Decimal("0.1"))

    clock.warp(5 * DAY)
    assert rentals.user_of(unit.id) == ZERO_ADDRESS

    rentals.rent(OTHER, unit.id, clock() + DAY, Decimal("0.1"))
    assert rentals.user_of(unit.id) == OTHER
    assert treasury.balances().unclaimed_rental_revenue == Decimal("0.6")


def test_rent_partial_day_needs_full_day_payment(rentals, clock, unit, priced):
    with pytest.raises(InsufficientFunds):
        rentals.rent(RENTER, unit.id, clock() + DAY + 1, Decimal("0.1"))
    rentals.rent(RENTER, unit.id, clock() + DAY + 1, Decimal("0.2"))


def test_rent_keeps_overpayment(rentals, treasury, clock, unit, priced):
    record = rentals.rent(RENTER, unit.id, clock() + 5 * DAY, Decimal("1"))
    assert record.paid_price == Decimal("1")
    assert treasury.balances().unclaimed_rental_revenue == Decimal("1")


def test_rent_refused_on_permissioned_unit(rentals, clock, unit, priced):
    rentals.set_permissioned_rental(OWNER, unit.id, True)
    with pytest.raises(PermissionedRental):
        rentals.rent(RENTER, unit.id, clock() + DAY, Decimal("0.1"))


def test_rent_invalid_inputs(rentals, clock, unit, priced):
    with pytest.raises(InvalidUser):
        rentals.rent(ZERO_ADDRESS, unit.id, clock() + DAY, Decimal("0.1"))
    with pytest.raises(InvalidExpiration):
        rentals.rent(RENTER, unit.id, clock() - 1, Decimal("0.1"))
    with pytest.raises(ExceedsMaxRentalDays):
        rentals.rent(RENTER, unit.id, clock() + 11 * DAY, Decimal("10"))
    with pytest.raises(NotMinted):
        rentals.rent(RENTER, 42, clock() + DAY, Decimal("0.1"))


def test_rent_without_specs_fails(rentals, clock, unit):
    with pytest.raises(ExceedsMaxRentalDays):
        rentals.rent(RENTER, unit.id, clock() + DAY, Decimal("1"))


def test_rental_survives_transfer_and_pricing_follows_new_owner(rentals, ownership, clock, unit, priced):
    rentals.set_rental_specs(OTHER, Decimal("1"), 2)
    rentals.rent(RENTER, unit.id, clock() + DAY, Decimal("0.1"))

    ownership.transfer_from(OWNER, OWNER, OTHER, unit.id)
    assert rentals.user_of(unit.id) == RENTER

    clock.warp(DAY)
    with pytest.raises(InsufficientFunds):
        rentals.rent(STRANGER, unit.id, clock() + DAY, Decimal("0.1"))
    with pytest.raises(ExceedsMaxRentalDays):
        rentals.rent(STRANGER, unit.id, clock() + 3 * DAY, Decimal("3"))
    rentals.rent(STRANGER, unit.id, clock() + DAY, Decimal("1"))


# ---------------------------------------------------------------------------
# Queries on lapsed grants
# ---------------------------------------------------------------------------

def test_lapsed_record_is_kept_raw(rentals, clock, unit, priced):
    expires = clock() + 2 * DAY
    rentals.rent(RENTER, unit.id, expires, Decimal("0.2"))
    clock.warp(3 * DAY)

    assert rentals.user_of(unit.id) == ZERO_ADDRESS
    assert rentals.user_expires(unit.id) == expires
    info = rentals.get_rental_info(unit.id)
    assert (info.paid_price, info.current_user, info.expires_at) == (Decimal("0.2"), RENTER, expires)


def test_lapsed_set_user_grant_is_kept_raw(rentals, clock, unit, priced):
    expires = clock() + 2 * DAY
    rentals.set_user(OWNER, unit.id, OTHER, expires)
    assert rentals.user_of(unit.id) == OTHER

    clock.warp(2 * DAY)

    assert rentals.user_of(unit.id) == ZERO_ADDRESS
    assert rentals.user_expires(unit.id) == expires
    info = rentals.get_rental_info(unit.id)
    assert (info.paid_price, info.current_user, info.expires_at) == (0, OTHER, expires)


def test_grants_are_collected_for_publishing(rentals, clock, unit, priced):
    expires = clock() + DAY
    rentals.set_user(OWNER, unit.id, OTHER, expires)

    assert [e.to_payload() for e in rentals.emitted] == [
        {"unit_id": unit.id, "user": OTHER, "expires_at": expires},
    ]


def test_never_rented_unit_reads_empty(rentals, unit):
    info = rentals.get_rental_info(unit.id)
    assert (info.paid_price, info.current_user, info.expires_at) == (0, ZERO_ADDRESS, 0)
    assert rentals.user_of(unit.id) == ZERO_ADDRESS
    assert rentals.user_expires(unit.id) == 0


# ---------------------------------------------------------------------------
# burn
# ---------------------------------------------------------------------------

def test_burn_blocked_while_rented(rentals, ownership, clock, unit, priced):
    rentals.rent(RENTER, unit.id, clock() + DAY, Decimal("0.1"))
    with pytest.raises(AlreadyRented):
        rentals.burn(OWNER, unit.id)
    assert ownership.exists(unit.id)


def test_burn_after_expiry_resets_record(rentals, ownership, clock, unit, priced):
    rentals.rent(RENTER, unit.id, clock() + DAY, Decimal("0.1"))
    clock.warp(DAY + 1)

    rentals.burn(OWNER, unit.id)

    assert not ownership.exists(unit.id)
    with pytest.raises(NotMinted):
        ownership.owner_of(unit.id)
    info = rentals.get_rental_info(unit.id)
    assert (info.paid_price, info.current_user, info.expires_at) == (0, ZERO_ADDRESS, 0)


def test_burn_requires_approval(rentals, unit):
    with pytest.raises(NotApprovedOrOwner):
        rentals.burn(STRANGER, unit.id)
    with pytest.raises(NotMinted):
        rentals.burn(OWNER, 77)


def test_burn_never_rented_unit(rentals, ownership, unit):
    rentals.burn(OWNER, unit.id)
    assert ownership.balance_of(OWNER) == 0


# ---------------------------------------------------------------------------
# Revenue pool bookkeeping
# ---------------------------------------------------------------------------

def test_rental_pool_tracks_payments_minus_withdrawals(rentals, ownership, treasury, clock, priced):
    first = ownership.mint(OWNER, Decimal(0))
    second = ownership.mint(OWNER, Decimal(0))

    rentals.rent(RENTER, first.id, clock() + 2 * DAY, Decimal("0.2"))
    rentals.rent(OTHER, second.id, clock() + 3 * DAY, Decimal("0.35"))
    assert treasury.balances().unclaimed_rental_revenue == Decimal("0.55")

    payout = treasury.withdraw_rental_revenue(OPERATOR)
    assert payout.amount == Decimal("0.55")

    clock.warp(3 * DAY)
    rentals.rent(RENTER, second.id, clock() + DAY, Decimal("0.1"))
    assert treasury.balances().unclaimed_rental_revenue == Decimal("0.1")
    assert treasury.balances().held_balance == Decimal("0.1")
