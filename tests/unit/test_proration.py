"""Unit tests for rent proration"""

import pytest
from datetime import date
from decimal import Decimal
from rental_settlement.domain.exceptions import InvalidInputError
from rental_settlement.domain.proration import prorate
from rental_settlement.utils.money import quantize_money


def test_prorate_partial_cycle():
    """15 of 31 days occupied"""
    amount = prorate(10000, date(2025, 3, 17), date(2025, 4, 16), date(2025, 3, 31))

    assert amount == Decimal(10000) * 15 / 31
    assert quantize_money(amount) == Decimal("4838.71")


def test_prorate_is_not_rounded():
    amount = prorate(10000, date(2025, 3, 17), date(2025, 4, 16), date(2025, 3, 31))
    assert amount != quantize_money(amount)


@pytest.mark.parametrize(
    "full_amount",
    [Decimal("10000"), Decimal("7333.33"), 12345, "0.07", 0.1, Decimal("0")],
)
def test_prorate_full_cycle_returns_full_amount(full_amount):
    start, end = date(2025, 1, 31), date(2025, 2, 27)
    assert prorate(full_amount, start, end, end) == Decimal(str(full_amount))


def test_prorate_single_day():
    """Moving out on the first day of the cycle still counts that day"""
    amount = prorate(Decimal("3100"), date(2025, 3, 1), date(2025, 3, 31), date(2025, 3, 1))
    assert amount == Decimal("100")


def test_prorate_through_date_outside_cycle():
    with pytest.raises(InvalidInputError) as exc_info:
        prorate(10000, date(2025, 3, 17), date(2025, 4, 16), date(2025, 4, 17))
    assert exc_info.value.field == "through_date"

    with pytest.raises(InvalidInputError) as exc_info:
        prorate(10000, date(2025, 3, 17), date(2025, 4, 16), date(2025, 3, 16))
    assert exc_info.value.field == "through_date"


def test_prorate_inverted_cycle():
    with pytest.raises(InvalidInputError) as exc_info:
        prorate(10000, date(2025, 4, 16), date(2025, 3, 17), date(2025, 3, 20))
    assert exc_info.value.field == "cycle_end"


def test_prorate_rejects_negative_amount():
    with pytest.raises(InvalidInputError) as exc_info:
        prorate(-1, date(2025, 3, 17), date(2025, 4, 16), date(2025, 3, 31))
    assert exc_info.value.field == "full_amount"


def test_prorate_is_idempotent():
    args = (Decimal("9999.99"), date(2025, 3, 17), date(2025, 4, 16), date(2025, 4, 2))
    assert prorate(*args) == prorate(*args)
    assert str(prorate(*args)) == str(prorate(*args))
