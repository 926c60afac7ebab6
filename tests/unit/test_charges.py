"""Unit tests for metered utility charges and money helpers"""

import pytest
from decimal import Decimal
from rental_settlement.domain.charges import electricity_charge
from rental_settlement.domain.exceptions import InvalidInputError
from rental_settlement.utils.money import quantize_money, to_money


def test_electricity_charge():
    consumption, charge = electricity_charge(Decimal("1350"), Decimal("1200"), Decimal("12.5"))

    assert consumption == Decimal("150")
    assert charge == Decimal("1875")


def test_electricity_charge_no_consumption():
    consumption, charge = electricity_charge(1200, 1200, Decimal("12.5"))

    assert consumption == 0
    assert charge == 0


def test_electricity_charge_rejects_meter_rollback():
    with pytest.raises(InvalidInputError) as exc_info:
        electricity_charge(1100, 1200, Decimal("12.5"))
    assert exc_info.value.field == "present_reading"


def test_to_money_keeps_float_text():
    assert to_money(0.1, "amount") == Decimal("0.1")


@pytest.mark.parametrize("value", [True, None, "abc", float("nan"), float("inf"), [1]])
def test_to_money_rejects_non_numeric(value):
    with pytest.raises(InvalidInputError) as exc_info:
        to_money(value, "amount")
    assert exc_info.value.field == "amount"


def test_quantize_money_rounds_half_up():
    assert quantize_money(Decimal("4838.705")) == Decimal("4838.71")
    assert quantize_money(Decimal("4838.7049")) == Decimal("4838.70")
    assert quantize_money(Decimal("527.5"), Decimal("1")) == Decimal("528")
