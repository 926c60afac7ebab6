"""Decimal helpers for monetary amounts"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Union

from rental_settlement.domain.exceptions import InvalidInputError

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
CENT = Decimal("0.01")
TOLERANCE = Decimal("0.01")


def to_money(value: Number, field: str) -> Decimal:
    """
    Coerce a caller-supplied amount to Decimal.

    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    Booleans, NaN and infinities are rejected.
    """
    if isinstance(value, bool):
        raise InvalidInputError(field, value, "must be numeric")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise InvalidInputError(field, value, "must be numeric") from None
    else:
        raise InvalidInputError(field, value, "must be numeric")

    if not amount.is_finite():
        raise InvalidInputError(field, value, "must be a finite number")
    return amount


def non_negative(value: Number, field: str) -> Decimal:
    amount = to_money(value, field)
    if amount < 0:
        raise InvalidInputError(field, value, "must not be negative")
    return amount


def positive(value: Number, field: str) -> Decimal:
    amount = to_money(value, field)
    if amount <= 0:
        raise InvalidInputError(field, value, "must be greater than 0")
    return amount


def quantize_money(amount: Decimal, unit: Decimal = CENT) -> Decimal:
    """Round half-up to the smallest currency unit. Apply once, when persisting."""
    return amount.quantize(unit, rounding=ROUND_HALF_UP)


def sum_money(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def within_tolerance(actual: Decimal, expected: Decimal, tolerance: Decimal = TOLERANCE) -> bool:
    return abs(actual - expected) < tolerance
