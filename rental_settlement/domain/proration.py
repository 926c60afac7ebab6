"""Proration of a full-cycle charge to a partial occupancy span"""

from datetime import date
from decimal import Decimal

from rental_settlement.domain.exceptions import InvalidInputError
from rental_settlement.utils.date_utils import days_inclusive
from rental_settlement.utils.money import Number, non_negative


def prorate(full_amount: Number, cycle_start: date, cycle_end: date, through_date: date) -> Decimal:
    """
    Scale a full-cycle charge to occupancy from cycle_start through through_date.

    Both boundary days count as occupied:
        days_occupied = through_date - cycle_start + 1
        total_days    = cycle_end - cycle_start + 1

    Example (10,000 rent, cycle 2025-03-17..2025-04-16, out on 2025-03-31):
        10000 * 15 / 31 = 4838.709677...

    The result is not rounded. Round once when persisting, otherwise repeated
    calls compound rounding error. through_date outside the cycle is an
    error; callers clamp against actual occupancy themselves.
    """
    amount = non_negative(full_amount, "full_amount")

    if cycle_end < cycle_start:
        raise InvalidInputError("cycle_end", cycle_end, f"is before cycle_start {cycle_start}")
    if not cycle_start <= through_date <= cycle_end:
        raise InvalidInputError(
            "through_date", through_date, f"must be within {cycle_start}..{cycle_end}"
        )

    days_occupied = days_inclusive(cycle_start, through_date)
    total_days = days_inclusive(cycle_start, cycle_end)

    # Multiply first: amount * n / n is exact in Decimal for full occupancy
    return amount * days_occupied / total_days
