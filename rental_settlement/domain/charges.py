"""Metered utility charges"""

from decimal import Decimal
from typing import Tuple

from rental_settlement.domain.exceptions import InvalidInputError
from rental_settlement.utils.money import Number, non_negative


def electricity_charge(
    present_reading: Number,
    previous_reading: Number,
    rate: Number,
) -> Tuple[Decimal, Decimal]:
    """
    Metered electricity for one period.

    Returns (consumption, charge) where charge = consumption * rate.
    A present reading below the previous one is rejected rather than
    producing a negative charge.
    """
    present = non_negative(present_reading, "present_reading")
    previous = non_negative(previous_reading, "previous_reading")
    per_unit = non_negative(rate, "electricity_rate")

    if present < previous:
        raise InvalidInputError(
            "present_reading", present_reading, f"is below previous reading {previous}"
        )

    consumption = present - previous
    return consumption, consumption * per_unit
