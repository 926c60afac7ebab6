"""Late-payment penalty calculation"""

from datetime import date
from decimal import Decimal

from rental_settlement.utils.money import ZERO, Number, non_negative


def penalty(
    total_amount_due: Number,
    evaluation_date: date,
    due_date: date,
    penalty_rate_percent: Number,
) -> Decimal:
    """
    Surcharge for a bill evaluated after its due date.

    Returns 0 on or before the due date, otherwise
    total_amount_due * penalty_rate_percent / 100.

    The rate has no default here: it is configuration owned by the caller
    and read fresh for every evaluation, so a rate change applies from the
    next call on. Safe to call repeatedly for "potential penalty" previews.
    """
    amount = non_negative(total_amount_due, "total_amount_due")
    rate = non_negative(penalty_rate_percent, "penalty_rate_percent")

    if evaluation_date <= due_date:
        return ZERO

    return amount * rate / 100


def days_overdue(evaluation_date: date, due_date: date) -> int:
    return max((evaluation_date - due_date).days, 0)
