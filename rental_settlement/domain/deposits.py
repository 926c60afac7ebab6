"""Deposit application for a departing tenant"""

from rental_settlement.domain.exceptions import InvalidInputError
from rental_settlement.domain.models import DepositApplicationResult
from rental_settlement.utils.money import ZERO, Number, non_negative

# Fully paid bills needed before the security deposit can cover the final bill
DEPOSIT_TENURE_THRESHOLD = 5


def settle(
    fully_paid_bill_count: int,
    advance_payment: Number,
    security_deposit: Number,
    total_owed: Number,
    is_room_transfer: bool = False,
) -> DepositApplicationResult:
    """
    Decide which deposits are available and how much of them the final bill consumes.

    Tenure rule, on the number of fully paid bills:
    - >= 5 (tenant reached the 6th cycle): advance + security both available,
      nothing forfeited
    - < 5: only the advance payment is available, the whole security deposit
      is forfeited

    applied = min(available, total_owed), refund = available - applied.
    The advance payment is consumed before the security deposit.

    is_room_transfer is carried onto the result untouched; it does not alter
    the arithmetic. Downstream callers branch on it (e.g. to skip
    forfeiture notices).

    Examples:
        settle(5, 5000, 5000, 8000) -> available 10000, applied 8000, forfeited 0, refund 2000
        settle(4, 5000, 5000, 8000) -> available 5000, applied 5000, forfeited 5000, refund 0
    """
    if isinstance(fully_paid_bill_count, bool) or not isinstance(fully_paid_bill_count, int):
        raise InvalidInputError("fully_paid_bill_count", fully_paid_bill_count, "must be an integer")
    if fully_paid_bill_count < 0:
        raise InvalidInputError("fully_paid_bill_count", fully_paid_bill_count, "must not be negative")

    advance = non_negative(advance_payment, "advance_payment")
    security = non_negative(security_deposit, "security_deposit")
    owed = non_negative(total_owed, "total_owed")

    if fully_paid_bill_count >= DEPOSIT_TENURE_THRESHOLD:
        available = advance + security
        forfeited = ZERO
    else:
        available = advance
        forfeited = security

    applied = min(available, owed)
    from_advance = min(applied, advance)

    return DepositApplicationResult(
        available_amount=available,
        applied_amount=applied,
        forfeited_amount=forfeited,
        refund_amount=available - applied,
        applied_from_advance=from_advance,
        applied_from_security=applied - from_advance,
        is_room_transfer=bool(is_room_transfer),
    )
