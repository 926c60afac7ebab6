"""Billing cycle derivation from a tenant's anchor (rent start) date"""

from datetime import date

from rental_settlement.domain.exceptions import InvalidInputError
from rental_settlement.domain.models import BillingCycle
from rental_settlement.utils.date_utils import add_days, add_months


def _require_count(value: int, field: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(field, value, "must be an integer")
    if value < minimum:
        raise InvalidInputError(field, value, f"must be >= {minimum}")
    return value


def cycle_for(anchor_date: date, cycle_number: int) -> BillingCycle:
    """
    Billing period N for a tenant.

    Every cycle start is computed from the anchor, never chained from the
    previous cycle, so day-of-month clamping does not drift:

        anchor 2025-01-31
        cycle 1: 2025-01-31 .. 2025-02-27
        cycle 2: 2025-02-28 .. 2025-03-30
        cycle 3: 2025-03-31 .. 2025-04-29

    The end of cycle N is the day before the start of cycle N+1, so cycles
    never overlap and never leave gaps.
    """
    _require_count(cycle_number, "cycle_number", 1)

    start = add_months(anchor_date, cycle_number - 1)
    next_start = add_months(anchor_date, cycle_number)

    return BillingCycle(cycle_number=cycle_number, start=start, end=add_days(next_start, -1))


def current_cycle_number(fully_paid_bill_count: int) -> int:
    """Next cycle to bill: one past the number of fully paid bills"""
    return _require_count(fully_paid_bill_count, "fully_paid_bill_count", 0) + 1


def cycle_containing(anchor_date: date, on_date: date) -> BillingCycle:
    """Cycle whose period covers on_date (the caller supplies "today")"""
    if on_date < anchor_date:
        raise InvalidInputError("on_date", on_date, f"is before anchor date {anchor_date}")

    # Month distance lands on or one past the right cycle; step back if needed
    months = (on_date.year - anchor_date.year) * 12 + (on_date.month - anchor_date.month)
    cycle = cycle_for(anchor_date, months + 1)
    if on_date < cycle.start:
        cycle = cycle_for(anchor_date, months)
    return cycle


def due_date_for(cycle: BillingCycle, offset_days: int) -> date:
    """Payment due date: cycle end plus a grace offset"""
    _require_count(offset_days, "offset_days", 0)
    return add_days(cycle.end, offset_days)
