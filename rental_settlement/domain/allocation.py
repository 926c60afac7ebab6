"""Priority-based allocation of a payment across bill components"""

from decimal import Decimal
from typing import Iterable, List

from rental_settlement.domain.models import ALLOCATION_PRIORITY, BillComponents, PaymentComponent
from rental_settlement.utils.money import TOLERANCE, Number, non_negative, positive, sum_money, within_tolerance


def allocate(payment_amount: Number, bill_components: BillComponents) -> List[PaymentComponent]:
    """
    Split one payment across bill components.

    Priority: penalty > extra_fee > electricity > water > rent. Each category
    takes min(remaining, component amount). Zero-amount categories are
    skipped, so no zero-amount component is ever emitted.

    Overpayment boundary: any amount beyond the bill's component total is
    NOT allocated and not returned. Callers that need to treat overpayment
    (credit, refund, rejection) must compare the payment with the sum of
    the result themselves.

    Example:
        allocate(400, penalty=100, extra_fee=50, electricity=300, water=200, rent=1000)
        -> [penalty 100, extra_fee 50, electricity 250]
    """
    remaining = positive(payment_amount, "payment_amount")
    components: List[PaymentComponent] = []

    for category in ALLOCATION_PRIORITY:
        if remaining <= 0:
            break

        available = non_negative(bill_components.amount_for(category), f"bill_components.{category.value}")
        if available == 0:
            continue

        assigned = min(remaining, available)
        components.append(PaymentComponent(category=category, amount=assigned))
        remaining -= assigned

    return components


def sum_components(components: Iterable[PaymentComponent]) -> Decimal:
    return sum_money(c.amount for c in components)


def validate(
    components: Iterable[PaymentComponent],
    expected_total: Number,
    tolerance: Decimal = TOLERANCE,
) -> bool:
    """
    True when the components add up to expected_total within tolerance (0.01 by default).

    Catches internally inconsistent allocations. Legitimate overpayment is
    not its concern: check against the amount actually allocatable.
    """
    expected = non_negative(expected_total, "expected_total")
    return within_tolerance(sum_components(components), expected, tolerance)
