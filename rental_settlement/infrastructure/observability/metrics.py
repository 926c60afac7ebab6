"""Prometheus metrics for bill generation, payment allocation and settlements"""

from decimal import Decimal

from prometheus_client import Counter

from rental_settlement.domain.models import BillStatus

# Billing metrics
bills_generated_counter = Counter(
    "rental_bills_generated_total",
    "Recurring bills generated",
)

# Payment metrics
payments_allocated_counter = Counter(
    "rental_payments_allocated_total",
    "Payments allocated to bill components",
    ["status"],  # resulting bill status
)

overpayment_counter = Counter(
    "rental_overpayment_total",
    "Payments that exceeded the bill's unpaid components",
)

allocation_consistency_failures_counter = Counter(
    "rental_allocation_consistency_failures_total",
    "Bills or allocations that failed the 0.01 tolerance check",
)

# Settlement metrics
settlements_counter = Counter(
    "rental_settlements_total",
    "Move-out settlements computed",
    ["outcome"],  # balance_due | refund_due | settled
)


def record_payment_allocation(status: BillStatus, unallocated_amount: Decimal) -> None:
    payments_allocated_counter.labels(status=status.value).inc()
    if unallocated_amount > 0:
        overpayment_counter.inc()


def record_settlement(final_balance: Decimal) -> None:
    """Record settlement outcome for monitoring refund vs balance-due distribution"""
    if final_balance > 0:
        outcome = "balance_due"
    elif final_balance < 0:
        outcome = "refund_due"
    else:
        outcome = "settled"

    settlements_counter.labels(outcome=outcome).inc()
