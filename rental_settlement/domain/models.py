"""Domain models - pure Python dataclasses representing billing and settlement values"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from rental_settlement.utils.date_utils import days_inclusive
from rental_settlement.utils.money import ZERO, sum_money


class BillCategory(str, Enum):
    """Charge categories, declared in payment allocation priority order"""

    PENALTY = "penalty"
    EXTRA_FEE = "extra_fee"
    ELECTRICITY = "electricity"
    WATER = "water"
    RENT = "rent"


ALLOCATION_PRIORITY: Tuple[BillCategory, ...] = tuple(BillCategory)


class BillStatus(str, Enum):
    ACTIVE = "active"
    PARTIALLY_PAID = "partially_paid"
    FULLY_PAID = "fully_paid"


@dataclass(frozen=True)
class BillingCycle:
    """One monthly billing period, both ends inclusive"""

    cycle_number: int
    start: date
    end: date

    @property
    def days(self) -> int:
        return days_inclusive(self.start, self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class BillComponents:
    """Charge breakdown of a bill, one non-negative amount per category"""

    penalty: Decimal = ZERO
    extra_fee: Decimal = ZERO
    electricity: Decimal = ZERO
    water: Decimal = ZERO
    rent: Decimal = ZERO

    def amount_for(self, category: BillCategory) -> Decimal:
        return getattr(self, category.value)

    @property
    def total(self) -> Decimal:
        return sum_money(self.amount_for(c) for c in ALLOCATION_PRIORITY)

    def minus(self, paid: Iterable["PaymentComponent"]) -> "BillComponents":
        """Amounts still unpaid per category after earlier payment components"""
        paid_by_category = {c: ZERO for c in ALLOCATION_PRIORITY}
        for component in paid:
            paid_by_category[component.category] += component.amount

        return BillComponents(
            **{
                c.value: max(self.amount_for(c) - paid_by_category[c], ZERO)
                for c in ALLOCATION_PRIORITY
            }
        )


@dataclass(frozen=True)
class PaymentComponent:
    """Portion of a single payment attributed to one charge category"""

    category: BillCategory
    amount: Decimal


@dataclass(frozen=True)
class DepositAccount:
    """Deposits collected at move-in"""

    advance_payment: Decimal
    security_deposit: Decimal


@dataclass(frozen=True)
class DepositApplicationResult:
    """
    How deposits cover a departing tenant's final bill.

    available_amount == applied_amount + refund_amount always holds.
    forfeited_amount only ever comes out of the security deposit.
    """

    available_amount: Decimal
    applied_amount: Decimal
    forfeited_amount: Decimal
    refund_amount: Decimal
    applied_from_advance: Decimal
    applied_from_security: Decimal
    is_room_transfer: bool = False


@dataclass(frozen=True)
class GeneratedBill:
    """A freshly generated recurring bill, penalty always 0"""

    cycle: BillingCycle
    components: BillComponents
    previous_reading: Decimal
    present_reading: Decimal
    electricity_consumption: Decimal
    total_amount_due: Decimal
    due_date: date
    extra_fee_description: Optional[str] = None


@dataclass(frozen=True)
class PenaltyPreview:
    """Potential late-payment penalty for a persisted bill"""

    penalty_amount: Decimal
    penalty_rate_percent: Decimal
    outstanding_balance: Decimal
    total_with_penalty: Decimal
    is_overdue: bool
    days_overdue: int


@dataclass(frozen=True)
class PaymentAllocation:
    """Component-level bookkeeping for one recorded payment"""

    components: List[PaymentComponent]
    allocated_amount: Decimal
    unallocated_amount: Decimal
    new_amount_paid: Decimal
    status: BillStatus
    payment_date: Optional[date] = None
    method: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class MoveOutBreakdown:
    """Charges making up a departing tenant's total owed"""

    prorated_rent: Decimal
    electricity: Decimal
    water: Decimal
    extra_fees: Decimal
    outstanding_balance: Decimal
    total_owed: Decimal

    def as_components(self) -> BillComponents:
        return BillComponents(
            penalty=ZERO,
            extra_fee=self.extra_fees,
            electricity=self.electricity,
            water=self.water,
            rent=self.prorated_rent,
        )


@dataclass(frozen=True)
class SettlementOutcome:
    """
    Output of a move-out settlement.

    final_balance > 0: tenant still owes money
    final_balance < 0: refund due to tenant
    final_balance == 0: exact settlement
    """

    final_balance: Decimal
    deposit_application: DepositApplicationResult
    breakdown: MoveOutBreakdown
    cycle: BillingCycle
    is_room_transfer: bool = field(default=False)

    @property
    def is_balance_due(self) -> bool:
        return self.final_balance > 0

    @property
    def is_refund_due(self) -> bool:
        return self.final_balance < 0

    @property
    def is_settled(self) -> bool:
        return self.final_balance == 0

    @property
    def refund_due(self) -> Decimal:
        return -self.final_balance if self.final_balance < 0 else ZERO
