"""Settlement engine - composes the calculators for each billing use case"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from rental_settlement.config import Settings, settings as default_settings
from rental_settlement.domain import allocation, deposits, penalties
from rental_settlement.domain.charges import electricity_charge
from rental_settlement.domain.cycles import current_cycle_number, cycle_for, due_date_for
from rental_settlement.domain.exceptions import AllocationConsistencyError, InvalidInputError
from rental_settlement.domain.models import (
    BillComponents,
    BillStatus,
    GeneratedBill,
    MoveOutBreakdown,
    PaymentAllocation,
    PaymentComponent,
    PenaltyPreview,
    SettlementOutcome,
)
from rental_settlement.domain.proration import prorate
from rental_settlement.infrastructure.observability import metrics
from rental_settlement.infrastructure.observability.logging import log_settlement, setup_logging
from rental_settlement.schemas import (
    BillGenerationRequest,
    BillSnapshot,
    MoveOutRequest,
    PaymentRequest,
)
from rental_settlement.utils.money import ZERO, Number, non_negative, within_tolerance

logger = logging.getLogger(__name__)


class SettlementEngine:
    """
    Stateless entry point used by every billing call site.

    Nothing here reads the clock, the database or configuration that changes
    at runtime: the caller passes snapshots in and persists what comes out.

    Precondition: callers serialize generate_bill and record_payment per
    tenant/bill (database transaction or per-tenant lock). Two concurrent
    callers reading the same fully paid bill count would otherwise generate
    duplicate cycles or allocate conflicting payments. The engine does not
    lock and never retries.
    """

    def __init__(self, config: Optional[Settings] = None) -> None:
        self._settings = config or default_settings

    def generate_bill(self, request: BillGenerationRequest) -> GeneratedBill:
        """
        Build the next recurring bill.

        Flow:
        1. Next cycle = fully paid bills + 1
        2. Electricity from meter readings, water at the flat branch rate
        3. Penalty is always 0 on generation
        4. Due date = cycle end + configured offset
        """
        cycle = cycle_for(
            request.tenant.rent_start_date,
            current_cycle_number(request.fully_paid_bill_count),
        )

        previous_reading = request.previous_electricity_reading
        if previous_reading is None:
            previous_reading = request.tenant.initial_electricity_reading

        consumption, electricity = electricity_charge(
            request.present_electricity_reading,
            previous_reading,
            request.rates.electricity_rate,
        )

        components = BillComponents(
            penalty=ZERO,
            extra_fee=request.extra_fee,
            electricity=electricity,
            water=request.rates.water_rate,
            rent=request.rates.monthly_rent,
        )

        bill = GeneratedBill(
            cycle=cycle,
            components=components,
            previous_reading=previous_reading,
            present_reading=request.present_electricity_reading,
            electricity_consumption=consumption,
            total_amount_due=components.total,
            due_date=due_date_for(cycle, self._settings.due_date_offset_days),
            extra_fee_description=request.extra_fee_description,
        )

        metrics.bills_generated_counter.inc()
        logger.info(
            "Bill generated",
            extra={
                "step": "bill_generated",
                "cycle_number": cycle.cycle_number,
                "billing_period_start": cycle.start.isoformat(),
                "billing_period_end": cycle.end.isoformat(),
                "total_amount_due": str(bill.total_amount_due),
            },
        )
        return bill

    def preview_penalty(
        self,
        bill: BillSnapshot,
        evaluation_date: date,
        penalty_rate_percent: Number,
    ) -> PenaltyPreview:
        """
        Potential penalty for a persisted bill, without applying it.

        The base is the bill's outstanding balance. Bills that are fully paid
        or already carry a penalty preview a zero new penalty.
        """
        rate = non_negative(penalty_rate_percent, "penalty_rate_percent")
        outstanding = bill.outstanding_balance

        already_penalized = bill.components.penalty > 0
        settled = bill.status == BillStatus.FULLY_PAID or outstanding == 0

        if settled or already_penalized:
            amount = ZERO
        else:
            amount = penalties.penalty(outstanding, evaluation_date, bill.due_date, rate)

        is_overdue = not settled and evaluation_date > bill.due_date
        return PenaltyPreview(
            penalty_amount=amount,
            penalty_rate_percent=rate,
            outstanding_balance=outstanding,
            total_with_penalty=bill.total_amount_due + amount,
            is_overdue=is_overdue,
            days_overdue=penalties.days_overdue(evaluation_date, bill.due_date) if is_overdue else 0,
        )

    def record_payment(
        self,
        bill: BillSnapshot,
        payment: PaymentRequest,
        prior_components: Optional[Sequence[PaymentComponent]] = None,
    ) -> PaymentAllocation:
        """
        Allocate a payment across the bill's components for the caller to persist.

        prior_components are the component records of earlier payments on the
        same bill. When given, they must add up to bill.amount_paid and the new
        payment is allocated against what they left unpaid. Without them the
        payment is capped at the bill's outstanding balance and allocated in
        priority order over the full components. Any amount beyond what is
        unpaid is reported as unallocated_amount, not assigned.

        Raises:
            InvalidInputError: bill is already fully paid
            AllocationConsistencyError: components disagree with the bill total,
                prior components disagree with amount_paid, or the allocation
                does not add up
        """
        if bill.status == BillStatus.FULLY_PAID:
            raise InvalidInputError("bill.status", bill.status.value, "bill is already fully paid")

        tolerance = self._settings.money_tolerance
        components = bill.to_components()
        self._check_consistent(components.total, bill.total_amount_due, "bill components vs total_amount_due")

        if prior_components is not None:
            self._check_consistent(
                allocation.sum_components(prior_components),
                bill.amount_paid,
                "prior payment components vs amount_paid",
            )
            components = components.minus(prior_components)
            unpaid = components.total
        else:
            # Without the component history only the bill-level balance is known
            unpaid = min(components.total, bill.outstanding_balance)

        allocatable = min(payment.amount, unpaid)
        allocated = allocation.allocate(allocatable, components) if allocatable > 0 else []
        if not allocation.validate(allocated, allocatable, tolerance):
            self._fail_consistency(allocatable, allocation.sum_components(allocated), "payment allocation")

        allocated_amount = allocation.sum_components(allocated)
        unallocated = payment.amount - allocated_amount
        new_amount_paid = bill.amount_paid + allocated_amount

        if new_amount_paid >= bill.total_amount_due or within_tolerance(
            new_amount_paid, bill.total_amount_due, tolerance
        ):
            status = BillStatus.FULLY_PAID
        elif new_amount_paid > 0:
            status = BillStatus.PARTIALLY_PAID
        else:
            status = BillStatus.ACTIVE

        result = PaymentAllocation(
            components=allocated,
            allocated_amount=allocated_amount,
            unallocated_amount=unallocated,
            new_amount_paid=new_amount_paid,
            status=status,
            payment_date=payment.payment_date,
            method=payment.method.value,
            reference_number=payment.reference_number,
            notes=payment.notes,
        )

        metrics.record_payment_allocation(status, unallocated)
        logger.info(
            "Payment allocated",
            extra={
                "step": "payment_allocated",
                "payment_method": payment.method.value,
                "amount": str(payment.amount),
                "allocated_amount": str(allocated_amount),
                "unallocated_amount": str(unallocated),
                "bill_status": status.value,
            },
        )
        if unallocated > 0:
            logger.warning(
                "Payment exceeds unpaid bill components",
                extra={"step": "overpayment", "unallocated_amount": str(unallocated)},
            )
        return result

    def settle_move_out(self, request: MoveOutRequest) -> SettlementOutcome:
        """
        Final bill and deposit application for a departing tenant.

        Flow:
        1. Current cycle from the fully paid bill count
        2. Rent prorated through the move-out date (must fall inside that cycle)
        3. Final electricity, water (flat rate unless overridden), extra fees,
           and outstanding balances from earlier bills
        4. Deposit rule on tenure
        5. final_balance = total_owed - available deposits
        """
        cycle = cycle_for(
            request.tenant.rent_start_date,
            current_cycle_number(request.fully_paid_bill_count),
        )
        prorated_rent = prorate(request.rates.monthly_rent, cycle.start, cycle.end, request.move_out_date)

        final_reading = request.final_electricity_reading
        if final_reading is None:
            final_reading = request.previous_electricity_reading
        _, electricity = electricity_charge(
            final_reading,
            request.previous_electricity_reading,
            request.rates.electricity_rate,
        )

        water = request.final_water_amount
        if water is None:
            water = request.rates.water_rate

        total_owed = prorated_rent + electricity + water + request.extra_fees + request.outstanding_balance
        breakdown = MoveOutBreakdown(
            prorated_rent=prorated_rent,
            electricity=electricity,
            water=water,
            extra_fees=request.extra_fees,
            outstanding_balance=request.outstanding_balance,
            total_owed=total_owed,
        )

        account = request.tenant.deposit_account()
        application = deposits.settle(
            request.fully_paid_bill_count,
            account.advance_payment,
            account.security_deposit,
            total_owed,
            request.is_room_transfer,
        )
        final_balance = total_owed - application.available_amount

        metrics.record_settlement(final_balance)
        log_settlement(
            cycle_number=cycle.cycle_number,
            fully_paid_bill_count=request.fully_paid_bill_count,
            total_owed=total_owed,
            available_amount=application.available_amount,
            forfeited_amount=application.forfeited_amount,
            final_balance=final_balance,
            is_room_transfer=request.is_room_transfer,
        )

        return SettlementOutcome(
            final_balance=final_balance,
            deposit_application=application,
            breakdown=breakdown,
            cycle=cycle,
            is_room_transfer=request.is_room_transfer,
        )

    def _check_consistent(self, actual: Decimal, expected: Decimal, context: str) -> None:
        if not within_tolerance(actual, expected, self._settings.money_tolerance):
            self._fail_consistency(expected, actual, context)

    def _fail_consistency(self, expected: Decimal, actual: Decimal, context: str) -> None:
        metrics.allocation_consistency_failures_counter.inc()
        logger.warning(
            "Consistency check failed",
            extra={"step": "consistency_check", "context": context, "expected": str(expected), "actual": str(actual)},
        )
        raise AllocationConsistencyError(expected=expected, actual=actual, context=context)


def create_engine(config: Optional[Settings] = None) -> SettlementEngine:
    """Engine factory for call sites: configures JSON logging, then builds the engine"""
    config = config or default_settings
    setup_logging(config.log_level, config.service_name)
    return SettlementEngine(config)
