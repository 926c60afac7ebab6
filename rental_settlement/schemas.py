"""Pydantic schemas for the records the engine consumes from the persistence layer"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rental_settlement.domain.models import BillComponents, BillStatus, DepositAccount


class _Record(BaseModel):
    """Strict, immutable input record: unknown or missing fields are rejected"""

    model_config = ConfigDict(extra="forbid", frozen=True)


class TenantSnapshot(_Record):
    """Tenant fields relevant to billing, captured at call time"""

    rent_start_date: date = Field(..., description="Anchor date for billing cycles")
    advance_payment: Decimal = Field(..., ge=0)
    security_deposit: Decimal = Field(..., ge=0)
    initial_electricity_reading: Decimal = Field(Decimal("0"), ge=0)

    def deposit_account(self) -> DepositAccount:
        return DepositAccount(
            advance_payment=self.advance_payment,
            security_deposit=self.security_deposit,
        )


class RoomRates(_Record):
    """Room rent plus branch utility rates"""

    monthly_rent: Decimal = Field(..., ge=0)
    electricity_rate: Decimal = Field(..., ge=0, description="Charge per kWh")
    water_rate: Decimal = Field(..., ge=0, description="Flat monthly water charge")


class BillComponentsIn(_Record):
    """Persisted charge breakdown of a bill"""

    penalty: Decimal = Field(Decimal("0"), ge=0)
    extra_fee: Decimal = Field(Decimal("0"), ge=0)
    electricity: Decimal = Field(Decimal("0"), ge=0)
    water: Decimal = Field(Decimal("0"), ge=0)
    rent: Decimal = Field(Decimal("0"), ge=0)

    def to_domain(self) -> BillComponents:
        return BillComponents(
            penalty=self.penalty,
            extra_fee=self.extra_fee,
            electricity=self.electricity,
            water=self.water,
            rent=self.rent,
        )


class BillSnapshot(_Record):
    """An already-persisted bill"""

    billing_period_start: date
    billing_period_end: date
    due_date: date
    components: BillComponentsIn
    total_amount_due: Decimal = Field(..., ge=0)
    amount_paid: Decimal = Field(Decimal("0"), ge=0)
    status: BillStatus = BillStatus.ACTIVE

    @model_validator(mode="after")
    def _period_in_order(self) -> "BillSnapshot":
        if self.billing_period_end < self.billing_period_start:
            raise ValueError("billing_period_end is before billing_period_start")
        return self

    @property
    def outstanding_balance(self) -> Decimal:
        return max(self.total_amount_due - self.amount_paid, Decimal("0"))

    def to_components(self) -> BillComponents:
        return self.components.to_domain()


class BillGenerationRequest(_Record):
    """Everything needed to generate the next recurring bill"""

    tenant: TenantSnapshot
    rates: RoomRates
    fully_paid_bill_count: int = Field(..., ge=0)
    present_electricity_reading: Decimal = Field(..., ge=0)
    previous_electricity_reading: Optional[Decimal] = Field(
        None, ge=0, description="Reading on the latest bill; tenant's initial reading if none"
    )
    extra_fee: Decimal = Field(Decimal("0"), ge=0)
    extra_fee_description: Optional[str] = None


class PaymentMethod(str, Enum):
    CASH = "cash"
    GCASH = "gcash"
    DEPOSIT_APPLICATION = "deposit_application"


class PaymentRequest(_Record):
    """A payment to record against a bill"""

    amount: Decimal = Field(..., gt=0)
    payment_date: date
    method: PaymentMethod
    reference_number: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _gcash_needs_reference(self) -> "PaymentRequest":
        if self.method == PaymentMethod.GCASH and not (self.reference_number or "").strip():
            raise ValueError("GCash reference number is required for GCash payments")
        return self


class MoveOutRequest(_Record):
    """Inputs for a departing (or transferring) tenant's final bill"""

    tenant: TenantSnapshot
    rates: RoomRates
    fully_paid_bill_count: int = Field(..., ge=0)
    move_out_date: date
    previous_electricity_reading: Decimal = Field(..., ge=0)
    final_electricity_reading: Optional[Decimal] = Field(None, ge=0)
    final_water_amount: Optional[Decimal] = Field(None, ge=0, description="Overrides the flat water rate")
    extra_fees: Decimal = Field(Decimal("0"), ge=0)
    outstanding_balance: Decimal = Field(
        Decimal("0"), ge=0, description="Sum of total_amount_due - amount_paid over unsettled bills"
    )
    is_room_transfer: bool = False
