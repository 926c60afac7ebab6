"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from rental_settlement.config import Settings
from rental_settlement.engine import SettlementEngine
from rental_settlement.domain.models import BillComponents, BillStatus
from rental_settlement.schemas import (
    BillComponentsIn,
    BillSnapshot,
    RoomRates,
    TenantSnapshot,
)


@pytest.fixture
def engine() -> SettlementEngine:
    """Engine with default billing settings, independent of any .env file"""
    return SettlementEngine(Settings(_env_file=None))


@pytest.fixture
def tenant() -> TenantSnapshot:
    """Tenant who moved in on 2025-03-17 with 5000 advance and 5000 security"""
    return TenantSnapshot(
        rent_start_date=date(2025, 3, 17),
        advance_payment=Decimal("5000"),
        security_deposit=Decimal("5000"),
        initial_electricity_reading=Decimal("1200"),
    )


@pytest.fixture
def rates() -> RoomRates:
    return RoomRates(
        monthly_rent=Decimal("10000"),
        electricity_rate=Decimal("12.5"),
        water_rate=Decimal("200"),
    )


@pytest.fixture
def sample_components() -> BillComponents:
    """Bill breakdown used across allocation tests"""
    return BillComponents(
        penalty=Decimal("100"),
        extra_fee=Decimal("50"),
        electricity=Decimal("300"),
        water=Decimal("200"),
        rent=Decimal("1000"),
    )


@pytest.fixture
def open_bill() -> BillSnapshot:
    """Unpaid cycle-1 bill for the sample tenant, no penalty yet"""
    return BillSnapshot(
        billing_period_start=date(2025, 3, 17),
        billing_period_end=date(2025, 4, 16),
        due_date=date(2025, 4, 26),
        components=BillComponentsIn(
            penalty=Decimal("0"),
            extra_fee=Decimal("50"),
            electricity=Decimal("300"),
            water=Decimal("200"),
            rent=Decimal("10000"),
        ),
        total_amount_due=Decimal("10550"),
        amount_paid=Decimal("0"),
        status=BillStatus.ACTIVE,
    )
