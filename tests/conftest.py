"""Canonical test fixtures used across all engine tests.

Fixture: $250K rental, 20% down, 7% rate, 30yr fixed, $2,000/mo rent.
Holding: 10 years, 3% appreciation, 2% rent and expense growth, 6% to sell.
"""

import pytest
from decimal import Decimal

from underwriting.models.assumptions import (
    Deal,
    HoldingPeriodInputs,
    PurchaseType,
    UnderwritingInputs,
)


@pytest.fixture
def canonical_inputs() -> UnderwritingInputs:
    """$250K rental with standard assumptions."""
    return UnderwritingInputs(
        purchase_price=Decimal("250000"),
        closing_cost_rate=Decimal("3"),
        rehab_cost=Decimal("20000"),
        down_payment_pct=Decimal("20"),
        interest_rate=Decimal("7"),
        term_years=30,
        pmi_enabled=False,
        pmi_monthly=Decimal("0"),
        taxes_annual=Decimal("3000"),
        insurance_annual=Decimal("1200"),
        hoa_monthly=Decimal("0"),
        utilities_monthly=Decimal("100"),
        rent_monthly=Decimal("2000"),
        other_income_monthly=Decimal("0"),
        vacancy_rate=Decimal("5"),
        maintenance_rate=Decimal("8"),
        capex_rate=Decimal("5"),
        management_rate=Decimal("8"),
    )


@pytest.fixture
def canonical_holding(canonical_inputs) -> HoldingPeriodInputs:
    return HoldingPeriodInputs(
        underwriting=canonical_inputs,
        holding_period_years=10,
        appreciation_rate=Decimal("3"),
        rent_growth_rate=Decimal("2"),
        expense_growth_rate=Decimal("2"),
        selling_cost_rate=Decimal("6"),
    )


@pytest.fixture
def canonical_deal(canonical_inputs) -> Deal:
    return Deal(
        inputs=canonical_inputs,
        purchase_type=PurchaseType.INVESTMENT_PROPERTY,
        holding_period_years=10,
    )


@pytest.fixture
def primary_residence_deal(canonical_inputs) -> Deal:
    """Same property, owner-occupied. Rent fields are left populated on purpose."""
    return Deal(
        inputs=canonical_inputs,
        purchase_type=PurchaseType.PRIMARY_RESIDENCE,
        holding_period_years=10,
    )
