from decimal import Decimal

import pytest
from pydantic import ValidationError

from underwriting.models.assumptions import PurchaseType
from underwriting.schemas import DealRequest


class TestDealRequest:
    def test_minimal_payload(self):
        deal = DealRequest(purchase_price="250000", rent_monthly=2000).to_deal()
        assert deal.purchase_type is PurchaseType.INVESTMENT_PROPERTY
        assert deal.inputs.purchase_price == Decimal("250000")
        assert deal.inputs.interest_rate == Decimal("7")
        assert deal.holding_period_years is None

    def test_investment_reserve_defaults(self):
        deal = DealRequest(purchase_price=250000).to_deal()
        assert deal.inputs.maintenance_rate == Decimal("8")
        assert deal.inputs.capex_rate == Decimal("5")

    def test_primary_residence_reserve_defaults(self):
        deal = DealRequest(purchase_price=250000, purchase_type="primary_residence").to_deal()
        assert deal.is_primary_residence
        assert deal.inputs.maintenance_rate == Decimal("0.5")
        assert deal.inputs.capex_rate == Decimal("0.5")

    def test_explicit_reserves_kept(self):
        deal = DealRequest(
            purchase_price=250000, purchase_type="primary_residence", maintenance_rate=1
        ).to_deal()
        assert deal.inputs.maintenance_rate == Decimal("1")
        assert deal.inputs.capex_rate == Decimal("0.5")

    def test_holding_assumptions_passed_through(self):
        deal = DealRequest(
            purchase_price=250000, holding_period_years=7, appreciation_rate="-2"
        ).to_deal()
        assert deal.holding_period_years == 7
        assert deal.appreciation_rate == Decimal("-2")
        assert deal.rent_growth_rate is None

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError):
            DealRequest(purchase_price=-1)

    def test_rejects_rate_over_100(self):
        with pytest.raises(ValidationError):
            DealRequest(purchase_price=250000, vacancy_rate=101)

    def test_rejects_zero_horizon(self):
        with pytest.raises(ValidationError):
            DealRequest(purchase_price=250000, holding_period_years=0)

    def test_rejects_unknown_purchase_type(self):
        with pytest.raises(ValidationError):
            DealRequest(purchase_price=250000, purchase_type="timeshare")
