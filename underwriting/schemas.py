"""Pydantic schema for raw deal input (JSON files, request bodies)."""

from decimal import Decimal

from pydantic import BaseModel, Field

from underwriting.models.assumptions import (
    RESERVE_DEFAULTS,
    Deal,
    PurchaseType,
    UnderwritingInputs,
)


class DealRequest(BaseModel):
    purchase_type: PurchaseType = PurchaseType.INVESTMENT_PROPERTY

    # Purchase
    purchase_price: Decimal = Field(..., ge=0)
    closing_cost_rate: Decimal = Field(Decimal("3"), ge=0, le=100)
    rehab_cost: Decimal = Field(Decimal("0"), ge=0)

    # Loan
    down_payment_pct: Decimal = Field(Decimal("20"), ge=0, le=100)
    interest_rate: Decimal = Field(Decimal("7"), ge=0, le=100)
    term_years: int = Field(30, ge=0, le=50)
    pmi_enabled: bool = False
    pmi_monthly: Decimal = Field(Decimal("0"), ge=0)

    # Monthly costs
    taxes_annual: Decimal = Field(Decimal("0"), ge=0)
    insurance_annual: Decimal = Field(Decimal("0"), ge=0)
    hoa_monthly: Decimal = Field(Decimal("0"), ge=0)
    utilities_monthly: Decimal = Field(Decimal("0"), ge=0)

    # Income
    rent_monthly: Decimal = Field(Decimal("0"), ge=0)
    other_income_monthly: Decimal = Field(Decimal("0"), ge=0)

    # Assumptions
    vacancy_rate: Decimal = Field(Decimal("5"), ge=0, le=100)
    # Unset maintenance and capex fall back to per-purchase-type defaults
    maintenance_rate: Decimal | None = Field(None, ge=0, le=100)
    capex_rate: Decimal | None = Field(None, ge=0, le=100)
    management_rate: Decimal = Field(Decimal("8"), ge=0, le=100)

    # Holding period (omit holding_period_years to skip the projection)
    holding_period_years: int | None = Field(None, ge=1, le=50)
    appreciation_rate: Decimal | None = Field(None, gt=-100, le=100)
    rent_growth_rate: Decimal | None = Field(None, gt=-100, le=100)
    expense_growth_rate: Decimal | None = Field(None, gt=-100, le=100)
    selling_cost_rate: Decimal | None = Field(None, ge=0, le=100)

    # Primary residence comparison
    market_rent_monthly: Decimal | None = Field(None, ge=0)

    def to_deal(self) -> Deal:
        key = "primary_residence" if self.purchase_type is PurchaseType.PRIMARY_RESIDENCE else "investment"
        reserves = RESERVE_DEFAULTS[key]
        inputs = UnderwritingInputs(
            purchase_price=self.purchase_price,
            closing_cost_rate=self.closing_cost_rate,
            rehab_cost=self.rehab_cost,
            down_payment_pct=self.down_payment_pct,
            interest_rate=self.interest_rate,
            term_years=self.term_years,
            pmi_enabled=self.pmi_enabled,
            pmi_monthly=self.pmi_monthly,
            taxes_annual=self.taxes_annual,
            insurance_annual=self.insurance_annual,
            hoa_monthly=self.hoa_monthly,
            utilities_monthly=self.utilities_monthly,
            rent_monthly=self.rent_monthly,
            other_income_monthly=self.other_income_monthly,
            vacancy_rate=self.vacancy_rate,
            maintenance_rate=(
                reserves["maintenance_rate"] if self.maintenance_rate is None else self.maintenance_rate
            ),
            capex_rate=reserves["capex_rate"] if self.capex_rate is None else self.capex_rate,
            management_rate=self.management_rate,
        )
        return Deal(
            inputs=inputs,
            purchase_type=self.purchase_type,
            holding_period_years=self.holding_period_years,
            appreciation_rate=self.appreciation_rate,
            rent_growth_rate=self.rent_growth_rate,
            expense_growth_rate=self.expense_growth_rate,
            selling_cost_rate=self.selling_cost_rate,
            market_rent_monthly=self.market_rent_monthly,
        )
