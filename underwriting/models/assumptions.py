from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum


class PurchaseType(Enum):
    PRIMARY_RESIDENCE = "primary_residence"
    INVESTMENT_PROPERTY = "investment_property"
    HOUSE_HACK = "house_hack"
    VACATION_HOME = "vacation_home"
    OTHER = "other"


# Maintenance and capex defaults. Investment rates are % of gross rent;
# primary residence rates are % of property value per year.
RESERVE_DEFAULTS = {
    "investment": {"maintenance_rate": Decimal("8"), "capex_rate": Decimal("5")},
    "primary_residence": {"maintenance_rate": Decimal("0.5"), "capex_rate": Decimal("0.5")},
}


@dataclass(frozen=True)
class UnderwritingInputs:
    """Point-in-time deal assumptions. Rates are percentages (7 means 7%)."""

    # Purchase
    purchase_price: Decimal
    closing_cost_rate: Decimal = Decimal("3")  # % of purchase price
    rehab_cost: Decimal = Decimal("0")

    # Financing
    down_payment_pct: Decimal = Decimal("20")
    interest_rate: Decimal = Decimal("7")  # Annual
    term_years: int = 30
    pmi_enabled: bool = False
    pmi_monthly: Decimal = Decimal("0")

    # Fixed costs
    taxes_annual: Decimal = Decimal("0")
    insurance_annual: Decimal = Decimal("0")
    hoa_monthly: Decimal = Decimal("0")
    utilities_monthly: Decimal = Decimal("0")

    # Income
    rent_monthly: Decimal = Decimal("0")
    other_income_monthly: Decimal = Decimal("0")  # Laundry, parking, etc.

    # Rent-proportional assumptions (% of gross scheduled rent)
    vacancy_rate: Decimal = Decimal("5")
    maintenance_rate: Decimal = Decimal("8")
    capex_rate: Decimal = Decimal("5")
    management_rate: Decimal = Decimal("8")

    @property
    def loan_amount(self) -> Decimal:
        return self.purchase_price * (1 - self.down_payment_pct / 100)

    @property
    def down_payment(self) -> Decimal:
        return self.purchase_price * self.down_payment_pct / 100

    @property
    def closing_costs(self) -> Decimal:
        return self.purchase_price * self.closing_cost_rate / 100

    @property
    def monthly_pmi(self) -> Decimal:
        return self.pmi_monthly if self.pmi_enabled else Decimal("0")

    @property
    def rent_expense_rate(self) -> Decimal:
        """Maintenance + capex + management, as a percentage of gross rent."""
        return self.maintenance_rate + self.capex_rate + self.management_rate

    def without_rental_income(self) -> "UnderwritingInputs":
        """Owner-occupied view: no rent, so no vacancy and no management."""
        return replace(
            self,
            rent_monthly=Decimal("0"),
            vacancy_rate=Decimal("0"),
            management_rate=Decimal("0"),
        )


@dataclass(frozen=True)
class HoldingPeriodInputs:
    underwriting: UnderwritingInputs
    holding_period_years: int = 10
    appreciation_rate: Decimal = Decimal("3")
    rent_growth_rate: Decimal = Decimal("2")
    expense_growth_rate: Decimal = Decimal("2")
    selling_cost_rate: Decimal = Decimal("6")  # % of sale price


@dataclass(frozen=True)
class Deal:
    """A deal as handed over by the caller.

    Holding assumptions left as ``None`` are filled from settings when the
    deal is analyzed. ``market_rent_monthly`` is only read for primary
    residences and is estimated from the purchase price when absent.
    """

    inputs: UnderwritingInputs
    purchase_type: PurchaseType = PurchaseType.INVESTMENT_PROPERTY
    holding_period_years: int | None = None
    appreciation_rate: Decimal | None = None
    rent_growth_rate: Decimal | None = None
    expense_growth_rate: Decimal | None = None
    selling_cost_rate: Decimal | None = None
    market_rent_monthly: Decimal | None = None

    @property
    def is_primary_residence(self) -> bool:
        return self.purchase_type is PurchaseType.PRIMARY_RESIDENCE
