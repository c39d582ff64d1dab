from dataclasses import dataclass, field
from decimal import Decimal

from underwriting.models.assumptions import PurchaseType, UnderwritingInputs


@dataclass(frozen=True)
class MonthlyAnnual:
    monthly: Decimal
    annual: Decimal


@dataclass(frozen=True)
class UnderwritingOutputs:
    total_monthly_payment: Decimal
    noi_monthly: Decimal
    noi_annual: Decimal
    cash_flow_monthly: Decimal
    cash_flow_annual: Decimal
    all_in_cash_required: Decimal

    # None when the metric is undefined for these inputs; the field name is
    # then listed in undefined_metrics.
    cap_rate: Decimal | None = None  # %
    cash_on_cash: Decimal | None = None  # %
    dscr: Decimal | None = None
    break_even_rent_monthly: Decimal | None = None

    undefined_metrics: tuple[str, ...] = ()


@dataclass(frozen=True)
class YearlyProjection:
    year: int

    # Property
    property_value: Decimal = Decimal("0")
    loan_balance: Decimal = Decimal("0")
    equity: Decimal = Decimal("0")  # Value - loan balance

    # Income
    rent_annual: Decimal = Decimal("0")
    other_income_annual: Decimal = Decimal("0")
    gross_income_annual: Decimal = Decimal("0")
    vacancy_loss_annual: Decimal = Decimal("0")

    # Expenses
    operating_expenses_annual: Decimal = Decimal("0")  # Rent-proportional
    fixed_costs_annual: Decimal = Decimal("0")  # Taxes, insurance, HOA, utilities
    noi_annual: Decimal = Decimal("0")

    # Debt
    debt_service_annual: Decimal = Decimal("0")
    principal_paid_annual: Decimal = Decimal("0")
    interest_paid_annual: Decimal = Decimal("0")

    # Cash flow
    cash_flow_annual: Decimal = Decimal("0")
    cumulative_cash_flow: Decimal = Decimal("0")


@dataclass(frozen=True)
class SaleResult:
    sale_price: Decimal = Decimal("0")
    selling_costs: Decimal = Decimal("0")
    loan_payoff: Decimal = Decimal("0")
    net_sale_proceeds: Decimal = Decimal("0")  # After selling costs and payoff


@dataclass(frozen=True)
class ExitScenario:
    sale_price: Decimal = Decimal("0")
    selling_costs: Decimal = Decimal("0")
    loan_payoff: Decimal = Decimal("0")
    net_sale_proceeds: Decimal = Decimal("0")
    cumulative_cash_flow: Decimal = Decimal("0")
    initial_investment: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
    total_roi: Decimal | None = None  # %
    annualized_roi: Decimal | None = None  # %, CAGR


@dataclass(frozen=True)
class HoldingPeriodOutputs:
    yearly_projections: tuple[YearlyProjection, ...]
    exit_scenario: ExitScenario

    # Summary
    total_cash_flow: Decimal = Decimal("0")
    net_sale_proceeds: Decimal = Decimal("0")
    total_equity: Decimal = Decimal("0")
    total_return: Decimal = Decimal("0")
    annualized_return: Decimal | None = None  # %
    irr: Decimal | None = None  # %
    equity_multiple: Decimal | None = None


@dataclass(frozen=True)
class PrimaryResidenceOutputs:
    """Cost of owning and living in the property. No rental income."""

    mortgage_pi: Decimal
    monthly_pmi: Decimal
    monthly_taxes: Decimal
    monthly_insurance: Decimal
    monthly_hoa: Decimal
    monthly_utilities: Decimal
    total_monthly_payment: Decimal
    monthly_maintenance_reserve: Decimal
    all_in_monthly_cost: Decimal
    annual_gross_cost: Decimal
    annual_principal_paydown: Decimal
    annual_net_cost_of_ownership: Decimal
    cash_required_at_close: Decimal

    market_rent_monthly: Decimal | None = None
    # Market rent minus all-in monthly cost; positive means owning is cheaper.
    monthly_savings_vs_renting: Decimal | None = None


@dataclass(frozen=True)
class PrimaryResidenceYear:
    year: int
    property_value: Decimal = Decimal("0")
    loan_balance: Decimal = Decimal("0")
    equity: Decimal = Decimal("0")
    market_rent_annual: Decimal = Decimal("0")
    ownership_cost_annual: Decimal = Decimal("0")
    avoided_rent_annual: Decimal = Decimal("0")
    cumulative_avoided_rent: Decimal = Decimal("0")


@dataclass(frozen=True)
class InterimExit:
    year: int
    net_sale_proceeds: Decimal
    housing_cost_to_date: Decimal
    avoided_rent_to_date: Decimal
    net_position: Decimal  # Avoided rent + sale proceeds - cash at close


@dataclass(frozen=True)
class PriceScenario:
    property_value: Decimal
    net_sale_proceeds: Decimal
    effective_monthly_cost: Decimal


@dataclass(frozen=True)
class PrimaryResidenceHoldingPeriodOutputs:
    yearly_projections: tuple[PrimaryResidenceYear, ...]
    market_rent_monthly: Decimal
    exit_scenario: ExitScenario

    total_avoided_rent: Decimal = Decimal("0")
    equity_from_principal_paydown: Decimal = Decimal("0")
    equity_from_appreciation: Decimal = Decimal("0")
    total_equity_accumulation: Decimal = Decimal("0")
    net_cost_of_housing_total: Decimal = Decimal("0")
    net_cost_of_housing_monthly: Decimal = Decimal("0")
    break_even_year: int | None = None

    interim_exits: tuple[InterimExit, ...] = ()
    flat_price_scenario: PriceScenario | None = None
    price_decline_scenario: PriceScenario | None = None


@dataclass(frozen=True)
class DealAnalysis:
    purchase_type: PurchaseType
    inputs: UnderwritingInputs  # As used, after any primary-residence zeroing
    underwriting: UnderwritingOutputs
    holding_period: HoldingPeriodOutputs | None = None
    primary_residence: PrimaryResidenceOutputs | None = None
    primary_residence_holding_period: PrimaryResidenceHoldingPeriodOutputs | None = None
    assumptions: dict[str, Decimal | int] = field(default_factory=dict)
