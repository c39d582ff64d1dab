"""Holding-period projector: year-by-year growth, equity buildup and sale.

Pure computation. No I/O. HoldingPeriodInputs in, HoldingPeriodOutputs out.

Rent, expenses and value compound from their year-0 amounts (year y uses
growth ** y). The loan never reprices: every year pays the original P&I
until the term ends.
"""

from decimal import Decimal, ROUND_HALF_UP

from underwriting.engine.cashflow import all_in_cash_required, monthly_pi
from underwriting.engine.debt import (
    interest_paid_in_year,
    loan_balance_at_year,
    principal_paid_in_year,
)
from underwriting.engine.disposition import compute_exit_scenario, compute_sale
from underwriting.engine.irr import compute_equity_multiple, compute_irr
from underwriting.engine.validation import validate_holding_period_inputs
from underwriting.models.assumptions import HoldingPeriodInputs, UnderwritingInputs
from underwriting.models.results import HoldingPeriodOutputs, YearlyProjection

TWO_PLACES = Decimal("0.01")


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def growth_factor(rate: Decimal, year: int) -> Decimal:
    return (1 + rate / 100) ** year


def property_value(purchase_price: Decimal, appreciation_rate: Decimal, year: int) -> Decimal:
    """Estimated property value at end of year.

    Kept at full precision so any positive appreciation raises it every
    year. Money taken from it (selling costs) is quantized where computed.
    """
    return purchase_price * growth_factor(appreciation_rate, year)


def loan_balance(inputs: UnderwritingInputs, year: int) -> Decimal:
    return loan_balance_at_year(inputs.loan_amount, inputs.interest_rate, inputs.term_years, year)


def annual_debt_service(inputs: UnderwritingInputs, year: int) -> Decimal:
    """Original P&I + PMI for twelve months; nothing once the loan is paid off."""
    if year > inputs.term_years:
        return Decimal("0")
    return (monthly_pi(inputs) + inputs.monthly_pmi) * 12


def annual_fixed_costs(inputs: UnderwritingInputs, expense_growth_rate: Decimal, year: int) -> Decimal:
    """Taxes, insurance, HOA and utilities, each grown from its year-0 amount."""
    growth = growth_factor(expense_growth_rate, year)
    return (
        _cents(inputs.taxes_annual * growth)
        + _cents(inputs.insurance_annual * growth)
        + _cents(inputs.hoa_monthly * 12 * growth)
        + _cents(inputs.utilities_monthly * 12 * growth)
    )


def project_year(
    holding: HoldingPeriodInputs,
    year: int,
    previous_cumulative_cash_flow: Decimal = Decimal("0"),
) -> YearlyProjection:
    u = holding.underwriting
    loan = u.loan_amount

    value = property_value(u.purchase_price, holding.appreciation_rate, year)
    balance = loan_balance(u, year)

    # Income: other income rides along with rent growth
    rent_growth = growth_factor(holding.rent_growth_rate, year)
    rent_annual = _cents(u.rent_monthly * 12 * rent_growth)
    other_income_annual = _cents(u.other_income_monthly * 12 * rent_growth)
    vacancy_loss = _cents(rent_annual * u.vacancy_rate / 100)

    # Rent-proportional expenses recomputed against the grown rent
    operating = _cents(rent_annual * u.rent_expense_rate / 100)
    year_noi = rent_annual - vacancy_loss + other_income_annual - operating

    fixed = annual_fixed_costs(u, holding.expense_growth_rate, year)
    service = annual_debt_service(u, year)
    cash_flow = year_noi - fixed - service

    return YearlyProjection(
        year=year,
        property_value=value,
        loan_balance=balance,
        equity=value - balance,
        rent_annual=rent_annual,
        other_income_annual=other_income_annual,
        gross_income_annual=rent_annual + other_income_annual,
        vacancy_loss_annual=vacancy_loss,
        operating_expenses_annual=operating,
        fixed_costs_annual=fixed,
        noi_annual=year_noi,
        debt_service_annual=service,
        principal_paid_annual=principal_paid_in_year(loan, u.interest_rate, u.term_years, year),
        interest_paid_annual=interest_paid_in_year(loan, u.interest_rate, u.term_years, year),
        cash_flow_annual=cash_flow,
        cumulative_cash_flow=previous_cumulative_cash_flow + cash_flow,
    )


def project_years(holding: HoldingPeriodInputs) -> list[YearlyProjection]:
    projections: list[YearlyProjection] = []
    cumulative = Decimal("0")
    for year in range(1, holding.holding_period_years + 1):
        proj = project_year(holding, year, cumulative)
        projections.append(proj)
        cumulative = proj.cumulative_cash_flow
    return projections


def calculate_holding_period_analysis(holding: HoldingPeriodInputs) -> HoldingPeriodOutputs:
    """Run the full projection and the terminal sale.

    Returns HoldingPeriodOutputs with one projection per year held, the exit
    scenario, and summary return metrics.
    """
    validate_holding_period_inputs(holding)

    projections = project_years(holding)
    final = projections[-1]
    initial_investment = all_in_cash_required(holding.underwriting)

    sale = compute_sale(final.property_value, holding.selling_cost_rate, final.loan_balance)
    exit_scenario = compute_exit_scenario(
        sale,
        cumulative_cash_flow=final.cumulative_cash_flow,
        initial_investment=initial_investment,
        years=holding.holding_period_years,
    )

    # Sale proceeds land in the final year for IRR
    cash_flows = [-initial_investment] + [p.cash_flow_annual for p in projections]
    cash_flows[-1] += sale.net_sale_proceeds

    total_returned = final.cumulative_cash_flow + sale.net_sale_proceeds

    return HoldingPeriodOutputs(
        yearly_projections=tuple(projections),
        exit_scenario=exit_scenario,
        total_cash_flow=final.cumulative_cash_flow,
        net_sale_proceeds=sale.net_sale_proceeds,
        total_equity=final.equity,
        total_return=exit_scenario.total_profit,
        annualized_return=exit_scenario.annualized_roi,
        irr=compute_irr(cash_flows) if initial_investment > 0 else None,
        equity_multiple=compute_equity_multiple(total_returned, initial_investment),
    )
