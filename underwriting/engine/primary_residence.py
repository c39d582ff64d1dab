"""Primary residence: cost of ownership instead of investment returns.

Pure computation. No I/O.

A primary residence earns no rent, so rent, vacancy and management are
zeroed whatever the caller supplied. Maintenance and capex are reserved
against the property value instead of rent. Over a hold, the yearly
"cash flow" is the rent avoided by owning: market rent less what owning
costs that year.
"""

from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP

from underwriting.engine.cashflow import (
    all_in_cash_required,
    monthly_pi,
    total_monthly_payment,
)
from underwriting.engine.debt import principal_paid_in_year
from underwriting.engine.disposition import compute_exit_scenario, compute_sale
from underwriting.engine.errors import InvalidInputError
from underwriting.engine.holding_period import (
    annual_debt_service,
    annual_fixed_costs,
    growth_factor,
    loan_balance,
    property_value,
)
from underwriting.engine.validation import (
    validate_holding_period_inputs,
    validate_underwriting_inputs,
)
from underwriting.models.assumptions import HoldingPeriodInputs, UnderwritingInputs
from underwriting.models.results import (
    InterimExit,
    PriceScenario,
    PrimaryResidenceHoldingPeriodOutputs,
    PrimaryResidenceOutputs,
    PrimaryResidenceYear,
)

TWO_PLACES = Decimal("0.01")

INTERIM_EXIT_YEARS = (3, 5, 7)
PRICE_DECLINE = Decimal("0.90")  # Sale at 10% below purchase price


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def _check_market_rent(market_rent_monthly: Decimal | None) -> None:
    if market_rent_monthly is not None and market_rent_monthly < 0:
        raise InvalidInputError(
            "market_rent_monthly", f"must be non-negative, got {market_rent_monthly}"
        )


def maintenance_reserve(inputs: UnderwritingInputs) -> Decimal:
    """Monthly maintenance + capex, as annual percentages of property value."""
    return _cents(
        inputs.purchase_price * (inputs.maintenance_rate + inputs.capex_rate) / 100 / 12
    )


def calculate_primary_residence_analysis(
    inputs: UnderwritingInputs,
    market_rent_monthly: Decimal | None = None,
) -> PrimaryResidenceOutputs:
    """Monthly and annual cost of living in the property.

    When ``market_rent_monthly`` is given, also reports how much cheaper
    (positive) or dearer (negative) owning is than renting an equivalent home.
    """
    _check_market_rent(market_rent_monthly)
    owner = inputs.without_rental_income()
    validate_underwriting_inputs(owner)

    payment = total_monthly_payment(owner)
    reserve = maintenance_reserve(owner)
    all_in_monthly = payment + reserve
    annual_gross = all_in_monthly * 12
    paydown = principal_paid_in_year(owner.loan_amount, owner.interest_rate, owner.term_years, 1)

    savings = None
    if market_rent_monthly is not None:
        savings = market_rent_monthly - all_in_monthly

    return PrimaryResidenceOutputs(
        mortgage_pi=monthly_pi(owner),
        monthly_pmi=owner.monthly_pmi,
        monthly_taxes=_cents(owner.taxes_annual / 12),
        monthly_insurance=_cents(owner.insurance_annual / 12),
        monthly_hoa=owner.hoa_monthly,
        monthly_utilities=owner.utilities_monthly,
        total_monthly_payment=payment,
        monthly_maintenance_reserve=reserve,
        all_in_monthly_cost=all_in_monthly,
        annual_gross_cost=annual_gross,
        annual_principal_paydown=paydown,
        annual_net_cost_of_ownership=annual_gross - paydown,
        cash_required_at_close=all_in_cash_required(owner),
        market_rent_monthly=market_rent_monthly,
        monthly_savings_vs_renting=savings,
    )


def ownership_cost(holding: HoldingPeriodInputs, year: int) -> Decimal:
    """What owning costs in a given year.

    P&I and PMI stay at their original amounts; everything else grows with
    expenses.
    """
    u = holding.underwriting
    reserve = _cents(maintenance_reserve(u) * 12 * growth_factor(holding.expense_growth_rate, year))
    return (
        annual_debt_service(u, year)
        + annual_fixed_costs(u, holding.expense_growth_rate, year)
        + reserve
    )


def _price_scenario(
    sale_price: Decimal,
    holding: HoldingPeriodInputs,
    total_cost: Decimal,
    cash_at_close: Decimal,
) -> PriceScenario:
    years = holding.holding_period_years
    sale = compute_sale(
        sale_price, holding.selling_cost_rate, loan_balance(holding.underwriting, years)
    )
    effective = (total_cost - sale.net_sale_proceeds + cash_at_close) / (years * 12)
    return PriceScenario(
        property_value=sale_price,
        net_sale_proceeds=sale.net_sale_proceeds,
        effective_monthly_cost=_cents(effective),
    )


def calculate_primary_residence_holding_period(
    holding: HoldingPeriodInputs,
    market_rent_monthly: Decimal,
) -> PrimaryResidenceHoldingPeriodOutputs:
    """Project ownership year by year against renting at ``market_rent_monthly``.

    Market rent is supplied by the caller and grows at the rent growth rate.
    Equity, loan balance and the terminal sale follow the investment
    projector exactly.
    """
    _check_market_rent(market_rent_monthly)
    owner = replace(holding, underwriting=holding.underwriting.without_rental_income())
    validate_holding_period_inputs(owner)

    u = owner.underwriting
    years = owner.holding_period_years
    cash_at_close = all_in_cash_required(u)

    projections: list[PrimaryResidenceYear] = []
    sale_proceeds_by_year: dict[int, Decimal] = {}
    costs_to_date: dict[int, Decimal] = {}
    cumulative_avoided = Decimal("0")
    cumulative_cost = Decimal("0")
    break_even_year = None

    for year in range(1, years + 1):
        value = property_value(u.purchase_price, owner.appreciation_rate, year)
        balance = loan_balance(u, year)

        rent = _cents(market_rent_monthly * 12 * growth_factor(owner.rent_growth_rate, year))
        cost = ownership_cost(owner, year)
        avoided = rent - cost
        cumulative_avoided += avoided
        cumulative_cost += cost

        proceeds = compute_sale(value, owner.selling_cost_rate, balance).net_sale_proceeds
        sale_proceeds_by_year[year] = proceeds
        costs_to_date[year] = cumulative_cost
        if break_even_year is None and cumulative_avoided + proceeds >= cash_at_close:
            break_even_year = year

        projections.append(PrimaryResidenceYear(
            year=year,
            property_value=value,
            loan_balance=balance,
            equity=value - balance,
            market_rent_annual=rent,
            ownership_cost_annual=cost,
            avoided_rent_annual=avoided,
            cumulative_avoided_rent=cumulative_avoided,
        ))

    final = projections[-1]
    sale = compute_sale(final.property_value, owner.selling_cost_rate, final.loan_balance)
    exit_scenario = compute_exit_scenario(
        sale,
        cumulative_cash_flow=cumulative_avoided,
        initial_investment=cash_at_close,
        years=years,
    )

    interim_exits = [
        InterimExit(
            year=proj.year,
            net_sale_proceeds=sale_proceeds_by_year[proj.year],
            housing_cost_to_date=costs_to_date[proj.year],
            avoided_rent_to_date=proj.cumulative_avoided_rent,
            net_position=(
                proj.cumulative_avoided_rent + sale_proceeds_by_year[proj.year] - cash_at_close
            ),
        )
        for proj in projections
        if proj.year in INTERIM_EXIT_YEARS
    ]

    paydown = u.loan_amount - final.loan_balance
    appreciation = final.property_value - u.purchase_price
    net_cost_total = cumulative_cost - paydown

    return PrimaryResidenceHoldingPeriodOutputs(
        yearly_projections=tuple(projections),
        market_rent_monthly=market_rent_monthly,
        exit_scenario=exit_scenario,
        total_avoided_rent=cumulative_avoided,
        equity_from_principal_paydown=paydown,
        equity_from_appreciation=appreciation,
        total_equity_accumulation=u.purchase_price - u.loan_amount + paydown + appreciation,
        net_cost_of_housing_total=net_cost_total,
        net_cost_of_housing_monthly=_cents(net_cost_total / (years * 12)),
        break_even_year=break_even_year,
        interim_exits=tuple(interim_exits),
        flat_price_scenario=_price_scenario(u.purchase_price, owner, cumulative_cost, cash_at_close),
        price_decline_scenario=_price_scenario(
            _cents(u.purchase_price * PRICE_DECLINE), owner, cumulative_cost, cash_at_close
        ),
    )
