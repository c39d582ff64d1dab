"""Single-period underwriting: payment, NOI, cash flow, cap rate, CoC, DSCR.

Pure functions: Decimal in, Decimal out. No I/O.

NOI here is effective rent income less the rent-proportional expenses
(maintenance, capex, management) only. Taxes, insurance, HOA and utilities
are part of the total monthly payment and come out when deriving cash flow.
"""

from decimal import Decimal, ROUND_HALF_UP

from underwriting.engine.debt import monthly_payment
from underwriting.engine.errors import DivisionByZeroError, UndefinedMetricError
from underwriting.engine.validation import validate_underwriting_inputs
from underwriting.models.assumptions import UnderwritingInputs
from underwriting.models.results import MonthlyAnnual, UnderwritingOutputs

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def monthly_pi(inputs: UnderwritingInputs) -> Decimal:
    return monthly_payment(inputs.loan_amount, inputs.interest_rate, inputs.term_years)


def monthly_fixed_costs(inputs: UnderwritingInputs) -> Decimal:
    """Taxes, insurance, HOA and utilities for one month."""
    return (
        _cents(inputs.taxes_annual / 12)
        + _cents(inputs.insurance_annual / 12)
        + inputs.hoa_monthly
        + inputs.utilities_monthly
    )


def total_monthly_payment(inputs: UnderwritingInputs) -> Decimal:
    """P&I + taxes + insurance + HOA + utilities + PMI (if enabled)."""
    return monthly_pi(inputs) + monthly_fixed_costs(inputs) + inputs.monthly_pmi


def debt_service(inputs: UnderwritingInputs) -> MonthlyAnnual:
    """P&I + PMI. Excludes taxes, insurance, HOA and utilities."""
    monthly = monthly_pi(inputs) + inputs.monthly_pmi
    return MonthlyAnnual(monthly=monthly, annual=monthly * 12)


def effective_gross_income(inputs: UnderwritingInputs) -> Decimal:
    """Monthly EGI = rent - vacancy + other income."""
    return inputs.rent_monthly * (1 - inputs.vacancy_rate / 100) + inputs.other_income_monthly


def operating_expenses(inputs: UnderwritingInputs) -> Decimal:
    """Monthly maintenance + capex + management, against gross scheduled rent."""
    return inputs.rent_monthly * inputs.rent_expense_rate / 100


def noi(inputs: UnderwritingInputs) -> MonthlyAnnual:
    monthly = _cents(effective_gross_income(inputs) - operating_expenses(inputs))
    return MonthlyAnnual(monthly=monthly, annual=monthly * 12)


def cash_flow(inputs: UnderwritingInputs) -> MonthlyAnnual:
    """Cash flow = NOI - total monthly payment."""
    monthly = noi(inputs).monthly - total_monthly_payment(inputs)
    return MonthlyAnnual(monthly=monthly, annual=monthly * 12)


def all_in_cash_required(inputs: UnderwritingInputs) -> Decimal:
    """Down payment + closing costs + rehab."""
    return inputs.down_payment + inputs.closing_costs + inputs.rehab_cost


def cap_rate(inputs: UnderwritingInputs) -> Decimal:
    """Cap rate (%) = annual NOI / purchase price."""
    if inputs.purchase_price == 0:
        raise DivisionByZeroError("cap_rate", "purchase price is zero")
    return (noi(inputs).annual / inputs.purchase_price * 100).quantize(
        FOUR_PLACES, ROUND_HALF_UP
    )


def cash_on_cash(inputs: UnderwritingInputs) -> Decimal:
    """Cash-on-cash return (%) = annual cash flow / all-in cash required."""
    invested = all_in_cash_required(inputs)
    if invested == 0:
        raise DivisionByZeroError("cash_on_cash", "all-in cash required is zero")
    return (cash_flow(inputs).annual / invested * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)


def dscr(inputs: UnderwritingInputs) -> Decimal:
    """Debt Service Coverage Ratio = NOI / (P&I + PMI)."""
    service = debt_service(inputs).monthly
    if service == 0:
        raise DivisionByZeroError("dscr", "no debt service")
    return (noi(inputs).monthly / service).quantize(FOUR_PLACES, ROUND_HALF_UP)


def break_even_rent(inputs: UnderwritingInputs) -> Decimal:
    """Gross monthly rent at which monthly cash flow is zero.

    rent * k + other income = total payment, where k is the share of each
    rent dollar left after vacancy and rent-proportional expenses.
    """
    k = (1 - inputs.vacancy_rate / 100) - inputs.rent_expense_rate / 100
    if k <= 0:
        raise UndefinedMetricError(
            "break_even_rent_monthly",
            "vacancy and expense rates consume all rent",
        )
    rent = (total_monthly_payment(inputs) - inputs.other_income_monthly) / k
    # Other income alone can cover the payment.
    return _cents(max(Decimal("0"), rent))


def calculate_underwriting(inputs: UnderwritingInputs) -> UnderwritingOutputs:
    """Compose every single-period metric into one record.

    Metrics without a finite value are returned as None and named in
    ``undefined_metrics``.
    """
    validate_underwriting_inputs(inputs)

    n = noi(inputs)
    cf = cash_flow(inputs)

    ratios: dict[str, Decimal | None] = {}
    undefined: list[str] = []
    for name, metric in (
        ("cap_rate", cap_rate),
        ("cash_on_cash", cash_on_cash),
        ("dscr", dscr),
        ("break_even_rent_monthly", break_even_rent),
    ):
        try:
            ratios[name] = metric(inputs)
        except UndefinedMetricError:
            ratios[name] = None
            undefined.append(name)

    return UnderwritingOutputs(
        total_monthly_payment=total_monthly_payment(inputs),
        noi_monthly=n.monthly,
        noi_annual=n.annual,
        cash_flow_monthly=cf.monthly,
        cash_flow_annual=cf.annual,
        all_in_cash_required=all_in_cash_required(inputs),
        undefined_metrics=tuple(undefined),
        **ratios,
    )
