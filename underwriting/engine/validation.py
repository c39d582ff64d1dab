"""Input checks run before any computation.

Raw request validation belongs to the caller (see ``underwriting.schemas``);
these checks guard the engine against records built in code.
"""

from decimal import Decimal

from underwriting.engine.errors import InvalidInputError
from underwriting.models.assumptions import HoldingPeriodInputs, UnderwritingInputs

HUNDRED = Decimal("100")
MAX_HOLDING_PERIOD_YEARS = 500
# Smallest positive appreciation (%) that still moves values at Decimal precision
MIN_APPRECIATION_RATE = Decimal("1e-10")

MONEY_FIELDS = (
    "purchase_price",
    "rehab_cost",
    "pmi_monthly",
    "taxes_annual",
    "insurance_annual",
    "hoa_monthly",
    "utilities_monthly",
    "rent_monthly",
    "other_income_monthly",
)

PERCENT_FIELDS = (
    "closing_cost_rate",
    "down_payment_pct",
    "interest_rate",
    "vacancy_rate",
    "maintenance_rate",
    "capex_rate",
    "management_rate",
)


def _check_percent(name: str, value: Decimal) -> None:
    if not Decimal("0") <= value <= HUNDRED:
        raise InvalidInputError(name, f"must be between 0 and 100, got {value}")


def validate_underwriting_inputs(inputs: UnderwritingInputs) -> None:
    for name in MONEY_FIELDS:
        value = getattr(inputs, name)
        if value < 0:
            raise InvalidInputError(name, f"must be non-negative, got {value}")
    for name in PERCENT_FIELDS:
        _check_percent(name, getattr(inputs, name))
    if inputs.term_years < 0:
        raise InvalidInputError("term_years", f"must be non-negative, got {inputs.term_years}")


def validate_holding_period_inputs(holding: HoldingPeriodInputs) -> None:
    validate_underwriting_inputs(holding.underwriting)
    years = holding.holding_period_years
    if not 1 <= years <= MAX_HOLDING_PERIOD_YEARS:
        raise InvalidInputError(
            "holding_period_years",
            f"must be between 1 and {MAX_HOLDING_PERIOD_YEARS}, got {years}",
        )
    # Growth rates may be negative (declining markets) but not below -100%.
    for name in ("appreciation_rate", "rent_growth_rate", "expense_growth_rate"):
        value = getattr(holding, name)
        if not -HUNDRED < value <= HUNDRED:
            raise InvalidInputError(name, f"must be in (-100, 100], got {value}")
    if Decimal("0") < holding.appreciation_rate < MIN_APPRECIATION_RATE:
        raise InvalidInputError(
            "appreciation_rate",
            f"positive rates must be at least {MIN_APPRECIATION_RATE}, got {holding.appreciation_rate}",
        )
    _check_percent("selling_cost_rate", holding.selling_cost_rate)
