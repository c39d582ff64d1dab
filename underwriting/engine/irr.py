"""Return measures: IRR (scipy), equity multiple, annualized return.

Pure functions. No I/O. Results are percentages except the multiple.
"""

from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

FOUR_PLACES = Decimal("0.0001")

# Default search range for the annual rate: -99% to 1000%
IRR_LOWER = -0.99
IRR_UPPER = 10.0
# Largest power of ten a discount factor may reach before floats give out
FLOAT_EXPONENT_LIMIT = 250


def _search_bounds(periods: int) -> tuple[float, float]:
    """Narrow the search range so (1 + rate) ** periods stays a finite, non-zero float."""
    span = FLOAT_EXPONENT_LIMIT / periods
    return max(IRR_LOWER, 10 ** -span - 1), min(IRR_UPPER, 10 ** span - 1)


def compute_irr(cash_flows: list[Decimal]) -> Decimal | None:
    """Compute IRR (%) from a vector of annual cash flows.

    cash_flows[0] should be negative (initial investment).
    cash_flows[-1] should include sale proceeds.

    Uses Brent's method on the NPV function. Returns None when no rate in
    the search range zeroes NPV. Long horizons search a narrower range.
    """
    if len(cash_flows) < 2:
        return None

    cf_float = [float(cf) for cf in cash_flows]
    lower, upper = _search_bounds(len(cf_float) - 1)

    def npv(rate: float) -> float:
        return sum(cf / (1 + rate) ** t for t, cf in enumerate(cf_float))

    try:
        irr = brentq(npv, lower, upper, xtol=1e-10, maxiter=1000)
    except (ValueError, ZeroDivisionError, OverflowError):
        # No sign change in range (e.g. all-negative cash flows)
        return None
    return (Decimal(str(irr)) * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)


def compute_equity_multiple(
    total_cash_returned: Decimal, total_cash_invested: Decimal
) -> Decimal | None:
    """Equity multiple = total cash out / total cash in."""
    if total_cash_invested == 0:
        return None
    return (total_cash_returned / total_cash_invested).quantize(FOUR_PLACES, ROUND_HALF_UP)


def annualized_return(
    total_return: Decimal, initial_investment: Decimal, years: int
) -> Decimal | None:
    """Compound annual growth (%) of the investment over the hold.

    (ending / initial) ** (1 / years) - 1, where ending = initial + total
    return. A hold that loses everything or more annualizes to -100%.
    """
    if initial_investment <= 0 or years <= 0:
        return None
    ending = initial_investment + total_return
    if ending <= 0:
        return Decimal("-100.0000")
    growth = (ending / initial_investment) ** (Decimal(1) / Decimal(years))
    return ((growth - 1) * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)
