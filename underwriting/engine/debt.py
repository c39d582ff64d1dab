"""Fixed-rate amortization primitives.

Pure functions: Decimal in, Decimal (or dataclass) out. No I/O.
Rates are annual percentages (7 means 7%).
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from underwriting.engine.errors import ZeroTermError

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


@dataclass(frozen=True)
class AmortizationPayment:
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[AmortizationPayment]
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal


def _monthly_rate(annual_rate: Decimal) -> Decimal:
    return annual_rate / 100 / 12


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    """Fixed monthly principal and interest payment."""
    if principal <= 0:
        return ZERO
    if term_years <= 0:
        raise ZeroTermError(principal)

    r = _monthly_rate(annual_rate)
    n = term_years * 12
    if r == 0:
        return (principal / n).quantize(TWO_PLACES, ROUND_HALF_UP)

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    payment = principal * (r * factor) / (factor - 1)
    return payment.quantize(TWO_PLACES, ROUND_HALF_UP)


def loan_balance_at_year(
    principal: Decimal, annual_rate: Decimal, term_years: int, year: int
) -> Decimal:
    """Outstanding principal after ``year * 12`` scheduled payments."""
    if principal <= 0:
        return ZERO
    if year <= 0:
        return principal
    if term_years <= 0:
        raise ZeroTermError(principal)
    if year >= term_years:
        return ZERO

    r = _monthly_rate(annual_rate)
    n = term_years * 12
    paid = year * 12
    if r == 0:
        balance = principal - principal * paid / n
    else:
        # B_k = P * [(1+r)^n - (1+r)^k] / [(1+r)^n - 1]
        factor = (1 + r) ** n
        balance = principal * (factor - (1 + r) ** paid) / (factor - 1)
    return max(ZERO, balance).quantize(TWO_PLACES, ROUND_HALF_UP)


def principal_paid_in_year(
    principal: Decimal, annual_rate: Decimal, term_years: int, year: int
) -> Decimal:
    start = loan_balance_at_year(principal, annual_rate, term_years, year - 1)
    end = loan_balance_at_year(principal, annual_rate, term_years, year)
    return start - end


def interest_paid_in_year(
    principal: Decimal, annual_rate: Decimal, term_years: int, year: int
) -> Decimal:
    """Twelve scheduled payments less the principal they retired.

    Zero once the loan is paid off.
    """
    if year > term_years:
        return ZERO
    payments = monthly_payment(principal, annual_rate, term_years) * 12
    interest = payments - principal_paid_in_year(principal, annual_rate, term_years, year)
    return max(ZERO, interest)


def amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
    years: int | None = None,
) -> AmortizationSchedule:
    """Generate full or partial month-by-month amortization schedule.

    Args:
        principal: Loan amount
        annual_rate: Annual interest rate in percent (e.g. 7 for 7%)
        term_years: Loan term in years
        years: If provided, only generate schedule for this many years
    """
    pmt = monthly_payment(principal, annual_rate, term_years)
    r = _monthly_rate(annual_rate)
    n_periods = min(years or term_years, term_years) * 12

    payments: list[AmortizationPayment] = []
    balance = max(ZERO, principal)
    total_interest = ZERO
    total_principal = ZERO

    for period in range(1, n_periods + 1):
        interest = (balance * r).quantize(TWO_PLACES, ROUND_HALF_UP)
        principal_paid = pmt - interest

        # Final payment adjustment
        if principal_paid > balance or period == term_years * 12:
            principal_paid = balance
            actual_payment = interest + principal_paid
        else:
            actual_payment = pmt

        balance -= principal_paid
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            period=period,
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        ))

    return AmortizationSchedule(
        payments=payments,
        monthly_payment=pmt,
        total_interest=total_interest,
        total_principal=total_principal,
    )
