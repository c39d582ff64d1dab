from dataclasses import replace
from decimal import Decimal, ROUND_HALF_UP

import pytest

from underwriting.engine.cashflow import (
    all_in_cash_required,
    break_even_rent,
    calculate_underwriting,
    cap_rate,
    cash_flow,
    cash_on_cash,
    debt_service,
    dscr,
    noi,
    total_monthly_payment,
)
from underwriting.engine.errors import (
    DivisionByZeroError,
    InvalidInputError,
    UndefinedMetricError,
)


class TestTotalMonthlyPayment:
    def test_includes_all_monthly_costs(self, canonical_inputs):
        # P&I 1330.60 + taxes 250 + insurance 100 + utilities 100
        assert total_monthly_payment(canonical_inputs) == Decimal("1780.60")

    def test_pmi_only_when_enabled(self, canonical_inputs):
        off = replace(canonical_inputs, pmi_monthly=Decimal("90"))
        on = replace(off, pmi_enabled=True)
        assert total_monthly_payment(off) == total_monthly_payment(canonical_inputs)
        assert total_monthly_payment(on) == total_monthly_payment(canonical_inputs) + Decimal("90")


class TestNOI:
    def test_canonical(self, canonical_inputs):
        n = noi(canonical_inputs)
        # 2000 * 0.95 - 2000 * 0.21
        assert n.monthly == Decimal("1480.00")
        assert n.annual == n.monthly * 12

    def test_accounts_for_vacancy(self, canonical_inputs):
        assert noi(canonical_inputs).monthly < canonical_inputs.rent_monthly * Decimal("0.95")

    def test_expenses_against_gross_rent(self, canonical_inputs):
        """Raising vacancy lowers NOI by the vacancy loss only."""
        higher_vacancy = replace(canonical_inputs, vacancy_rate=Decimal("10"))
        assert noi(canonical_inputs).monthly - noi(higher_vacancy).monthly == Decimal("100.00")

    def test_fixed_costs_excluded(self, canonical_inputs):
        pricier = replace(canonical_inputs, taxes_annual=Decimal("9000"), hoa_monthly=Decimal("300"))
        assert noi(pricier) == noi(canonical_inputs)

    def test_other_income_not_vacated(self, canonical_inputs):
        with_other = replace(canonical_inputs, other_income_monthly=Decimal("150"))
        assert noi(with_other).monthly == noi(canonical_inputs).monthly + Decimal("150")


class TestCashFlow:
    def test_noi_minus_total_payment(self, canonical_inputs):
        cf = cash_flow(canonical_inputs)
        assert cf.monthly == noi(canonical_inputs).monthly - total_monthly_payment(canonical_inputs)
        assert cf.monthly == Decimal("-300.60")
        assert cf.annual == Decimal("-3607.20")

    def test_identity_holds_with_pmi_and_hoa(self, canonical_inputs):
        inputs = replace(
            canonical_inputs,
            pmi_enabled=True,
            pmi_monthly=Decimal("87.5"),
            hoa_monthly=Decimal("225"),
            other_income_monthly=Decimal("75"),
        )
        assert cash_flow(inputs).monthly == noi(inputs).monthly - total_monthly_payment(inputs)


class TestCapRate:
    def test_noi_over_price(self, canonical_inputs):
        """Cap rate equals NOI / price * 100 once quantized to 4 places."""
        raw = noi(canonical_inputs).annual / canonical_inputs.purchase_price * 100
        rate = cap_rate(canonical_inputs)
        assert rate == raw.quantize(Decimal("0.0001"), ROUND_HALF_UP)
        assert abs(rate - raw) <= Decimal("0.00005")
        assert rate == Decimal("7.1040")

    def test_zero_price(self, canonical_inputs):
        with pytest.raises(DivisionByZeroError):
            cap_rate(replace(canonical_inputs, purchase_price=Decimal("0")))


class TestCashOnCash:
    def test_annual_cash_flow_over_cash_in(self, canonical_inputs):
        expected = (Decimal("-3607.20") / Decimal("77500") * 100).quantize(
            Decimal("0.0001"), ROUND_HALF_UP
        )
        assert cash_on_cash(canonical_inputs) == expected

    def test_zero_investment(self, canonical_inputs):
        no_cash = replace(
            canonical_inputs,
            down_payment_pct=Decimal("0"),
            closing_cost_rate=Decimal("0"),
            rehab_cost=Decimal("0"),
        )
        with pytest.raises(DivisionByZeroError):
            cash_on_cash(no_cash)


class TestDSCR:
    def test_positive(self, canonical_inputs):
        d = dscr(canonical_inputs)
        assert d > 0
        assert d == (Decimal("1480.00") / Decimal("1330.60")).quantize(Decimal("0.0001"), ROUND_HALF_UP)

    def test_pmi_counts_as_debt_service(self, canonical_inputs):
        with_pmi = replace(canonical_inputs, pmi_enabled=True, pmi_monthly=Decimal("100"))
        assert debt_service(with_pmi).monthly == debt_service(canonical_inputs).monthly + 100
        assert dscr(with_pmi) < dscr(canonical_inputs)

    def test_all_cash_purchase(self, canonical_inputs):
        with pytest.raises(DivisionByZeroError):
            dscr(replace(canonical_inputs, down_payment_pct=Decimal("100")))


class TestBreakEvenRent:
    def test_positive(self, canonical_inputs):
        # 1780.60 / (0.95 - 0.21)
        assert break_even_rent(canonical_inputs) == Decimal("2406.22")

    def test_zeroes_cash_flow(self, canonical_inputs):
        rent = break_even_rent(canonical_inputs)
        at_break_even = replace(canonical_inputs, rent_monthly=rent)
        assert abs(cash_flow(at_break_even).monthly) <= Decimal("0.01")

    def test_expense_ratios_consume_all_rent(self, canonical_inputs):
        hopeless = replace(
            canonical_inputs,
            vacancy_rate=Decimal("50"),
            maintenance_rate=Decimal("30"),
            capex_rate=Decimal("10"),
            management_rate=Decimal("10"),
        )
        with pytest.raises(UndefinedMetricError):
            break_even_rent(hopeless)

    def test_other_income_covers_payment(self, canonical_inputs):
        rich = replace(canonical_inputs, other_income_monthly=Decimal("5000"))
        assert break_even_rent(rich) == Decimal("0")


class TestAllInCashRequired:
    def test_down_payment_closing_and_rehab(self, canonical_inputs):
        # 50,000 + 7,500 + 20,000
        assert all_in_cash_required(canonical_inputs) == Decimal("77500")


class TestCalculateUnderwriting:
    def test_all_fields_populated(self, canonical_inputs):
        outputs = calculate_underwriting(canonical_inputs)
        assert outputs.total_monthly_payment == Decimal("1780.60")
        assert outputs.noi_monthly == Decimal("1480.00")
        assert outputs.noi_annual == Decimal("17760.00")
        assert outputs.cash_flow_monthly == Decimal("-300.60")
        assert outputs.cash_flow_annual == Decimal("-3607.20")
        assert outputs.cap_rate == Decimal("7.1040")
        assert outputs.cash_on_cash is not None
        assert outputs.dscr > 0
        assert outputs.break_even_rent_monthly > 0
        assert outputs.all_in_cash_required == Decimal("77500")
        assert outputs.undefined_metrics == ()

    def test_idempotent(self, canonical_inputs):
        assert calculate_underwriting(canonical_inputs) == calculate_underwriting(canonical_inputs)

    def test_all_cash_marks_dscr_undefined(self, canonical_inputs):
        outputs = calculate_underwriting(replace(canonical_inputs, down_payment_pct=Decimal("100")))
        assert outputs.dscr is None
        assert outputs.undefined_metrics == ("dscr",)
        assert outputs.cap_rate is not None

    def test_zero_price_marks_ratios_undefined(self, canonical_inputs):
        outputs = calculate_underwriting(
            replace(canonical_inputs, purchase_price=Decimal("0"), rehab_cost=Decimal("0"))
        )
        assert outputs.cap_rate is None
        assert outputs.cash_on_cash is None
        assert outputs.dscr is None
        assert set(outputs.undefined_metrics) == {"cap_rate", "cash_on_cash", "dscr"}

    def test_invalid_input_rejected(self, canonical_inputs):
        with pytest.raises(InvalidInputError) as exc:
            calculate_underwriting(replace(canonical_inputs, rent_monthly=Decimal("-1")))
        assert exc.value.field == "rent_monthly"

    def test_rate_out_of_range(self, canonical_inputs):
        with pytest.raises(InvalidInputError):
            calculate_underwriting(replace(canonical_inputs, vacancy_rate=Decimal("120")))
