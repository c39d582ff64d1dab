from decimal import Decimal

from underwriting.engine.disposition import compute_exit_scenario, compute_sale


class TestSale:
    def test_basic_sale(self):
        sale = compute_sale(Decimal("335979.09"), Decimal("6"), Decimal("171000.00"))
        assert sale.selling_costs == Decimal("20158.75")
        assert sale.loan_payoff == Decimal("171000.00")
        assert sale.net_sale_proceeds == Decimal("335979.09") - Decimal("20158.75") - Decimal("171000.00")

    def test_no_selling_costs(self):
        sale = compute_sale(Decimal("300000"), Decimal("0"), Decimal("0"))
        assert sale.net_sale_proceeds == Decimal("300000")

    def test_underwater_sale(self):
        sale = compute_sale(Decimal("200000"), Decimal("6"), Decimal("210000"))
        assert sale.net_sale_proceeds < 0


class TestExitScenario:
    def test_profit_and_roi(self):
        sale = compute_sale(Decimal("300000"), Decimal("6"), Decimal("150000"))
        # Net proceeds = 300000 - 18000 - 150000 = 132000
        exit_scenario = compute_exit_scenario(
            sale,
            cumulative_cash_flow=Decimal("-10000"),
            initial_investment=Decimal("80000"),
            years=10,
        )
        assert exit_scenario.net_sale_proceeds == Decimal("132000.00")
        assert exit_scenario.total_profit == Decimal("42000.00")
        assert exit_scenario.total_roi == Decimal("52.5000")
        assert exit_scenario.annualized_roi > 0

    def test_no_cash_invested(self):
        sale = compute_sale(Decimal("300000"), Decimal("6"), Decimal("150000"))
        exit_scenario = compute_exit_scenario(
            sale, cumulative_cash_flow=Decimal("0"), initial_investment=Decimal("0"), years=5
        )
        assert exit_scenario.total_roi is None
        assert exit_scenario.annualized_roi is None
