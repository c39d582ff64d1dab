"""Property disposition (sale) at the end of a hold.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from underwriting.engine.irr import annualized_return
from underwriting.models.results import ExitScenario, SaleResult

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def compute_sale(
    sale_price: Decimal, selling_cost_rate: Decimal, loan_balance: Decimal
) -> SaleResult:
    """Net proceeds = sale price - selling costs - loan payoff."""
    selling_costs = (sale_price * selling_cost_rate / 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    return SaleResult(
        sale_price=sale_price,
        selling_costs=selling_costs,
        loan_payoff=loan_balance,
        net_sale_proceeds=sale_price - selling_costs - loan_balance,
    )


def compute_exit_scenario(
    sale: SaleResult,
    cumulative_cash_flow: Decimal,
    initial_investment: Decimal,
    years: int,
) -> ExitScenario:
    """Sale plus everything harvested along the way, against cash put in.

    Args:
        sale: Terminal sale
        cumulative_cash_flow: Sum of yearly cash flows over the hold
        initial_investment: All-in cash required at purchase
        years: Years held
    """
    total_profit = sale.net_sale_proceeds + cumulative_cash_flow - initial_investment

    total_roi = None
    if initial_investment > 0:
        total_roi = (total_profit / initial_investment * 100).quantize(
            FOUR_PLACES, ROUND_HALF_UP
        )

    return ExitScenario(
        sale_price=sale.sale_price,
        selling_costs=sale.selling_costs,
        loan_payoff=sale.loan_payoff,
        net_sale_proceeds=sale.net_sale_proceeds,
        cumulative_cash_flow=cumulative_cash_flow,
        initial_investment=initial_investment,
        total_profit=total_profit,
        total_roi=total_roi,
        annualized_roi=annualized_return(total_profit, initial_investment, years),
    )
