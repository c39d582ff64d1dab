"""Analysis orchestrator: picks the calculation path for a deal's purchase type.

Fills unset holding assumptions from settings and estimates market rent for
primary residences. The engine modules it calls stay pure.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from underwriting.config import Settings, settings as default_settings
from underwriting.engine.cashflow import calculate_underwriting
from underwriting.engine.holding_period import calculate_holding_period_analysis
from underwriting.engine.primary_residence import (
    calculate_primary_residence_analysis,
    calculate_primary_residence_holding_period,
)
from underwriting.models.assumptions import Deal, HoldingPeriodInputs
from underwriting.models.results import DealAnalysis

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def estimate_market_rent(purchase_price: Decimal, settings: Settings) -> Decimal:
    """Rough monthly rent for an equivalent home, as a share of its price."""
    return (purchase_price * settings.market_rent_to_price_pct / 100).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )


def build_holding_inputs(deal: Deal, settings: Settings) -> HoldingPeriodInputs | None:
    """Holding assumptions for the deal, or None when no horizon was given."""
    if deal.holding_period_years is None:
        return None

    def pick(value: Decimal | None, default: Decimal) -> Decimal:
        return default if value is None else value

    return HoldingPeriodInputs(
        underwriting=deal.inputs,
        holding_period_years=deal.holding_period_years,
        appreciation_rate=pick(deal.appreciation_rate, settings.appreciation_rate),
        rent_growth_rate=pick(deal.rent_growth_rate, settings.rent_growth_rate),
        expense_growth_rate=pick(deal.expense_growth_rate, settings.expense_growth_rate),
        selling_cost_rate=pick(deal.selling_cost_rate, settings.selling_cost_rate),
    )


def analyze_deal(deal: Deal, settings: Settings | None = None) -> DealAnalysis:
    """Run every analysis that applies to the deal."""
    settings = settings or default_settings
    holding = build_holding_inputs(deal, settings)

    assumptions: dict[str, Decimal | int] = {}
    if holding is not None:
        assumptions = {
            "holding_period_years": holding.holding_period_years,
            "appreciation_rate": holding.appreciation_rate,
            "rent_growth_rate": holding.rent_growth_rate,
            "expense_growth_rate": holding.expense_growth_rate,
            "selling_cost_rate": holding.selling_cost_rate,
        }

    if not deal.is_primary_residence:
        logger.debug(
            "Analyzing %s deal at %s (horizon: %s)",
            deal.purchase_type.value, deal.inputs.purchase_price,
            holding.holding_period_years if holding else "none",
        )
        return DealAnalysis(
            purchase_type=deal.purchase_type,
            inputs=deal.inputs,
            underwriting=calculate_underwriting(deal.inputs),
            holding_period=calculate_holding_period_analysis(holding) if holding else None,
            assumptions=assumptions,
        )

    owner_inputs = deal.inputs.without_rental_income()
    if deal.inputs.rent_monthly or deal.inputs.vacancy_rate or deal.inputs.management_rate:
        logger.debug("Primary residence: ignoring supplied rent, vacancy and management")

    market_rent = deal.market_rent_monthly
    if market_rent is None:
        market_rent = estimate_market_rent(owner_inputs.purchase_price, settings)
        logger.debug(
            "No market rent supplied, estimated %s from %s%% of price",
            market_rent, settings.market_rent_to_price_pct,
        )
    assumptions["market_rent_monthly"] = market_rent

    pr_holding = None
    if holding is not None:
        pr_holding = calculate_primary_residence_holding_period(holding, market_rent)

    return DealAnalysis(
        purchase_type=deal.purchase_type,
        inputs=owner_inputs,
        underwriting=calculate_underwriting(owner_inputs),
        primary_residence=calculate_primary_residence_analysis(owner_inputs, market_rent),
        primary_residence_holding_period=pr_holding,
        assumptions=assumptions,
    )
