"""CLI for underwriting a deal from a JSON file and printing a terminal report.

Usage:
    python -m underwriting.cli deal.json
    python -m underwriting.cli deal.json --hold-years 7 --appreciation 4
    python -m underwriting.cli deal.json --json
"""

import argparse
import dataclasses
import json
import logging
import sys
from decimal import Decimal
from enum import Enum
from pathlib import Path

from pydantic import ValidationError

from underwriting.config import settings
from underwriting.engine.analysis import analyze_deal
from underwriting.engine.errors import UnderwritingError
from underwriting.models.results import DealAnalysis
from underwriting.schemas import DealRequest

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format a percentage value (already in percent) or n/a."""
    return "n/a" if v is None else f"{float(v):.2f}%"


def _dollar(v) -> str:
    return "n/a" if v is None else f"${float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _to_jsonable(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Cannot serialize {type(value).__name__}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_underwriting(result: DealAnalysis) -> None:
    uw = result.underwriting
    _header(f"Underwriting ({result.purchase_type.value})")
    print(f"  Total Monthly Payment: {_dollar(uw.total_monthly_payment)}")
    print(f"  NOI (monthly):         {_dollar(uw.noi_monthly)}")
    print(f"  Cash Flow (monthly):   {_dollar(uw.cash_flow_monthly)}")
    print(f"  Cash Flow (annual):    {_dollar(uw.cash_flow_annual)}")
    print(f"  Cap Rate:              {_pct(uw.cap_rate)}")
    print(f"  Cash-on-Cash:          {_pct(uw.cash_on_cash)}")
    dscr = "n/a" if uw.dscr is None else f"{float(uw.dscr):.2f}"
    print(f"  DSCR:                  {dscr}")
    print(f"  Break-even Rent:       {_dollar(uw.break_even_rent_monthly)}")
    print(f"  All-in Cash Required:  {_dollar(uw.all_in_cash_required)}")
    if uw.undefined_metrics:
        print(f"  Not applicable:        {', '.join(uw.undefined_metrics)}")


def print_holding_period(result: DealAnalysis) -> None:
    hp = result.holding_period
    if hp is None:
        return
    _header("Holding Period Projection")
    print(
        f"  {'Yr':>3}  {'Value':>11}  {'Rent':>10}  {'NOI':>10}  "
        f"{'Cash Flow':>10}  {'Cumulative':>11}  {'Equity':>11}"
    )
    print(f"  {'---':>3}  {'-' * 11}  {'-' * 10}  {'-' * 10}  {'-' * 10}  {'-' * 11}  {'-' * 11}")
    for yr in hp.yearly_projections:
        print(
            f"  {yr.year:>3}  {_dollar(yr.property_value):>11}  {_dollar(yr.rent_annual):>10}  "
            f"{_dollar(yr.noi_annual):>10}  {_dollar(yr.cash_flow_annual):>10}  "
            f"{_dollar(yr.cumulative_cash_flow):>11}  {_dollar(yr.equity):>11}"
        )
    ex = hp.exit_scenario
    print()
    print(f"  Sale Price:           {_dollar(ex.sale_price)}")
    print(f"  Selling Costs:        {_dollar(ex.selling_costs)}")
    print(f"  Loan Payoff:          {_dollar(ex.loan_payoff)}")
    print(f"  Net Sale Proceeds:    {_dollar(hp.net_sale_proceeds)}")
    print(f"  Total Return:         {_dollar(hp.total_return)}")
    print(f"  Annualized Return:    {_pct(hp.annualized_return)}")
    print(f"  IRR:                  {_pct(hp.irr)}")
    multiple = "n/a" if hp.equity_multiple is None else f"{float(hp.equity_multiple):.2f}x"
    print(f"  Equity Multiple:      {multiple}")


def print_primary_residence(result: DealAnalysis) -> None:
    pr = result.primary_residence
    if pr is None:
        return
    _header("Cost of Ownership")
    print(f"  Mortgage P&I:         {_dollar(pr.mortgage_pi)}")
    print(f"  Maintenance Reserve:  {_dollar(pr.monthly_maintenance_reserve)}")
    print(f"  All-in Monthly Cost:  {_dollar(pr.all_in_monthly_cost)}")
    print(f"  Annual Net Cost:      {_dollar(pr.annual_net_cost_of_ownership)}")
    print(f"  Cash at Close:        {_dollar(pr.cash_required_at_close)}")
    print(f"  Market Rent:          {_dollar(pr.market_rent_monthly)}")
    print(f"  Savings vs Renting:   {_dollar(pr.monthly_savings_vs_renting)}/mo")

    prh = result.primary_residence_holding_period
    if prh is None:
        return
    _header("Own vs Rent Over the Hold")
    for yr in prh.yearly_projections:
        print(
            f"  {yr.year:>3}  rent {_dollar(yr.market_rent_annual):>10}  "
            f"own {_dollar(yr.ownership_cost_annual):>10}  "
            f"avoided {_dollar(yr.cumulative_avoided_rent):>11}  equity {_dollar(yr.equity):>11}"
        )
    print()
    print(f"  Net Sale Proceeds:    {_dollar(prh.exit_scenario.net_sale_proceeds)}")
    print(f"  Net Housing Cost:     {_dollar(prh.net_cost_of_housing_monthly)}/mo")
    print(f"  Break-even Year:      {prh.break_even_year or 'not within hold'}")


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Underwrite a real estate deal")
    parser.add_argument("deal", type=Path, help="JSON file with deal inputs")
    parser.add_argument("--hold-years", type=int, help="Holding period in years")
    parser.add_argument("--appreciation", type=Decimal, help="Annual appreciation %%")
    parser.add_argument("--market-rent", type=Decimal, help="Market rent for a primary residence")
    parser.add_argument("--json", action="store_true", help="Print raw JSON instead of a report")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level,
        help="Logging level",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        payload = json.loads(args.deal.read_text())
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: could not read {args.deal}: {e}", file=sys.stderr)
        return 1

    overrides = {
        "holding_period_years": args.hold_years,
        "appreciation_rate": args.appreciation,
        "market_rent_monthly": args.market_rent,
    }
    payload.update({k: v for k, v in overrides.items() if v is not None})

    try:
        deal = DealRequest.model_validate(payload).to_deal()
        result = analyze_deal(deal)
    except ValidationError as e:
        print(f"Error: invalid deal input\n{e}", file=sys.stderr)
        return 1
    except UnderwritingError as e:
        logger.debug("Analysis failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(dataclasses.asdict(result), default=_to_jsonable, indent=2))
        return 0

    print_underwriting(result)
    print_holding_period(result)
    print_primary_residence(result)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
