"""CLI harness for the pro forma engine: runs a canned scenario and prints a terminal report.

Usage:
    python deal-analyzer/analyze_deal.py --list
    python deal-analyzer/analyze_deal.py standard
    python deal-analyzer/analyze_deal.py dscr --forward-exit --sensitivity
    python deal-analyzer/analyze_deal.py valueadd --seed 42
    python deal-analyzer/analyze_deal.py nnn --api-url http://localhost:8000
"""

import argparse
import asyncio
import logging
import sys

import httpx

from proforma.config import settings
from proforma.scenarios import SCENARIOS, get_scenario, randomize_scenario


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format a decimal/float fraction as a percentage string."""
    if v is None:
        return "n/a"
    return f"{float(v) * 100:.2f}%"


def _dollar(v) -> str:
    if v is None:
        return "n/a"
    return f"${float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_deal_metrics(data: dict) -> None:
    _header("Deal Metrics")
    print(f"  Loan Amount:          {_dollar(data['loan_amount'])}")
    print(f"  Equity Invested:      {_dollar(data['total_equity_invested'])}")
    print(f"  Going-In Cap Rate:    {_pct(data['purchase_cap_rate'])}")
    print(f"  Before-Tax IRR:       {_pct(data['before_tax_irr'])}")
    print(f"  After-Tax IRR:        {_pct(data['irr'])}")
    print(f"  Unlevered IRR:        {_pct(data['unlevered_irr'])}")
    print(f"  Equity Multiple:      {float(data['equity_multiple']):.2f}x")
    print(f"  Avg Cash-on-Cash:     {_pct(data['average_cash_on_cash'])}")
    print(f"  Total Cash Returned:  {_dollar(data['total_cash_returned'])}")
    print(f"  Net Profit:           {_dollar(data['net_profit'])}")
    print(f"  Tax Savings:          {_dollar(data['total_tax_savings'])}")


def print_cashflow_table(data: dict) -> None:
    cashflows = data.get("annual_cashflows", [])
    if not cashflows:
        return
    _header("Cash Flow Projections")
    print(
        f"  {'Yr':>3}  {'EGI':>11}  {'NOI':>11}  {'Debt Svc':>11}  "
        f"{'CFBT':>11}  {'Taxes':>10}  {'CFAT':>11}  {'DSCR':>5}"
    )
    print(
        f"  {'---':>3}  {'-' * 11}  {'-' * 11}  {'-' * 11}  "
        f"{'-' * 11}  {'-' * 10}  {'-' * 11}  {'-' * 5}"
    )
    for yr in cashflows:
        print(
            f"  {yr['year']:>3}  {_dollar(yr['effective_gross_income']):>11}  "
            f"{_dollar(yr['noi']):>11}  {_dollar(yr['debt_service']):>11}  "
            f"{_dollar(yr['cash_flow_before_tax']):>11}  {_dollar(yr['taxes']):>10}  "
            f"{_dollar(yr['cash_flow_after_tax']):>11}  {float(yr['dscr']):>5.2f}"
        )


def print_disposition(data: dict) -> None:
    sale = data["sale_proceeds"]
    _header("Disposition (Sale)")
    if not sale["determined"]:
        print("  Sale price undetermined (exit cap rate must be greater than 0)")
        return
    print(f"  Sale NOI:             {_dollar(sale['sale_noi'])}")
    print(f"  Exit Cap Rate:        {_pct(sale['exit_cap_rate'])}")
    print(f"  Sale Price:           {_dollar(sale['sale_price'])}")
    print(f"  Cost of Sale:         {_dollar(sale['cost_of_sale'])}")
    print(f"  Loan Payoff:          {_dollar(sale['loan_balance'])}")
    print(f"  Before-Tax Proceeds:  {_dollar(sale['before_tax_sale_proceeds'])}")
    print(f"  Taxes on Sale:        {_dollar(sale['taxes_on_sale'])}")
    print(f"  After-Tax Proceeds:   {_dollar(sale['after_tax_proceeds'])}")
    print()
    print(f"  Adjusted Basis:          {_dollar(sale['adjusted_basis'])}")
    print(f"  Depreciation Recapture:  {_dollar(sale['depreciation_recapture'])}")
    print(f"  Capital Gain:            {_dollar(sale['capital_gain'])}")


def print_sensitivity(data: dict) -> None:
    sens = data.get("sensitivity")
    if not sens:
        return
    _header("Sensitivity")
    print(f"  IRR, exit cap -50 bps:       {_pct(sens['exit_cap_minus_50bps'])}")
    print(f"  IRR, exit cap +50 bps:       {_pct(sens['exit_cap_plus_50bps'])}")
    print(f"  IRR, rent growth -100 bps:   {_pct(sens['rent_growth_minus_100bps'])}")
    print(f"  IRR, rent growth +100 bps:   {_pct(sens['rent_growth_plus_100bps'])}")
    for key, label in (("dscr_rate_minus_50bps", "-50"), ("dscr_rate_plus_50bps", "+50")):
        value = sens[key]
        shown = f"{float(value):.2f}x" if value is not None else "n/a"
        print(f"  Year 1 DSCR, rate {label} bps:   {shown}")


# ── Runners ──────────────────────────────────────────────────────────────────

def run_local(args) -> dict:
    from proforma.api.routes.proforma import build_response
    from proforma.engine.proforma import analyze

    assumptions = get_scenario(args.scenario).assumptions
    if args.seed is not None:
        assumptions = randomize_scenario(assumptions, args.seed)

    errors, results = analyze(assumptions, forward_exit_noi=args.forward_exit)
    if results is None:
        print("Error: assumptions are invalid", file=sys.stderr)
        for error in errors:
            print(f"  {error}", file=sys.stderr)
        sys.exit(1)
    return build_response(assumptions, results, args.sensitivity).model_dump(mode="json")


async def run_remote(args) -> dict:
    params = {
        "forward_exit_noi": str(args.forward_exit).lower(),
        "include_sensitivity": str(args.sensitivity).lower(),
    }

    async with httpx.AsyncClient(base_url=args.api_url, timeout=60) as client:
        try:
            if args.seed is None:
                resp = await client.get(f"/api/v1/scenarios/{args.scenario}/proforma", params=params)
            else:
                inputs = await client.get(
                    f"/api/v1/scenarios/{args.scenario}/assumptions", params={"seed": args.seed}
                )
                inputs.raise_for_status()
                resp = await client.post("/api/v1/proforma", json={
                    "assumptions": inputs.json(),
                    "forward_exit_noi": args.forward_exit,
                    "include_sensitivity": args.sensitivity,
                })
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn proforma.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.HTTPStatusError as e:
            print(f"Error: API returned {e.response.status_code}", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            detail = resp.json().get("detail", resp.text)
            for line in detail if isinstance(detail, list) else [detail]:
                print(f"  {line}", file=sys.stderr)
            sys.exit(1)

        return resp.json()


# ── Main ─────────────────────────────────────────────────────────────────────

async def main() -> None:
    parser = argparse.ArgumentParser(description="Run a pro forma for a canned deal scenario")
    parser.add_argument(
        "scenario",
        nargs="?",
        default="standard",
        choices=[s.id for s in SCENARIOS],
        help="Scenario id (default: standard)",
    )
    parser.add_argument("--list", action="store_true", help="List scenarios and exit")
    parser.add_argument("--seed", type=int, help="Randomize the scenario inputs with this seed")
    parser.add_argument(
        "--forward-exit",
        action="store_true",
        help="Capitalize the year after the hold at exit instead of the final year",
    )
    parser.add_argument("--sensitivity", action="store_true", help="Include sensitivity analysis")
    parser.add_argument(
        "--api-url",
        default=None,
        help="Post to a running API (e.g. http://localhost:8000) instead of computing locally",
    )

    args = parser.parse_args()
    logging.basicConfig(level=settings.log_level)

    if args.list:
        for s in SCENARIOS:
            print(f"  {s.id:<10} {s.name}: {s.description}")
        return

    data = await run_remote(args) if args.api_url else run_local(args)

    scenario = get_scenario(args.scenario)
    _header(f"{scenario.name}" + (f" (seed {args.seed})" if args.seed is not None else ""))
    print(f"  {scenario.description}")
    print_deal_metrics(data)
    print_cashflow_table(data)
    print_disposition(data)
    print_sensitivity(data)
    print()


if __name__ == "__main__":
    asyncio.run(main())
