"""Treasury tracker CLI.

Provides commands for:
- value: value a holdings snapshot against a price snapshot and render the widget
- check-config: validate the tracker configuration
"""
from __future__ import annotations

import argparse
import json
from typing import List, Optional

from common.config_loader import ConfigError, TrackerConfig, load_config
from common.logging_config import setup_logging
from display.console import ConsoleDisplay
from engine.treasury_engine import refresh
from holdings.holding import (
    PriceMap,
    TokenHolding,
    load_holdings,
    load_price_map,
    native_balance_holding,
)
from reporting.explainability import explain_valuation
from reporting.summary import valuation_summary


def build_holdings(args, cfg: TrackerConfig) -> List[TokenHolding]:
    """Load token holdings, adding the native balance if given."""
    holdings = load_holdings(args.holdings) if args.holdings else []
    if args.lamports is not None:
        holdings.append(native_balance_holding(args.lamports, cfg.native_mint))
    return holdings


def cmd_value(args) -> int:
    """Handle value command: one valuation pass rendered to the console."""
    try:
        cfg = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1

    try:
        holdings = build_holdings(args, cfg)
        prices: PriceMap = load_price_map(args.prices)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    display = ConsoleDisplay()
    valuation, ok = refresh(display, holdings, prices, cfg)

    if args.json:
        print(json.dumps(valuation_summary(valuation, cfg), indent=2))
        return 0 if ok else 1

    print(display.render())

    if args.explain:
        print("\nBreakdown:")
        for line in explain_valuation(valuation, prices):
            print("  " + line)

    if valuation.unpriced_mints and not args.explain:
        print(f"\n{len(valuation.unpriced_mints)} mint(s) without a price were excluded.")

    return 0 if ok else 1


def cmd_check_config(args) -> int:
    """Handle check-config command."""
    try:
        cfg = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Fundraising goal: ${cfg.fundraising_goal:,.0f}")
    print(f"Native mint:      {cfg.native_mint}")
    print("Quote mints:")
    for m in sorted(cfg.quote_mints):
        print(f"  {m}")
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    p = argparse.ArgumentParser(
        prog="cli.main",
        description="Treasury tracker CLI: wallet value and fundraising progress",
    )
    p.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    sub = p.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default="config/tracker.yaml", help="Tracker config file")

    val = sub.add_parser("value", parents=[common], help="Value a holdings snapshot")
    val.add_argument("--holdings", default=None, help="Holdings file (CSV or YAML/JSON)")
    val.add_argument("--prices", required=True, help="Price map file (YAML/JSON)")
    val.add_argument("--lamports", type=int, default=None, help="Native SOL balance in lamports")
    val.add_argument("--explain", action="store_true", help="Show per-mint breakdown")
    val.add_argument("--json", action="store_true", help="Print summary as JSON")
    val.set_defaults(func=cmd_value)

    chk = sub.add_parser("check-config", parents=[common], help="Validate tracker config")
    chk.set_defaults(func=cmd_check_config)

    args = p.parse_args(argv)
    setup_logging(level=args.log_level)
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
