# main.py
"""
Entry Point: Mortgage Offer Comparison

Purpose
-------
Simulate every configured loan offer month by month and compare them:
  1) Load assumptions + offers (sample defaults or --config JSON).
  2) Simulate each offer (PMI removal or year-1 recast, opportunity cost).
  3) Print a per-offer summary and write a Markdown comparison report.

Design
------
- CLI-friendly; pure Python. The simulation itself lives in loan_sim.core.finance.
- An offer whose terms do not amortize is reported and skipped; the others still run.

Usage
-----
    python main.py
    python main.py --config data/sample/loans.json --out comparison.md --schedule --op-cost-rate 0.06
"""

from __future__ import annotations

import argparse
import locale
import logging
import os
import sys

from loan_sim.core.finance import compare_offers
from loan_sim.inputs.inputs import AppInputs, InputsLoader, build_sample_inputs
from loan_sim.reports.generator import render_console_summary, write_report


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Compare fixed-rate mortgage offers (PMI, recast, opportunity cost)")
    p.add_argument("--config", type=str, default=None, help="Path to JSON config (assumptions + offers + run options).")
    p.add_argument("--out", type=str, default=None, help="Output Markdown path (overrides config).")
    p.add_argument("--schedule", action="store_true", default=None, help="Include yearly schedule tables in the report.")
    p.add_argument("--op-cost-rate", type=float, default=None, help="Opportunity-cost annual rate, e.g. 0.06 (overrides config).")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging to stderr.")
    return p.parse_args(argv)


def _debug_enabled() -> bool:
    return os.getenv("LOANSIM_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def configure_logging(verbose: bool = False) -> None:
    """Send package logs to stderr; DEBUG with --verbose or LOANSIM_DEBUG=1, WARNING otherwise."""
    logger = logging.getLogger("loan_sim")
    logger.setLevel(logging.DEBUG if (verbose or _debug_enabled()) else logging.WARNING)

    # Avoid duplicate handlers on repeated calls (tests, REPL)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                datefmt="(%Y-%m-%d %H:%M:%S)",
            )
        )
        logger.addHandler(handler)


def _use_system_locale() -> None:
    """Adopt the user's locale for currency display; keep the default if it is unavailable."""
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logging.getLogger("loan_sim").debug("system locale unavailable; using default currency formatting")


def main(argv: list[str] | None = None) -> int:
    """Run the comparison, print the summary and write the report (or chosen output)."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    _use_system_locale()

    loader = InputsLoader()
    if args.config:
        cfg: AppInputs = loader.load(args.config)
    else:
        # No config file: demo offers
        cfg = build_sample_inputs()

    cfg = loader.with_overrides(
        cfg,
        out=args.out,
        schedule=args.schedule,
        opportunity_cost_rate=args.op_cost_rate,
    )

    result = compare_offers(cfg.assumptions, cfg.offers)

    print(render_console_summary(result))
    write_report(cfg.run.out, result, schedule=cfg.run.schedule)
    print(f"Report written to {cfg.run.out}")

    best = result.best()
    if best is not None:
        print(f"Lowest total cost including opportunity cost: {best.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
