#!/usr/bin/env python3
"""Generate a sample lending portfolio and write its reports as JSON.

Writes due payments, payment predictions, the business overview and the
dashboard figures to the output directory, one file per report.
"""

import argparse
from datetime import date
from pathlib import Path

from microlend.config import LendingConfig, ScenarioConfig
from microlend.logging import get_logger, setup_logging
from microlend.money import format_money
from microlend.reports import PortfolioReport
from microlend.scenarios import SamplePortfolioScenario
from microlend.sinks import JsonFileSink

logger = get_logger("scripts.portfolio_report")


def main() -> None:
    """Run sample portfolio generation and reporting."""
    config = LendingConfig.from_env()

    parser = argparse.ArgumentParser(description="Sample microcredit portfolio reports")
    parser.add_argument(
        "--customers", type=int, default=50, help="Number of customers (default: 50)"
    )
    parser.add_argument(
        "--loan-penetration",
        type=float,
        default=0.70,
        help="Share of customers with a loan (default: 0.70)",
    )
    parser.add_argument(
        "--seed", type=int, default=config.seed if config.seed is not None else 42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=date.today(),
        help="Reporting date, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--window-days",
        type=int,
        default=config.report.prediction_window_days,
        help="Prediction window length in days",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=config.report.output_dir, help="Output directory"
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    parser.add_argument("--log-level", default=config.log_level, help="Log level")
    parser.add_argument(
        "--log-format", choices=["standard", "json"], default=config.log_format
    )
    args = parser.parse_args()

    setup_logging(args.log_level, args.log_format)
    config.report.prediction_window_days = args.window_days

    scenario = SamplePortfolioScenario(
        seed=args.seed,
        config=ScenarioConfig(
            name="sample",
            num_customers=args.customers,
            loan_penetration=args.loan_penetration,
            as_of=args.as_of,
        ),
    )
    store = scenario.generate()
    logger.info("Portfolio summary: %s", scenario.get_portfolio_summary())

    report = PortfolioReport(store, config)
    sink = JsonFileSink(args.output_dir, pretty=args.pretty or config.report.pretty_json)
    report.export([sink], args.as_of)
    sink.close()

    overview = report.business_overview()
    logger.info(
        "Outstanding %s, invested %s, expenses %s, profit %s",
        format_money(overview.total_outstanding, config.currency_symbol),
        format_money(overview.total_invested, config.currency_symbol),
        format_money(overview.total_expenses, config.currency_symbol),
        format_money(overview.profit, config.currency_symbol),
    )


if __name__ == "__main__":
    main()
