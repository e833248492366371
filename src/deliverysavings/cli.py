"""Command-line interface for DeliverySavings."""
from __future__ import annotations

import argparse
import logging
import sys

import matplotlib.pyplot as plt

from .calculations import CalculationResults, calculate_savings
from .charts import build_savings_figure
from .computation import should_offer_plan
from .leads import LeadValidationError, RestaurantInfo, build_lead
from .parsing import SUGGESTED_VALUES, build_inputs, validate_inputs
from .reporting import export_projections_csv, format_breakdown
from .storage import LEAD_KEY, SessionStore, save_inputs, save_results, save_timeframe_preference

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate savings from moving delivery orders off third-party platforms."
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--cli", action="store_true", help="Run in CLI mode")
    mode.add_argument("--gui", action="store_true", help="Run GUI")
    parser.add_argument("--gpv", default="", help="Total online sales (pickup & delivery) for the timeframe, e.g. '20,000'")
    parser.add_argument(
        "--commission",
        default=str(SUGGESTED_VALUES["commission_percent"]),
        help="Current 3rd party commission rate in %% (0-40)",
    )
    parser.add_argument(
        "--delivery-mix",
        default=str(SUGGESTED_VALUES["delivery_mix"]),
        help="Share of online orders that are delivery, in %%",
    )
    parser.add_argument(
        "--migration",
        default=str(SUGGESTED_VALUES["migration_percent"]),
        help="Share of delivery business moved to Innowi, in %%",
    )
    parser.add_argument(
        "--timeframe",
        choices=["monthly", "annual"],
        default="monthly",
        help="Whether --gpv is a monthly or annual figure",
    )
    parser.add_argument("--cumulative", action="store_true", help="Show running totals in the projection table/CSV")
    parser.add_argument("--csv", default="", help="Export the 12-month projection to this CSV path")
    parser.add_argument("--chart", action="store_true", help="Show the cumulative savings chart")
    parser.add_argument("--store", default="", help="JSON file used to remember inputs between runs")
    parser.add_argument("--restaurant", default="", help="Restaurant name (for the plan/lead)")
    parser.add_argument("--city", default="", help="Restaurant city (for the plan/lead)")
    parser.add_argument("--email", default="", help="Request the marketing plan at this email")
    parser.add_argument("--phone", default="", help="Optional contact phone number")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable informational logging")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _record_lead(args: argparse.Namespace, results: CalculationResults, store: SessionStore) -> None:
    info = RestaurantInfo(name=args.restaurant, city=args.city)
    try:
        lead = build_lead(info, args.email, results, phone=args.phone or None)
    except LeadValidationError as exc:
        for field, message in sorted(exc.errors.items()):
            print(f"Lead not recorded: {field}: {message}", file=sys.stderr)
        return
    store.save(LEAD_KEY, lead.to_dict())
    logger.info("Recorded plan request for %s (%s)", lead.restaurant_name, lead.email)
    print(f"\nMarketing plan requested for {lead.restaurant_name} -> {lead.email}")


def run_cli(args: argparse.Namespace) -> CalculationResults:
    try:
        inputs = build_inputs(
            args.gpv, args.commission, args.delivery_mix, args.migration, args.timeframe
        )
    except ValueError as exc:
        build_parser().error(str(exc))

    for field, message in validate_inputs(inputs).items():
        print(f"Warning: {field}: {message}", file=sys.stderr)
    if not inputs.is_complete:
        print("Note: enter --gpv to see your savings; showing zero results.", file=sys.stderr)

    results = calculate_savings(inputs)
    logger.info("Calculated savings %.2f for inputs %s", results.savings_amount, inputs)

    if args.restaurant:
        print(f"Savings estimate for {args.restaurant}" + (f", {args.city}" if args.city else ""))
        print()
    print(format_breakdown(inputs, results, cumulative=args.cumulative))

    if args.csv:
        export_projections_csv(args.csv, results, cumulative=args.cumulative)
        print(f"\nCSV exported to {args.csv}")

    store = SessionStore(args.store or None)
    save_inputs(store, inputs)
    save_timeframe_preference(store, inputs.timeframe)
    save_results(store, results)

    if args.email:
        if should_offer_plan(inputs, results):
            _record_lead(args, results, store)
        else:
            print("Lead not recorded: no positive savings to share yet.", file=sys.stderr)

    if args.chart:
        fig = plt.figure(figsize=(10, 6))
        build_savings_figure(results, inputs.timeframe, args.restaurant or None, figure=fig)
        plt.show()

    return results


__all__ = ["build_parser", "configure_logging", "run_cli"]
