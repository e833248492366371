"""DeliverySavings package entry points."""
from __future__ import annotations

from .calculations import (
    CalculationResults,
    CalculatorInputs,
    MonthlyProjection,
    calculate_savings,
    format_currency,
    format_percent,
    generate_monthly_projections,
)
from .cli import build_parser, configure_logging, run_cli

__all__ = [
    "CalculationResults",
    "CalculatorInputs",
    "MonthlyProjection",
    "build_parser",
    "calculate_savings",
    "format_currency",
    "format_percent",
    "generate_monthly_projections",
    "main",
    "main_cli",
    "run_cli",
    "run_gui",
]


def run_gui(store_path=None) -> None:
    # tkinter is only imported when the window is actually opened.
    from .gui.app import run

    run(store_path)


def main(argv=None) -> None:
    """Console entry point supporting both CLI and GUI modes."""

    parser = build_parser()
    default_args = parser.parse_args([])
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.gui:
        run_gui(args.store or None)
        return

    if args.cli:
        run_cli(args)
        return

    cli_fields = [
        "gpv",
        "commission",
        "delivery_mix",
        "migration",
        "timeframe",
        "cumulative",
        "csv",
        "chart",
        "restaurant",
        "city",
        "email",
        "phone",
    ]
    if any(getattr(args, field) != getattr(default_args, field) for field in cli_fields):
        parser.error("CLI options require --cli; add --cli to run command-line mode.")

    run_gui(args.store or None)


def main_cli(argv=None) -> None:
    """Dedicated console entry point for CLI usage."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    if not args.cli:
        args.cli = True
    run_cli(args)
