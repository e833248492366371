"""Reporting helpers such as CSV export and the text breakdown."""
from __future__ import annotations

import csv
import numbers
from typing import Iterable, List, Sequence, Tuple

from .calculations import CalculationResults, CalculatorInputs, format_currency, format_percent
from .computation import build_impact_cards, cumulative_projections, timeframe_label


def export_csv(path: str, header: Sequence[str], rows: Iterable[Sequence]):
    """Write header/row data to a CSV file."""

    def _format_cell(value: object) -> str:
        if isinstance(value, numbers.Real):
            return format(value, ".0f")
        return str(value)

    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([_format_cell(h) for h in header])
        for row in rows:
            writer.writerow([_format_cell(cell) for cell in row])


def projection_rows(
    results: CalculationResults, cumulative: bool = False
) -> Tuple[List[str], List[List[object]]]:
    header = ["Month", "Savings", "3P Platform Fees", "Innowi Fees"]
    if cumulative:
        points = cumulative_projections(results.monthly_projections)
        rows = [[p.month, p.savings, p.third_party_fees, p.innowi_fees] for p in points]
    else:
        rows = [
            [p.month, p.savings, p.third_party_fees, p.innowi_fees]
            for p in results.monthly_projections
        ]
    return header, rows


def export_projections_csv(
    path: str, results: CalculationResults, cumulative: bool = False
) -> None:
    header, rows = projection_rows(results, cumulative)
    export_csv(path, header, rows)


def _input_cell(value, suffix: str = "") -> str:
    if value is None:
        return "(not set)"
    return f"{value:g}{suffix}"


def format_breakdown(
    inputs: CalculatorInputs,
    results: CalculationResults,
    cumulative: bool = False,
) -> str:
    """Plain-text report of the inputs, impact cards and projection table."""

    label = timeframe_label(inputs.timeframe)
    gpv = "(not set)" if inputs.total_gpv is None else format_currency(inputs.total_gpv)
    lines = [
        "INPUTS",
        f"  Total online sales ({label.lower()}): {gpv}",
        f"  3rd party commission rate: {_input_cell(inputs.commission_percent, '%')}",
        f"  Delivery mix: {_input_cell(inputs.delivery_mix, '%')}",
        f"  Migration to Innowi: {_input_cell(inputs.migration_percent, '%')}",
        "",
        "FINANCIAL IMPACT SUMMARY",
    ]
    for card in build_impact_cards(results, inputs.timeframe):
        title = f"{card.title} {card.subtitle}".strip()
        lines.append(f"  {title}: {card.value}  ({card.description})")

    heading = "12-MONTH CUMULATIVE PROJECTION" if cumulative else "12-MONTH PROJECTION"
    header, rows = projection_rows(results, cumulative)
    lines.extend(["", heading, " | ".join(header)])
    for month, savings, third_party, innowi in rows:
        lines.append(
            " | ".join(
                [month, format_currency(savings), format_currency(third_party), format_currency(innowi)]
            )
        )
    if not results.savings_percent_defined:
        lines.append("")
        lines.append(
            f"Note: savings percentage is undefined ({format_percent(results.savings_percent)})"
            " because no volume is migrated."
        )
    return "\n".join(lines)


__all__ = [
    "export_csv",
    "export_projections_csv",
    "format_breakdown",
    "projection_rows",
]
