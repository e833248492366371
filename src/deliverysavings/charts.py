"""matplotlib rendering of the 12-month cumulative savings chart."""
from __future__ import annotations

from typing import Dict, Optional

import numpy as np
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from .calculations import CalculationResults, format_currency
from .computation import timeframe_label

SERIES_STYLES: Dict[str, Dict[str, str]] = {
    "Monthly Savings": {"color": "#10B981", "linestyle": "-"},
    "3P Platform Fees": {"color": "#EF4444", "linestyle": "--"},
    "Innowi Fees": {"color": "#3B82F6", "linestyle": "-."},
}


def cumulative_series(results: CalculationResults) -> Dict[str, np.ndarray]:
    projections = results.monthly_projections
    return {
        "Monthly Savings": np.cumsum([p.savings for p in projections], dtype=np.float64),
        "3P Platform Fees": np.cumsum(
            [p.third_party_fees for p in projections], dtype=np.float64
        ),
        "Innowi Fees": np.cumsum([p.innowi_fees for p in projections], dtype=np.float64),
    }


def build_savings_figure(
    results: CalculationResults,
    timeframe: str,
    restaurant_name: Optional[str] = None,
    figure: Optional[Figure] = None,
) -> Figure:
    """Draw cumulative savings and fees per month onto a (new) figure."""

    fig = figure if figure is not None else Figure(figsize=(9.8, 5.2), dpi=100)
    fig.clear()
    ax = fig.add_subplot(111)
    months = [p.month for p in results.monthly_projections]
    x = np.arange(len(months))
    series = cumulative_series(results)
    for label, values in series.items():
        style = SERIES_STYLES[label]
        ax.plot(x, values, label=label, marker="o", markersize=3, **style)
    ax.fill_between(x, series["Monthly Savings"], 0, color=SERIES_STYLES["Monthly Savings"]["color"], alpha=0.12)

    title = "12-Month Cumulative Savings"
    if restaurant_name:
        title = f"{title} - {restaurant_name}"
    ax.set_title(title)
    ax.set_xlabel(f"Month ({timeframe_label(timeframe).lower()} view)")
    ax.set_ylabel("Cumulative Amount ($)")
    ax.set_xticks(x)
    ax.set_xticklabels(months)
    ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _pos: format_currency(v)))
    ax.grid(True, linestyle=":", alpha=0.6)
    ax.legend(loc="upper left")
    fig.tight_layout()
    return fig


__all__ = ["SERIES_STYLES", "build_savings_figure", "cumulative_series"]
