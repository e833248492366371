"""Derived views over calculation results (chart series, cards, plan summary)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .calculations import (
    ANNUAL,
    CalculationResults,
    CalculatorInputs,
    MonthlyProjection,
    format_currency,
    format_percent,
)


@dataclass(frozen=True)
class CumulativePoint:
    month: str
    savings: float
    third_party_fees: float
    innowi_fees: float


@dataclass(frozen=True)
class ImpactCard:
    card_id: str
    title: str
    subtitle: str
    value: str
    description: str
    kind: str  # "expense" or "savings"


@dataclass(frozen=True)
class SavingsSummary:
    total_savings: float
    monthly_savings: float
    annual_savings: float


def timeframe_label(timeframe: str) -> str:
    return "Annual" if timeframe == ANNUAL else "Monthly"


def cumulative_projections(
    projections: Sequence[MonthlyProjection],
) -> List[CumulativePoint]:
    """Running totals per month, as plotted on the 12-month savings chart."""

    points: List[CumulativePoint] = []
    savings = third_party = innowi = 0.0
    for projection in projections:
        savings += projection.savings
        third_party += projection.third_party_fees
        innowi += projection.innowi_fees
        points.append(CumulativePoint(projection.month, savings, third_party, innowi))
    return points


def build_impact_cards(results: CalculationResults, timeframe: str) -> List[ImpactCard]:
    label = timeframe_label(timeframe)
    return [
        ImpactCard(
            card_id="third-party-commissions",
            title="3P Commissions",
            subtitle="(migrated)",
            value=format_currency(results.third_party_commissions),
            description=f"{label} fees paid to third-party platforms",
            kind="expense",
        ),
        ImpactCard(
            card_id="innowi-fees",
            title="Innowi Fees",
            subtitle="(migrated)",
            value=format_currency(results.innowi_fees),
            description=f"{label} fees with Innowi's platform",
            kind="expense",
        ),
        ImpactCard(
            card_id="savings-amount",
            title="Savings Amount",
            subtitle="",
            value=format_currency(results.savings_amount),
            description=f"{label} cost savings",
            kind="savings",
        ),
        ImpactCard(
            card_id="savings-percent",
            title="Savings Percentage",
            subtitle="of GPV",
            value=format_percent(results.savings_percent),
            description="Percentage of total revenue saved",
            kind="savings",
        ),
    ]


def savings_summary(results: CalculationResults) -> SavingsSummary:
    """Figures printed on the downloadable marketing plan."""

    total = sum(p.savings for p in results.monthly_projections)
    return SavingsSummary(
        total_savings=total,
        monthly_savings=results.savings_amount,
        annual_savings=results.savings_amount * 12,
    )


def should_offer_plan(inputs: CalculatorInputs, results: CalculationResults) -> bool:
    """Only prompt for contact details once a positive saving is on screen."""

    return inputs.is_complete and results.savings_amount > 0


__all__ = [
    "CumulativePoint",
    "ImpactCard",
    "SavingsSummary",
    "build_impact_cards",
    "cumulative_projections",
    "savings_summary",
    "should_offer_plan",
    "timeframe_label",
]
