"""Savings calculation engine for DeliverySavings."""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace as _replace
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

MONTHLY = "monthly"
ANNUAL = "annual"
TIMEFRAMES = (MONTHLY, ANNUAL)

AVERAGE_ORDER_VALUE = 35
THIRD_PARTY_ORDER_FEE = 4.00
INNOWI_ORDER_FEE = 1.00
INNOWI_PROCESSING_FEE_RATE = 0.029  # 2.9%
INNOWI_TRANSACTION_FEE = 0.30

MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _number_or_none(value: Any) -> Optional[float]:
    """Keep real, finite numbers from stored data; anything else reads as unset."""

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    return value if math.isfinite(value) else None


def _finite_or_none(value: float) -> Optional[float]:
    # JSON has no NaN; browsers serialize it as null.
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class CalculatorInputs:
    total_gpv: Optional[float] = None
    commission_percent: Optional[float] = None
    delivery_mix: Optional[float] = None
    migration_percent: Optional[float] = None
    timeframe: str = MONTHLY

    @property
    def is_complete(self) -> bool:
        return None not in (
            self.total_gpv,
            self.commission_percent,
            self.delivery_mix,
            self.migration_percent,
        )

    def replace(self, **changes: Any) -> "CalculatorInputs":
        return _replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalGPV": _number_or_none(self.total_gpv),
            "commissionPercent": _number_or_none(self.commission_percent),
            "deliveryMix": _number_or_none(self.delivery_mix),
            "migrationPercent": _number_or_none(self.migration_percent),
            "timeframe": self.timeframe,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CalculatorInputs":
        return cls(
            total_gpv=_number_or_none(data.get("totalGPV")),
            commission_percent=_number_or_none(data.get("commissionPercent")),
            delivery_mix=_number_or_none(data.get("deliveryMix")),
            migration_percent=_number_or_none(data.get("migrationPercent")),
            timeframe=ANNUAL if data.get("timeframe") == ANNUAL else MONTHLY,
        )


@dataclass(frozen=True)
class MonthlyProjection:
    month: str
    savings: float
    third_party_fees: float
    innowi_fees: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "savings": _finite_or_none(self.savings),
            "thirdPartyFees": _finite_or_none(self.third_party_fees),
            "innowiFees": _finite_or_none(self.innowi_fees),
        }


@dataclass(frozen=True)
class CalculationResults:
    third_party_commissions: float
    innowi_fees: float
    savings_amount: float
    savings_percent: float
    monthly_projections: Tuple[MonthlyProjection, ...]

    @property
    def savings_percent_defined(self) -> bool:
        """False when the migrated volume is zero and the percentage is non-finite."""

        return math.isfinite(self.savings_percent)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "thirdPartyCommissions": _finite_or_none(self.third_party_commissions),
            "innowiFees": _finite_or_none(self.innowi_fees),
            "savingsAmount": _finite_or_none(self.savings_amount),
            "savingsPercent": _finite_or_none(self.savings_percent),
            "monthlyProjections": [p.to_dict() for p in self.monthly_projections],
        }


def _ieee_divide(numerator: float, denominator: float) -> float:
    """Float division that yields NaN/inf for a zero denominator instead of raising."""

    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        negative = (numerator < 0) != (math.copysign(1.0, denominator) < 0)
        return -math.inf if negative else math.inf
    return numerator / denominator


def generate_monthly_projections(
    third_party_fees: float,
    innowi_fees: float,
    savings: float,
    timeframe: str,
) -> Tuple[MonthlyProjection, ...]:
    """Spread aggregate figures over the 12 calendar months.

    Annual aggregates are divided by 12; monthly aggregates are repeated
    unchanged in every slot.
    """

    divisor = 12 if timeframe == ANNUAL else 1
    monthly_third_party = third_party_fees / divisor
    monthly_innowi = innowi_fees / divisor
    monthly_savings = savings / divisor
    return tuple(
        MonthlyProjection(
            month=month,
            savings=monthly_savings,
            third_party_fees=monthly_third_party,
            innowi_fees=monthly_innowi,
        )
        for month in MONTHS
    )


def calculate_savings(inputs: CalculatorInputs) -> CalculationResults:
    """Return the fee comparison for the migrated share of delivery volume.

    Incomplete inputs produce an all-zero result. The savings percentage is
    relative to the migrated GPV and is NaN when that volume is zero.
    """

    if not inputs.is_complete:
        return CalculationResults(
            third_party_commissions=0,
            innowi_fees=0,
            savings_amount=0,
            savings_percent=0,
            monthly_projections=generate_monthly_projections(0, 0, 0, inputs.timeframe),
        )

    total_gpv = inputs.total_gpv
    commission_rate = inputs.commission_percent / 100
    delivery_rate = inputs.delivery_mix / 100
    migration_rate = inputs.migration_percent / 100

    delivery_gpv = total_gpv * delivery_rate
    total_orders = delivery_gpv / AVERAGE_ORDER_VALUE

    migrated_gpv = delivery_gpv * migration_rate
    migrated_orders = total_orders * migration_rate

    third_party_commissions = migration_rate * (
        delivery_gpv * commission_rate + total_orders * THIRD_PARTY_ORDER_FEE
    )
    innowi_fees = (
        migrated_orders * INNOWI_ORDER_FEE
        + migrated_gpv * INNOWI_PROCESSING_FEE_RATE
        + migrated_orders * INNOWI_TRANSACTION_FEE
    )

    savings_amount = third_party_commissions - innowi_fees
    savings_percent = _ieee_divide(savings_amount, migration_rate * total_gpv) * 100

    return CalculationResults(
        third_party_commissions=third_party_commissions,
        innowi_fees=innowi_fees,
        savings_amount=savings_amount,
        savings_percent=savings_percent,
        monthly_projections=generate_monthly_projections(
            third_party_commissions, innowi_fees, savings_amount, inputs.timeframe
        ),
    )


# Wide enough for any finite float at one decimal place.
_FORMAT_CONTEXT = Context(prec=400)


def _round_half_up(value: float, exponent: Decimal) -> Decimal:
    """Round the exact binary value half away from zero, as browsers format numbers."""

    return Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP, context=_FORMAT_CONTEXT)


def format_currency(amount: float) -> str:
    """Format as whole US dollars, e.g. ``33600 -> "$33,600"``."""

    value = float(amount)
    if math.isnan(value):
        return "$NaN"
    if math.isinf(value):
        return "-$∞" if value < 0 else "$∞"
    rounded = _round_half_up(value, Decimal(1))
    sign = "-" if rounded.is_signed() else ""
    return f"{sign}${rounded.copy_abs():,.0f}"


def format_percent(percent: float) -> str:
    """Format with one decimal place, e.g. ``21.0 -> "21.0%"``."""

    value = float(percent)
    if math.isnan(value):
        return "NaN%"
    if math.isinf(value):
        return "-Infinity%" if value < 0 else "Infinity%"
    if value == 0:
        value = 0.0  # no sign on negative zero
    rounded = _round_half_up(value, Decimal("0.1"))
    return f"{rounded}%"


__all__ = [
    "ANNUAL",
    "AVERAGE_ORDER_VALUE",
    "CalculationResults",
    "CalculatorInputs",
    "INNOWI_ORDER_FEE",
    "INNOWI_PROCESSING_FEE_RATE",
    "INNOWI_TRANSACTION_FEE",
    "MONTHLY",
    "MONTHS",
    "MonthlyProjection",
    "THIRD_PARTY_ORDER_FEE",
    "TIMEFRAMES",
    "calculate_savings",
    "format_currency",
    "format_percent",
    "generate_monthly_projections",
]
