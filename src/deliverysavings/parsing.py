"""Input parsing and field validation helpers for DeliverySavings."""
from __future__ import annotations

import math
import re
from typing import Dict, Optional

from .calculations import ANNUAL, MONTHLY, CalculatorInputs

SUGGESTED_VALUES = {
    "total_gpv": 1_200_000,  # $1.2M annual
    "commission_percent": 30,
    "delivery_mix": 85,
    "migration_percent": 40,
}
SUGGESTED_MONTHLY_GPV = 20_000

DEFAULT_INPUTS = CalculatorInputs(
    total_gpv=None,
    commission_percent=SUGGESTED_VALUES["commission_percent"],
    delivery_mix=SUGGESTED_VALUES["delivery_mix"],
    migration_percent=SUGGESTED_VALUES["migration_percent"],
    timeframe=MONTHLY,
)

MIN_GPV = 1_000
MAX_GPV = 50_000_000
MAX_COMMISSION_PERCENT = 40

_LEADING_INT = re.compile(r"^[+-]?\d+")


def parse_input_value(text: str) -> Optional[int]:
    """Parse a GPV entry such as "$20,000"; blank, garbage or zero means unset."""

    cleaned = text.replace(",", "").strip().lstrip("$").strip()
    match = _LEADING_INT.match(cleaned)
    if not match:
        return None
    value = int(match.group(0))
    return value or None


def parse_percent(text: str) -> Optional[float]:
    """Parse a percentage like "30" or "30%"; blank means unset."""

    cleaned = text.strip().rstrip("%").strip()
    if not cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        raise ValueError(f"'{text}' is not a valid percentage") from None
    if not math.isfinite(value):
        raise ValueError(f"'{text}' is not a valid percentage")
    return value


def parse_timeframe(text: str) -> str:
    normalized = text.strip().lower()
    if normalized not in {MONTHLY, ANNUAL}:
        raise ValueError(f"Unknown timeframe '{text}' (expected monthly/annual)")
    return normalized


def validate_input(field: str, value: Optional[float]) -> Optional[str]:
    """Return an error message for an out-of-range field value, else None."""

    if field not in SUGGESTED_VALUES:
        raise KeyError(field)
    if value is None:
        return None
    if field == "total_gpv":
        if value < MIN_GPV:
            return "GPV should be at least $1,000"
        if value > MAX_GPV:
            return "GPV seems unusually high"
    elif field == "commission_percent":
        if value < 0 or value > MAX_COMMISSION_PERCENT:
            return "Commission rate should be between 0% and 40%"
    elif field == "delivery_mix":
        if value < 0 or value > 100:
            return "Delivery mix should be between 0% and 100%"
    elif field == "migration_percent":
        if value < 0 or value > 100:
            return "Migration percentage should be between 0% and 100%"
    return None


def validate_inputs(inputs: CalculatorInputs) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for field in SUGGESTED_VALUES:
        message = validate_input(field, getattr(inputs, field))
        if message:
            errors[field] = message
    return errors


def build_inputs(
    gpv: str = "",
    commission: str = "",
    delivery_mix: str = "",
    migration: str = "",
    timeframe: str = MONTHLY,
) -> CalculatorInputs:
    """Assemble calculator inputs from raw form strings."""

    return CalculatorInputs(
        total_gpv=parse_input_value(gpv),
        commission_percent=parse_percent(commission),
        delivery_mix=parse_percent(delivery_mix),
        migration_percent=parse_percent(migration),
        timeframe=parse_timeframe(timeframe),
    )


__all__ = [
    "DEFAULT_INPUTS",
    "MAX_COMMISSION_PERCENT",
    "MAX_GPV",
    "MIN_GPV",
    "SUGGESTED_MONTHLY_GPV",
    "SUGGESTED_VALUES",
    "build_inputs",
    "parse_input_value",
    "parse_percent",
    "parse_timeframe",
    "validate_input",
    "validate_inputs",
]
