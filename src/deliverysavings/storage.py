"""Caller-owned session store for calculator state."""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from .calculations import ANNUAL, MONTHLY, CalculationResults, CalculatorInputs

logger = logging.getLogger(__name__)

INPUTS_KEY = "calculatorInputs"
RESULTS_KEY = "calculationResults"
TIMEFRAME_KEY = "timeframePreference"
LEAD_KEY = "leadData"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


class SessionStore:
    """Key/value store of JSON-serializable values.

    With a ``path`` the store is seeded from that JSON file and written back
    after every change. Storage failures are logged and never raised, so a
    broken file never stops a calculation.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path
        self._data: Dict[str, Any] = {}
        if path and os.path.exists(path):
            self._read()

    def _read(self) -> None:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f, parse_constant=_reject_constant)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load session store %s: %s", self.path, exc)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            logger.warning("Ignoring session store %s: expected a JSON object", self.path)

    def _flush(self) -> None:
        if not self.path:
            return
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, allow_nan=False)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to write session store %s: %s", self.path, exc)

    def save(self, key: str, data: Any) -> None:
        try:
            # Round-trip so stored values never alias caller objects.
            value = json.loads(json.dumps(data, allow_nan=False))
        except (TypeError, ValueError) as exc:
            logger.warning("Failed to save %r to session store: %s", key, exc)
            return
        self._data[key] = value
        self._flush()

    def load(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def clear(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._flush()

    def __contains__(self, key: str) -> bool:
        return key in self._data


def save_inputs(store: SessionStore, inputs: CalculatorInputs) -> None:
    store.save(INPUTS_KEY, inputs.to_dict())


def load_inputs(
    store: SessionStore, default: Optional[CalculatorInputs] = None
) -> Optional[CalculatorInputs]:
    data = store.load(INPUTS_KEY)
    if not isinstance(data, dict):
        return default
    inputs = CalculatorInputs.from_dict(data)
    stored = inputs.to_dict()
    dropped = [k for k, v in data.items() if k in stored and v is not None and stored[k] is None]
    if dropped:
        logger.warning("Ignoring non-numeric stored inputs: %s", ", ".join(sorted(dropped)))
    return inputs


def save_results(store: SessionStore, results: CalculationResults) -> None:
    store.save(RESULTS_KEY, results.to_dict())


def save_timeframe_preference(store: SessionStore, timeframe: str) -> None:
    store.save(TIMEFRAME_KEY, timeframe)


def load_timeframe_preference(store: SessionStore) -> str:
    return ANNUAL if store.load(TIMEFRAME_KEY) == ANNUAL else MONTHLY


__all__ = [
    "INPUTS_KEY",
    "LEAD_KEY",
    "RESULTS_KEY",
    "SessionStore",
    "TIMEFRAME_KEY",
    "load_inputs",
    "load_timeframe_preference",
    "save_inputs",
    "save_results",
    "save_timeframe_preference",
]
