"""Shared fixtures for the DeliverySavings test suite."""

import matplotlib

matplotlib.use("Agg")

import pytest

from deliverysavings.calculations import ANNUAL, MONTHLY, CalculatorInputs


@pytest.fixture
def monthly_inputs() -> CalculatorInputs:
    """$20k/month restaurant, the reference worked example."""
    return CalculatorInputs(
        total_gpv=20_000,
        commission_percent=30,
        delivery_mix=85,
        migration_percent=40,
        timeframe=MONTHLY,
    )


@pytest.fixture
def annual_inputs() -> CalculatorInputs:
    """$1.2M/year restaurant at the suggested rates."""
    return CalculatorInputs(
        total_gpv=1_200_000,
        commission_percent=30,
        delivery_mix=85,
        migration_percent=40,
        timeframe=ANNUAL,
    )
