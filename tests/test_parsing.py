"""Tests for form-field parsing and validation."""

import pytest

from deliverysavings.calculations import ANNUAL, MONTHLY, CalculatorInputs
from deliverysavings.parsing import (
    DEFAULT_INPUTS,
    build_inputs,
    parse_input_value,
    parse_percent,
    parse_timeframe,
    validate_input,
    validate_inputs,
)


class TestParseInputValue:
    def test_strips_commas_and_dollar(self):
        assert parse_input_value("$20,000") == 20_000

    def test_truncates_decimals(self):
        assert parse_input_value("1,200,000.75") == 1_200_000

    @pytest.mark.parametrize("text", ["", "   ", "abc", "0", "0,000"])
    def test_unset_values(self, text):
        assert parse_input_value(text) is None


class TestParsePercent:
    def test_plain_and_suffixed(self):
        assert parse_percent("30") == 30.0
        assert parse_percent(" 12.5% ") == 12.5

    def test_blank_is_unset(self):
        assert parse_percent("") is None

    def test_malformed_raises(self):
        with pytest.raises(ValueError, match="not a valid percentage"):
            parse_percent("thirty")

    @pytest.mark.parametrize("text", ["nan", "inf", "-Infinity"])
    def test_non_finite_raises(self, text):
        with pytest.raises(ValueError, match="not a valid percentage"):
            parse_percent(text)


class TestParseTimeframe:
    def test_case_insensitive(self):
        assert parse_timeframe("Annual") == ANNUAL
        assert parse_timeframe(" monthly ") == MONTHLY

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown timeframe"):
            parse_timeframe("weekly")


class TestValidateInput:
    def test_gpv_bounds(self):
        assert validate_input("total_gpv", 999) == "GPV should be at least $1,000"
        assert validate_input("total_gpv", 60_000_000) == "GPV seems unusually high"
        assert validate_input("total_gpv", 20_000) is None

    def test_commission_bounds(self):
        assert validate_input("commission_percent", 41) is not None
        assert validate_input("commission_percent", -1) is not None
        assert validate_input("commission_percent", 40) is None

    def test_percentage_bounds(self):
        assert validate_input("delivery_mix", 101) is not None
        assert validate_input("migration_percent", -5) is not None
        assert validate_input("migration_percent", 0) is None

    def test_unset_is_valid(self):
        assert validate_input("total_gpv", None) is None

    def test_unknown_field_raises(self):
        with pytest.raises(KeyError):
            validate_input("timeframe", 1)

    def test_validate_inputs_collects_errors(self):
        inputs = CalculatorInputs(
            total_gpv=500, commission_percent=50, delivery_mix=85, migration_percent=40
        )
        errors = validate_inputs(inputs)
        assert set(errors) == {"total_gpv", "commission_percent"}


class TestBuildInputs:
    def test_from_form_strings(self):
        inputs = build_inputs("20,000", "30", "85", "40%", "monthly")
        assert inputs == CalculatorInputs(20_000, 30.0, 85.0, 40.0, MONTHLY)

    def test_blank_gpv_is_incomplete(self):
        assert not build_inputs("", "30", "85", "40").is_complete

    def test_default_inputs(self):
        assert DEFAULT_INPUTS.total_gpv is None
        assert DEFAULT_INPUTS.commission_percent == 30
        assert DEFAULT_INPUTS.timeframe == MONTHLY
