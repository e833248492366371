"""Unit tests for the savings calculation engine."""

import math

import pytest

from deliverysavings.calculations import (
    ANNUAL,
    MONTHLY,
    MONTHS,
    CalculationResults,
    CalculatorInputs,
    calculate_savings,
    format_currency,
    format_percent,
    generate_monthly_projections,
)


class TestWorkedExample:
    def test_aggregates(self, monthly_inputs):
        result = calculate_savings(monthly_inputs)
        assert result.third_party_commissions == pytest.approx(2817.142857, rel=1e-9)
        assert result.innowi_fees == pytest.approx(449.771429, rel=1e-8)
        assert result.savings_amount == pytest.approx(2367.371429, rel=1e-8)
        assert result.savings_percent == pytest.approx(29.592143, rel=1e-7)

    def test_savings_is_difference_of_fees(self, monthly_inputs):
        result = calculate_savings(monthly_inputs)
        assert result.savings_amount == result.third_party_commissions - result.innowi_fees

    def test_commission_uses_full_delivery_volume_form(self, monthly_inputs):
        # migration_rate * (delivery_gpv * commission + orders * $4)
        delivery_gpv = 20_000 * (85 / 100)
        orders = delivery_gpv / 35
        expected = (40 / 100) * (delivery_gpv * (30 / 100) + orders * 4.00)
        assert calculate_savings(monthly_inputs).third_party_commissions == expected

    def test_monthly_projection_repeats_aggregate(self, monthly_inputs):
        result = calculate_savings(monthly_inputs)
        for projection in result.monthly_projections:
            assert projection.savings == result.savings_amount
            assert projection.third_party_fees == result.third_party_commissions
            assert projection.innowi_fees == result.innowi_fees

    def test_annual_projection_divides_by_twelve(self, annual_inputs):
        result = calculate_savings(annual_inputs)
        assert result.savings_amount == pytest.approx(142042.285714, rel=1e-9)
        for projection in result.monthly_projections:
            assert projection.savings == pytest.approx(result.savings_amount / 12)
            assert projection.third_party_fees == pytest.approx(
                result.third_party_commissions / 12
            )
            assert projection.innowi_fees == pytest.approx(result.innowi_fees / 12)

    def test_percent_is_independent_of_timeframe(self, monthly_inputs, annual_inputs):
        assert calculate_savings(annual_inputs).savings_percent == pytest.approx(
            calculate_savings(monthly_inputs).savings_percent
        )


class TestCompletenessGate:
    @pytest.mark.parametrize(
        "field",
        ["total_gpv", "commission_percent", "delivery_mix", "migration_percent"],
    )
    def test_missing_field_gives_zero_result(self, monthly_inputs, field):
        inputs = monthly_inputs.replace(**{field: None})
        result = calculate_savings(inputs)
        assert result.third_party_commissions == 0
        assert result.innowi_fees == 0
        assert result.savings_amount == 0
        assert result.savings_percent == 0
        assert len(result.monthly_projections) == 12
        for projection in result.monthly_projections:
            assert (projection.savings, projection.third_party_fees, projection.innowi_fees) == (0, 0, 0)

    def test_default_inputs_are_incomplete(self):
        inputs = CalculatorInputs()
        assert not inputs.is_complete
        assert calculate_savings(inputs).savings_percent == 0

    def test_zero_values_count_as_present(self, monthly_inputs):
        assert monthly_inputs.replace(commission_percent=0).is_complete


class TestDegenerateResults:
    def test_zero_gpv_gives_nan_percent(self, monthly_inputs):
        result = calculate_savings(monthly_inputs.replace(total_gpv=0))
        assert math.isnan(result.savings_percent)
        assert not result.savings_percent_defined
        assert result.third_party_commissions == 0
        assert result.innowi_fees == 0
        assert result.savings_amount == 0

    def test_zero_migration_gives_nan_percent(self, monthly_inputs):
        result = calculate_savings(monthly_inputs.replace(migration_percent=0))
        assert math.isnan(result.savings_percent)
        assert result.savings_amount == 0

    def test_negative_savings_not_clamped(self, monthly_inputs):
        # The engine does no range checks; a negative commission (a rebate)
        # makes the third-party side cheaper than Innowi.
        result = calculate_savings(monthly_inputs.replace(commission_percent=-20))
        assert result.third_party_commissions == pytest.approx(-582.857143, rel=1e-8)
        assert result.savings_amount == pytest.approx(-1032.628571, rel=1e-8)
        assert result.savings_percent == pytest.approx(-12.907857, rel=1e-7)
        assert all(p.savings < 0 for p in result.monthly_projections)

    def test_defined_percent_flag(self, monthly_inputs):
        assert calculate_savings(monthly_inputs).savings_percent_defined


class TestPurity:
    def test_idempotent(self, monthly_inputs):
        assert calculate_savings(monthly_inputs) == calculate_savings(monthly_inputs)

    def test_inputs_untouched(self, monthly_inputs):
        before = monthly_inputs.to_dict()
        calculate_savings(monthly_inputs)
        assert monthly_inputs.to_dict() == before


class TestProjections:
    @pytest.mark.parametrize("timeframe", [MONTHLY, ANNUAL])
    def test_twelve_months_in_order(self, timeframe):
        projections = generate_monthly_projections(120, 24, 96, timeframe)
        assert [p.month for p in projections] == list(MONTHS)
        assert MONTHS[0] == "Jan" and MONTHS[-1] == "Dec"

    def test_monthly_entries_equal_aggregate(self):
        projections = generate_monthly_projections(120, 24, 96, MONTHLY)
        assert {(p.third_party_fees, p.innowi_fees, p.savings) for p in projections} == {
            (120, 24, 96)
        }

    def test_annual_entries_equal_aggregate_over_twelve(self):
        projections = generate_monthly_projections(120, 24, 96, ANNUAL)
        assert {(p.third_party_fees, p.innowi_fees, p.savings) for p in projections} == {
            (10, 2, 8)
        }


class TestSerialization:
    def test_inputs_round_trip_camel_case(self, monthly_inputs):
        data = monthly_inputs.to_dict()
        assert data["totalGPV"] == 20_000
        assert CalculatorInputs.from_dict(data) == monthly_inputs

    def test_unknown_timeframe_falls_back_to_monthly(self):
        assert CalculatorInputs.from_dict({"timeframe": "weekly"}).timeframe == MONTHLY

    def test_results_to_dict(self, monthly_inputs):
        data = calculate_savings(monthly_inputs).to_dict()
        assert set(data) == {
            "thirdPartyCommissions",
            "innowiFees",
            "savingsAmount",
            "savingsPercent",
            "monthlyProjections",
        }
        assert data["monthlyProjections"][0]["month"] == "Jan"
        assert "thirdPartyFees" in data["monthlyProjections"][0]

    def test_undefined_percent_serializes_as_none(self, monthly_inputs):
        data = calculate_savings(monthly_inputs.replace(total_gpv=0)).to_dict()
        assert data["savingsPercent"] is None
        assert data["savingsAmount"] == 0

    def test_from_dict_drops_non_numeric_values(self):
        inputs = CalculatorInputs.from_dict(
            {"totalGPV": "20000", "commissionPercent": 30, "deliveryMix": True, "migrationPercent": None}
        )
        assert inputs.total_gpv is None
        assert inputs.commission_percent == 30
        assert inputs.delivery_mix is None
        assert inputs.migration_percent is None
        assert not inputs.is_complete

    def test_results_require_projections(self):
        with pytest.raises(TypeError):
            CalculationResults(
                third_party_commissions=0,
                innowi_fees=0,
                savings_amount=0,
                savings_percent=0,
            )


class TestFormatCurrency:
    def test_reference_value(self):
        assert format_currency(33600) == "$33,600"

    def test_rounds_to_whole_dollars(self):
        assert format_currency(2367.3714) == "$2,367"
        assert format_currency(1_234_567.89) == "$1,234,568"

    def test_half_rounds_away_from_zero(self):
        assert format_currency(0.5) == "$1"
        assert format_currency(2.5) == "$3"
        assert format_currency(-1234.5) == "-$1,235"

    def test_zero(self):
        assert format_currency(0) == "$0"

    def test_non_finite(self):
        assert format_currency(math.nan) == "$NaN"
        assert format_currency(math.inf) == "$∞"
        assert format_currency(-math.inf) == "-$∞"


class TestFormatPercent:
    def test_reference_value(self):
        assert format_percent(21.0) == "21.0%"

    def test_one_decimal(self):
        assert format_percent(29.592142857) == "29.6%"
        assert format_percent(0) == "0.0%"
        assert format_percent(-0.0) == "0.0%"

    def test_half_rounds_away_from_zero(self):
        assert format_percent(5.25) == "5.3%"
        assert format_percent(-5.25) == "-5.3%"

    def test_non_finite(self):
        assert format_percent(math.nan) == "NaN%"
        assert format_percent(math.inf) == "Infinity%"
