"""
Tests for calculator orchestration: validation, benchmarks, scoring and
decision labels.
"""

from datetime import datetime

import pytest

from app.calculators import CALCULATORS, CalculationResult, InvalidInputError, get_calculator
from app.calculators.base import format_currency, parse_numeric_input, parse_whole_number
from app.calculators.breakeven import BreakevenInput, calculate_breakeven_result
from app.calculators.deal_roi import DealROIInput, calculate_deal_roi
from app.calculators.future_value import FutureValueInput, calculate_future_value_result
from app.calculators.payback import PaybackInput, calculate_payback_result
from app.calculators.valuation import ValuationInput, calculate_valuation_result
from app.services.memo import build_export_record


class TestInputParsing:
    """Test form value parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("$1,250,000", 1_250_000.0),
            ("12.5%", 12.5),
            ("-3", -3.0),
            (42, 42.0),
            ("abc", 0.0),
            ("", 0.0),
            (None, 0.0),
        ],
    )
    def test_parse_numeric_input(self, raw, expected):
        assert parse_numeric_input(raw) == expected

    def test_parse_whole_number(self):
        assert parse_whole_number("5.7") == 5
        assert parse_whole_number(" 10 years") == 10
        assert parse_whole_number("n/a") == 0

    def test_models_accept_formatted_strings(self):
        inputs = DealROIInput(
            purchase_price="$5,000,000", ebitda="800,000", exit_years="5", exit_multiple="7x"
        )
        assert inputs.purchase_price == 5_000_000
        assert inputs.exit_years == 5
        assert inputs.exit_multiple == 7

    def test_defaults_market_selection(self):
        inputs = ValuationInput(revenue=1, ebitda=1)
        assert inputs.country == "US"
        assert inputs.industry == "real-estate"

    def test_format_currency(self):
        assert format_currency(1_234_567.8, "USD") == "$1,234,568"
        assert format_currency(-500, "GBP") == "-£500"
        assert format_currency(1000, "PKR") == "Rs 1,000"


class TestDealROI:
    """Test the Deal ROI calculator."""

    def test_below_hurdle_deal(self):
        result = calculate_deal_roi(
            DealROIInput(purchase_price=5_000_000, ebitda=800_000, exit_years=5, exit_multiple=7)
        )
        assert result.calculator_type == "deal_roi"
        assert result.exit_value == pytest.approx(5_600_000)
        assert result.moic == pytest.approx(1.92)
        assert result.cash_return == pytest.approx(92.0)
        assert result.payback_period == pytest.approx(6.25)
        assert 15 < result.irr < 20
        assert result.cash_flows[0] == -5_000_000
        assert len(result.cash_flows) == 6

        assert result.quality_score == 2
        assert result.decision.label == "PASS"
        assert result.decision.type == "pass"
        assert result.analysis.startswith("This deal is weak.")

    def test_strong_deal(self):
        result = calculate_deal_roi(
            DealROIInput(purchase_price=2_000_000, ebitda=800_000, exit_years=3, exit_multiple=8)
        )
        assert result.irr > 40
        assert result.decision.type == "go"
        assert result.analysis.startswith("This is a great deal.")

    @pytest.mark.parametrize("field", ["purchase_price", "ebitda", "exit_years", "exit_multiple"])
    def test_rejects_non_positive(self, field):
        values = dict(purchase_price=1_000_000, ebitda=100_000, exit_years=5, exit_multiple=6)
        values[field] = 0
        with pytest.raises(InvalidInputError, match="Please enter valid positive values"):
            calculate_deal_roi(DealROIInput(**values))


class TestFutureValue:
    """Test the future value calculator."""

    def test_growth_on_pace(self):
        result = calculate_future_value_result(
            FutureValueInput(current_value=500_000, growth_rate=5, years=10)
        )
        assert result.future_value == pytest.approx(814_447.31, abs=0.01)
        assert result.total_growth == pytest.approx(314_447.31, abs=0.01)
        assert result.percent_growth == pytest.approx(62.889, abs=0.001)
        assert result.quality_score == 6
        assert result.decision.label == "ON PACE"

    def test_rejects_total_loss_rate(self):
        with pytest.raises(InvalidInputError, match="-100%"):
            calculate_future_value_result(
                FutureValueInput(current_value=1000, growth_rate=-100, years=5)
            )

    def test_rejects_zero_years(self):
        with pytest.raises(InvalidInputError):
            calculate_future_value_result(
                FutureValueInput(current_value=1000, growth_rate=5, years=0)
            )

    def test_rejects_overflowing_projection(self):
        with pytest.raises(InvalidInputError, match="too large"):
            calculate_future_value_result(
                FutureValueInput(current_value=1000, growth_rate=200, years=1000)
            )


class TestBreakeven:
    """Test the breakeven calculator."""

    def test_healthy_margin(self):
        result = calculate_breakeven_result(
            BreakevenInput(fixed_costs=100_000, price_per_unit=50, cost_per_unit=20)
        )
        assert result.breakeven_units == 3334
        assert result.breakeven_revenue == pytest.approx(166_700)
        assert result.profit_margin == pytest.approx(60.0)
        assert result.quality_score == 9
        assert result.decision.label == "STRONG"
        assert result.decision.type == "go"

    def test_thin_margin_label(self):
        result = calculate_breakeven_result(
            BreakevenInput(fixed_costs=10_000, price_per_unit=100, cost_per_unit=90)
        )
        assert result.decision.label == "WEAK"

    def test_rejects_price_at_or_below_cost(self):
        with pytest.raises(InvalidInputError, match="greater than cost"):
            calculate_breakeven_result(
                BreakevenInput(fixed_costs=10_000, price_per_unit=20, cost_per_unit=20)
            )


class TestValuation:
    """Test the valuation calculator."""

    def test_valuation_range(self):
        result = calculate_valuation_result(
            ValuationInput(revenue=1_000_000, ebitda=200_000, country="US", industry="tech")
        )
        assert result.margin == pytest.approx(20.0)
        assert result.valuation_low == pytest.approx(3_000_000)
        assert result.valuation_mid == pytest.approx(4_000_000)
        assert result.valuation_high == pytest.approx(5_400_000)
        assert result.ev_to_revenue == pytest.approx(4.0)
        assert result.quality_score == 4
        assert result.decision.label == "FAIR VALUE"

    def test_rejects_ebitda_above_revenue(self):
        with pytest.raises(InvalidInputError, match="cannot exceed revenue"):
            calculate_valuation_result(ValuationInput(revenue=100, ebitda=200))


class TestPayback:
    """Test the payback calculator."""

    def test_quick_payback(self):
        result = calculate_payback_result(PaybackInput(investment_cost=10_000, annual_savings=4_000))
        assert result.payback_years == pytest.approx(2.5)
        assert result.roi == pytest.approx(40.0)
        assert result.year3_profit == pytest.approx(2_000)
        assert result.year5_profit == pytest.approx(10_000)
        assert result.recommendation.status == "average"
        assert result.quality_score == 9
        assert result.decision.label == "QUICK WIN"

    def test_market_inflation_applied(self):
        """Higher-inflation markets retain less purchasing power."""
        us = calculate_payback_result(
            PaybackInput(investment_cost=50_000, annual_savings=10_000, country="US")
        )
        pk = calculate_payback_result(
            PaybackInput(investment_cost=50_000, annual_savings=10_000, country="PK")
        )
        assert pk.purchasing_power_retained < us.purchasing_power_retained < 100

    def test_long_payback_in_high_inflation_market(self):
        result = calculate_payback_result(
            PaybackInput(investment_cost=10_000, annual_savings=1, country="PK")
        )
        assert result.payback_years == pytest.approx(10_000)
        assert result.recommendation.status == "poor"
        assert result.decision.type == "pass"


class TestRegistry:
    """Test the calculator registry."""

    def test_all_calculators_registered(self):
        assert set(CALCULATORS) == {"future_value", "deal_roi", "breakeven", "valuation", "payback"}

    def test_hyphenated_lookup(self):
        assert get_calculator("deal-roi").calculator_type == "deal_roi"
        assert get_calculator("future-value").display_name == "Future Value"

    def test_unknown_calculator(self):
        with pytest.raises(KeyError):
            get_calculator("mortgage")

    def test_scenario_support(self):
        assert get_calculator("deal_roi").supports_scenarios
        assert get_calculator("future_value").supports_scenarios
        assert not get_calculator("payback").supports_scenarios

    def test_result_base_is_abstract(self):
        with pytest.raises(TypeError):
            CalculationResult()


class TestExportRecord:
    """Test memo export records."""

    def test_record_fields(self):
        result = calculate_valuation_result(
            ValuationInput(revenue=1_000_000, ebitda=200_000, country="UK", industry="finance")
        )
        record = build_export_record(
            result, ai_analysis="Detailed text", generated_at=datetime(2025, 1, 2, 3, 4, 5)
        )

        assert record["type"] == "Valuation"
        assert record["inputs"] == {"revenue": 1_000_000, "ebitda": 200_000}
        assert record["results"]["valuation_mid"] == pytest.approx(2_600_000)
        assert record["quality_score"] == result.quality_score
        assert record["decision"] == result.decision.label
        assert record["decision_type"] == result.decision.type
        assert record["ai_analysis"] == "Detailed text"
        assert record["industry"] == "Financial Services"
        assert record["country"] == "United Kingdom"
        assert record["scenario"] == "base"
        assert record["generated_at"] == "2025-01-02T03:04:05"

    def test_record_without_ai_analysis(self):
        result = calculate_payback_result(PaybackInput(investment_cost=1000, annual_savings=500))
        assert build_export_record(result)["ai_analysis"] is None
