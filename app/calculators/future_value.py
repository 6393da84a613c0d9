"""
Future value calculator.

Compounds a current value at an annual growth rate and benchmarks the rate
against the industry's growth tiers.
"""

import logging
import math
from typing import ClassVar, Dict, Literal

from app.calculations.growth import calculate_future_value
from app.calculations.scoring import QualityMetrics, get_executive_decision, score_metrics
from app.calculators.base import (
    POSITIVE_VALUES_MESSAGE,
    CalculationResult,
    CalculatorInput,
    InvalidInputError,
    NumericInput,
    YearsInput,
)
from app.data.markets import BenchmarkProfile, get_benchmark_profile

logger = logging.getLogger(__name__)


class FutureValueInput(CalculatorInput):
    """Future value inputs."""

    current_value: NumericInput
    growth_rate: NumericInput  # Annual %
    years: YearsInput


class FutureValueResult(CalculationResult):
    """Future value outputs."""

    display_name: ClassVar[str] = "Future Value"

    calculator_type: Literal["future_value"] = "future_value"
    inputs: FutureValueInput
    future_value: float
    total_growth: float
    percent_growth: float

    def metrics(self) -> Dict[str, float]:
        return {
            "future_value": self.future_value,
            "total_growth": self.total_growth,
            "percent_growth": self.percent_growth,
            "annual_growth": self.inputs.growth_rate,
            "quality_score": self.quality_score,
        }


def validate_future_value(inputs: FutureValueInput) -> None:
    if inputs.current_value <= 0 or inputs.years <= 0:
        raise InvalidInputError(POSITIVE_VALUES_MESSAGE)
    if inputs.growth_rate <= -100:
        raise InvalidInputError("Growth rate cannot be -100% or lower")


def growth_quality_metrics(
    growth_rate: float, years: int, benchmark: BenchmarkProfile
) -> QualityMetrics:
    """Growth against the industry average and top tier; shorter horizons score better."""
    if years <= 5:
        time = 0.8
    elif years <= 10:
        time = 0.5
    else:
        time = 0.3

    return QualityMetrics(
        performance_vs_benchmark=growth_rate / benchmark.avg_growth,
        risk_adjusted=min(1.0, growth_rate / (benchmark.excellent_growth * 1.2)),
        time_efficiency=time,
    )


def _growth_analysis(growth_rate: float, benchmark: BenchmarkProfile) -> str:
    where = f"{benchmark.market_name} {benchmark.industry_name}"
    vs_avg = growth_rate - benchmark.avg_growth

    if growth_rate >= benchmark.excellent_growth:
        return (
            f"Growing {growth_rate:.1f}% a year beats most companies in {where}, "
            f"where top players reach {benchmark.excellent_growth:g}%. That is "
            f"{vs_avg:.1f} points above average."
        )
    if growth_rate >= benchmark.good_growth:
        return (
            f"{growth_rate:.1f}% growth is above the {where} average of "
            f"{benchmark.avg_growth:g}%. The best companies grow "
            f"{benchmark.excellent_growth:g}%."
        )
    if growth_rate >= benchmark.avg_growth:
        return (
            f"{growth_rate:.1f}% growth is in line with the {where} average "
            f"({benchmark.avg_growth:g}%). Top companies grow "
            f"{benchmark.excellent_growth:g}%. {benchmark.context}"
        )
    return (
        f"{growth_rate:.1f}% a year is {abs(vs_avg):.1f} points below the "
        f"{where} average of {benchmark.avg_growth:g}%. {benchmark.context}"
    )


def calculate_future_value_result(inputs: FutureValueInput) -> FutureValueResult:
    """
    Run the future value calculator.

    Raises:
        InvalidInputError: If value or years are not positive, growth <= -100%,
            or the projection overflows
    """
    validate_future_value(inputs)

    future_value = calculate_future_value(inputs.current_value, inputs.growth_rate, inputs.years)
    if math.isinf(future_value):
        raise InvalidInputError("Projected value is too large to calculate")
    total_growth = future_value - inputs.current_value
    percent_growth = total_growth / inputs.current_value * 100

    benchmark = get_benchmark_profile(inputs.country, inputs.industry)
    quality_score = score_metrics(
        growth_quality_metrics(inputs.growth_rate, inputs.years, benchmark)
    )

    logger.debug(
        f"Future value {benchmark.market_code}/{benchmark.industry_code}: "
        f"fv={future_value:.2f} score={quality_score}"
    )

    return FutureValueResult(
        inputs=inputs,
        future_value=future_value,
        total_growth=total_growth,
        percent_growth=percent_growth,
        quality_score=quality_score,
        decision=get_executive_decision(quality_score, "growth"),
        benchmark=benchmark,
        analysis=_growth_analysis(inputs.growth_rate, benchmark),
    )
