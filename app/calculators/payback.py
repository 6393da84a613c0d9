"""
Investment payback calculator.

Years for annual savings to repay an investment, and how much of that
repayment survives the market's inflation.
"""

import logging
from typing import ClassVar, Dict, Literal

from pydantic import BaseModel

from app.calculations.cashflow import calculate_payback_analysis
from app.calculations.scoring import QualityMetrics, get_executive_decision, score_metrics
from app.calculators.base import (
    POSITIVE_VALUES_MESSAGE,
    CalculationResult,
    CalculatorInput,
    InvalidInputError,
    NumericInput,
    format_currency,
)
from app.data.markets import BenchmarkProfile, get_benchmark_profile

logger = logging.getLogger(__name__)

# Annual ROI treated as par for a payback investment
ROI_BENCHMARK = 25


class PaybackInput(CalculatorInput):
    """Payback inputs."""

    investment_cost: NumericInput
    annual_savings: NumericInput


class Recommendation(BaseModel):
    """Payback speed band."""

    status: str  # excellent | average | poor
    text: str
    tooltip: str


class PaybackResult(CalculationResult):
    """Payback outputs."""

    display_name: ClassVar[str] = "Payback"

    calculator_type: Literal["payback"] = "payback"
    inputs: PaybackInput
    payback_years: float
    roi: float
    real_cumulative_savings: float
    nominal_total: float
    inflation_loss: float
    purchasing_power_retained: float
    year3_profit: float
    year5_profit: float
    recommendation: Recommendation

    def metrics(self) -> Dict[str, float]:
        return {
            "payback_years": self.payback_years,
            "roi": self.roi,
            "year3_profit": self.year3_profit,
            "year5_profit": self.year5_profit,
            "real_cumulative_savings": self.real_cumulative_savings,
            "purchasing_power_retained": self.purchasing_power_retained,
            "quality_score": self.quality_score,
        }


def validate_payback(inputs: PaybackInput) -> None:
    if inputs.investment_cost <= 0 or inputs.annual_savings <= 0:
        raise InvalidInputError(POSITIVE_VALUES_MESSAGE)


def payback_quality_metrics(roi: float, payback_years: float) -> QualityMetrics:
    if payback_years <= 3:
        risk = 0.9
    elif payback_years <= 5:
        risk = 0.5
    else:
        risk = 0.2

    if payback_years <= 2:
        time = 0.9
    elif payback_years <= 4:
        time = 0.6
    else:
        time = 0.2

    return QualityMetrics(
        performance_vs_benchmark=roi / ROI_BENCHMARK,
        risk_adjusted=risk,
        time_efficiency=time,
    )


def payback_recommendation(payback_years: float) -> Recommendation:
    if payback_years <= 2:
        return Recommendation(
            status="excellent",
            text="Quick payback - Strong investment",
            tooltip="Rapid return on capital - low risk",
        )
    if payback_years <= 4:
        return Recommendation(
            status="average",
            text="Moderate payback - Consider carefully",
            tooltip="Average payback period - standard risk",
        )
    return Recommendation(
        status="poor",
        text="Long payback - High risk",
        tooltip="Extended recovery period - higher risk",
    )


def _payback_analysis(
    inputs: PaybackInput,
    payback_years: float,
    purchasing_power_retained: float,
    benchmark: BenchmarkProfile,
) -> str:
    cost = format_currency(inputs.investment_cost, benchmark.currency)
    savings = format_currency(inputs.annual_savings, benchmark.currency)
    return (
        f"Investment of {cost} with {savings} annual returns. Payback in "
        f"{payback_years:.1f} years. After inflation ({benchmark.avg_inflation:g}%), "
        f"real purchasing power retained: {purchasing_power_retained:.0f}%."
    )


def calculate_payback_result(inputs: PaybackInput) -> PaybackResult:
    """
    Run the payback calculator.

    Raises:
        InvalidInputError: If cost or savings are not positive
    """
    validate_payback(inputs)

    benchmark = get_benchmark_profile(inputs.country, inputs.industry)
    payback = calculate_payback_analysis(
        inputs.investment_cost, inputs.annual_savings, benchmark.avg_inflation
    )
    quality_score = score_metrics(
        payback_quality_metrics(payback.roi, payback.payback_years)
    )

    logger.debug(
        f"Payback {benchmark.market_code}/{benchmark.industry_code}: "
        f"years={payback.payback_years:.2f} score={quality_score}"
    )

    return PaybackResult(
        inputs=inputs,
        payback_years=payback.payback_years,
        roi=payback.roi,
        real_cumulative_savings=payback.real_cumulative_savings,
        nominal_total=payback.nominal_total,
        inflation_loss=payback.inflation_loss,
        purchasing_power_retained=payback.purchasing_power_retained,
        year3_profit=inputs.annual_savings * 3 - inputs.investment_cost,
        year5_profit=inputs.annual_savings * 5 - inputs.investment_cost,
        recommendation=payback_recommendation(payback.payback_years),
        quality_score=quality_score,
        decision=get_executive_decision(quality_score, "payback"),
        benchmark=benchmark,
        analysis=_payback_analysis(
            inputs, payback.payback_years, payback.purchasing_power_retained, benchmark
        ),
    )
