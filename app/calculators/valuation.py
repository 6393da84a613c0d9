"""
Valuation calculator.

Values a company at the industry's EV/EBITDA multiple, with a 25th-75th
percentile range around it.
"""

import logging
from typing import ClassVar, Dict, Literal

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

LOW_MULTIPLE_FACTOR = 0.75  # 25th percentile
HIGH_MULTIPLE_FACTOR = 1.35  # 75th percentile


class ValuationInput(CalculatorInput):
    """Valuation inputs (annual figures)."""

    revenue: NumericInput
    ebitda: NumericInput


class ValuationResult(CalculationResult):
    """Valuation outputs."""

    display_name: ClassVar[str] = "Valuation"

    calculator_type: Literal["valuation"] = "valuation"
    inputs: ValuationInput
    margin: float
    valuation_low: float
    valuation_mid: float
    valuation_high: float
    ev_to_revenue: float

    def metrics(self) -> Dict[str, float]:
        return {
            "valuation_low": self.valuation_low,
            "valuation_mid": self.valuation_mid,
            "valuation_high": self.valuation_high,
            "ebitda_margin": self.margin,
            "ev_to_revenue": self.ev_to_revenue,
            "quality_score": self.quality_score,
        }


def validate_valuation(inputs: ValuationInput) -> None:
    if inputs.revenue <= 0 or inputs.ebitda <= 0:
        raise InvalidInputError(POSITIVE_VALUES_MESSAGE)
    if inputs.ebitda > inputs.revenue:
        raise InvalidInputError("EBITDA cannot exceed revenue")


def valuation_quality_metrics(
    margin: float, ev_to_revenue: float, benchmark: BenchmarkProfile
) -> QualityMetrics:
    if ev_to_revenue >= 2:
        risk = 0.8
    elif ev_to_revenue >= 1:
        risk = 0.5
    else:
        risk = 0.3

    return QualityMetrics(
        performance_vs_benchmark=margin / benchmark.avg_margin,
        risk_adjusted=risk,
        time_efficiency=0.7 if margin >= benchmark.avg_margin else 0.4,
    )


def _valuation_analysis(margin: float, valuation_mid: float, benchmark: BenchmarkProfile) -> str:
    where = f"{benchmark.market_name} {benchmark.industry_name}"
    value = format_currency(valuation_mid, benchmark.currency)

    if margin >= benchmark.avg_margin + 5:
        return (
            f"Your {margin:.1f}% profit margin is well above the {where} average "
            f"of {benchmark.avg_margin:g}%. Buyers will pay a premium, around "
            f"{value} or more."
        )
    if margin >= benchmark.avg_margin:
        position = "Slightly better than average" if margin > benchmark.avg_margin else "Right at average"
        return (
            f"A {margin:.1f}% profit margin is about average for {where} "
            f"({benchmark.avg_margin:g}%), worth around {value}. {position}; "
            f"better margins mean a better price when you sell."
        )
    return (
        f"Your {margin:.1f}% profit margin trails the {where} average of "
        f"{benchmark.avg_margin:g}%. The business is worth about {value}, but "
        f"buyers will want a discount. Fix margins before selling."
    )


def calculate_valuation_result(inputs: ValuationInput) -> ValuationResult:
    """
    Run the valuation calculator.

    Raises:
        InvalidInputError: If revenue or EBITDA are not positive, or EBITDA > revenue
    """
    validate_valuation(inputs)

    benchmark = get_benchmark_profile(inputs.country, inputs.industry)
    margin = inputs.ebitda / inputs.revenue * 100

    valuation_low = inputs.ebitda * benchmark.avg_multiple * LOW_MULTIPLE_FACTOR
    valuation_mid = inputs.ebitda * benchmark.avg_multiple
    valuation_high = inputs.ebitda * benchmark.avg_multiple * HIGH_MULTIPLE_FACTOR
    ev_to_revenue = valuation_mid / inputs.revenue

    quality_score = score_metrics(
        valuation_quality_metrics(margin, ev_to_revenue, benchmark)
    )

    logger.debug(
        f"Valuation {benchmark.market_code}/{benchmark.industry_code}: "
        f"mid={valuation_mid:.0f} score={quality_score}"
    )

    return ValuationResult(
        inputs=inputs,
        margin=margin,
        valuation_low=valuation_low,
        valuation_mid=valuation_mid,
        valuation_high=valuation_high,
        ev_to_revenue=ev_to_revenue,
        quality_score=quality_score,
        decision=get_executive_decision(quality_score, "valuation"),
        benchmark=benchmark,
        analysis=_valuation_analysis(margin, valuation_mid, benchmark),
    )
