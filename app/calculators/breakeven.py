"""
Breakeven calculator.

Units needed to cover fixed costs, with the margin compared to the
industry average.
"""

import logging
from typing import ClassVar, Dict, Literal

from app.calculations.breakeven import calculate_breakeven
from app.calculations.scoring import (
    Decision,
    QualityMetrics,
    get_executive_decision,
    score_metrics,
)
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


class BreakevenInput(CalculatorInput):
    """Breakeven inputs (monthly figures)."""

    fixed_costs: NumericInput
    price_per_unit: NumericInput
    cost_per_unit: NumericInput


class BreakevenResult(CalculationResult):
    """Breakeven outputs."""

    display_name: ClassVar[str] = "Breakeven"

    calculator_type: Literal["breakeven"] = "breakeven"
    inputs: BreakevenInput
    breakeven_units: float
    breakeven_revenue: float
    profit_margin: float
    contribution: float

    def metrics(self) -> Dict[str, float]:
        return {
            "breakeven_units": self.breakeven_units,
            "breakeven_revenue": self.breakeven_revenue,
            "profit_margin": self.profit_margin,
            "contribution": self.contribution,
            "quality_score": self.quality_score,
        }


def validate_breakeven(inputs: BreakevenInput) -> None:
    if inputs.fixed_costs <= 0 or inputs.price_per_unit <= 0 or inputs.cost_per_unit < 0:
        raise InvalidInputError(POSITIVE_VALUES_MESSAGE)
    if inputs.price_per_unit <= inputs.cost_per_unit:
        raise InvalidInputError("Price per unit must be greater than cost per unit")


def breakeven_quality_metrics(
    profit_margin: float, breakeven_units: float, benchmark: BenchmarkProfile
) -> QualityMetrics:
    """Margin against the industry average; fewer units to breakeven scores better."""
    if profit_margin >= 30:
        risk = 0.8
    elif profit_margin >= 15:
        risk = 0.5
    else:
        risk = 0.2

    if breakeven_units <= 1000:
        time = 0.8
    elif breakeven_units <= 5000:
        time = 0.5
    else:
        time = 0.2

    return QualityMetrics(
        performance_vs_benchmark=profit_margin / benchmark.avg_margin,
        risk_adjusted=risk,
        time_efficiency=time,
    )


def breakeven_decision(quality_score: int, profit_margin: float) -> Decision:
    """Verdict type follows the score; the label follows the unit margin."""
    verdict = get_executive_decision(quality_score)

    if profit_margin >= 40:
        label = "STRONG"
    elif profit_margin >= 20:
        label = "VIABLE"
    else:
        label = "WEAK"

    return Decision(label=label, type=verdict.type, description=verdict.description)


def _breakeven_analysis(
    fixed_costs: float,
    breakeven_units: float,
    profit_margin: float,
    contribution: float,
    benchmark: BenchmarkProfile,
) -> str:
    currency = benchmark.currency
    per_unit = format_currency(contribution, currency)
    overhead = format_currency(fixed_costs, currency)
    units = f"{breakeven_units:,.0f}"
    industry = f"{benchmark.industry_name} in {benchmark.market_name}"

    if profit_margin >= 50:
        return (
            f"Your {profit_margin:.0f}% margin is healthy. Each unit contributes "
            f"{per_unit} toward {overhead} of monthly overhead, so you break even "
            f"at {units} units. {industry} averages {benchmark.avg_margin:g}%, "
            f"and you are well above that."
        )
    if profit_margin >= 30:
        standing = (
            "you are above par"
            if profit_margin >= benchmark.avg_margin
            else "you are slightly below the industry average"
        )
        return (
            f"At a {profit_margin:.0f}% margin you need {units} sales a month to "
            f"cover {overhead} of fixed costs, adding {per_unit} per unit. "
            f"{industry} averages {benchmark.avg_margin:g}%, so {standing}."
        )
    if profit_margin >= 15:
        return (
            f"A {profit_margin:.0f}% margin makes for tight unit economics. "
            f"Breaking even at {units} units needs steady volume, and {per_unit} "
            f"per unit leaves little room for discounts. {industry} averages "
            f"{benchmark.avg_margin:g}%."
        )
    return (
        f"At {profit_margin:.0f}% the margin is razor thin: {units} units just to "
        f"cover {overhead}, with only {per_unit} per unit. {industry} typically "
        f"runs {benchmark.avg_margin:g}%. This model needs restructuring."
    )


def calculate_breakeven_result(inputs: BreakevenInput) -> BreakevenResult:
    """
    Run the breakeven calculator.

    Raises:
        InvalidInputError: If costs or price are invalid, or price <= cost
    """
    validate_breakeven(inputs)

    breakeven = calculate_breakeven(
        inputs.fixed_costs, inputs.price_per_unit, inputs.cost_per_unit
    )
    benchmark = get_benchmark_profile(inputs.country, inputs.industry)
    quality_score = score_metrics(
        breakeven_quality_metrics(
            breakeven.profit_margin, breakeven.breakeven_units, benchmark
        )
    )

    logger.debug(
        f"Breakeven {benchmark.market_code}/{benchmark.industry_code}: "
        f"units={breakeven.breakeven_units} score={quality_score}"
    )

    return BreakevenResult(
        inputs=inputs,
        breakeven_units=breakeven.breakeven_units,
        breakeven_revenue=breakeven.breakeven_revenue,
        profit_margin=breakeven.profit_margin,
        contribution=breakeven.contribution,
        quality_score=quality_score,
        decision=breakeven_decision(quality_score, breakeven.profit_margin),
        benchmark=benchmark,
        analysis=_breakeven_analysis(
            inputs.fixed_costs,
            breakeven.breakeven_units,
            breakeven.profit_margin,
            breakeven.contribution,
            benchmark,
        ),
    )
