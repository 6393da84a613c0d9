"""
Deal ROI calculator.

Returns on buying a business at a price, collecting EBITDA each year and
selling at an EBITDA multiple. IRR and MOIC both include the interim cash
flows.
"""

import logging
from typing import ClassVar, Dict, List, Literal

from app.calculations.cashflow import build_deal_cash_flows
from app.calculations.irr import calculate_irr, calculate_moic
from app.calculations.scoring import QualityMetrics, get_executive_decision, score_metrics
from app.calculators.base import (
    POSITIVE_VALUES_MESSAGE,
    CalculationResult,
    CalculatorInput,
    InvalidInputError,
    NumericInput,
    YearsInput,
    format_currency,
)
from app.data.markets import BenchmarkProfile, get_benchmark_profile

logger = logging.getLogger(__name__)


class DealROIInput(CalculatorInput):
    """Deal ROI inputs."""

    purchase_price: NumericInput
    ebitda: NumericInput
    exit_years: YearsInput
    exit_multiple: NumericInput


class DealROIResult(CalculationResult):
    """Deal ROI outputs."""

    display_name: ClassVar[str] = "Deal ROI"

    calculator_type: Literal["deal_roi"] = "deal_roi"
    inputs: DealROIInput
    irr: float
    moic: float
    exit_value: float
    cash_return: float
    payback_period: float
    cash_flows: List[float]

    def metrics(self) -> Dict[str, float]:
        return {
            "irr": self.irr,
            "moic": self.moic,
            "exit_value": self.exit_value,
            "cash_return": self.cash_return,
            "payback_period": self.payback_period,
            "quality_score": self.quality_score,
        }


def validate_deal_roi(inputs: DealROIInput) -> None:
    if (
        inputs.purchase_price <= 0
        or inputs.ebitda <= 0
        or inputs.exit_years <= 0
        or inputs.exit_multiple <= 0
    ):
        raise InvalidInputError(POSITIVE_VALUES_MESSAGE)


def deal_quality_metrics(
    irr: float, moic: float, payback_period: float, benchmark: BenchmarkProfile
) -> QualityMetrics:
    """IRR against the PE hurdle, MOIC against target, operating payback."""
    if moic >= benchmark.pe_moic:
        risk = 0.8
    elif moic >= benchmark.pe_moic * 0.8:
        risk = 0.5
    else:
        risk = 0.2

    if payback_period <= 3:
        time = 0.9
    elif payback_period <= 5:
        time = 0.5
    else:
        time = 0.2

    return QualityMetrics(
        performance_vs_benchmark=irr / benchmark.pe_irr,
        risk_adjusted=risk,
        time_efficiency=time,
    )


def _deal_analysis(
    irr: float,
    moic: float,
    payback_period: float,
    ebitda: float,
    benchmark: BenchmarkProfile,
) -> str:
    hurdle = benchmark.pe_irr
    cash = format_currency(ebitda, benchmark.currency)

    if irr >= hurdle + 5 and moic >= benchmark.pe_moic + 0.5:
        return (
            f"This is a great deal. You earn {irr:.1f}% a year on your money, "
            f"counting {cash}/yr of cash flow, and walk away with {moic:.2f}x "
            f"what you put in. Buyers in {benchmark.market_name} look for "
            f"{hurdle:g}%, so you clear the bar. {benchmark.context}"
        )
    if irr >= hurdle:
        return (
            f"This deal is solid. A {irr:.1f}% IRR meets the {hurdle:g}% target "
            f"and returns {moic:.1f}x your money including annual cash flows. "
            f"Operations alone pay back the price in about {payback_period:.1f} "
            f"years. {benchmark.context}"
        )
    if irr >= hurdle - 5:
        return (
            f"This deal is weak. It earns {irr:.1f}% a year against a "
            f"{hurdle:g}% target, for a {moic:.1f}x total return and a "
            f"{payback_period:.1f} year payback. {benchmark.context}"
        )
    return (
        f"Skip this deal. {irr:.1f}% a year is well short of the {hurdle:g}% "
        f"minimum, and {moic:.1f}x does not justify the risk. {benchmark.context}"
    )


def calculate_deal_roi(inputs: DealROIInput) -> DealROIResult:
    """
    Run the Deal ROI calculator.

    Raises:
        InvalidInputError: If any input is not positive
    """
    validate_deal_roi(inputs)

    exit_value = inputs.ebitda * inputs.exit_multiple
    cash_flows = build_deal_cash_flows(
        inputs.purchase_price, inputs.ebitda, inputs.exit_years, inputs.exit_multiple
    )
    irr = calculate_irr(cash_flows)
    moic = calculate_moic(inputs.purchase_price, inputs.ebitda, inputs.exit_years, exit_value)
    cash_return = (
        (exit_value + inputs.ebitda * inputs.exit_years - inputs.purchase_price)
        / inputs.purchase_price
        * 100
    )
    payback_period = inputs.purchase_price / inputs.ebitda

    benchmark = get_benchmark_profile(inputs.country, inputs.industry)
    quality_score = score_metrics(
        deal_quality_metrics(irr, moic, payback_period, benchmark)
    )

    logger.debug(
        f"Deal ROI {benchmark.market_code}/{benchmark.industry_code}: "
        f"irr={irr:.2f}% moic={moic:.2f}x score={quality_score}"
    )

    return DealROIResult(
        inputs=inputs,
        irr=irr,
        moic=moic,
        exit_value=exit_value,
        cash_return=cash_return,
        payback_period=payback_period,
        cash_flows=cash_flows,
        quality_score=quality_score,
        decision=get_executive_decision(quality_score, "deal"),
        benchmark=benchmark,
        analysis=_deal_analysis(irr, moic, payback_period, inputs.ebitda, benchmark),
    )
