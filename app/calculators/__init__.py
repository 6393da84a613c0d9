"""
Calculator orchestrators.

Each calculator validates its inputs, looks up benchmarks, runs the
formulas and scoring, and returns a tagged result record.
"""

from dataclasses import dataclass
from typing import Annotated, Callable, Dict, Optional, Type, Union

from pydantic import BaseModel, Field

from app.calculators.base import CalculationResult, CalculatorInput, InvalidInputError
from app.calculators.breakeven import BreakevenInput, BreakevenResult, calculate_breakeven_result
from app.calculators.deal_roi import DealROIInput, DealROIResult, calculate_deal_roi
from app.calculators.future_value import (
    FutureValueInput,
    FutureValueResult,
    calculate_future_value_result,
)
from app.calculators.payback import PaybackInput, PaybackResult, calculate_payback_result
from app.calculators.valuation import ValuationInput, ValuationResult, calculate_valuation_result


@dataclass(frozen=True)
class Calculator:
    """Registry entry tying a calculator's input model to its run function."""

    calculator_type: str
    display_name: str
    input_model: Type[CalculatorInput]
    run: Callable[[BaseModel], CalculationResult]
    primary_field: Optional[str] = None  # Scenario primary driver
    secondary_field: Optional[str] = None  # Scenario secondary driver

    @property
    def supports_scenarios(self) -> bool:
        return self.primary_field is not None


CALCULATORS: Dict[str, Calculator] = {
    "future_value": Calculator(
        calculator_type="future_value",
        display_name=FutureValueResult.display_name,
        input_model=FutureValueInput,
        run=calculate_future_value_result,
        primary_field="growth_rate",
    ),
    "deal_roi": Calculator(
        calculator_type="deal_roi",
        display_name=DealROIResult.display_name,
        input_model=DealROIInput,
        run=calculate_deal_roi,
        primary_field="exit_multiple",
        secondary_field="ebitda",
    ),
    "breakeven": Calculator(
        calculator_type="breakeven",
        display_name=BreakevenResult.display_name,
        input_model=BreakevenInput,
        run=calculate_breakeven_result,
    ),
    "valuation": Calculator(
        calculator_type="valuation",
        display_name=ValuationResult.display_name,
        input_model=ValuationInput,
        run=calculate_valuation_result,
    ),
    "payback": Calculator(
        calculator_type="payback",
        display_name=PaybackResult.display_name,
        input_model=PaybackInput,
        run=calculate_payback_result,
    ),
}

AnyCalculationResult = Annotated[
    Union[
        FutureValueResult,
        DealROIResult,
        BreakevenResult,
        ValuationResult,
        PaybackResult,
    ],
    Field(discriminator="calculator_type"),
]


def get_calculator(calculator_type: str) -> Calculator:
    """Look up a calculator, accepting "deal-roi" as well as "deal_roi"."""
    key = calculator_type.replace("-", "_")
    if key not in CALCULATORS:
        raise KeyError(f"Unknown calculator: {calculator_type}")
    return CALCULATORS[key]


__all__ = [
    "AnyCalculationResult",
    "CALCULATORS",
    "Calculator",
    "CalculationResult",
    "InvalidInputError",
    "get_calculator",
]
