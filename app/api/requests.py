"""
Request helpers shared by endpoints that name a calculator at runtime.
"""

from typing import Any, Dict

from fastapi import HTTPException
from pydantic import BaseModel, ValidationError

from app.calculations.scenarios import BASE_SCENARIO
from app.calculators import CalculationResult, get_calculator
from app.calculators.scenarios import run_scenario


class CalculationRequest(BaseModel):
    """A calculator type, its raw inputs and an optional scenario."""

    calculator: str
    inputs: Dict[str, Any]
    scenario: str = BASE_SCENARIO


def run_calculation(calculator_type: str, inputs: Dict[str, Any], scenario: str = BASE_SCENARIO) -> CalculationResult:
    """
    Validate raw inputs for a calculator and run it.

    The inputs are the base case; non-base scenarios are applied on top.

    Raises:
        HTTPException: 404 for an unknown calculator, 422 for malformed
            inputs, 400 for inputs or scenarios the calculator rejects
    """
    try:
        calculator = get_calculator(calculator_type)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown calculator: {calculator_type}")

    try:
        parsed = calculator.input_model.model_validate(inputs)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    try:
        if scenario == BASE_SCENARIO:
            return calculator.run(parsed)
        return run_scenario(calculator, parsed, scenario)
    except ValueError as e:
        # InvalidInputError included
        raise HTTPException(status_code=400, detail=str(e))
