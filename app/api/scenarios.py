"""
Scenario API endpoints.
"""

from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel

from app.api.requests import run_calculation
from app.calculations.scenarios import SCENARIO_MULTIPLIERS
from app.calculators import AnyCalculationResult

router = APIRouter()


class ScenarioMultiplier(BaseModel):
    """Multipliers for one named scenario."""

    name: str
    label: str
    primary: float
    secondary: float


class ScenarioRunRequest(BaseModel):
    """Base-case inputs and the scenario to apply to them."""

    scenario: str
    inputs: Dict[str, Any]


@router.get("/", response_model=List[ScenarioMultiplier])
async def list_scenarios():
    """List the bull/base/bear multipliers."""
    return [
        ScenarioMultiplier(
            name=s.name, label=s.label, primary=s.primary, secondary=s.secondary
        )
        for s in SCENARIO_MULTIPLIERS.values()
    ]


@router.post("/{calculator}", response_model=AnyCalculationResult)
async def run_scenario_endpoint(calculator: str, request: ScenarioRunRequest):
    """
    Recalculate a calculator under a scenario.

    The request inputs are treated as the frozen base case, so repeated
    bull/bear requests with the same inputs never compound.
    """
    return run_calculation(calculator, request.inputs, request.scenario)
