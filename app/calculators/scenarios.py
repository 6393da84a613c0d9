"""
Bull/bear scenario runs for calculators that declare scenario drivers.
"""

import logging
from typing import Optional

from app.calculations.scenarios import BASE_SCENARIO, ScenarioAdjuster
from app.calculators import Calculator, CalculationResult, CalculatorInput

logger = logging.getLogger(__name__)


def _apply(
    calculator: Calculator,
    inputs: CalculatorInput,
    primary: float,
    secondary: Optional[float],
) -> CalculatorInput:
    update = {calculator.primary_field: primary}
    if calculator.secondary_field and secondary is not None:
        update[calculator.secondary_field] = secondary
    return inputs.model_copy(update=update)


def run_scenario(
    calculator: Calculator,
    inputs: CalculatorInput,
    scenario: str,
    adjuster: Optional[ScenarioAdjuster] = None,
) -> CalculationResult:
    """
    Recalculate under a named scenario.

    The adjuster freezes the drivers in `inputs` on its first switch; pass the
    same adjuster across switches to keep multiplying from that base.

    Raises:
        ValueError: If the calculator has no scenario drivers or the scenario is unknown
        InvalidInputError: If the adjusted inputs fail validation
    """
    if not calculator.supports_scenarios:
        raise ValueError(f"{calculator.display_name} does not support scenarios")

    adjuster = adjuster or ScenarioAdjuster()
    primary = getattr(inputs, calculator.primary_field)
    secondary = (
        getattr(inputs, calculator.secondary_field) if calculator.secondary_field else None
    )

    adjusted_primary, adjusted_secondary = adjuster.switch(scenario, primary, secondary)
    logger.debug(
        f"{calculator.display_name} scenario {scenario}: "
        f"{calculator.primary_field}={adjusted_primary}"
    )

    result = calculator.run(_apply(calculator, inputs, adjusted_primary, adjusted_secondary))
    return result.model_copy(update={"scenario": scenario})


def reset_scenario(
    calculator: Calculator,
    inputs: CalculatorInput,
    adjuster: ScenarioAdjuster,
) -> CalculationResult:
    """Recalculate from the adjuster's frozen base and clear it."""
    base = adjuster.reset()
    if base is not None:
        inputs = _apply(calculator, inputs, *base)
    return calculator.run(inputs).model_copy(update={"scenario": BASE_SCENARIO})
