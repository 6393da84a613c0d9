"""
Scenario Multipliers

Bull and bear cases scale a calculator's primary driver (exit multiple,
growth rate) and an optional secondary driver (EBITDA) by fixed factors.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ScenarioAdjustment:
    """Multiplicative factors for one named scenario."""

    name: str
    label: str
    primary: float
    secondary: float


SCENARIO_MULTIPLIERS: Dict[str, ScenarioAdjustment] = {
    "base": ScenarioAdjustment(name="base", label="Base", primary=1.0, secondary=1.0),
    "bull": ScenarioAdjustment(name="bull", label="Bull +30%", primary=1.30, secondary=1.15),
    "bear": ScenarioAdjustment(name="bear", label="Bear -25%", primary=0.75, secondary=0.85),
}

BASE_SCENARIO = "base"


def get_scenario(name: str) -> ScenarioAdjustment:
    """Look up a scenario by name, raising ValueError if unknown."""
    try:
        return SCENARIO_MULTIPLIERS[name]
    except KeyError:
        raise ValueError(f"Unknown scenario: {name}")


class ScenarioAdjuster:
    """
    Applies scenario multipliers against a frozen base case.

    The first switch captures the caller's current primary/secondary values
    as the base. Later switches always multiply from that captured base, so
    bull -> bear -> base never compounds. reset() hands the base back and
    forgets it.
    """

    def __init__(self):
        self.active = BASE_SCENARIO
        self._frozen_base: Optional[Tuple[float, Optional[float]]] = None

    @property
    def frozen_base(self) -> Optional[Tuple[float, Optional[float]]]:
        return self._frozen_base

    def switch(
        self,
        scenario: str,
        primary: float,
        secondary: Optional[float] = None,
    ) -> Tuple[float, Optional[float]]:
        """
        Switch to a scenario and return the adjusted (primary, secondary).

        primary/secondary are only read when no base has been frozen yet.
        """
        adjustment = get_scenario(scenario)

        if self._frozen_base is None:
            self._frozen_base = (primary, secondary)

        base_primary, base_secondary = self._frozen_base
        adjusted_secondary = None
        if base_secondary is not None:
            adjusted_secondary = base_secondary * adjustment.secondary

        self.active = scenario
        return base_primary * adjustment.primary, adjusted_secondary

    def reset(self) -> Optional[Tuple[float, Optional[float]]]:
        """Return to base, yielding the frozen values (None if never switched)."""
        base = self._frozen_base
        self._frozen_base = None
        self.active = BASE_SCENARIO
        return base
