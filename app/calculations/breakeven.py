"""
Breakeven Calculations

Unit volume needed for contribution margin to cover fixed costs.
"""

import math
from dataclasses import dataclass


@dataclass
class BreakevenResult:
    """Breakeven volume and unit economics."""

    breakeven_units: float  # math.inf when not achievable
    breakeven_revenue: float
    profit_margin: float  # Contribution as % of price
    contribution: float  # Price minus variable cost per unit


def calculate_breakeven(
    fixed_costs: float, price_per_unit: float, cost_per_unit: float
) -> BreakevenResult:
    """
    Calculate breakeven units and revenue.

    A non-positive contribution can never recover fixed costs; that case
    returns infinite units and revenue with a zero margin instead of
    raising. Units are rounded up since a fractional unit cannot be sold.

    Args:
        fixed_costs: Fixed costs for the period
        price_per_unit: Selling price per unit
        cost_per_unit: Variable cost per unit

    Returns:
        BreakevenResult
    """
    contribution = price_per_unit - cost_per_unit

    if contribution <= 0:
        return BreakevenResult(
            breakeven_units=math.inf,
            breakeven_revenue=math.inf,
            profit_margin=0.0,
            contribution=contribution,
        )

    breakeven_units = math.ceil(fixed_costs / contribution)

    return BreakevenResult(
        breakeven_units=breakeven_units,
        breakeven_revenue=breakeven_units * price_per_unit,
        profit_margin=contribution / price_per_unit * 100,
        contribution=contribution,
    )
