"""
Compound Growth Calculations
"""

import math


def calculate_future_value(
    current_value: float, growth_rate: float, years: float
) -> float:
    """
    Project a value forward at a constant annual growth rate.

    Args:
        current_value: Value today
        growth_rate: Annual growth in percent (e.g., 5 for 5%); callers
            must reject rates at or below -100
        years: Number of compounding years

    Returns:
        Future value, or math.inf when it exceeds the float range
    """
    try:
        return current_value * (1 + growth_rate / 100) ** years
    except OverflowError:
        return math.inf
