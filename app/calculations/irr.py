"""
IRR, NPV and Return Multiple Calculations

Implements IRR using the bisection method over a fixed bracket. Rates are
returned in percent units (15.0 means 15%), not fractions.
"""

from typing import Sequence
import numpy as np

IRR_FLOOR = -0.5  # -50%
IRR_CEILING = 10.0  # 1000%
MAX_ITERATIONS = 200
NPV_TOLERANCE = 0.01  # currency units


def calculate_npv(cash_flows: Sequence[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of periodic cash flows.

    Period 0 is undiscounted; period t is divided by (1 + rate) ** t.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)
        discount_rate: Periodic discount rate as decimal (e.g., 0.10 for 10%)

    Returns:
        NPV value
    """
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    return float(np.sum(flows / (1 + discount_rate) ** periods))


def calculate_irr(cash_flows: Sequence[float]) -> float:
    """
    Calculate IRR (Internal Rate of Return) by bisection.

    Searches r in [-50%, 1000%]. Roots outside the bracket saturate at the
    bracket boundary instead of raising, and the search stops early once
    |NPV| drops below NPV_TOLERANCE. Cash flows with more than one sign
    change are not detected; the result is whichever root the bracket
    narrows to.

    Args:
        cash_flows: Array of periodic cash flows, period 0 first

    Returns:
        IRR in percent (e.g., 15.0 for 15%)
    """
    low = IRR_FLOOR
    high = IRR_CEILING

    if calculate_npv(cash_flows, low) < 0:
        return IRR_FLOOR * 100
    if calculate_npv(cash_flows, high) > 0:
        return IRR_CEILING * 100

    for _ in range(MAX_ITERATIONS):
        mid = (low + high) / 2
        npv = calculate_npv(cash_flows, mid)

        if abs(npv) < NPV_TOLERANCE:
            return mid * 100

        if npv > 0:
            low = mid
        else:
            high = mid

    return ((low + high) / 2) * 100


def calculate_moic(
    purchase_price: float,
    annual_cash_flow: float,
    holding_years: int,
    exit_value: float,
) -> float:
    """
    Calculate MOIC (Multiple on Invested Capital).

    Counts every interim distribution plus the exit proceeds, not the exit
    value alone.

    Args:
        purchase_price: Initial investment
        annual_cash_flow: Recurring distribution per year (e.g., EBITDA)
        holding_years: Number of years held
        exit_value: Proceeds at exit

    Returns:
        Multiple (e.g., 2.0 = 2.0x return)
    """
    total_distributions = annual_cash_flow * holding_years + exit_value
    return total_distributions / purchase_price
