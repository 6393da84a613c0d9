"""
Cash Flow Calculations

Builds deal cash flow series and measures how long recurring savings take
to recover an investment, in nominal and inflation-adjusted terms.
"""

import math
from typing import List
from dataclasses import dataclass


def build_deal_cash_flows(
    purchase_price: float,
    annual_cash_flow: float,
    holding_years: int,
    exit_multiple: float,
) -> List[float]:
    """
    Build the annual cash flow series for an acquisition.

    Period 0 is the purchase outlay. Every later period receives the
    recurring cash flow, and the final period also receives the exit
    proceeds (annual_cash_flow * exit_multiple).

    Args:
        purchase_price: Entry price (positive number)
        annual_cash_flow: Recurring yearly distribution, e.g. EBITDA
        holding_years: Years until exit (positive integer)
        exit_multiple: Exit valuation as a multiple of annual_cash_flow

    Returns:
        List of holding_years + 1 cash flows
    """
    cash_flows = [-purchase_price]

    for year in range(1, holding_years + 1):
        exit_proceeds = annual_cash_flow * exit_multiple if year == holding_years else 0.0
        cash_flows.append(annual_cash_flow + exit_proceeds)

    return cash_flows


@dataclass
class PaybackResult:
    """Payback period with its inflation-adjusted view."""

    payback_years: float
    roi: float  # Annual savings as % of cost
    real_cumulative_savings: float
    nominal_total: float
    inflation_loss: float
    purchasing_power_retained: float  # Percent


def discount_factor(inflation_rate: float, year: int) -> float:
    """Deflator for a given year at an annual inflation rate in percent; inf past float range."""
    try:
        return (1 + inflation_rate / 100) ** year
    except OverflowError:
        return math.inf


def real_annuity_value(annual_amount: float, inflation_rate: float, years: int) -> float:
    """
    Sum of `years` equal annual amounts, each deflated by its year's factor.

    Uses the geometric series closed form so very long horizons cost the
    same as short ones.
    """
    growth = 1 + inflation_rate / 100
    if growth == 1:
        return annual_amount * years
    return annual_amount * (1 - 1 / discount_factor(inflation_rate, years)) / (growth - 1)


def calculate_payback_analysis(
    investment_cost: float,
    annual_savings: float,
    inflation_rate: float,
) -> PaybackResult:
    """
    Calculate simple payback and the real value of the savings that repay it.

    Each whole year's savings is deflated by that year's inflation factor.
    A fractional final year contributes its pro-rata savings deflated at the
    next whole-year factor.

    Args:
        investment_cost: Up-front cost
        annual_savings: Savings or earnings per year
        inflation_rate: Annual inflation in percent (e.g., 2.8)

    Returns:
        PaybackResult
    """
    payback_years = investment_cost / annual_savings
    roi = annual_savings / investment_cost * 100

    full_years = math.floor(payback_years)
    fraction = payback_years - full_years

    real_cumulative_savings = real_annuity_value(annual_savings, inflation_rate, full_years)

    if fraction > 0:
        real_cumulative_savings += (annual_savings * fraction) / discount_factor(
            inflation_rate, full_years + 1
        )

    # Equals investment_cost by construction
    nominal_total = annual_savings * payback_years
    inflation_loss = nominal_total - real_cumulative_savings
    purchasing_power_retained = real_cumulative_savings / nominal_total * 100

    return PaybackResult(
        payback_years=payback_years,
        roi=roi,
        real_cumulative_savings=real_cumulative_savings,
        nominal_total=nominal_total,
        inflation_loss=inflation_loss,
        purchasing_power_retained=purchasing_power_retained,
    )
