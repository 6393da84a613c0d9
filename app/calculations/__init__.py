"""
Financial Calculation Engine

Pure formula, scoring and scenario modules shared by every calculator.
Nothing in this package validates inputs; callers validate first.
"""

from app.calculations import irr, cashflow, growth, breakeven, scoring, scenarios

__all__ = ["irr", "cashflow", "growth", "breakeven", "scoring", "scenarios"]
