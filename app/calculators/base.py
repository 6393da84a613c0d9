"""
Shared pieces for calculator orchestration: input parsing, validation
errors and the common result record.
"""

import re
from abc import abstractmethod
from typing import Annotated, Any, ClassVar, Dict, Optional

from pydantic import BaseModel, BeforeValidator, Field

from app.calculations.scoring import Decision
from app.config import get_settings
from app.data.markets import BenchmarkProfile

POSITIVE_VALUES_MESSAGE = "Please enter valid positive values"

CURRENCY_SYMBOLS = {
    "USD": "$",
    "GBP": "£",
    "PKR": "Rs ",
    "AED": "AED ",
}


class InvalidInputError(ValueError):
    """Raised when calculator inputs fail validation."""


def parse_numeric_input(value: Any) -> float:
    """
    Parse a form value such as "$1,250,000" into a float.

    Anything other than digits, "." and "-" is dropped. Unparseable text
    becomes 0.0 so it fails positivity checks downstream.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)

    cleaned = re.sub(r"[^0-9.\-]", "", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def parse_whole_number(value: Any) -> int:
    """Parse a year count, keeping the leading integer ("5.7" -> 5)."""
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return int(value)

    match = re.match(r"\s*([-+]?\d+)", str(value))
    return int(match.group(1)) if match else 0


NumericInput = Annotated[float, BeforeValidator(parse_numeric_input)]
YearsInput = Annotated[int, BeforeValidator(parse_whole_number)]


def format_currency(value: float, currency: str) -> str:
    """Whole-unit currency string for commentary text."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.0f}"


class CalculatorInput(BaseModel):
    """Fields every calculator accepts."""

    industry: str = Field(default_factory=lambda: get_settings().default_industry)
    country: str = Field(default_factory=lambda: get_settings().default_country)


class CalculationResult(BaseModel):
    """
    Fields shared by every calculator result.

    Subclasses add an `inputs` field, their raw outputs and a literal
    `calculator_type` tag.
    """

    display_name: ClassVar[str] = ""

    calculator_type: str
    scenario: str = "base"
    quality_score: int
    decision: Decision
    benchmark: BenchmarkProfile
    analysis: str
    narrative: Optional[str] = None

    def input_values(self) -> Dict[str, Any]:
        """Calculator inputs without the market selection."""
        return self.inputs.model_dump(exclude={"industry", "country"})

    @abstractmethod
    def metrics(self) -> Dict[str, float]:
        """Headline numbers for narrative prompts and exports."""
