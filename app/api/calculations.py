"""
Calculator API endpoints.

These endpoints accept form inputs and return the tagged result record
for each calculator.
"""

from typing import List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.calculations import irr
from app.calculators import InvalidInputError
from app.calculators.breakeven import BreakevenInput, BreakevenResult, calculate_breakeven_result
from app.calculators.deal_roi import DealROIInput, DealROIResult, calculate_deal_roi
from app.calculators.future_value import (
    FutureValueInput,
    FutureValueResult,
    calculate_future_value_result,
)
from app.calculators.payback import PaybackInput, PaybackResult, calculate_payback_result
from app.calculators.valuation import ValuationInput, ValuationResult, calculate_valuation_result

router = APIRouter()


@router.post("/future-value", response_model=FutureValueResult)
async def future_value_endpoint(inputs: FutureValueInput):
    """Project a value forward at an annual growth rate."""
    try:
        return calculate_future_value_result(inputs)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/deal-roi", response_model=DealROIResult)
async def deal_roi_endpoint(inputs: DealROIInput):
    """IRR, MOIC and payback for an acquisition held to exit."""
    try:
        return calculate_deal_roi(inputs)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/breakeven", response_model=BreakevenResult)
async def breakeven_endpoint(inputs: BreakevenInput):
    """Units and revenue needed to cover fixed costs."""
    try:
        return calculate_breakeven_result(inputs)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/valuation", response_model=ValuationResult)
async def valuation_endpoint(inputs: ValuationInput):
    """EV/EBITDA valuation range."""
    try:
        return calculate_valuation_result(inputs)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/payback", response_model=PaybackResult)
async def payback_endpoint(inputs: PaybackInput):
    """Inflation-adjusted payback period."""
    try:
        return calculate_payback_result(inputs)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


class IRRInput(BaseModel):
    """Input for IRR calculation."""

    cash_flows: List[float]


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr: float
    npv_at_10_percent: float


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR (percent) for annual cash flows."""
    if len(inputs.cash_flows) < 2:
        raise HTTPException(status_code=400, detail="At least two cash flows are required")

    return IRRResponse(
        irr=irr.calculate_irr(inputs.cash_flows),
        npv_at_10_percent=irr.calculate_npv(inputs.cash_flows, 0.10),
    )
