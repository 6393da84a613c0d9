"""
Saved deal API endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.calculators import CALCULATORS, get_calculator
from app.config import get_settings
from app.db.database import get_db
from app.services.deals import (
    DealRepository,
    SavedDeal,
    SavedDealCreate,
    SqlDealRepository,
    add_deal,
    find_deal,
    remove_deal,
)

router = APIRouter()


def get_deal_repository(db: Session = Depends(get_db)) -> DealRepository:
    """Repository dependency backed by the request's session."""
    return SqlDealRepository(db)


@router.get("/", response_model=List[SavedDeal])
async def list_deals(repository: DealRepository = Depends(get_deal_repository)):
    """List saved deals, newest first."""
    return repository.load()


@router.post("/", response_model=SavedDeal, status_code=201)
async def create_deal(
    deal_data: SavedDealCreate,
    repository: DealRepository = Depends(get_deal_repository),
):
    """Save a deal, dropping the oldest once the cap is reached."""
    try:
        calculator = get_calculator(deal_data.type)
    except KeyError:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown calculator type. Expected one of: {', '.join(CALCULATORS)}",
        )

    deal_data = deal_data.model_copy(update={"type": calculator.calculator_type})
    return add_deal(repository, deal_data, limit=get_settings().max_saved_deals)


@router.get("/{deal_id}", response_model=SavedDeal)
async def get_deal(deal_id: int, repository: DealRepository = Depends(get_deal_repository)):
    """Get a saved deal by ID."""
    deal = find_deal(repository, deal_id)
    if not deal:
        raise HTTPException(status_code=404, detail="Deal not found")
    return deal


@router.delete("/{deal_id}")
async def delete_deal(deal_id: int, repository: DealRepository = Depends(get_deal_repository)):
    """Delete a saved deal."""
    if not remove_deal(repository, deal_id):
        raise HTTPException(status_code=404, detail="Deal not found")
    return {"message": "Deal deleted successfully"}
