"""
Saved deals.

Persistence is an injected repository with two operations, load() and
save(list). The list is ordered newest first and capped in size.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.db.models import SavedDealRecord

logger = logging.getLogger(__name__)


class SavedDealCreate(BaseModel):
    """Fields supplied when saving a deal."""

    name: str = Field(min_length=1, max_length=255)
    type: str  # Calculator type
    industry: str
    country: str
    data: Dict[str, Any] = {}
    result: str = ""


class SavedDeal(SavedDealCreate):
    """A stored deal."""

    id: int
    timestamp: datetime


class DealRepository(Protocol):
    """Key-value style storage for the saved deal list."""

    def load(self) -> List[SavedDeal]:
        ...

    def save(self, deals: List[SavedDeal]) -> None:
        ...


class InMemoryDealRepository:
    """Process-local list, for tests and scripting."""

    def __init__(self, deals: Optional[List[SavedDeal]] = None):
        self._deals = list(deals or [])

    def load(self) -> List[SavedDeal]:
        return list(self._deals)

    def save(self, deals: List[SavedDeal]) -> None:
        self._deals = list(deals)


class SqlDealRepository:
    """Stores the list in the saved_deals table, replacing it on save."""

    def __init__(self, db: Session):
        self.db = db

    def load(self) -> List[SavedDeal]:
        records = self.db.query(SavedDealRecord).order_by(SavedDealRecord.position).all()
        return [
            SavedDeal(
                id=r.id,
                name=r.name,
                type=r.calculator_type,
                industry=r.industry,
                country=r.country,
                timestamp=r.saved_at,
                data=r.data or {},
                result=r.result or "",
            )
            for r in records
        ]

    def save(self, deals: List[SavedDeal]) -> None:
        try:
            self.db.query(SavedDealRecord).delete()
            for position, deal in enumerate(deals):
                self.db.add(
                    SavedDealRecord(
                        id=deal.id,
                        position=position,
                        name=deal.name,
                        calculator_type=deal.type,
                        industry=deal.industry,
                        country=deal.country,
                        saved_at=deal.timestamp,
                        data=deal.data,
                        result=deal.result,
                    )
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


def _next_id(deals: List[SavedDeal], now: datetime) -> int:
    deal_id = int(now.timestamp() * 1000)
    if deals:
        deal_id = max(deal_id, max(d.id for d in deals) + 1)
    return deal_id


def add_deal(
    repository: DealRepository,
    deal_data: SavedDealCreate,
    limit: int,
    now: Optional[datetime] = None,
) -> SavedDeal:
    """Prepend a deal and drop the oldest beyond `limit`."""
    now = now or datetime.utcnow()
    deals = repository.load()

    deal = SavedDeal(id=_next_id(deals, now), timestamp=now, **deal_data.model_dump())
    repository.save(([deal] + deals)[:limit])

    logger.info(f"Saved deal '{deal.name}' ({deal.type}, id={deal.id})")
    return deal


def find_deal(repository: DealRepository, deal_id: int) -> Optional[SavedDeal]:
    return next((d for d in repository.load() if d.id == deal_id), None)


def remove_deal(repository: DealRepository, deal_id: int) -> bool:
    """Delete a deal; False if it was not stored."""
    deals = repository.load()
    remaining = [d for d in deals if d.id != deal_id]
    if len(remaining) == len(deals):
        return False

    repository.save(remaining)
    logger.info(f"Deleted deal id={deal_id}")
    return True
