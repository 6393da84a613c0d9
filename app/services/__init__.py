"""
Application services module.
"""

from app.services.deals import (
    DealRepository,
    InMemoryDealRepository,
    SavedDeal,
    SavedDealCreate,
    SqlDealRepository,
    add_deal,
    find_deal,
    remove_deal,
)
from app.services.memo import build_export_record
from app.services.narrative import (
    NarrativeError,
    NarrativePayload,
    NarrativeService,
    NarrativeSession,
    build_analysis_payload,
    get_narrative_service,
)

__all__ = [
    "DealRepository",
    "InMemoryDealRepository",
    "NarrativeError",
    "NarrativePayload",
    "NarrativeService",
    "NarrativeSession",
    "SavedDeal",
    "SavedDealCreate",
    "SqlDealRepository",
    "add_deal",
    "build_analysis_payload",
    "build_export_record",
    "find_deal",
    "get_narrative_service",
    "remove_deal",
]
