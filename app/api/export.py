"""
Investment memo export endpoint.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from app.api.requests import CalculationRequest, run_calculation
from app.services.memo import build_export_record
from app.services.narrative import (
    NarrativeError,
    NarrativeService,
    build_analysis_payload,
    get_narrative_service,
)

router = APIRouter()


class ExportRequest(CalculationRequest):
    """Calculation to export, with optional AI commentary."""

    ai_analysis: Optional[str] = None  # Previously generated text
    include_ai_analysis: bool = False  # Generate memo analysis now


@router.post("/memo")
async def export_memo(
    request: ExportRequest,
    service: NarrativeService = Depends(get_narrative_service),
) -> Dict[str, Any]:
    """Build the memo export record for a calculation."""
    result = run_calculation(request.calculator, request.inputs, request.scenario)

    ai_analysis = request.ai_analysis
    if ai_analysis is None and request.include_ai_analysis:
        try:
            ai_analysis = await service.generate_memo_analysis(build_analysis_payload(result))
        except NarrativeError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)

    return build_export_record(result, ai_analysis)
