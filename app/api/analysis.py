"""
AI narrative endpoints.

The in-app verdict is streamed as server-sent events; the detailed memo
analysis is returned in one response.
"""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from app.api.requests import CalculationRequest, run_calculation
from app.services.narrative import (
    NarrativeError,
    NarrativeService,
    build_analysis_payload,
    get_narrative_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _event(data: str) -> str:
    return f"data: {data}\n\n"


@router.post("/stream")
async def stream_analysis(
    request: CalculationRequest,
    service: NarrativeService = Depends(get_narrative_service),
):
    """
    Stream a short verdict for a calculation.

    Emits one `data: {"content": ...}` event per fragment and a final
    `data: [DONE]`. Failures before the first fragment map to the error's
    HTTP status; later failures end the stream with an error event.
    """
    result = run_calculation(request.calculator, request.inputs, request.scenario)
    fragments = service.stream_analysis(build_analysis_payload(result))

    try:
        first = await fragments.__anext__()
    except StopAsyncIteration:
        first = None
    except NarrativeError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    async def events():
        if first is not None:
            yield _event(json.dumps({"content": first}))
            try:
                async for fragment in fragments:
                    yield _event(json.dumps({"content": fragment}))
            except NarrativeError as e:
                logger.warning(f"Narrative stream ended early: {e.message}")
                yield _event(json.dumps({"error": e.message}))
        yield _event("[DONE]")

    return StreamingResponse(events(), media_type="text/event-stream")


@router.post("/memo")
async def memo_analysis(
    request: CalculationRequest,
    service: NarrativeService = Depends(get_narrative_service),
):
    """Detailed memo analysis with markdown markers stripped."""
    result = run_calculation(request.calculator, request.inputs, request.scenario)

    try:
        text = await service.generate_memo_analysis(build_analysis_payload(result))
    except NarrativeError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return {"analysis": text}
