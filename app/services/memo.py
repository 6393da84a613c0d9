"""
Investment memo export.

Builds the stable record a memo document is rendered from.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from app.calculators import CalculationResult


def build_export_record(
    result: CalculationResult,
    ai_analysis: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Flatten a calculator result into the memo export record.

    Args:
        result: Any calculator result
        ai_analysis: Detailed narrative text, if one was generated
        generated_at: Timestamp override (defaults to now, UTC)

    Returns:
        Dict with type, inputs, results, score, decision and commentary
    """
    generated_at = generated_at or datetime.utcnow()

    return {
        "type": result.display_name,
        "inputs": result.input_values(),
        "results": result.metrics(),
        "quality_score": result.quality_score,
        "decision": result.decision.label,
        "decision_type": result.decision.type,
        "analysis": result.analysis,
        "ai_analysis": ai_analysis or result.narrative,
        "industry": result.benchmark.industry_name,
        "country": result.benchmark.market_name,
        "scenario": result.scenario,
        "generated_at": generated_at.isoformat(),
    }
