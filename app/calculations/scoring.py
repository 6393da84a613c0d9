"""
Quality Score and Executive Decision

One scoring methodology shared by every calculator. Each calculator maps its
own results onto three normalized inputs:

- performance_vs_benchmark: actual / benchmark ratio (> 1 = outperforming)
- risk_adjusted: 0-1 scale
- time_efficiency: 0-1 scale
"""

from dataclasses import dataclass
from typing import Dict

BASELINE_SCORE = 5
MIN_SCORE = 1
MAX_SCORE = 10

# (threshold, delta) evaluated highest first; the first match wins
PERFORMANCE_BANDS = [
    (1.5, 3),
    (1.2, 2),
    (1.0, 1),
    (0.8, -1),
]
PERFORMANCE_FLOOR_DELTA = -2

HIGH_BAND = 0.7
LOW_BAND = 0.3

GO_THRESHOLD = 7
CAUTION_THRESHOLD = 4


@dataclass(frozen=True)
class QualityMetrics:
    """Normalized inputs to the quality score."""

    performance_vs_benchmark: float
    risk_adjusted: float
    time_efficiency: float


@dataclass(frozen=True)
class Decision:
    """Categorical verdict derived from a quality score."""

    label: str
    type: str  # go | caution | pass
    description: str


DECISION_LABELS: Dict[str, Dict[str, str]] = {
    "deal": {"go": "GO", "caution": "CAUTION", "pass": "PASS"},
    "growth": {"go": "OUTPERFORMER", "caution": "ON PACE", "pass": "LAGGING"},
    "valuation": {"go": "PREMIUM", "caution": "FAIR VALUE", "pass": "UNDERPERFORMER"},
    "payback": {"go": "QUICK WIN", "caution": "MODERATE", "pass": "SLOW BURN"},
}

DECISION_DESCRIPTIONS = {
    "go": "Strong fundamentals",
    "caution": "Review carefully",
    "pass": "Below threshold",
}


def _performance_delta(performance_vs_benchmark: float) -> int:
    for threshold, delta in PERFORMANCE_BANDS:
        if performance_vs_benchmark >= threshold:
            return delta
    return PERFORMANCE_FLOOR_DELTA


def _band_delta(value: float) -> int:
    if value >= HIGH_BAND:
        return 1
    if value < LOW_BAND:
        return -1
    return 0


def calculate_quality_score(
    performance_vs_benchmark: float,
    risk_adjusted: float,
    time_efficiency: float,
) -> int:
    """
    Calculate the 1-10 quality score.

    Starts at 5, adds -2..+3 for performance against benchmark and -1..+1
    each for risk and time efficiency, then clamps to [1, 10]. Inputs are
    not range checked; only the final score is clamped.

    Args:
        performance_vs_benchmark: Actual / benchmark ratio
        risk_adjusted: 0-1 risk profile
        time_efficiency: 0-1 time profile

    Returns:
        Integer score from 1 to 10
    """
    score = (
        BASELINE_SCORE
        + _performance_delta(performance_vs_benchmark)
        + _band_delta(risk_adjusted)
        + _band_delta(time_efficiency)
    )
    return max(MIN_SCORE, min(MAX_SCORE, score))


def score_metrics(metrics: QualityMetrics) -> int:
    """Score a QualityMetrics record."""
    return calculate_quality_score(
        metrics.performance_vs_benchmark,
        metrics.risk_adjusted,
        metrics.time_efficiency,
    )


def decision_type(quality_score: int) -> str:
    """Map a score to go / caution / pass."""
    if quality_score >= GO_THRESHOLD:
        return "go"
    if quality_score >= CAUTION_THRESHOLD:
        return "caution"
    return "pass"


def get_executive_decision(quality_score: int, context: str = "deal") -> Decision:
    """
    Build the executive decision for a score.

    Args:
        quality_score: Score from calculate_quality_score
        context: Label set to use (deal, growth, valuation, payback);
            unknown contexts use the deal labels

    Returns:
        Decision
    """
    verdict = decision_type(quality_score)
    labels = DECISION_LABELS.get(context, DECISION_LABELS["deal"])

    return Decision(
        label=labels[verdict],
        type=verdict,
        description=DECISION_DESCRIPTIONS[verdict],
    )
