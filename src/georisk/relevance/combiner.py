"""
Score combination, boosting and threshold filtering.

Component scores are weighted and summed without per-component
clamping, then multiplied by severity and recency boosters and clamped
to [0, 1].
"""

from collections.abc import Mapping

from georisk.config import BoosterConfig, ScoringThresholds, ScoringWeights
from georisk.relevance.models import Event


def combine_scores(component_scores: Mapping[str, float], weights: ScoringWeights) -> float:
    """
    Weighted sum of the five component scores.

    Args:
        component_scores: Score per component name (direct_match, industry,
            geographic, business_unit, risk_correlation); missing
            components count as 0.
        weights: Global component weights

    Returns:
        Combined score, which may exceed 1.0 before boosting
    """
    return sum(
        component_scores.get(component, 0.0) * weight
        for component, weight in weights.model_dump().items()
    )


def severity_multiplier(event: Event, boosters: BoosterConfig) -> float:
    if not event.severity:
        return 1.0
    return boosters.severity.get(event.severity.lower(), 1.0)


def recency_multiplier(event: Event, boosters: BoosterConfig) -> float:
    timeframe = event.timeframe
    if not timeframe:
        return 1.0
    return boosters.recency.get(timeframe.lower(), 1.0)


def apply_boosters(event: Event, combined: float, boosters: BoosterConfig) -> float:
    """Apply severity and recency multipliers, then clamp to [0, 1]."""
    boosted = combined * severity_multiplier(event, boosters) * recency_multiplier(event, boosters)
    return max(0.0, min(1.0, boosted))


def passes_threshold(score: float, thresholds: ScoringThresholds) -> bool:
    return score >= thresholds.minimum_score


def relevance_bucket(score: float, thresholds: ScoringThresholds) -> str:
    """Classify a score as high, medium or low relevance."""
    if score >= thresholds.high_relevance:
        return "high"
    elif score >= thresholds.medium_relevance:
        return "medium"
    return "low"
