"""
Aggregate statistics over a scored batch.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from georisk.config import ScoringThresholds, settings
from georisk.relevance.combiner import relevance_bucket
from georisk.relevance.models import ConfidenceLevel, ScoredEvent


@dataclass
class ScoringAnalytics:
    """Summary of a scored batch."""

    total_events: int = 0
    score_distribution: dict[str, int] = field(
        default_factory=lambda: {"high": 0, "medium": 0, "low": 0}
    )
    confidence_distribution: dict[str, int] = field(
        default_factory=lambda: {level.value: 0 for level in ConfidenceLevel}
    )
    factor_analysis: dict[str, int] = field(default_factory=dict)
    average_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalEvents": self.total_events,
            "scoreDistribution": self.score_distribution,
            "confidenceDistribution": self.confidence_distribution,
            "factorAnalysis": self.factor_analysis,
            "averageScore": self.average_score,
        }


def get_scoring_analytics(
    scored_events: Sequence[ScoredEvent],
    thresholds: Optional[ScoringThresholds] = None,
) -> ScoringAnalytics:
    """
    Summarize an already-scored batch.

    Buckets: high >= high_relevance, medium >= medium_relevance, low below.
    Factor analysis counts how often each factor name contributed.
    """
    thresholds = thresholds or settings.scoring.thresholds
    analytics = ScoringAnalytics(total_events=len(scored_events))

    factor_counts: Counter[str] = Counter()
    for scored in scored_events:
        analytics.score_distribution[relevance_bucket(scored.relevance_score, thresholds)] += 1
        analytics.confidence_distribution[scored.confidence_level.value] += 1
        factor_counts.update(f.factor for f in scored.contributing_factors)

    analytics.factor_analysis = dict(factor_counts.most_common())
    if scored_events:
        analytics.average_score = (
            sum(s.relevance_score for s in scored_events) / len(scored_events)
        )

    return analytics
