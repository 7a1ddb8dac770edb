"""
Tests for batch scoring analytics.
"""

import pytest

from georisk.relevance.analytics import ScoringAnalytics, get_scoring_analytics


class TestScoringAnalytics:
    """Aggregates over scored batches."""

    def test_empty_batch(self):
        analytics = get_scoring_analytics([])

        assert analytics.total_events == 0
        assert analytics.average_score == 0.0
        assert sum(analytics.score_distribution.values()) == 0

    def test_distributions(self, engine, tech_profile, trade_event, saturated_event, agriculture_event):
        scored = engine.score_events(
            tech_profile, [trade_event, saturated_event, agriculture_event]
        )

        analytics = get_scoring_analytics(scored, engine.config.thresholds)

        assert analytics.total_events == 2
        assert analytics.score_distribution == {"high": 1, "medium": 0, "low": 1}
        assert analytics.confidence_distribution["high"] == 2
        assert sum(analytics.confidence_distribution.values()) == 2
        assert analytics.average_score == pytest.approx((1.0 + 0.342875) / 2)

    def test_factor_analysis_counts(self, engine, tech_profile, trade_event, saturated_event):
        scored = engine.score_events(tech_profile, [trade_event, saturated_event])

        analytics = get_scoring_analytics(scored)

        assert analytics.factor_analysis["areas_of_concern"] == 2
        assert analytics.factor_analysis["regions"] == 2
        counts = list(analytics.factor_analysis.values())
        assert counts == sorted(counts, reverse=True)

    def test_to_dict_keys(self):
        data = ScoringAnalytics().to_dict()

        assert set(data) == {
            "totalEvents",
            "scoreDistribution",
            "confidenceDistribution",
            "factorAnalysis",
            "averageScore",
        }
        assert data["confidenceDistribution"] == {"low": 0, "medium": 0, "high": 0}
