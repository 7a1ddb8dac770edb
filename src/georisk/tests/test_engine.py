"""
Tests for the relevance engine.

Tests end-to-end scoring with:
- Reference scenarios (relevant trade event, irrelevant agriculture event)
- Score bounds, clamping and threshold filtering
- Severity and recency monotonicity
- Stable ranking and deterministic rationales
- Parallel batch scoring and table swapping
- Input validation
"""

import pytest

from georisk.config import ScoringConfig
from georisk.relevance.engine import RelevanceEngine
from georisk.relevance.errors import InvalidInputError
from georisk.relevance.models import ConfidenceLevel, Event, ScoredEvent
from georisk.relevance.tables import IntelligenceTables


def with_changes(event: Event, **changes) -> Event:
    data = event.to_dict()
    data.update(changes)
    return Event.from_dict(data)


class TestReferenceScenarios:
    """Known profile/event pairs."""

    def test_trade_event_is_relevant(self, engine, tech_profile, trade_event):
        """Trade tensions score above 0.3 for a technology profile."""
        scored = engine.score_event(tech_profile, trade_event)

        assert scored is not None
        # (0.6 * 0.35 + 0.05 * 0.25 + 0.275 * 0.15) * 1.3
        assert scored.relevance_score == pytest.approx(0.342875)
        assert any(
            f.factor.startswith(("business_unit_", "industry_"))
            for f in scored.contributing_factors
        )
        assert trade_event in [s.event for s in engine.score_events(tech_profile, [trade_event])]

    def test_trade_event_explanation(self, engine, tech_profile, trade_event):
        scored = engine.score_event(tech_profile, trade_event)

        # areas, regions, industry, business
        assert scored.confidence_level == ConfidenceLevel.HIGH
        assert scored.rationale == (
            "Relevance score: 34.3%. Top factors: "
            "Matched 1 of 1 areas of concern; "
            "Matched 1 of 1 regions; "
            "Business unit semiconductor: 2 related categories"
            " (and 2 additional factors)"
        )

    def test_factors_are_ranked(self, engine, tech_profile, trade_event):
        """Contributing factors come back highest weight first."""
        scored = engine.score_event(tech_profile, trade_event)

        weights = [f.weight for f in scored.contributing_factors]
        assert weights == sorted(weights, reverse=True)
        assert [f.factor for f in scored.contributing_factors] == [
            "areas_of_concern",
            "regions",
            "business_unit_categories",
            "business_unit_geographic",
            "industry_supply_chain",
        ]

    def test_agriculture_event_is_dropped(self, engine, tech_profile, agriculture_event):
        """Unrelated events are absent, not present with a low score."""
        assessment = engine.assess(tech_profile, agriculture_event)

        assert assessment.relevance_score < 0.05
        assert assessment.passed_threshold is False
        assert engine.score_event(tech_profile, agriculture_event) is None
        assert engine.score_events(tech_profile, [agriculture_event]) == []


class TestScoreBounds:
    """Score range and threshold invariants."""

    def test_saturated_event_is_clamped(self, engine, tech_profile, saturated_event):
        """Accumulated signal can exceed 1.0 before boosting; output cannot."""
        assessment = engine.assess(tech_profile, saturated_event)

        assert assessment.combined_score == pytest.approx(0.53875)
        assert assessment.combined_score * 1.5 * 1.4 > 1.0
        assert assessment.relevance_score == 1.0

    def test_all_results_within_bounds(
        self, engine, tech_profile, trade_event, agriculture_event, saturated_event
    ):
        results = engine.score_events(
            tech_profile, [trade_event, agriculture_event, saturated_event]
        )

        assert len(results) == 2
        for scored in results:
            assert 0.05 <= scored.relevance_score <= 1.0
            assert scored.contributing_factors

    def test_custom_minimum_score(self, tech_profile, trade_event):
        config = ScoringConfig(thresholds={
            "minimum_score": 0.35,
            "medium_relevance": 0.4,
            "high_relevance": 0.7,
        })
        engine = RelevanceEngine(config=config)

        assert engine.score_events(tech_profile, [trade_event]) == []

    def test_empty_profile(self, engine, empty_profile, trade_event, saturated_event):
        """Empty collections never raise or produce NaN."""
        assessment = engine.assess(empty_profile, saturated_event)

        assert assessment.combined_score == 0.0
        assert assessment.relevance_score == 0.0
        assert engine.score_events(empty_profile, [trade_event, saturated_event]) == []


class TestBoosters:
    """Severity and recency ordering."""

    def test_severity_monotonic(self, engine, tech_profile, trade_event):
        scores = [
            engine.assess(tech_profile, with_changes(trade_event, severity=s)).relevance_score
            for s in ["critical", "high", "medium", "low"]
        ]

        assert scores == sorted(scores, reverse=True)
        assert scores[0] > scores[-1]

    def test_recency_monotonic(self, engine, tech_profile, trade_event):
        scores = [
            engine.assess(
                tech_profile,
                with_changes(trade_event, predictiveAnalytics={"timeframe": t}),
            ).relevance_score
            for t in ["immediate", "short-term", "medium-term", "long-term"]
        ]

        assert scores[0] > scores[1] > scores[2] > scores[3]

    def test_unknown_severity_is_neutral(self, engine, tech_profile, trade_event):
        medium = engine.assess(tech_profile, with_changes(trade_event, severity="medium"))
        unknown = engine.assess(tech_profile, with_changes(trade_event, severity="extreme"))
        missing = engine.assess(tech_profile, with_changes(trade_event, severity=None))

        assert unknown.relevance_score == pytest.approx(medium.relevance_score)
        assert missing.relevance_score == pytest.approx(medium.relevance_score)


class TestRanking:
    """Ordering and determinism of batch results."""

    def test_sorted_descending(self, engine, tech_profile, trade_event, saturated_event):
        results = engine.score_events(tech_profile, [trade_event, saturated_event])

        assert [s.event.id for s in results] == ["evt-saturated", "evt-trade"]

    def test_ties_keep_input_order(self, engine, tech_profile, trade_event):
        events = [with_changes(trade_event, id=f"evt-{i}") for i in range(5)]

        results = engine.score_events(tech_profile, events)

        assert [s.event.id for s in results] == [f"evt-{i}" for i in range(5)]

    def test_deterministic(self, engine, tech_profile, trade_event, saturated_event):
        first = engine.score_events(tech_profile, [trade_event, saturated_event])
        second = engine.score_events(tech_profile, [trade_event, saturated_event])

        assert [(s.relevance_score, s.rationale) for s in first] == [
            (s.relevance_score, s.rationale) for s in second
        ]

    def test_parallel_matches_sequential(
        self, engine, tech_profile, trade_event, saturated_event, agriculture_event
    ):
        events = [
            with_changes(e, id=f"{e.id}-{i}")
            for i in range(10)
            for e in (trade_event, agriculture_event, saturated_event)
        ]

        sequential = engine.score_events(tech_profile, events)
        parallel = engine.score_events(tech_profile, events, max_workers=4)

        assert [(s.event.id, s.relevance_score) for s in parallel] == [
            (s.event.id, s.relevance_score) for s in sequential
        ]


class TestInputs:
    """Input handling."""

    def test_accepts_documents(self, engine):
        results = engine.score_events(
            {
                "industry": "technology",
                "businessUnits": [{"name": "semiconductor"}],
                "areasOfConcern": [{"category": "trade disputes"}],
                "regions": ["asia-pacific"],
            },
            [{
                "title": "US-China Trade Tensions Escalate",
                "categories": ["Trade", "Technology"],
                "regions": ["Asia-Pacific"],
                "severity": "high",
            }],
        )

        assert len(results) == 1
        assert isinstance(results[0], ScoredEvent)

    def test_none_profile_raises(self, engine, trade_event):
        with pytest.raises(InvalidInputError):
            engine.score_events(None, [trade_event])

    def test_none_event_raises(self, engine, tech_profile, trade_event):
        with pytest.raises(InvalidInputError):
            engine.score_events(tech_profile, [trade_event, None])

    def test_inputs_not_mutated(self, engine, tech_profile, trade_event):
        before_profile = tech_profile.to_dict()
        before_event = trade_event.to_dict()

        engine.score_events(tech_profile, [trade_event])

        assert tech_profile.to_dict() == before_profile
        assert trade_event.to_dict() == before_event

    def test_scored_event_is_frozen(self, engine, tech_profile, trade_event):
        scored = engine.score_event(tech_profile, trade_event)

        with pytest.raises(AttributeError):
            scored.relevance_score = 1.0


class TestTableSwap:
    """Replacing intelligence tables between batches."""

    def test_swap_changes_scores(self, engine, tech_profile, trade_event):
        before = engine.assess(tech_profile, trade_event)

        engine.swap_tables(IntelligenceTables.from_dict({}))
        after = engine.assess(tech_profile, trade_event)

        assert before.component_scores["industry"] > 0
        assert after.component_scores["industry"] == 0.0
        assert after.component_scores["business_unit"] == 0.0
        # Direct matches do not depend on the tables
        assert after.component_scores["direct_match"] == before.component_scores["direct_match"]

    def test_swap_replaces_reference(self, engine):
        replacement = IntelligenceTables.from_dict({})
        engine.swap_tables(replacement)

        assert engine.tables is replacement


def test_word_boundary_mode(tech_profile):
    """Word-boundary matching still finds whole-word keywords."""
    engine = RelevanceEngine(config=ScoringConfig(matching_mode="word_boundary"))
    event = Event.from_dict({
        "title": "Trade restrictions hit Taiwan chipmakers",
        "categories": ["Technology"],
        "severity": "medium",
    })

    assessment = engine.assess(tech_profile, event)

    assert assessment.component_scores["industry"] > 0
