"""
Relevance engine: scores, filters and ranks events for a profile.

Per event:
1. Run the five component scorers
2. Combine with the global weights
3. Apply severity and recency boosters, clamp to [0, 1]
4. Drop events below the minimum score
5. Derive confidence and rationale from the contributing factors

Scoring is a pure function of (profile, event, tables). Events are
independent, so a batch can be fanned out over a thread pool; results
are collected in input order and stably sorted by score.
"""

import logging
import time
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from georisk.config import ScoringConfig, settings
from georisk.relevance.combiner import apply_boosters, combine_scores, passes_threshold
from georisk.relevance.explain import determine_confidence, generate_rationale, rank_factors
from georisk.relevance.models import (
    ContributingFactor,
    Event,
    Profile,
    ScoredEvent,
    ScoredEventBuilder,
    coerce_event,
    coerce_profile,
    utcnow,
)
from georisk.relevance.scorers import ComponentScorer, build_scorers
from georisk.relevance.tables import DEFAULT_TABLES, IntelligenceTables, load_tables
from georisk.relevance.text import KeywordMatcher, normalize_event_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _EngineState:
    """Tables and the scorers built from them, swapped as one reference."""

    tables: IntelligenceTables
    scorers: tuple[ComponentScorer, ...]


@dataclass
class EventAssessment:
    """Full scoring breakdown for one event, before filtering."""

    event: Event
    component_scores: dict[str, float] = field(default_factory=dict)
    combined_score: float = 0.0
    relevance_score: float = 0.0
    factors: list[ContributingFactor] = field(default_factory=list)
    passed_threshold: bool = False


class RelevanceEngine:
    """
    Multi-factor relevance scoring for geopolitical events.

    Holds no mutable state besides the tables reference, which is only
    ever replaced whole via swap_tables().
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        tables: Optional[IntelligenceTables] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Scoring configuration (defaults to settings.scoring)
            tables: Intelligence tables (defaults to the built-in tables)
        """
        self.config = config or settings.scoring
        self.matcher = KeywordMatcher(self.config.matching_mode)
        self._state = self._build_state(tables or DEFAULT_TABLES)

    def _build_state(self, tables: IntelligenceTables) -> _EngineState:
        return _EngineState(tables=tables, scorers=build_scorers(tables, self.matcher))

    @property
    def tables(self) -> IntelligenceTables:
        return self._state.tables

    def swap_tables(self, tables: IntelligenceTables) -> None:
        """Replace the intelligence tables for subsequent batches."""
        self._state = self._build_state(tables)
        logger.info(f"Intelligence tables swapped: {tables.summary()}")

    def assess(
        self,
        profile: Profile | Mapping[str, Any],
        event: Event | Mapping[str, Any],
    ) -> EventAssessment:
        """Score one event without filtering, keeping the component breakdown."""
        return self._assess(self._state, coerce_profile(profile), coerce_event(event))

    def _assess(self, state: _EngineState, profile: Profile, event: Event) -> EventAssessment:
        text = normalize_event_text(event)
        assessment = EventAssessment(event=event)

        for scorer in state.scorers:
            component = scorer.score(profile, event, text)
            assessment.component_scores[component.component] = component.score
            assessment.factors.extend(component.factors)

        assessment.combined_score = combine_scores(
            assessment.component_scores, self.config.weights
        )
        assessment.relevance_score = apply_boosters(
            event, assessment.combined_score, self.config.boosters
        )
        assessment.passed_threshold = passes_threshold(
            assessment.relevance_score, self.config.thresholds
        )
        return assessment

    def _score(
        self,
        state: _EngineState,
        profile: Profile,
        event: Event,
        scored_at: Optional[datetime] = None,
    ) -> Optional[ScoredEvent]:
        assessment = self._assess(state, profile, event)

        logger.debug(
            f"Scored event {event.id or event.title[:40]!r}: "
            f"combined={assessment.combined_score:.4f} "
            f"boosted={assessment.relevance_score:.4f} "
            f"factors={len(assessment.factors)}"
        )

        if not assessment.passed_threshold:
            return None

        builder = ScoredEventBuilder(event, assessment.relevance_score)
        builder.add_factors(rank_factors(assessment.factors))
        return builder.build(
            confidence_level=determine_confidence(builder.factors),
            rationale=generate_rationale(builder.factors, assessment.relevance_score),
            scored_at=scored_at,
        )

    def score_event(
        self,
        profile: Profile | Mapping[str, Any],
        event: Event | Mapping[str, Any],
    ) -> Optional[ScoredEvent]:
        """
        Score a single event.

        Returns:
            ScoredEvent, or None if the event falls below the minimum score
        """
        return self._score(self._state, coerce_profile(profile), coerce_event(event))

    def score_events(
        self,
        profile: Profile | Mapping[str, Any],
        events: Iterable[Event | Mapping[str, Any]],
        max_workers: Optional[int] = None,
    ) -> list[ScoredEvent]:
        """
        Score, filter and rank a batch of events.

        Args:
            profile: Profile or profile document
            events: Candidate events or event documents
            max_workers: Thread pool size (defaults to config.max_workers;
                None or 1 scores sequentially)

        Returns:
            ScoredEvents at or above the minimum score, highest first.
            Equal scores keep their input order.

        Raises:
            InvalidInputError: If the profile or any event is missing
        """
        start_time = time.time()

        # One state for the whole batch, even if tables are swapped meanwhile
        state = self._state
        profile = coerce_profile(profile)
        candidates = [coerce_event(event) for event in events]
        scored_at = utcnow()
        workers = max_workers if max_workers is not None else self.config.max_workers

        if workers and workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(
                    lambda event: self._score(state, profile, event, scored_at),
                    candidates,
                ))
        else:
            results = [self._score(state, profile, event, scored_at) for event in candidates]

        scored = [r for r in results if r is not None]
        scored.sort(key=lambda s: s.relevance_score, reverse=True)

        logger.info(
            f"Scored {len(candidates)} events for profile {profile.id or '<anonymous>'}: "
            f"{len(scored)} above {self.config.thresholds.minimum_score} "
            f"in {time.time() - start_time:.3f}s"
        )

        return scored


# Process-wide engine (tables loaded once at first use)
_default_engine: Optional[RelevanceEngine] = None


def get_engine() -> RelevanceEngine:
    """Get or create the process-wide engine."""
    global _default_engine
    if _default_engine is None:
        tables = DEFAULT_TABLES
        if settings.intelligence_tables_path:
            tables = load_tables(settings.intelligence_tables_path)
        _default_engine = RelevanceEngine(config=settings.scoring, tables=tables)
    return _default_engine


def score_events(
    profile: Profile | Mapping[str, Any],
    events: Iterable[Event | Mapping[str, Any]],
    engine: Optional[RelevanceEngine] = None,
) -> list[ScoredEvent]:
    """Score, filter and rank events with the process-wide engine."""
    return (engine or get_engine()).score_events(profile, events)
