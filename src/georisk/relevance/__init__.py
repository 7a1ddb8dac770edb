"""
Event relevance scoring for GeoRisk.

Provides:
- Profile and event data model
- Intelligence tables (industry, geographic, business unit, risk correlation)
- Component scorers and weighted combination with boosters
- Confidence levels and rationales for every score
- Batch analytics
- The basic single-formula strategy
"""

from georisk.relevance.analytics import ScoringAnalytics, get_scoring_analytics
from georisk.relevance.basic import calculate_relevance_score, validate_profile
from georisk.relevance.engine import (
    EventAssessment,
    RelevanceEngine,
    get_engine,
    score_events,
)
from georisk.relevance.errors import IntelligenceTableError, InvalidInputError
from georisk.relevance.models import (
    AreaOfConcern,
    BusinessUnit,
    ConfidenceLevel,
    ContributingFactor,
    Event,
    PredictiveAnalytics,
    Profile,
    ScoredEvent,
    ScoredEventBuilder,
)
from georisk.relevance.tables import (
    DEFAULT_TABLES,
    IntelligenceTables,
    load_tables,
)

__all__ = [
    # Engine
    "RelevanceEngine",
    "EventAssessment",
    "get_engine",
    "score_events",
    # Analytics
    "ScoringAnalytics",
    "get_scoring_analytics",
    # Basic strategy
    "calculate_relevance_score",
    "validate_profile",
    # Models
    "AreaOfConcern",
    "BusinessUnit",
    "ConfidenceLevel",
    "ContributingFactor",
    "Event",
    "PredictiveAnalytics",
    "Profile",
    "ScoredEvent",
    "ScoredEventBuilder",
    # Tables
    "DEFAULT_TABLES",
    "IntelligenceTables",
    "load_tables",
    # Errors
    "IntelligenceTableError",
    "InvalidInputError",
]
