"""
Pytest configuration and shared fixtures for GeoRisk tests.
"""

import pytest

from georisk.config import ScoringConfig
from georisk.relevance.engine import RelevanceEngine
from georisk.relevance.models import Event, Profile
from georisk.relevance.tables import DEFAULT_TABLES
from georisk.relevance.text import KeywordMatcher


@pytest.fixture
def scoring_config() -> ScoringConfig:
    """Default scoring configuration."""
    return ScoringConfig()


@pytest.fixture
def engine(scoring_config) -> RelevanceEngine:
    """Create a relevance engine with the built-in tables."""
    return RelevanceEngine(config=scoring_config, tables=DEFAULT_TABLES)


@pytest.fixture
def matcher() -> KeywordMatcher:
    """Substring keyword matcher."""
    return KeywordMatcher("substring")


@pytest.fixture
def tech_profile() -> Profile:
    """Technology company with a semiconductor unit and trade concerns."""
    return Profile.from_dict({
        "id": "profile-tech",
        "industry": "technology",
        "businessUnits": [{"name": "semiconductor"}],
        "areasOfConcern": [{"category": "trade disputes", "priority": "high"}],
        "regions": ["asia-pacific"],
        "riskTolerance": "medium",
    })


@pytest.fixture
def empty_profile() -> Profile:
    """Profile with every collection empty."""
    return Profile.from_dict({"id": "profile-empty", "industry": ""})


@pytest.fixture
def trade_event() -> Event:
    """High-severity US-China trade event."""
    return Event.from_dict({
        "id": "evt-trade",
        "title": "US-China Trade Tensions Escalate",
        "categories": ["Trade", "Technology"],
        "regions": ["Asia-Pacific"],
        "severity": "high",
    })


@pytest.fixture
def agriculture_event() -> Event:
    """Low-severity event unrelated to the technology profile."""
    return Event.from_dict({
        "id": "evt-agri",
        "title": "Drought Reduces Wheat Harvest",
        "description": "Crop yields fall after a dry season.",
        "categories": ["Agriculture"],
        "regions": ["Antarctica"],
        "severity": "low",
    })


@pytest.fixture
def saturated_event() -> Event:
    """Event matching almost every technology pattern."""
    return Event.from_dict({
        "id": "evt-saturated",
        "title": (
            "US-China tensions: trade restrictions on semiconductor exports "
            "to Taiwan, Japan, South Korea"
        ),
        "description": (
            "Rare earth shortages; intellectual property, antitrust, "
            "export controls and technology transfer"
        ),
        "categories": ["Trade", "Technology", "Trade Disputes"],
        "regions": ["Asia-Pacific"],
        "severity": "critical",
        "predictiveAnalytics": {"timeframe": "immediate"},
    })
