"""
Basic single-formula relevance scoring and profile validation.

This is the lightweight strategy for quick profile/event checks. It is
separate from RelevanceEngine: it uses different weights, hard-coded
synonym mappings and a normalization by applicable weight instead of
intelligence tables and boosters.
"""

from collections.abc import Mapping
from typing import Any

from georisk.relevance.models import Event, Profile, coerce_event, coerce_profile

REQUIRED_PROFILE_FIELDS = (
    "name",
    "title",
    "company",
    "industry",
    "businessUnits",
    "areasOfConcern",
)

RISK_TOLERANCES = {"low", "medium", "high"}

# (profile term, event category term) pairs that count as a match
BUSINESS_UNIT_SYNONYMS = (
    ("semiconductor", "technology"),
    ("supply chain", "supply chain"),
    ("cloud", "technology"),
    ("ai", "technology"),
)

CONCERN_SYNONYMS = (
    ("trade disputes", "trade"),
    ("sanctions", "sanctions"),
    ("supply chain disruptions", "supply chain"),
    ("regulatory changes", "regulation"),
    ("cybersecurity threats", "cybersecurity"),
)

BUSINESS_UNIT_WEIGHT = 0.3
CONCERN_WEIGHT = 0.3
REGION_WEIGHT = 0.2
TEXT_WEIGHT = 0.2

MIN_TEXT_WORD_LENGTH = 4


def validate_profile(profile: Mapping[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate a profile document.

    Returns:
        Tuple of (is_valid, errors)
    """
    errors = []

    for field_name in REQUIRED_PROFILE_FIELDS:
        if not profile.get(field_name):
            errors.append(f"{field_name} is required")

    if profile.get("businessUnits") is not None and len(profile["businessUnits"]) == 0:
        errors.append("businessUnits cannot be empty")

    if profile.get("areasOfConcern") is not None and len(profile["areasOfConcern"]) == 0:
        errors.append("areasOfConcern cannot be empty")

    tolerance = profile.get("riskTolerance")
    if tolerance and tolerance not in RISK_TOLERANCES:
        errors.append("riskTolerance must be low, medium, or high")

    return len(errors) == 0, errors


def _term_matches(term: str, category: str, synonyms: tuple[tuple[str, str], ...]) -> bool:
    if not term or not category:
        return False
    if term in category or category in term:
        return True
    return any(a in term and b in category for a, b in synonyms)


def calculate_relevance_score(
    profile: Profile | Mapping[str, Any],
    event: Event | Mapping[str, Any],
) -> float:
    """
    Single-formula relevance between a profile and an event.

    Each applicable dimension adds its weight to the normalizer, so a
    profile without regions is scored only on the remaining dimensions.

    Raises:
        InvalidInputError: If profile or event is missing
    """
    profile = coerce_profile(profile)
    event = coerce_event(event)

    score = 0.0
    total_weight = 0.0
    categories = [c.lower() for c in event.categories if c]

    units = [u.name.lower() for u in profile.business_units if u.name]
    if units:
        matches = sum(
            1 for unit in units
            if any(_term_matches(unit, c, BUSINESS_UNIT_SYNONYMS) for c in categories)
        )
        score += matches / len(units) * BUSINESS_UNIT_WEIGHT
        total_weight += BUSINESS_UNIT_WEIGHT

    concerns = [c.category.lower() for c in profile.areas_of_concern if c.category]
    if concerns:
        matches = sum(
            1 for concern in concerns
            if any(_term_matches(concern, c, CONCERN_SYNONYMS) for c in categories)
        )
        score += matches / len(concerns) * CONCERN_WEIGHT
        total_weight += CONCERN_WEIGHT

    if profile.regions and event.regions:
        event_regions = [r.lower() for r in event.regions]
        matches = sum(
            1 for region in profile.regions
            if any(region.lower() in er for er in event_regions)
        )
        score += matches / len(profile.regions) * REGION_WEIGHT
        total_weight += REGION_WEIGHT

    if event.title and event.description:
        event_text = f"{event.title} {event.description}".lower()
        profile_words = " ".join(units + concerns).split()
        if profile_words:
            matches = sum(
                1 for word in profile_words
                if len(word) >= MIN_TEXT_WORD_LENGTH and word in event_text
            )
            score += matches / len(profile_words) * TEXT_WEIGHT
            total_weight += TEXT_WEIGHT

    return score / total_weight if total_weight > 0 else 0.0
