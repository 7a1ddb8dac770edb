"""
Component scorers for event relevance.

Each scorer looks at one aspect of the profile/event pair and returns a
component score plus the factors that produced it:
- DirectMatchScorer: literal business unit, concern and region matches
- IndustryIntelligenceScorer: industry risk keywords in the event text
- GeographicIntelligenceScorer: regional correlations in the event text
- BusinessUnitIntelligenceScorer: unit-specific categories and risks
- RiskCorrelationScorer: correlated risks for the event's categories

Scores from multi-match scorers accumulate across matches and are not
clamped here; the booster clamps the final result.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from georisk.relevance.models import ContributingFactor, Event, Profile
from georisk.relevance.tables import IntelligenceTables
from georisk.relevance.text import KeywordMatcher


@dataclass
class ComponentScore:
    """Result of one component scorer."""

    component: str
    score: float = 0.0
    factors: list[ContributingFactor] = field(default_factory=list)

    def add(self, factor: str, weight: float, description: str) -> None:
        self.score += weight
        self.factors.append(
            ContributingFactor(factor=factor, weight=weight, description=description)
        )


def _contains_either_way(a: str, b: str) -> bool:
    if not a or not b:
        return False
    return a in b or b in a


def _lowered(values) -> list[str]:
    return [v.strip().lower() for v in values if v and v.strip()]


class ComponentScorer(ABC):
    """
    Base class for component scorers.

    A scorer is a pure function of (profile, event, normalized text) and
    the tables it was built with. New strategies (for example embedding
    similarity) plug in by subclassing this and registering a weight.
    """

    component: str = ""

    def __init__(self, tables: IntelligenceTables, matcher: KeywordMatcher):
        self.tables = tables
        self.matcher = matcher

    @abstractmethod
    def score(self, profile: Profile, event: Event, text: str) -> ComponentScore:
        """Score one event for one profile."""
        ...


class DirectMatchScorer(ComponentScorer):
    """Literal matches between profile fields and event tags."""

    component = "direct_match"

    BUSINESS_UNIT_WEIGHT = 0.4
    CONCERN_WEIGHT = 0.4
    REGION_WEIGHT = 0.2

    def score(self, profile: Profile, event: Event, text: str) -> ComponentScore:
        result = ComponentScore(self.component)
        categories = _lowered(event.categories)
        event_regions = _lowered(event.regions)

        # Business units vs event categories (either contains the other)
        units = profile.business_units
        if units:
            matches = sum(
                1 for unit in units
                if any(_contains_either_way(unit.name.strip().lower(), c) for c in categories)
            )
            if matches:
                result.add(
                    "business_units",
                    matches / len(units) * self.BUSINESS_UNIT_WEIGHT,
                    f"Matched {matches} of {len(units)} business units",
                )

        # Areas of concern vs event categories
        concerns = profile.areas_of_concern
        if concerns:
            matches = sum(
                1 for concern in concerns
                if any(
                    _contains_either_way(concern.category.strip().lower(), c)
                    for c in categories
                )
            )
            if matches:
                result.add(
                    "areas_of_concern",
                    matches / len(concerns) * self.CONCERN_WEIGHT,
                    f"Matched {matches} of {len(concerns)} areas of concern",
                )

        # Profile regions contained in event regions
        regions = _lowered(profile.regions)
        if regions:
            matches = sum(
                1 for region in regions
                if any(region in event_region for event_region in event_regions)
            )
            if matches:
                result.add(
                    "regions",
                    matches / len(profile.regions) * self.REGION_WEIGHT,
                    f"Matched {matches} of {len(profile.regions)} regions",
                )

        return result


class IndustryIntelligenceScorer(ComponentScorer):
    """Industry risk patterns found in the event text."""

    component = "industry"

    SUPPLY_CHAIN_WEIGHT = 0.3
    REGULATORY_WEIGHT = 0.3
    GEOPOLITICAL_WEIGHT = 0.4

    def score(self, profile: Profile, event: Event, text: str) -> ComponentScore:
        result = ComponentScore(self.component)
        industry = (profile.industry or "").strip().lower()
        patterns = self.tables.industry.get(industry)

        if patterns is None:
            return result

        buckets = [
            ("industry_supply_chain", patterns.supply_chain_risks,
             self.SUPPLY_CHAIN_WEIGHT, "supply chain"),
            ("industry_regulatory", patterns.regulatory_risks,
             self.REGULATORY_WEIGHT, "regulatory"),
            ("industry_geopolitical", patterns.geopolitical_risks,
             self.GEOPOLITICAL_WEIGHT, "geopolitical"),
        ]

        for name, keywords, weight, label in buckets:
            matches = self.matcher.count(keywords, text)
            if matches:
                result.add(
                    name,
                    matches / len(keywords) * weight,
                    f"Industry {label} risk pattern matched ({matches} terms)",
                )

        return result


class GeographicIntelligenceScorer(ComponentScorer):
    """
    Regional correlations found in the event text.

    Every profile region with a table entry contributes; contributions
    are summed, not averaged.
    """

    component = "geographic"

    RELATED_REGION_WEIGHT = 0.4
    SUPPLY_CHAIN_WEIGHT = 0.3
    GEOPOLITICAL_WEIGHT = 0.3

    def score(self, profile: Profile, event: Event, text: str) -> ComponentScore:
        result = ComponentScore(self.component)

        for region in profile.regions:
            geo = self.tables.geographic.get(region.strip().lower())
            if geo is None:
                continue

            matches = self.matcher.count(geo.related_regions, text)
            if matches:
                result.add(
                    "geographic_correlation",
                    matches / len(geo.related_regions) * self.RELATED_REGION_WEIGHT,
                    f"Geographic correlation: {region} -> {matches} related regions",
                )

            matches = self.matcher.count(geo.supply_chain_risks, text)
            if matches:
                result.add(
                    "geographic_supply_chain",
                    matches / len(geo.supply_chain_risks) * self.SUPPLY_CHAIN_WEIGHT,
                    f"Geographic supply chain risk: {region} -> {matches} terms",
                )

            matches = self.matcher.count(geo.geopolitical_risks, text)
            if matches:
                result.add(
                    "geographic_geopolitical",
                    matches / len(geo.geopolitical_risks) * self.GEOPOLITICAL_WEIGHT,
                    f"Geographic geopolitical risk: {region} -> {matches} terms",
                )

        return result


class BusinessUnitIntelligenceScorer(ComponentScorer):
    """Unit-specific categories and risks, summed across units."""

    component = "business_unit"

    CATEGORY_WEIGHT = 0.4
    GEOGRAPHIC_WEIGHT = 0.3
    REGULATORY_WEIGHT = 0.3

    def score(self, profile: Profile, event: Event, text: str) -> ComponentScore:
        result = ComponentScore(self.component)
        categories = _lowered(event.categories)

        for unit in profile.business_units:
            intel = self.tables.business_unit.get(unit.name.strip().lower())
            if intel is None:
                continue

            # Related categories are matched against event categories
            matches = sum(
                1 for related in intel.related_categories
                if any(related in category for category in categories)
            )
            if matches:
                result.add(
                    "business_unit_categories",
                    matches / len(intel.related_categories) * self.CATEGORY_WEIGHT,
                    f"Business unit {unit.name}: {matches} related categories",
                )

            matches = self.matcher.count(intel.geographic_risks, text)
            if matches:
                result.add(
                    "business_unit_geographic",
                    matches / len(intel.geographic_risks) * self.GEOGRAPHIC_WEIGHT,
                    f"Business unit {unit.name}: {matches} geographic risks",
                )

            matches = self.matcher.count(intel.regulatory_risks, text)
            if matches:
                result.add(
                    "business_unit_regulatory",
                    matches / len(intel.regulatory_risks) * self.REGULATORY_WEIGHT,
                    f"Business unit {unit.name}: {matches} regulatory risks",
                )

        return result


class RiskCorrelationScorer(ComponentScorer):
    """Correlated risks and industry impact for the event's categories."""

    component = "risk_correlation"

    RELATED_RISK_WEIGHT = 0.5
    INDUSTRY_IMPACT_BONUS = 0.3

    def score(self, profile: Profile, event: Event, text: str) -> ComponentScore:
        result = ComponentScore(self.component)
        concerns = _lowered(c.category for c in profile.areas_of_concern)
        industry = (profile.industry or "").strip().lower()

        for category in event.categories:
            correlation = self.tables.risk_correlation.get(category.strip().lower())
            if correlation is None:
                continue

            if concerns:
                matches = sum(
                    1 for concern in concerns
                    if any(risk in concern for risk in correlation.related_risks)
                )
                if matches:
                    result.add(
                        "risk_correlation",
                        matches / len(profile.areas_of_concern) * self.RELATED_RISK_WEIGHT,
                        f"Risk correlation: {category} -> {matches} related concerns",
                    )

            if industry and any(impact in industry for impact in correlation.industry_impact):
                result.add(
                    "risk_industry_impact",
                    self.INDUSTRY_IMPACT_BONUS,
                    f"Risk industry impact: {category} affects {profile.industry}",
                )

        return result


DEFAULT_SCORERS: tuple[type[ComponentScorer], ...] = (
    DirectMatchScorer,
    IndustryIntelligenceScorer,
    GeographicIntelligenceScorer,
    BusinessUnitIntelligenceScorer,
    RiskCorrelationScorer,
)


def build_scorers(
    tables: IntelligenceTables,
    matcher: KeywordMatcher,
) -> tuple[ComponentScorer, ...]:
    """Instantiate the five standard scorers against one set of tables."""
    return tuple(scorer_cls(tables, matcher) for scorer_cls in DEFAULT_SCORERS)
