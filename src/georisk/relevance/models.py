"""
Data model for relevance scoring.

Profiles and events are read-only inputs supplied by the profile and
event stores. ScoredEvent is the engine output; it is assembled by a
ScoredEventBuilder and frozen before it is handed to the caller.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from georisk.relevance.errors import InvalidInputError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConfidenceLevel(str, Enum):
    """Qualitative confidence derived from factor-family diversity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _get(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key, accepting camelCase and snake_case."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _as_tuple(values: Any) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(str(v) for v in values if v is not None)


def _optional_lower(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip().lower() or None


@dataclass(frozen=True)
class BusinessUnit:
    """A business unit of the profiled organization."""

    name: str
    description: str = ""
    regions: tuple[str, ...] = ()
    products: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | str) -> "BusinessUnit":
        if isinstance(data, str):
            return cls(name=data)
        return cls(
            name=str(_get(data, "name", default="")),
            description=str(_get(data, "description", default="")),
            regions=_as_tuple(_get(data, "regions")),
            products=_as_tuple(_get(data, "products")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "regions": list(self.regions),
            "products": list(self.products),
        }


@dataclass(frozen=True)
class AreaOfConcern:
    """A risk category the organization wants to track."""

    category: str
    description: str = ""
    priority: str = "medium"  # low, medium, high, critical

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | str) -> "AreaOfConcern":
        if isinstance(data, str):
            return cls(category=data)
        return cls(
            category=str(_get(data, "category", default="")),
            description=str(_get(data, "description", default="")),
            priority=str(_get(data, "priority", default="medium")).lower(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "description": self.description,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class Profile:
    """Organizational risk profile."""

    industry: str = ""
    business_units: tuple[BusinessUnit, ...] = ()
    areas_of_concern: tuple[AreaOfConcern, ...] = ()
    regions: tuple[str, ...] = ()
    risk_tolerance: str = "medium"  # low, medium, high

    id: Optional[str] = None
    name: Optional[str] = None
    company: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Profile":
        """Build a profile from a store document (camelCase or snake_case)."""
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Profile must be a mapping, got {type(data).__name__}"
            )
        profile_id = _get(data, "id", "_id")
        return cls(
            industry=str(_get(data, "industry", default="")),
            business_units=tuple(
                BusinessUnit.from_dict(unit)
                for unit in _get(data, "businessUnits", "business_units", default=[])
                if unit is not None
            ),
            areas_of_concern=tuple(
                AreaOfConcern.from_dict(concern)
                for concern in _get(data, "areasOfConcern", "areas_of_concern", default=[])
                if concern is not None
            ),
            regions=_as_tuple(_get(data, "regions")),
            risk_tolerance=str(
                _get(data, "riskTolerance", "risk_tolerance", default="medium")
            ).lower(),
            id=str(profile_id) if profile_id is not None else None,
            name=_get(data, "name"),
            company=_get(data, "company"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "company": self.company,
            "industry": self.industry,
            "businessUnits": [unit.to_dict() for unit in self.business_units],
            "areasOfConcern": [c.to_dict() for c in self.areas_of_concern],
            "regions": list(self.regions),
            "riskTolerance": self.risk_tolerance,
        }


@dataclass(frozen=True)
class PredictiveAnalytics:
    """Forward-looking annotations on an event."""

    timeframe: Optional[str] = None  # immediate, short-term, medium-term, long-term
    likelihood: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PredictiveAnalytics":
        likelihood = _get(data, "likelihood", "probability")
        return cls(
            timeframe=_optional_lower(_get(data, "timeframe")),
            likelihood=float(likelihood) if likelihood is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"timeframe": self.timeframe, "likelihood": self.likelihood}


_EVENT_FIELDS = {
    "id", "_id", "title", "description", "categories", "regions",
    "countries", "severity", "status", "predictiveAnalytics",
    "predictive_analytics",
}


@dataclass(frozen=True)
class Event:
    """A geopolitical risk event."""

    title: str = ""
    description: str = ""
    categories: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    countries: tuple[str, ...] = ()
    severity: Optional[str] = None  # low, medium, high, critical
    predictive_analytics: Optional[PredictiveAnalytics] = None
    status: str = "active"

    id: Optional[str] = None

    # Store fields the engine does not read (summary, source, eventDate, ...)
    extra: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def timeframe(self) -> Optional[str]:
        if self.predictive_analytics is None:
            return None
        return self.predictive_analytics.timeframe

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        """Build an event from a store document (camelCase or snake_case)."""
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Event must be a mapping, got {type(data).__name__}"
            )
        analytics = _get(data, "predictiveAnalytics", "predictive_analytics")
        event_id = _get(data, "id", "_id")
        return cls(
            title=str(_get(data, "title", default="")),
            description=str(_get(data, "description", default="")),
            categories=_as_tuple(_get(data, "categories")),
            regions=_as_tuple(_get(data, "regions")),
            countries=_as_tuple(_get(data, "countries")),
            severity=_optional_lower(_get(data, "severity")),
            predictive_analytics=(
                PredictiveAnalytics.from_dict(analytics)
                if isinstance(analytics, Mapping)
                else None
            ),
            status=str(_get(data, "status", default="active")).lower(),
            id=str(event_id) if event_id is not None else None,
            extra={k: v for k, v in data.items() if k not in _EVENT_FIELDS},
        )

    def to_dict(self) -> dict[str, Any]:
        result = dict(self.extra)
        result.update({
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "categories": list(self.categories),
            "regions": list(self.regions),
            "countries": list(self.countries),
            "severity": self.severity,
            "status": self.status,
            "predictiveAnalytics": (
                self.predictive_analytics.to_dict()
                if self.predictive_analytics
                else None
            ),
        })
        return result


@dataclass(frozen=True)
class ContributingFactor:
    """One named, weighted reason a component score is non-zero."""

    factor: str
    weight: float
    description: str
    timestamp: datetime = field(default_factory=utcnow, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "factor": self.factor,
            "weight": self.weight,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class ScoredEvent:
    """Relevance assessment of one event for one profile."""

    event: Event
    relevance_score: float
    contributing_factors: tuple[ContributingFactor, ...]
    confidence_level: ConfidenceLevel
    rationale: str
    last_updated: datetime = field(default_factory=utcnow, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event.to_dict(),
            "relevanceScore": self.relevance_score,
            "contributingFactors": [f.to_dict() for f in self.contributing_factors],
            "confidenceLevel": self.confidence_level.value,
            "rationale": self.rationale,
            "lastUpdated": self.last_updated.isoformat(),
        }


class ScoredEventBuilder:
    """
    Accumulates contributing factors for an event, then freezes them
    into an immutable ScoredEvent.
    """

    def __init__(self, event: Event, relevance_score: float):
        self.event = event
        self.relevance_score = relevance_score
        self._factors: list[ContributingFactor] = []
        self._built = False

    @property
    def factors(self) -> tuple[ContributingFactor, ...]:
        return tuple(self._factors)

    def add_factor(self, factor: ContributingFactor) -> "ScoredEventBuilder":
        if self._built:
            raise RuntimeError("ScoredEvent already built")
        self._factors.append(factor)
        return self

    def add_factors(self, factors: Iterable[ContributingFactor]) -> "ScoredEventBuilder":
        for factor in factors:
            self.add_factor(factor)
        return self

    def build(
        self,
        confidence_level: ConfidenceLevel,
        rationale: str,
        scored_at: Optional[datetime] = None,
    ) -> ScoredEvent:
        self._built = True
        return ScoredEvent(
            event=self.event,
            relevance_score=self.relevance_score,
            contributing_factors=tuple(self._factors),
            confidence_level=confidence_level,
            rationale=rationale,
            last_updated=scored_at or utcnow(),
        )


def coerce_profile(profile: Profile | Mapping[str, Any] | None) -> Profile:
    """Accept a Profile or a store document; reject missing input."""
    if profile is None:
        raise InvalidInputError("Profile is required")
    if isinstance(profile, Profile):
        return profile
    return Profile.from_dict(profile)


def coerce_event(event: Event | Mapping[str, Any] | None) -> Event:
    """Accept an Event or a store document; reject missing input."""
    if event is None:
        raise InvalidInputError("Event is required")
    if isinstance(event, Event):
        return event
    return Event.from_dict(event)
