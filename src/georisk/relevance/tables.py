"""
Intelligence tables for indirect relevance matching.

Four static lookups, each keyed by a lower-cased domain key:
- Industry -> supply chain, regulatory and geopolitical risk keywords
- Region -> related regions and regional risk keywords
- Business unit type -> related categories and unit-specific risks
- Risk category -> related risks, cascading effects, impacted industries

Tables are built once and never mutated. Replacing them means building a
new IntelligenceTables and swapping the reference on the engine.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Union

from georisk.relevance.errors import IntelligenceTableError

logger = logging.getLogger(__name__)


def _keywords(values: Any, *, where: str) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise IntelligenceTableError(f"{where}: expected a list of strings")
    return tuple(str(v).strip().lower() for v in values if str(v).strip())


@dataclass(frozen=True)
class IndustryIntelligence:
    """Risk patterns associated with an industry."""

    supply_chain_risks: tuple[str, ...] = ()
    regulatory_risks: tuple[str, ...] = ()
    geopolitical_risks: tuple[str, ...] = ()
    upstream_risks: tuple[str, ...] = ()
    downstream_risks: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "industry") -> "IndustryIntelligence":
        return cls(
            supply_chain_risks=_keywords(data.get("supplyChainRisks"), where=where),
            regulatory_risks=_keywords(data.get("regulatoryRisks"), where=where),
            geopolitical_risks=_keywords(data.get("geopoliticalRisks"), where=where),
            upstream_risks=_keywords(data.get("upstreamRisks"), where=where),
            downstream_risks=_keywords(data.get("downstreamRisks"), where=where),
        )


@dataclass(frozen=True)
class GeographicIntelligence:
    """Related regions and risks for a geographic region."""

    related_regions: tuple[str, ...] = ()
    supply_chain_risks: tuple[str, ...] = ()
    geopolitical_risks: tuple[str, ...] = ()
    economic_risks: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "geographic") -> "GeographicIntelligence":
        return cls(
            related_regions=_keywords(data.get("relatedRegions"), where=where),
            supply_chain_risks=_keywords(data.get("supplyChainRisks"), where=where),
            geopolitical_risks=_keywords(data.get("geopoliticalRisks"), where=where),
            economic_risks=_keywords(data.get("economicRisks"), where=where),
        )


@dataclass(frozen=True)
class BusinessUnitIntelligence:
    """Related categories and risks for a business unit type."""

    related_categories: tuple[str, ...] = ()
    geographic_risks: tuple[str, ...] = ()
    regulatory_risks: tuple[str, ...] = ()
    supply_chain_risks: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "business_unit") -> "BusinessUnitIntelligence":
        return cls(
            related_categories=_keywords(data.get("relatedCategories"), where=where),
            geographic_risks=_keywords(data.get("geographicRisks"), where=where),
            regulatory_risks=_keywords(data.get("regulatoryRisks"), where=where),
            supply_chain_risks=_keywords(data.get("supplyChainRisks"), where=where),
        )


@dataclass(frozen=True)
class RiskCorrelation:
    """Correlated risks and impacted industries for a risk category."""

    related_risks: tuple[str, ...] = ()
    cascading_effects: tuple[str, ...] = ()
    industry_impact: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], where: str = "risk_correlation") -> "RiskCorrelation":
        return cls(
            related_risks=_keywords(data.get("relatedRisks"), where=where),
            cascading_effects=_keywords(data.get("cascadingEffects"), where=where),
            industry_impact=_keywords(data.get("industryImpact"), where=where),
        )


_SECTIONS = {
    "industry": IndustryIntelligence,
    "geographic": GeographicIntelligence,
    "business_unit": BusinessUnitIntelligence,
    "risk_correlation": RiskCorrelation,
}


def _freeze(entries: Mapping[str, Any], entry_cls: type, section: str) -> Mapping[str, Any]:
    if not isinstance(entries, Mapping):
        raise IntelligenceTableError(f"{section}: expected an object of entries")
    frozen = {}
    for key, entry in entries.items():
        if not isinstance(entry, Mapping):
            raise IntelligenceTableError(f"{section}.{key}: expected an object")
        frozen[str(key).strip().lower()] = entry_cls.from_dict(entry, where=f"{section}.{key}")
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class IntelligenceTables:
    """The four read-only lookup tables used by the intelligence scorers."""

    industry: Mapping[str, IndustryIntelligence]
    geographic: Mapping[str, GeographicIntelligence]
    business_unit: Mapping[str, BusinessUnitIntelligence]
    risk_correlation: Mapping[str, RiskCorrelation]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IntelligenceTables":
        """
        Build tables from a document with the four section keys.

        Entries use camelCase field names. Keys and keywords are
        lower-cased; missing sections become empty tables.
        """
        if not isinstance(data, Mapping):
            raise IntelligenceTableError("Intelligence tables must be a JSON object")

        unknown = set(data) - set(_SECTIONS)
        if unknown:
            logger.warning(f"Ignoring unknown intelligence table sections: {sorted(unknown)}")

        return cls(**{
            section: _freeze(data.get(section, {}), entry_cls, section)
            for section, entry_cls in _SECTIONS.items()
        })

    def summary(self) -> dict[str, int]:
        return {section: len(getattr(self, section)) for section in _SECTIONS}


def load_tables(path: Union[str, Path]) -> IntelligenceTables:
    """Load intelligence tables from a JSON file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise IntelligenceTableError(f"Invalid JSON in {path}: {e}") from e

    tables = IntelligenceTables.from_dict(data)
    logger.info(f"Loaded intelligence tables from {path}: {tables.summary()}")
    return tables


DEFAULT_TABLE_DATA: dict[str, dict[str, dict[str, list[str]]]] = {
    "industry": {
        "technology": {
            "supplyChainRisks": ["semiconductor", "rare earth", "china", "taiwan", "south korea", "japan"],
            "regulatoryRisks": ["data privacy", "antitrust", "ai regulation", "cybersecurity"],
            "geopoliticalRisks": ["us-china tensions", "trade restrictions", "intellectual property"],
            "upstreamRisks": ["raw materials", "manufacturing", "logistics"],
            "downstreamRisks": ["consumer demand", "market competition", "distribution"],
        },
        "manufacturing": {
            "supplyChainRisks": ["raw materials", "commodities", "logistics", "supplier disruption"],
            "regulatoryRisks": ["environmental regulations", "labor laws", "safety standards"],
            "geopoliticalRisks": ["trade wars", "tariffs", "sanctions", "political instability"],
            "upstreamRisks": ["energy prices", "transportation", "component suppliers"],
            "downstreamRisks": ["consumer demand", "retail disruption", "export markets"],
        },
        "finance": {
            "supplyChainRisks": ["payment systems", "digital infrastructure", "data centers"],
            "regulatoryRisks": ["financial regulations", "compliance", "capital requirements"],
            "geopoliticalRisks": ["sanctions", "currency fluctuations", "political instability"],
            "upstreamRisks": ["technology providers", "regulatory bodies", "market infrastructure"],
            "downstreamRisks": ["client behavior", "market sentiment", "economic conditions"],
        },
        "healthcare": {
            "supplyChainRisks": ["pharmaceuticals", "medical devices", "raw materials"],
            "regulatoryRisks": ["fda regulations", "compliance", "data privacy"],
            "geopoliticalRisks": ["trade restrictions", "intellectual property", "research collaboration"],
            "upstreamRisks": ["research institutions", "manufacturing", "distribution"],
            "downstreamRisks": ["patient access", "insurance coverage", "healthcare policy"],
        },
        "retail": {
            "supplyChainRisks": ["consumer goods", "logistics", "inventory management"],
            "regulatoryRisks": ["consumer protection", "labor laws", "environmental standards"],
            "geopoliticalRisks": ["consumer confidence", "economic conditions", "trade policies"],
            "upstreamRisks": ["manufacturers", "distributors", "suppliers"],
            "downstreamRisks": ["consumer behavior", "market competition", "economic trends"],
        },
    },
    "geographic": {
        "vietnam": {
            "relatedRegions": ["south china sea", "southeast asia", "china", "thailand", "cambodia"],
            "supplyChainRisks": ["shipping routes", "manufacturing disruption", "labor costs"],
            "geopoliticalRisks": ["us-china tensions", "territorial disputes", "trade agreements"],
            "economicRisks": ["currency fluctuations", "inflation", "economic growth"],
        },
        "china": {
            "relatedRegions": ["taiwan", "hong kong", "south china sea", "southeast asia"],
            "supplyChainRisks": ["manufacturing disruption", "trade restrictions", "intellectual property"],
            "geopoliticalRisks": ["us-china tensions", "territorial disputes", "sanctions"],
            "economicRisks": ["economic slowdown", "currency manipulation", "debt levels"],
        },
        "taiwan": {
            "relatedRegions": ["china", "south china sea", "japan", "south korea"],
            "supplyChainRisks": ["semiconductor manufacturing", "technology supply chain"],
            "geopoliticalRisks": ["us-china tensions", "territorial disputes", "military conflict"],
            "economicRisks": ["trade restrictions", "investment flows", "technology transfer"],
        },
        "europe": {
            "relatedRegions": ["european union", "uk", "eastern europe", "mediterranean"],
            "supplyChainRisks": ["energy supply", "trade agreements", "regulatory changes"],
            "geopoliticalRisks": ["brexit", "eurozone crisis", "russian relations"],
            "economicRisks": ["economic integration", "currency stability", "trade policies"],
        },
        "middle east": {
            "relatedRegions": ["persian gulf", "red sea", "mediterranean", "north africa"],
            "supplyChainRisks": ["oil supply", "shipping routes", "energy prices"],
            "geopoliticalRisks": ["regional conflicts", "iran sanctions", "israel-palestine"],
            "economicRisks": ["oil prices", "economic sanctions", "political instability"],
        },
    },
    "business_unit": {
        "semiconductor": {
            "relatedCategories": ["technology", "supply chain", "trade", "intellectual property"],
            "geographicRisks": ["taiwan", "china", "south korea", "japan"],
            "regulatoryRisks": ["export controls", "technology transfer", "antitrust"],
            "supplyChainRisks": ["rare earth materials", "manufacturing equipment", "packaging"],
        },
        "cloud services": {
            "relatedCategories": ["technology", "cybersecurity", "data privacy", "regulation"],
            "geographicRisks": ["data sovereignty", "cross-border data flows"],
            "regulatoryRisks": ["data protection", "antitrust", "national security"],
            "supplyChainRisks": ["data centers", "network infrastructure", "energy supply"],
        },
        "supply chain": {
            "relatedCategories": ["logistics", "trade", "manufacturing", "transportation"],
            "geographicRisks": ["shipping routes", "port disruptions", "border closures"],
            "regulatoryRisks": ["customs regulations", "trade agreements", "sanctions"],
            "supplyChainRisks": ["supplier disruption", "inventory management", "cost increases"],
        },
        "ai/machine learning": {
            "relatedCategories": ["technology", "regulation", "intellectual property", "ethics"],
            "geographicRisks": ["technology transfer", "talent competition"],
            "regulatoryRisks": ["ai regulation", "data privacy", "algorithmic bias"],
            "supplyChainRisks": ["computing resources", "data access", "talent pipeline"],
        },
    },
    "risk_correlation": {
        "trade disputes": {
            "relatedRisks": ["tariffs", "sanctions", "supply chain disruption", "currency fluctuations"],
            "cascadingEffects": ["inflation", "economic slowdown", "political tensions"],
            "industryImpact": ["manufacturing", "retail", "agriculture", "technology"],
        },
        "cybersecurity threats": {
            "relatedRisks": ["data breaches", "ransomware", "state-sponsored attacks", "infrastructure disruption"],
            "cascadingEffects": ["reputation damage", "regulatory scrutiny", "operational disruption"],
            "industryImpact": ["finance", "healthcare", "technology", "government"],
        },
        "supply chain disruptions": {
            "relatedRisks": ["logistics delays", "inventory shortages", "cost increases", "quality issues"],
            "cascadingEffects": ["production delays", "revenue loss", "customer dissatisfaction"],
            "industryImpact": ["manufacturing", "retail", "automotive", "electronics"],
        },
        "regulatory changes": {
            "relatedRisks": ["compliance costs", "operational changes", "market access", "competitive dynamics"],
            "cascadingEffects": ["business model changes", "industry consolidation", "innovation slowdown"],
            "industryImpact": ["finance", "healthcare", "technology", "energy"],
        },
        "political instability": {
            "relatedRisks": ["policy uncertainty", "regulatory changes", "economic volatility", "social unrest"],
            "cascadingEffects": ["investment delays", "market volatility", "operational risks"],
            "industryImpact": ["all industries", "emerging markets", "government contractors"],
        },
    },
}

# Built once at import; shared by read-only reference
DEFAULT_TABLES = IntelligenceTables.from_dict(DEFAULT_TABLE_DATA)
