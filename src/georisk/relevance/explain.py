"""
Confidence levels and rationales derived from contributing factors.

Both are pure functions of the factor list, so the same factors always
produce the same confidence and rationale.
"""

from collections.abc import Sequence

from georisk.relevance.models import ConfidenceLevel, ContributingFactor

TOP_FACTOR_COUNT = 3

HIGH_CONFIDENCE_FAMILIES = 4
MEDIUM_CONFIDENCE_FAMILIES = 2

NO_FACTORS_RATIONALE = "No significant relevance factors identified"


def factor_family(factor_name: str) -> str:
    """Family of a factor: its name up to the first separator."""
    return factor_name.split("_", 1)[0]


def factor_families(factors: Sequence[ContributingFactor]) -> set[str]:
    """Distinct families with at least one non-zero factor."""
    return {factor_family(f.factor) for f in factors if f.weight != 0}


def determine_confidence(factors: Sequence[ContributingFactor]) -> ConfidenceLevel:
    """
    Confidence from how many independent factor families agree.

    4+ families is high, 2-3 is medium, fewer is low.
    """
    families = len(factor_families(factors))
    if families >= HIGH_CONFIDENCE_FAMILIES:
        return ConfidenceLevel.HIGH
    elif families >= MEDIUM_CONFIDENCE_FAMILIES:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def rank_factors(factors: Sequence[ContributingFactor]) -> list[ContributingFactor]:
    """Factors by weight, highest first; ties keep their original order."""
    return sorted(factors, key=lambda f: f.weight, reverse=True)


def generate_rationale(factors: Sequence[ContributingFactor], score: float) -> str:
    """Human-readable explanation naming the top three factors."""
    if not factors:
        return NO_FACTORS_RATIONALE

    top = rank_factors(factors)[:TOP_FACTOR_COUNT]
    rationale = (
        f"Relevance score: {score * 100:.1f}%. "
        f"Top factors: {'; '.join(f.description for f in top)}"
    )

    remaining = len(factors) - TOP_FACTOR_COUNT
    if remaining > 0:
        rationale += f" (and {remaining} additional factors)"

    return rationale
