"""
Tests for the basic relevance formula and profile validation.
"""

import pytest

from georisk.relevance.basic import calculate_relevance_score, validate_profile
from georisk.relevance.errors import InvalidInputError


@pytest.fixture
def profile_doc():
    return {
        "name": "Jane Doe",
        "title": "CRO",
        "company": "Acme",
        "industry": "Technology",
        "businessUnits": [{"name": "Semiconductor"}],
        "areasOfConcern": [{"category": "Trade Disputes"}],
        "regions": ["Asia"],
        "riskTolerance": "medium",
    }


@pytest.fixture
def chip_event():
    return {
        "title": "Chip export curbs",
        "description": "New semiconductor export rules announced",
        "categories": ["Technology", "Trade"],
        "regions": ["East Asia"],
    }


class TestCalculateRelevanceScore:
    def test_all_dimensions(self, profile_doc, chip_event):
        """Synonym unit match, concern, region and one of three profile words."""
        score = calculate_relevance_score(profile_doc, chip_event)

        assert score == pytest.approx(0.3 + 0.3 + 0.2 + 0.2 / 3)

    def test_normalized_by_applicable_weight(self, profile_doc, chip_event):
        """Without regions the remaining weights are rescaled."""
        profile_doc["regions"] = []

        score = calculate_relevance_score(profile_doc, chip_event)

        assert score == pytest.approx((0.3 + 0.3 + 0.2 / 3) / 0.8)

    def test_text_needs_title_and_description(self, profile_doc, chip_event):
        chip_event["description"] = ""

        score = calculate_relevance_score(profile_doc, chip_event)

        assert score == pytest.approx(1.0)

    def test_nothing_applicable(self):
        assert calculate_relevance_score({}, {}) == 0.0

    def test_missing_input(self, profile_doc):
        with pytest.raises(InvalidInputError):
            calculate_relevance_score(profile_doc, None)


class TestValidateProfile:
    def test_valid(self, profile_doc):
        assert validate_profile(profile_doc) == (True, [])

    def test_missing_fields(self):
        valid, errors = validate_profile({"industry": "Technology"})

        assert not valid
        assert "name is required" in errors
        assert "businessUnits is required" in errors

    def test_empty_lists_and_tolerance(self, profile_doc):
        profile_doc["businessUnits"] = []
        profile_doc["riskTolerance"] = "extreme"

        valid, errors = validate_profile(profile_doc)

        assert not valid
        assert "businessUnits cannot be empty" in errors
        assert "riskTolerance must be low, medium, or high" in errors
