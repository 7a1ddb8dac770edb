"""
Event text normalization and keyword matching.

Two matching modes:
- substring: plain containment on lower-cased text, so "war" also
  matches inside "warehouse". This is the default.
- word_boundary: FlashText keyword extraction, which only matches
  whole words and phrases.
"""

from functools import lru_cache
from typing import Literal

from flashtext import KeywordProcessor

from georisk.relevance.models import Event

MatchingMode = Literal["substring", "word_boundary"]


def normalize_event_text(event: Event) -> str:
    """Concatenate title and description, lower-cased."""
    return f"{event.title or ''} {event.description or ''}".lower()


@lru_cache(maxsize=1024)
def _processor_for(keyword: str) -> KeywordProcessor:
    # One keyword per processor: extraction keeps only the longest match at a
    # position, so "china" would be lost inside "south china sea"
    processor = KeywordProcessor(case_sensitive=False)
    processor.add_keyword(keyword)
    return processor


class KeywordMatcher:
    """Counts how many keywords of a list occur in normalized text."""

    def __init__(self, mode: MatchingMode = "substring"):
        if mode not in ("substring", "word_boundary"):
            raise ValueError(f"Unknown matching mode: {mode}")
        self.mode = mode

    def matches(self, keywords: tuple[str, ...], text: str) -> list[str]:
        """Return the keywords found in text, in list order."""
        if not keywords or not text:
            return []

        if self.mode == "substring":
            return [k for k in keywords if k.lower() in text]

        return [k for k in keywords if _processor_for(k.lower()).extract_keywords(text)]

    def count(self, keywords: tuple[str, ...], text: str) -> int:
        return len(self.matches(keywords, text))
