"""
Errors raised by the relevance engine.
"""


class InvalidInputError(ValueError):
    """Raised when a profile or event is missing or not scoreable."""

    pass


class IntelligenceTableError(ValueError):
    """Raised when an intelligence table document is malformed."""

    pass
