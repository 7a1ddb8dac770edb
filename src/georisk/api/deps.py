"""
FastAPI dependencies for the API.

Provides:
- Profile and event stores from application state
- The relevance engine
"""

from typing import Annotated

from fastapi import Depends, Request

from georisk.relevance.engine import RelevanceEngine
from georisk.stores import InMemoryEventStore, InMemoryProfileStore


def get_profile_store(request: Request) -> InMemoryProfileStore:
    """Profile store created during app startup."""
    return request.app.state.profile_store


def get_event_store(request: Request) -> InMemoryEventStore:
    """Event store created during app startup."""
    return request.app.state.event_store


def get_relevance_engine(request: Request) -> RelevanceEngine:
    """Engine created during app startup."""
    return request.app.state.engine


# Type aliases for dependency injection
ProfileStore = Annotated[InMemoryProfileStore, Depends(get_profile_store)]
EventStore = Annotated[InMemoryEventStore, Depends(get_event_store)]
Engine = Annotated[RelevanceEngine, Depends(get_relevance_engine)]
