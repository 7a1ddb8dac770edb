"""
Relevance API routes.

Provides endpoints for:
- Ranked relevant events for a stored profile
- Scoring analytics over a profile's event feed
- Stateless scoring of a submitted profile and event batch
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Query, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from georisk.api.deps import Engine, EventStore, ProfileStore
from georisk.config import settings
from georisk.relevance.analytics import get_scoring_analytics
from georisk.relevance.models import ScoredEvent

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================

class RelevantEventsResponse(BaseModel):
    """Ranked events above the caller threshold."""
    success: bool = True
    events: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0


class ScoringAnalyticsResponse(BaseModel):
    """Analytics over a scored batch."""
    success: bool = True
    analytics: dict[str, Any]


class ScoreRequest(BaseModel):
    """A profile and candidate events to score without the stores."""
    profile: dict[str, Any]
    events: list[dict[str, Any]] = Field(default_factory=list)
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    include_analytics: bool = False


class ScoreResponse(RelevantEventsResponse):
    """Scored events plus optional analytics."""
    analytics: Optional[dict[str, Any]] = None


def _profile_not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "message": "Profile not found"},
    )


def _above(scored: list[ScoredEvent], threshold: float) -> list[ScoredEvent]:
    return [s for s in scored if s.relevance_score >= threshold]


# ============================================================================
# Endpoints
# ============================================================================

@router.get(
    "/profiles/{profile_id}/relevant-events",
    response_model=RelevantEventsResponse,
    responses={404: {"description": "Profile not found"}},
)
async def get_relevant_events(
    profile_id: str,
    profiles: ProfileStore,
    events: EventStore,
    engine: Engine,
    threshold: Optional[float] = Query(
        default=None,
        ge=0.0,
        le=1.0,
        description="Minimum relevance score (defaults to the configured threshold)",
    ),
):
    """
    Get active events relevant to a profile, highest score first.

    The threshold is applied on top of the engine's own minimum score.
    """
    profile = await profiles.get_by_id(profile_id)
    if profile is None:
        return _profile_not_found()

    if threshold is None:
        threshold = settings.default_relevance_threshold

    scored = await run_in_threadpool(engine.score_events, profile, await events.list_active())
    relevant = _above(scored, threshold)

    return RelevantEventsResponse(
        events=[s.to_dict() for s in relevant],
        total=len(relevant),
    )


@router.get(
    "/profiles/{profile_id}/scoring-analytics",
    response_model=ScoringAnalyticsResponse,
    responses={404: {"description": "Profile not found"}},
)
async def get_profile_scoring_analytics(
    profile_id: str,
    profiles: ProfileStore,
    events: EventStore,
    engine: Engine,
):
    """Summarize how a profile's active event feed scores."""
    profile = await profiles.get_by_id(profile_id)
    if profile is None:
        return _profile_not_found()

    scored = await run_in_threadpool(engine.score_events, profile, await events.list_active())
    analytics = get_scoring_analytics(scored, engine.config.thresholds)

    return ScoringAnalyticsResponse(analytics=analytics.to_dict())


@router.post("/score", response_model=ScoreResponse)
async def score_submitted_events(request: ScoreRequest, engine: Engine):
    """
    Score a submitted profile against submitted events.

    Without a threshold only the engine's minimum score applies.
    """
    scored = await run_in_threadpool(engine.score_events, request.profile, request.events)
    if request.threshold is not None:
        scored = _above(scored, request.threshold)

    analytics = None
    if request.include_analytics:
        analytics = get_scoring_analytics(scored, engine.config.thresholds).to_dict()

    return ScoreResponse(
        events=[s.to_dict() for s in scored],
        total=len(scored),
        analytics=analytics,
    )
