"""
GeoRisk - Geopolitical Event Relevance Platform

FastAPI application entry point.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from georisk import __version__
from georisk.config import settings
from georisk.relevance.engine import get_engine
from georisk.relevance.errors import InvalidInputError
from georisk.stores import InMemoryEventStore, InMemoryProfileStore, load_seed_data

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log requests with timing."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()

        request_id = request.headers.get("X-Request-ID", f"req_{int(time.time() * 1000)}")

        logger.info(f"Request: {request.method} {request.url.path} [{request_id}]")

        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        logger.info(
            f"Response: {request.method} {request.url.path} "
            f"[{request_id}] status={response.status_code} time={process_time:.3f}s"
        )

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting GeoRisk...")

    # Tables and weights are validated here, once
    app.state.engine = get_engine()

    if settings.seed_data_path:
        app.state.profile_store, app.state.event_store = load_seed_data(settings.seed_data_path)
    else:
        app.state.profile_store = InMemoryProfileStore()
        app.state.event_store = InMemoryEventStore()

    logger.info(f"GeoRisk started with tables {app.state.engine.tables.summary()}")

    yield

    logger.info("GeoRisk shutdown complete")


app = FastAPI(
    title="GeoRisk",
    description="Geopolitical event relevance scoring for corporate risk teams",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    openapi_url="/openapi.json" if not settings.is_production else None,
)

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID", "X-Process-Time"],
    max_age=600,
)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """Reject missing or malformed profiles and events."""
    logger.warning(f"Invalid scoring input on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"success": False, "message": str(exc)},
    )


@app.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """Health check endpoint."""
    engine = request.app.state.engine
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "intelligence_tables": engine.tables.summary(),
        "matching_mode": engine.config.matching_mode,
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with API information."""
    return {
        "name": "GeoRisk",
        "description": "Geopolitical event relevance scoring",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


# Import and include routers
from georisk.api.routes import relevance_router

app.include_router(relevance_router, prefix="/api/v1", tags=["relevance"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
