"""
API route modules.
"""

from georisk.api.routes.relevance import router as relevance_router

__all__ = [
    "relevance_router",
]
