"""
MediaGuard API v1 Router Aggregator.

This module combines the v1 endpoint routers into a single APIRouter for
registration with the main FastAPI application under the /api/v1 prefix.

Router Structure:
    - /media: category lookups and upload validation
"""

from fastapi import APIRouter

from mediaguard.api.v1.media import router as media_router


api_router = APIRouter()

api_router.include_router(
    media_router,
    prefix="/media",
    tags=["media"],
)


__all__ = ["api_router"]
