"""
MediaGuard API - FastAPI Application Entry Point.

This module initializes the FastAPI application that serves the media
validation engine: CORS middleware, the /api/v1 routers, a liveness probe
and a catch-all handler that logs unexpected errors and returns a generic
500 body.

Architecture Decisions:
- Logging is configured once in the lifespan handler from Settings
- CORS middleware configured for upload forms at the configured origins
- Health check endpoint for container orchestration monitoring
- All API endpoints versioned under /api/v1 prefix
"""

import logging

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import uvicorn

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mediaguard import __version__
from mediaguard.api.v1 import api_router
from mediaguard.config import get_settings
from mediaguard.utils.logger import setup_logging


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Loading
# =============================================================================

settings = get_settings()


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup and log the bind address."""
    setup_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
    )
    logger.info(
        "%s %s started on %s:%d (%s)",
        settings.app_name,
        __version__,
        settings.host,
        settings.port,
        settings.app_env,
    )
    yield
    logger.info("%s shutdown complete", settings.app_name)


# =============================================================================
# FastAPI Application Initialization
# =============================================================================

app = FastAPI(
    title=f"{settings.app_name} API",
    version=__version__,
    description="Validation and classification of untrusted media uploads",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors with traceback and hide details from the client."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "message": "Internal server error"},
    )


# =============================================================================
# Health Check Endpoint
# =============================================================================


@app.get("/health", tags=["health"])
async def health_check() -> dict:
    """
    Liveness probe for container orchestration.

    Example Response:
        {
            "status": "healthy",
            "timestamp": "2026-01-15T10:30:00.000000+00:00",
            "service": "MediaGuard",
            "version": "1.0.0"
        }
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": settings.app_name,
        "version": __version__,
    }


# =============================================================================
# API Router Registration
# =============================================================================

app.include_router(api_router, prefix="/api/v1")


# =============================================================================
# Main Execution Block
# =============================================================================

if __name__ == "__main__":
    uvicorn.run(
        "mediaguard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level,
    )
