"""
Application factory for the Storefront API.

Builds a FastAPI application with CORS, rate limiting, the service error
handler, and every router mounted under /api/v1 and at the root.
"""

import logging
from typing import Dict

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from . import config
from .errors import ServiceFailure
from .limiter import limiter
from .routes import ALL_ROUTERS
from .routes.common import service_failure_handler

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create a FastAPI application.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Storefront API",
        description="Food ordering storefront and admin console",
        version="1.0.0",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Configure rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Failed service results
    app.add_exception_handler(ServiceFailure, service_failure_handler)

    # Include routers with API version prefix
    api_v1 = APIRouter(prefix="/api/v1")
    for router in ALL_ROUTERS:
        api_v1.include_router(router)
    app.include_router(api_v1)

    # Also mount at root
    for router in ALL_ROUTERS:
        app.include_router(router)

    @app.get("/health", tags=["Health"])
    def health() -> Dict[str, str]:
        """Health check endpoint. Returns ok if the service is running."""
        return {"status": "ok"}

    logger.info("Application created with %d routers", len(ALL_ROUTERS))

    return app
