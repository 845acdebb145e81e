"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, resourcehub.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resourcehub.api.deps.dependencies import get_storage_client
from resourcehub.boundary.db.connection import get_async_engine
from resourcehub.configs import get_settings
from resourcehub.observability import configure_logging
from resourcehub.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    admin_router,
    auth_router,
    categories_router,
    creator_router,
    health_router,
    messages_router,
    reports_router,
    resources_router,
    users_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Starting ResourceHub API (environment=%s)", settings.environment)
    get_storage_client()

    yield

    # Shutdown
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
    logger.info("Database connections closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="ResourceHub API",
        description="Marketplace for buying and selling digital resources",
        version="0.1.0",
        lifespan=lifespan,
        debug=get_settings().debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(categories_router, prefix="/api/v1")
    app.include_router(resources_router, prefix="/api/v1")
    app.include_router(creator_router, prefix="/api/v1")
    app.include_router(messages_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "resourcehub.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
