"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, mathchat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mathchat import __version__
from mathchat.api.deps.dependencies import get_service_cache
from mathchat.configs import get_settings
from mathchat.observability.logger import configure_logging
from mathchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    conversations_router,
    health_router,
    messages_router,
    render_router,
    settings_router,
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
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    # Trigger property access to load instances
    _ = cache.chat_store
    _ = cache.completion_client
    if settings.store_backend == "database":
        from mathchat.boundary.db.connection import create_tables
        await create_tables(cache.engine)
    logger.info("Service cache pre-warmed", extra={"store_backend": settings.store_backend})

    yield

    # Shutdown
    await cache.aclose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Math Study Chat API",
        description="Math and category theory tutoring chat with streamed replies and diagram rendering",
        version=__version__,
        lifespan=lifespan,
    )

    # Add CORS middleware
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
    app.include_router(conversations_router, prefix="/api/v1")
    app.include_router(messages_router, prefix="/api/v1")
    app.include_router(settings_router, prefix="/api/v1")
    app.include_router(render_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "mathchat.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
