"""Main FastAPI application.

This module creates the FastAPI application with:
- The read-only posts endpoint
- Health and sync status endpoints
- A lifespan that owns the background sync scheduler
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from video_sync.api.routers import health_router, posts_router
from video_sync.core.config import get_settings_with_yaml
from video_sync.core.constants import API_TAGS, APP_DESCRIPTION, APP_NAME, APP_VERSION
from video_sync.core.http_session import close_all_sessions
from video_sync.service import SyncService, create_sync_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the sync service (unless one was injected), starts the scheduler
    and stops it on shutdown. A disabled or failing sync never prevents the
    API from serving posts.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    logger.info("Starting %s v%s", APP_NAME, APP_VERSION)

    try:
        service: SyncService | None = getattr(app.state, "service", None)
        if service is None:
            service = create_sync_service(get_settings_with_yaml())
            app.state.service = service

        if service.scheduler is not None:
            # Resolving the playlist is a blocking HTTP call
            started = await asyncio.to_thread(service.scheduler.start)
            if started:
                logger.info("YouTube sync started successfully")
    except Exception as e:
        logger.exception("Startup failed: %s", e)
        raise

    try:
        yield
    finally:
        logger.info("Shutting down %s", APP_NAME)
        if service.scheduler is not None:
            await asyncio.to_thread(service.scheduler.stop)
        close_all_sessions()


def create_app(service: SyncService | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        service: Pre-built sync service (tests inject one); built at startup if None

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        openapi_tags=API_TAGS,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    if service is not None:
        app.state.service = service

    # The static frontend is served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(posts_router, prefix="/api")
    app.include_router(health_router)  # Health endpoints at root level

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "video_sync.api.app:app",
        host="0.0.0.0",
        port=4000,
        log_level="info",
    )
