"""Health check endpoints.

- GET /health - Basic liveness probe
- GET /health/sync - Background sync status
"""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from video_sync.api.dependencies import get_service
from video_sync.api.models.responses import SyncStatusResponse
from video_sync.core.constants import APP_VERSION, START_TIME
from video_sync.service import SyncService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=dict[str, Any],
    summary="Basic health check",
    description="Quick health check for load balancers. Returns 200 if API is responding.",
    operation_id="health_check",
)
async def health_check() -> JSONResponse:
    """Basic health check endpoint.

    Does not check the sync subsystem; a disabled sync still serves posts.
    """
    now = datetime.now(timezone.utc)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "version": APP_VERSION,
            "uptime_seconds": round((now - START_TIME).total_seconds(), 1),
            "timestamp": now.isoformat(),
        },
    )


@router.get(
    "/health/sync",
    response_model=SyncStatusResponse,
    summary="Sync status",
    description="Reports whether the channel sync is enabled and the outcome of its last cycle.",
    operation_id="sync_status",
)
async def sync_status(service: SyncService = Depends(get_service)) -> SyncStatusResponse:
    """Background sync status."""
    scheduler = service.scheduler
    if scheduler is None:
        return SyncStatusResponse(
            configured=False,
            enabled=False,
            disabled_reason="YOUTUBE_API_KEY and YOUTUBE_CHANNEL_ID are not set",
        )

    return SyncStatusResponse(configured=True, **scheduler.status())
