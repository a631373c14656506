"""API routers module."""

from video_sync.api.routers.health import router as health_router
from video_sync.api.routers.posts import router as posts_router

__all__ = [
    "posts_router",
    "health_router",
]
