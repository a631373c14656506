"""FastAPI dependencies for the API module."""

from fastapi import Request

from video_sync.database import PostsReader
from video_sync.service import SyncService


def get_service(request: Request) -> SyncService:
    """Dependency to get the sync service built during app startup.

    Returns:
        SyncService: The process-wide service bundle
    """
    return request.app.state.service  # type: ignore[no-any-return]


def get_posts_reader(request: Request) -> PostsReader:
    """Dependency to get the read-only posts accessor.

    Returns:
        PostsReader: Reader over the persisted sync state
    """
    return get_service(request).reader
