"""API models."""

from video_sync.api.models.responses import PostsResponse, SyncStatusResponse

__all__ = [
    "PostsResponse",
    "SyncStatusResponse",
]
