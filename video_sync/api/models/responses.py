"""Response models for the read API."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from video_sync.channel.schemas import FeedItem


class PostsResponse(BaseModel):
    """Synced posts, newest first.

    Serialized with the persisted field names (``publishedAt``, ``videoUrl``...)
    so the frontend reads the same shape as ``posts.json``.
    """

    ok: bool = True
    posts: list[FeedItem] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "example": {
                "ok": True,
                "posts": [
                    {
                        "id": "dQw4w9WgXcQ",
                        "title": "Weekly live session",
                        "description": "Recording of the weekly session.",
                        "publishedAt": "2024-01-15T10:30:00Z",
                        "thumbnail": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg",
                        "videoUrl": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
                    }
                ],
            }
        }
    }


class SyncStatusResponse(BaseModel):
    """State of the background sync subsystem."""

    configured: bool
    enabled: bool
    running: bool = False
    disabled_reason: str | None = None
    feed_id: str | None = None
    interval_seconds: float | None = None
    run_count: int = 0
    last_result: dict[str, Any] | None = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
