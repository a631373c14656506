"""Pydantic schemas for channel sync module."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from video_sync.core.constants import YOUTUBE_WATCH_URL


def watch_url(video_id: str) -> str:
    """Build the public watch URL for a video id."""
    return YOUTUBE_WATCH_URL.format(video_id=video_id)


class FeedItem(BaseModel):
    """A synced channel upload.

    Field aliases match the persisted ``posts.json`` layout.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    title: str = ""
    description: str = ""
    published_at: datetime | None = Field(default=None, alias="publishedAt")
    thumbnail_url: str | None = Field(default=None, alias="thumbnail")
    source_url: str = Field(default="", alias="videoUrl")

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def _derive_source_url(self) -> "FeedItem":
        self.source_url = watch_url(self.id)
        return self


class SyncState(BaseModel):
    """Persisted record of known items and the sync cursor."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[FeedItem] = Field(default_factory=list, alias="posts")
    last_seen_id: str | None = Field(default=None, alias="lastCheckedVideoId")

    @property
    def known_ids(self) -> set[str]:
        """Ids of every stored item."""
        return {item.id for item in self.items}

    @property
    def is_first_run(self) -> bool:
        """True until a poll has ever completed against this record."""
        return not self.items and self.last_seen_id is None

    def to_document(self) -> dict[str, Any]:
        """Convert to the JSON document written to disk."""
        return self.model_dump(mode="json", by_alias=True)


class SyncResult(BaseModel):
    """Result of one sync cycle."""

    feed_id: str
    status: str
    items_fetched: int = 0
    items_new: int = 0
    notified: bool = False
    last_seen_id: str | None = None
    error: str | None = None
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
