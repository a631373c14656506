"""Pytest fixtures shared by the sync tests.

This module provides:
- Temporary state store
- Fake feed client and recording notifier
- Raw playlist entry and HTTP response factories
"""

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from video_sync.core.exceptions import FetchError
from video_sync.database import JsonStateStore


# =============================================================================
# Factories
# =============================================================================


def build_entry(
    video_id: str | None,
    title: str | None = None,
    published_at: str | None = "2024-01-15T10:30:00Z",
    thumbnail: str | None = "https://i.ytimg.com/vi/{id}/hqdefault.jpg",
) -> dict[str, Any]:
    """Build a raw playlistItems entry as returned by the YouTube Data API."""
    snippet: dict[str, Any] = {
        "title": title if title is not None else f"Video {video_id}",
        "description": f"Description of {video_id}",
        "publishedAt": published_at,
    }
    if thumbnail:
        snippet["thumbnails"] = {"high": {"url": thumbnail.format(id=video_id)}}
    content_details = {"videoId": video_id} if video_id else {}
    return {
        "id": f"PLI_{video_id}",
        "snippet": snippet,
        "contentDetails": content_details,
    }


def build_response(status_code: int = 200, payload: Any = None, json_error: bool = False) -> MagicMock:
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


class FakeFeedClient:
    """In-memory feed client.

    ``feed`` is the list of raw entries returned by the next fetch; set
    ``error`` to make fetches fail.
    """

    def __init__(self, feed: list[dict[str, Any]] | None = None, feed_id: str = "UUtest") -> None:
        self.feed = feed or []
        self.feed_id = feed_id
        self.error: Exception | None = None
        self.resolve_error: Exception | None = None
        self.fetch_calls = 0
        self.resolve_calls = 0

    def resolve_feed_id(self, channel_id: str) -> str:
        self.resolve_calls += 1
        if self.resolve_error is not None:
            raise self.resolve_error
        return self.feed_id

    def fetch_all_items(self, feed_id: str) -> list[dict[str, Any]]:
        self.fetch_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.feed)


class RecordingNotifier:
    """Notifier that records every call."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, str]] = []
        self.error = error

    def notify(self, subject: str, body: str) -> None:
        self.calls.append((subject, body))
        if self.error is not None:
            raise self.error


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    """Location of the state file for one test."""
    return tmp_path / "data" / "posts.json"


@pytest.fixture
def store(state_file: Path) -> JsonStateStore:
    """Store backed by a temporary file."""
    return JsonStateStore(state_file)


@pytest.fixture
def feed_client() -> FakeFeedClient:
    """Fake feed client with an empty feed."""
    return FakeFeedClient()


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Notifier recording calls."""
    return RecordingNotifier()


@pytest.fixture
def fetch_error() -> FetchError:
    """A transient fetch failure."""
    return FetchError("Playlist UUtest request failed (HTTP 503)", status_code=503)


@pytest.fixture
def make_entry():
    """Factory for raw playlist entries."""
    return build_entry


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses."""
    return build_response
