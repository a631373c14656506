"""Video feed fetcher - drains a channel's uploads playlist from the YouTube Data API."""

from typing import Any

import requests
from pydantic import ValidationError

from video_sync.core.constants import YOUTUBE_API_BASE_URL, YOUTUBE_MAX_PAGE_SIZE
from video_sync.core.exceptions import FetchError
from video_sync.core.http_session import get, redact_secrets
from video_sync.core.logging_config import get_logger

from .resolver import resolve_feed_id
from .schemas import FeedItem

logger = get_logger("channel.feed_fetcher")


class YouTubeFeedClient:
    """Client for the two YouTube Data API calls the sync needs.

    Every request goes through the shared ``youtube`` session and carries a
    timeout, so a page fetch either completes or fails; it never hangs.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = YOUTUBE_API_BASE_URL,
        timeout: int = 30,
        page_size: int = YOUTUBE_MAX_PAGE_SIZE,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.page_size = max(1, min(page_size, YOUTUBE_MAX_PAGE_SIZE))

    def resolve_feed_id(self, channel_id: str) -> str:
        """Resolve a channel ID to its uploads playlist ID."""
        return resolve_feed_id(channel_id, self.api_key, base_url=self.base_url, timeout=self.timeout)

    def fetch_all_items(self, feed_id: str) -> list[dict[str, Any]]:
        """
        Fetch every entry of a playlist, following ``nextPageToken``.

        Pages are concatenated in the order received, which the API returns
        newest first. The fetch is all-or-nothing: a failure on any page
        raises and no partial list is returned.

        Args:
            feed_id: Uploads playlist ID

        Returns:
            Raw playlist item dicts, newest first

        Raises:
            FetchError: If any page request fails or returns an unusable body
        """
        all_items: list[dict[str, Any]] = []
        seen_tokens: set[str] = set()
        page_token = ""
        pages = 0

        while True:
            page = self._fetch_page(feed_id, page_token)
            pages += 1

            items = page.get("items") or []
            if not isinstance(items, list):
                raise FetchError(f"Playlist {feed_id} page {pages}: 'items' is not a list")
            all_items.extend(items)

            page_token = page.get("nextPageToken") or ""
            if not page_token:
                break
            if page_token in seen_tokens:
                raise FetchError(f"Playlist {feed_id}: page token {page_token!r} repeated")
            seen_tokens.add(page_token)

        logger.debug("Fetched %d entries from %s in %d page(s)", len(all_items), feed_id, pages)
        return all_items

    def _fetch_page(self, feed_id: str, page_token: str) -> dict[str, Any]:
        """Fetch one playlistItems page."""
        params = {
            "part": "snippet,contentDetails",
            "playlistId": feed_id,
            "maxResults": self.page_size,
            "key": self.api_key,
        }
        if page_token:
            params["pageToken"] = page_token

        try:
            response = get(
                f"{self.base_url}/playlistItems",
                session_name="youtube",
                timeout=self.timeout,
                params=params,
            )
        except requests.RequestException as e:
            raise FetchError(f"Playlist {feed_id} request failed: {redact_secrets(str(e))}") from e

        if response.status_code >= 400:
            raise FetchError(
                f"Playlist {feed_id} request failed (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(f"Playlist {feed_id} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise FetchError(f"Playlist {feed_id} returned a non-object payload")
        return data


def map_entry(raw: dict[str, Any]) -> FeedItem | None:
    """
    Convert a raw playlistItems entry into a FeedItem.

    Args:
        raw: One element of a playlistItems ``items`` list

    Returns:
        FeedItem, or None if the entry has no video id or unusable fields
    """
    if not isinstance(raw, dict):
        logger.warning("Skipping non-object playlist entry: %r", raw)
        return None

    try:
        video_id = _section(raw, "contentDetails").get("videoId")
        if not video_id:
            logger.warning("Skipping playlist entry without videoId: %s", raw.get("id"))
            return None

        snippet = _section(raw, "snippet")
        high = _section(_section(snippet, "thumbnails"), "high")
        return FeedItem(
            id=video_id,
            title=snippet.get("title"),
            description=snippet.get("description"),
            published_at=snippet.get("publishedAt"),
            thumbnail_url=high.get("url"),
        )
    except (TypeError, ValidationError) as e:
        logger.warning("Skipping malformed playlist entry %s: %s", raw.get("id"), e)
        return None


def _section(parent: dict[str, Any], key: str) -> dict[str, Any]:
    """Nested object at ``key``; missing or null reads as empty."""
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"'{key}' is {type(value).__name__}, expected an object")
    return value
