"""Channel resolver - converts a channel ID to its uploads playlist ID."""

from typing import Any

import requests

from video_sync.core.constants import CONFIGURATION_ERROR_STATUSES, YOUTUBE_API_BASE_URL
from video_sync.core.exceptions import ConfigurationError, FetchError
from video_sync.core.http_session import get, redact_secrets
from video_sync.core.logging_config import get_logger

logger = get_logger("channel.resolver")


def resolve_feed_id(
    channel_id: str,
    api_key: str,
    base_url: str = YOUTUBE_API_BASE_URL,
    timeout: int = 30,
) -> str:
    """
    Resolve a YouTube channel ID to the ID of its uploads playlist.

    Args:
        channel_id: YouTube channel ID (e.g., "UCX6OQ3DkcsbYNE6H8uQQuVA")
        api_key: YouTube Data API key
        base_url: API root, overridable for tests and proxies
        timeout: Request timeout in seconds

    Returns:
        Uploads playlist ID

    Raises:
        ConfigurationError: If the key is rejected or the channel does not exist
        FetchError: If the API could not be reached or answered with a server error
    """
    if not api_key:
        raise ConfigurationError("YouTube API key is not configured")
    if not channel_id:
        raise ConfigurationError("YouTube channel ID is not configured")

    try:
        response = get(
            f"{base_url}/channels",
            session_name="youtube",
            timeout=timeout,
            params={"part": "contentDetails", "id": channel_id, "key": api_key},
        )
    except requests.RequestException as e:
        raise FetchError(f"Channel lookup failed for {channel_id}: {redact_secrets(str(e))}") from e

    if response.status_code in CONFIGURATION_ERROR_STATUSES:
        raise ConfigurationError(
            f"Channel lookup rejected for {channel_id} "
            f"(HTTP {response.status_code}): {_api_error_message(response)}"
        )
    if response.status_code >= 400:
        raise FetchError(
            f"Channel lookup failed for {channel_id} (HTTP {response.status_code})",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        raise FetchError(f"Channel lookup returned invalid JSON for {channel_id}") from e

    items = data.get("items") if isinstance(data, dict) else None
    if not items:
        raise ConfigurationError(f"Channel not found: {channel_id}")
    if not isinstance(items, list) or not isinstance(items[0], dict):
        raise FetchError(f"Channel lookup returned a malformed body for {channel_id}")

    details = items[0].get("contentDetails") or {}
    if not isinstance(details, dict):
        raise FetchError(f"Channel lookup returned a malformed body for {channel_id}")
    playlists = details.get("relatedPlaylists") or {}
    if not isinstance(playlists, dict):
        raise FetchError(f"Channel lookup returned a malformed body for {channel_id}")

    uploads = playlists.get("uploads")
    if not uploads:
        raise ConfigurationError(f"Channel {channel_id} has no uploads playlist")

    logger.info("Uploads playlist id: %s", uploads)
    return str(uploads)


def _api_error_message(response: requests.Response) -> str:
    """Extract the error message from a YouTube API error body."""
    try:
        body: Any = response.json()
    except ValueError:
        return response.reason or "unknown error"
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message") or response.reason)
    return response.reason or "unknown error"
