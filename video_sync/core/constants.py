"""Application constants and metadata.

This module centralizes all application-wide constants for:
- Application metadata
- YouTube Data API endpoints
- Sync defaults
- Notification text
"""

from datetime import datetime, timezone

# Application start time (for uptime calculation)
START_TIME = datetime.now(timezone.utc)

# =============================================================================
# Application Metadata
# =============================================================================

APP_NAME = "Video Sync"
APP_DESCRIPTION = """
Keeps a local feed of a YouTube channel's uploads in sync.

## Features

- **Channel Polling**: Drains the channel's uploads playlist on a fixed interval
- **Deduplicated Store**: New uploads are merged newest-first into a JSON record
- **Owner Notification**: One notification per sync cycle listing the new uploads
- **Read API**: The synced posts are served read-only at `/api/posts`
"""
APP_VERSION = "0.2.0"

API_TAGS = [
    {
        "name": "posts",
        "description": "Read-only access to the synced channel uploads.",
    },
    {
        "name": "health",
        "description": "Health check and sync status endpoints.",
    },
]

# =============================================================================
# Time Constants
# =============================================================================

SECOND = 1
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

# =============================================================================
# YouTube Data API
# =============================================================================

YOUTUBE_API_BASE_URL = "https://www.googleapis.com/youtube/v3"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# Largest page the playlistItems endpoint accepts
YOUTUBE_MAX_PAGE_SIZE = 50

# HTTP statuses that mean the key or channel is wrong, not that the API is down
CONFIGURATION_ERROR_STATUSES = (400, 401, 403, 404)

# =============================================================================
# Sync Defaults
# =============================================================================

DEFAULT_SYNC_INTERVAL = 5 * MINUTE
DEFAULT_STATE_FILE = "data/posts.json"


class SyncStatus:
    """Outcome of a single sync cycle."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SEEDED = "seeded"
    EMPTY = "empty"
    LOAD_FAILED = "load_failed"
    FETCH_FAILED = "fetch_failed"
    PERSIST_FAILED = "persist_failed"


# =============================================================================
# Notification Text
# =============================================================================

NEW_UPLOADS_SUBJECT = "New YouTube Uploads Synced"
NEW_UPLOADS_INTRO = "New videos auto-published as blog posts:"
