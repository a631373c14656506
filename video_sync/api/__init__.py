"""Read-only REST API for the synced posts."""

from video_sync.api.app import app, create_app

__all__ = [
    "app",
    "create_app",
]
