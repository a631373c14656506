"""Core package for the channel sync service."""

from video_sync.core.config import Settings, get_settings, get_settings_with_yaml
from video_sync.core.exceptions import (
    ConfigurationError,
    FetchError,
    NotificationError,
    PersistenceError,
    VideoSyncError,
)
from video_sync.core.http_session import close_all_sessions, get, get_session, redact_secrets
from video_sync.core.logging_config import get_logger, log_sync_event, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "get_settings_with_yaml",
    # Errors
    "VideoSyncError",
    "ConfigurationError",
    "FetchError",
    "PersistenceError",
    "NotificationError",
    # Logging
    "setup_logging",
    "get_logger",
    "log_sync_event",
    # HTTP
    "get_session",
    "close_all_sessions",
    "redact_secrets",
    "get",
]
