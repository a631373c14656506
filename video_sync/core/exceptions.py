"""Custom exceptions for the sync subsystem."""


class VideoSyncError(Exception):
    """Base exception for sync errors."""

    pass


class ConfigurationError(VideoSyncError):
    """Channel feed cannot be resolved (bad key, unknown channel, missing settings).

    Permanent for the lifetime of the process: the scheduler stops trying.
    """

    pass


class FetchError(VideoSyncError):
    """A request to the YouTube Data API failed or returned an unusable page."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PersistenceError(VideoSyncError):
    """Reading or writing the state file failed."""

    pass


class NotificationError(VideoSyncError):
    """Delivering a notification failed."""

    pass
