"""Owner notification sinks."""

from video_sync.notify.notifier import (
    CompositeNotifier,
    EmailNotifier,
    LogNotifier,
    Notifier,
    create_notifier,
)

__all__ = [
    "Notifier",
    "LogNotifier",
    "EmailNotifier",
    "CompositeNotifier",
    "create_notifier",
]
