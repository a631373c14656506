"""Channel sync module for a tracked YouTube channel."""

from .feed_fetcher import YouTubeFeedClient, map_entry
from .resolver import resolve_feed_id
from .scheduler import SyncScheduler
from .schemas import FeedItem, SyncResult, SyncState, watch_url
from .sync import SyncEngine, compute_delta, format_notification

__all__ = [
    # Resolver
    "resolve_feed_id",
    # Feed fetcher
    "YouTubeFeedClient",
    "map_entry",
    # Schemas
    "FeedItem",
    "SyncState",
    "SyncResult",
    "watch_url",
    # Sync
    "SyncEngine",
    "compute_delta",
    "format_notification",
    # Scheduler
    "SyncScheduler",
]
