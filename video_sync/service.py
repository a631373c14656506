"""Wires the sync components together from settings."""

from dataclasses import dataclass

from video_sync.channel import SyncScheduler, YouTubeFeedClient
from video_sync.core.config import Settings
from video_sync.core.logging_config import get_logger
from video_sync.database import JsonStateStore, PostsReader
from video_sync.notify import Notifier, create_notifier

logger = get_logger("service")


@dataclass
class SyncService:
    """Everything the CLI and the API need, built once per process."""

    settings: Settings
    store: JsonStateStore
    reader: PostsReader
    notifier: Notifier
    scheduler: SyncScheduler | None

    @property
    def sync_enabled(self) -> bool:
        return self.scheduler is not None and self.scheduler.enabled


def create_sync_service(settings: Settings, notifier: Notifier | None = None) -> SyncService:
    """
    Build the store, reader, notifier and scheduler.

    The scheduler is None when the API key or channel id is missing; the
    read side still works against whatever state is on disk.

    Args:
        settings: Application settings
        notifier: Override for the owner notifier (defaults from settings)

    Returns:
        SyncService bundle
    """
    store = JsonStateStore(settings.state_file)
    store.ensure_exists()
    notifier = notifier or create_notifier(settings)

    scheduler: SyncScheduler | None = None
    if settings.sync_configured:
        client = YouTubeFeedClient(
            settings.youtube_api_key,
            base_url=settings.youtube_api_base_url,
            timeout=settings.youtube_api_timeout,
            page_size=settings.youtube_api_page_size,
        )
        scheduler = SyncScheduler(
            client,
            settings.youtube_channel_id,
            store,
            notifier=notifier,
            interval_seconds=settings.sync_interval_seconds,
            notify_on_first_run=settings.sync_notify_on_first_run,
        )
    else:
        logger.warning("YouTube sync disabled: YOUTUBE_API_KEY and YOUTUBE_CHANNEL_ID are required")

    return SyncService(
        settings=settings,
        store=store,
        reader=PostsReader(store),
        notifier=notifier,
        scheduler=scheduler,
    )
