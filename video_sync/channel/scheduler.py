"""Background scheduler for channel sync.

Runs the sync engine once at start and then every ``interval_seconds`` on a
single daemon thread. Cycles never overlap: the wait for the next tick only
begins after the previous cycle has returned.

Usage:

    scheduler = SyncScheduler(client, channel_id, store, notifier)
    if scheduler.start():
        ...
    scheduler.stop()
"""

import threading
from typing import TYPE_CHECKING, Any, Protocol

from video_sync.core.constants import DEFAULT_SYNC_INTERVAL
from video_sync.core.exceptions import ConfigurationError, FetchError
from video_sync.core.logging_config import get_logger

from .schemas import SyncResult
from .sync import FeedClient, StateStore, SyncEngine

if TYPE_CHECKING:
    from video_sync.notify import Notifier

logger = get_logger("channel.scheduler")


class ResolvingFeedClient(FeedClient, Protocol):
    def resolve_feed_id(self, channel_id: str) -> str: ...


class SyncScheduler:
    """Owns the sync engine for the lifetime of the process.

    The uploads playlist is resolved once. A ``ConfigurationError`` disables
    the scheduler permanently; a transient ``FetchError`` during resolution is
    retried on the next tick.
    """

    def __init__(
        self,
        client: ResolvingFeedClient,
        channel_id: str,
        store: StateStore,
        notifier: "Notifier | None" = None,
        interval_seconds: float = DEFAULT_SYNC_INTERVAL,
        notify_on_first_run: bool = False,
    ) -> None:
        self._client = client
        self._channel_id = channel_id
        self._store = store
        self._notifier = notifier
        self._interval = interval_seconds
        self._notify_on_first_run = notify_on_first_run

        self._engine: SyncEngine | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        # Observable status (read from the API thread)
        self.enabled: bool = True
        self.disabled_reason: str | None = None
        self.run_count: int = 0
        self.last_result: SyncResult | None = None

    # ── Lifecycle ───────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def feed_id(self) -> str | None:
        return self._engine.feed_id if self._engine else None

    def start(self) -> bool:
        """Resolve the feed and start the background thread (idempotent).

        Returns:
            False if sync is disabled for this process, True otherwise
        """
        if self.is_running:
            return True
        if not self._prepare():
            return False

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="video-sync-scheduler", daemon=True)
        self._thread.start()
        logger.info("Sync scheduler started (interval=%ss)", self._interval)
        return True

    def stop(self, timeout: float | None = 10.0) -> None:
        """Signal the thread to stop and wait for the current cycle to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Sync scheduler stopped")

    def run_forever(self) -> None:
        """Run the schedule on the calling thread until ``stop()`` or Ctrl-C."""
        if not self._prepare():
            return
        logger.info("Sync running in foreground (interval=%ss)", self._interval)
        try:
            self._run_loop()
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping sync")
            self._stop_event.set()

    # ── Internal ────────────────────────────────────────────

    def _prepare(self) -> bool:
        if not self.enabled:
            return False
        try:
            self._resolve()
        except FetchError as e:
            logger.warning("Could not resolve uploads playlist yet, will retry: %s", e)
        return self.enabled

    def _resolve(self) -> None:
        """Build the engine once the playlist is known. Disables on ConfigurationError."""
        if self._engine is not None:
            return
        try:
            feed_id = self._client.resolve_feed_id(self._channel_id)
        except ConfigurationError as e:
            self._disable(str(e))
            return

        self._engine = SyncEngine(
            self._store,
            self._client,
            feed_id,
            notifier=self._notifier,
            notify_on_first_run=self._notify_on_first_run,
        )

    def _disable(self, reason: str) -> None:
        self.enabled = False
        self.disabled_reason = reason
        self._stop_event.set()
        logger.error("YouTube sync disabled: %s", reason)

    def run_cycle(self) -> SyncResult | None:
        """Run one cycle now, resolving the playlist first if still needed.

        Returns:
            The cycle result, or None if no cycle could run
        """
        if self._engine is None:
            try:
                self._resolve()
            except FetchError as e:
                logger.warning("Uploads playlist still unresolved: %s", e)
                return None
            if self._engine is None:
                return None

        result = self._engine.run_once()
        self.last_result = result
        self.run_count += 1
        return result

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.run_cycle()
            except Exception:
                # Keep the schedule alive; the next tick starts from a clean load
                logger.exception("Unexpected error during sync cycle")

            if self._stop_event.wait(timeout=self._interval):
                break

    def status(self) -> dict[str, Any]:
        """Snapshot of the scheduler state for health reporting."""
        return {
            "enabled": self.enabled,
            "running": self.is_running,
            "disabled_reason": self.disabled_reason,
            "feed_id": self.feed_id,
            "interval_seconds": self._interval,
            "run_count": self.run_count,
            "last_result": self.last_result.model_dump(mode="json") if self.last_result else None,
        }
