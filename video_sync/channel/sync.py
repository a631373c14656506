"""Channel sync module - merges new channel uploads into the state record."""

from typing import TYPE_CHECKING, Any, Protocol

from video_sync.core.constants import NEW_UPLOADS_INTRO, NEW_UPLOADS_SUBJECT, SyncStatus
from video_sync.core.exceptions import FetchError, PersistenceError
from video_sync.core.logging_config import get_logger, log_sync_event

from .feed_fetcher import map_entry
from .schemas import FeedItem, SyncResult, SyncState

if TYPE_CHECKING:
    from video_sync.notify import Notifier

logger = get_logger("channel.sync")


class StateStore(Protocol):
    def load(self) -> SyncState: ...

    def save(self, state: SyncState) -> None: ...


class FeedClient(Protocol):
    def fetch_all_items(self, feed_id: str) -> list[dict[str, Any]]: ...


def compute_delta(
    raw_items: list[dict[str, Any]], known_ids: set[str]
) -> tuple[list[FeedItem], str | None]:
    """
    Map raw feed entries and keep only those not already known.

    ``known_ids`` is extended as items are accepted, so an id that appears
    twice in the same fetch yields a single item.

    Args:
        raw_items: Raw playlist entries, newest first
        known_ids: Ids already in the store (not mutated)

    Returns:
        Tuple of (new items newest first, id of the feed's newest entry)
    """
    seen = set(known_ids)
    delta: list[FeedItem] = []
    newest_id: str | None = None

    for raw in raw_items:
        item = map_entry(raw)
        if item is None:
            continue
        if newest_id is None:
            newest_id = item.id
        if item.id in seen:
            continue
        seen.add(item.id)
        delta.append(item)

    return delta, newest_id


def format_notification(items: list[FeedItem]) -> tuple[str, str]:
    """Build the (subject, body) announcing a batch of new uploads."""
    lines = "\n\n".join(f"{item.title} ({item.source_url})" for item in items)
    return NEW_UPLOADS_SUBJECT, f"{NEW_UPLOADS_INTRO}\n\n{lines}"


class SyncEngine:
    """Computes and applies the delta between the channel feed and local state.

    Each ``run_once`` call is one full cycle: load, fetch, merge, save,
    notify. Expected failures are logged and reported in the returned
    ``SyncResult``; the persisted record is only ever replaced whole.
    """

    def __init__(
        self,
        store: StateStore,
        client: FeedClient,
        feed_id: str,
        notifier: "Notifier | None" = None,
        notify_on_first_run: bool = False,
    ) -> None:
        """Initialize the engine.

        Args:
            store: State store owning the persisted record
            client: Feed client used to drain the playlist
            feed_id: Uploads playlist ID to poll
            notifier: Sink receiving one notification per non-empty delta
            notify_on_first_run: Announce the items merged into an empty store
        """
        self.store = store
        self.client = client
        self.feed_id = feed_id
        self.notifier = notifier
        self.notify_on_first_run = notify_on_first_run

    def run_once(self) -> SyncResult:
        """Run one sync cycle."""
        log_sync_event(logger, self.feed_id, "started")

        try:
            state = self.store.load()
        except PersistenceError as e:
            log_sync_event(logger, self.feed_id, "failed", error=str(e))
            return self._result(SyncStatus.LOAD_FAILED, error=str(e))

        try:
            raw_items = self.client.fetch_all_items(self.feed_id)
        except FetchError as e:
            log_sync_event(logger, self.feed_id, "skipped", error=str(e))
            return self._result(SyncStatus.FETCH_FAILED, last_seen_id=state.last_seen_id, error=str(e))

        if not raw_items:
            log_sync_event(logger, self.feed_id, "unchanged", items_fetched=0)
            return self._result(SyncStatus.EMPTY, last_seen_id=state.last_seen_id)

        delta, newest_id = compute_delta(raw_items, state.known_ids)
        fetched = len(raw_items)

        if delta:
            new_state = SyncState(items=delta + state.items, last_seen_id=newest_id)
            try:
                self.store.save(new_state)
            except PersistenceError as e:
                log_sync_event(logger, self.feed_id, "failed", items_fetched=fetched, error=str(e))
                return self._result(
                    SyncStatus.PERSIST_FAILED,
                    items_fetched=fetched,
                    last_seen_id=state.last_seen_id,
                    error=str(e),
                )

            log_sync_event(
                logger, self.feed_id, "completed", items_fetched=fetched, items_new=len(delta)
            )

            notified = False
            if self.notify_on_first_run or not state.is_first_run:
                notified = self._notify(delta)
            else:
                logger.info("First run: seeded %d existing uploads without notifying", len(delta))

            return self._result(
                SyncStatus.UPDATED,
                items_fetched=fetched,
                items_new=len(delta),
                notified=notified,
                last_seen_id=newest_id,
            )

        if state.last_seen_id is None and newest_id is not None:
            new_state = SyncState(items=state.items, last_seen_id=newest_id)
            try:
                self.store.save(new_state)
            except PersistenceError as e:
                log_sync_event(logger, self.feed_id, "failed", items_fetched=fetched, error=str(e))
                return self._result(SyncStatus.PERSIST_FAILED, items_fetched=fetched, error=str(e))
            logger.info("Seeded sync cursor at %s", newest_id)
            return self._result(SyncStatus.SEEDED, items_fetched=fetched, last_seen_id=newest_id)

        log_sync_event(logger, self.feed_id, "unchanged", items_fetched=fetched)
        return self._result(
            SyncStatus.UNCHANGED, items_fetched=fetched, last_seen_id=state.last_seen_id
        )

    def _notify(self, items: list[FeedItem]) -> bool:
        """Send one notification for the batch. Failures are logged, never raised."""
        if self.notifier is None:
            return False

        subject, body = format_notification(items)
        try:
            self.notifier.notify(subject, body)
        except Exception as e:
            logger.error("Notification failed for %d new item(s): %s", len(items), e)
            return False
        return True

    def _result(self, status: str, **kwargs: Any) -> SyncResult:
        return SyncResult(feed_id=self.feed_id, status=status, **kwargs)
