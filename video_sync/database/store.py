"""JSON file state store.

The whole sync record lives in one JSON document. It is always read whole
and replaced whole: writes go to a temporary file in the same directory and
are moved over the target with ``os.replace``, so a reader sees either the
previous record or the new one, never a torn file.

Single-writer deployment is assumed; there is no cross-process locking.
"""

import json
import os
import tempfile
import threading
from pathlib import Path

from pydantic import ValidationError

from video_sync.channel.schemas import FeedItem, SyncState
from video_sync.core.exceptions import PersistenceError
from video_sync.core.logging_config import get_logger

logger = get_logger("database.store")


class JsonStateStore:
    """Durable, atomically replaced ``SyncState`` record.

    Usage:
        store = JsonStateStore(Path("data/posts.json"))
        state = store.load()
        store.save(state)
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON state file
        """
        self.path = Path(path)

    def load(self) -> SyncState:
        """Load the persisted state.

        Returns:
            The last saved state, or an empty state if the file does not exist

        Raises:
            PersistenceError: If the file exists but cannot be read or parsed
        """
        if not self.path.exists():
            return SyncState()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read state file {self.path}: {e}") from e

        try:
            return SyncState.model_validate_json(raw)
        except ValidationError as e:
            raise PersistenceError(f"Invalid state file {self.path}: {e}") from e

    def save(self, state: SyncState) -> None:
        """Replace the persisted record with ``state``.

        Args:
            state: Full state to persist

        Raises:
            PersistenceError: If the record could not be written
        """
        tmp_path: str | None = None
        try:
            payload = json.dumps(state.to_document(), indent=2, ensure_ascii=False)
            self.path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())

            os.replace(tmp_path, self.path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Could not write state file {self.path}: {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

        logger.debug("Saved %d items to %s", len(state.items), self.path)

    def ensure_exists(self) -> None:
        """Write an empty record if no state file exists yet."""
        if not self.path.exists():
            self.save(SyncState())


class PostsReader:
    """Read-only view of the synced items for presentation code.

    Never raises: if the record cannot be read, the last snapshot this reader
    successfully loaded is returned (empty if there never was one).
    """

    def __init__(self, store: JsonStateStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._last_good: list[FeedItem] = []

    def list_posts(self) -> list[FeedItem]:
        """Return the current items, newest first."""
        try:
            state = self._store.load()
        except PersistenceError as e:
            logger.warning("Serving cached posts, state unreadable: %s", e)
            with self._lock:
                return list(self._last_good)

        with self._lock:
            self._last_good = list(state.items)
            return list(self._last_good)
