"""Change feeds for table stores."""

import logging
import threading
from typing import Callable, Optional

from ..models import ChangeEvent, ChangeType
from .store import ChangeFeed, ChangeHandler, StoreError, matches

logger = logging.getLogger(__name__)


def diff_rows(table: str, previous: dict, current: dict) -> list[ChangeEvent]:
    """Compute change events between two snapshots keyed by row id.

    Args:
        table: Table name stamped on each event
        previous: Earlier snapshot, id -> row
        current: Later snapshot, id -> row

    Returns:
        INSERT events for new ids, UPDATE events for changed rows,
        DELETE events (carrying the old row) for vanished ids
    """
    events = []
    for row_id, row in current.items():
        if row_id not in previous:
            events.append(ChangeEvent(table, ChangeType.INSERT, row))
        elif previous[row_id] != row:
            events.append(ChangeEvent(table, ChangeType.UPDATE, row))
    for row_id, row in previous.items():
        if row_id not in current:
            events.append(ChangeEvent(table, ChangeType.DELETE, row))
    return events


class PollingChangeFeed(ChangeFeed):
    """Change feed that polls a table and diffs successive snapshots."""

    def __init__(
        self,
        fetch: Callable[[], list[dict]],
        table: str,
        handler: ChangeHandler,
        interval: float = 2.0,
        on_close: Optional[Callable[["PollingChangeFeed"], None]] = None,
    ):
        """Initialize polling feed.

        Args:
            fetch: Callable returning the current (already filtered) rows
            table: Table name
            handler: Called at most once per poll, with the first change found
            interval: Seconds between polls
            on_close: Called with the feed when it is closed
        """
        self.fetch = fetch
        self.table = table
        self.handler = handler
        self.interval = interval
        self.on_close = on_close
        self._snapshot: dict = {}
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def closed(self) -> bool:
        return self._stop.is_set()

    def start(self) -> "PollingChangeFeed":
        """Take a baseline snapshot and start the polling thread."""
        try:
            self._snapshot = self._index(self.fetch())
        except StoreError as e:
            logger.warning(f"Baseline snapshot for {self.table} failed: {e}")
            self._snapshot = {}

        self._thread = threading.Thread(
            target=self._run,
            name=f"feed-{self.table}",
            daemon=True,
        )
        self._thread.start()
        logger.debug(f"Polling {self.table} every {self.interval}s")
        return self

    def poll_once(self) -> list[ChangeEvent]:
        """Fetch once and return the changes since the previous snapshot.

        All changes found by one poll are one burst: the handler is called
        once, with the first event, so a subscriber re-fetches once per poll.

        Raises:
            StoreError: If the fetch fails
        """
        current = self._index(self.fetch())
        events = diff_rows(self.table, self._snapshot, current)
        self._snapshot = current

        if events and not self.closed:
            logger.debug(f"{self.table}: {len(events)} change(s) detected")
            self.handler(events[0])

        return events

    def close(self):
        if self.closed:
            return
        self._stop.set()
        if self.on_close is not None:
            self.on_close(self)
        thread = self._thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout=self.interval + 1)

    def _run(self):
        while not self._stop.wait(self.interval):
            try:
                self.poll_once()
            except StoreError as e:
                logger.warning(f"Polling {self.table} failed: {e}")
            except Exception:
                logger.exception(f"Change handler for {self.table} failed")

    @staticmethod
    def _index(rows: list[dict]) -> dict:
        return {str(row.get("id")): row for row in rows}


class ListenerFeed(ChangeFeed):
    """In-process feed registered with a ListenerRegistry."""

    def __init__(self, registry: "ListenerRegistry", table: str, handler: ChangeHandler, filters: Optional[dict]):
        self.registry = registry
        self.table = table
        self.handler = handler
        self.filters = filters
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self):
        if not self._closed:
            self._closed = True
            self.registry.remove(self)


class ListenerRegistry:
    """Synchronous fan-out of change events to in-process listeners."""

    def __init__(self):
        self._feeds: list[ListenerFeed] = []
        self._lock = threading.Lock()

    def add(self, table: str, handler: ChangeHandler, filters: Optional[dict] = None) -> ListenerFeed:
        feed = ListenerFeed(self, table, handler, filters)
        with self._lock:
            self._feeds.append(feed)
        return feed

    def remove(self, feed: ListenerFeed):
        with self._lock:
            if feed in self._feeds:
                self._feeds.remove(feed)

    def notify(self, event: ChangeEvent):
        """Deliver an event to every open listener on its table whose filters match."""
        with self._lock:
            feeds = list(self._feeds)

        for feed in feeds:
            if feed.closed or feed.table != event.table:
                continue
            if not matches(event.record, feed.filters):
                continue
            try:
                feed.handler(event)
            except Exception as e:
                logger.error(f"Change listener for {event.table} failed: {e}")
