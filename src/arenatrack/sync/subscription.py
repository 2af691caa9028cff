"""Change subscriptions that re-fetch a table on every notification."""

import logging
import threading
from typing import Callable, Optional

from ..api.store import ChangeFeed, StoreError, TableStore
from ..models import ChangeEvent

logger = logging.getLogger(__name__)


class RefreshGuard:
    """The "already fetching" flag shared by one subscription's notifications."""

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def try_acquire(self) -> bool:
        """Claim the guard without blocking. False if a refresh is in flight."""
        return self._lock.acquire(blocking=False)

    def release(self):
        self._lock.release()


class RefreshSubscription:
    """Re-fetch a table whenever its change feed fires.

    Notifications that arrive while a refresh is in flight are dropped, not
    queued: the in-flight fetch already reflects the latest remote state.
    Once stopped, no callback fires, including for a fetch that was already
    running when ``stop()`` was called.
    """

    def __init__(
        self,
        store: TableStore,
        table: str,
        fetch: Callable[[], list],
        callback: Callable[[list], None],
        filters: Optional[dict] = None,
        guard: Optional[RefreshGuard] = None,
    ):
        """Initialize subscription.

        Args:
            store: Store providing the change feed
            table: Table to watch
            fetch: Re-fetch callable; raises StoreError on failure
            callback: Receives the freshly fetched collection
            filters: Equality filters scoping the notifications
            guard: Shared in-flight guard (a new one by default)
        """
        self.store = store
        self.table = table
        self.fetch = fetch
        self.callback = callback
        self.filters = filters
        self.guard = guard or RefreshGuard()
        self.dropped = 0
        self._feed: Optional[ChangeFeed] = None
        self._stopped = True
        self._delivery = threading.RLock()

    @property
    def active(self) -> bool:
        return not self._stopped

    def start(self) -> "RefreshSubscription":
        """Open the change feed. Calling start on an active subscription does nothing."""
        if self.active:
            return self

        self._stopped = False
        self._feed = self.store.subscribe(self.table, self._on_change, filters=self.filters)
        logger.debug(f"Subscribed to {self.table} changes")
        return self

    def stop(self):
        """Close the feed and drop any in-flight result.

        Waits for a callback that is already running, so none fires after
        this returns.
        """
        with self._delivery:
            self._stopped = True
        if self._feed is not None:
            self._feed.close()
            self._feed = None
            logger.debug(f"Unsubscribed from {self.table} changes")

    unsubscribe = stop

    def _on_change(self, event: ChangeEvent):
        if self._stopped:
            return

        if not self.guard.try_acquire():
            self.dropped += 1
            logger.debug(f"{self.table} {event.type.value} dropped, refresh already in flight")
            return

        try:
            logger.debug(f"{self.table} {event.type.value} detected, refreshing")
            result = self.fetch()
        except StoreError as e:
            logger.error(f"Error processing real-time update for {self.table}: {e}")
            return
        finally:
            self.guard.release()

        with self._delivery:
            if self._stopped:
                logger.debug(f"Dropping {self.table} refresh that finished after unsubscribe")
                return
            self.callback(result)
