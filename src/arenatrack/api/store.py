"""Table store contract shared by the remote and local backends."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..models import ChangeEvent

PROFILES_TABLE = "profiles"
PROGRESS_TABLE = "champion_progress"

ChangeHandler = Callable[[ChangeEvent], None]


class StoreError(Exception):
    """A single store operation failed."""
    pass


def matches(record: dict, filters: Optional[dict]) -> bool:
    """Check a row against equality filters.

    Args:
        record: Row to check
        filters: Mapping of column to required value, or None

    Returns:
        True if every filter column equals the row's value
    """
    if not filters:
        return True
    return all(str(record.get(column)) == str(value) for column, value in filters.items())


class ChangeFeed(ABC):
    """Handle for an active change notification stream."""

    @abstractmethod
    def close(self):
        """Stop delivering events. Safe to call more than once."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        """Whether the feed has been closed."""


class TableStore(ABC):
    """Create/read/update/delete over named tables plus change notifications.

    Every operation raises StoreError on failure.
    """

    name = "store"

    @abstractmethod
    def test_connection(self) -> bool:
        """Check that the store is reachable.

        Returns:
            True if connection successful
        """

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
    ) -> list[dict]:
        """Fetch rows, optionally filtered by equality and ordered ascending by a column."""

    @abstractmethod
    def insert(self, table: str, row: dict) -> dict:
        """Insert a row and return it as stored."""

    @abstractmethod
    def update(self, table: str, row_id: str, changes: dict) -> dict:
        """Update one row by id and return it as stored."""

    @abstractmethod
    def delete(self, table: str, row_id: str):
        """Delete one row by id."""

    @abstractmethod
    def subscribe(
        self,
        table: str,
        handler: ChangeHandler,
        filters: Optional[dict] = None,
    ) -> ChangeFeed:
        """Deliver INSERT/UPDATE/DELETE events for rows matching ``filters``."""

    def close(self):
        """Release resources held by the store."""
