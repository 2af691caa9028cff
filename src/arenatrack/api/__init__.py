"""Table store backends."""

from .local import LocalTableStore
from .rest import RestTableStore
from .store import PROFILES_TABLE, PROGRESS_TABLE, ChangeFeed, StoreError, TableStore

__all__ = [
    "ChangeFeed",
    "LocalTableStore",
    "PROFILES_TABLE",
    "PROGRESS_TABLE",
    "RestTableStore",
    "StoreError",
    "TableStore",
]
