"""Table store service wrapper."""

from pathlib import Path

from ...api.local import LocalTableStore
from ...api.rest import RestTableStore
from ...api.store import TableStore
from ...db import LocalStorage
from ..commands.common import normalize_service_url


class StoreService:
    """
    Table store wrapper with context manager support.

    Picks the remote or local backend from configuration and closes it
    (including any running change feeds) on exit.
    """

    def __init__(self, store: TableStore):
        """
        Initialize store service.

        Args:
            store: TableStore instance
        """
        self._store = store

    @classmethod
    def from_config(cls, config, db_path: str | Path):
        """
        Create StoreService from configuration.

        Args:
            config: Config object
            db_path: Local database path used by the local backend

        Returns:
            StoreService instance
        """
        if config.store_backend == "local":
            return cls(LocalTableStore(LocalStorage(str(db_path))))

        store = RestTableStore(
            url=normalize_service_url(config.get("store.url")),
            api_key=config.get("store.api_key"),
            timeout=config.get("store.timeout", 10),
            poll_interval=config.get("store.poll_interval", 2.0),
        )
        return cls(store)

    def __enter__(self):
        """Enter context manager - return store instance."""
        return self._store

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager - close feeds and sessions."""
        self._store.close()
        return False
