"""Local storage service with context manager support."""

from pathlib import Path

from ...db import LocalStorage


class StorageService:
    """
    Local storage wrapper with context manager support.

    Provides automatic resource management for the fallback database.
    """

    def __init__(self, db_path: str | Path):
        """
        Initialize storage service.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self._storage = None

    def __enter__(self):
        """Enter context manager - open storage."""
        self._storage = LocalStorage(str(self.db_path))
        return self._storage

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager."""
        self._storage = None
        return False
