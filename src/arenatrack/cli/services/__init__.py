"""Service layer for store wrappers and resource management."""

from .storage import StorageService
from .store import StoreService

__all__ = [
    "StorageService",
    "StoreService",
]
