"""Profile synchronization layer."""

from .controller import ProfileSubscription, SyncController
from .progress import ProgressTracker
from .subscription import RefreshGuard, RefreshSubscription

__all__ = [
    "ProfileSubscription",
    "ProgressTracker",
    "RefreshGuard",
    "RefreshSubscription",
    "SyncController",
]
