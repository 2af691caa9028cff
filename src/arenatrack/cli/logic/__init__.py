"""Business logic layer."""

from .session import (
    build_view_state,
    celebrate,
    commit_toggle,
    resolve_champion,
    resolve_profile,
)
from .watch_mode import run_watch_mode

__all__ = [
    "build_view_state",
    "celebrate",
    "commit_toggle",
    "resolve_champion",
    "resolve_profile",
    "run_watch_mode",
]
