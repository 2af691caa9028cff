"""Core CLI infrastructure."""

from .context import TrackerContext
from .decorators import (
    with_catalog,
    with_config,
    with_controller,
    with_storage,
)
from .exceptions import (
    TrackerError,
    ConfigurationError,
    ConnectionError,
)
from .hooks import get_hook_manager, trigger_hook
from .plugin_loader import TrackerGroup

__all__ = [
    # Context
    "TrackerContext",
    # Decorators
    "with_catalog",
    "with_config",
    "with_controller",
    "with_storage",
    # Exceptions
    "TrackerError",
    "ConfigurationError",
    "ConnectionError",
    # Hooks
    "get_hook_manager",
    "trigger_hook",
    # Plugin loader
    "TrackerGroup",
]
