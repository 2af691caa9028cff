"""Custom CLI exceptions."""


class TrackerError(Exception):
    """Base exception for arenatrack CLI errors."""
    pass


class ConfigurationError(TrackerError):
    """Raised when configuration is invalid or missing."""
    pass


class ConnectionError(TrackerError):
    """Raised when unable to connect to the store."""
    pass
