"""Application context for CLI."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ...config import Config


@dataclass
class TrackerContext:
    """Shared application context passed through Click commands."""

    config: Config
    config_path: Path
    db_path: Path

    @classmethod
    def create(cls, config_path: str, db_path: Optional[str] = None):
        """
        Factory method to create context from paths.

        Args:
            config_path: Path to config file
            db_path: Path to local database file (optional)

        Returns:
            TrackerContext instance

        Raises:
            ConfigError: If config is invalid
        """
        config = Config(config_path)

        # Resolve database path: provided > config > default
        resolved_db_path = db_path or config.get("local.database") or "./arenatrack.db"

        return cls(
            config=config,
            config_path=Path(config_path),
            db_path=Path(resolved_db_path),
        )
