"""Configuration management."""

import logging
import sys
from pathlib import Path

import yaml

DEFAULT_PROFILE_NAMES = ("Me", "My Friend")
STORE_BACKENDS = ("remote", "local")


class ConfigError(Exception):
    """Configuration error."""
    pass


class Config:
    """Configuration container."""

    def __init__(self, config_path: str):
        """Load configuration from YAML file.

        Args:
            config_path: Path to config.yaml

        Raises:
            ConfigError: If config is invalid
        """
        self.config_path = Path(config_path)

        if not self.config_path.exists():
            raise ConfigError(
                f"Config file not found: {config_path}\n"
                "Copy config.example.yaml to config.yaml and fill in your settings."
            )

        try:
            with open(self.config_path) as f:
                self.data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")

        if not isinstance(self.data, dict):
            raise ConfigError("Config file must contain a mapping at the top level")

        self._validate()

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Build a config from an already parsed mapping."""
        config = cls.__new__(cls)
        config.config_path = None
        config.data = data
        config._validate()
        return config

    def _validate(self):
        """Validate required configuration."""
        backend = self.store_backend
        if backend not in STORE_BACKENDS:
            raise ConfigError(
                f"store.backend must be one of {', '.join(STORE_BACKENDS)} (got {backend!r})"
            )

        if backend == "remote":
            if not self.data.get("store", {}).get("url"):
                raise ConfigError("store.url is required when store.backend is remote")
            if not self.data.get("store", {}).get("api_key"):
                raise ConfigError("store.api_key is required when store.backend is remote")

        defaults = self.get("profiles.defaults")
        if defaults is not None and not isinstance(defaults, list):
            raise ConfigError("profiles.defaults must be a list of names")

    @property
    def store_backend(self) -> str:
        return str(self.get("store.backend", "remote")).lower()

    @property
    def default_profile_names(self) -> tuple:
        names = self.get("profiles.defaults")
        if not names:
            return DEFAULT_PROFILE_NAMES
        return tuple(str(name) for name in names)

    def get(self, key: str, default=None):
        """Get config value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'store.url')
            default: Default value if not found

        Returns:
            Config value or default
        """
        keys = key.split(".")
        value = self.data

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

            if value is None:
                return default

        return value


def setup_logging(config: Config):
    """Setup logging configuration.

    Args:
        config: Config object
    """
    log_level_str = config.get("sync.log_level", "WARNING").upper()
    log_level = getattr(logging, log_level_str, logging.WARNING)
    log_file = config.get("sync.log_file")

    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
    )

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
