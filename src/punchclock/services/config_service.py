"""Configuration service for managing punchclock configuration.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json
- Config file initialization with defaults
- Resolving the database path (config value, PUNCHCLOCK_DB override, data dir)
- Building the storage strategy handed to services
- Applying the configured log level
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from punchclock.models.config_models import AppConfig
from punchclock.models.storage_strategy import LocalStorageStrategy, StorageStrategy
from punchclock.utils.logger import set_log_level

DB_ENV_VAR = "PUNCHCLOCK_DB"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self, config_dir: Path | None = None, data_dir: Path | None = None):
        """Initialize the config service."""
        self.config_dir = config_dir or Path(user_config_dir("punchclock"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = data_dir or Path(user_data_dir("punchclock"))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self._storage_strategy: StorageStrategy | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def database_path(self) -> Path:
        """Database file in effect; the environment override wins."""
        override = os.environ.get(DB_ENV_VAR)
        if override:
            return Path(override).expanduser()
        if self.config.database_path:
            return Path(self.config.database_path).expanduser()
        return self.data_dir / "punchclock.db"

    @property
    def storage_strategy(self) -> StorageStrategy:
        """Get the storage strategy built from the current configuration."""
        if self._storage_strategy is None:
            self._storage_strategy = LocalStorageStrategy(db_path=self.database_path)
        return self._storage_strategy

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        if self._config.log_level:
            set_log_level(self._config.log_level)
        return self._config

    def save_config(self):
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self):
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self._storage_strategy = None
        self.save_config()


@lru_cache
def get_config_service() -> ConfigService:
    """Get the process-wide ConfigService."""
    return ConfigService()
