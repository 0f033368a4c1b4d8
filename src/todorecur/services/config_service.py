"""Configuration service for managing todorecur configuration.

This module provides the ConfigService class, the single source of truth for
configuration. It handles:

- Loading and saving config.json
- Dot-separated key access (``scheduler.max_workers``)
- Resetting values to their defaults
- The ``TODORECUR_DB`` environment override for the database path
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel

from todorecur.models.config_models import AppConfig

DB_PATH_ENV_VAR = "TODORECUR_DB"


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("todorecur"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("todorecur"))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config  # Return cached config if already loaded

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run: write the defaults
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    @property
    def database_path(self) -> str:
        """Database file in effect: env override, then config, then data dir."""
        env_path = os.environ.get(DB_PATH_ENV_VAR)
        if env_path:
            return env_path
        if self.config.database.path:
            return self.config.database.path
        return str(self.data_dir / "todorecur.db")

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
        """
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise KeyError(f"Unknown configuration key: {key}")
            value = getattr(value, part)
        if isinstance(value, BaseModel):
            return value.model_dump()
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and save.

        The new value is validated through the config model.

        Raises:
            KeyError: If the key does not exist
            pydantic.ValidationError: If the value is invalid for the key
        """
        self.get(key)  # validates the key
        data = self.config.model_dump()
        *parents, leaf = key.split(".")
        section = data
        for part in parents:
            section = section[part]
        section[leaf] = value
        self._config = AppConfig.model_validate(data)
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset one key, or the whole configuration, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return

        self.get(key)  # validates the key
        default: Any = AppConfig().model_dump()
        for part in key.split("."):
            default = default[part]
        self.set(key, default)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
