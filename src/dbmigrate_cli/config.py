"""Configuration management for dbmigrate-cli."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError, field_validator

APP_NAME = "dbmigrate_cli"

ENV_DATABASE_URL = "DBMIGRATE_DATABASE_URL"
ENV_MIGRATIONS_DIR = "DBMIGRATE_MIGRATIONS_DIR"


def _default_database_url() -> str:
    return f"sqlite:///{Path(user_data_dir(APP_NAME)) / 'dbmigrate.db'}"


class DatabaseConfig(BaseModel):
    """Database configuration."""

    url: str = Field(default_factory=_default_database_url)
    timeout: float = Field(default=30.0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("url cannot be empty")
        return v.strip()


class MigrationsConfig(BaseModel):
    """Migration discovery and bookkeeping configuration."""

    directory: str = Field(default="migrations")
    table: str = Field(default="schema_migration")
    legacy_table: str = Field(default="schema_info")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level


class Config(BaseModel):
    """Main configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    migrations: MigrationsConfig = Field(default_factory=MigrationsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages dbmigrate-cli configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_file = self.config_dir / "config.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, ValueError, ValidationError):
                # If config is corrupted, return default
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a configuration value
            ValidationError: If the value is invalid for the key
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current or isinstance(current[keys[-1]], dict):
            raise KeyError(key)

        current[keys[-1]] = value

        # Reload config from the modified dictionary
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            default_value = self.get_from_config(Config(), key)
            if default_value is None:
                raise KeyError(key)
            self.set(key, default_value)
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def database_url(self, override: Optional[str] = None) -> str:
        """Database URL: explicit override, then environment, then file."""
        return override or os.environ.get(ENV_DATABASE_URL) or self.config.database.url

    def migrations_dir(self, override: Optional[str] = None) -> Path:
        """Migrations directory: explicit override, then environment, then file."""
        return Path(
            override
            or os.environ.get(ENV_MIGRATIONS_DIR)
            or self.config.migrations.directory
        )


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def reset_config_manager() -> None:
    """Drop the global config manager so the next call reloads from disk."""
    global _config_manager
    _config_manager = None
