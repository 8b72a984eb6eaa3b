"""Configuration management for todolist-cli."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from todolist_cli.services.remote import DEFAULT_ENDPOINT

logger = logging.getLogger(__name__)


class RemoteConfig(BaseModel):
    """Remote todo source configuration."""

    endpoint: str = Field(default=DEFAULT_ENDPOINT)
    timeout: float = Field(default=30.0, gt=0)


class StorageConfig(BaseModel):
    """Local task store configuration.

    ``db_path`` of None means the per-user data directory.
    """

    db_path: Optional[str] = Field(default=None)


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)
    date_format: str = Field(default="%d/%m/%y")


class SyncConfig(BaseModel):
    """Seeding configuration."""

    seed_on_launch: bool = Field(default=True)


class Config(BaseModel):
    """Main configuration."""

    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)


class ConfigManager:
    """Loads and saves the JSON configuration of one profile."""

    def __init__(self, profile: str = "default", config_dir: Path | None = None):
        self.profile = profile
        self.config_dir = config_dir or Path(user_config_dir("todolist-cli"))
        self.config_file = self.config_dir / f"{profile}.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file; defaults when missing or corrupt."""
        if not self.config_file.exists():
            return Config()
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Config(**data)
        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.warning("ignoring unreadable config %s: %s", self.config_file, e)
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
            KeyError: If the key does not name a configuration field
            ValidationError: If the value does not fit the field
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value

        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration (or a single key) to defaults."""
        if key is None:
            self._config = Config()
        else:
            self.set(key, self.get_from_config(Config(), key))
        self.save_config()

    @staticmethod
    def get_from_config(config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def list_profiles(self) -> list[str]:
        """List all available profiles."""
        return sorted(
            f.stem for f in self.config_dir.glob("*.json") if not f.name.startswith(".")
        )


@lru_cache(maxsize=4)
def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get the config manager for *profile*."""
    return ConfigManager(profile)
