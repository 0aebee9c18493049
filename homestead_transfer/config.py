"""Configuration management for Homestead Transfer."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional, Literal
from pathlib import Path
import os
import json
import logging

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TransferConfig(BaseSettings):
    """
    Transfer engine configuration with environment variable support.

    Every field can be overridden with a HOMESTEAD_* environment variable,
    e.g. HOMESTEAD_STORAGE_BACKEND=sqlite.
    """

    # Logging
    log_level: str = "INFO"
    json_logging: bool = False

    # Storage backend
    storage_backend: Literal["memory", "sqlite"] = "sqlite"
    sqlite_path: str = "~/.homestead/homestead.db"

    # Export / import behaviour
    export_dir: str = "~/.homestead/exports"
    default_user_id: str = "main_user"
    json_indent: int = 2
    bundle_version: int = 1

    # History collections
    export_history_collection: str = "data_exports"
    import_history_collection: str = "data_imports"

    model_config = SettingsConfigDict(
        env_prefix="HOMESTEAD_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_VALID_LOG_LEVELS)}, got {v!r}"
            )
        return level

    @field_validator("json_indent")
    @classmethod
    def validate_json_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError("json_indent must be >= 0")
        return v

    def get_expanded_path(self, path: str) -> Path:
        """Expand ~ and environment variables in path."""
        return Path(os.path.expanduser(os.path.expandvars(path)))

    @property
    def sqlite_path_expanded(self) -> Path:
        """Get expanded SQLite database path."""
        path = self.get_expanded_path(self.sqlite_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def export_dir_expanded(self) -> Path:
        """Get expanded export directory (not created until something is written)."""
        return self.get_expanded_path(self.export_dir)


# Global config instance
_config: Optional[TransferConfig] = None

# User config file location
_USER_CONFIG_PATH = Path.home() / ".homestead" / "config.json"


def _load_user_config_overrides() -> dict:
    """
    Load user configuration overrides from ~/.homestead/config.json.

    Returns:
        Dict of config overrides, or empty dict if no config file exists
    """
    if not _USER_CONFIG_PATH.exists():
        return {}

    try:
        with open(_USER_CONFIG_PATH, 'r') as f:
            return json.load(f)
    except Exception as e:
        logger.warning(f"Failed to load user config from {_USER_CONFIG_PATH}: {e}")
        return {}


def get_config() -> TransferConfig:
    """
    Get or create global configuration instance.

    Configuration priority (highest to lowest):
    1. Environment variables (HOMESTEAD_*)
    2. User config file (~/.homestead/config.json)
    3. Built-in defaults
    """
    global _config
    if _config is None:
        user_overrides = _load_user_config_overrides()
        # Init kwargs would normally beat env vars; drop overridden keys so env wins
        user_overrides = {
            key: value for key, value in user_overrides.items()
            if f"HOMESTEAD_{key.upper()}" not in os.environ
        }
        _config = TransferConfig(**user_overrides)
    return _config


def set_config(config: Optional[TransferConfig]) -> None:
    """Set global configuration instance (mainly for testing)."""
    global _config
    _config = config
