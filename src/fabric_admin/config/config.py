"""
Configuration management for fabric-admin.

Provides a configuration file at ~/.fabric_admin/config.json for default settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# Default values - single source of truth
DEFAULTS = {
    "storage_directory": None,
    "advertise_operational": True,
    "prompt": ">>> ",
    "log_level": "INFO",
    "log_file": False,
}


class Config(BaseModel):
    """Configuration settings for fabric-admin.

    All settings are optional. Use DEFAULTS for default values.
    """

    model_config = {"extra": "ignore"}  # Ignore unknown fields like _comment

    # Storage settings
    storage_directory: Optional[str] = Field(
        default=None,
        description="Directory for persistent storage and shell history (default: $TMPDIR or /tmp)"
    )

    # Dispatch settings
    advertise_operational: Optional[bool] = Field(
        default=None,
        description="Advertise operationally while running interactive commands"
    )

    # Shell settings
    prompt: Optional[str] = Field(
        default=None,
        description="Interactive prompt string"
    )

    # Logging settings
    log_level: Optional[str] = Field(
        default=None,
        description="Console log level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[bool] = Field(
        default=None,
        description="Also write logs to fabric_admin.log in the storage directory"
    )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value with fallback to DEFAULTS, then to provided default."""
        value = getattr(self, key, None)
        if value is not None:
            return value
        # Fall back to DEFAULTS, then to provided default
        value = DEFAULTS.get(key)
        return default if value is None else value


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_DIR = Path.home() / ".fabric_admin"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self):
        self._config: Optional[Config] = None

    def _ensure_dir(self) -> None:
        """Ensure config directory exists."""
        self.CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    @property
    def config(self) -> Config:
        """Get the current config, loading if necessary."""
        if self._config is None:
            self._config = self.load(create_if_missing=False)
        return self._config

    def load(self, create_if_missing: bool = True) -> Config:
        """Load configuration from file.

        Args:
            create_if_missing: If True, create default config file if it doesn't exist.

        Returns:
            Config object with loaded settings, or defaults if file doesn't exist.
        """
        if not self.CONFIG_FILE.exists():
            if create_if_missing:
                self._create_default_config()
            return Config()

        try:
            data = json.loads(self.CONFIG_FILE.read_text())
            return Config.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            # Invalid config file, return defaults
            logger.warning(f"Invalid config file {self.CONFIG_FILE} ({e}), using defaults")
            return Config()

    def _create_default_config(self) -> None:
        """Create default config file with actual default values."""
        self._ensure_dir()

        default_config = {"_comment": "fabric-admin configuration file"}
        default_config.update(DEFAULTS)
        self.CONFIG_FILE.write_text(json.dumps(default_config, indent=2) + "\n")

    def _read_raw(self) -> dict[str, Any]:
        """Read the config file as a plain dict, ignoring parse errors."""
        if not self.CONFIG_FILE.exists():
            return {}
        try:
            return json.loads(self.CONFIG_FILE.read_text())
        except json.JSONDecodeError:
            return {}

    def save(self, config: Optional[Config] = None) -> Path:
        """Save configuration to file, preserving existing structure.

        Args:
            config: Config to save. If None, saves current config.

        Returns:
            Path to saved config file.
        """
        self._ensure_dir()
        if config is not None:
            self._config = config

        if self._config is None:
            self._config = Config()

        # Update only non-None config values, preserving everything else
        existing_data = self._read_raw()
        for key, value in self._config.model_dump().items():
            if value is not None:
                existing_data[key] = value

        self.CONFIG_FILE.write_text(json.dumps(existing_data, indent=2) + "\n")
        return self.CONFIG_FILE

    def set(self, key: str, value: Any) -> Any:
        """Set a config value and save.

        The value is validated and coerced to the field's type first, so a bad
        value never reaches the file.

        Args:
            key: Config key to set.
            value: Value to set.

        Returns:
            The stored value.

        Raises:
            ValueError: Unknown key, or a value the field does not accept
                (pydantic's ValidationError is a ValueError).
        """
        # Always reload from file to get latest values
        current = self.load(create_if_missing=False)

        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")

        data = current.model_dump()
        data[key] = value
        self._config = Config.model_validate(data)
        self.save()
        return getattr(self._config, key)

    def unset(self, key: str) -> None:
        """Remove a config value (reset to default).

        Args:
            key: Config key to unset.
        """
        self._config = self.load(create_if_missing=False)

        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")

        setattr(self._config, key, None)

        existing_data = self._read_raw()
        if key in existing_data:
            existing_data[key] = None
            self.CONFIG_FILE.write_text(json.dumps(existing_data, indent=2) + "\n")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value with fallback."""
        return self.config.get(key, default)

    def list_settings(self) -> dict[str, Any]:
        """List user-customized settings (values that differ from defaults).

        Returns:
            Dict of settings that differ from DEFAULTS.
        """
        result = {}
        for k, v in self.config.model_dump().items():
            if v is None:
                continue
            if k not in DEFAULTS or v != DEFAULTS[k]:
                result[k] = v
        return result

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._config = Config()
        if self.CONFIG_FILE.exists():
            self.CONFIG_FILE.unlink()


# Singleton instance
_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the singleton ConfigManager instance."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager
