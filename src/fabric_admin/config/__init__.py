"""Configuration management for fabric-admin."""

from fabric_admin.config.config import (
    DEFAULTS,
    Config,
    ConfigManager,
    get_config_manager,
)

__all__ = [
    "DEFAULTS",
    "Config",
    "ConfigManager",
    "get_config_manager",
]
