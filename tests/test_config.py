#!/usr/bin/env python3
"""
Tests for configuration management module.
"""

import json
import pytest
from unittest.mock import patch

from fabric_admin.config import DEFAULTS, Config, ConfigManager, get_config_manager


# ============================================================================
# Config Model Tests
# ============================================================================

class TestConfig:
    """Tests for Config model."""

    def test_create_empty_config(self):
        """Test creating config with all defaults."""
        cfg = Config()
        assert cfg.storage_directory is None
        assert cfg.advertise_operational is None
        assert cfg.prompt is None
        assert cfg.log_level is None
        assert cfg.log_file is None

    def test_create_config_with_values(self):
        """Test creating config with specific values."""
        cfg = Config(storage_directory="/var/fabric", advertise_operational=False, prompt="$ ")
        assert cfg.storage_directory == "/var/fabric"
        assert cfg.advertise_operational is False
        assert cfg.prompt == "$ "

    def test_get_with_value(self):
        """Test get method when value exists."""
        cfg = Config(log_level="DEBUG")
        assert cfg.get("log_level") == "DEBUG"
        assert cfg.get("log_level", "ERROR") == "DEBUG"

    def test_get_false_is_not_missing(self):
        """Test that an explicit False is returned rather than the default."""
        cfg = Config(advertise_operational=False)
        assert cfg.get("advertise_operational") is False

    def test_get_with_none(self):
        """Test get method when value is None falls back to DEFAULTS."""
        cfg = Config()
        assert cfg.get("prompt") == DEFAULTS["prompt"]
        assert cfg.get("advertise_operational") is True

    def test_get_default_when_defaults_has_none(self):
        """Test that a None default in DEFAULTS yields the provided default."""
        cfg = Config()
        assert cfg.get("storage_directory") is None
        assert cfg.get("storage_directory", "/tmp") == "/tmp"

    def test_get_unknown_key(self):
        """Test get with unknown key returns default."""
        cfg = Config()
        assert cfg.get("unknown_key") is None
        assert cfg.get("unknown_key", "default") == "default"

    def test_ignores_unknown_fields(self):
        """Test that extra keys like _comment are ignored."""
        cfg = Config.model_validate({"_comment": "hello", "prompt": "> "})
        assert cfg.prompt == "> "


# ============================================================================
# ConfigManager Tests
# ============================================================================

class TestConfigManager:
    """Tests for ConfigManager."""

    @pytest.fixture
    def temp_config_dir(self, tmp_path):
        """Create temporary config directory and point ConfigManager at it."""
        config_dir = tmp_path / ".fabric_admin"
        config_dir.mkdir()
        with patch.object(ConfigManager, 'CONFIG_DIR', config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_dir / "config.json"):
                yield config_dir

    def test_load_nonexistent_config(self, temp_config_dir):
        """Test loading config when file doesn't exist (without creating)."""
        mgr = ConfigManager()
        cfg = mgr.load(create_if_missing=False)
        assert cfg.storage_directory is None
        assert not (temp_config_dir / "config.json").exists()

    def test_load_creates_default_config(self, temp_config_dir):
        """Test that load creates default config file if missing."""
        config_file = temp_config_dir / "config.json"
        mgr = ConfigManager()
        cfg = mgr.load(create_if_missing=True)
        assert cfg.prompt is None
        assert config_file.exists()
        data = json.loads(config_file.read_text())
        assert "storage_directory" in data
        assert data["prompt"] == ">>> "

    def test_config_property_does_not_create_file(self, temp_config_dir):
        """Test that reading config lazily leaves the filesystem alone."""
        mgr = ConfigManager()
        assert mgr.config.storage_directory is None
        assert not (temp_config_dir / "config.json").exists()

    def test_save_and_load_config(self, temp_config_dir):
        """Test saving and loading config."""
        mgr = ConfigManager()
        mgr.save(Config(storage_directory="/data", log_level="DEBUG"))

        loaded = ConfigManager().load()
        assert loaded.storage_directory == "/data"
        assert loaded.log_level == "DEBUG"

    def test_save_only_non_none_values(self, temp_config_dir):
        """Test that save only writes non-None values."""
        config_file = temp_config_dir / "config.json"
        mgr = ConfigManager()
        mgr.save(Config(prompt="$ "))

        data = json.loads(config_file.read_text())
        assert data == {"prompt": "$ "}

    def test_save_preserves_unknown_keys(self, temp_config_dir):
        """Test that save keeps keys it does not know about."""
        config_file = temp_config_dir / "config.json"
        config_file.write_text(json.dumps({"_comment": "keep me"}))

        ConfigManager().save(Config(prompt="$ "))

        data = json.loads(config_file.read_text())
        assert data["_comment"] == "keep me"
        assert data["prompt"] == "$ "

    def test_set_value(self, temp_config_dir):
        """Test setting a config value."""
        mgr = ConfigManager()
        mgr.set("storage_directory", "/srv/fabric")

        loaded = ConfigManager().load()
        assert loaded.storage_directory == "/srv/fabric"

    def test_set_preserves_other_values(self, temp_config_dir):
        """Test that setting one value preserves other existing values."""
        ConfigManager().set("prompt", "$ ")
        ConfigManager().set("advertise_operational", False)
        ConfigManager().set("log_level", "WARNING")

        final = ConfigManager().load(create_if_missing=False)
        assert final.prompt == "$ "
        assert final.advertise_operational is False
        assert final.log_level == "WARNING"

    def test_set_coerces_to_field_type(self, temp_config_dir):
        """Test that typed text is converted by the field, not by its spelling."""
        mgr = ConfigManager()
        assert mgr.set("advertise_operational", "false") is False
        assert mgr.set("prompt", "true") == "true"

        loaded = ConfigManager().load(create_if_missing=False)
        assert loaded.advertise_operational is False
        assert loaded.prompt == "true"

    def test_set_invalid_value_keeps_existing_config(self, temp_config_dir):
        """Test that a rejected value leaves the saved settings untouched."""
        mgr = ConfigManager()
        mgr.set("storage_directory", "/srv/fabric")

        with pytest.raises(ValueError):
            mgr.set("advertise_operational", "sometimes")

        fresh = ConfigManager()
        assert fresh.get("storage_directory") == "/srv/fabric"
        assert fresh.get("advertise_operational") is True

    def test_set_unknown_key_raises(self, temp_config_dir):
        """Test that setting unknown key raises ValueError."""
        mgr = ConfigManager()
        with pytest.raises(ValueError, match="Unknown config key"):
            mgr.set("unknown_key", "value")

    def test_unset_value(self, temp_config_dir):
        """Test unsetting a config value."""
        mgr = ConfigManager()
        mgr.set("prompt", "$ ")
        mgr.set("log_level", "DEBUG")

        mgr.unset("prompt")

        loaded = ConfigManager().load()
        assert loaded.prompt is None
        assert loaded.log_level == "DEBUG"

    def test_unset_unknown_key_raises(self, temp_config_dir):
        """Test that unsetting unknown key raises ValueError."""
        with pytest.raises(ValueError, match="Unknown config key"):
            ConfigManager().unset("nope")

    def test_get_value(self, temp_config_dir):
        """Test getting a config value."""
        mgr = ConfigManager()
        mgr.set("log_level", "ERROR")

        assert mgr.get("log_level") == "ERROR"
        # Unset values fall back to DEFAULTS
        assert mgr.get("prompt") == DEFAULTS["prompt"]

    def test_list_settings(self, temp_config_dir):
        """Test listing non-default settings."""
        mgr = ConfigManager()
        mgr.set("prompt", "$ ")
        mgr.set("advertise_operational", True)  # Same as default

        assert mgr.list_settings() == {"prompt": "$ "}

    def test_list_settings_empty(self, temp_config_dir):
        """Test listing settings when empty."""
        assert ConfigManager().list_settings() == {}

    def test_reset(self, temp_config_dir):
        """Test resetting config to defaults."""
        config_file = temp_config_dir / "config.json"
        mgr = ConfigManager()
        mgr.set("prompt", "$ ")
        assert config_file.exists()

        mgr.reset()
        assert not config_file.exists()
        assert mgr.load(create_if_missing=False).prompt is None

    def test_load_invalid_json(self, temp_config_dir):
        """Test loading invalid JSON returns defaults."""
        (temp_config_dir / "config.json").write_text("not valid json")
        cfg = ConfigManager().load()
        assert cfg.storage_directory is None

    def test_load_invalid_schema(self, temp_config_dir):
        """Test loading invalid schema returns defaults."""
        (temp_config_dir / "config.json").write_text('{"advertise_operational": "sometimes"}')
        cfg = ConfigManager().load()
        assert cfg.advertise_operational is None


# ============================================================================
# Singleton Tests
# ============================================================================

class TestSingleton:
    """Tests for singleton functions."""

    def test_get_config_manager_returns_same_instance(self, tmp_path):
        """Test that get_config_manager returns singleton."""
        import fabric_admin.config.config as config_module

        config_module._manager = None
        try:
            with patch.object(ConfigManager, 'CONFIG_DIR', tmp_path):
                with patch.object(ConfigManager, 'CONFIG_FILE', tmp_path / "config.json"):
                    assert get_config_manager() is get_config_manager()
        finally:
            config_module._manager = None

    def test_config_property_loads_file(self, tmp_path):
        """Test that the singleton reads settings from the config file."""
        import fabric_admin.config.config as config_module

        config_module._manager = None
        try:
            with patch.object(ConfigManager, 'CONFIG_DIR', tmp_path):
                with patch.object(ConfigManager, 'CONFIG_FILE', tmp_path / "config.json"):
                    (tmp_path / "config.json").write_text(json.dumps({"prompt": "$ "}))
                    assert get_config_manager().config.prompt == "$ "
        finally:
            config_module._manager = None


# ============================================================================
# Test Runner
# ============================================================================

if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
