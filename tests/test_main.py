#!/usr/bin/env python3
"""
Tests for the fabric-admin command-line entry point.
"""

import importlib

import pytest
from unittest.mock import MagicMock, patch

from fabric_admin.cli.commands import command_registry, loader
from fabric_admin.config import ConfigManager
from fabric_admin.platform import PlatformManager

# fabric_admin.cli re-exports main(), so fetch the module itself
main_module = importlib.import_module("fabric_admin.cli.main")


@pytest.fixture
def env(tmp_path):
    """Isolate config, logging setup and the platform thread."""
    import fabric_admin.config.config as config_module

    config_module._manager = None
    processor = PlatformManager(name="test-platform")
    with patch.object(ConfigManager, 'CONFIG_DIR', tmp_path / ".fabric_admin"):
        with patch.object(ConfigManager, 'CONFIG_FILE', tmp_path / ".fabric_admin" / "config.json"):
            with patch.object(main_module, 'configure_logging'):
                with patch.object(main_module, 'get_platform_manager', return_value=processor):
                    with patch.object(loader, 'USER_COMMANDS_DIR', tmp_path / "commands"):
                        yield processor
    config_module._manager = None
    command_registry.bind(None, None)
    processor.stop_event_loop_task()
    processor.join(timeout=5)


@pytest.fixture
def fake_session():
    """Replace InteractiveSession so no terminal is needed."""
    session = MagicMock()
    session.run.return_value = 0
    session.cleanup_scheduled = False
    with patch.object(main_module, 'InteractiveSession', return_value=session) as cls:
        yield cls, session


class TestMainFunction:
    """Tests for main()."""

    def test_no_command_starts_shell(self, env, fake_session):
        cls, session = fake_session

        assert main_module.main([]) == 0

        session.run.assert_called_once()
        session.close.assert_called_once()
        _, kwargs = cls.call_args
        assert kwargs["storage_directory"] is None
        assert kwargs["advertise_operational"] is True
        assert kwargs["prompt"] == ">>> "

    def test_interactive_start(self, env, fake_session):
        _, session = fake_session
        assert main_module.main(["interactive", "start"]) == 0
        session.run.assert_called_once()

    def test_shell_options(self, env, fake_session, tmp_path):
        cls, _ = fake_session

        main_module.main([
            "--storage-directory", str(tmp_path),
            "--no-advertise-operational",
            "--prompt", "fabric> ",
        ])

        _, kwargs = cls.call_args
        assert kwargs["storage_directory"] == str(tmp_path)
        assert kwargs["advertise_operational"] is False
        assert kwargs["prompt"] == "fabric> "

    def test_config_supplies_defaults(self, env, fake_session, tmp_path):
        cls, _ = fake_session
        ConfigManager().set("storage_directory", str(tmp_path))

        main_module.main([])

        _, kwargs = cls.call_args
        assert kwargs["storage_directory"] == str(tmp_path)

    def test_platform_stopped_after_end_of_input(self, env, fake_session):
        """Test that cleanups run and the platform stops when input closes."""
        assert main_module.main([]) == 0
        assert not env.is_running
        assert env.join(timeout=0)

    def test_no_second_cleanup_after_quit(self, env, fake_session):
        _, session = fake_session
        session.cleanup_scheduled = True

        with patch.object(main_module, 'schedule_cleanup') as mock_schedule:
            with patch.object(main_module, 'SHUTDOWN_TIMEOUT', 0.05):
                main_module.main([])

        mock_schedule.assert_not_called()

    def test_session_closed_when_run_raises(self, env, fake_session):
        _, session = fake_session
        session.run.side_effect = KeyboardInterrupt()

        with pytest.raises(KeyboardInterrupt):
            main_module.main([])

        session.close.assert_called_once()

    def test_one_shot_command(self, env, fake_session, capsys):
        cls, _ = fake_session

        assert main_module.main(["help"]) == 0

        cls.assert_not_called()
        assert "Commands:" in capsys.readouterr().out
        assert not env.is_running

    def test_one_shot_unknown_command(self, env, fake_session, capsys):
        assert main_module.main(["frobnicate"]) == 1
        assert "Unknown command: frobnicate" in capsys.readouterr().out

    def test_binds_platform_to_registry(self, env, fake_session):
        main_module.main([])
        assert command_registry.processor is env
        assert command_registry.cleanups is not None

    def test_log_file_option(self, env, fake_session, tmp_path):
        with patch.object(main_module, 'configure_session_logging') as mock_file_log:
            main_module.main(["--log-file", "--storage-directory", str(tmp_path)])
        mock_file_log.assert_called_once_with(tmp_path)

    def test_log_file_defaults_to_tmpdir(self, env, fake_session, tmp_path, monkeypatch):
        """Test that the session log follows the history file's directory rules."""
        monkeypatch.setenv("TMPDIR", str(tmp_path))
        with patch.object(main_module, 'configure_session_logging') as mock_file_log:
            main_module.main(["--log-file"])
        mock_file_log.assert_called_once_with(tmp_path)


# ============================================================================
# Test Runner
# ============================================================================

if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
