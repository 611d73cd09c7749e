"""Config command - show/set/delete/reset configuration."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fabric_admin.cli.commands.registry import EXIT_FAILURE, command_registry
from fabric_admin.core.exceptions import CommandError

if TYPE_CHECKING:
    from fabric_admin.cli.commands.registry import CommandContext


def _parse_value(value_str: str):
    """Only none/null is special; the config model coerces everything else."""
    if value_str.lower() in ("none", "null"):
        return None
    return value_str


@command_registry.register(
    "config",
    "Show, set, delete or reset configuration",
    usage="config [set <key> <value> | del <key> | reset]",
)
def cmd_config(ctx: "CommandContext", args: list[str]):
    """Show, set, delete or reset configuration values.

    Changes are saved to the config file and take effect on the next start.
    """
    from fabric_admin.config import DEFAULTS, get_config_manager

    cfg_mgr = get_config_manager()

    if not args:
        settings = cfg_mgr.list_settings()
        print(f"\nConfig file: {cfg_mgr.CONFIG_FILE}")
        if settings:
            for key, value in settings.items():
                print(f"  {key}: {value}")
        else:
            print("  (no custom settings)")
        print()
        return None

    if args[0] == "set" and len(args) >= 3:
        key = args[1]
        value = _parse_value(" ".join(args[2:]))
        try:
            if value is None:
                cfg_mgr.unset(key)
            else:
                value = cfg_mgr.set(key, value)
        except ValueError as e:
            print(f"Error: {e}")
            return EXIT_FAILURE
        print(f"Set {key} = {value}")
        return None

    if args[0] == "del" and len(args) >= 2:
        key = args[1]
        try:
            cfg_mgr.unset(key)
        except ValueError as e:
            print(f"Error: {e}")
            return EXIT_FAILURE
        print(f"Deleted {key} (default: {DEFAULTS.get(key)})")
        return None

    if args == ["reset"]:
        cfg_mgr.reset()
        print(f"Removed {cfg_mgr.CONFIG_FILE}; all settings are back to defaults")
        return None

    raise CommandError(f"unexpected arguments: {' '.join(args)}")
