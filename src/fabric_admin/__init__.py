"""
fabric_admin - Interactive administration shell for a device fabric

Lets an operator run control commands against a long-running
device-management process, one line at a time, without restarting it.

Example usage:
    from fabric_admin import InteractiveSession, PlatformManager, command_registry

    processor = PlatformManager()
    processor.start_event_loop_task()

    @command_registry.register("ping", "Check the shell is alive")
    def cmd_ping(ctx, args):
        print("pong")

    InteractiveSession(command_registry, processor).run()
"""

__version__ = "0.1.0"

from fabric_admin.cli.commands import CommandContext, CommandRegistry, command_registry
from fabric_admin.cli.interactive import InteractiveSession
from fabric_admin.core import (
    CommandError,
    FabricAdminError,
    SchedulingError,
)
from fabric_admin.platform import DeferredCleanups, PlatformManager

__all__ = [
    # Version
    "__version__",
    # Shell
    "InteractiveSession",
    "CommandRegistry",
    "CommandContext",
    "command_registry",
    # Platform
    "PlatformManager",
    "DeferredCleanups",
    # Errors
    "FabricAdminError",
    "SchedulingError",
    "CommandError",
]
