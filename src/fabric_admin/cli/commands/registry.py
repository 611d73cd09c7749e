"""
Command registry for the fabric-admin shell.

Commands are registered with a name, handler function, and metadata, and are
executed either once from the command line or line by line from the
interactive shell.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from fabric_admin.core.exceptions import CommandError

if TYPE_CHECKING:
    from fabric_admin.platform.cleanup import DeferredCleanups
    from fabric_admin.platform.processor import PlatformManager

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


@dataclass
class CommandContext:
    """What a command handler gets to know about the invocation."""

    registry: "CommandRegistry"
    storage_directory: Optional[str] = None
    advertise_operational: bool = True
    interactive: bool = False
    processor: Optional["PlatformManager"] = None
    cleanups: Optional["DeferredCleanups"] = None


@dataclass
class CommandEntry:
    """Entry for a registered command."""

    name: str
    handler: Callable[..., int | None]
    description: str
    usage: str | None = None
    aliases: list[str] = field(default_factory=list)


class CommandRegistry:
    """Registry for shell commands."""

    def __init__(self):
        self._commands: dict[str, CommandEntry] = {}
        self._aliases: dict[str, str] = {}
        self.processor: Optional["PlatformManager"] = None
        self.cleanups: Optional["DeferredCleanups"] = None

    def bind(self, processor: Optional["PlatformManager"], cleanups: Optional["DeferredCleanups"]) -> None:
        """Attach the platform objects handed to every command context."""
        self.processor = processor
        self.cleanups = cleanups

    def register(
        self,
        name: str,
        description: str,
        usage: str | None = None,
        aliases: list[str] | None = None,
    ) -> Callable:
        """Decorator to register a command.

        Args:
            name: Command name (e.g., "help")
            description: Short description for help
            usage: Usage string (e.g., "log <level> <message>")
            aliases: Alternative names for the command

        Returns:
            Decorator function

        Example:
            @command_registry.register("ping", "Check the shell is alive")
            def cmd_ping(ctx, args):
                print("pong")
        """
        def decorator(func: Callable) -> Callable:
            entry = CommandEntry(
                name=name,
                handler=func,
                description=description,
                usage=usage or name,
                aliases=aliases or [],
            )
            self._commands[name] = entry

            for alias in entry.aliases:
                self._aliases[alias] = name

            return func
        return decorator

    def get(self, name: str) -> CommandEntry | None:
        """Get a command by name or alias."""
        if name in self._commands:
            return self._commands[name]
        if name in self._aliases:
            return self._commands[self._aliases[name]]
        return None

    def match(self, line: str) -> tuple[CommandEntry | None, list[str]]:
        """Match a command line to a command entry.

        Args:
            line: The full command line (e.g., "log info hello")

        Returns:
            Tuple of (CommandEntry or None, remaining arguments)

        Raises:
            ValueError: If the line cannot be tokenized (e.g. unbalanced quotes)
        """
        argv = shlex.split(line)
        if not argv:
            return None, []
        return self.get(argv[0]), argv[1:]

    def all_commands(self) -> list[CommandEntry]:
        """Get all registered commands sorted by name."""
        return sorted(self._commands.values(), key=lambda e: e.name)

    def get_completions(self) -> dict[str, str]:
        """Get command names and descriptions for completion."""
        result = {}
        for entry in self._commands.values():
            result[entry.name] = entry.description
            for alias in entry.aliases:
                result[alias] = entry.description
        return result

    def _context(self, storage_directory: Optional[str], advertise_operational: bool, interactive: bool) -> CommandContext:
        return CommandContext(
            registry=self,
            storage_directory=storage_directory,
            advertise_operational=advertise_operational,
            interactive=interactive,
            processor=self.processor,
            cleanups=self.cleanups,
        )

    def _execute(self, entry: CommandEntry, args: list[str], ctx: CommandContext) -> int:
        try:
            status = entry.handler(ctx, args)
        except CommandError as e:
            print(f"Error: {e}")
            print(f"Usage: {entry.usage}")
            return EXIT_FAILURE
        except Exception as e:
            logger.exception(f"Command '{entry.name}' failed: {e}")
            return EXIT_FAILURE
        return EXIT_SUCCESS if status is None else int(status)

    def run_interactive(
        self,
        line: str,
        storage_directory: Optional[str] = None,
        advertise_operational: bool = True,
    ) -> int:
        """Execute one line typed in the interactive shell.

        Returns:
            The command's exit status. Empty lines succeed without running anything.
        """
        try:
            entry, args = self.match(line)
        except ValueError as e:
            print(f"Error: {e}")
            return EXIT_FAILURE

        if entry is None:
            if not line.strip():
                return EXIT_SUCCESS
            print(f"Unknown command: {line.split()[0]}")
            print("Type help for available commands.")
            return EXIT_FAILURE

        ctx = self._context(storage_directory, advertise_operational, interactive=True)
        return self._execute(entry, args, ctx)

    def run(
        self,
        argv: Sequence[str],
        storage_directory: Optional[str] = None,
        advertise_operational: bool = True,
    ) -> int:
        """Execute a single command given as an argument vector."""
        if not argv:
            print("No command given. Available commands:")
            for entry in self.all_commands():
                print(f"  {entry.usage:<28} - {entry.description}")
            return EXIT_FAILURE

        entry = self.get(argv[0])
        if entry is None:
            print(f"Unknown command: {argv[0]}")
            return EXIT_FAILURE

        ctx = self._context(storage_directory, advertise_operational, interactive=False)
        return self._execute(entry, list(argv[1:]), ctx)


# Global command registry
command_registry = CommandRegistry()
