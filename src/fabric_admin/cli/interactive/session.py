"""
Interactive shell session.

Reads one line at a time and runs it through the command registry until the
operator types quit() or closes input. On quit() the deferred cleanups are
handed to the platform event loop and the session returns without waiting
for them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from fabric_admin.cli.commands.registry import EXIT_SUCCESS
from fabric_admin.cli.interactive.history import HistoryStore
from fabric_admin.cli.interactive.line_source import CommandCompleter, LineSource, PromptLineSource
from fabric_admin.cli.interactive.output import OutputCoordinator
from fabric_admin.platform.cleanup import DeferredCleanups, schedule_cleanup
from fabric_admin.platform.logging import ROOT_LOGGER

if TYPE_CHECKING:
    from fabric_admin.cli.commands.registry import CommandRegistry
    from fabric_admin.cli.interactive.line_source import CommandLine
    from fabric_admin.platform.processor import PlatformManager

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = ">>> "

# Compared verbatim, no trimming
STOP_COMMAND = "quit()"


class InteractiveSession:
    """One run of the interactive shell.

    Args:
        registry: Executes every line other than the stop command.
        processor: Platform event loop that receives the deferred cleanups.
        cleanups: Deferred cleanups to schedule on quit(); a fresh set bound
            to ``processor`` is created when omitted.
        storage_directory: Configured storage directory, passed to commands
            and used to locate the history file.
        advertise_operational: Passed through to every command.
        line_source: Where lines come from (default: the terminal).
        history: History file (default: resolved from storage_directory).
        output: Output coordinator for log redirection.
        prompt: Prompt shown by the default line source.
    """

    def __init__(
        self,
        registry: "CommandRegistry",
        processor: "PlatformManager",
        cleanups: Optional[DeferredCleanups] = None,
        *,
        storage_directory: Optional[str] = None,
        advertise_operational: bool = True,
        line_source: Optional[LineSource] = None,
        history: Optional[HistoryStore] = None,
        output: Optional[OutputCoordinator] = None,
        prompt: str = DEFAULT_PROMPT,
    ):
        self.registry = registry
        self.processor = processor
        self.cleanups = cleanups if cleanups is not None else DeferredCleanups(processor)
        self.storage_directory = storage_directory
        self.advertise_operational = advertise_operational
        self.prompt = prompt

        self.history = history or HistoryStore(storage_directory)
        self.line_source = line_source or PromptLineSource(prompt, completer=CommandCompleter(registry))
        self.output = output or OutputCoordinator()

        self.running = False
        self.cleanup_scheduled = False
        self.last_status: Optional[int] = None

    @property
    def history_file(self):
        return self.history.path

    def run(self) -> int:
        """Run the read-dispatch loop until quit() or end of input.

        Returns:
            Always EXIT_SUCCESS.
        """
        self.line_source.preload(self.history.load())

        # Log output must not garble the prompt while the operator is typing
        self.output.install(logging.getLogger(ROOT_LOGGER))

        logger.debug(f"Interactive session started, history file {self.history_file}")
        self.running = True
        line: Optional["CommandLine"] = None
        try:
            while self.running:
                line = self.line_source.next_line(line)
                if line is None:
                    break
                self.running = self.parse_command(line.text)
        finally:
            if line is not None:
                line.release()
            self.running = False

        logger.debug("Interactive session stopped")
        return EXIT_SUCCESS

    def parse_command(self, command: str) -> bool:
        """Handle one line.

        Returns:
            False if the session should stop.
        """
        if command == STOP_COMMAND:
            self.schedule_cleanup()
            return False

        self.history.append(command)
        self.output.clear_line()

        self.last_status = self.registry.run_interactive(
            command,
            self.storage_directory,
            self.advertise_operational,
        )
        return True

    def schedule_cleanup(self) -> bool:
        """Queue the deferred cleanups on the platform thread, at most once."""
        if self.cleanup_scheduled:
            return False
        self.cleanup_scheduled = True
        return schedule_cleanup(self.processor, self.cleanups)

    def close(self) -> None:
        """Give the logger its console handlers back."""
        self.output.uninstall()
