"""Interactive shell: line input, history, output coordination and the command loop."""

from fabric_admin.cli.interactive.history import (
    HISTORY_FILE_NAME,
    HistoryStore,
    history_file_path,
    resolve_storage_directory,
)
from fabric_admin.cli.interactive.line_source import (
    CommandCompleter,
    CommandLine,
    LineSource,
    PromptLineSource,
)
from fabric_admin.cli.interactive.output import CLEAR_LINE, CoordinatedHandler, OutputCoordinator
from fabric_admin.cli.interactive.session import STOP_COMMAND, InteractiveSession

__all__ = [
    "HISTORY_FILE_NAME",
    "HistoryStore",
    "history_file_path",
    "resolve_storage_directory",
    "CommandLine",
    "LineSource",
    "PromptLineSource",
    "CommandCompleter",
    "CLEAR_LINE",
    "CoordinatedHandler",
    "OutputCoordinator",
    "STOP_COMMAND",
    "InteractiveSession",
]
