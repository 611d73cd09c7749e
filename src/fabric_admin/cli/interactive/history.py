"""
Persistent shell history.

Backed by prompt_toolkit's FileHistory. Every non-empty line is stored as
soon as it is read, so history survives an abnormal exit.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from prompt_toolkit.history import FileHistory

logger = logging.getLogger(__name__)

HISTORY_FILE_NAME = "chip_tool_history"

# Same fallback the persistent storage uses when no directory is configured
FALLBACK_DIRECTORY = "/tmp"


def resolve_storage_directory(
    storage_directory: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Directory for per-session files.

    Precedence: configured storage directory, then $TMPDIR, then /tmp.
    Empty values count as unset.
    """
    if storage_directory:
        return Path(storage_directory)
    if environ is None:
        environ = os.environ
    return Path(environ.get("TMPDIR") or FALLBACK_DIRECTORY)


def history_file_path(
    storage_directory: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Resolve the history file location."""
    return resolve_storage_directory(storage_directory, environ) / HISTORY_FILE_NAME


class HistoryStore:
    """Append-only history file for one shell session.

    The path is resolved once, when the store is created.
    """

    def __init__(
        self,
        storage_directory: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.path = history_file_path(storage_directory, environ)
        self.file_history = FileHistory(str(self.path))

    def load(self) -> list[str]:
        """Read all entries, oldest first. A missing file is an empty history."""
        try:
            # FileHistory yields newest first
            entries = list(self.file_history.load_history_strings())
        except OSError as e:
            logger.warning(f"Could not read history file {self.path}: {e}")
            return []
        entries.reverse()
        return [entry for entry in entries if entry]

    def append(self, line: str) -> None:
        """Store one entry; the file is opened and closed per entry. Empty lines are not stored."""
        if not line:
            return
        try:
            self.file_history.store_string(line)
        except OSError as e:
            logger.warning(f"Could not write history file {self.path}: {e}")
