"""
Keeps asynchronous log output from garbling the interactive prompt.

Log records emitted while the operator is typing (for example from device
event callbacks on the platform thread) are written between two clear-line
sequences. Writes go to whatever sys.stdout is at write time; while the
prompt is shown that is prompt_toolkit's stdout proxy, which prints above
the prompt and then redraws it with the pending input.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import IO, Optional

from fabric_admin.platform.logging import ROOT_LOGGER, make_formatter

# Move the cursor to the start of the line and clear to the end of the screen
CLEAR_LINE = "\r\x1b[0J"


class CoordinatedHandler(logging.Handler):
    """Logging handler that writes each record through an OutputCoordinator."""

    def __init__(self, coordinator: "OutputCoordinator", level: int = logging.NOTSET):
        super().__init__(level)
        self.coordinator = coordinator

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            self.coordinator.write(msg + "\n")
        except Exception:
            self.handleError(record)


class OutputCoordinator:
    """Serializes terminal writes from the shell and from log output.

    Args:
        stream: Terminal stream. Defaults to whatever sys.stdout is at write time.
    """

    def __init__(self, stream: Optional[IO[str]] = None):
        self._stream = stream
        self._lock = threading.RLock()
        self._handler: Optional[CoordinatedHandler] = None
        self._logger: Optional[logging.Logger] = None
        self._detached: list[logging.Handler] = []

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def installed(self) -> bool:
        return self._handler is not None

    def clear_line(self) -> None:
        with self._lock:
            stream = self.stream
            stream.write(CLEAR_LINE)
            stream.flush()

    def write(self, text: str) -> None:
        """Write text between two clear-line sequences."""
        with self._lock:
            stream = self.stream
            stream.write(CLEAR_LINE)
            stream.write(text)
            stream.write(CLEAR_LINE)
            stream.flush()

    def install(self, logger: Optional[logging.Logger] = None) -> CoordinatedHandler:
        """Route a logger's console output through this coordinator.

        Console stream handlers already attached to the logger are detached
        until uninstall(); file handlers are left alone. Installing twice
        returns the existing handler.
        """
        if self._handler is not None:
            return self._handler

        if logger is None:
            logger = logging.getLogger(ROOT_LOGGER)

        for handler in list(logger.handlers):
            if type(handler) is logging.StreamHandler:
                logger.removeHandler(handler)
                self._detached.append(handler)

        handler = CoordinatedHandler(self)
        handler.setFormatter(make_formatter())
        if self._detached:
            console = self._detached[0]
            handler.setLevel(console.level)
            if console.formatter is not None:
                handler.setFormatter(console.formatter)
        logger.addHandler(handler)

        self._handler = handler
        self._logger = logger
        return handler

    def uninstall(self) -> None:
        """Restore the logger's original console handlers."""
        if self._handler is None:
            return

        logger = self._logger
        logger.removeHandler(self._handler)
        for handler in self._detached:
            logger.addHandler(handler)

        self._detached = []
        self._handler = None
        self._logger = None
