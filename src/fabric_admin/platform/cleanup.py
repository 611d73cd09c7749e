"""Deferred cleanups and the shutdown handoff to the platform event loop."""
from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable, Optional

from fabric_admin.core.exceptions import SchedulingError
from fabric_admin.platform.logging import log_error_on_failure

if TYPE_CHECKING:
    from fabric_admin.platform.processor import PlatformManager

logger = logging.getLogger(__name__)


class DeferredCleanups:
    """Cleanup callables registered by commands, run once when the shell exits.

    execute() is meant to run on the platform thread. After running every
    cleanup it stops the platform event loop, if one was given.
    """

    def __init__(self, processor: Optional["PlatformManager"] = None):
        self.processor = processor
        self._cleanups: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._cleanups)

    def register(self, cleanup: Callable[[], None]) -> Callable[[], None]:
        """Register a cleanup. Registering the same callable twice is a no-op."""
        with self._lock:
            if cleanup not in self._cleanups:
                self._cleanups.append(cleanup)
        return cleanup

    def execute(self) -> None:
        with self._lock:
            cleanups, self._cleanups = self._cleanups, []

        for cleanup in cleanups:
            try:
                cleanup()
            except Exception as e:
                log_error_on_failure(e, f"Deferred cleanup {cleanup!r} failed", include_traceback=True)

        logger.debug(f"Ran {len(cleanups)} deferred cleanup(s)")
        if self.processor is not None:
            self.processor.stop_event_loop_task()


def schedule_cleanup(processor: "PlatformManager", cleanups: DeferredCleanups) -> bool:
    """Hand the deferred cleanups over to the platform event loop.

    Never waits for them to run. A scheduling failure is logged and does not
    stop the caller from exiting.

    Returns:
        True if the cleanup task was queued.
    """
    try:
        processor.schedule_work(cleanups.execute)
    except SchedulingError as e:
        log_error_on_failure(e, "Failed to schedule deferred cleanups")
        return False
    return True
