"""Platform event processor - an asyncio loop running in a dedicated thread.

Device events, log output from background activity and deferred work all run
on this thread. Other threads hand work over with schedule_work().
"""
from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, Optional

from fabric_admin.core.exceptions import SchedulingError

logger = logging.getLogger(__name__)


class PlatformManager:
    """Owns the platform event loop and the thread that runs it."""

    def __init__(self, name: str = "platform-event-loop"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._started = threading.Event()

    @property
    def is_running(self) -> bool:
        """True while the event loop thread is alive and accepting work."""
        loop = self._loop
        return loop is not None and loop.is_running() and not loop.is_closed()

    @property
    def thread(self) -> Optional[threading.Thread]:
        return self._thread

    def start_event_loop_task(self) -> None:
        """Start the event loop thread. Does nothing if it is already running."""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return

            self._loop = asyncio.new_event_loop()
            self._started.clear()
            self._thread = threading.Thread(target=self._run_loop, daemon=True, name=self.name)
            self._thread.start()

        # Wait for run_forever() to be entered so schedule_work() succeeds
        self._started.wait(timeout=1.0)
        logger.debug(f"Started {self.name}")

    def _run_loop(self) -> None:
        loop = self._loop
        asyncio.set_event_loop(loop)
        loop.call_soon(self._started.set)
        try:
            loop.run_forever()
        finally:
            loop.close()
            logger.debug(f"Stopped {self.name}")

    def schedule_work(self, task: Callable[[], None]) -> None:
        """Queue a zero-argument callable to run on the event loop thread.

        Returns immediately; the task runs later on the loop thread.

        Raises:
            SchedulingError: If the event loop is not running.
        """
        loop = self._loop
        if loop is None or loop.is_closed():
            raise SchedulingError("Platform event loop is not running")
        try:
            loop.call_soon_threadsafe(self._run_task, task)
        except RuntimeError as e:
            raise SchedulingError(f"Platform event loop rejected work: {e}") from e

    @staticmethod
    def _run_task(task: Callable[[], None]) -> None:
        try:
            task()
        except Exception:
            logger.exception(f"Scheduled work {task!r} failed")

    def stop_event_loop_task(self) -> None:
        """Ask the event loop to stop. Safe to call from any thread, more than once."""
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(loop.stop)
        except RuntimeError:
            # Loop closed between the check and the call
            pass

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the event loop thread to finish.

        Returns:
            True if the thread has exited (or was never started).
        """
        thread = self._thread
        if thread is None:
            return True
        if thread is not threading.current_thread():
            thread.join(timeout=timeout)
        return not thread.is_alive()


# Process-wide platform manager
_platform_manager: Optional[PlatformManager] = None


def get_platform_manager() -> PlatformManager:
    """Get the process-wide PlatformManager instance."""
    global _platform_manager
    if _platform_manager is None:
        _platform_manager = PlatformManager()
    return _platform_manager
