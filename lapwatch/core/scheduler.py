"""
Repeating-timer primitives.

The stopwatch never sleeps or spawns work itself; it asks a scheduler to call
it back every few milliseconds and cancels that schedule on pause or reset.
"""
import threading
from typing import Callable, Protocol

from lapwatch.core.logging import get_logger

logger = get_logger(__name__)


class CancelHandle(Protocol):
    """Opaque token returned by ``schedule_every``."""

    @property
    def active(self) -> bool:
        ...


class Scheduler(Protocol):
    """Capability to run a callback repeatedly until cancelled."""

    def schedule_every(self, interval_ms: int, callback: Callable[[], None]) -> CancelHandle:
        ...

    def cancel(self, handle: CancelHandle) -> None:
        ...


class _RepeatingTimer(threading.Thread):
    """Daemon thread invoking ``callback`` every ``interval_ms`` until stopped."""

    def __init__(self, interval_ms: int, callback: Callable[[], None]):
        super().__init__(name="lapwatch-sampler", daemon=True)
        self._interval = max(interval_ms, 1) / 1000.0
        self._callback = callback
        self._stopped = threading.Event()

    @property
    def active(self) -> bool:
        return not self._stopped.is_set()

    def stop(self) -> None:
        self._stopped.set()

    def run(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Sampler callback failed")


class ThreadScheduler:
    """Scheduler backed by one daemon thread per active schedule."""

    def schedule_every(self, interval_ms: int, callback: Callable[[], None]) -> _RepeatingTimer:
        timer = _RepeatingTimer(interval_ms, callback)
        timer.start()
        logger.debug(f"Scheduled repeating timer every {interval_ms} ms")
        return timer

    def cancel(self, handle: _RepeatingTimer) -> None:
        # Not joined: the callback may be waiting on a lock held by the canceller
        handle.stop()
        logger.debug("Cancelled repeating timer")
