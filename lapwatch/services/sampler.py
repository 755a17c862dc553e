"""
Service that keeps elapsed time in step with the clock while running.
"""
from typing import Callable, Optional

from lapwatch.core.clock import Clock
from lapwatch.core.logging import get_logger
from lapwatch.core.scheduler import CancelHandle, Scheduler

logger = get_logger(__name__)


class ElapsedSampler:
    """Derive elapsed milliseconds from a reference start and the clock.

    Elapsed time is always recomputed as ``now - reference_start`` rather than
    accumulated tick by tick, so late or missed ticks never cause drift.
    Every schedule gets a new generation number; ticks carrying an older
    generation belong to a cancelled timer.
    """

    def __init__(self, clock: Clock, scheduler: Scheduler, interval_ms: int = 10):
        self.clock = clock
        self.scheduler = scheduler
        self.interval_ms = interval_ms
        self.reference_start: Optional[int] = None
        self._handle: Optional[CancelHandle] = None
        self._generation = 0

    @property
    def active(self) -> bool:
        """Whether a sampling timer is currently scheduled."""
        return self._handle is not None

    def begin(self, current_elapsed: int, on_tick: Callable[[int], None]) -> None:
        """
        Anchor the reference start and schedule periodic ticks.

        Args:
            current_elapsed: Elapsed milliseconds to resume from
            on_tick: Called on every tick with the generation it was scheduled under
        """
        self.halt()
        self.reference_start = self.clock.now() - current_elapsed
        generation = self._generation
        self._handle = self.scheduler.schedule_every(
            self.interval_ms, lambda: on_tick(generation)
        )
        logger.debug(
            f"Sampling every {self.interval_ms} ms from reference {self.reference_start}"
        )

    def halt(self) -> None:
        """Cancel the active timer, if any."""
        self._generation += 1
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def is_current(self, generation: int) -> bool:
        """Whether a tick of ``generation`` comes from the active timer."""
        return self._handle is not None and generation == self._generation

    def sample(self) -> int:
        """Return milliseconds elapsed since the reference start, never negative."""
        if self.reference_start is None:
            return 0
        return max(0, self.clock.now() - self.reference_start)
