"""
Stopwatch session: run/pause/reset lifecycle, elapsed time and laps.
"""
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from lapwatch.core.clock import Clock, SystemClock
from lapwatch.core.logging import get_logger
from lapwatch.core.scheduler import Scheduler, ThreadScheduler
from lapwatch.services.laps import BestWorst, Lap, LapRecorder, LapRow, best_worst, lap_rows
from lapwatch.services.sampler import ElapsedSampler

logger = get_logger(__name__)


class StopwatchState(str, Enum):
    """Lifecycle states of a stopwatch session."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"


@dataclass(frozen=True)
class StopwatchSnapshot:
    """Consistent view of a session taken in one step."""

    state: StopwatchState
    elapsed_ms: int
    laps: Tuple[Lap, ...]
    best_worst: BestWorst


class StopwatchSession:
    """
    One stopwatch: elapsed time, state and the laps recorded since the last reset.

    No operation raises. Requests that make no sense in the current state,
    such as a lap while paused, are ignored.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        sample_interval_ms: int = 10,
    ):
        """
        Initialize an idle session.

        Args:
            clock: Clock source (defaults to the system monotonic clock)
            scheduler: Repeating-timer capability (defaults to a thread scheduler)
            sample_interval_ms: Interval between elapsed-time samples while running
        """
        self.clock = clock or SystemClock()
        self.sampler = ElapsedSampler(
            clock=self.clock,
            scheduler=scheduler or ThreadScheduler(),
            interval_ms=sample_interval_ms,
        )
        self.recorder = LapRecorder()
        self._state = StopwatchState.IDLE
        self._elapsed_ms = 0
        # Ticks arrive on the scheduler's thread
        self._lock = threading.RLock()

    @property
    def state(self) -> StopwatchState:
        return self._state

    @property
    def elapsed_ms(self) -> int:
        return self._elapsed_ms

    def get_elapsed(self) -> int:
        """Return the last sampled elapsed time in milliseconds."""
        return self._elapsed_ms

    def get_laps(self) -> Tuple[Lap, ...]:
        """Return recorded laps, newest first."""
        return self.recorder.laps

    def get_best_worst(self) -> BestWorst:
        return best_worst(self.recorder.laps)

    def lap_rows(self) -> list[LapRow]:
        return lap_rows(self.recorder.laps)

    def snapshot(self) -> StopwatchSnapshot:
        with self._lock:
            laps = self.recorder.laps
            return StopwatchSnapshot(
                state=self._state,
                elapsed_ms=self._elapsed_ms,
                laps=laps,
                best_worst=best_worst(laps),
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def toggle_start_pause(self) -> StopwatchState:
        """Start when idle or paused, pause when running; return the new state."""
        with self._lock:
            if self._state is StopwatchState.RUNNING:
                self.pause()
            else:
                self.start()
            return self._state

    def start(self) -> None:
        """Begin or resume timing from the current elapsed value."""
        with self._lock:
            if self._state is StopwatchState.RUNNING:
                return
            self.sampler.begin(self._elapsed_ms, self._on_tick)
            self._state = StopwatchState.RUNNING
            logger.info(f"Stopwatch started at {self._elapsed_ms} ms")

    def pause(self) -> None:
        """Stop sampling and freeze elapsed time at the last sample."""
        with self._lock:
            if self._state is not StopwatchState.RUNNING:
                return
            self.sampler.halt()
            self._state = StopwatchState.PAUSED
            logger.info(f"Stopwatch paused at {self._elapsed_ms} ms")

    def reset(self) -> None:
        """Return to idle with zero elapsed time and no laps."""
        with self._lock:
            self.sampler.halt()
            self._elapsed_ms = 0
            self.recorder.clear()
            self._state = StopwatchState.IDLE
            logger.info("Stopwatch reset")

    def shutdown(self) -> None:
        """Cancel sampling without touching state, for process shutdown."""
        with self._lock:
            self.sampler.halt()

    # ------------------------------------------------------------------
    # Laps
    # ------------------------------------------------------------------
    def record_lap(self) -> Optional[Lap]:
        """
        Record the current elapsed time as a lap.

        Returns:
            The new lap, or None when not running or nothing has elapsed yet
        """
        with self._lock:
            if self._state is not StopwatchState.RUNNING or self._elapsed_ms <= 0:
                logger.debug(f"Lap ignored in state {self._state.value} at {self._elapsed_ms} ms")
                return None
            return self.recorder.record(self._elapsed_ms, self.clock.wall_now())

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------
    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if self._state is not StopwatchState.RUNNING or not self.sampler.is_current(generation):
                return
            self._elapsed_ms = max(self._elapsed_ms, self.sampler.sample())
