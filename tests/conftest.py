"""
Shared fixtures: a hand-driven clock and scheduler for deterministic timing.
"""
from datetime import datetime, timedelta, timezone

import pytest

from lapwatch.services.stopwatch import StopwatchSession


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_000_000):
        self.ms = start_ms
        self.wall_origin = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def now(self) -> int:
        return self.ms

    def wall_now(self) -> datetime:
        return self.wall_origin + timedelta(milliseconds=self.ms)

    def advance(self, ms: int) -> None:
        self.ms += ms


class ManualHandle:
    def __init__(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not self.cancelled


class ManualScheduler:
    """Scheduler whose timers fire only when the test advances time."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.handles = []

    def schedule_every(self, interval_ms, callback):
        handle = ManualHandle(interval_ms, callback)
        self.handles.append(handle)
        return handle

    def cancel(self, handle) -> None:
        handle.cancelled = True

    @property
    def active_handles(self):
        return [h for h in self.handles if h.active]

    def fire(self) -> None:
        for handle in self.active_handles:
            handle.callback()

    def advance(self, ms: int, step_ms: int = 10) -> None:
        """Move the clock forward by ``ms``, firing active timers after every step."""
        remaining = ms
        while remaining > 0:
            step = min(step_ms, remaining)
            self.clock.advance(step)
            remaining -= step
            self.fire()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def session(clock, scheduler):
    return StopwatchSession(clock=clock, scheduler=scheduler, sample_interval_ms=10)
