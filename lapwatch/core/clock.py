"""
Clock sources used by the stopwatch engine.
"""
import time
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

NS_PER_MS = 1_000_000


@runtime_checkable
class Clock(Protocol):
    """Source of timestamps for measuring elapsed time.

    ``now`` is only meaningful as a difference between two readings.
    ``wall_now`` is used to stamp records with a human readable time.
    """

    def now(self) -> int:
        """Return a monotonic timestamp in milliseconds."""
        ...

    def wall_now(self) -> datetime:
        """Return the current wall-clock time."""
        ...


class SystemClock:
    """Production clock backed by ``time.monotonic_ns``."""

    def now(self) -> int:
        return time.monotonic_ns() // NS_PER_MS

    def wall_now(self) -> datetime:
        return datetime.now(timezone.utc)
