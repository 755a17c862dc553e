"""
Lap recording and best/worst lap statistics.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence, Tuple

from lapwatch.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Lap:
    """A snapshot of elapsed time taken at a lap request."""

    id: int
    duration_ms: int
    recorded_at: datetime


@dataclass(frozen=True)
class BestWorst:
    """Fastest and slowest lap of a sequence; both ``None`` when it is empty."""

    best: Optional[Lap] = None
    worst: Optional[Lap] = None


@dataclass(frozen=True)
class LapRow:
    """A lap as listed to the user, with its best/worst designation."""

    lap: Lap
    is_best: bool
    is_worst: bool


class LapRecorder:
    """Keep the lap sequence of one session, newest lap first."""

    def __init__(self):
        self._laps: Tuple[Lap, ...] = ()
        self._next_id = 1

    @property
    def laps(self) -> Tuple[Lap, ...]:
        return self._laps

    @property
    def next_id(self) -> int:
        return self._next_id

    def record(self, duration_ms: int, recorded_at: datetime) -> Lap:
        """
        Append a lap to the sequence.

        Args:
            duration_ms: Elapsed time at the lap request
            recorded_at: Wall-clock time of the request

        Returns:
            The new lap, which is now first in :attr:`laps`
        """
        lap = Lap(id=self._next_id, duration_ms=duration_ms, recorded_at=recorded_at)
        self._next_id += 1
        self._laps = (lap,) + self._laps
        logger.debug(f"Recorded lap #{lap.id} at {duration_ms} ms")
        return lap

    def clear(self) -> None:
        """Drop every lap and restart numbering at 1."""
        self._laps = ()
        self._next_id = 1


def best_worst(laps: Sequence[Lap]) -> BestWorst:
    """
    Find the fastest and slowest lap.

    Ties go to the lap met first in ``laps``. Sessions keep laps newest first,
    so the most recent of several equal laps is the one designated.

    Args:
        laps: Lap sequence in presentation order

    Returns:
        BestWorst; a single lap is both best and worst
    """
    if not laps:
        return BestWorst()

    best = worst = laps[0]
    for lap in laps[1:]:
        if lap.duration_ms < best.duration_ms:
            best = lap
        if lap.duration_ms > worst.duration_ms:
            worst = lap
    return BestWorst(best=best, worst=worst)


def lap_rows(laps: Sequence[Lap]) -> list[LapRow]:
    """
    Pair each lap with its best/worst flags for display.

    A lone lap is never flagged worst, and a lap flagged best is not also
    flagged worst.
    """
    stats = best_worst(laps)
    rows = []
    for lap in laps:
        is_best = stats.best is not None and lap.id == stats.best.id
        is_worst = (
            not is_best
            and len(laps) > 1
            and stats.worst is not None
            and lap.id == stats.worst.id
        )
        rows.append(LapRow(lap=lap, is_best=is_best, is_worst=is_worst))
    return rows
