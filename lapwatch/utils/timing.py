"""
Utilities for measuring and displaying durations.
"""
import re
from typing import Optional

from lapwatch.core.clock import Clock, SystemClock

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HUNDREDTH = 10

_DISPLAY_PATTERN = re.compile(r"^(\d{2,}):([0-5]\d)\.(\d{2})$")


def format_duration(duration_ms: float) -> str:
    """
    Render a duration as ``MM:SS.HH``.

    Minutes are zero-padded to two digits and never truncated, so durations of
    100 minutes or more simply grow the minutes field.

    Args:
        duration_ms: Duration in milliseconds; negative values render as zero

    Returns:
        Formatted string, e.g. ``"01:01.01"`` for 61010
    """
    ms = max(0, int(duration_ms))
    minutes = ms // MS_PER_MINUTE
    seconds = (ms % MS_PER_MINUTE) // MS_PER_SECOND
    hundredths = (ms % MS_PER_SECOND) // MS_PER_HUNDREDTH
    return f"{minutes:02d}:{seconds:02d}.{hundredths:02d}"


def parse_duration(text: str) -> int:
    """
    Parse a ``MM:SS.HH`` string back into milliseconds.

    Args:
        text: String produced by :func:`format_duration`

    Returns:
        Duration in milliseconds, at hundredth-of-a-second resolution

    Raises:
        ValueError: If the text is not in ``MM:SS.HH`` form
    """
    match = _DISPLAY_PATTERN.match(text.strip())
    if not match:
        raise ValueError(f"Not a MM:SS.HH duration: {text!r}")
    minutes, seconds, hundredths = (int(part) for part in match.groups())
    return minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND + hundredths * MS_PER_HUNDREDTH


class Timer:
    """Context manager measuring how long a block takes."""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or SystemClock()
        self.start_ms: Optional[int] = None
        self.end_ms: Optional[int] = None

    def __enter__(self) -> "Timer":
        self.start_ms = self.clock.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_ms = self.clock.now()

    @property
    def elapsed_ms(self) -> int:
        """
        Get elapsed time in milliseconds.

        Returns:
            Milliseconds since entering the block, up to its exit if it has exited
        """
        if self.start_ms is None:
            return 0
        end = self.end_ms if self.end_ms is not None else self.clock.now()
        return end - self.start_ms
