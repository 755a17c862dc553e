"""
Shared dependencies for API endpoints.
"""
import threading
from typing import Optional

from lapwatch.core.config import settings
from lapwatch.core.logging import get_logger
from lapwatch.services.stopwatch import StopwatchSession

logger = get_logger(__name__)

# The service hosts exactly one stopwatch
_global_session: Optional[StopwatchSession] = None
# Sync endpoints resolve dependencies from the worker threadpool
_session_lock = threading.Lock()


def get_stopwatch() -> StopwatchSession:
    """
    Return the process-wide stopwatch session, creating it on first use.

    Returns:
        StopwatchSession sampling at ``settings.SAMPLE_INTERVAL_MS``
    """
    global _global_session

    if _global_session is not None:
        return _global_session

    with _session_lock:
        if _global_session is None:
            _global_session = StopwatchSession(sample_interval_ms=settings.SAMPLE_INTERVAL_MS)
            logger.info(f"Created stopwatch session (sample interval {settings.SAMPLE_INTERVAL_MS} ms)")
        return _global_session


def shutdown_stopwatch() -> None:
    """Stop the session's sampling timer if a session was created."""
    with _session_lock:
        if _global_session is not None:
            _global_session.shutdown()
