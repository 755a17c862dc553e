"""
Stopwatch endpoints: start/pause toggle, reset, laps and formatting.
"""
from typing import Callable

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from lapwatch.api.deps import get_stopwatch
from lapwatch.core.logging import get_logger
from lapwatch.schemas.stopwatch import (
    BestWorstResponse,
    FormatResponse,
    LapListResponse,
    LapRowOut,
    StopwatchStatus,
)
from lapwatch.services.stopwatch import StopwatchSession
from lapwatch.utils.timing import format_duration

router = APIRouter()
logger = get_logger(__name__)


def _create_error_response(
    code: str,
    message: str,
    request_id: str,
    status_code: int
) -> JSONResponse:
    """
    Create a consistent JSON error response.

    Args:
        code: Error code
        message: Error message
        request_id: Request ID
        status_code: HTTP status code

    Returns:
        JSONResponse with error format
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "requestId": request_id
            }
        }
    )


def _apply(
    action: Callable[[], object],
    session: StopwatchSession,
    http_request: Request,
    name: str,
):
    """Run a stopwatch operation and report the resulting state."""
    request_id = getattr(http_request.state, "request_id", None) or "unknown"

    try:
        action()
        return StopwatchStatus.from_snapshot(session.snapshot())
    except Exception as e:
        logger.exception(
            f"Unexpected error during stopwatch {name}: {e}",
            extra={"request_id": request_id}
        )
        return _create_error_response(
            code="INTERNAL_ERROR",
            message=f"An unexpected error occurred: {str(e)}",
            request_id=request_id,
            status_code=500
        )


@router.get("/", response_model=StopwatchStatus)
def get_status(session: StopwatchSession = Depends(get_stopwatch)) -> StopwatchStatus:
    """Return the current state, elapsed time and laps."""
    return StopwatchStatus.from_snapshot(session.snapshot())


@router.post("/toggle", response_model=StopwatchStatus)
def toggle(http_request: Request, session: StopwatchSession = Depends(get_stopwatch)):
    """Start the stopwatch when idle or paused, pause it when running."""
    return _apply(session.toggle_start_pause, session, http_request, "toggle")


@router.post("/reset", response_model=StopwatchStatus)
def reset(http_request: Request, session: StopwatchSession = Depends(get_stopwatch)):
    """Stop timing, zero the elapsed time and clear all laps."""
    return _apply(session.reset, session, http_request, "reset")


@router.post("/laps", response_model=StopwatchStatus)
def record_lap(http_request: Request, session: StopwatchSession = Depends(get_stopwatch)):
    """
    Record a lap at the current elapsed time.

    Ignored unless the stopwatch is running and time has elapsed; the
    returned state is then unchanged.
    """
    return _apply(session.record_lap, session, http_request, "lap")


@router.get("/laps", response_model=LapListResponse)
async def list_laps(session: StopwatchSession = Depends(get_stopwatch)) -> LapListResponse:
    """List laps newest first with best/worst flags."""
    return LapListResponse(laps=[LapRowOut.from_row(row) for row in session.lap_rows()])


@router.get("/laps/best-worst", response_model=BestWorstResponse)
async def get_best_worst(session: StopwatchSession = Depends(get_stopwatch)) -> BestWorstResponse:
    """Return the fastest and slowest laps."""
    return BestWorstResponse.from_stats(session.get_best_worst())


@router.get("/format", response_model=FormatResponse)
async def format_time(
    durationMs: int = Query(..., ge=0, description="Duration in milliseconds")
) -> FormatResponse:
    """Render a duration as MM:SS.HH."""
    return FormatResponse(durationMs=durationMs, formatted=format_duration(durationMs))
