"""
Health check endpoint.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from lapwatch.api.deps import get_stopwatch
from lapwatch.services.stopwatch import StopwatchSession, StopwatchState

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    state: StopwatchState
    sampleIntervalMs: int


@router.get("/", response_model=HealthResponse)
async def health_check(session: StopwatchSession = Depends(get_stopwatch)):
    """
    Health check endpoint.

    Returns:
        HealthResponse with status, stopwatch state and sampling interval
    """
    return HealthResponse(
        status="ok",
        state=session.state,
        sampleIntervalMs=session.sampler.interval_ms
    )
