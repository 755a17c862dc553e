"""
Pydantic schemas for stopwatch endpoints.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from lapwatch.services.laps import BestWorst, Lap, LapRow, lap_rows
from lapwatch.services.stopwatch import StopwatchSnapshot, StopwatchState
from lapwatch.utils.timing import format_duration


class LapOut(BaseModel):
    """A recorded lap."""

    id: int = Field(..., description="Sequential lap number, starting at 1", ge=1)
    durationMs: int = Field(..., description="Elapsed time at the lap, in milliseconds", ge=0)
    formatted: str = Field(..., description="Elapsed time rendered as MM:SS.HH")
    recordedAt: datetime = Field(..., description="Wall-clock time the lap was recorded")

    @classmethod
    def from_lap(cls, lap: Lap) -> "LapOut":
        return cls(
            id=lap.id,
            durationMs=lap.duration_ms,
            formatted=format_duration(lap.duration_ms),
            recordedAt=lap.recorded_at,
        )


class LapRowOut(LapOut):
    """A lap with its best/worst designation."""

    isBest: bool = Field(default=False, description="Fastest lap so far")
    isWorst: bool = Field(default=False, description="Slowest lap so far (never set for a lone lap)")

    @classmethod
    def from_row(cls, row: LapRow) -> "LapRowOut":
        return cls(
            **LapOut.from_lap(row.lap).model_dump(),
            isBest=row.is_best,
            isWorst=row.is_worst,
        )


class BestWorstResponse(BaseModel):
    """Fastest and slowest laps of the session."""

    best: Optional[LapOut] = Field(default=None, description="Lap with the shortest duration")
    worst: Optional[LapOut] = Field(default=None, description="Lap with the longest duration")

    @classmethod
    def from_stats(cls, stats: BestWorst) -> "BestWorstResponse":
        return cls(
            best=LapOut.from_lap(stats.best) if stats.best else None,
            worst=LapOut.from_lap(stats.worst) if stats.worst else None,
        )


class LapListResponse(BaseModel):
    """Recorded laps, newest first."""

    laps: List[LapRowOut] = Field(default_factory=list)


class StopwatchStatus(BaseModel):
    """Full state of the stopwatch."""

    state: StopwatchState = Field(..., description="IDLE, RUNNING or PAUSED")
    running: bool = Field(..., description="Whether elapsed time is advancing")
    elapsedMs: int = Field(..., description="Last sampled elapsed time, in milliseconds", ge=0)
    formatted: str = Field(..., description="Elapsed time rendered as MM:SS.HH")
    lapCount: int = Field(..., description="Number of laps recorded since the last reset", ge=0)
    laps: List[LapRowOut] = Field(default_factory=list, description="Laps, newest first")
    best: Optional[LapOut] = None
    worst: Optional[LapOut] = None

    @classmethod
    def from_snapshot(cls, snapshot: StopwatchSnapshot) -> "StopwatchStatus":
        rows = [LapRowOut.from_row(row) for row in lap_rows(snapshot.laps)]
        stats = snapshot.best_worst
        return cls(
            state=snapshot.state,
            running=snapshot.state is StopwatchState.RUNNING,
            elapsedMs=snapshot.elapsed_ms,
            formatted=format_duration(snapshot.elapsed_ms),
            lapCount=len(snapshot.laps),
            laps=rows,
            best=LapOut.from_lap(stats.best) if stats.best else None,
            worst=LapOut.from_lap(stats.worst) if stats.worst else None,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "state": "RUNNING",
                "running": True,
                "elapsedMs": 61010,
                "formatted": "01:01.01",
                "lapCount": 1,
                "laps": [
                    {
                        "id": 1,
                        "durationMs": 30500,
                        "formatted": "00:30.50",
                        "recordedAt": "2025-01-01T12:00:30.500000Z",
                        "isBest": True,
                        "isWorst": False
                    }
                ],
                "best": {
                    "id": 1,
                    "durationMs": 30500,
                    "formatted": "00:30.50",
                    "recordedAt": "2025-01-01T12:00:30.500000Z"
                },
                "worst": {
                    "id": 1,
                    "durationMs": 30500,
                    "formatted": "00:30.50",
                    "recordedAt": "2025-01-01T12:00:30.500000Z"
                }
            }
        }


class FormatResponse(BaseModel):
    """A duration and its display form."""

    durationMs: int = Field(..., description="Duration in milliseconds", ge=0)
    formatted: str = Field(..., description="Duration rendered as MM:SS.HH")
