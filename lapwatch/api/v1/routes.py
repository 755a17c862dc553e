"""
API v1 router configuration.
"""
from fastapi import APIRouter

from lapwatch.api.v1.endpoints import health, stopwatch

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(stopwatch.router, prefix="/stopwatch", tags=["stopwatch"])
