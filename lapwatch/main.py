"""
Main FastAPI application entry point.
"""
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from lapwatch.api.deps import shutdown_stopwatch
from lapwatch.api.v1.routes import api_router
from lapwatch.core.config import settings
from lapwatch.core.logging import setup_logging, get_logger
from lapwatch.utils.timing import Timer

setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to generate request IDs and log request/response timing."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        logger.debug(
            f"Request started: {request.method} {request.url.path}",
            extra={"request_id": request_id}
        )

        with Timer() as timer:
            response = await call_next(request)

        response.headers["X-Request-Id"] = request_id

        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} latency_ms={timer.elapsed_ms}",
            extra={"request_id": request_id}
        )

        return response


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logger.info(f"{settings.APP_NAME} {settings.VERSION} starting ({settings.ENV})")
    yield
    shutdown_stopwatch()
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(
    title="Lapwatch Stopwatch API",
    version=settings.VERSION,
    description=(
        "Stopwatch with lap splits. Start, pause and reset the timer, record "
        "laps and read the fastest and slowest split."
    ),
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Add request ID middleware (before CORS to ensure it processes all requests)
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Lapwatch API",
        "version": settings.VERSION,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "lapwatch.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
