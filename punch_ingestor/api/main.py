"""FastAPI application for the punch_ingestor service."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..exceptions import InputRejectedError, PayloadTooLargeError, PunchIngestorError
from ..utils.config import ensure_runtime_configuration, get_settings
from ..utils.logging import setup_logger

logger = setup_logger(__name__, context={"component": "FastAPI"})


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore
    """Application lifespan context manager for startup/shutdown."""
    ensure_runtime_configuration(get_settings())
    logger.info("punch_ingestor API starting up...")
    yield
    logger.info("punch_ingestor API shutting down...")


app = FastAPI(
    title="punch_ingestor API",
    description="Parses biometric attendance exports into deduplicated punch records",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(InputRejectedError)
async def input_rejected_handler(request: Request, exc: InputRejectedError) -> JSONResponse:
    """Reject invalid uploads before any parsing happens."""
    status_code = 413 if isinstance(exc, PayloadTooLargeError) else status.HTTP_400_BAD_REQUEST
    logger.warning(
        "Upload rejected: %s",
        exc,
        extra={"status": "rejected", "component": request.url.path},
    )
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": str(exc), "error_type": exc.__class__.__name__},
    )


@app.exception_handler(PunchIngestorError)
async def punch_exception_handler(request: Request, exc: PunchIngestorError) -> JSONResponse:
    """Handle any other punch_ingestor exception."""
    logger.error(
        "PunchIngestorError: %s",
        exc,
        extra={"status": "error", "component": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "message": str(exc), "error_type": exc.__class__.__name__},
    )


# Import routers
from .routes import attendance, health, metrics  # noqa: E402

app.include_router(health.router, tags=["health"])
app.include_router(attendance.router, prefix="/api/v1", tags=["attendance"])
app.include_router(metrics.router, tags=["monitoring"])
