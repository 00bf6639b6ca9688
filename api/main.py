"""
FastAPI API Service Entry Point
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import booking
from scheduling.exceptions import (
    BookingValidationError,
    DataUnavailableError,
    SlotConflictError,
)
from shared.config import get_settings
from shared.logging_config import configure_logging

# Configure structured JSON logging on startup
configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Agenda Booking API",
    version="1.0.0",
)

settings = get_settings()
origins = settings.CORS_ORIGINS.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(booking.router)


# =========================================================================
# SCHEDULING ERROR MAPPING
# =========================================================================
@app.exception_handler(BookingValidationError)
async def booking_validation_handler(request: Request, exc: BookingValidationError) -> JSONResponse:
    """Return 422 naming the invalid field."""
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "field": exc.field, "message": exc.message},
    )


@app.exception_handler(SlotConflictError)
async def slot_conflict_handler(request: Request, exc: SlotConflictError) -> JSONResponse:
    """Return 409; the client should reload availability."""
    return JSONResponse(
        status_code=409,
        content={"error": "slot_conflict", "field": None, "message": str(exc)},
    )


@app.exception_handler(DataUnavailableError)
async def data_unavailable_handler(request: Request, exc: DataUnavailableError) -> JSONResponse:
    """Return 503; nothing was written."""
    logger.error(
        f"Data unavailable: {exc}",
        extra={"request_path": request.url.path},
    )
    return JSONResponse(
        status_code=503,
        content={"error": "data_unavailable", "field": None, "message": str(exc)},
    )


@app.get("/health")
async def health_check() -> JSONResponse:
    """
    Health check endpoint for Docker health checks and monitoring.

    Checks:
    - PostgreSQL connectivity (SELECT 1 query)

    Returns:
        200 OK if all systems healthy
        503 Service Unavailable if degraded
    """
    from sqlalchemy import text

    from database.connection import get_async_session

    health_status = {
        "status": "healthy",
        "postgres": "unknown",
    }
    status_code = 200

    try:
        async with get_async_session() as session:
            await session.execute(text("SELECT 1"))
            health_status["postgres"] = "connected"
    except Exception:
        health_status["postgres"] = "disconnected"
        health_status["status"] = "degraded"
        status_code = 503

    return JSONResponse(status_code=status_code, content=health_status)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": f"{settings.BUSINESS_NAME} booking API - Use /health for health checks"}
