"""Custom exceptions and centralized FastAPI error handlers."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DashboardError(Exception):
    """Base exception with HTTP status code and machine-readable error code."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class MissingCoordinatesError(DashboardError):
    def __init__(self):
        super().__init__(
            "Latitude and longitude parameters required",
            status_code=400,
            code="MISSING_COORDS",
        )


class InvalidCoordinatesError(DashboardError):
    def __init__(self):
        super().__init__("Invalid coordinate format", status_code=400, code="INVALID_COORDS")


class OutOfBoundsError(DashboardError):
    def __init__(self, lat: float, lng: float):
        super().__init__(
            f"Coordinates ({lat}, {lng}) outside India bounds",
            status_code=400,
            code="OUT_OF_BOUNDS",
        )


class EmptyReferenceSetError(DashboardError):
    def __init__(self):
        super().__init__(
            "No district reference points loaded",
            status_code=503,
            code="EMPTY_REFERENCE_SET",
        )


class MissingDistrictError(DashboardError):
    def __init__(self):
        super().__init__("District parameter required", status_code=400, code="MISSING_DISTRICT")


class InvalidDistrictError(DashboardError):
    def __init__(self):
        super().__init__("Invalid district parameter", status_code=400, code="INVALID_DISTRICT")


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(DashboardError)
    async def handle_dashboard_error(_request: Request, exc: DashboardError):
        return JSONResponse({"error": str(exc), "code": exc.code}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s: %s", request.url.path, exc)
        return JSONResponse(
            {
                "error": "Internal server error",
                "code": "INTERNAL_ERROR",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            status_code=500,
        )
