"""FastAPI application entry point for the district dashboard API."""

import logging
import sys

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings
from errors import register_error_handlers
from services.cache import TTLCache
from services.district_data import DistrictDataService
from services.districts import ReferenceSet, load_reference_set
from services.geocoder import ReverseGeocoder

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def _load_districts(app_settings: Settings) -> ReferenceSet:
    """Load reference points once; a broken file leaves the set empty (served as 503)."""
    try:
        return load_reference_set(app_settings.districts_file)
    except (OSError, ValueError, TypeError) as e:
        logger.error("Failed to load districts from %s: %s", app_settings.districts_file, e)
        return ReferenceSet([])


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(title="District Pulse API", version="1.0.0")

    app.state.settings = app_settings
    app.state.geocoder = ReverseGeocoder(
        _load_districts(app_settings),
        TTLCache(
            ttl_seconds=app_settings.geocode_cache_ttl_seconds,
            max_entries=app_settings.geocode_cache_max_entries,
        ),
    )
    app.state.district_data = DistrictDataService(
        TTLCache(ttl_seconds=app_settings.district_data_cache_ttl_seconds),
        state=app_settings.state_name,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Cache", "ETag"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if app_settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.districts import router as districts_router
    from routes.geocode import router as geocode_router
    from routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(geocode_router)
    app.include_router(districts_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        problems = app_settings.validate()
        if problems:
            logger.warning("Configuration problems: %s", "; ".join(problems))
        logger.info("Serving %d districts for %s", len(app.state.geocoder.reference_set), app_settings.state_name)

    return app


app = create_app()
