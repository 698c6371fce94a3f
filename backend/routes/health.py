"""Health and readiness check routes."""

import logging

from fastapi import APIRouter, Request

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "district-pulse-api"


@router.get("/ready")
async def ready(request: Request) -> dict:
    """Lightweight readiness check — no lookups performed."""
    return {"status": "ok", "service": SERVICE_NAME, "commit": request.app.state.settings.git_sha}


@router.get("/health")
async def health(request: Request) -> dict:
    """Deep health check: reference data loaded, cache occupancy."""
    state = request.app.state
    districts = len(state.geocoder.reference_set)

    result = {
        "status": "ok" if districts else "degraded",
        "service": SERVICE_NAME,
        "commit": state.settings.git_sha,
        "districts_loaded": districts,
        "geocode_cache_entries": len(state.geocoder.cache),
        "district_data_cache_entries": len(state.district_data.cache),
    }
    if not districts:
        logger.warning("Health check: no district reference points loaded")
    return result
