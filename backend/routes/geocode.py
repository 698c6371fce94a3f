"""Reverse geocoding route — GPS coordinates to nearest district."""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response

from services.geocoder import ReverseGeocoder

logger = logging.getLogger(__name__)

router = APIRouter()


def get_geocoder(request: Request) -> ReverseGeocoder:
    return request.app.state.geocoder


@router.get("/api/reverse-geocode")
async def reverse_geocode(
    response: Response,
    lat: str | None = Query(None),
    lng: str | None = Query(None),
    geocoder: ReverseGeocoder = Depends(get_geocoder),
) -> dict:
    """Resolve lat/lng (decimal strings) to the nearest district name."""
    resolution = geocoder.resolve(lat, lng)

    if resolution.cache_hit:
        response.headers["X-Cache"] = "HIT"
    else:
        response.headers["Cache-Control"] = "public, max-age=86400"
        response.headers["X-Cache"] = "MISS"
    return {"district": resolution.district}
