"""District list and per-district performance metrics."""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response

from services.district_data import DistrictDataService, etag_for
from services.districts import ReferenceSet

logger = logging.getLogger(__name__)

router = APIRouter()


def get_district_data_service(request: Request) -> DistrictDataService:
    return request.app.state.district_data


def get_reference_set(request: Request) -> ReferenceSet:
    return request.app.state.geocoder.reference_set


@router.get("/api/districts")
async def list_districts(
    request: Request,
    reference_set: ReferenceSet = Depends(get_reference_set),
) -> dict:
    """Districts available in the picker, alphabetical."""
    return {
        "state": request.app.state.settings.state_name,
        "count": len(reference_set),
        "districts": [p.to_dict() for p in reference_set],
    }


@router.get("/api/district-data")
async def district_data(
    response: Response,
    district: str | None = Query(None),
    service: DistrictDataService = Depends(get_district_data_service),
) -> dict:
    """Employment-scheme metrics for one district."""
    data, hit = service.get(district)

    if hit:
        response.headers["Cache-Control"] = "public, max-age=3600"
        response.headers["X-Cache"] = "HIT"
    else:
        response.headers["Cache-Control"] = "public, max-age=3600, s-maxage=3600"
        response.headers["X-Cache"] = "MISS"
        response.headers["ETag"] = etag_for(data)
    return data
