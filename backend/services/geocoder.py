"""Reverse geocoding: map GPS coordinates to the nearest district.

Linear scan over the reference set with Haversine distance. At ~34 points
this is cheaper than building any spatial index; a grid or k-d tree could
replace ``nearest_point`` behind the same signature if the set grows.
"""

import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass

from errors import (
    EmptyReferenceSetError,
    InvalidCoordinatesError,
    MissingCoordinatesError,
    OutOfBoundsError,
)
from services.cache import TTLCache
from services.districts import ReferencePoint, ReferenceSet

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371

# Distances closer than this are treated as equal; the earlier name wins.
TIE_TOLERANCE_KM = 1e-9

# ~11 m of latitude
KEY_PRECISION = 4


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lat: float, lng: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


# Serviceable region (India)
INDIA_BOUNDS = BoundingBox(min_lat=8, max_lat=35, min_lng=68, max_lng=97)


@dataclass(frozen=True)
class Resolution:
    district: str
    cache_hit: bool


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in km between two lat/lng points."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push a just outside [0, 1] for near-antipodal pairs
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def nearest_point(
    lat: float, lng: float, reference_points: Iterable[ReferencePoint]
) -> tuple[ReferencePoint, float]:
    """Return the closest reference point and its distance in km.

    Points are scanned in name order so equidistant candidates resolve to the
    lexicographically first name regardless of how the caller ordered them.
    No range check is applied to the query.
    """
    best: ReferencePoint | None = None
    best_distance = math.inf

    for point in sorted(reference_points, key=lambda p: p.name):
        distance = haversine_km(lat, lng, point.latitude, point.longitude)
        if best is None or distance < best_distance - TIE_TOLERANCE_KM:
            best = point
            best_distance = distance

    if best is None:
        raise EmptyReferenceSetError()
    return best, best_distance


def nearest(lat: float, lng: float, reference_points: Iterable[ReferencePoint]) -> str:
    """Name of the reference point closest to (lat, lng)."""
    point, _distance = nearest_point(lat, lng, reference_points)
    return point.name


# Plain decimal or exponent notation only; float() alone would also take "1_8.5", "nan", "inf".
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _parse(value) -> float:
    if isinstance(value, str) and not _DECIMAL_RE.fullmatch(value.strip()):
        raise InvalidCoordinatesError()
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinatesError() from None
    if not math.isfinite(number):
        raise InvalidCoordinatesError()
    return number


def validate_coordinates(
    lat: str | float | None,
    lng: str | float | None,
    bounds: BoundingBox = INDIA_BOUNDS,
) -> tuple[float, float]:
    """Parse raw query values and check them against the serviceable region.

    Absent or empty values are missing; anything else that is not a finite
    decimal number (whitespace-only included) is invalid.

    Raises MissingCoordinatesError, InvalidCoordinatesError or OutOfBoundsError.
    """
    if lat is None or lng is None or lat == "" or lng == "":
        raise MissingCoordinatesError()

    lat_num, lng_num = _parse(lat), _parse(lng)
    if not bounds.contains(lat_num, lng_num):
        raise OutOfBoundsError(lat_num, lng_num)
    return lat_num, lng_num


def coordinate_key(lat: float, lng: float, precision: int = KEY_PRECISION) -> str:
    """Quantized cache key so near-duplicate queries share an entry."""
    # + 0.0 folds -0.0 into 0.0
    lat_q = round(lat, precision) + 0.0
    lng_q = round(lng, precision) + 0.0
    return f"{lat_q:.{precision}f}:{lng_q:.{precision}f}"


class ReverseGeocoder:
    """Owns the reference set and the lookup cache for coordinate -> district."""

    def __init__(self, reference_set: ReferenceSet, cache: TTLCache, bounds: BoundingBox = INDIA_BOUNDS):
        self.reference_set = reference_set
        self.cache = cache
        self.bounds = bounds

    def resolve(self, lat, lng) -> Resolution:
        """Validate, consult the cache, and fall back to the nearest-point scan."""
        lat_num, lng_num = validate_coordinates(lat, lng, self.bounds)
        key = coordinate_key(lat_num, lng_num)

        def compute() -> str:
            point, distance = nearest_point(lat_num, lng_num, self.reference_set)
            logger.debug("Resolved %s -> %s (%.2f km)", key, point.name, distance)
            return point.name

        district, hit = self.cache.get_or_compute(key, compute)
        return Resolution(district=district, cache_hit=hit)

    def clear(self) -> None:
        self.cache.clear()
