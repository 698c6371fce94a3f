"""District reference points used for reverse geocoding and the district picker.

The built-in table covers Maharashtra's districts (one representative
coordinate each). A JSON file of the same shape can replace it at startup:

    {"Pune": {"lat": 18.5204, "lng": 73.8567}, ...}
"""

import json
import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# District name -> (lat, lng)
MAHARASHTRA_DISTRICTS = {
    "Ahmednagar": (19.0944, 74.7477),
    "Akola": (20.7136, 77.0064),
    "Amravati": (20.8531, 77.7532),
    "Aurangabad": (19.8762, 75.3433),
    "Beed": (19.2183, 75.7597),
    "Bhandara": (21.1458, 79.2533),
    "Buldhana": (20.5244, 76.1761),
    "Chandrapur": (19.2941, 79.3044),
    "Dhule": (20.9217, 74.7597),
    "Gadchiroli": (20.1856, 80.7733),
    "Gondia": (21.4625, 80.1961),
    "Hingoli": (19.7271, 77.1458),
    "Jalgaon": (21.1458, 75.5625),
    "Jalna": (19.8427, 75.8844),
    "Kolhapur": (16.705, 73.7421),
    "Latur": (18.4088, 76.5244),
    "Mumbai": (19.076, 72.8777),
    "Nagpur": (21.1458, 79.0882),
    "Nanded": (19.1383, 77.3267),
    "Nandurbar": (21.3789, 74.2517),
    "Nashik": (19.9975, 73.7898),
    # Spelling kept as-is: clients send this identifier back to /api/district-data.
    "Osmanabd": (17.9689, 76.7597),
    "Parbhani": (19.2683, 76.7597),
    "Pune": (18.5204, 73.8567),
    "Raigad": (18.5956, 73.2621),
    "Ratnagiri": (16.9891, 73.3167),
    "Sangli": (16.8554, 74.5745),
    "Satara": (17.6726, 73.9828),
    "Sindhudurg": (16.3981, 73.7997),
    "Solapur": (17.6599, 75.9064),
    "Thane": (19.2183, 72.9781),
    "Wardha": (20.7467, 78.6061),
    "Washim": (20.1089, 77.5244),
    "Yavatmal": (20.4856, 78.1381),
}


@dataclass(frozen=True)
class ReferencePoint:
    name: str
    latitude: float
    longitude: float

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Reference point name must not be empty")
        if not (math.isfinite(self.latitude) and -90 <= self.latitude <= 90):
            raise ValueError(f"Latitude out of range for {self.name}: {self.latitude}")
        if not (math.isfinite(self.longitude) and -180 <= self.longitude <= 180):
            raise ValueError(f"Longitude out of range for {self.name}: {self.longitude}")

    def to_dict(self) -> dict:
        return {"name": self.name, "latitude": self.latitude, "longitude": self.longitude}


class ReferenceSet:
    """Immutable collection of reference points in canonical (by-name) order."""

    def __init__(self, points: Iterable[ReferencePoint]):
        ordered = tuple(sorted(points, key=lambda p: p.name))
        names = [p.name for p in ordered]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate district names: {duplicates}")
        self._points = ordered

    @classmethod
    def from_mapping(cls, mapping: dict) -> "ReferenceSet":
        """Build from ``{name: (lat, lng)}`` or ``{name: {"lat": .., "lng": ..}}``."""
        points = []
        for name, coords in mapping.items():
            if isinstance(coords, dict):
                try:
                    lat, lng = coords["lat"], coords["lng"]
                except KeyError as e:
                    raise ValueError(f"District {name} is missing {e.args[0]!r}") from None
            else:
                lat, lng = coords
            points.append(ReferencePoint(name, float(lat), float(lng)))
        return cls(points)

    @property
    def names(self) -> list[str]:
        return [p.name for p in self._points]

    def __iter__(self) -> Iterator[ReferencePoint]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __bool__(self) -> bool:
        return bool(self._points)


def load_reference_set(path: str | None = None) -> ReferenceSet:
    """Load reference points from a JSON file, or the built-in table if no path."""
    if not path:
        return ReferenceSet.from_mapping(MAHARASHTRA_DISTRICTS)

    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object of district -> coordinates")

    reference_set = ReferenceSet.from_mapping(data)
    logger.info("Loaded %d districts from %s", len(reference_set), path)
    return reference_set
