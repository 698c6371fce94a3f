"""Employment-scheme performance metrics per district.

Mock generator: values are derived from the district name plus random
jitter. In production this would fetch from the data.gov.in API; the cache
and response shape stay the same.
"""

import hashlib
import json
import logging
import math
import random
from collections.abc import Callable
from datetime import datetime, timezone

from errors import InvalidDistrictError, MissingDistrictError
from services.cache import TTLCache

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_mock_data(district: str, state: str, rng: random.Random, now: str) -> dict:
    """Plausible monthly metrics for a district, seeded by its first character."""
    seed = ord(district[0])
    base_jobs = 5000 + (seed * 1000) % 10000
    base_workers = 3000 + (seed * 800) % 8000

    return {
        "district": district,
        "state": state,
        "jobsCreated": math.floor(base_jobs + rng.random() * 2000),
        "workersEmployed": math.floor(base_workers + rng.random() * 1500),
        "avgWagesPerDay": 190 + rng.randrange(50),
        "completionRate": 65 + rng.randrange(30),
        "lastUpdated": now,
        "previousMonth": {
            "jobsCreated": math.floor(base_jobs * 0.85),
            "workersEmployed": math.floor(base_workers * 0.85),
        },
    }


def etag_for(data: dict) -> str:
    """Content fingerprint of the whole JSON body (compact, key-sorted)."""
    body = json.dumps(data, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return f'"{hashlib.sha256(body).hexdigest()[:32]}"'


class DistrictDataService:
    def __init__(
        self,
        cache: TTLCache,
        state: str = "Maharashtra",
        rng: random.Random | None = None,
        now: Callable[[], str] = _utc_now_iso,
    ):
        self.cache = cache
        self.state = state
        self._rng = rng or random.Random()
        self._now = now

    def get(self, district: str | None) -> tuple[dict, bool]:
        """Return ``(metrics, cache_hit)`` for a district name."""
        if district is None or district == "":
            raise MissingDistrictError()
        if not district.strip():
            raise InvalidDistrictError()

        key = f"district-{district.lower()}"

        def compute() -> dict:
            logger.info("Generating metrics for %s", district)
            return generate_mock_data(district, self.state, self._rng, self._now())

        return self.cache.get_or_compute(key, compute)
