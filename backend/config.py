"""Centralized configuration — all env vars in one place."""

import os


class Settings:
    """Application settings loaded from environment variables.

    Keyword overrides take precedence over the environment (used by tests).
    """

    def __init__(self, **overrides):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # District reference data
        self.state_name: str = os.getenv("STATE_NAME", "Maharashtra")
        self.districts_file: str | None = os.getenv("DISTRICTS_FILE") or None

        # Caches
        self.geocode_cache_ttl_seconds: int = _int_env("GEOCODE_CACHE_TTL_SECONDS", 86400)
        self.geocode_cache_max_entries: int = _int_env("GEOCODE_CACHE_MAX_ENTRIES", 10000)
        self.district_data_cache_ttl_seconds: int = _int_env("DISTRICT_DATA_CACHE_TTL_SECONDS", 3600)

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise TypeError(f"Unknown setting: {name}")
            setattr(self, name, value)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of configuration problems (empty when healthy)."""
        problems = []
        if self.districts_file and not os.path.isfile(self.districts_file):
            problems.append(f"DISTRICTS_FILE not found: {self.districts_file}")
        if self.geocode_cache_ttl_seconds <= 0:
            problems.append("GEOCODE_CACHE_TTL_SECONDS must be positive")
        if self.district_data_cache_ttl_seconds <= 0:
            problems.append("DISTRICT_DATA_CACHE_TTL_SECONDS must be positive")
        if self.geocode_cache_max_entries < 0:
            problems.append("GEOCODE_CACHE_MAX_ENTRIES must not be negative")
        return problems


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


settings = Settings()
