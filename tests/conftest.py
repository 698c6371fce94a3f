"""Shared test fixtures for settings, the FastAPI app, and the HTTP client."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app import create_app
from config import Settings


@pytest.fixture
def settings() -> Settings:
    """Test application settings with the built-in district table."""
    return Settings(
        environment="test",
        git_sha="test-sha",
        districts_file=None,
        geocode_cache_ttl_seconds=86400,
        geocode_cache_max_entries=100,
        district_data_cache_ttl_seconds=3600,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """A fresh app per test so caches never leak between tests."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> AsyncClient:
    """Create an async test client."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
