"""Shared test fixtures."""

import json
from pathlib import Path
from uuid import uuid4

import pytest
import respx
from fastapi import FastAPI
from fastapi.testclient import TestClient
from fastapi_cache import FastAPICache
from fastapi_cache.backends.inmemory import InMemoryBackend

from cwa_forecast.api.endpoints import get_weather_service
from cwa_forecast.main import create_app
from cwa_forecast.weather.client import CwaWeatherClient
from cwa_forecast.weather.service import WeatherService

FIXTURE_DIR = Path(__file__).parent / "fixtures"

TEST_API_KEY = "CWA-TEST-KEY"
TEST_BASE_URL = "https://opendata.test/api"
TEST_HOST = "opendata.test"
FORECAST_PATH = "/api/v1/rest/datastore/F-C0032-001"


@pytest.fixture
def api_key() -> str:
    """Return the CWA key used by test clients."""
    return TEST_API_KEY


@pytest.fixture
def base_url() -> str:
    """Return the base URL of the mocked CWA API."""
    return TEST_BASE_URL


@pytest.fixture
def cwa_client(api_key: str, base_url: str) -> CwaWeatherClient:
    """Return a CWA client pointed at the mocked host."""
    return CwaWeatherClient(api_key=api_key, base_url=base_url)


@pytest.fixture
def forecast_document() -> dict:
    """Return a CWA F-C0032-001 response for 臺北市."""
    with open(FIXTURE_DIR / "cwa_taipei_forecast.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def cwa_mock():
    """Mock the CWA datastore host."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def forecast_route(cwa_mock):
    """Route for the forecast endpoint; tests set its response."""
    return cwa_mock.get(host=TEST_HOST, path=FORECAST_PATH)


@pytest.fixture
def app(api_key: str, base_url: str) -> FastAPI:
    """Application wired to the test CWA host with an in-memory cache."""
    application = create_app(api_key=api_key)

    async def weather_service_override():
        client = CwaWeatherClient(api_key=api_key, base_url=base_url)
        async with WeatherService(client=client) as service:
            yield service

    application.dependency_overrides[get_weather_service] = weather_service_override

    FastAPICache.reset()
    FastAPICache.init(InMemoryBackend(), prefix=f"test-{uuid4().hex}")
    yield application
    FastAPICache.reset()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
