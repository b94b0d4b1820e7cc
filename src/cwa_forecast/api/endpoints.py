"""API endpoints for the CWA forecast relay."""

import logging
from datetime import datetime, timezone
from typing import AsyncIterator, Callable, Optional

from fastapi import APIRouter, Depends, Path, Request
from fastapi_cache.decorator import cache

from cwa_forecast.config import CACHE_EXPIRE_SECONDS
from cwa_forecast.weather.locations import CITY_MAP
from cwa_forecast.weather.models import ErrorResponse, WeatherResponse
from cwa_forecast.weather.service import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


async def get_weather_service(request: Request) -> AsyncIterator[WeatherService]:
    """Dependency yielding a weather service bound to the app's API key."""
    service = WeatherService(api_key=request.app.state.api_key)
    async with service:
        yield service


def city_cache_key(
    func: Callable,
    namespace: str = "",
    *,
    request: Optional[Request] = None,
    response=None,
    args=(),
    kwargs: Optional[dict] = None
) -> str:
    """Cache forecasts per city code, ignoring injected dependencies."""
    city = (kwargs or {}).get("city", "")
    return f"{namespace}:{city.strip().lower()}"


@router.get(
    "/weather/{city}",
    response_model=WeatherResponse,
    tags=["weather"],
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported city code"},
        404: {"model": ErrorResponse, "description": "No forecast for the location"},
        502: {"model": ErrorResponse, "description": "CWA API unavailable"},
    }
)
@cache(expire=CACHE_EXPIRE_SECONDS, namespace="weather", key_builder=city_cache_key)
async def get_city_weather(
    city: str = Path(..., description="City code, e.g. taipei or hsinchu-city"),
    service: WeatherService = Depends(get_weather_service)
) -> WeatherResponse:
    """Get the 36-hour forecast for a city.

    Args:
        city: City code, matched case-insensitively
        service: Weather service dependency

    Returns:
        Success envelope with the normalized forecast

    Raises:
        UnsupportedCityError, NotFoundError, UpstreamError: mapped to error
        responses by the application's exception handlers
    """
    forecast = await service.get_city_forecast(city)
    return WeatherResponse(data=forecast)


@router.get("/health", tags=["health"])
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status with the current UTC time
    """
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "supportedCities": len(CITY_MAP)
    }
