"""Weather service tying location lookup, CWA fetch and normalization together."""

import logging
from typing import Optional

from cwa_forecast.weather.client import CwaWeatherClient
from cwa_forecast.weather.errors import WeatherServiceError
from cwa_forecast.weather.locations import resolve_city
from cwa_forecast.weather.models import NormalizedForecast
from cwa_forecast.weather.normalizer import normalize

logger = logging.getLogger(__name__)


class WeatherService:
    """Service for fetching normalized city forecasts."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[CwaWeatherClient] = None
    ):
        """Initialize the weather service.

        Args:
            api_key: CWA authorization key, used when no client is given
            client: Weather client instance (creates one from api_key if None)

        Raises:
            ConfigurationError: If neither a client nor a usable key is given
        """
        self.client = client or CwaWeatherClient(api_key=api_key)

    async def get_city_forecast(self, city_code: str) -> NormalizedForecast:
        """Get the normalized forecast for a city code.

        Args:
            city_code: City code such as "taipei", case-insensitive

        Returns:
            NormalizedForecast for the resolved location

        Raises:
            UnsupportedCityError: If the code is unknown
            UpstreamError: If the CWA API fails
            NotFoundError: If CWA has no record for the location
        """
        location_name = resolve_city(city_code)
        logger.info(f"Getting weather data for {location_name}")

        try:
            raw_document = await self.client.get_forecast(location_name)
            forecast = normalize(raw_document, location_name)
        except WeatherServiceError as e:
            logger.error(f"Failed to get weather data for {location_name}: {e}")
            raise

        logger.info(f"Weather data for {location_name} retrieved with {len(forecast.forecasts)} entries")
        return forecast

    async def aclose(self):
        """Close the weather client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing weather client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
