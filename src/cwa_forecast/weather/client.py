"""HTTP client for the CWA open data API."""

import logging
from typing import Dict, Any, Optional

import httpx

from cwa_forecast.config import (
    CWA_API_BASE_URL, CWA_DATASET_ID, CWA_REQUEST_TIMEOUT
)
from cwa_forecast.weather.errors import (
    ConfigurationError, MalformedUpstreamDataError, UpstreamError
)

logger = logging.getLogger(__name__)


class CwaWeatherClient:
    """Async client for fetching forecasts from the CWA datastore."""

    def __init__(
        self,
        api_key: str,
        base_url: str = CWA_API_BASE_URL,
        dataset_id: str = CWA_DATASET_ID,
        timeout: float = CWA_REQUEST_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the weather client.

        Args:
            api_key: CWA authorization key
            base_url: Base URL of the CWA open data API
            dataset_id: Datastore dataset to query
            timeout: Request timeout in seconds
            http_client: Optional preconfigured httpx client

        Raises:
            ConfigurationError: If the API key is blank
        """
        if not api_key:
            raise ConfigurationError("Set CWA_API_KEY in the .env file")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.dataset_id = dataset_id
        self.client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url}/v1/rest/datastore/{self.dataset_id}"

    async def get_forecast(self, location_name: str) -> Dict[str, Any]:
        """Fetch the raw forecast document for one location.

        Args:
            location_name: Official CWA location name, e.g. "臺北市"

        Returns:
            Decoded JSON body from the CWA API

        Raises:
            UpstreamError: If the request fails or the API answers non-2xx
            MalformedUpstreamDataError: If the body is not a JSON object
        """
        params = {"Authorization": self.api_key, "locationName": location_name}

        logger.info(f"Fetching {self.dataset_id} forecast for {location_name}")

        try:
            response = await self.client.get(self.forecast_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            details = _decode_error_body(e.response)
            message = "Unable to fetch weather data"
            if isinstance(details, dict) and details.get("message"):
                message = str(details["message"])
            logger.error(f"HTTP error from CWA API: {status_code} - {e.response.text}")
            raise UpstreamError(message, status_code=status_code, details=details) from e
        except httpx.RequestError as e:
            logger.error(f"Request error to CWA API: {e}")
            raise UpstreamError(f"CWA API request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"CWA API returned a non-JSON body: {e}")
            raise MalformedUpstreamDataError("CWA API returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise MalformedUpstreamDataError("CWA API returned an unexpected body")

        records = data.get("records")
        location_count = len(records.get("location") or []) if isinstance(records, dict) else 0
        logger.info(f"Fetched forecast for {location_name} with {location_count} location records")
        return data

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()


def _decode_error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None
