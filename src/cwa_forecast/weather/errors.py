"""Exceptions raised while resolving, fetching and normalizing forecasts."""

from typing import Any, Optional, Sequence


class WeatherServiceError(Exception):
    """Base class for forecast relay errors."""
    pass


class ConfigurationError(WeatherServiceError):
    """Raised when a required setting such as the CWA API key is missing."""
    pass


class UnsupportedCityError(WeatherServiceError):
    """Raised when a city code is not in the location table."""

    def __init__(self, city_code: str, supported_codes: Sequence[str]):
        self.city_code = city_code
        self.supported_codes = list(supported_codes)
        super().__init__(f"Unsupported city code '{city_code}'")


class NotFoundError(WeatherServiceError):
    """Raised when the upstream document holds no record for a location."""

    def __init__(self, location_name: str):
        self.location_name = location_name
        super().__init__(f"No forecast data available for {location_name}")


class UpstreamError(WeatherServiceError):
    """Raised when the CWA API fails or answers with an error.

    Attributes:
        status_code: HTTP status returned by the CWA API, None if no response arrived
        details: Decoded upstream error body, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class MalformedUpstreamDataError(UpstreamError):
    """Raised when the CWA payload does not have the expected forecast shape."""
    pass
