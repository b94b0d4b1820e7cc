"""Normalization of CWA 36-hour forecast documents."""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import ValidationError

from cwa_forecast.weather.errors import MalformedUpstreamDataError, NotFoundError
from cwa_forecast.weather.models import (
    CwaForecastResponse, CwaLocation, CwaWeatherElement,
    ForecastEntry, NormalizedForecast
)

logger = logging.getLogger(__name__)


class WeatherElement(str, Enum):
    """Element codes the relay understands."""
    WEATHER = "Wx"
    RAIN_CHANCE = "PoP"
    MIN_TEMP = "MinT"
    MAX_TEMP = "MaxT"
    COMFORT = "CI"
    WIND_SPEED = "WS"


# Element -> (ForecastEntry field, unit suffix)
ELEMENT_FIELDS: Mapping[WeatherElement, Tuple[str, str]] = MappingProxyType({
    WeatherElement.WEATHER: ("weather", ""),
    WeatherElement.RAIN_CHANCE: ("rain_chance_percent_text", "%"),
    WeatherElement.MIN_TEMP: ("min_temp_text", "°C"),
    WeatherElement.MAX_TEMP: ("max_temp_text", "°C"),
    WeatherElement.COMFORT: ("comfort_text", ""),
    WeatherElement.WIND_SPEED: ("wind_speed_text", ""),
})


def normalize(raw_document: Dict[str, Any], requested_location_name: str) -> NormalizedForecast:
    """Turn a raw CWA forecast document into a NormalizedForecast.

    Only the first location record is used. Every weather element must share
    the time windows of the first element.

    Args:
        raw_document: Decoded JSON body from the CWA datastore
        requested_location_name: Location name the caller asked for

    Returns:
        NormalizedForecast with one entry per time window

    Raises:
        NotFoundError: If the document holds no location record
        MalformedUpstreamDataError: If the document shape is invalid or elements are misaligned
    """
    try:
        document = CwaForecastResponse.model_validate(raw_document)
    except ValidationError as e:
        logger.error(f"Invalid CWA forecast document for {requested_location_name}: {e}")
        raise MalformedUpstreamDataError(f"Invalid forecast data format: {e}")

    if not document.records.location:
        raise NotFoundError(requested_location_name)

    # Later records are never read
    try:
        location = CwaLocation.model_validate(document.records.location[0])
    except ValidationError as e:
        logger.error(f"Invalid CWA location record for {requested_location_name}: {e}")
        raise MalformedUpstreamDataError(f"Invalid location record: {e}")

    _check_alignment(location)

    forecasts = [
        _build_entry(location.weather_element, index)
        for index in range(len(location.weather_element[0].time))
    ]

    return NormalizedForecast(
        city=location.location_name or requested_location_name,
        update_time=document.records.dataset_description,
        forecasts=forecasts
    )


def _check_alignment(location: CwaLocation) -> None:
    """Ensure all elements share the first element's time windows."""
    if not location.weather_element:
        raise MalformedUpstreamDataError(
            f"No weather elements for {location.location_name}"
        )

    reference = location.weather_element[0]
    windows = [(slot.start_time, slot.end_time) for slot in reference.time]

    for element in location.weather_element[1:]:
        element_windows = [(slot.start_time, slot.end_time) for slot in element.time]
        if element_windows != windows:
            raise MalformedUpstreamDataError(
                f"Element {element.element_name} is not aligned with {reference.element_name} "
                f"({len(element_windows)} vs {len(windows)} time slots)"
            )


def _build_entry(elements: List[CwaWeatherElement], index: int) -> ForecastEntry:
    """Build the entry for time slot `index` across all elements."""
    slot = elements[0].time[index]
    fields = {"start_time": slot.start_time, "end_time": slot.end_time}

    for element in elements:
        try:
            code = WeatherElement(element.element_name)
        except ValueError:
            continue

        field_name, suffix = ELEMENT_FIELDS[code]
        fields[field_name] = element.time[index].parameter.parameter_name + suffix

    return ForecastEntry(**fields)
