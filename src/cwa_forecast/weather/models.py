"""Data models for the CWA forecast relay."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CwaParameter(BaseModel):
    """Value carried by one time slot of a CWA weather element."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    parameter_name: str = Field(..., alias="parameterName", description="Reported value or description")
    parameter_value: Optional[str] = Field(None, alias="parameterValue", description="Numeric code, if any")
    parameter_unit: Optional[str] = Field(None, alias="parameterUnit", description="Unit, if any")


class CwaTimeSlot(BaseModel):
    """One time window of a CWA weather element."""
    model_config = ConfigDict(populate_by_name=True)

    start_time: str = Field(..., alias="startTime", description="Window start, local time")
    end_time: str = Field(..., alias="endTime", description="Window end, local time")
    parameter: CwaParameter = Field(..., description="Value for this window")


class CwaWeatherElement(BaseModel):
    """Time series of one meteorological variable."""
    model_config = ConfigDict(populate_by_name=True)

    element_name: str = Field(..., alias="elementName", description="Element code, e.g. Wx or PoP")
    time: List[CwaTimeSlot] = Field(..., description="Time slots in chronological order")


class CwaLocation(BaseModel):
    """Forecast record for a single location."""
    model_config = ConfigDict(populate_by_name=True)

    location_name: str = Field(..., alias="locationName", description="Official location name")
    weather_element: List[CwaWeatherElement] = Field(..., alias="weatherElement")


class CwaRecords(BaseModel):
    """Records section of a CWA datastore response."""
    model_config = ConfigDict(populate_by_name=True)

    dataset_description: str = Field("", alias="datasetDescription", description="Dataset description")
    location: List[Any] = Field(default_factory=list, description="Per-location records, validated on use")


class CwaForecastResponse(BaseModel):
    """Raw response from the CWA F-C0032-001 datastore endpoint."""
    records: CwaRecords = Field(..., description="Forecast records")


class ForecastEntry(BaseModel):
    """One time-windowed bucket of normalized weather values."""
    model_config = ConfigDict(populate_by_name=True)

    start_time: str = Field(..., alias="startTime", description="Window start")
    end_time: str = Field(..., alias="endTime", description="Window end")
    weather: str = Field("", description="Weather description")
    rain_chance_percent_text: str = Field("", alias="rainChancePercentText", description="Probability of precipitation, e.g. 60%")
    min_temp_text: str = Field("", alias="minTempText", description="Minimum temperature, e.g. 22°C")
    max_temp_text: str = Field("", alias="maxTempText", description="Maximum temperature, e.g. 28°C")
    comfort_text: str = Field("", alias="comfortText", description="Comfort index description")
    wind_speed_text: str = Field("", alias="windSpeedText", description="Wind speed description")


class NormalizedForecast(BaseModel):
    """Simplified forecast for one location."""
    model_config = ConfigDict(populate_by_name=True)

    city: str = Field(..., description="Location name reported by CWA")
    update_time: str = Field(..., alias="updateTime", description="Dataset description from CWA")
    forecasts: List[ForecastEntry] = Field(default_factory=list, description="Entries in chronological order")


class WeatherResponse(BaseModel):
    """Success envelope returned by the weather endpoint."""
    success: bool = Field(True, description="Always true for successful lookups")
    data: NormalizedForecast = Field(..., description="Normalized forecast")


class ErrorResponse(BaseModel):
    """Error response model."""
    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(..., description="Error category")
    message: str = Field(..., description="Human readable error message")
    details: Optional[Any] = Field(None, description="Upstream error body, if any")
    supported_cities: Optional[List[str]] = Field(None, alias="supportedCities")
    requested_city: Optional[str] = Field(None, alias="requestedCity")
