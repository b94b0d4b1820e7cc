"""Exception handlers mapping relay errors to JSON error responses."""

import logging
from http import HTTPStatus
from typing import Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cwa_forecast.weather.errors import (
    ConfigurationError, MalformedUpstreamDataError, NotFoundError,
    UnsupportedCityError, UpstreamError
)
from cwa_forecast.weather.models import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, headers: Optional[Mapping[str, str]] = None, **fields) -> JSONResponse:
    body = ErrorResponse(**fields)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        headers=headers
    )


async def unsupported_city_handler(_request: Request, exc: UnsupportedCityError) -> JSONResponse:
    return error_response(
        400,
        error="Unsupported city",
        message="Use one of the supported city codes",
        supported_cities=exc.supported_codes,
        requested_city=exc.city_code
    )


async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(
        404,
        error="No data",
        message=f"Unable to get weather data for {exc.location_name}"
    )


async def upstream_error_handler(_request: Request, exc: UpstreamError) -> JSONResponse:
    if exc.status_code is not None and not isinstance(exc, MalformedUpstreamDataError):
        # CWA answered: pass its status and body through
        return error_response(
            exc.status_code,
            error="CWA API error",
            message=exc.message,
            details=exc.details
        )

    return error_response(
        502,
        error="CWA API unavailable",
        message="Unable to get weather data, please try again later"
    )


async def configuration_error_handler(_request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error(f"Configuration error: {exc}")
    return error_response(500, error="Server configuration error", message=str(exc))


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return error_response(
            404,
            error="Path not found",
            message="See / for the available API endpoints"
        )

    try:
        error = HTTPStatus(exc.status_code).phrase
    except ValueError:
        error = "HTTP error"

    return error_response(
        exc.status_code,
        headers=getattr(exc, "headers", None),
        error=error,
        message=str(exc.detail)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, error="Server error", message=str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the relay's exception handlers to an application."""
    app.add_exception_handler(UnsupportedCityError, unsupported_city_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(UpstreamError, upstream_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
