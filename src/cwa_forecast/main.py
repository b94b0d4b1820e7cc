"""Main FastAPI application for the CWA forecast relay."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import redis.asyncio as redis
import uvicorn
import traceback
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi_cache import FastAPICache
from fastapi_cache.backends.redis import RedisBackend

from cwa_forecast.api.endpoints import router as weather_router
from cwa_forecast.api.handlers import register_exception_handlers
from cwa_forecast.config import (
    HOST, PORT, DEBUG, ENVIRONMENT, CWA_API_KEY,
    REDIS_URL, CACHE_ENABLED, CACHE_PREFIX, CORS_ALLOW_ORIGINS
)
from cwa_forecast.logging_config import configure_logging
from cwa_forecast.weather.errors import ConfigurationError
from cwa_forecast.weather.locations import CITY_MAP, supported_city_codes

configure_logging()
logger = logging.getLogger(__name__)


def validate_api_key(api_key: Optional[str]) -> str:
    """Fail fast when the CWA API key is not configured.

    Raises:
        ConfigurationError: If the key is missing or blank
    """
    if not api_key or not api_key.strip():
        raise ConfigurationError("Set CWA_API_KEY in the .env file")
    return api_key.strip()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    try:
        app.state.api_key = validate_api_key(app.state.api_key)

        logger.info(f"Connecting to Redis at {REDIS_URL}")
        redis_client = redis.from_url(REDIS_URL)
        FastAPICache.init(RedisBackend(redis_client), prefix=CACHE_PREFIX, enable=CACHE_ENABLED)
        logger.info(f"Cache initialized with Redis backend (enabled: {CACHE_ENABLED})")

        logger.info(f"Server started on port {PORT}")
        logger.info(f"Environment: {ENVIRONMENT}")
        logger.info(f"Supporting {len(CITY_MAP)} cities")
        logger.info(f"API endpoint: http://localhost:{PORT}/api/weather/{{city}}")
        yield
    except Exception as e:
        logger.error(f"Startup error: {e}")
        logger.error(traceback.format_exc())
        raise
    finally:
        logger.info("Shutting down CWA forecast relay")


def create_app(api_key: Optional[str] = CWA_API_KEY) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        api_key: CWA authorization key, validated when the app starts

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="CWA Weather Forecast Relay",
        description="REST API relaying 36-hour forecasts from Taiwan's Central Weather Administration",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.api_key = api_key

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)
    app.include_router(weather_router)

    @app.get("/", tags=["root"])
    async def root() -> dict:
        """API information endpoint.

        Returns:
            Supported city codes and endpoint overview
        """
        codes = supported_city_codes()
        return {
            "message": "Welcome to the CWA weather forecast API",
            "supportedCities": codes,
            "totalCities": len(codes),
            "endpoints": {
                "example": "/api/weather/taipei",
                "allCities": "/api/weather/:city",
                "health": "/api/health"
            }
        }

    # Preflights are answered by CORSMiddleware; plain OPTIONS lands here
    @app.options("/{path:path}", include_in_schema=False)
    async def options_ok(path: str) -> Response:
        return Response(status_code=200)

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        "cwa_forecast.main:app" if DEBUG else app,
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
