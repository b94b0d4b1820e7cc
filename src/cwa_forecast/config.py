"""Configuration settings for the CWA forecast relay."""

import os
from typing import Final, List, Optional
from dotenv import load_dotenv

load_dotenv()

# CWA open data API
CWA_API_BASE_URL: str = os.getenv("CWA_API_BASE_URL", "https://opendata.cwa.gov.tw/api")
CWA_DATASET_ID: Final[str] = "F-C0032-001"  # 36-hour general forecast
CWA_API_KEY: Optional[str] = os.getenv("CWA_API_KEY")
CWA_REQUEST_TIMEOUT: float = float(os.getenv("CWA_REQUEST_TIMEOUT", "30"))

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS
CORS_ALLOW_ORIGINS: List[str] = [
    origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
]

# Redis cache configuration
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
CACHE_ENABLED: bool = os.getenv("CACHE_ENABLED", "true").lower() == "true"
CACHE_EXPIRE_SECONDS: int = int(os.getenv("CACHE_EXPIRE_SECONDS", "300"))
CACHE_PREFIX: str = os.getenv("CACHE_PREFIX", "cwa-forecast")
