# ABOUTME: Runtime settings for skycast, read from the environment and an optional .env file.
# ABOUTME: Holds default/fallback cities, HTTP timeout and retry count, forecast horizon and log level.

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Application settings. Construct directly in tests; use from_env() at startup."""

    default_city: str = "São Paulo"
    fallback_city: str = "Rio de Janeiro"
    http_timeout: float = Field(default=10.0, gt=0)
    retry_attempts: int = Field(default=3, ge=1)
    forecast_days: int = Field(default=7, ge=1, le=16)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from SKYCAST_* environment variables, falling back to defaults."""
        load_dotenv()
        env = {
            "default_city": os.environ.get("SKYCAST_DEFAULT_CITY"),
            "fallback_city": os.environ.get("SKYCAST_FALLBACK_CITY"),
            "http_timeout": os.environ.get("SKYCAST_HTTP_TIMEOUT"),
            "retry_attempts": os.environ.get("SKYCAST_RETRY_ATTEMPTS"),
            "forecast_days": os.environ.get("SKYCAST_FORECAST_DAYS"),
            "log_level": os.environ.get("SKYCAST_LOG_LEVEL"),
        }
        return cls(**{key: value for key, value in env.items() if value})
