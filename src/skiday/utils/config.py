"""Runtime configuration, read once from the environment and passed to services."""

import logging
import os
import sys
from typing import Mapping

from pydantic import BaseModel, Field, field_validator

from skiday.utils.constants import (
    DEFAULT_CITY,
    DEFAULT_SEASON_END,
    DEFAULT_SEASON_START,
    DEFAULT_TIMEZONE,
)
from skiday.utils.season import parse_month_day


class Settings(BaseModel):
    """Settings for weather providers, geocoding and the season window."""

    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    # Required by the OSM usage policy
    nominatim_user_agent: str = "SkiDayChecker/1.0"
    snow_forecast_api_base: str = "https://feeds.snow-forecast.com"
    snow_forecast_client_id: str = ""
    timezone: str = DEFAULT_TIMEZONE
    season_start: str = DEFAULT_SEASON_START
    season_end: str = DEFAULT_SEASON_END
    default_city: str = DEFAULT_CITY
    request_timeout: float = Field(default=10.0, gt=0)
    max_retries: int = Field(default=3, ge=1)
    log_level: str = "INFO"

    @field_validator("season_start", "season_end")
    @classmethod
    def _check_month_day(cls, value: str) -> str:
        parse_month_day(value)
        return value

    @property
    def snow_forecast_enabled(self) -> bool:
        """The feed is only used when a client id is configured."""
        return bool(self.snow_forecast_client_id.strip())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables, defaults for the rest."""
        env = os.environ if environ is None else environ
        mapping = {
            "open_meteo_url": "OPEN_METEO_URL",
            "nominatim_url": "NOMINATIM_URL",
            "nominatim_user_agent": "NOMINATIM_USER_AGENT",
            "snow_forecast_api_base": "SNOW_FORECAST_API_BASE",
            "snow_forecast_client_id": "SNOW_FORECAST_CLIENT_ID",
            "timezone": "SKIDAY_TIMEZONE",
            "season_start": "SKIDAY_SEASON_START",
            "season_end": "SKIDAY_SEASON_END",
            "default_city": "SKIDAY_DEFAULT_CITY",
            "request_timeout": "SKIDAY_REQUEST_TIMEOUT",
            "max_retries": "SKIDAY_MAX_RETRIES",
            "log_level": "LOG_LEVEL",
        }
        values = {field: env[var] for field, var in mapping.items() if env.get(var)}
        return cls(**values)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the CLI and API entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
