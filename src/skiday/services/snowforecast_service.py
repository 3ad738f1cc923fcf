"""Snow-Forecast.com feed: optional secondary weather source keyed by record id."""

import logging
import math
from datetime import date
from typing import Any

import aiohttp

from skiday.models.resort import Resort
from skiday.models.weather import ResortWeather
from skiday.services.errors import ConfigurationError, ProviderError
from skiday.services.http_client import fetch_json
from skiday.utils.config import Settings
from skiday.utils.parsing import value_at

logger = logging.getLogger(__name__)

PROVIDER = "snow-forecast"
FORECAST_DAYS = 6

# Feed versions have used different key names for the same metric.
# First present alias wins.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "date": ("date", "dates", "Date", "days", "time"),
    "temp_max": ("temp_max", "max_temp", "maxTemp", "high_temp", "temperature_max"),
    "temp_min": ("temp_min", "min_temp", "minTemp", "low_temp", "temperature_min"),
    "wind": ("wind_speed", "windSpeed", "wind", "sustained_wind", "wind_kmh"),
    "snow_depth_top": ("upper_snow_depth", "top_snow_depth", "snow_depth_top"),
    "snow_depth_bottom": ("lower_snow_depth", "bottom_snow_depth", "snow_depth_bottom"),
    "snow_depth": ("snow_depth", "snowDepth", "snow_depth_cm", "depth"),
    "fresh_snow": ("fresh_snow", "freshSnow", "new_snow", "snowfall", "snow"),
}

FORECAST_KEYS = ("Forecasts", "forecasts")

# Depths below this are taken to be meters
MIN_PLAUSIBLE_DEPTH_CM = 10.0


class SnowForecastService:
    """Secondary weather source using the Snow-Forecast feed.

    Only usable when a client id is configured and the resort carries a
    feed record id.
    """

    def __init__(self, session: aiohttp.ClientSession, settings: Settings):
        self.session = session
        self.settings = settings
        self.base_url = settings.snow_forecast_api_base

    def is_available_for(self, resort: Resort) -> bool:
        """Check both the global credential and the per-resort reference."""
        return self.settings.snow_forecast_enabled and resort.snow_forecast_record_id is not None

    async def get_resort_weather(self, resort: Resort, target_date: date) -> ResortWeather:
        """Fetch the feed for one resort and read the target day.

        Raises:
            ConfigurationError: Client id or resort record id missing
            RateLimitedError: Feed answered 429
            ProviderError: Any other failure or malformed payload
        """
        if not self.is_available_for(resort):
            raise ConfigurationError(
                f"Snow-Forecast feed not configured for resort {resort.resort_id}"
            )

        params = {
            "record": resort.snow_forecast_record_id,
            "client_id": self.settings.snow_forecast_client_id,
            "days": FORECAST_DAYS,
        }
        data = await fetch_json(
            self.session,
            self.base_url,
            params,
            provider=PROVIDER,
            timeout=self.settings.request_timeout,
            max_retries=self.settings.max_retries,
        )
        logger.debug(f"Snow-Forecast record {resort.snow_forecast_record_id} for {resort.resort_id}")
        return parse_feed(data, target_date)


def parse_feed(data: Any, target_date: date) -> ResortWeather:
    """Read the target day from a feed payload.

    The day index defaults to 0 when the date is not in the feed. Fresh
    snow is read at the previous index. A single depth value is used for
    both top and bottom.
    """
    forecasts = None
    if isinstance(data, dict):
        for key in FORECAST_KEYS:
            if isinstance(data.get(key), dict):
                forecasts = data[key]
                break
    if forecasts is None:
        raise ProviderError(PROVIDER, "unexpected response format: missing Forecasts")

    dates = [str(d)[:10] for d in _series(forecasts, "date")]
    day_str = target_date.isoformat()
    idx = dates.index(day_str) if day_str in dates else 0

    temp_max = value_at(_series(forecasts, "temp_max"), idx)
    temp_min = value_at(_series(forecasts, "temp_min"), idx)
    wind = value_at(_series(forecasts, "wind"), idx)

    depth = value_at(_series(forecasts, "snow_depth"), idx)
    depth_top = value_at(_series(forecasts, "snow_depth_top"), idx)
    depth_bottom = value_at(_series(forecasts, "snow_depth_bottom"), idx)
    if depth_top is None:
        depth_top = depth if depth is not None else depth_bottom
    if depth_bottom is None:
        depth_bottom = depth if depth is not None else depth_top

    fresh = None
    if idx > 0:
        fresh = value_at(_series(forecasts, "fresh_snow"), idx - 1)

    return ResortWeather(
        temp_min=math.nan if temp_min is None else temp_min,
        temp_max=math.nan if temp_max is None else temp_max,
        wind_max=wind or 0.0,
        snow_top_cm=normalize_depth_cm(depth_top),
        snow_bottom_cm=normalize_depth_cm(depth_bottom),
        fresh_snow_cm=fresh or 0.0,
        source=PROVIDER,
    )


def normalize_depth_cm(value: float | None) -> float:
    """Convert implausibly small depths (meters) to centimeters."""
    if value is None:
        return 0.0
    if value < MIN_PLAUSIBLE_DEPTH_CM:
        return value * 100
    return value


def _series(forecasts: dict[str, Any], metric: str) -> list:
    for key in FIELD_ALIASES[metric]:
        values = forecasts.get(key)
        if values is not None:
            return values if isinstance(values, list) else [values]
    return []

