"""Open-Meteo weather data service for elevation-aware resort weather."""

import asyncio
import logging
import math
from datetime import date, timedelta
from typing import Any

import aiohttp

from skiday.models.resort import ElevationBand, Resort
from skiday.models.weather import ResortWeather, WeatherSample
from skiday.services.errors import ProviderError
from skiday.services.http_client import fetch_json
from skiday.utils.config import Settings
from skiday.utils.constants import SKI_HOURS_END, SKI_HOURS_START
from skiday.utils.parsing import value_at

logger = logging.getLogger(__name__)

PROVIDER = "open-meteo"

HOURLY_FIELDS = "temperature_2m,snow_depth,wind_speed_10m,wind_gusts_10m"
DAILY_FIELDS = "snowfall_sum"

# snowfall_sum is read as mm and reported in cm
MM_PER_CM = 10.0
# snow_depth is reported in meters
CM_PER_M = 100.0


class OpenMeteoService:
    """Primary weather source: point forecasts downscaled to an elevation.

    Open-Meteo provides:
    - Free API (no key required)
    - Elevation-aware temperature
    - Hourly snow depth, wind and gusts
    - Daily snowfall sums
    """

    def __init__(self, session: aiohttp.ClientSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or Settings()
        self.base_url = self.settings.open_meteo_url

    async def get_resort_weather(self, resort: Resort, target_date: date) -> ResortWeather:
        """Fetch top, bottom and mid bands concurrently and aggregate them.

        Raises:
            RateLimitedError: Open-Meteo answered 429 for any band
            ProviderError: Any other failure for any band
        """
        # A failing band cancels its siblings before the error propagates
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = {
                    band: tg.create_task(self.get_band_sample(resort, band, target_date))
                    for band in ElevationBand
                }
        except ExceptionGroup as eg:
            raise eg.exceptions[0]

        return ResortWeather.from_samples(
            top=tasks[ElevationBand.TOP].result(),
            bottom=tasks[ElevationBand.BOTTOM].result(),
            mid=tasks[ElevationBand.MID].result(),
        )

    async def get_band_sample(
        self, resort: Resort, band: ElevationBand, target_date: date
    ) -> WeatherSample:
        """Fetch one elevation band of a resort for the target date."""
        elevation_m = resort.elevation_for(band)
        params = {
            "latitude": resort.lat,
            "longitude": resort.lon,
            "elevation": elevation_m,
            # Previous day is needed for fresh snow
            "start_date": (target_date - timedelta(days=1)).isoformat(),
            "end_date": target_date.isoformat(),
            "daily": DAILY_FIELDS,
            "hourly": HOURLY_FIELDS,
            "timezone": resort.timezone or self.settings.timezone,
            "temperature_unit": "celsius",
            "wind_speed_unit": "kmh",
            "precipitation_unit": "mm",
        }

        data = await fetch_json(
            self.session,
            self.base_url,
            params,
            provider=PROVIDER,
            timeout=self.settings.request_timeout,
            max_retries=self.settings.max_retries,
        )
        if not isinstance(data, dict):
            raise ProviderError(PROVIDER, "unexpected response format: expected object")

        logger.debug(f"Open-Meteo {band.value} band for {resort.resort_id} at {elevation_m} m")
        return parse_band_sample(data, band, elevation_m, target_date)


def parse_band_sample(
    data: dict[str, Any], band: ElevationBand, elevation_m: float, target_date: date
) -> WeatherSample:
    """Extract a WeatherSample from an Open-Meteo response.

    Temperature and wind are restricted to ski hours on the target date.
    Snow depth is the day's hourly maximum. Fresh snow is the previous
    day's snowfall sum. Missing values count as zero for snow and wind and
    are skipped for temperature.
    """
    hourly = _section(data, "hourly")
    daily = _section(data, "daily")
    day_str = target_date.isoformat()

    times = _series(hourly, "time")
    temps = _series(hourly, "temperature_2m")
    depths = _series(hourly, "snow_depth")
    winds = _series(hourly, "wind_speed_10m")
    gusts = _series(hourly, "wind_gusts_10m")

    window_temps: list[float] = []
    wind_max = 0.0
    depth_max_m = 0.0

    for i, time_str in enumerate(times):
        time_str = str(time_str)
        if not time_str.startswith(day_str):
            continue

        depth = value_at(depths, i)
        if depth is not None:
            depth_max_m = max(depth_max_m, depth)

        if not _in_ski_hours(time_str):
            continue

        temp = value_at(temps, i)
        if temp is not None:
            window_temps.append(temp)

        wind = value_at(winds, i) or 0.0
        gust = value_at(gusts, i) or 0.0
        wind_max = max(wind_max, wind, gust)

    fresh_snow_cm = 0.0
    previous_day = (target_date - timedelta(days=1)).isoformat()
    daily_times = [str(t) for t in _series(daily, "time")]
    if previous_day in daily_times:
        snowfall = value_at(_series(daily, "snowfall_sum"), daily_times.index(previous_day))
        fresh_snow_cm = (snowfall or 0.0) / MM_PER_CM

    return WeatherSample(
        band=band,
        elevation_m=elevation_m,
        temp_min=min(window_temps) if window_temps else math.nan,
        temp_max=max(window_temps) if window_temps else math.nan,
        wind_max=wind_max,
        snow_depth_cm=depth_max_m * CM_PER_M,
        fresh_snow_cm=fresh_snow_cm,
    )


def _in_ski_hours(time_str: str) -> bool:
    """Check an ISO local timestamp ("2026-01-17T08:00") against ski hours."""
    try:
        hour = int(time_str[11:13])
    except ValueError:
        return False
    return SKI_HOURS_START <= hour <= SKI_HOURS_END



def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ProviderError(PROVIDER, f"unexpected response format: {key} is not an object")
    return section


def _series(section: dict[str, Any], key: str) -> list:
    values = section.get(key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise ProviderError(PROVIDER, f"unexpected response format: {key} is not an array")
    return values
