"""Weather acquisition for a resort with fallback between feed and Open-Meteo."""

import logging
from datetime import date

import aiohttp

from skiday.models.resort import Resort
from skiday.models.weather import ResortWeather
from skiday.services.errors import ConfigurationError, ProviderError, RateLimitedError
from skiday.services.openmeteo_service import OpenMeteoService
from skiday.services.snowforecast_service import SnowForecastService
from skiday.utils.config import Settings

logger = logging.getLogger(__name__)


class WeatherService:
    """Produce ResortWeather for a resort and date.

    The Snow-Forecast feed is tried first when it is configured and the
    resort has a record id. Any feed failure falls back to Open-Meteo for
    that resort only. Open-Meteo errors propagate to the caller.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: Settings | None = None,
        openmeteo: OpenMeteoService | None = None,
        snowforecast: SnowForecastService | None = None,
    ):
        self.settings = settings or Settings()
        self.openmeteo = openmeteo or OpenMeteoService(session, self.settings)
        self.snowforecast = snowforecast or SnowForecastService(session, self.settings)

    async def get_resort_weather(self, resort: Resort, target_date: date) -> ResortWeather:
        """
        Fetch aggregated weather for one resort.

        Args:
            resort: Resort to fetch
            target_date: Ski day

        Returns:
            ResortWeather from whichever source answered

        Raises:
            RateLimitedError: Open-Meteo answered 429
            ProviderError: Open-Meteo failed otherwise
        """
        if self.snowforecast.is_available_for(resort):
            try:
                return await self.snowforecast.get_resort_weather(resort, target_date)
            except (RateLimitedError, ProviderError, ConfigurationError) as e:
                logger.warning(
                    f"Snow-Forecast failed for {resort.resort_id}, "
                    f"falling back to Open-Meteo: {e}"
                )

        return await self.openmeteo.get_resort_weather(resort, target_date)
