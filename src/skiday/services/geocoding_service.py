"""Geocoding of a city name via Nominatim (OpenStreetMap)."""

import logging

import aiohttp

from skiday.models.resort import Coordinate
from skiday.services.errors import NotFoundError, ProviderError
from skiday.services.http_client import fetch_json
from skiday.utils.config import Settings

logger = logging.getLogger(__name__)

PROVIDER = "nominatim"


class NominatimGeocoder:
    """Resolve a place name to coordinates."""

    def __init__(self, session: aiohttp.ClientSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings or Settings()

    async def geocode(self, city: str) -> Coordinate:
        """
        Geocode a city name to WGS84 coordinates.

        Raises:
            NotFoundError: No match for the name
            RateLimitedError: Nominatim answered 429
            ProviderError: Any other failure
        """
        params = {"q": city, "format": "json", "limit": "1"}
        headers = {
            "Accept": "application/json",
            "User-Agent": self.settings.nominatim_user_agent,
        }
        data = await fetch_json(
            self.session,
            self.settings.nominatim_url,
            params,
            provider=PROVIDER,
            headers=headers,
            timeout=self.settings.request_timeout,
            max_retries=self.settings.max_retries,
        )

        if not isinstance(data, list) or not data:
            raise NotFoundError(f"City not found: {city}")

        first = data[0]
        try:
            coordinate = Coordinate(lat=float(first["lat"]), lon=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(PROVIDER, f"unexpected response format: {e}")

        logger.info(f"Geocoded {city!r} to {coordinate.lat:.4f}, {coordinate.lon:.4f}")
        return coordinate
