"""Tests for Nominatim geocoding."""

import asyncio

import pytest

from helpers import mock_response, mock_session
from skiday.services.errors import NotFoundError, ProviderError, RateLimitedError
from skiday.services.geocoding_service import NominatimGeocoder
from skiday.utils.config import Settings


def _geocode(responses, city="Munich", settings=None):
    session = mock_session(responses)
    geocoder = NominatimGeocoder(session, settings)
    return asyncio.run(geocoder.geocode(city)), session


class TestNominatimGeocoder:
    def test_first_match(self):
        payload = [
            {"lat": "48.1371079", "lon": "11.5753822", "display_name": "München"},
            {"lat": "0", "lon": "0"},
        ]

        coordinate, session = _geocode([mock_response(payload=payload)])

        assert coordinate.lat == pytest.approx(48.1371079)
        assert coordinate.lon == pytest.approx(11.5753822)
        params = session.get.call_args.kwargs["params"]
        assert params == {"q": "Munich", "format": "json", "limit": "1"}

    def test_user_agent_sent(self):
        settings = Settings(nominatim_user_agent="TestAgent/2.0", nominatim_url="https://geo.test")

        _, session = _geocode(
            [mock_response(payload=[{"lat": "1", "lon": "2"}])], settings=settings
        )

        assert session.get.call_args.args[0] == "https://geo.test"
        assert session.get.call_args.kwargs["headers"]["User-Agent"] == "TestAgent/2.0"
        assert session.get.call_args.kwargs["headers"]["Accept"] == "application/json"

    def test_empty_result_not_found(self):
        with pytest.raises(NotFoundError, match="Atlantis"):
            _geocode([mock_response(payload=[])], city="Atlantis")

    def test_non_list_result_not_found(self):
        with pytest.raises(NotFoundError):
            _geocode([mock_response(payload={"error": "nothing"})])

    def test_bad_coordinates(self):
        with pytest.raises(ProviderError):
            _geocode([mock_response(payload=[{"lat": "north"}])])

    def test_rate_limited(self):
        with pytest.raises(RateLimitedError):
            _geocode([mock_response(status=429)])
