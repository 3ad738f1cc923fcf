"""Pytest configuration and shared fixtures."""

import pytest

from skiday.models.criteria import Criteria
from skiday.models.resort import Resort
from skiday.models.weather import ResortWeather


@pytest.fixture
def sample_resort():
    """Create a sample resort for testing."""
    return Resort(
        resort_id="garmisch",
        name="Garmisch-Partenkirchen / Zugspitze",
        lat=47.42,
        lon=10.98,
        elevation_top_m=2962,
        elevation_bottom_m=700,
        timezone="Europe/Berlin",
    )


@pytest.fixture
def feed_resort():
    """Resort carrying a Snow-Forecast record id."""
    return Resort(
        resort_id="kitzbuehel",
        name="Kitzbühel (AT)",
        lat=47.45,
        lon=12.39,
        elevation_top_m=2000,
        elevation_bottom_m=800,
        timezone="Europe/Vienna",
        snow_forecast_record_id=12345,
    )


@pytest.fixture
def default_criteria():
    """Criteria matching the form defaults, fresh snow not required."""
    return Criteria(
        max_distance_km=150,
        min_temp=-15,
        max_temp=5,
        max_wind_kmh=50,
        min_snow_top_cm=30,
        min_snow_bottom_cm=10,
        require_fresh_snow=False,
        min_fresh_snow_cm=0,
    )


@pytest.fixture
def good_weather():
    """Weather that passes every default gate comfortably."""
    return ResortWeather(
        temp_min=-8.0,
        temp_max=-2.0,
        wind_max=10.0,
        snow_top_cm=80.0,
        snow_bottom_cm=40.0,
        fresh_snow_cm=15.0,
    )
