"""Tests for model validation and serialization."""

import math
from datetime import date

import pytest
from pydantic import ValidationError

from skiday.models.criteria import Criteria
from skiday.models.resort import Coordinate, ElevationBand, Resort
from skiday.models.result import (
    OUTCOME_ORDER,
    REASON_MESSAGES,
    BatchResult,
    Outcome,
    Reason,
    ReasonCode,
    ResortResult,
)
from skiday.models.weather import ResortWeather, WeatherSample


class TestResort:
    def test_elevations(self, sample_resort):
        assert sample_resort.mid_elevation_m == 1831.0
        assert sample_resort.elevation_for(ElevationBand.TOP) == 2962
        assert sample_resort.elevation_for(ElevationBand.BOTTOM) == 700
        assert sample_resort.elevation_for(ElevationBand.MID) == 1831.0
        assert sample_resort.elevation_range == "700 - 2962 m"

    def test_coordinate(self, sample_resort):
        assert sample_resort.coordinate == Coordinate(lat=47.42, lon=10.98)

    def test_top_below_bottom_rejected(self):
        with pytest.raises(ValidationError):
            Resort(
                resort_id="x",
                name="X",
                lat=47.0,
                lon=11.0,
                elevation_top_m=800,
                elevation_bottom_m=1200,
            )

    def test_latitude_range(self):
        with pytest.raises(ValidationError):
            Coordinate(lat=91.0, lon=0.0)

    def test_frozen(self, sample_resort):
        with pytest.raises(ValidationError):
            sample_resort.name = "Renamed"


class TestOutcome:
    def test_order_and_rank(self):
        assert [o.value for o in OUTCOME_ORDER] == ["Great", "Good", "OK", "Marginal", "No"]
        assert [o.rank for o in OUTCOME_ORDER] == [4, 3, 2, 1, 0]

    def test_every_reason_has_a_message(self):
        assert set(REASON_MESSAGES) == set(ReasonCode)


class TestReason:
    def test_message_with_params(self):
        reason = Reason(code=ReasonCode.TEMP_RANGE, params={"min": -15.0, "max": 5.0})

        assert reason.message() == "Temperature outside range (min -15°C – max 5°C)."

    def test_message_fractional_param(self):
        reason = Reason(code=ReasonCode.WIND, params={"max": 42.5})

        assert reason.message() == "Wind too strong (max 42.5 km/h)."


class TestCriteria:
    def test_defaults(self):
        criteria = Criteria()

        assert criteria.max_distance_km == 150.0
        assert criteria.min_temp == -15.0
        assert criteria.max_temp == 5.0
        assert criteria.max_wind_kmh == 50.0
        assert criteria.min_snow_top_cm == 30.0
        assert criteria.min_snow_bottom_cm == 10.0
        assert criteria.require_fresh_snow is False
        assert criteria.min_fresh_snow_cm == 5.0

    def test_from_form_zeroes_fresh_when_optional(self):
        criteria = Criteria.from_form(min_fresh_snow_cm=20, require_fresh_snow=False)

        assert criteria.min_fresh_snow_cm == 0.0

    def test_from_form_keeps_fresh_when_required(self):
        criteria = Criteria.from_form(min_fresh_snow_cm=20, require_fresh_snow=True)

        assert criteria.min_fresh_snow_cm == 20

    def test_from_form_ignores_none(self):
        criteria = Criteria.from_form(max_distance_km=None, max_wind_kmh=30)

        assert criteria.max_distance_km == 150.0
        assert criteria.max_wind_kmh == 30

    @pytest.mark.parametrize(
        "field", ["max_distance_km", "min_snow_top_cm", "min_snow_bottom_cm", "min_fresh_snow_cm"]
    )
    def test_negative_rejected(self, field):
        with pytest.raises(ValidationError):
            Criteria(**{field: -1})


class TestResortWeather:
    def test_from_samples(self):
        top = WeatherSample(
            band=ElevationBand.TOP, elevation_m=2000, temp_min=-12, temp_max=-9,
            wind_max=40, snow_depth_cm=120, fresh_snow_cm=10,
        )
        bottom = WeatherSample(
            band=ElevationBand.BOTTOM, elevation_m=800, temp_min=-2, temp_max=3,
            wind_max=15, snow_depth_cm=30, fresh_snow_cm=4,
        )
        mid = WeatherSample(
            band=ElevationBand.MID, elevation_m=1400, temp_min=-7, temp_max=-3,
            wind_max=90, snow_depth_cm=70, fresh_snow_cm=6,
        )

        weather = ResortWeather.from_samples(top, bottom, mid)

        assert weather.temp_min == -7
        assert weather.temp_max == -3
        assert weather.wind_max == 40
        assert weather.snow_top_cm == 120
        assert weather.snow_bottom_cm == 30
        assert weather.fresh_snow_cm == 7
        assert weather.source == "open-meteo"


class TestSerialization:
    def test_batch_to_dict(self, sample_resort):
        result = ResortResult(
            resort=sample_resort,
            weather=ResortWeather(temp_min=math.nan, temp_max=math.nan),
            outcome=Outcome.NO,
            reason=Reason(code=ReasonCode.TEMP_RANGE, params={"min": -15.0, "max": 5.0}),
            distance_km=88.46,
        )
        batch = BatchResult(
            target_date=date(2026, 1, 17),
            origin=Coordinate(lat=48.137, lon=11.575),
            lifts_open=True,
            results=[result],
            overall_outcome=Outcome.NO,
            reason=Reason(code=ReasonCode.NO_RESORTS_MATCH),
        )

        data = batch.to_dict()

        assert data["date"] == "2026-01-17"
        assert data["origin"] == {"lat": 48.137, "lon": 11.575}
        assert data["overall_outcome"] == "No"
        assert data["reason_code"] == "no_resorts_match"
        assert data["matching_count"] == 0
        entry = data["results"][0]
        assert entry["resort_id"] == "garmisch"
        assert entry["distance_km"] == 88.5
        assert entry["reason_params"] == {"min": -15.0, "max": 5.0}
        assert entry["weather"]["temp_min"] is None
        assert entry["weather"]["temp_max"] is None
        assert entry["error"] is None

    def test_failed_result_without_weather(self, sample_resort):
        result = ResortResult(
            resort=sample_resort,
            outcome=Outcome.NO,
            reason=Reason(code=ReasonCode.WEATHER_UNAVAILABLE),
            distance_km=10.0,
            error="open-meteo: HTTP 500",
        )

        data = result.to_dict()

        assert data["weather"] is None
        assert data["reason"] == "Weather data could not be loaded."
        assert data["error"] == "open-meteo: HTTP 500"
