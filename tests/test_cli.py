"""Tests for the command line entry point."""

import json
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest

from skiday.handlers.cli import format_table, main
from skiday.models.result import BatchResult, Outcome, Reason, ReasonCode, ResortResult
from skiday.services.errors import NotFoundError, RateLimitedError

CHECK_PATH = "skiday.handlers.cli.check_ski_day"


@pytest.fixture
def batch_result(sample_resort, good_weather):
    return BatchResult(
        target_date=date(2026, 1, 17),
        lifts_open=True,
        results=[
            ResortResult(
                resort=sample_resort,
                weather=good_weather,
                outcome=Outcome.GREAT,
                reason=Reason(code=ReasonCode.GREAT),
                distance_km=88.0,
            )
        ],
        overall_outcome=Outcome.GREAT,
        reason=Reason(code=ReasonCode.ONE_RESORT_MATCHES),
        matching_count=1,
    )


class TestMain:
    def test_table_output(self, batch_result, capsys):
        with patch(CHECK_PATH, new=AsyncMock(return_value=batch_result)) as mock_check:
            code = main(["--city", "Munich", "--date", "2026-01-17", "--max-wind", "40"])

        assert code == 0
        out = capsys.readouterr().out
        assert "2026-01-17: Great" in out
        assert "Garmisch-Partenkirchen" in out
        city, target_date, criteria = mock_check.await_args.args[:3]
        assert city == "Munich"
        assert target_date == date(2026, 1, 17)
        assert criteria.max_wind_kmh == 40

    def test_json_output(self, batch_result, capsys):
        with patch(CHECK_PATH, new=AsyncMock(return_value=batch_result)):
            code = main(["--date", "2026-01-17", "--json"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["overall_outcome"] == "Great"
        assert data["results"][0]["name"] == "Garmisch-Partenkirchen / Zugspitze"

    def test_invalid_date(self, capsys):
        with patch(CHECK_PATH, new=AsyncMock()) as mock_check:
            code = main(["--date", "tomorrow-ish"])

        assert code == 1
        assert "Invalid date" in capsys.readouterr().err
        mock_check.assert_not_awaited()

    def test_negative_snow_rejected(self):
        with patch(CHECK_PATH, new=AsyncMock()):
            assert main(["--min-snow-top", "-1"]) == 1

    def test_city_not_found(self, capsys):
        with patch(CHECK_PATH, new=AsyncMock(side_effect=NotFoundError("City not found: X"))):
            code = main(["--city", "X"])

        assert code == 1
        assert "City not found" in capsys.readouterr().err

    def test_rate_limited(self):
        with patch(CHECK_PATH, new=AsyncMock(side_effect=RateLimitedError("nominatim"))):
            assert main([]) == 2

    def test_all_resorts_rate_limited(self):
        result = BatchResult(
            target_date=date(2026, 1, 17),
            lifts_open=True,
            overall_outcome=Outcome.NO,
            reason=Reason(code=ReasonCode.RATE_LIMITED),
            rate_limited=True,
        )
        with patch(CHECK_PATH, new=AsyncMock(return_value=result)):
            assert main(["--date", "2026-01-17"]) == 2


class TestFormatTable:
    def test_lifts_closed_note(self):
        result = BatchResult(
            target_date=date(2026, 7, 1),
            lifts_open=False,
            overall_outcome=Outcome.NO,
            reason=Reason(code=ReasonCode.NO_RESORTS_MATCH),
        )

        text = format_table(result)

        assert "outside the ski season" in text

    def test_missing_weather_shown_as_dash(self, sample_resort):
        result = BatchResult(
            target_date=date(2026, 1, 17),
            lifts_open=True,
            results=[
                ResortResult(
                    resort=sample_resort,
                    outcome=Outcome.NO,
                    reason=Reason(code=ReasonCode.WEATHER_UNAVAILABLE),
                    distance_km=88.0,
                    error="open-meteo: HTTP 500",
                )
            ],
            overall_outcome=Outcome.NO,
            reason=Reason(code=ReasonCode.NO_RESORTS_MATCH),
        )

        text = format_table(result)

        assert "–" in text
        assert "Weather data could not be loaded." in text
