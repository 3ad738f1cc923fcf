"""Outcome, reason and result models for a ski day check."""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .resort import Coordinate, Resort
from .weather import ResortWeather


class Outcome(str, Enum):
    """Graded suitability of a ski day, best to worst."""

    GREAT = "Great"
    GOOD = "Good"
    OK = "OK"
    MARGINAL = "Marginal"
    NO = "No"

    @property
    def rank(self) -> int:
        """Numeric rank, higher is better (Great=4, No=0)."""
        return len(OUTCOME_ORDER) - 1 - OUTCOME_ORDER.index(self)


# Fixed total order, best first. Never reordered at runtime.
OUTCOME_ORDER: tuple[Outcome, ...] = (
    Outcome.GREAT,
    Outcome.GOOD,
    Outcome.OK,
    Outcome.MARGINAL,
    Outcome.NO,
)


class ReasonCode(str, Enum):
    """Why an outcome was given. Resolved to text by the presentation layer."""

    LIFTS_CLOSED = "lifts_closed"
    NO_RESORT_IN_RANGE = "no_resort_in_range"
    TEMP_RANGE = "temp_range"
    WIND = "wind"
    SNOW_TOP = "snow_top"
    SNOW_BOTTOM = "snow_bottom"
    FRESH_SNOW = "fresh_snow"
    GREAT = "great"
    GOOD = "good"
    OK = "ok"
    MARGINAL = "marginal"
    NO_RESORTS_MATCH = "no_resorts_match"
    ONE_RESORT_MATCHES = "one_resort_matches"
    MANY_RESORTS_MATCH = "many_resorts_match"
    RATE_LIMITED = "rate_limited"
    WEATHER_UNAVAILABLE = "weather_unavailable"


# English templates; placeholders are Reason.params keys
REASON_MESSAGES: dict[ReasonCode, str] = {
    ReasonCode.LIFTS_CLOSED: "Lifts/slopes are outside the season or closed.",
    ReasonCode.NO_RESORT_IN_RANGE: "No ski resort within the chosen maximum distance.",
    ReasonCode.TEMP_RANGE: "Temperature outside range (min {min:g}°C – max {max:g}°C).",
    ReasonCode.WIND: "Wind too strong (max {max:g} km/h).",
    ReasonCode.SNOW_TOP: "Too little snow at top (min {min:g} cm).",
    ReasonCode.SNOW_BOTTOM: "Too little snow at bottom (min {min:g} cm).",
    ReasonCode.FRESH_SNOW: "Too little fresh snow (min {min:g} cm).",
    ReasonCode.GREAT: "Great conditions.",
    ReasonCode.GOOD: "Good conditions.",
    ReasonCode.OK: "Acceptable conditions.",
    ReasonCode.MARGINAL: "Barely met, but not ideal.",
    ReasonCode.NO_RESORTS_MATCH: "None of the resorts in range meet the criteria.",
    ReasonCode.ONE_RESORT_MATCHES: "One resort in range meets the criteria.",
    ReasonCode.MANY_RESORTS_MATCH: "{count:g} resorts in range meet the criteria.",
    ReasonCode.RATE_LIMITED: "Too many requests to the weather service, please retry shortly.",
    ReasonCode.WEATHER_UNAVAILABLE: "Weather data could not be loaded.",
}


class Reason(BaseModel):
    """Tagged reason: a code plus the numeric parameters it refers to."""

    code: ReasonCode
    params: dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def message(self) -> str:
        """Render the English message for this reason."""
        return REASON_MESSAGES[self.code].format(**self.params)


class Decision(BaseModel):
    """Decision engine output for one resort."""

    outcome: Outcome
    reason: Reason
    score: float | None = Field(
        None, description="Quality score, only set when all hard gates pass"
    )

    model_config = ConfigDict(frozen=True)


class ResortResult(BaseModel):
    """Evaluation of one resort. Never mutated, only re-sorted."""

    resort: Resort
    weather: ResortWeather | None = Field(
        None, description="None when weather could not be fetched"
    )
    outcome: Outcome
    reason: Reason
    distance_km: float = Field(..., ge=0)
    error: str | None = Field(None, description="User-facing fetch error, if any")

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        weather = self.weather
        return {
            "resort_id": self.resort.resort_id,
            "name": self.resort.name,
            "distance_km": round(self.distance_km, 1),
            "outcome": self.outcome.value,
            "reason_code": self.reason.code.value,
            "reason_params": self.reason.params,
            "reason": self.reason.message(),
            "weather": _weather_to_dict(weather) if weather else None,
            "error": self.error,
        }


class BatchResult(BaseModel):
    """Ranked results for every resort in range plus the overall answer."""

    target_date: date
    origin: Coordinate | None = None
    lifts_open: bool
    results: list[ResortResult] = Field(default_factory=list)
    overall_outcome: Outcome
    reason: Reason
    matching_count: int = Field(0, description="Resorts whose outcome is not No")
    rate_limited: bool = Field(
        False, description="At least one resort failed on rate limiting"
    )

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "date": self.target_date.isoformat(),
            "origin": self.origin.model_dump() if self.origin else None,
            "lifts_open": self.lifts_open,
            "overall_outcome": self.overall_outcome.value,
            "reason_code": self.reason.code.value,
            "reason_params": self.reason.params,
            "reason": self.reason.message(),
            "matching_count": self.matching_count,
            "rate_limited": self.rate_limited,
            "results": [r.to_dict() for r in self.results],
        }


def _weather_to_dict(weather: ResortWeather) -> dict[str, Any]:
    # NaN is not valid JSON
    data = weather.model_dump()
    for key in ("temp_min", "temp_max"):
        if data[key] != data[key]:
            data[key] = None
    return data
