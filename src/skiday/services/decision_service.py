"""Decision engine: hard gates first, then a graded quality score."""

from skiday.models.criteria import Criteria
from skiday.models.result import Decision, Outcome, Reason, ReasonCode
from skiday.models.weather import ResortWeather

# Margin weights. Temperature counts double, wind one-to-one, fresh snow
# counts even when it is not required.
TEMP_WEIGHT = 2.0
WIND_WEIGHT = 1.0
SNOW_TOP_WEIGHT = 0.3
SNOW_BOTTOM_WEIGHT = 0.2
FRESH_SNOW_WEIGHT = 1.2

# (min score, outcome, reason), checked in order
SCORE_THRESHOLDS: tuple[tuple[float, Outcome, ReasonCode], ...] = (
    (25.0, Outcome.GREAT, ReasonCode.GREAT),
    (15.0, Outcome.GOOD, ReasonCode.GOOD),
    (8.0, Outcome.OK, ReasonCode.OK),
)


def decide(
    weather: ResortWeather,
    criteria: Criteria,
    *,
    lifts_open: bool,
    resort_in_range: bool,
) -> Decision:
    """Grade one resort's weather against the criteria.

    The first failing gate returns No with its reason. Gate order: season,
    range, temperature, wind, snow at top, snow at bottom, fresh snow.
    NaN temperatures never pass the temperature gate.
    """
    if not lifts_open:
        return _no(ReasonCode.LIFTS_CLOSED)
    if not resort_in_range:
        return _no(ReasonCode.NO_RESORT_IN_RANGE)

    temp_ok = weather.temp_min >= criteria.min_temp and weather.temp_max <= criteria.max_temp
    if not temp_ok:
        return _no(ReasonCode.TEMP_RANGE, min=criteria.min_temp, max=criteria.max_temp)
    if weather.wind_max > criteria.max_wind_kmh:
        return _no(ReasonCode.WIND, max=criteria.max_wind_kmh)
    if weather.snow_top_cm < criteria.min_snow_top_cm:
        return _no(ReasonCode.SNOW_TOP, min=criteria.min_snow_top_cm)
    if weather.snow_bottom_cm < criteria.min_snow_bottom_cm:
        return _no(ReasonCode.SNOW_BOTTOM, min=criteria.min_snow_bottom_cm)
    if criteria.require_fresh_snow and weather.fresh_snow_cm < criteria.min_fresh_snow_cm:
        return _no(ReasonCode.FRESH_SNOW, min=criteria.min_fresh_snow_cm)

    score = calculate_score(weather, criteria)
    outcome, code = score_to_outcome(score)
    return Decision(outcome=outcome, reason=Reason(code=code), score=score)


def calculate_score(weather: ResortWeather, criteria: Criteria) -> float:
    """Weighted sum of margins above the thresholds. Higher is better."""
    margin_temp = min(
        weather.temp_max - criteria.min_temp, criteria.max_temp - weather.temp_min
    )
    margin_wind = criteria.max_wind_kmh - weather.wind_max
    margin_snow_top = weather.snow_top_cm - criteria.min_snow_top_cm
    margin_snow_bottom = weather.snow_bottom_cm - criteria.min_snow_bottom_cm
    if criteria.require_fresh_snow:
        margin_fresh = max(0.0, weather.fresh_snow_cm - criteria.min_fresh_snow_cm)
    else:
        margin_fresh = weather.fresh_snow_cm

    return (
        TEMP_WEIGHT * margin_temp
        + WIND_WEIGHT * margin_wind
        + SNOW_TOP_WEIGHT * margin_snow_top
        + SNOW_BOTTOM_WEIGHT * margin_snow_bottom
        + FRESH_SNOW_WEIGHT * margin_fresh
    )


def score_to_outcome(score: float) -> tuple[Outcome, ReasonCode]:
    """Map a score onto the four passing outcomes."""
    for min_score, outcome, code in SCORE_THRESHOLDS:
        if score >= min_score:
            return outcome, code
    return Outcome.MARGINAL, ReasonCode.MARGINAL


def _no(code: ReasonCode, **params: float) -> Decision:
    return Decision(outcome=Outcome.NO, reason=Reason(code=code, params=params))
