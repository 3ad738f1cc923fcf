"""Batch evaluation of all resorts in range and the overall ski day answer."""

import asyncio
import logging
import math
import time
from datetime import date
from typing import Iterable, Protocol

import aiohttp

from skiday.models.criteria import Criteria
from skiday.models.resort import Coordinate, Resort
from skiday.models.result import (
    OUTCOME_ORDER,
    BatchResult,
    Outcome,
    Reason,
    ReasonCode,
    ResortResult,
)
from skiday.models.weather import ResortWeather
from skiday.services.decision_service import decide
from skiday.services.errors import ProviderError, RateLimitedError
from skiday.services.geocoding_service import NominatimGeocoder
from skiday.services.resort_service import ResortService
from skiday.services.weather_service import WeatherService
from skiday.utils.config import Settings
from skiday.utils.season import is_season_open

logger = logging.getLogger(__name__)

# Result table columns that sort numerically
WEATHER_SORT_KEYS = (
    "temp_min",
    "temp_max",
    "wind_max",
    "snow_top_cm",
    "snow_bottom_cm",
    "fresh_snow_cm",
)
SORT_KEYS = ("outcome", "name", "distance_km") + WEATHER_SORT_KEYS


class Geocoder(Protocol):
    async def geocode(self, city: str) -> Coordinate: ...


class ResortWeatherSource(Protocol):
    async def get_resort_weather(self, resort: Resort, target_date: date) -> ResortWeather: ...


class SkiDayService:
    """Runs weather acquisition and the decision engine over resorts in range."""

    def __init__(
        self,
        weather_service: ResortWeatherSource,
        resort_service: ResortService,
        settings: Settings | None = None,
        geocoder: Geocoder | None = None,
    ):
        self.weather_service = weather_service
        self.resort_service = resort_service
        self.settings = settings or Settings()
        self.geocoder = geocoder

    async def check(self, city: str, target_date: date, criteria: Criteria) -> BatchResult:
        """
        Answer the ski day question for a starting city.

        Geocodes the city once, filters the catalog by distance, applies the
        season gate and evaluates every resort in range.

        Raises:
            NotFoundError: City could not be geocoded
            RateLimitedError: Geocoder answered 429
            ProviderError: Geocoder failed otherwise
        """
        if self.geocoder is None:
            raise ValueError("SkiDayService.check requires a geocoder")

        origin = await self.geocoder.geocode(city)
        nearby = self.resort_service.get_nearby_resorts(origin, criteria.max_distance_km)
        lifts_open = is_season_open(
            target_date, self.settings.season_start, self.settings.season_end
        )
        return await self.evaluate_resorts(
            nearby, target_date, criteria, lifts_open=lifts_open, origin=origin
        )

    async def evaluate_resorts(
        self,
        resorts: list[tuple[Resort, float]],
        target_date: date,
        criteria: Criteria,
        *,
        lifts_open: bool,
        origin: Coordinate | None = None,
    ) -> BatchResult:
        """
        Evaluate resorts concurrently and rank them.

        Args:
            resorts: (Resort, distance_km) pairs already filtered by range
            target_date: Ski day
            criteria: User thresholds
            lifts_open: Season gate result for target_date
            origin: Starting point, echoed in the result

        Returns:
            BatchResult with results ordered best outcome first, nearest first
        """
        if not resorts:
            return BatchResult(
                target_date=target_date,
                origin=origin,
                lifts_open=lifts_open,
                results=[],
                overall_outcome=Outcome.NO,
                reason=Reason(code=ReasonCode.NO_RESORT_IN_RANGE),
                matching_count=0,
            )

        start_time = time.time()
        logger.info(f"Evaluating {len(resorts)} resorts for {target_date.isoformat()}")

        results = await asyncio.gather(
            *(
                self._evaluate_resort(resort, distance_km, target_date, criteria, lifts_open)
                for resort, distance_km in resorts
            )
        )

        ranked = sort_results(results)
        matching_count = sum(1 for r in ranked if r.outcome != Outcome.NO)
        rate_limited = any(r.reason.code == ReasonCode.RATE_LIMITED for r in ranked)

        if matching_count == 0 and rate_limited:
            reason = Reason(code=ReasonCode.RATE_LIMITED)
        else:
            reason = summary_reason(matching_count)

        overall = best_outcome(r.outcome for r in ranked)
        logger.info(
            f"Evaluated {len(ranked)} resorts in {time.time() - start_time:.2f}s: "
            f"overall {overall.value}, {matching_count} matching"
        )

        return BatchResult(
            target_date=target_date,
            origin=origin,
            lifts_open=lifts_open,
            results=ranked,
            overall_outcome=overall,
            reason=reason,
            matching_count=matching_count,
            rate_limited=rate_limited,
        )

    async def _evaluate_resort(
        self,
        resort: Resort,
        distance_km: float,
        target_date: date,
        criteria: Criteria,
        lifts_open: bool,
    ) -> ResortResult:
        """Evaluate one resort. Provider failures become a No result."""
        try:
            weather = await self.weather_service.get_resort_weather(resort, target_date)
        except RateLimitedError as e:
            logger.error(f"Rate limited fetching weather for {resort.resort_id}: {e}")
            return _failed_result(resort, distance_km, ReasonCode.RATE_LIMITED, str(e))
        except ProviderError as e:
            logger.error(f"Failed to fetch weather for {resort.resort_id}: {e}")
            return _failed_result(
                resort, distance_km, ReasonCode.WEATHER_UNAVAILABLE, str(e)
            )

        decision = decide(
            weather,
            criteria,
            lifts_open=lifts_open,
            resort_in_range=distance_km <= criteria.max_distance_km,
        )
        return ResortResult(
            resort=resort,
            weather=weather,
            outcome=decision.outcome,
            reason=decision.reason,
            distance_km=distance_km,
        )


async def check_ski_day(
    city: str,
    target_date: date,
    criteria: Criteria,
    settings: Settings | None = None,
    resort_service: ResortService | None = None,
) -> BatchResult:
    """Run one ski day check with a fresh HTTP session."""
    settings = settings or Settings()
    resort_service = resort_service or ResortService.from_catalog()

    async with aiohttp.ClientSession() as session:
        service = SkiDayService(
            weather_service=WeatherService(session, settings),
            resort_service=resort_service,
            settings=settings,
            geocoder=NominatimGeocoder(session, settings),
        )
        return await service.check(city, target_date, criteria)


def best_outcome(outcomes: Iterable[Outcome]) -> Outcome:
    """Best outcome per the fixed order, No when there are none."""
    present = set(outcomes)
    for outcome in OUTCOME_ORDER:
        if outcome in present:
            return outcome
    return Outcome.NO


def summary_reason(matching_count: int) -> Reason:
    """Summary reason for how many resorts meet the criteria."""
    if matching_count == 0:
        return Reason(code=ReasonCode.NO_RESORTS_MATCH)
    if matching_count == 1:
        return Reason(code=ReasonCode.ONE_RESORT_MATCHES)
    return Reason(code=ReasonCode.MANY_RESORTS_MATCH, params={"count": matching_count})


def sort_results(
    results: Iterable[ResortResult], key: str = "outcome", descending: bool = True
) -> list[ResortResult]:
    """
    Sort results like the results table does.

    By outcome: best first, then nearest first (descending=False flips
    only the outcome order). By name: alphabetical. Numeric columns sort
    missing or NaN values as lowest.
    """
    if key not in SORT_KEYS:
        raise ValueError(f"Invalid sort key {key!r}. Must be one of: {SORT_KEYS}")

    items = list(results)
    if key == "outcome":
        sign = -1 if descending else 1
        return sorted(items, key=lambda r: (sign * r.outcome.rank, r.distance_km))
    if key == "name":
        return sorted(items, key=lambda r: r.resort.name.casefold(), reverse=descending)
    if key == "distance_km":
        return sorted(items, key=lambda r: r.distance_km, reverse=descending)
    return sorted(items, key=lambda r: _weather_value(r, key), reverse=descending)


def _weather_value(result: ResortResult, key: str) -> float:
    if result.weather is None:
        return -math.inf
    value = getattr(result.weather, key)
    return -math.inf if math.isnan(value) else value


def _failed_result(
    resort: Resort, distance_km: float, code: ReasonCode, error: str
) -> ResortResult:
    return ResortResult(
        resort=resort,
        weather=None,
        outcome=Outcome.NO,
        reason=Reason(code=code),
        distance_km=distance_km,
        error=error,
    )
