"""FastAPI application exposing the ski day check."""

import logging
import time

from fastapi import FastAPI, HTTPException, Query, status
from pydantic import ValidationError

from skiday.models.criteria import Criteria
from skiday.models.result import REASON_MESSAGES, ReasonCode
from skiday.services.errors import NotFoundError, ProviderError, RateLimitedError
from skiday.services.resort_service import ResortService
from skiday.services.ski_day_service import check_ski_day
from skiday.utils.config import Settings, configure_logging
from skiday.utils.dates import resolve_target_date

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Ski Day Checker API",
    description="Is the chosen day a good day to go skiing?",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

# Lazy-initialized services
_settings = None
_resort_service = None


def reset_services():
    """Reset all lazy-initialized services. Useful for testing."""
    global _settings, _resort_service
    _settings = None
    _resort_service = None


def get_settings() -> Settings:
    """Get or create Settings from the environment."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
        configure_logging(_settings.log_level)
    return _settings


def get_resort_service() -> ResortService:
    """Get or create the catalog-backed ResortService."""
    global _resort_service
    if _resort_service is None:
        _resort_service = ResortService.from_catalog()
    return _resort_service


@app.middleware("http")
async def log_requests(request, call_next):
    """Log all API requests with timing."""
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} {duration_ms:.0f}ms"
    )
    return response


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/api/resorts")
async def get_resorts():
    """List the resort catalog."""
    resorts = get_resort_service().get_all_resorts()
    return {"resorts": [r.model_dump() for r in resorts], "count": len(resorts)}


@app.get("/api/ski-day")
async def get_ski_day(
    city: str | None = Query(None, description="Starting city, defaults to configured city"),
    date: str | None = Query(None, description="Ski day as YYYY-MM-DD, defaults to tomorrow"),
    max_distance_km: float | None = Query(None, ge=0),
    min_temp: float | None = Query(None),
    max_temp: float | None = Query(None),
    max_wind_kmh: float | None = Query(None),
    min_snow_top_cm: float | None = Query(None),
    min_snow_bottom_cm: float | None = Query(None),
    require_fresh_snow: bool = Query(False),
    min_fresh_snow_cm: float | None = Query(None),
):
    """Rank resorts in range for the chosen day and give the overall answer."""
    settings = get_settings()

    try:
        target_date = resolve_target_date(date)
        criteria = Criteria.from_form(
            max_distance_km=max_distance_km,
            min_temp=min_temp,
            max_temp=max_temp,
            max_wind_kmh=max_wind_kmh,
            min_snow_top_cm=min_snow_top_cm,
            min_snow_bottom_cm=min_snow_bottom_cm,
            require_fresh_snow=require_fresh_snow,
            min_fresh_snow_cm=min_fresh_snow_cm,
        )
    except (ValidationError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    city = (city or "").strip() or settings.default_city

    try:
        result = await check_ski_day(
            city, target_date, criteria, settings, get_resort_service()
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RateLimitedError:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=REASON_MESSAGES[ReasonCode.RATE_LIMITED],
        )
    except ProviderError as e:
        logger.error(f"Ski day check failed for {city}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load location or weather data",
        )

    response = result.to_dict()
    response["city"] = city
    return response
