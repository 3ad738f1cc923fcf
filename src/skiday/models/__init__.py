"""Data models for the ski day checker."""

from .criteria import Criteria
from .resort import Coordinate, ElevationBand, Resort
from .result import (
    OUTCOME_ORDER,
    REASON_MESSAGES,
    BatchResult,
    Decision,
    Outcome,
    Reason,
    ReasonCode,
    ResortResult,
)
from .weather import ResortWeather, WeatherSample

__all__ = [
    "BatchResult",
    "Coordinate",
    "Criteria",
    "Decision",
    "ElevationBand",
    "OUTCOME_ORDER",
    "Outcome",
    "REASON_MESSAGES",
    "Reason",
    "ReasonCode",
    "Resort",
    "ResortResult",
    "ResortWeather",
    "WeatherSample",
]
