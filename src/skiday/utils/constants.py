"""Shared constants for the ski day checker."""

# Default criteria, also used as CLI/API form defaults
DEFAULT_MAX_DISTANCE_KM: float = 150.0
DEFAULT_MIN_TEMP: float = -15.0  # Colder is still acceptable
DEFAULT_MAX_TEMP: float = 5.0  # Warmer means slushy snow
DEFAULT_MAX_WIND_KMH: float = 50.0  # Stronger wind can close lifts
DEFAULT_MIN_SNOW_TOP_CM: float = 30.0
DEFAULT_MIN_SNOW_BOTTOM_CM: float = 10.0
DEFAULT_MIN_FRESH_SNOW_CM: float = 5.0

DEFAULT_CITY = "Munich"
DEFAULT_TIMEZONE = "Europe/Berlin"

# Typical Alpine season, month-day. Wraps the year boundary.
DEFAULT_SEASON_START = "12-01"
DEFAULT_SEASON_END = "04-15"

# Ski hours (local time, inclusive) for temperature and wind extremes
SKI_HOURS_START = 8
SKI_HOURS_END = 16

# Mean Earth radius used for great-circle distances
EARTH_RADIUS_KM = 6371.0
