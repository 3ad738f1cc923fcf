"""Resort data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ElevationBand(str, Enum):
    """Elevation bands a resort is sampled at."""

    TOP = "top"
    BOTTOM = "bottom"
    MID = "mid"


class Coordinate(BaseModel):
    """WGS84 coordinate in degrees."""

    lat: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    lon: float = Field(..., ge=-180, le=180, description="Longitude coordinate")

    model_config = ConfigDict(frozen=True)


class Resort(BaseModel):
    """Ski resort reference data from the static catalog."""

    resort_id: str = Field(..., description="Unique identifier for the resort")
    name: str = Field(..., description="Resort display name")
    lat: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    lon: float = Field(..., ge=-180, le=180, description="Longitude coordinate")
    elevation_top_m: int = Field(..., description="Top lift station in meters")
    elevation_bottom_m: int = Field(..., description="Valley station in meters")
    timezone: str | None = Field(
        None, description="Resort timezone (e.g., 'Europe/Vienna'), configured zone if unset"
    )
    snow_forecast_slug: str | None = Field(
        None, description="Slug on snow-forecast.com/resorts/{slug}"
    )
    snow_forecast_record_id: int | None = Field(
        None, description="Snow-Forecast feed record id, enables the feed source"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_elevations(self) -> "Resort":
        if self.elevation_top_m < self.elevation_bottom_m:
            raise ValueError(
                f"elevation_top_m ({self.elevation_top_m}) must not be below "
                f"elevation_bottom_m ({self.elevation_bottom_m})"
            )
        return self

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, lon=self.lon)

    @property
    def mid_elevation_m(self) -> float:
        """Midpoint between top and bottom, typical ski altitude."""
        return (self.elevation_top_m + self.elevation_bottom_m) / 2

    @property
    def elevation_range(self) -> str:
        """Get elevation range string."""
        return f"{self.elevation_bottom_m} - {self.elevation_top_m} m"

    def elevation_for(self, band: ElevationBand) -> float:
        """Get elevation in meters for a band."""
        if band == ElevationBand.TOP:
            return self.elevation_top_m
        if band == ElevationBand.BOTTOM:
            return self.elevation_bottom_m
        return self.mid_elevation_m
