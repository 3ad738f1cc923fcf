"""Weather data models for resort elevation bands."""

import math

from pydantic import BaseModel, ConfigDict, Field

from .resort import ElevationBand


class WeatherSample(BaseModel):
    """Weather for one resort at one elevation band on the target date.

    Temperatures and wind cover ski hours (08:00-16:00 local time) only.
    Fresh snow is what fell on the previous calendar day. A temperature of
    NaN means the provider had no usable value in the window.
    """

    band: ElevationBand
    elevation_m: float = Field(..., description="Elevation the sample was taken at")
    temp_min: float = Field(default=math.nan, description="Min temp in ski hours (C)")
    temp_max: float = Field(default=math.nan, description="Max temp in ski hours (C)")
    wind_max: float = Field(default=0.0, description="Max wind in ski hours (km/h)")
    snow_depth_cm: float = Field(default=0.0, description="Max snow depth on the day")
    fresh_snow_cm: float = Field(default=0.0, description="Snowfall on the day before")

    model_config = ConfigDict(frozen=True)


class ResortWeather(BaseModel):
    """Weather aggregated across elevation bands for one resort."""

    temp_min: float = Field(default=math.nan, description="Min temp (C), mid band")
    temp_max: float = Field(default=math.nan, description="Max temp (C), mid band")
    wind_max: float = Field(default=0.0, description="Max wind across bands (km/h)")
    snow_top_cm: float = Field(default=0.0, description="Snow depth at the top")
    snow_bottom_cm: float = Field(default=0.0, description="Snow depth at the bottom")
    fresh_snow_cm: float = Field(default=0.0, description="Fresh snow from the day before")
    source: str = Field(default="open-meteo", description="Data source used")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_samples(
        cls, top: WeatherSample, bottom: WeatherSample, mid: WeatherSample
    ) -> "ResortWeather":
        """Combine band samples.

        Temperature comes from the mid band, typical ski altitude. Wind is
        the worse of top and bottom since either can close lifts.
        """
        return cls(
            temp_min=mid.temp_min,
            temp_max=mid.temp_max,
            wind_max=max(top.wind_max, bottom.wind_max),
            snow_top_cm=top.snow_depth_cm,
            snow_bottom_cm=bottom.snow_depth_cm,
            fresh_snow_cm=(top.fresh_snow_cm + bottom.fresh_snow_cm) / 2,
            source="open-meteo",
        )
