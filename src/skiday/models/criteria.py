"""User-chosen thresholds for a ski day check."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from skiday.utils.constants import (
    DEFAULT_MAX_DISTANCE_KM,
    DEFAULT_MAX_TEMP,
    DEFAULT_MAX_WIND_KMH,
    DEFAULT_MIN_FRESH_SNOW_CM,
    DEFAULT_MIN_SNOW_BOTTOM_CM,
    DEFAULT_MIN_SNOW_TOP_CM,
    DEFAULT_MIN_TEMP,
)


class Criteria(BaseModel):
    """Thresholds for one evaluation. Immutable once built."""

    max_distance_km: float = Field(
        default=DEFAULT_MAX_DISTANCE_KM, ge=0, description="Max distance city to resort"
    )
    min_temp: float = Field(
        default=DEFAULT_MIN_TEMP, description="Min acceptable temp at mid-mountain (C)"
    )
    max_temp: float = Field(
        default=DEFAULT_MAX_TEMP, description="Max acceptable temp at mid-mountain (C)"
    )
    max_wind_kmh: float = Field(
        default=DEFAULT_MAX_WIND_KMH, description="Max acceptable wind speed (km/h)"
    )
    min_snow_top_cm: float = Field(
        default=DEFAULT_MIN_SNOW_TOP_CM, description="Min snow depth at the top (cm)"
    )
    min_snow_bottom_cm: float = Field(
        default=DEFAULT_MIN_SNOW_BOTTOM_CM, description="Min snow depth at the bottom (cm)"
    )
    require_fresh_snow: bool = Field(
        default=False, description="Whether fresh snow is a hard requirement"
    )
    min_fresh_snow_cm: float = Field(
        default=DEFAULT_MIN_FRESH_SNOW_CM,
        description="Min fresh snow (cm), only applied when required",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_form(cls, **values) -> "Criteria":
        """Build criteria the way the form submits them.

        Unset or None values fall back to defaults. When fresh snow is not
        required, its minimum is zeroed.
        """
        cleaned = {k: v for k, v in values.items() if v is not None}
        if not cleaned.get("require_fresh_snow", False):
            cleaned["min_fresh_snow_cm"] = 0.0
        return cls(**cleaned)

    @model_validator(mode="after")
    def _check_non_negative(self) -> "Criteria":
        for name in ("min_snow_top_cm", "min_snow_bottom_cm", "min_fresh_snow_cm"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        return self
