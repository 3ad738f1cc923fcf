"""Load the static resort catalog from JSON."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from skiday.models.resort import Resort

logger = logging.getLogger(__name__)

# Path to resort data JSON
DATA_FILE = Path(__file__).parent.parent / "data" / "resorts.json"


class ResortLoader:
    """Load and transform resort data from JSON file."""

    def __init__(self, data_file: Path = DATA_FILE):
        self.data_file = data_file
        self._data: dict[str, Any] | None = None

    def load(self) -> dict[str, Any]:
        """Load data from JSON file."""
        if self._data is None:
            if not self.data_file.exists():
                raise FileNotFoundError(f"Resort data file not found: {self.data_file}")

            with open(self.data_file, "r", encoding="utf-8") as f:
                self._data = json.load(f)

            logger.info(
                f"Loaded {len(self._data.get('resorts', []))} resorts from {self.data_file}"
            )

        return self._data

    def get_resorts(self) -> list[Resort]:
        """
        Get all resorts as Resort model objects, in catalog order.

        Entries that fail validation are skipped with a warning.
        """
        data = self.load()
        resorts = []

        for raw in data.get("resorts", []):
            try:
                resorts.append(self._transform_resort(raw))
            except (ValidationError, KeyError) as e:
                logger.warning(
                    f"Failed to transform resort {raw.get('id', 'unknown')}: {e}"
                )

        return resorts

    def _transform_resort(self, raw: dict[str, Any]) -> Resort:
        """Transform raw JSON resort data to Resort model."""
        return Resort(
            resort_id=raw["id"],
            name=raw["name"],
            lat=raw["lat"],
            lon=raw["lon"],
            elevation_top_m=raw["elevation_top_m"],
            elevation_bottom_m=raw["elevation_bottom_m"],
            timezone=raw.get("timezone"),
            snow_forecast_slug=raw.get("snow_forecast_slug"),
            snow_forecast_record_id=raw.get("snow_forecast_record_id"),
        )
