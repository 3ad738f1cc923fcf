"""Read-only access to the resort catalog and the range filter."""

import logging

from skiday.models.resort import Coordinate, Resort
from skiday.utils.geo_utils import find_resorts_in_range
from skiday.utils.resort_loader import ResortLoader

logger = logging.getLogger(__name__)


class ResortService:
    """Service for looking up resorts from the static catalog."""

    def __init__(self, resorts: list[Resort]):
        self._resorts = tuple(resorts)

    @classmethod
    def from_catalog(cls, loader: ResortLoader | None = None) -> "ResortService":
        """Create a service over the bundled resorts.json."""
        return cls((loader or ResortLoader()).get_resorts())

    def get_all_resorts(self) -> list[Resort]:
        """Get all resorts in catalog order."""
        return list(self._resorts)

    def get_resort(self, resort_id: str) -> Resort | None:
        """Get a resort by ID."""
        for resort in self._resorts:
            if resort.resort_id == resort_id:
                return resort
        return None

    def get_nearby_resorts(
        self, origin: Coordinate, radius_km: float
    ) -> list[tuple[Resort, float]]:
        """
        Get resorts within radius_km of origin, sorted by distance.

        Returns:
            List of tuples containing (Resort, distance_km), nearest first
        """
        nearby = find_resorts_in_range(origin, radius_km, self._resorts)
        logger.info(
            f"Found {len(nearby)} of {len(self._resorts)} resorts within {radius_km:g} km"
        )
        return nearby
