"""Geographic utility functions for distance calculations and range filtering."""

import math
from typing import Iterable

from skiday.models.resort import Coordinate, Resort
from skiday.utils.constants import EARTH_RADIUS_KM


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Uses the haversine formula to calculate the shortest distance over
    the earth's surface between two points.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_between(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in km between two coordinates."""
    return haversine_distance(a.lat, a.lon, b.lat, b.lon)


def find_resorts_in_range(
    origin: Coordinate, radius_km: float, resorts: Iterable[Resort]
) -> list[tuple[Resort, float]]:
    """
    Select resorts within a radius of the origin, nearest first.

    Args:
        origin: Starting point
        radius_km: Maximum distance in kilometers (inclusive)
        resorts: Resort catalog

    Returns:
        List of (Resort, distance_km) tuples sorted by distance. Ties keep
        catalog order.
    """
    in_range = []
    for resort in resorts:
        distance_km = distance_between(origin, resort.coordinate)
        if distance_km <= radius_km:
            in_range.append((resort, distance_km))

    # sort is stable, so equal distances keep catalog order
    in_range.sort(key=lambda item: item[1])
    return in_range
