"""
Great-circle distance helpers (Haversine)
"""

import math
from typing import Optional, Protocol

EARTH_RADIUS_MILES = 3959.0
EARTH_RADIUS_KM = 6371.0


class HasCoordinates(Protocol):
    latitude: float
    longitude: float


def _haversine(a: HasCoordinates, b: HasCoordinates, radius: float) -> float:
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return radius * c


def distance_miles(a: HasCoordinates, b: HasCoordinates) -> float:
    return _haversine(a, b, EARTH_RADIUS_MILES)


def distance_km(a: HasCoordinates, b: HasCoordinates) -> float:
    return _haversine(a, b, EARTH_RADIUS_KM)


def distance_between(
    a: Optional[HasCoordinates], b: Optional[HasCoordinates]
) -> Optional[float]:
    """
    Distance in miles, or None when either location is unknown.

    None means "unknown distance", never zero.
    """
    if a is None or b is None:
        return None
    return distance_miles(a, b)


def is_within_distance(
    viewer_location: Optional[HasCoordinates],
    target_location: Optional[HasCoordinates],
    max_distance_miles: Optional[float],
) -> bool:
    """
    Check whether target is within the viewer's max distance.

    No limit set, or a missing location on either side, never excludes.
    """
    if not max_distance_miles:
        return True

    if viewer_location is None or target_location is None:
        return True

    return distance_miles(viewer_location, target_location) <= max_distance_miles
