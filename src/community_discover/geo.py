"""Great-circle distance and time helpers shared by filtering and scoring."""

import math
from datetime import datetime, timezone

from .config import EARTH_RADIUS_KM


def deg2rad(deg: float) -> float:
    return deg * (math.pi / 180)


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine distance between two points in kilometers.

    Args:
        lat1, lon1: First point in decimal degrees
        lat2, lon2: Second point in decimal degrees

    Returns:
        Distance along the Earth's surface in km
    """
    d_lat = deg2rad(lat2 - lat1)
    d_lon = deg2rad(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2 +
        math.cos(deg2rad(lat1)) * math.cos(deg2rad(lat2)) *
        math.sin(d_lon / 2) ** 2
    )
    a = min(a, 1.0)  # rounding near antipodes
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def as_utc(value: datetime) -> datetime:
    # Naive timestamps are assumed to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def hours_between(earlier: datetime, later: datetime) -> float:
    return (as_utc(later) - as_utc(earlier)).total_seconds() / 3600.0
