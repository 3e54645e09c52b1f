"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.
"""
import math
from typing import Optional

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_M = EARTH_RADIUS_KM * 1000


def haversine(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    return haversine_m(lat1, lon1, lat2, lon2) / 1000


def haversine_m(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """Great-circle surface distance in meters."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def slope_distance_m(
    lat1: float, lon1: float, ele1: Optional[float],
    lat2: float, lon2: float, ele2: Optional[float]
) -> float:
    """
    Distance between two trail points including the climb between them.

    Combines the haversine surface distance with the elevation delta
    (Pythagoras). Unknown elevation on either side counts as a flat step.

    Returns:
        Distance in meters
    """
    surface = haversine_m(lat1, lon1, lat2, lon2)
    if ele1 is None or ele2 is None:
        return surface
    delta = ele2 - ele1
    return math.sqrt(surface * surface + delta * delta)


def planar_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Euclidean distance on raw degrees.

    Only meaningful for ranking points that are already close together;
    do not use it to compare long-range distances.
    """
    d_lat = lat1 - lat2
    d_lon = lon1 - lon2
    return math.sqrt(d_lat * d_lat + d_lon * d_lon)


def format_coordinates(lat: float, lon: float) -> str:
    """Format a coordinate pair the way it is copied to the clipboard."""
    return f"{lat:.6f}, {lon:.6f}"
