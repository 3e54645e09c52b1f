"""
Shared utilities (NOT business logic).

Usage:
    from app.shared import haversine, calculate_elevation_changes
    from app.shared.formatters import format_distance_km
"""
from .geo import (
    haversine,
    haversine_m,
    slope_distance_m,
    planar_distance,
    format_coordinates,
    EARTH_RADIUS_KM,
    EARTH_RADIUS_M,
)
from .elevation import (
    calculate_elevation_changes,
)
from .formatters import (
    format_distance_km,
    format_elevation,
    format_short_date,
    format_clock_time,
)
from .resources import (
    LazyResource,
    ResourceState,
    ResourceLoadError,
)

__all__ = [
    # geo
    "haversine",
    "haversine_m",
    "slope_distance_m",
    "planar_distance",
    "format_coordinates",
    "EARTH_RADIUS_KM",
    "EARTH_RADIUS_M",
    # elevation
    "calculate_elevation_changes",
    # formatters
    "format_distance_km",
    "format_elevation",
    "format_short_date",
    "format_clock_time",
    # resources
    "LazyResource",
    "ResourceState",
    "ResourceLoadError",
]
