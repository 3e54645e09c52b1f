"""
Track statistics.

Distance follows the slope of the trail: every step is the haversine
surface distance combined with its elevation delta. Ascent and descent
only count steps whose both ends have a known elevation.
"""

from typing import List, Optional, Sequence

from app.shared.elevation import calculate_elevation_changes
from app.shared.geo import slope_distance_m

from .models import EMPTY_STATS, GpxPoint, TrackBounds, TrackStats


def cumulative_distances(points: Sequence[GpxPoint]) -> List[float]:
    """
    Running trail distance at every point.

    Args:
        points: Ordered trail points

    Returns:
        Distances in meters, one per point, starting at 0
    """
    if not points:
        return []

    distances = [0.0]
    for i in range(1, len(points)):
        previous = points[i - 1]
        current = points[i]
        step = slope_distance_m(
            previous.lat, previous.lon, previous.elevation,
            current.lat, current.lon, current.elevation,
        )
        distances.append(distances[-1] + step)

    return distances


def _positive_or_none(value: float) -> Optional[float]:
    # Zero means "nothing to report": no data and a flat route look the same
    return value if value > 0 else None


def compute_stats(points: Sequence[GpxPoint]) -> TrackStats:
    """
    Compute distance, ascent and descent for a trail.

    Args:
        points: Ordered trail points

    Returns:
        TrackStats; degenerate (0 km, no ascent/descent) below two points
    """
    if len(points) < 2:
        return EMPTY_STATS

    distances = cumulative_distances(points)
    ascent, descent = calculate_elevation_changes([p.elevation for p in points])

    return TrackStats(
        distance_km=distances[-1] / 1000,
        ascent=_positive_or_none(ascent),
        descent=_positive_or_none(descent),
    )


def track_bounds(points: Sequence[GpxPoint]) -> Optional[TrackBounds]:
    """Bounding box of the trail, None for an empty track."""
    if not points:
        return None

    lats = [p.lat for p in points]
    lons = [p.lon for p in points]
    return TrackBounds(
        south=min(lats),
        west=min(lons),
        north=max(lats),
        east=max(lons),
    )
