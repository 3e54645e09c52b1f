"""
Index lookups on a parsed track.
"""

from typing import List, Sequence

from app.shared.geo import planar_distance

from .models import GpxPoint, GpxWaypoint, WaypointIcon


def find_closest_point_index(
    points: Sequence[GpxPoint],
    target_lat: float,
    target_lon: float
) -> int:
    """
    Index of the trail point nearest to a coordinate.

    Uses planar distance on raw degrees, which is only good for ranking
    nearby points (snapping a waypoint or a map click onto the trail).
    Ties go to the lowest index. An empty sequence yields 0, so callers
    must guard against empty tracks.
    """
    closest_index = 0
    min_distance = float("inf")

    for index, point in enumerate(points):
        distance = planar_distance(point.lat, point.lon, target_lat, target_lon)
        if distance < min_distance:
            min_distance = distance
            closest_index = index

    return closest_index


def snap_waypoints(
    points: Sequence[GpxPoint],
    waypoints: Sequence[GpxWaypoint]
) -> List[int]:
    """Trail index for every waypoint, in waypoint order."""
    return [find_closest_point_index(points, w.lat, w.lon) for w in waypoints]


def fallback_waypoints(points: Sequence[GpxPoint]) -> List[GpxWaypoint]:
    """
    Trailhead, midpoint and summit markers synthesized from the trail.

    Meant for tracks recorded without any waypoints.
    """
    if not points:
        return []

    first = points[0]
    middle = points[len(points) // 2]
    last = points[-1]

    return [
        GpxWaypoint(
            lat=first.lat, lon=first.lon,
            name="Trailhead", description="Starting point",
            icon=WaypointIcon.START,
        ),
        GpxWaypoint(
            lat=middle.lat, lon=middle.lon,
            name="Midpoint", description="Halfway through the trail",
            icon=WaypointIcon.FOOD,
        ),
        GpxWaypoint(
            lat=last.lat, lon=last.lon,
            name="Summit", description="Finish line",
            icon=WaypointIcon.FINISH,
        ),
    ]
