"""
Data handed to the map and chart collaborators.

Both payloads are aligned with GpxTrack.points: position i in every list
describes trail point i.
"""

from typing import List, Optional, Sequence

from app.features.gpx import GpxPoint, GpxWaypoint, track_bounds
from app.features.gpx.schemas import ChartPayload, MapPayload, MapWaypoint

CHECKPOINT_FALLBACK_NAME = "Checkpoint"


def waypoint_label(waypoint: GpxWaypoint) -> str:
    """'Summit: Finish line', 'Summit' or 'Checkpoint'."""
    name = waypoint.name or CHECKPOINT_FALLBACK_NAME
    if waypoint.description:
        return f"{name}: {waypoint.description}"
    return name


def distance_label(distance_m: float) -> str:
    """Chart axis label in kilometers, two decimals."""
    return f"{distance_m / 1000:.2f}"


def build_map_payload(
    points: Sequence[GpxPoint],
    waypoints: Sequence[GpxWaypoint],
    waypoint_indices: Sequence[int],
) -> MapPayload:
    bounds = track_bounds(points)
    return MapPayload(
        latlngs=[[p.lat, p.lon] for p in points],
        bounds=bounds.as_pairs() if bounds else None,
        waypoints=[
            MapWaypoint(
                lat=w.lat,
                lon=w.lon,
                index=index,
                label=w.name or CHECKPOINT_FALLBACK_NAME,
                description=w.description,
                icon=w.icon,
                glyph=w.glyph,
            )
            for w, index in zip(waypoints, waypoint_indices)
        ],
    )


def build_chart_payload(
    points: Sequence[GpxPoint],
    distances_m: Sequence[float],
    waypoints: Sequence[GpxWaypoint],
    waypoint_indices: Sequence[int],
) -> ChartPayload:
    # Unknown elevation is charted at 0
    elevations = [p.elevation or 0.0 for p in points]

    checkpoints: List[Optional[float]] = [None] * len(points)
    checkpoint_labels: List[Optional[str]] = [None] * len(points)
    # First waypoint snapped to an index owns its label
    for waypoint, index in reversed(list(zip(waypoints, waypoint_indices))):
        checkpoints[index] = elevations[index]
        checkpoint_labels[index] = waypoint_label(waypoint)

    return ChartPayload(
        labels=[distance_label(d) for d in distances_m],
        distances_km=[d / 1000 for d in distances_m],
        elevations=elevations,
        checkpoints=checkpoints,
        checkpoint_labels=checkpoint_labels,
        checkpoint_indices=sorted(set(waypoint_indices)),
    )
