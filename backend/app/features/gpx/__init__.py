"""
GPX track engine.

Usage:
    from app.features.gpx import parse_gpx, compute_stats, find_closest_point_index
    from app.features.gpx import GpxLoader  # For fetching a GPX source

Components:
- GpxPoint, GpxWaypoint, GpxTrack, TrackStats: immutable track model
- parse_gpx: GPX XML -> GpxTrack (lenient per point, strict per document)
- compute_stats / cumulative_distances: slope-aware distance, ascent, descent
- find_closest_point_index: snap a coordinate onto the trail
- GpxLoader: fetch a GPX document from a URL or the content directory
"""

from .models import (
    GpxPoint,
    GpxWaypoint,
    GpxTrack,
    TrackStats,
    TrackBounds,
    WaypointIcon,
    ICON_GLYPHS,
    EMPTY_STATS,
)
from .parser import (
    parse_gpx,
    resolve_waypoint_icon,
    TrackError,
    TrackFetchError,
    TrackParseError,
)
from .stats import compute_stats, cumulative_distances, track_bounds
from .lookup import find_closest_point_index, snap_waypoints, fallback_waypoints
from .loader import GpxLoader

__all__ = [
    # Model
    "GpxPoint",
    "GpxWaypoint",
    "GpxTrack",
    "TrackStats",
    "TrackBounds",
    "WaypointIcon",
    "ICON_GLYPHS",
    "EMPTY_STATS",
    # Parsing
    "parse_gpx",
    "resolve_waypoint_icon",
    "TrackError",
    "TrackFetchError",
    "TrackParseError",
    # Geometry
    "compute_stats",
    "cumulative_distances",
    "track_bounds",
    "find_closest_point_index",
    "snap_waypoints",
    "fallback_waypoints",
    # Loading
    "GpxLoader",
]
