"""
GPX-related schemas.

Pydantic models for the hike map API.
"""

from datetime import datetime
from pydantic import BaseModel
from typing import List, Optional

from app.shared.formatters import format_distance_km, format_elevation

from .models import GpxPoint, GpxWaypoint, TrackStats, WaypointIcon


class GPXPoint(BaseModel):
    """Single point in GPX track."""

    lat: float
    lon: float
    elevation: Optional[float] = None
    time: Optional[datetime] = None

    @classmethod
    def from_point(cls, point: GpxPoint) -> "GPXPoint":
        return cls(lat=point.lat, lon=point.lon, elevation=point.elevation, time=point.time)


class GPXWaypoint(BaseModel):
    """Waypoint as recorded in the GPX file."""

    lat: float
    lon: float
    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[WaypointIcon] = None

    @classmethod
    def from_waypoint(cls, waypoint: GpxWaypoint) -> "GPXWaypoint":
        return cls(
            lat=waypoint.lat,
            lon=waypoint.lon,
            name=waypoint.name,
            description=waypoint.description,
            icon=waypoint.icon,
        )


class TrackStatsSchema(BaseModel):
    """Trail totals plus their display strings."""

    distance_km: float = 0.0
    ascent_m: Optional[float] = None
    descent_m: Optional[float] = None

    distance_label: str
    ascent_label: str
    descent_label: str

    @classmethod
    def from_stats(cls, stats: TrackStats) -> "TrackStatsSchema":
        return cls(
            distance_km=stats.distance_km,
            ascent_m=stats.ascent,
            descent_m=stats.descent,
            distance_label=format_distance_km(stats.distance_km),
            ascent_label=format_elevation(stats.ascent),
            descent_label=format_elevation(stats.descent),
        )


class MapWaypoint(BaseModel):
    """Waypoint marker as drawn on the map, snapped to a trail index."""

    lat: float
    lon: float
    index: int
    label: str
    description: Optional[str] = None
    icon: Optional[WaypointIcon] = None
    glyph: Optional[str] = None


class MapPayload(BaseModel):
    """Everything the map collaborator needs."""

    latlngs: List[List[float]] = []
    bounds: Optional[List[List[float]]] = None
    waypoints: List[MapWaypoint] = []


class ChartPayload(BaseModel):
    """Everything the elevation chart collaborator needs, aligned by index."""

    labels: List[str] = []
    distances_km: List[float] = []
    elevations: List[float] = []
    checkpoints: List[Optional[float]] = []
    checkpoint_labels: List[Optional[str]] = []
    checkpoint_indices: List[int] = []


class HikeTrackResponse(BaseModel):
    """Parsed track with derived data for both views."""

    source: str
    points: List[GPXPoint] = []
    waypoints: List[GPXWaypoint] = []
    stats: TrackStatsSchema
    map: MapPayload
    chart: ChartPayload


class HighlightResponse(BaseModel):
    """The trail position selected by an index or a map click."""

    index: int
    lat: float
    lon: float
    elevation: Optional[float] = None
    distance_km: float
    is_checkpoint: bool = False
    coordinates: str
    tooltip_title: str
    tooltip_labels: List[str] = []
