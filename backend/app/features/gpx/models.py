"""
GPX track model.

Immutable, index-addressable representation of a parsed trail recording.
The position of a point in GpxTrack.points is its identity: the map and the
elevation chart both address the trail by that index.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class WaypointIcon(str, Enum):
    """Semantic marker category for a waypoint."""
    START = "start"
    FINISH = "finish"
    WATER = "water"
    FOOD = "food"
    REST = "rest"
    PIN = "pin"


# Glyphs used by the marker overlays
ICON_GLYPHS: dict[WaypointIcon, str] = {
    WaypointIcon.START: "🥾",
    WaypointIcon.FINISH: "🎉",
    WaypointIcon.WATER: "💧",
    WaypointIcon.FOOD: "🥪",
    WaypointIcon.REST: "⛺️",
    WaypointIcon.PIN: "📍",
}


@dataclass(frozen=True)
class GpxPoint:
    """A single recorded trail position."""
    lat: float
    lon: float
    elevation: Optional[float] = None
    time: Optional[datetime] = None


@dataclass(frozen=True)
class GpxWaypoint:
    """A named point of interest along or near the trail."""
    lat: float
    lon: float
    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[WaypointIcon] = None

    @property
    def glyph(self) -> Optional[str]:
        return ICON_GLYPHS[self.icon] if self.icon else None


@dataclass(frozen=True)
class GpxTrack:
    """Ordered trail points plus the waypoints recorded with them."""
    points: Tuple[GpxPoint, ...] = ()
    waypoints: Tuple[GpxWaypoint, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class TrackStats:
    """
    Derived trail totals.

    ascent/descent are None when they cannot be reported (fewer than two
    points, or a total of exactly zero).
    """
    distance_km: float = 0.0
    ascent: Optional[float] = None
    descent: Optional[float] = None


@dataclass(frozen=True)
class TrackBounds:
    """South-west / north-east corners of a track."""
    south: float
    west: float
    north: float
    east: float

    def as_pairs(self) -> list[list[float]]:
        return [[self.south, self.west], [self.north, self.east]]


EMPTY_STATS = TrackStats()
