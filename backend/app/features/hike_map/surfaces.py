"""
Visual surface contracts.

The sync layer talks to the map and the elevation chart only through these
narrow interfaces, never through a drawing library's own API.
"""

from typing import Protocol, Sequence

from app.features.gpx import TrackBounds
from app.features.gpx.schemas import ChartPayload, MapWaypoint


class MapSurface(Protocol):
    """A geographic map that can draw one trail."""

    def clear(self) -> None:
        """Drop every overlay drawn for the previous track."""
        ...

    def set_polyline(self, latlngs: Sequence[Sequence[float]]) -> None:
        ...

    def fit_bounds(self, bounds: TrackBounds) -> None:
        ...

    def add_point(self, waypoint: MapWaypoint) -> None:
        """Draw a waypoint marker."""
        ...

    def move_marker(self, lat: float, lon: float) -> None:
        """Move the highlight marker."""
        ...


class ChartSurface(Protocol):
    """An elevation-vs-distance chart addressed by point index."""

    def clear(self) -> None:
        ...

    def render_series(self, payload: ChartPayload) -> None:
        ...

    def set_active_point(self, index: int, is_checkpoint: bool) -> None:
        """Activate the elevation point, and the checkpoint point if there is one."""
        ...

    def clear_active(self) -> None:
        ...
