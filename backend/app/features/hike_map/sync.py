"""
Map / elevation chart synchronization.

A single highlight index is the source of truth. Every trigger (polyline
click, chart hover or click, waypoint click) goes through TrackSync, which
clamps the index and publishes it on a HighlightState. The map and the
chart only subscribe to that state; they never reference each other.

Everything here runs on one event-handler call stack, so there is no
locking.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from app.features.gpx import (
    GpxPoint,
    GpxTrack,
    GpxWaypoint,
    cumulative_distances,
    fallback_waypoints,
    find_closest_point_index,
    snap_waypoints,
    track_bounds,
)
from app.features.gpx.schemas import ChartPayload, MapPayload
from app.shared.geo import format_coordinates

from .payloads import build_chart_payload, build_map_payload, distance_label, waypoint_label
from .surfaces import ChartSurface, MapSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HighlightEvent:
    """
    A change of the highlighted trail position.

    active=False means "keep the position, drop the hover emphasis"
    (the pointer left the chart).
    """
    index: int
    point: GpxPoint
    is_checkpoint: bool = False
    active: bool = True


HighlightListener = Callable[[HighlightEvent], None]


class HighlightState:
    """Single-writer holder of the highlighted index."""

    def __init__(self):
        self._current: Optional[HighlightEvent] = None
        self._listeners: List[HighlightListener] = []

    @property
    def current(self) -> Optional[HighlightEvent]:
        return self._current

    @property
    def index(self) -> Optional[int]:
        return self._current.index if self._current else None

    def subscribe(self, listener: HighlightListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: HighlightEvent) -> None:
        self._current = event
        for listener in list(self._listeners):
            listener(event)

    def reset(self) -> None:
        self._current = None


class TrackSync:
    """
    Keeps a map and an elevation chart on the same trail position.

    Waypoint -> index snapping is computed once per waypoint set. Loading a
    new track discards and redraws both surfaces completely.
    """

    def __init__(
        self,
        state: Optional[HighlightState] = None,
        use_fallback_waypoints: bool = False,
    ):
        self.state = state or HighlightState()
        self.use_fallback_waypoints = use_fallback_waypoints
        self.selected_coordinates: Optional[str] = None

        self._track = GpxTrack()
        self._distances: List[float] = []
        self._waypoints: List[GpxWaypoint] = []
        self._waypoint_indices: List[int] = []
        self._checkpoints: frozenset[int] = frozenset()

        self._maps: List[MapSurface] = []
        self._charts: List[ChartSurface] = []
        self._unsubscribers: List[Callable[[], None]] = []

    # -------------------------------------------------------------------------
    # Track lifecycle
    # -------------------------------------------------------------------------

    @property
    def track(self) -> GpxTrack:
        return self._track

    @property
    def point_count(self) -> int:
        return len(self._track.points)

    @property
    def waypoints(self) -> List[GpxWaypoint]:
        """Waypoints actually drawn (recorded ones or the fallback set)."""
        return list(self._waypoints)

    @property
    def waypoint_indices(self) -> List[int]:
        return list(self._waypoint_indices)

    @property
    def checkpoint_indices(self) -> frozenset[int]:
        return self._checkpoints

    def load_track(self, track: GpxTrack) -> None:
        """Replace the track, rebuild every overlay and highlight the start."""
        self._track = track
        self._distances = cumulative_distances(track.points)
        self.state.reset()
        self.selected_coordinates = None

        waypoints: Sequence[GpxWaypoint] = track.waypoints
        if not waypoints and self.use_fallback_waypoints:
            waypoints = fallback_waypoints(track.points)
        self.set_waypoints(waypoints)

    def set_waypoints(self, waypoints: Sequence[GpxWaypoint]) -> None:
        """Snap a new waypoint set onto the trail and redraw."""
        if self._track.is_empty:
            self._waypoints = []
            self._waypoint_indices = []
        else:
            self._waypoints = list(waypoints)
            self._waypoint_indices = snap_waypoints(self._track.points, self._waypoints)
        self._checkpoints = frozenset(self._waypoint_indices)

        self._redraw()

    @property
    def map_payload(self) -> MapPayload:
        return build_map_payload(self._track.points, self._waypoints, self._waypoint_indices)

    @property
    def chart_payload(self) -> ChartPayload:
        return build_chart_payload(
            self._track.points, self._distances, self._waypoints, self._waypoint_indices
        )

    # -------------------------------------------------------------------------
    # Surfaces
    # -------------------------------------------------------------------------

    def attach_map(self, surface: MapSurface) -> None:
        self._maps.append(surface)

        def on_highlight(event: HighlightEvent) -> None:
            if event.active:
                surface.move_marker(event.point.lat, event.point.lon)

        self._unsubscribers.append(self.state.subscribe(on_highlight))
        if not self._track.is_empty:
            self._draw_map(surface)
            self._replay(on_highlight)

    def attach_chart(self, surface: ChartSurface) -> None:
        self._charts.append(surface)

        def on_highlight(event: HighlightEvent) -> None:
            if event.active:
                surface.set_active_point(event.index, event.is_checkpoint)
            else:
                surface.clear_active()

        self._unsubscribers.append(self.state.subscribe(on_highlight))
        if not self._track.is_empty:
            surface.render_series(self.chart_payload)
            self._replay(on_highlight)

    def detach(self) -> None:
        """Unsubscribe and clear every attached surface."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        for surface in self._maps:
            surface.clear()
        for surface in self._charts:
            surface.clear()
        self._maps = []
        self._charts = []

    def _replay(self, listener: HighlightListener) -> None:
        if self.state.current is not None:
            listener(self.state.current)

    def _draw_map(self, surface: MapSurface) -> None:
        payload = self.map_payload
        surface.set_polyline(payload.latlngs)
        bounds = track_bounds(self._track.points)
        if bounds:
            surface.fit_bounds(bounds)
        for waypoint in payload.waypoints:
            surface.add_point(waypoint)

    def _redraw(self) -> None:
        for surface in self._maps:
            surface.clear()
        for surface in self._charts:
            surface.clear()

        if self._track.is_empty:
            self.state.reset()
            return

        for surface in self._maps:
            self._draw_map(surface)
        chart_payload = self.chart_payload
        for surface in self._charts:
            surface.render_series(chart_payload)

        self.highlight(self.state.index or 0)

    # -------------------------------------------------------------------------
    # Highlight
    # -------------------------------------------------------------------------

    def clamp(self, index: int) -> int:
        return min(max(index, 0), self.point_count - 1)

    def is_checkpoint(self, index: int) -> bool:
        return index in self._checkpoints

    def highlight(self, index: int) -> Optional[int]:
        """
        Highlight a trail position on every surface.

        Returns:
            The clamped index, or None for an empty track
        """
        if self._track.is_empty:
            return None

        clamped = self.clamp(index)
        self.state.publish(HighlightEvent(
            index=clamped,
            point=self._track.points[clamped],
            is_checkpoint=self.is_checkpoint(clamped),
        ))
        return clamped

    def select_coordinates(self, lat: float, lon: float) -> str:
        self.selected_coordinates = format_coordinates(lat, lon)
        return self.selected_coordinates

    def click_polyline(self, lat: float, lon: float) -> Optional[int]:
        """The trail itself was clicked on the map."""
        if self._track.is_empty:
            return None
        index = find_closest_point_index(self._track.points, lat, lon)
        self.select_coordinates(lat, lon)
        return self.highlight(index)

    def click_map(self, lat: float, lon: float) -> str:
        """Anywhere on the map: only the selected coordinates change."""
        return self.select_coordinates(lat, lon)

    def chart_hover(self, index: int) -> Optional[int]:
        return self.highlight(index)

    def chart_click(self, index: int) -> Optional[int]:
        clamped = self.highlight(index)
        if clamped is not None:
            point = self._track.points[clamped]
            self.select_coordinates(point.lat, point.lon)
        return clamped

    def chart_leave(self) -> None:
        """Drop the chart emphasis; the map marker stays where it is."""
        current = self.state.current
        if current is None:
            return
        self.state.publish(HighlightEvent(
            index=current.index,
            point=current.point,
            is_checkpoint=current.is_checkpoint,
            active=False,
        ))

    def click_waypoint(self, waypoint_number: int) -> Optional[int]:
        """A waypoint marker (map or chart overlay) was clicked."""
        if not 0 <= waypoint_number < len(self._waypoint_indices):
            logger.debug(f"Ignoring click on unknown waypoint {waypoint_number}")
            return None
        index = self._waypoint_indices[waypoint_number]
        clamped = self.highlight(index)
        if clamped is not None:
            point = self._track.points[clamped]
            self.select_coordinates(point.lat, point.lon)
        return clamped

    # -------------------------------------------------------------------------
    # Read-outs
    # -------------------------------------------------------------------------

    def distance_km_at(self, index: int) -> float:
        if not self._distances:
            return 0.0
        return self._distances[self.clamp(index)] / 1000

    def tooltip(self, index: int) -> tuple[str, List[str]]:
        """Chart tooltip title and lines for a trail position."""
        if self._track.is_empty:
            return "", []
        clamped = self.clamp(index)
        title = f"Distance {distance_label(self._distances[clamped])} km"
        elevation = self._track.points[clamped].elevation or 0.0
        labels = [f"Elevation {round(elevation)} m"]
        if self.is_checkpoint(clamped):
            waypoint = self._waypoints[self._waypoint_indices.index(clamped)]
            labels.append(waypoint_label(waypoint))
        return title, labels
