"""
Hike map: a trail map and its elevation chart kept in lock-step.

Usage:
    from app.features.hike_map import TrackSync, HikeMapController
    from app.features.hike_map import render_hike_view

Components:
- HighlightState: observable highlight index (single writer, many readers)
- TrackSync: index clamping, checkpoint snapping, view triggers
- MapSurface, ChartSurface: what a drawing backend must provide
- FoliumMapSurface, PlotlyChartSurface: folium / plotly backends
- LibraryRegistry: load-once cache for the drawing libraries
- HikeMapController: one view's load/error/track/stats state
"""

from .sync import HighlightEvent, HighlightState, TrackSync
from .surfaces import MapSurface, ChartSurface
from .adapters import FoliumMapSurface, PlotlyChartSurface
from .libraries import LibraryRegistry
from .payloads import build_map_payload, build_chart_payload, waypoint_label
from .service import HikeMapController, render_hike_view, GENERIC_TRACK_ERROR

__all__ = [
    # Sync
    "HighlightEvent",
    "HighlightState",
    "TrackSync",
    # Surfaces
    "MapSurface",
    "ChartSurface",
    "FoliumMapSurface",
    "PlotlyChartSurface",
    "LibraryRegistry",
    # Payloads
    "build_map_payload",
    "build_chart_payload",
    "waypoint_label",
    # Service
    "HikeMapController",
    "render_hike_view",
    "GENERIC_TRACK_ERROR",
]
