"""
Hike map service.

HikeMapController is one hike map view: it loads a GPX source, keeps the
resulting track and stats, and drives the attached map and chart through
TrackSync.
"""

import html
import logging
from typing import Optional

from app.config import settings
from app.features.gpx import (
    GpxLoader,
    GpxTrack,
    TrackError,
    TrackStats,
    compute_stats,
)
from app.shared.formatters import format_distance_km, format_elevation

from .adapters import FoliumMapSurface, PlotlyChartSurface
from .libraries import LibraryRegistry
from .sync import TrackSync

logger = logging.getLogger(__name__)

GENERIC_TRACK_ERROR = "Unable to display GPX track"


class HikeMapController:
    """
    State of one hike map view.

    A load is never aborted. Once close() has been called, a load that
    finishes late is simply not applied.
    """

    def __init__(
        self,
        loader: Optional[GpxLoader] = None,
        sync: Optional[TrackSync] = None,
    ):
        self.loader = loader or GpxLoader()
        self.sync = sync or TrackSync(use_fallback_waypoints=settings.use_fallback_waypoints)

        self.loading = False
        self.error: Optional[str] = None
        self.track: Optional[GpxTrack] = None
        self.stats: Optional[TrackStats] = None
        self._cancelled = False

    @property
    def closed(self) -> bool:
        return self._cancelled

    async def load(self, source: str) -> bool:
        """
        Fetch, parse and display a GPX source.

        Returns:
            True if a track was applied (an empty track counts), False on
            error or if the view was closed meanwhile
        """
        if self._cancelled:
            return False

        self.loading = True
        self.error = None

        try:
            track = await self.loader.load(source)
        except TrackError as e:
            if self._cancelled:
                return False
            logger.warning(f"GPX track {source} unavailable: {e}")
            self.error = GENERIC_TRACK_ERROR
            self.track = None
            self.stats = None
            self.sync.load_track(GpxTrack())
            return False
        finally:
            if not self._cancelled:
                self.loading = False

        if self._cancelled:
            logger.debug(f"Discarding late GPX result for {source}")
            return False

        self.apply(track)
        return True

    def apply(self, track: GpxTrack) -> None:
        """Show an already parsed track."""
        self.track = track
        self.stats = compute_stats(track.points)
        self.sync.load_track(track)

    def close(self) -> None:
        """Tear the view down; results of loads still in flight are dropped."""
        self._cancelled = True
        self.sync.detach()


def _stats_html(stats: Optional[TrackStats]) -> str:
    if stats is None:
        return ""
    items = [
        ("Distance", format_distance_km(stats.distance_km)),
        ("Ascent", format_elevation(stats.ascent)),
        ("Descent", format_elevation(stats.descent)),
    ]
    cells = "".join(f"<div><dt>{label}</dt><dd>{value}</dd></div>" for label, value in items)
    return f'<dl class="hike-stats">{cells}</dl>'


async def render_hike_view(
    source: str,
    libraries: LibraryRegistry,
    index: int = 0,
    loader: Optional[GpxLoader] = None,
) -> str:
    """
    Render a GPX source as an HTML fragment: stats, map and elevation chart,
    both views highlighting the same trail index.

    Raises:
        TrackError: If the source cannot be loaded or parsed
        ResourceLoadError: If a rendering library cannot be imported
    """
    folium = await libraries.map_library()
    graph_objects = await libraries.chart_library()

    map_surface = FoliumMapSurface(folium)
    chart_surface = PlotlyChartSurface(graph_objects)

    controller = HikeMapController(loader=loader)
    controller.sync.attach_map(map_surface)
    controller.sync.attach_chart(chart_surface)

    try:
        track = await controller.loader.load(source)
        controller.apply(track)

        if track.is_empty:
            body = '<p class="hike-empty">No route to display.</p>'
        else:
            controller.sync.highlight(index)
            body = (
                f'<div class="hike-map">{map_surface.render()}</div>'
                f'<div class="hike-chart">{chart_surface.render()}</div>'
            )
            coordinates = controller.sync.select_coordinates(
                map_surface.marker[0], map_surface.marker[1]
            )
            body += f'<p class="hike-coordinates">{html.escape(coordinates)}</p>'

        return _stats_html(controller.stats) + body
    finally:
        controller.close()
