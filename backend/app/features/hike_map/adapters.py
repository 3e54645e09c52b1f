"""
Surface adapters for folium (Leaflet) and plotly.

Each adapter records what the sync layer asks it to draw and turns that
into the library's objects when rendered. The library module itself is
injected, so it can be loaded lazily (see libraries.py).
"""

import html
from types import ModuleType
from typing import List, Optional, Sequence, Tuple

from app.config import settings
from app.features.gpx import TrackBounds
from app.features.gpx.schemas import ChartPayload, MapWaypoint

INK_COLOR = "#2C2D5E"


def hex_to_rgba(color: str, alpha: float) -> str:
    """'#F25C27', 0.15 -> 'rgba(242, 92, 39, 0.15)'."""
    value = color.lstrip("#")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {alpha})"


class FoliumMapSurface:
    """MapSurface drawn as a Leaflet map through folium."""

    def __init__(
        self,
        folium: ModuleType,
        tile_url: Optional[str] = None,
        attribution: Optional[str] = None,
        max_zoom: Optional[int] = None,
        track_color: Optional[str] = None,
        marker_color: Optional[str] = None,
    ):
        self._folium = folium
        self.tile_url = tile_url or settings.map_tile_url
        self.attribution = attribution or settings.map_tile_attribution
        self.max_zoom = max_zoom or settings.map_max_zoom
        self.track_color = track_color or settings.track_color
        self.marker_color = marker_color or settings.checkpoint_color
        self.clear()

    def clear(self) -> None:
        self.latlngs: List[List[float]] = []
        self.bounds: Optional[TrackBounds] = None
        self.waypoints: List[MapWaypoint] = []
        self.marker: Optional[Tuple[float, float]] = None

    def set_polyline(self, latlngs: Sequence[Sequence[float]]) -> None:
        self.latlngs = [list(latlng) for latlng in latlngs]

    def fit_bounds(self, bounds: TrackBounds) -> None:
        self.bounds = bounds

    def add_point(self, waypoint: MapWaypoint) -> None:
        self.waypoints.append(waypoint)

    def move_marker(self, lat: float, lon: float) -> None:
        self.marker = (lat, lon)

    def _waypoint_icon(self, waypoint: MapWaypoint):
        if not waypoint.glyph:
            return None
        badge = (
            '<div style="display:flex;align-items:center;justify-content:center;'
            'font-size:18px;height:32px;width:32px;border-radius:16px;background:#fff;'
            f'border:2px solid {self.marker_color};'
            f'box-shadow:0 6px 18px rgba(44,45,94,0.12);">{waypoint.glyph}</div>'
        )
        return self._folium.DivIcon(html=badge, icon_size=(32, 32), icon_anchor=(16, 16))

    @staticmethod
    def _popup_html(waypoint: MapWaypoint) -> str:
        label = f"<strong>{html.escape(waypoint.label)}</strong>"
        if waypoint.description:
            label += f"<br/>{html.escape(waypoint.description)}"
        return label

    def build(self):
        """Create the folium.Map for the recorded overlays."""
        folium = self._folium
        center = self.marker or (self.latlngs[0] if self.latlngs else (0.0, 0.0))

        fmap = folium.Map(
            location=list(center),
            zoom_start=13 if self.latlngs else 2,
            tiles=self.tile_url,
            attr=self.attribution,
            max_zoom=self.max_zoom,
            zoom_control=True,
        )

        if self.latlngs:
            folium.PolyLine(
                self.latlngs,
                color=self.track_color,
                weight=4,
                opacity=0.9,
            ).add_to(fmap)

        if self.bounds:
            fmap.fit_bounds(self.bounds.as_pairs(), padding=(24, 24))

        for waypoint in self.waypoints:
            folium.Marker(
                [waypoint.lat, waypoint.lon],
                icon=self._waypoint_icon(waypoint),
                popup=folium.Popup(self._popup_html(waypoint)),
                tooltip=waypoint.label,
            ).add_to(fmap)

        if self.marker:
            folium.CircleMarker(
                list(self.marker),
                radius=6,
                weight=2,
                fill=True,
                fill_opacity=0.8,
                color=self.marker_color,
                fill_color=self.marker_color,
            ).add_to(fmap)

        return fmap

    def render(self) -> str:
        """Embeddable HTML for the map."""
        return self.build()._repr_html_()


class PlotlyChartSurface:
    """ChartSurface drawn as a plotly elevation profile."""

    def __init__(
        self,
        graph_objects: ModuleType,
        line_color: Optional[str] = None,
        checkpoint_color: Optional[str] = None,
    ):
        self._go = graph_objects
        self.line_color = line_color or settings.track_color
        self.checkpoint_color = checkpoint_color or settings.checkpoint_color
        self.clear()

    def clear(self) -> None:
        self.payload: Optional[ChartPayload] = None
        self.active: Optional[Tuple[int, bool]] = None

    def render_series(self, payload: ChartPayload) -> None:
        self.payload = payload
        self.active = None

    def set_active_point(self, index: int, is_checkpoint: bool) -> None:
        self.active = (index, is_checkpoint)

    def clear_active(self) -> None:
        self.active = None

    def build(self):
        """Create the plotly Figure for the recorded series."""
        go = self._go
        fig = go.Figure()
        payload = self.payload or ChartPayload()
        x = payload.distances_km

        fig.add_trace(go.Scatter(
            x=x,
            y=payload.elevations,
            name="Elevation (m)",
            mode="lines",
            line=dict(color=self.line_color, width=2, shape="spline", smoothing=0.35),
            fill="tozeroy",
            fillcolor=hex_to_rgba(self.line_color, 0.15),
            customdata=payload.labels,
            hovertemplate="Distance %{customdata} km<br>Elevation %{y:.0f} m<extra></extra>",
        ))

        fig.add_trace(go.Scatter(
            x=x,
            y=payload.checkpoints,
            name="Checkpoints",
            mode="markers",
            marker=dict(
                size=12,
                color=self.checkpoint_color,
                line=dict(color=INK_COLOR, width=1),
            ),
            hovertext=payload.checkpoint_labels,
            hoverinfo="text",
        ))

        if self.active and x:
            index, is_checkpoint = self.active
            fig.add_trace(go.Scatter(
                x=[x[index]],
                y=[payload.elevations[index]],
                name="Selected",
                mode="markers",
                marker=dict(
                    size=16 if is_checkpoint else 10,
                    color=self.checkpoint_color if is_checkpoint else self.line_color,
                    line=dict(color=INK_COLOR, width=2),
                ),
                hoverinfo="skip",
            ))
            fig.add_vline(x=x[index], line_width=1, line_color=hex_to_rgba(self.checkpoint_color, 0.6))

        fig.update_layout(
            showlegend=False,
            hovermode="x",
            margin=dict(l=48, r=16, t=16, b=48),
            xaxis=dict(title="Distance (km)", color=INK_COLOR),
            yaxis=dict(title="Elevation (m)", color=INK_COLOR),
        )
        return fig

    def render(self) -> str:
        """Embeddable HTML for the chart."""
        return self.build().to_html(full_html=False, include_plotlyjs="cdn")
