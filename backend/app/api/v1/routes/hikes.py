"""
Hike Map Routes

Track data for the hike map and its elevation chart.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from app.config import settings
from app.features.gpx import GpxLoader, TrackError, TrackParseError, compute_stats
from app.features.gpx.schemas import (
    GPXPoint,
    GPXWaypoint,
    HighlightResponse,
    HikeTrackResponse,
    TrackStatsSchema,
)
from app.features.hike_map import (
    GENERIC_TRACK_ERROR,
    LibraryRegistry,
    TrackSync,
    render_hike_view,
)
from app.shared.resources import ResourceLoadError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_loader() -> GpxLoader:
    """Dependency for the GPX loader."""
    return GpxLoader()


def get_libraries(request: Request) -> LibraryRegistry:
    """Dependency for the app-wide rendering library cache."""
    return request.app.state.libraries


def _track_error(e: TrackError) -> HTTPException:
    # Fetch and parse failures look the same to the user
    status_code = 422 if isinstance(e, TrackParseError) else 502
    return HTTPException(status_code=status_code, detail=GENERIC_TRACK_ERROR)


async def _load_sync(source: str, loader: GpxLoader) -> TrackSync:
    try:
        track = await loader.load(source)
    except TrackError as e:
        logger.warning(f"GPX track {source} unavailable: {e}")
        raise _track_error(e)

    sync = TrackSync(use_fallback_waypoints=settings.use_fallback_waypoints)
    sync.load_track(track)
    return sync


@router.get("/track", response_model=HikeTrackResponse)
async def get_track(
    gpx: str = Query(..., min_length=1, description="GPX URL or content path"),
    loader: GpxLoader = Depends(get_loader),
):
    """
    Parse a GPX source.

    Returns points, waypoints, stats and the payloads for the map and
    elevation chart. A track without points is returned empty, not as an
    error.
    """
    sync = await _load_sync(gpx, loader)
    track = sync.track

    return HikeTrackResponse(
        source=gpx,
        points=[GPXPoint.from_point(p) for p in track.points],
        waypoints=[GPXWaypoint.from_waypoint(w) for w in track.waypoints],
        stats=TrackStatsSchema.from_stats(compute_stats(track.points)),
        map=sync.map_payload,
        chart=sync.chart_payload,
    )


@router.get("/highlight", response_model=HighlightResponse)
async def get_highlight(
    gpx: str = Query(..., min_length=1),
    index: Optional[int] = Query(default=None, description="Chart index"),
    lat: Optional[float] = Query(default=None, description="Map click latitude"),
    lon: Optional[float] = Query(default=None, description="Map click longitude"),
    loader: GpxLoader = Depends(get_loader),
):
    """
    Resolve a chart index or a click on the trail to a trail position.

    Indices out of range are clamped to the track.
    """
    if (lat is None) != (lon is None):
        raise HTTPException(status_code=400, detail="lat and lon must be given together")
    if index is None and lat is None:
        raise HTTPException(status_code=400, detail="Either index or lat/lon is required")

    sync = await _load_sync(gpx, loader)
    if sync.point_count == 0:
        raise HTTPException(status_code=404, detail="No route to display")

    if lat is not None:
        resolved = sync.click_polyline(lat, lon)
    else:
        resolved = sync.chart_click(index)

    point = sync.track.points[resolved]
    title, labels = sync.tooltip(resolved)

    return HighlightResponse(
        index=resolved,
        lat=point.lat,
        lon=point.lon,
        elevation=point.elevation,
        distance_km=sync.distance_km_at(resolved),
        is_checkpoint=sync.is_checkpoint(resolved),
        coordinates=sync.selected_coordinates,
        tooltip_title=title,
        tooltip_labels=labels,
    )


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>Hike map</title></head>
<body>{body}</body>
</html>"""


@router.get("/view", response_class=HTMLResponse)
async def view_hike(
    gpx: str = Query(..., min_length=1),
    index: int = Query(default=0),
    loader: GpxLoader = Depends(get_loader),
    libraries: LibraryRegistry = Depends(get_libraries),
):
    """Render the map and elevation chart, both on the same trail index."""
    try:
        body = await render_hike_view(gpx, libraries, index=index, loader=loader)
    except TrackError as e:
        logger.warning(f"GPX track {gpx} unavailable: {e}")
        raise _track_error(e)
    except ResourceLoadError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return HTMLResponse(PAGE_TEMPLATE.format(body=body))
