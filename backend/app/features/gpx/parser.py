"""
GPX Parser

Turns GPX XML text into a GpxTrack.

Points and waypoints are collected from anywhere in the document, in
document order, regardless of namespace. A point or waypoint without a
usable lat/lon is dropped on its own; the rest of the document is still
read. Malformed XML fails the whole parse.
"""

import logging
import math
import xml.etree.ElementTree as ET
from typing import Iterator, Optional, Union

from gpxpy.gpx import GPXException
from gpxpy.gpxfield import parse_time

from .models import GpxPoint, GpxTrack, GpxWaypoint, WaypointIcon

logger = logging.getLogger(__name__)


class TrackError(Exception):
    """Base error for loading a GPX track."""
    pass


class TrackFetchError(TrackError):
    """The GPX resource could not be retrieved."""
    pass


class TrackParseError(TrackError):
    """The GPX document is not well-formed XML."""
    pass


# Substring hints -> marker category, checked in this order
ICON_HINTS: list[tuple[tuple[str, ...], WaypointIcon]] = [
    (("start", "trailhead"), WaypointIcon.START),
    (("summit", "finish", "peak"), WaypointIcon.FINISH),
    (("water", "spring"), WaypointIcon.WATER),
    (("food", "meal", "snack"), WaypointIcon.FOOD),
    (("camp", "rest"), WaypointIcon.REST),
]


def resolve_waypoint_icon(hint: Optional[str]) -> Optional[WaypointIcon]:
    """
    Best-effort marker category for a symbol/name/description hint.

    Returns None when there is no hint at all, PIN when nothing matches.
    """
    if not hint:
        return None

    lower = hint.lower()
    for needles, icon in ICON_HINTS:
        if any(needle in lower for needle in needles):
            return icon
    return WaypointIcon.PIN


def _local_name(tag) -> str:
    # Comments and processing instructions have non-string tags
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _iter_elements(root: ET.Element, name: str) -> Iterator[ET.Element]:
    for element in root.iter():
        if _local_name(element.tag) == name:
            yield element


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    """Text of the first descendant called `name`, stripped, None if empty."""
    for child in _iter_elements(element, name):
        if child is element:
            continue
        text = (child.text or "").strip()
        return text or None
    return None


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_coordinates(element: ET.Element) -> Optional[tuple[float, float]]:
    lat = _parse_float(element.get("lat"))
    lon = _parse_float(element.get("lon"))
    if lat is None or lon is None:
        return None
    return lat, lon


def _parse_point(element: ET.Element) -> Optional[GpxPoint]:
    coordinates = _parse_coordinates(element)
    if coordinates is None:
        return None

    time_text = _child_text(element, "time")
    try:
        time = parse_time(time_text) if time_text else None
    except GPXException:
        time = None

    return GpxPoint(
        lat=coordinates[0],
        lon=coordinates[1],
        elevation=_parse_float(_child_text(element, "ele")),
        time=time,
    )


def _parse_waypoint(element: ET.Element) -> Optional[GpxWaypoint]:
    coordinates = _parse_coordinates(element)
    if coordinates is None:
        return None

    name = _child_text(element, "name")
    description = _child_text(element, "desc")
    symbol = _child_text(element, "sym")

    return GpxWaypoint(
        lat=coordinates[0],
        lon=coordinates[1],
        name=name,
        description=description,
        icon=resolve_waypoint_icon(symbol or name or description),
    )


def parse_gpx(content: Union[str, bytes]) -> GpxTrack:
    """
    Parse GPX content into a track.

    Args:
        content: GPX document as text or raw bytes

    Returns:
        GpxTrack (possibly with no points, which is not an error)

    Raises:
        TrackParseError: If the document is not well-formed XML
    """
    if isinstance(content, str):
        content = content.lstrip("\ufeff")  # strip BOM if present

    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        logger.error(f"Failed to parse GPX: {e}")
        raise TrackParseError("GPX file is malformed") from e

    trkpts = list(_iter_elements(root, "trkpt"))
    points = tuple(p for p in map(_parse_point, trkpts) if p is not None)

    wpts = list(_iter_elements(root, "wpt"))
    waypoints = tuple(w for w in map(_parse_waypoint, wpts) if w is not None)

    dropped = (len(trkpts) - len(points)) + (len(wpts) - len(waypoints))
    if dropped:
        logger.debug(f"Dropped {dropped} GPX elements without usable coordinates")

    logger.info(f"Parsed GPX: {len(points)} points, {len(waypoints)} waypoints")
    return GpxTrack(points=points, waypoints=waypoints)
