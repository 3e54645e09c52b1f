"""
Tests for track statistics and index lookups.
"""

import pytest

from app.features.gpx import (
    EMPTY_STATS,
    GpxPoint,
    GpxWaypoint,
    WaypointIcon,
    compute_stats,
    cumulative_distances,
    fallback_waypoints,
    find_closest_point_index,
    snap_waypoints,
    track_bounds,
)
from app.shared.geo import haversine_m


def point(lat, lon, ele=None):
    return GpxPoint(lat=lat, lon=lon, elevation=ele)


# =============================================================================
# Test Stats
# =============================================================================

class TestComputeStats:
    """Tests for compute_stats function."""

    def test_right_angle_profile(self):
        """Surface step and climb combine by Pythagoras."""
        points = [
            point(43.0, 76.0, 1000.0),
            point(43.001, 76.0, 1100.0),
            point(43.001, 76.0, 1050.0),
        ]
        surface = haversine_m(43.0, 76.0, 43.001, 76.0)
        expected_m = (surface ** 2 + 100.0 ** 2) ** 0.5 + 50.0

        stats = compute_stats(points)

        assert stats.distance_km == pytest.approx(expected_m / 1000, rel=1e-3)
        assert stats.ascent == pytest.approx(100.0)
        assert stats.descent == pytest.approx(50.0)

    def test_constant_elevation_reports_nothing(self):
        points = [point(43.0, 76.0, 900.0), point(43.01, 76.0, 900.0)]

        stats = compute_stats(points)

        assert stats.distance_km > 1.0
        assert stats.ascent is None
        assert stats.descent is None

    def test_only_climbing(self):
        stats = compute_stats([point(43.0, 76.0, 100.0), point(43.0, 76.0, 150.0)])

        assert stats.ascent == pytest.approx(50.0)
        assert stats.descent is None

    def test_unknown_elevations(self):
        points = [point(43.0, 76.0), point(43.001, 76.0), point(43.002, 76.0, 1000.0)]

        stats = compute_stats(points)

        assert stats.distance_km == pytest.approx(
            haversine_m(43.0, 76.0, 43.002, 76.0) / 1000, rel=1e-6
        )
        assert stats.ascent is None
        assert stats.descent is None

    @pytest.mark.parametrize("points", [[], [GpxPoint(lat=43.0, lon=76.0, elevation=1000.0)]])
    def test_degenerate_tracks(self, points):
        assert compute_stats(points) == EMPTY_STATS
        assert EMPTY_STATS.distance_km == 0.0


class TestCumulativeDistances:
    """Tests for cumulative_distances function."""

    def test_starts_at_zero_and_grows(self):
        points = [point(43.0, 76.0), point(43.001, 76.0), point(43.002, 76.0)]

        distances = cumulative_distances(points)

        assert len(distances) == 3
        assert distances[0] == 0.0
        assert distances[0] < distances[1] < distances[2]

    def test_empty(self):
        assert cumulative_distances([]) == []


class TestTrackBounds:
    """Tests for track_bounds function."""

    def test_bounds(self):
        bounds = track_bounds([point(43.0, 77.0), point(44.0, 76.0), point(43.5, 76.5)])

        assert bounds.as_pairs() == [[43.0, 76.0], [44.0, 77.0]]

    def test_empty(self):
        assert track_bounds([]) is None


# =============================================================================
# Test Lookups
# =============================================================================

class TestFindClosestPoint:
    """Tests for find_closest_point_index function."""

    def test_nearest(self):
        points = [point(43.0, 76.0), point(43.1, 76.1), point(43.2, 76.2)]
        assert find_closest_point_index(points, 43.11, 76.09) == 1

    def test_exact_match(self):
        points = [point(43.0, 76.0), point(43.1, 76.1)]
        assert find_closest_point_index(points, 43.1, 76.1) == 1

    def test_tie_goes_to_lowest_index(self):
        points = [point(43.0, 76.0), point(43.2, 76.0), point(43.0, 76.0)]
        assert find_closest_point_index(points, 43.0, 76.0) == 0

    def test_empty_track(self):
        assert find_closest_point_index([], 43.0, 76.0) == 0


class TestWaypointSnapping:
    """Tests for snap_waypoints / fallback_waypoints."""

    def test_snap_in_waypoint_order(self):
        points = [point(43.0, 76.0), point(43.1, 76.1), point(43.2, 76.2)]
        waypoints = [
            GpxWaypoint(lat=43.19, lon=76.2, name="Summit"),
            GpxWaypoint(lat=43.0, lon=76.01, name="Trailhead"),
        ]

        assert snap_waypoints(points, waypoints) == [2, 0]

    def test_fallback_waypoints(self):
        points = [point(43.0 + i / 100, 76.0) for i in range(5)]

        waypoints = fallback_waypoints(points)

        assert [w.name for w in waypoints] == ["Trailhead", "Midpoint", "Summit"]
        assert [w.icon for w in waypoints] == [
            WaypointIcon.START, WaypointIcon.FOOD, WaypointIcon.FINISH
        ]
        assert snap_waypoints(points, waypoints) == [0, 2, 4]

    def test_fallback_waypoints_empty(self):
        assert fallback_waypoints([]) == []
