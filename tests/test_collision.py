"""
Tests for point/segment/polyline collision.
"""

import math

import pytest

from fruit_slicer.slice_core.collision import (
    hits_polyline,
    hits_segment,
    point_segment_distance,
    polyline_distance,
)


class TestPointSegmentDistance:
    """Test clamped projection distance."""

    def test_point_on_segment(self):
        assert point_segment_distance((150, 100), (100, 100), (200, 100)) == pytest.approx(0.0)

    def test_perpendicular_distance(self):
        assert point_segment_distance((150, 130), (100, 100), (200, 100)) == pytest.approx(30.0)

    def test_beyond_endpoint_clamps(self):
        """Projection past b measures to b itself."""
        assert point_segment_distance((250, 100), (100, 100), (200, 100)) == pytest.approx(50.0)
        assert point_segment_distance((60, 70), (100, 100), (200, 100)) == pytest.approx(50.0)

    def test_zero_length_segment(self):
        """Degenerate segment is a point."""
        assert point_segment_distance((3, 4), (0, 0), (0, 0)) == pytest.approx(5.0)


class TestPolylineDistance:
    """Test minimum distance over all segments."""

    def test_empty_polyline(self):
        assert polyline_distance((0, 0), []) == math.inf

    def test_single_vertex(self):
        assert polyline_distance((3, 4), [(0, 0)]) == pytest.approx(5.0)

    def test_minimum_over_segments(self):
        points = [(0, 0), (100, 0), (100, 100)]
        assert polyline_distance((150, 50), points) == pytest.approx(50.0)
        assert polyline_distance((50, -20), points) == pytest.approx(20.0)

    def test_matches_segment_distance(self):
        """Two-point polyline equals the segment distance."""
        for point in [(0, 0), (150, 140), (500, -30), (100, 100)]:
            assert polyline_distance(point, [(100, 100), (200, 100)]) == pytest.approx(
                point_segment_distance(point, (100, 100), (200, 100))
            )


class TestHits:
    """Test hit predicates."""

    def test_swipe_through_center_hits(self):
        """A size-60 collectible centered on the cut is hit."""
        assert hits_segment((150, 100), 60, (100, 100), (200, 100))

    def test_far_collectible_misses(self):
        assert not hits_segment((150, 200), 60, (100, 100), (200, 100))

    def test_boundary_is_exclusive(self):
        """Distance equal to the radius is not a hit."""
        assert not hits_polyline((150, 130), 30, [(100, 100), (200, 100)])
        assert hits_polyline((150, 129), 30, [(100, 100), (200, 100)])

    def test_needs_two_points(self):
        """A lone pointer-down point never slices."""
        assert not hits_polyline((100, 100), 30, [(100, 100)])
        assert not hits_polyline((100, 100), 30, [])

    def test_hit_on_later_segment(self):
        points = [(0, 0), (50, 0), (50, 300)]
        assert hits_polyline((60, 200), 30, points)
