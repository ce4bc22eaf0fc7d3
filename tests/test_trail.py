"""
Tests for the bounded trail recorder.
"""

import pytest

from fruit_slicer.slice_core.config_loader import load_config
from fruit_slicer.slice_core.trail import Trail
from fruit_slicer.slice_core.vector import Vec2


@pytest.fixture
def config():
    return load_config()


class TestTrailBound:
    """Test point bound and eviction order."""

    def test_never_exceeds_max_points(self, config):
        trail = Trail(0, 0, config)
        for i in range(1, 100):
            trail.add_point(i, 0)
            assert len(trail) <= config.trail.max_points

    def test_evicts_oldest_first(self, config):
        """40 points into a 25-point trail keeps the newest 25."""
        trail = Trail(0, 0, config)
        for i in range(1, 40):
            trail.add_point(i, 0)

        points = trail.points
        assert len(points) == 25
        assert points[0] == (15.0, 0.0)
        assert points[-1] == (39.0, 0.0)

    def test_add_after_release_ignored(self, config):
        trail = Trail(0, 0, config)
        trail.add_point(10, 0)
        trail.release()
        trail.add_point(20, 0)

        assert len(trail) == 2
        assert not trail.is_drawing


class TestTrailDecay:
    """Test aging and fading."""

    def test_alpha_constant_while_drawing(self, config):
        trail = Trail(0, 0, config)
        for _ in range(50):
            trail.add_point(1, 1)
            assert trail.update()
        assert trail.alpha == 1.0
        assert trail.active

    def test_release_fades_to_inactive(self, config):
        """Alpha is non-increasing after release and reaches zero."""
        trail = Trail(0, 0, config)
        trail.add_point(100, 0)
        trail.release()

        previous = trail.alpha
        for _ in range(100):
            if not trail.update():
                break
            assert trail.alpha <= previous
            previous = trail.alpha

        assert not trail.active
        assert trail.alpha == 0.0

    def test_points_age_out(self, config):
        """Older points drop after point_lifetime frames; the held point stays."""
        lifetime = config.trail.point_lifetime
        trail = Trail(0, 0, config)
        trail.add_point(10, 0)

        for _ in range(lifetime):
            trail.update()
        assert len(trail) == 2

        trail.update()
        assert trail.points == [(10.0, 0.0)]

    def test_resting_pointer_keeps_press_point(self, config):
        """Holding still past the lifetime still cuts from the press point."""
        trail = Trail(300, 300, config)
        for _ in range(config.trail.point_lifetime + 1):
            trail.update()
        assert trail.points == [(300.0, 300.0)]

        trail.add_point(420, 300)
        trail.update()

        assert trail.points == [(300.0, 300.0), (420.0, 300.0)]
        assert trail.hits((340, 300), 30)

    def test_released_points_all_age_out(self, config):
        trail = Trail(0, 0, config)
        trail.add_point(10, 0)
        trail.release()

        for _ in range(config.trail.point_lifetime + 1):
            trail.update()
        assert len(trail) == 0

    def test_inactive_trail_never_hits(self, config):
        trail = Trail(100, 100, config)
        trail.add_point(200, 100)
        trail.release()
        while trail.update():
            pass

        assert not trail.hits((150, 100), 30)


class TestTrailGeometry:
    """Test direction and hit width."""

    def test_direction_of_last_segment(self, config):
        trail = Trail(0, 0, config)
        trail.add_point(10, 0)
        trail.add_point(10, 20)

        assert trail.direction() == Vec2(0.0, 1.0)

    def test_direction_skips_repeated_points(self, config):
        trail = Trail(0, 0, config)
        trail.add_point(0, 10)
        trail.add_point(0, 10)

        assert trail.direction() == Vec2(0.0, 1.0)

    def test_direction_of_single_point_is_zero(self, config):
        assert Trail(5, 5, config).direction() == Vec2()

    def test_hit_includes_stroke_width(self, config):
        """Hit distance is radius plus half the stroke width."""
        half_width = config.trail.width / 2.0
        trail = Trail(100, 100, config)
        trail.add_point(200, 100)

        assert trail.hits((150, 100), 30)
        assert trail.hits((150, 100 + 30 + half_width - 1), 30)
        assert not trail.hits((150, 100 + 30 + half_width + 1), 30)
