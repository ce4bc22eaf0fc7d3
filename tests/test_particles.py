"""
Tests for juice particle bursts.
"""

import random

import pytest

from fruit_slicer.slice_core.config_loader import load_config
from fruit_slicer.slice_core.particles import ParticleSystem
from fruit_slicer.slice_core.vector import Vec2


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def system(config):
    return ParticleSystem(config, rng=random.Random(7))


class TestParticleSystem:
    """Test emission and expiry."""

    def test_burst_is_fixed_size(self, config, system):
        emitted = system.burst(Vec2(100, 100), (255, 0, 0))

        assert len(emitted) == config.particles.burst_size
        assert len(system) == config.particles.burst_size

    def test_burst_uses_color_and_origin(self, system):
        for p in system.burst(Vec2(100, 50), (10, 20, 30)):
            assert p.color == (10, 20, 30)
            assert p.position == Vec2(100, 50)
            assert p.alpha == 1.0

    def test_speeds_within_range(self, config, system):
        for p in system.burst(Vec2(0, 0), (0, 0, 0)):
            assert config.particles.min_speed - 1e-9 <= p.body.velocity.length() <= config.particles.max_speed + 1e-9

    def test_bursts_accumulate(self, config, system):
        system.burst(Vec2(0, 0), (0, 0, 0))
        system.burst(Vec2(10, 10), (0, 0, 0))
        assert len(system) == 2 * config.particles.burst_size

    def test_alpha_non_increasing(self, system):
        system.burst(Vec2(100, 100), (255, 255, 255))
        previous = {id(p): p.alpha for p in system}

        for _ in range(10):
            system.update()
            for p in system:
                assert p.alpha < previous[id(p)]
                previous[id(p)] = p.alpha

    def test_all_expire(self, config, system):
        """Slowest decay bounds the lifetime."""
        system.burst(Vec2(100, 100), (255, 255, 255))
        frames = int(1.0 / config.particles.min_decay) + 2
        for _ in range(frames):
            system.update()
        assert len(system) == 0

    def test_particles_fall(self, system):
        """Gravity pulls every droplet down over time."""
        system.burst(Vec2(100, 100), (255, 255, 255))
        velocities = [p.body.velocity.y for p in system]
        system.update()
        for before, p in zip(velocities, system):
            assert p.body.velocity.y > before * p.air_resistance - 1e-9

    def test_clear(self, system):
        system.burst(Vec2(0, 0), (0, 0, 0))
        system.clear()
        assert len(system) == 0
