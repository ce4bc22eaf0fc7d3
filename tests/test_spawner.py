"""
Tests for the probabilistic spawner.
"""

import dataclasses
from collections import Counter

import pytest

from fruit_slicer.slice_core.config_loader import load_config
from fruit_slicer.slice_core.kind_catalog import EntityKind, FRUIT_KINDS
from fruit_slicer.slice_core.spawner import Spawner


@pytest.fixture
def config():
    return load_config()


def with_spawn(config, **changes):
    return dataclasses.replace(config, spawn=dataclasses.replace(config.spawn, **changes))


def describe(c):
    return (c.kind, round(c.x, 6), round(c.velocity.x, 6), round(c.body.rotation_speed, 6))


class TestSpawner:
    """Test spawn chance, kind mix and launch state."""

    def test_deterministic_with_seed(self, config):
        """Same seed should produce same sequence."""
        s1 = Spawner(config, seed=42)
        s2 = Spawner(config, seed=42)

        seq1 = [describe(s1.spawn(800, 600)) for _ in range(50)]
        seq2 = [describe(s2.spawn(800, 600)) for _ in range(50)]

        assert seq1 == seq2

    def test_different_seeds_differ(self, config):
        s1 = Spawner(config, seed=42)
        s2 = Spawner(config, seed=123)

        seq1 = [describe(s1.spawn(800, 600)) for _ in range(50)]
        seq2 = [describe(s2.spawn(800, 600)) for _ in range(50)]

        assert seq1 != seq2

    def test_spawn_rate(self, config):
        """Roughly probability * frames spawns over a long run."""
        spawner = Spawner(config, seed=42)
        frames = 20000
        spawned = sum(1 for _ in range(frames) if spawner.maybe_spawn(800, 600) is not None)

        expected = frames * config.spawn.probability
        assert 0.75 * expected < spawned < 1.25 * expected
        assert spawner.spawned_count == spawned

    def test_zero_probability_never_spawns(self, config):
        spawner = Spawner(with_spawn(config, probability=0.0), seed=1)
        assert all(spawner.maybe_spawn(800, 600) is None for _ in range(1000))

    def test_full_probability_always_spawns(self, config):
        spawner = Spawner(with_spawn(config, probability=1.0), seed=1)
        assert all(spawner.maybe_spawn(800, 600) is not None for _ in range(100))

    def test_bomb_share(self, config):
        """About bomb_probability of spawns are bombs."""
        spawner = Spawner(config, seed=42)
        counts = Counter(spawner.spawn(800, 600).kind for _ in range(5000))

        bombs = counts[EntityKind.BOMB]
        expected = 5000 * config.spawn.bomb_probability
        assert 0.8 * expected < bombs < 1.2 * expected

    def test_every_fruit_kind_appears(self, config):
        spawner = Spawner(config, seed=42)
        kinds = {spawner.spawn(800, 600).kind for _ in range(2000)}
        for kind in FRUIT_KINDS:
            assert kind in kinds

    def test_no_bombs_when_disabled(self, config):
        spawner = Spawner(with_spawn(config, bomb_probability=0.0), seed=3)
        assert all(not spawner.spawn(800, 600).is_bomb for _ in range(500))

    def test_launch_state(self, config):
        """Spawned on the bottom edge, moving up with small horizontal jitter."""
        spawner = Spawner(config, seed=42)
        spawn = config.spawn

        for _ in range(200):
            c = spawner.spawn(800, 600)
            assert c.y == 600
            assert spawn.margin <= c.x <= 800 - spawn.margin
            assert c.velocity.y == pytest.approx(-spawn.launch_speed)
            assert abs(c.velocity.x) <= spawn.horizontal_jitter
            assert c.body.gravity == config.physics.gravity
            assert c.size == config.physics.entity_size
            assert not c.sliced

    def test_follows_field_size(self, config):
        spawner = Spawner(config, seed=42)
        c = spawner.spawn(300, 1000)
        assert c.y == 1000
        assert c.x <= 300

    def test_forced_kind(self, config):
        spawner = Spawner(config, seed=42)
        assert spawner.spawn(800, 600, kind=EntityKind.BOMB).kind is EntityKind.BOMB

    def test_uids_increase(self, config):
        spawner = Spawner(config, seed=42)
        uids = [spawner.spawn(800, 600).uid for _ in range(5)]
        assert uids == [0, 1, 2, 3, 4]

    def test_reset_replays(self, config):
        spawner = Spawner(config, seed=42)
        first = [describe(spawner.spawn(800, 600)) for _ in range(10)]

        spawner.reset(seed=42)
        assert spawner.spawned_count == 0
        second = [describe(spawner.spawn(800, 600)) for _ in range(10)]

        assert first == second
