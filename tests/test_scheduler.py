"""
Tests for the fixed-step frame scheduler.
"""

import dataclasses

import pytest

from fruit_slicer.slice_core.config_loader import load_config
from fruit_slicer.slice_core.entities import Collectible
from fruit_slicer.slice_core.game import SliceGame
from fruit_slicer.slice_core.kind_catalog import EntityKind
from fruit_slicer.slice_core.scheduler import FrameScheduler
from fruit_slicer.slice_core.vector import Vec2


@pytest.fixture
def game():
    config = load_config()
    quiet = dataclasses.replace(config, spawn=dataclasses.replace(config.spawn, probability=0.0))
    return SliceGame(config=quiet, seed=42)


def end_game(game):
    """Slice a bomb so the session is over."""
    config = game.config
    game.add_collectible(Collectible(
        kind=EntityKind.BOMB,
        position=Vec2(400, 300),
        velocity=Vec2(),
        gravity=0.0,
        size=config.physics.entity_size
    ))
    game.pointer_down(300, 300)
    game.pointer_move(500, 300)
    game.tick()
    assert game.is_over


class TestFrameScheduler:
    """Test accumulation and clamping."""

    def test_whole_ticks_only(self, game):
        scheduler = FrameScheduler(game, tick_seconds=0.01)

        assert scheduler.advance(0.035) == 3
        assert game.tick_count == 3
        assert 0.0 < scheduler.accumulator < 0.01

    def test_remainder_carries_over(self, game):
        scheduler = FrameScheduler(game, tick_seconds=0.01)

        assert scheduler.advance(0.006) == 0
        assert scheduler.advance(0.006) == 1

    def test_long_stall_is_clamped(self, game):
        scheduler = FrameScheduler(game, tick_seconds=0.01, max_catch_up=0.2)

        ticks = scheduler.advance(10.0)
        assert 19 <= ticks <= 20

    def test_negative_elapsed_ignored(self, game):
        scheduler = FrameScheduler(game, tick_seconds=0.01)
        assert scheduler.advance(-1.0) == 0
        assert scheduler.accumulator == 0.0

    def test_no_ticks_after_game_over(self, game):
        end_game(game)
        scheduler = FrameScheduler(game, tick_seconds=0.01)

        assert scheduler.advance(0.1) == 0
        assert scheduler.run_ticks(10) == 0
        assert scheduler.accumulator == 0.0

    def test_run_ticks(self, game):
        scheduler = FrameScheduler(game)
        assert scheduler.run_ticks(5) == 5
        assert game.tick_count == 5

    def test_on_frame_receives_results(self, game):
        results = []
        scheduler = FrameScheduler(game, tick_seconds=0.01, on_frame=results.append)
        scheduler.advance(0.025)

        assert len(results) == 2
        assert all(r.ran for r in results)

    def test_reset_drops_time(self, game):
        scheduler = FrameScheduler(game, tick_seconds=0.01)
        scheduler.advance(0.009)
        scheduler.reset()
        assert scheduler.advance(0.002) == 0

    def test_rejects_bad_timestep(self, game):
        with pytest.raises(ValueError):
            FrameScheduler(game, tick_seconds=0.0)
