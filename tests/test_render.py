"""
Tests for the headless renderers.
"""

import dataclasses
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pytest

from fruit_slicer.slice_core.config_loader import load_config
from fruit_slicer.slice_core.display import HudState
from fruit_slicer.slice_core.entities import Collectible
from fruit_slicer.slice_core.game import SliceGame
from fruit_slicer.slice_core.kind_catalog import EntityKind
from fruit_slicer.slice_core.render_solid import SolidRenderer
from fruit_slicer.slice_core.vector import Vec2


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def sliced_game(config):
    """A game with one whole fruit, one sliced fruit, a trail and particles."""
    quiet = dataclasses.replace(config, spawn=dataclasses.replace(config.spawn, probability=0.0))
    hud = HudState()
    game = SliceGame(config=quiet, seed=1, display=hud)
    for uid, (x, y) in enumerate([(400, 300), (150, 450)]):
        game.add_collectible(Collectible(
            kind=EntityKind.WATERMELON,
            position=Vec2(x, y),
            velocity=Vec2(),
            gravity=0.0,
            size=config.physics.entity_size,
            uid=uid
        ))
    game.pointer_down(300, 300)
    game.pointer_move(500, 300)
    game.tick()
    return game, hud


class TestSolidRenderer:
    """Test numpy/OpenCV rendering."""

    def test_shape_and_dtype(self, config, sliced_game):
        game, _ = sliced_game
        img = SolidRenderer(config).render(game.get_render_data(), 400, 300)

        assert img.shape == (300, 400, 3)
        assert img.dtype == np.uint8

    def test_draws_whole_fruit(self, config, sliced_game):
        game, _ = sliced_game
        renderer = SolidRenderer(config, show_hud=False)
        img = renderer.render(game.get_render_data(), 800, 600)

        color = game.catalog.color_solid(EntityKind.WATERMELON)
        assert tuple(img[450, 150]) == color

    def test_empty_field_is_background(self, config):
        game = SliceGame(config=config, seed=1)
        img = SolidRenderer(config, show_hud=False).render(game.get_render_data(), 80, 60)
        assert (img == img[0, 0]).all()


class TestPygameRenderer:
    """Test the glyph renderer in headless mode."""

    def test_render_array(self, config, sliced_game):
        from fruit_slicer.slice_core.render_full_pygame import PygameRenderer

        game, hud = sliced_game
        renderer = PygameRenderer(config, hud=hud)
        img = renderer.render(game.get_render_data(), 400, 300)

        assert img.shape == (300, 400, 3)
        assert img.dtype == np.uint8
        renderer.close()

    def test_game_over_panel(self, config, sliced_game):
        from fruit_slicer.slice_core.render_full_pygame import PygameRenderer

        game, hud = sliced_game
        hud.show_game_over(game.score)
        renderer = PygameRenderer(config, hud=hud)
        img = renderer.render(game.get_render_data(), 800, 600)

        assert img.shape == (600, 800, 3)
        renderer.close()
