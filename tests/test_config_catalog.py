"""
Tests for configuration loading and the kind catalog.
"""

import os

import pytest
import yaml

import fruit_slicer
from fruit_slicer.slice_core.config_loader import load_config
from fruit_slicer.slice_core.kind_catalog import EntityKind, FRUIT_KINDS, KindCatalog


DEFAULT_PATH = os.path.join(os.path.dirname(fruit_slicer.__file__), "game_config.yaml")


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw():
    with open(DEFAULT_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_config(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(raw), encoding="utf-8")
    return str(path)


class TestLoadConfig:
    """Test defaults and validation."""

    def test_defaults(self, config):
        assert config.board.width == 800
        assert config.board.height == 600
        assert config.physics.gravity == pytest.approx(0.1)
        assert config.physics.entity_size == 60
        assert config.spawn.probability == pytest.approx(0.02)
        assert config.spawn.bomb_probability == pytest.approx(0.15)
        assert config.spawn.launch_speed == pytest.approx(8.0)
        assert config.trail.max_points == 25
        assert config.scoring.slice_points == 10
        assert config.scoring.starting_lives == 3

    def test_explicit_path(self, tmp_path, raw):
        raw["board"]["width"] = 1024
        config = load_config(write_config(tmp_path, raw))
        assert config.board.width == 1024

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_bad_probability(self, tmp_path, raw):
        raw["spawn"]["bomb_probability"] = 1.5
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw))

    def test_missing_kind(self, tmp_path, raw):
        raw["kinds"] = [k for k in raw["kinds"] if k["name"] != "bomb"]
        with pytest.raises(ValueError, match="bomb"):
            load_config(write_config(tmp_path, raw))

    def test_unknown_kind(self, tmp_path, raw):
        raw["kinds"].append({"name": "durian", "glyph": "D", "color_juice": [1, 2, 3]})
        with pytest.raises(ValueError, match="durian"):
            load_config(write_config(tmp_path, raw))

    def test_duplicate_kind(self, tmp_path, raw):
        raw["kinds"].append(dict(raw["kinds"][0]))
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw))

    def test_tiny_trail_rejected(self, tmp_path, raw):
        raw["trail"]["max_points"] = 1
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw))


class TestKindCatalog:
    """Test the exhaustive kind lookup."""

    def test_every_kind_has_entry(self, config):
        catalog = KindCatalog(config)
        assert len(catalog) == len(EntityKind)
        for kind in EntityKind:
            kind_type = catalog[kind]
            assert kind_type.kind is kind
            assert kind_type.glyph
            assert len(catalog.color_juice(kind)) == 3
            assert all(0 <= c <= 255 for c in catalog.color_solid(kind))

    def test_fruit_kinds_exclude_bomb(self, config):
        catalog = KindCatalog(config)
        assert EntityKind.BOMB not in catalog.fruit_kinds
        assert set(catalog.fruit_kinds) | {EntityKind.BOMB} == set(EntityKind)
        assert catalog.fruit_kinds == FRUIT_KINDS

    def test_iteration_in_enum_order(self, config):
        catalog = KindCatalog(config)
        assert [t.kind for t in catalog] == list(EntityKind)

    def test_index_is_stable(self, config):
        catalog = KindCatalog(config)
        indices = [catalog.index_of(kind) for kind in EntityKind]
        assert indices == list(range(len(EntityKind)))

    def test_only_bomb_is_bomb(self):
        assert [k for k in EntityKind if k.is_bomb] == [EntityKind.BOMB]
