"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


@dataclass(frozen=True)
class BoardConfig:
    """Play field geometry."""
    width: int                   # Field width in pixels
    height: int                  # Field height in pixels (bottom edge)


@dataclass(frozen=True)
class PhysicsConfig:
    """Integration parameters for whole collectibles."""
    gravity: float               # px/frame^2, positive is downward
    entity_size: float           # Glyph size, hit radius is half of it


@dataclass(frozen=True)
class SpawnConfig:
    """Spawner probabilities and launch parameters."""
    probability: float
    bomb_probability: float
    launch_speed: float
    horizontal_jitter: float
    rotation_jitter: float
    margin: int


@dataclass(frozen=True)
class SliceConfig:
    """Impulses handed to the two fragments of a sliced collectible."""
    split_impulse: float
    lift: float
    normal_impulse: float
    spin_split: float


@dataclass(frozen=True)
class FragmentConfig:
    """Fragment decay parameters."""
    fade_rate: float
    shrink_rate: float
    air_resistance: float
    ground_margin: float
    ground_friction: float
    out_of_bounds_fade: float
    expire_threshold: float


@dataclass(frozen=True)
class ParticleConfig:
    """Juice burst parameters."""
    burst_size: int
    gravity: float
    min_speed: float
    max_speed: float
    min_size: float
    max_size: float
    min_decay: float
    max_decay: float
    air_resistance: float


@dataclass(frozen=True)
class TrailConfig:
    """Pointer trail parameters."""
    max_points: int
    width: float
    fade_rate: float
    point_lifetime: int


@dataclass(frozen=True)
class ScoringConfig:
    """Score and lives parameters."""
    slice_points: int
    starting_lives: int


@dataclass(frozen=True)
class KindConfig:
    """Visual configuration for one entity kind."""
    name: str
    glyph: str
    color_juice: Tuple[int, int, int]
    color_solid: Tuple[int, int, int]


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_objects: int
    frame_skip: int
    image_width: int
    image_height: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    physics: PhysicsConfig
    spawn: SpawnConfig
    slice: SliceConfig
    fragment: FragmentConfig
    particles: ParticleConfig
    trail: TrailConfig
    scoring: ScoringConfig
    kinds: Tuple[KindConfig, ...]
    observation: ObservationConfig


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_kind(kind_data: dict) -> KindConfig:
    """Parse a single kind configuration from YAML."""
    return KindConfig(
        name=str(kind_data["name"]).lower(),
        glyph=str(kind_data["glyph"]),
        color_juice=_parse_color(kind_data["color_juice"]),
        color_solid=_parse_color(kind_data.get("color_solid", kind_data["color_juice"]))
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    from fruit_slicer.slice_core.kind_catalog import EntityKind

    if config.board.width <= 0 or config.board.height <= 0:
        raise ValueError(
            f"Board size must be positive, got {config.board.width}x{config.board.height}"
        )

    for label, value in (
        ("spawn.probability", config.spawn.probability),
        ("spawn.bomb_probability", config.spawn.bomb_probability),
    ):
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"{label} must be in [0, 1], got {value}")

    if 2 * config.spawn.margin >= config.board.width:
        raise ValueError(
            f"spawn.margin ({config.spawn.margin}) leaves no room on a "
            f"{config.board.width}px wide board"
        )

    if config.trail.max_points < 2:
        raise ValueError(f"trail.max_points must be at least 2, got {config.trail.max_points}")

    if config.scoring.starting_lives < 1:
        raise ValueError(f"scoring.starting_lives must be positive, got {config.scoring.starting_lives}")

    if config.particles.min_speed > config.particles.max_speed:
        raise ValueError("particles.min_speed exceeds particles.max_speed")

    # Every kind exactly once
    names = [kind.name for kind in config.kinds]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Kinds configured more than once: {duplicates}")

    expected = {kind.value for kind in EntityKind}
    missing = sorted(expected - set(names))
    unknown = sorted(set(names) - expected)
    if missing:
        raise ValueError(f"Kinds missing from config: {missing}")
    if unknown:
        raise ValueError(f"Unknown kinds in config: {unknown}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"])
    )

    physics_data = raw["physics"]
    physics = PhysicsConfig(
        gravity=float(physics_data["gravity"]),
        entity_size=float(physics_data.get("entity_size", 60))
    )

    spawn_data = raw["spawn"]
    spawn = SpawnConfig(
        probability=float(spawn_data["probability"]),
        bomb_probability=float(spawn_data["bomb_probability"]),
        launch_speed=float(spawn_data["launch_speed"]),
        horizontal_jitter=float(spawn_data.get("horizontal_jitter", 1.0)),
        rotation_jitter=float(spawn_data.get("rotation_jitter", 0.05)),
        margin=int(spawn_data.get("margin", 0))
    )

    slice_data = raw["slice"]
    slice_cfg = SliceConfig(
        split_impulse=float(slice_data["split_impulse"]),
        lift=float(slice_data["lift"]),
        normal_impulse=float(slice_data.get("normal_impulse", 0.0)),
        spin_split=float(slice_data["spin_split"])
    )

    fragment_data = raw["fragment"]
    fragment = FragmentConfig(
        fade_rate=float(fragment_data["fade_rate"]),
        shrink_rate=float(fragment_data.get("shrink_rate", 0.0)),
        air_resistance=float(fragment_data.get("air_resistance", 1.0)),
        ground_margin=float(fragment_data.get("ground_margin", 40.0)),
        ground_friction=float(fragment_data.get("ground_friction", 1.0)),
        out_of_bounds_fade=float(fragment_data.get("out_of_bounds_fade", 0.0)),
        expire_threshold=float(fragment_data.get("expire_threshold", 0.01))
    )

    particle_data = raw["particles"]
    particles = ParticleConfig(
        burst_size=int(particle_data["burst_size"]),
        gravity=float(particle_data["gravity"]),
        min_speed=float(particle_data["min_speed"]),
        max_speed=float(particle_data["max_speed"]),
        min_size=float(particle_data["min_size"]),
        max_size=float(particle_data["max_size"]),
        min_decay=float(particle_data["min_decay"]),
        max_decay=float(particle_data["max_decay"]),
        air_resistance=float(particle_data.get("air_resistance", 1.0))
    )

    trail_data = raw["trail"]
    trail = TrailConfig(
        max_points=int(trail_data["max_points"]),
        width=float(trail_data["width"]),
        fade_rate=float(trail_data["fade_rate"]),
        point_lifetime=int(trail_data.get("point_lifetime", 12))
    )

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        slice_points=int(scoring_data["slice_points"]),
        starting_lives=int(scoring_data.get("starting_lives", 3))
    )

    kinds = tuple(_parse_kind(k) for k in raw["kinds"])

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_objects=int(obs_data.get("max_objects", 32)),
        frame_skip=int(obs_data.get("frame_skip", 1)),
        image_width=int(obs_data.get("image_width", 400)),
        image_height=int(obs_data.get("image_height", 300))
    )

    config = GameConfig(
        board=board,
        physics=physics,
        spawn=spawn,
        slice=slice_cfg,
        fragment=fragment,
        particles=particles,
        trail=trail,
        scoring=scoring,
        kinds=kinds,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
