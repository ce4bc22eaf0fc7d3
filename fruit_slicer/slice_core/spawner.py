"""
Spawner
=======

Per-frame probabilistic spawning of fruits and bombs at the bottom edge.
"""

from __future__ import annotations

import random
from typing import Optional

from fruit_slicer.slice_core.config_loader import GameConfig, get_config
from fruit_slicer.slice_core.entities import Collectible
from fruit_slicer.slice_core.kind_catalog import EntityKind, FRUIT_KINDS
from fruit_slicer.slice_core.vector import Vec2


class Spawner:
    """
    Decides each frame whether a new collectible appears.

    With the configured probability a collectible is launched from a random
    x on the bottom edge. It is a bomb with bomb_probability, otherwise a
    fruit kind picked uniformly. Uses its own seeded RNG so runs replay.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)
        self._next_uid = 0

    @property
    def spawned_count(self) -> int:
        """Number of collectibles created since the last reset."""
        return self._next_uid

    def choose_kind(self) -> EntityKind:
        """Draw a kind: bomb with bomb_probability, else a uniform fruit."""
        if self._rng.random() < self._config.spawn.bomb_probability:
            return EntityKind.BOMB
        return self._rng.choice(FRUIT_KINDS)

    def maybe_spawn(self, field_width: float, field_height: float) -> Optional[Collectible]:
        """
        Roll the per-frame spawn chance.

        Returns:
            The new collectible, or None if nothing spawned this frame.
        """
        if self._rng.random() >= self._config.spawn.probability:
            return None
        return self.spawn(field_width, field_height)

    def spawn(
        self,
        field_width: float,
        field_height: float,
        kind: Optional[EntityKind] = None
    ) -> Collectible:
        """Create a collectible on the bottom edge unconditionally."""
        spawn = self._config.spawn
        if kind is None:
            kind = self.choose_kind()

        margin = min(float(spawn.margin), field_width / 2.0)
        x = self._rng.uniform(margin, field_width - margin)
        vx = self._rng.uniform(-spawn.horizontal_jitter, spawn.horizontal_jitter)
        spin = self._rng.uniform(-spawn.rotation_jitter, spawn.rotation_jitter)

        collectible = Collectible(
            kind=kind,
            position=Vec2(x, float(field_height)),
            velocity=Vec2(vx, -spawn.launch_speed),
            gravity=self._config.physics.gravity,
            size=self._config.physics.entity_size,
            rotation_speed=spin,
            uid=self._next_uid
        )
        self._next_uid += 1
        return collectible

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the spawner with optional new seed.

        Args:
            seed: New random seed. Keeps current RNG state if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._next_uid = 0
