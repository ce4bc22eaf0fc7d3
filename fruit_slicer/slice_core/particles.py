"""
Particle Burst
==============

Cosmetic juice droplets emitted when something is sliced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple
import math
import random

from fruit_slicer.slice_core.config_loader import GameConfig, ParticleConfig, get_config
from fruit_slicer.slice_core.vector import Body, Vec2


@dataclass
class Particle:
    """A single droplet. Expires when its alpha reaches zero."""
    body: Body
    size: float
    alpha: float
    decay: float
    color: Tuple[int, int, int]
    air_resistance: float = 1.0

    def update(self) -> bool:
        """Advance one frame. Returns True while still visible."""
        self.body.step()
        self.body.damp(self.air_resistance)
        self.alpha = max(0.0, self.alpha - self.decay)
        return self.alpha > 0.0

    @property
    def position(self) -> Vec2:
        return self.body.position


class ParticleSystem:
    """Owns every live particle and emits fixed-size bursts."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None
    ):
        if config is None:
            config = get_config()

        self._cfg: ParticleConfig = config.particles
        self._rng = rng if rng is not None else random.Random()
        self._particles: List[Particle] = []

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    @property
    def burst_size(self) -> int:
        return self._cfg.burst_size

    def burst(self, position: Vec2, color: Tuple[int, int, int]) -> List[Particle]:
        """Emit burst_size droplets radiating from position."""
        cfg = self._cfg
        rng = self._rng
        emitted = []
        for _ in range(cfg.burst_size):
            angle = rng.uniform(0.0, 2.0 * math.pi)
            speed = rng.uniform(cfg.min_speed, cfg.max_speed)
            particle = Particle(
                body=Body(
                    position=position,
                    velocity=Vec2(math.cos(angle) * speed, math.sin(angle) * speed),
                    gravity=cfg.gravity
                ),
                size=rng.uniform(cfg.min_size, cfg.max_size),
                alpha=1.0,
                decay=rng.uniform(cfg.min_decay, cfg.max_decay),
                color=color,
                air_resistance=cfg.air_resistance
            )
            emitted.append(particle)
        self._particles.extend(emitted)
        return emitted

    def update(self) -> None:
        """Advance all particles and drop the expired ones."""
        self._particles = [p for p in self._particles if p.update()]

    def clear(self) -> None:
        self._particles = []
