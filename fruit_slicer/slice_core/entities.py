"""
Collectible Entities
====================

Fruits and bombs. A collectible is either Whole (flying under gravity) or
Fragmented (two decaying halves). The transition happens once, on slice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Union

from fruit_slicer.slice_core.config_loader import FragmentConfig, SliceConfig
from fruit_slicer.slice_core.kind_catalog import EntityKind
from fruit_slicer.slice_core.vector import Body, Vec2


class Side(Enum):
    """Which half of the parent a fragment is. Value is the outward sign."""
    LEFT = -1
    RIGHT = 1


@dataclass
class Fragment:
    """
    One half of a sliced collectible.

    Alpha and scale only ever decrease; the fragment is expired once either
    reaches the configured threshold.
    """
    body: Body
    kind: EntityKind
    side: Side
    alpha: float = 1.0
    scale: float = 1.0

    def update(self, field_width: float, field_height: float, cfg: FragmentConfig) -> bool:
        """
        Advance one frame.

        Returns:
            True while the fragment is still alive.
        """
        self.body.step()
        self.body.damp(cfg.air_resistance)

        # Ground slowdown near the bottom edge
        if self.body.y > field_height - cfg.ground_margin:
            self.body.damp(cfg.ground_friction)

        fade = cfg.fade_rate
        if self.body.x < 0.0 or self.body.x > field_width:
            fade += cfg.out_of_bounds_fade

        self.alpha = max(0.0, self.alpha - fade)
        self.scale = max(0.0, self.scale - cfg.shrink_rate)
        return not self.is_expired(cfg.expire_threshold)

    def is_expired(self, threshold: float) -> bool:
        return self.alpha <= threshold or self.scale <= threshold

    @property
    def position(self) -> Vec2:
        return self.body.position

    @property
    def rotation(self) -> float:
        return self.body.rotation


@dataclass(frozen=True)
class Whole:
    """Collectible has not been sliced."""


@dataclass
class Fragmented:
    """Collectible has been sliced into the remaining fragments."""
    fragments: List[Fragment] = field(default_factory=list)


CollectibleState = Union[Whole, Fragmented]


class Collectible:
    """
    A fruit or a bomb.

    Whole collectibles integrate under gravity and stay on screen while
    y < field height. Fragmented collectibles live until every fragment
    has expired.
    """

    def __init__(
        self,
        kind: EntityKind,
        position: Vec2,
        velocity: Vec2,
        gravity: float,
        size: float,
        rotation_speed: float = 0.0,
        uid: int = 0
    ):
        self.uid = uid
        self.kind = kind
        self.size = float(size)
        self.body = Body(
            position=position,
            velocity=velocity,
            gravity=gravity,
            rotation_speed=rotation_speed
        )
        self.state: CollectibleState = Whole()

    def __repr__(self) -> str:
        state = "sliced" if self.sliced else "whole"
        return f"Collectible({self.uid}: {self.kind.value} {state} at ({self.x:.1f}, {self.y:.1f}))"

    @property
    def x(self) -> float:
        return self.body.x

    @property
    def y(self) -> float:
        return self.body.y

    @property
    def position(self) -> Vec2:
        return self.body.position

    @property
    def velocity(self) -> Vec2:
        return self.body.velocity

    @property
    def radius(self) -> float:
        """Hit radius."""
        return self.size / 2.0

    @property
    def is_bomb(self) -> bool:
        return self.kind.is_bomb

    @property
    def sliced(self) -> bool:
        return isinstance(self.state, Fragmented)

    @property
    def fragments(self) -> Tuple[Fragment, ...]:
        if isinstance(self.state, Fragmented):
            return tuple(self.state.fragments)
        return ()

    def update(self, field_width: float, field_height: float, fragment_cfg: FragmentConfig) -> bool:
        """
        Advance one frame.

        Returns:
            True if the collectible should stay in the active collection.
        """
        if isinstance(self.state, Fragmented):
            self.state.fragments = [
                f for f in self.state.fragments
                if f.update(field_width, field_height, fragment_cfg)
            ]
            return len(self.state.fragments) > 0

        self.body.step()
        return self.body.y < field_height

    def has_left_field(self, field_height: float) -> bool:
        """True for a whole collectible that fell past the bottom edge."""
        return not self.sliced and self.body.y >= field_height

    def slice(self, direction: Vec2, cfg: SliceConfig) -> bool:
        """
        Split into two fragments.

        Args:
            direction: Direction of the cutting gesture. Zero is allowed.
            cfg: Slice impulses.

        Returns:
            True if this call performed the split, False if already sliced.
        """
        if self.sliced:
            return False

        parent = self.body
        normal = direction.normalized().perpendicular()
        # Fragments fly up at least as fast as the parent was rising
        base_vy = min(parent.velocity.y, 0.0) - cfg.lift

        fragments = []
        for side in (Side.LEFT, Side.RIGHT):
            s = side.value
            velocity = Vec2(
                parent.velocity.x + s * cfg.split_impulse / 2.0 + s * normal.x * cfg.normal_impulse,
                base_vy + s * normal.y * cfg.normal_impulse
            )
            fragments.append(Fragment(
                body=Body(
                    position=parent.position,
                    velocity=velocity,
                    gravity=parent.gravity,
                    rotation=parent.rotation,
                    rotation_speed=parent.rotation_speed + s * cfg.spin_split
                ),
                kind=self.kind,
                side=side
            ))

        self.state = Fragmented(fragments)
        return True
