"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING
import numpy as np

from fruit_slicer.slice_core.config_loader import GameConfig, get_config
from fruit_slicer.slice_core.kind_catalog import get_catalog

if TYPE_CHECKING:
    from fruit_slicer.slice_core.game import SliceGame


@dataclass
class GameSnapshot:
    """
    Game state snapshot.

    All arrays are fixed-size with masking for variable object counts.
    Objects are ordered by spawn order; bombs and fruits share the arrays.
    """
    # Core state
    score: int
    lives: int
    tick: int
    running: bool
    objects_count: int

    # Field info (for normalization)
    field_width: float
    field_height: float

    # Object arrays (fixed size, padded)
    obj_kind: np.ndarray              # (MAX_OBJ,) int16, -1 for padding
    obj_x: np.ndarray                 # (MAX_OBJ,) float32
    obj_y: np.ndarray                 # (MAX_OBJ,) float32
    obj_vx: np.ndarray                # (MAX_OBJ,) float32
    obj_vy: np.ndarray                # (MAX_OBJ,) float32
    obj_size: np.ndarray              # (MAX_OBJ,) float32
    obj_is_bomb: np.ndarray           # (MAX_OBJ,) bool
    obj_sliced: np.ndarray            # (MAX_OBJ,) bool
    obj_mask: np.ndarray              # (MAX_OBJ,) bool

    # Optional image
    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            "score": np.array(self.score, dtype=np.int64),
            "lives": np.array(self.lives, dtype=np.int32),
            "tick": np.array(self.tick, dtype=np.int64),
            "objects_count": np.array(self.objects_count, dtype=np.int32),
            "field_width": np.array(self.field_width, dtype=np.float32),
            "field_height": np.array(self.field_height, dtype=np.float32),
            "obj_kind": self.obj_kind,
            "obj_x": self.obj_x,
            "obj_y": self.obj_y,
            "obj_vx": self.obj_vx,
            "obj_vy": self.obj_vy,
            "obj_size": self.obj_size,
            "obj_is_bomb": self.obj_is_bomb.astype(np.int8),
            "obj_sliced": self.obj_sliced.astype(np.int8),
            "obj_mask": self.obj_mask.astype(np.int8),
        }
        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb
        return obs


class SnapshotBuilder:
    """Builds GameSnapshot instances from a running game."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = get_catalog(config)
        self._max_objects = config.observation.max_objects

    @property
    def max_objects(self) -> int:
        return self._max_objects

    def build(
        self,
        game: "SliceGame",
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """
        Build a snapshot.

        Args:
            game: Game to read.
            board_rgb: Optional rendered image to attach.

        Returns:
            GameSnapshot with padded object arrays.
        """
        max_obj = self._max_objects
        collectibles = sorted(game.fruits + game.bombs, key=lambda c: c.uid)
        # Keep the newest when over capacity
        collectibles = collectibles[-max_obj:]
        n = len(collectibles)

        obj_kind = np.full(max_obj, -1, dtype=np.int16)
        obj_x = np.zeros(max_obj, dtype=np.float32)
        obj_y = np.zeros(max_obj, dtype=np.float32)
        obj_vx = np.zeros(max_obj, dtype=np.float32)
        obj_vy = np.zeros(max_obj, dtype=np.float32)
        obj_size = np.zeros(max_obj, dtype=np.float32)
        obj_is_bomb = np.zeros(max_obj, dtype=bool)
        obj_sliced = np.zeros(max_obj, dtype=bool)
        obj_mask = np.zeros(max_obj, dtype=bool)

        for i, c in enumerate(collectibles):
            obj_kind[i] = self._catalog.index_of(c.kind)
            obj_x[i] = c.x
            obj_y[i] = c.y
            obj_vx[i] = c.velocity.x
            obj_vy[i] = c.velocity.y
            obj_size[i] = c.size
            obj_is_bomb[i] = c.is_bomb
            obj_sliced[i] = c.sliced
            obj_mask[i] = True

        width, height = game.field_size
        return GameSnapshot(
            score=game.score,
            lives=game.lives,
            tick=game.tick_count,
            running=game.running,
            objects_count=n,
            field_width=width,
            field_height=height,
            obj_kind=obj_kind,
            obj_x=obj_x,
            obj_y=obj_y,
            obj_vx=obj_vx,
            obj_vy=obj_vy,
            obj_size=obj_size,
            obj_is_bomb=obj_is_bomb,
            obj_sliced=obj_sliced,
            obj_mask=obj_mask,
            board_rgb=board_rgb
        )
