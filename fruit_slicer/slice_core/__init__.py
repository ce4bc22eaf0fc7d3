"""
Slice Core - The simulation behind the game.

This module provides the per-frame simulation (spawning, physics, trails,
slicing, scoring), a fixed-step scheduler to drive it, and a Gymnasium
wrapper for headless agents.

Main exports:
- SliceGame: The simulation loop and session state
- FrameScheduler: Drives SliceGame.tick() from a host clock
- SliceEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
- EntityKind: Closed set of collectible kinds
"""

from fruit_slicer.slice_core.config_loader import GameConfig, load_config
from fruit_slicer.slice_core.kind_catalog import EntityKind, KindCatalog
from fruit_slicer.slice_core.display import DisplaySink, HudState
from fruit_slicer.slice_core.entities import Collectible, Fragment
from fruit_slicer.slice_core.trail import Trail
from fruit_slicer.slice_core.game import SliceGame, TickResult
from fruit_slicer.slice_core.scheduler import FrameScheduler
from fruit_slicer.slice_core.env_gym import SliceEnv

__all__ = [
    "GameConfig",
    "load_config",
    "EntityKind",
    "KindCatalog",
    "DisplaySink",
    "HudState",
    "Collectible",
    "Fragment",
    "Trail",
    "SliceGame",
    "TickResult",
    "FrameScheduler",
    "SliceEnv",
]
