"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the slicing game so agents can
play it headless. The agent controls a single pointer.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from fruit_slicer.slice_core.config_loader import GameConfig, load_config
from fruit_slicer.slice_core.display import HudState
from fruit_slicer.slice_core.game import SliceGame
from fruit_slicer.slice_core.kind_catalog import EntityKind
from fruit_slicer.slice_core.state_snapshot import SnapshotBuilder


class SliceEnv(gym.Env):
    """
    Fruit slicing game as a Gymnasium environment.

    Action Space:
        Box(low=0.0, high=1.0, shape=(3,), dtype=float32)
        [pointer_x, pointer_y, press]. Coordinates are normalized to the
        field; press > 0.5 means the pointer is held down.

    Observation Space:
        Dict of fixed-size arrays describing every collectible plus score,
        lives and field size.

    Reward:
        Score gained during the step.

    Each step feeds the pointer to the game, then runs frame_skip ticks.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        frame_skip: Optional[int] = None,
        image_obs: bool = False,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            frame_skip: Ticks per step. Uses config value if None.
            image_obs: If True, include board_rgb in observations.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        self._config = load_config(config_path)

        self.render_mode = render_mode
        self._image_obs = image_obs
        self._debug = debug
        self._frame_skip = frame_skip or self._config.observation.frame_skip
        self._img_width = self._config.observation.image_width
        self._img_height = self._config.observation.image_height

        self._hud = HudState()
        self._game = SliceGame(config=self._config, display=self._hud, debug=debug)
        self._snapshot_builder = SnapshotBuilder(self._config)
        self._pressed = False

        # Renderers (lazy)
        self._solid_renderer = None
        self._screen_renderer = None

        self.action_space = spaces.Box(low=0.0, high=1.0, shape=(3,), dtype=np.float32)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] SliceEnv initialized")
            print(f"[DEBUG]   Field: {self._config.board.width}x{self._config.board.height}")
            print(f"[DEBUG]   Frame skip: {self._frame_skip}")
            print(f"[DEBUG]   Max objects: {self._config.observation.max_objects}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_obj = self._config.observation.max_objects
        num_kinds = len(EntityKind)

        obs_dict = {
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "lives": spaces.Box(low=0, high=self._config.scoring.starting_lives, shape=(), dtype=np.int32),
            "tick": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "objects_count": spaces.Box(low=0, high=max_obj, shape=(), dtype=np.int32),
            "field_width": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "field_height": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "obj_kind": spaces.Box(low=-1, high=num_kinds - 1, shape=(max_obj,), dtype=np.int16),
            "obj_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_vx": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_vy": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_size": spaces.Box(low=0, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_is_bomb": spaces.MultiBinary(max_obj),
            "obj_sliced": spaces.MultiBinary(max_obj),
            "obj_mask": spaces.MultiBinary(max_obj),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.restart(seed=seed)
        self._pressed = False

        info = self._game.get_info()
        info["delta_score"] = 0
        return self._observe(), info

    def step(
        self,
        action: Union[np.ndarray, Tuple[float, float, float]]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: [pointer_x, pointer_y, press] in [0, 1].

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        action = np.clip(np.asarray(action, dtype=np.float32).reshape(3), 0.0, 1.0)
        self._apply_pointer(float(action[0]), float(action[1]), bool(action[2] > 0.5))

        score_before = self._game.score
        ticks = 0
        for _ in range(self._frame_skip):
            result = self._game.tick()
            if not result.ran:
                break
            ticks += 1
            if result.terminated:
                break

        delta_score = self._game.score - score_before
        terminated = self._game.is_over

        info = self._game.get_info()
        info["delta_score"] = delta_score
        info["ticks"] = ticks

        if self._debug:
            print(f"[DEBUG] Step: action={action.tolist()}, delta_score={delta_score}, "
                  f"lives={self._game.lives}, objects={len(self._game.fruits) + len(self._game.bombs)}")
            if terminated:
                print(f"[DEBUG] TERMINATED: {info['game_over_reason']}")

        return self._observe(), float(delta_score), terminated, False, info

    def _apply_pointer(self, nx: float, ny: float, pressed: bool) -> None:
        """Translate a normalized pointer into down/move/up events."""
        width, height = self._game.field_size
        x = nx * width
        y = ny * height

        if pressed and not self._pressed:
            self._game.pointer_down(x, y)
        elif pressed:
            self._game.pointer_move(x, y)
        elif self._pressed:
            self._game.pointer_up(x, y)
        self._pressed = pressed

    def _observe(self) -> Dict[str, np.ndarray]:
        board_rgb = self._render_to_array() if self._image_obs else None
        return self._snapshot_builder.build(self._game, board_rgb=board_rgb).to_obs_dict()

    def _render_to_array(self) -> np.ndarray:
        """Render board to RGB array."""
        if self._solid_renderer is None:
            from fruit_slicer.slice_core.render_solid import SolidRenderer
            self._solid_renderer = SolidRenderer(self._config)

        return self._solid_renderer.render(
            self._game.get_render_data(),
            self._img_width,
            self._img_height
        )

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            if self._screen_renderer is None:
                from fruit_slicer.slice_core.render_full_pygame import PygameRenderer
                self._screen_renderer = PygameRenderer(self._config, hud=self._hud)
            self._screen_renderer.render_to_screen(self._game.get_render_data())
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        for renderer in (self._solid_renderer, self._screen_renderer):
            if renderer is not None:
                renderer.close()
        self._solid_renderer = None
        self._screen_renderer = None

    @property
    def game(self) -> SliceGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
