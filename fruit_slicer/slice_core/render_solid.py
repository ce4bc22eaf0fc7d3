"""
Solid Renderer
==============

Fast numpy-based renderer that draws collectibles as solid-color discs,
fragments as half discs, trails as strokes and particles as dots.
Uses OpenCV for strokes and HUD text.
"""

from __future__ import annotations

from typing import Dict, Any, Optional, Tuple
import math

import cv2
import numpy as np

from fruit_slicer.slice_core.config_loader import GameConfig, get_config


class SolidRenderer:
    """
    Renders the game state to an RGB array.

    Screen coordinates match field coordinates (y grows downward), scaled
    to the requested image size.
    """

    def __init__(self, config: Optional[GameConfig] = None, show_hud: bool = True):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
            show_hud: Whether to draw score and lives.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._show_hud = show_hud

        self._bg_color = np.array([25, 20, 35], dtype=np.uint8)
        self._trail_color = (255, 255, 255)
        self._text_color = (255, 255, 255)
        self._text_shadow = (40, 40, 50)
        self._game_over_color = (230, 80, 80)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from SliceGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        scale_x = width / render_data["field_width"]
        scale_y = height / render_data["field_height"]

        for particle in render_data["particles"]:
            cx = int(particle["x"] * scale_x)
            cy = int(particle["y"] * scale_y)
            radius = max(1, int(particle["size"] * scale_x))
            self._blend_circle(img, cx, cy, radius, particle["color"], particle["alpha"])

        for trail in render_data["trails"]:
            self._draw_trail(img, trail, scale_x, scale_y)

        for collectible in render_data["fruits"] + render_data["bombs"]:
            self._draw_collectible(img, collectible, scale_x, scale_y)

        if self._show_hud:
            self._draw_hud(img, render_data, width)

        return img

    def _draw_collectible(
        self,
        img: np.ndarray,
        collectible: Dict[str, Any],
        scale_x: float,
        scale_y: float
    ) -> None:
        color = collectible["color_solid"]
        radius = max(1, int(collectible["size"] / 2 * scale_x))

        if not collectible["sliced"]:
            cx = int(collectible["x"] * scale_x)
            cy = int(collectible["y"] * scale_y)
            self._blend_circle(img, cx, cy, radius, color, 1.0)
            return

        for frag in collectible["fragments"]:
            cx = int(frag["x"] * scale_x)
            cy = int(frag["y"] * scale_y)
            r = max(1, int(radius * frag["scale"]))
            # Cut line follows the fragment's rotation; side picks the half
            normal = (math.cos(frag["angle"]) * frag["side"], math.sin(frag["angle"]) * frag["side"])
            self._blend_circle(img, cx, cy, r, color, frag["alpha"], half_plane=normal)

    def _draw_trail(
        self,
        img: np.ndarray,
        trail: Dict[str, Any],
        scale_x: float,
        scale_y: float
    ) -> None:
        points = trail["points"]
        if len(points) < 2 or trail["alpha"] <= 0.0:
            return

        pts = np.array(
            [(int(x * scale_x), int(y * scale_y)) for x, y in points],
            dtype=np.int32
        )
        thickness = max(1, int(trail["width"] * scale_x))

        overlay = img.copy()
        cv2.polylines(overlay, [pts], False, self._trail_color, thickness, cv2.LINE_AA)
        alpha = float(trail["alpha"])
        cv2.addWeighted(overlay, alpha, img, 1.0 - alpha, 0, dst=img)

    def _draw_hud(self, img: np.ndarray, render_data: Dict[str, Any], width: int) -> None:
        """Draw score (top left), lives (top right) and the game-over banner."""
        font = cv2.FONT_HERSHEY_SIMPLEX
        font_scale = 0.6
        thickness = 2

        score_text = f"Score: {render_data['score']}"
        lives_text = f"Lives: {render_data['lives']}"

        cv2.putText(img, score_text, (12, 27), font, font_scale, self._text_shadow, thickness + 1)
        cv2.putText(img, score_text, (10, 25), font, font_scale, self._text_color, thickness)

        text_size = cv2.getTextSize(lives_text, font, font_scale, thickness)[0]
        x = width - text_size[0] - 10
        cv2.putText(img, lives_text, (x + 2, 27), font, font_scale, self._text_shadow, thickness + 1)
        cv2.putText(img, lives_text, (x, 25), font, font_scale, self._text_color, thickness)

        if not render_data["running"]:
            banner = "GAME OVER"
            size = cv2.getTextSize(banner, font, 1.2, 3)[0]
            bx = (width - size[0]) // 2
            by = img.shape[0] // 2
            cv2.putText(img, banner, (bx, by), font, 1.2, self._game_over_color, 3)

    def _blend_circle(
        self,
        img: np.ndarray,
        cx: int,
        cy: int,
        radius: int,
        color: Tuple[int, int, int],
        alpha: float,
        half_plane: Optional[Tuple[float, float]] = None
    ) -> None:
        """
        Alpha-blend a filled circle using numpy.

        With half_plane=(nx, ny) only pixels on the side the normal points
        to are drawn.
        """
        height, width = img.shape[:2]

        y_min = max(0, cy - radius)
        y_max = min(height, cy + radius + 1)
        x_min = max(0, cx - radius)
        x_max = min(width, cx + radius + 1)

        if y_min >= y_max or x_min >= x_max or alpha <= 0.0:
            return

        y_coords = np.arange(y_min, y_max)
        x_coords = np.arange(x_min, x_max)
        yy, xx = np.meshgrid(y_coords, x_coords, indexing='ij')

        dx = xx - cx
        dy = yy - cy
        mask = dx * dx + dy * dy <= radius * radius
        if half_plane is not None:
            nx, ny = half_plane
            mask &= (dx * nx + dy * ny) >= 0.0

        region = img[y_min:y_max, x_min:x_max]
        c = np.array(color, dtype=np.float32)
        a = min(1.0, float(alpha))
        blended = region[mask].astype(np.float32) * (1.0 - a) + c * a
        region[mask] = blended.astype(np.uint8)

    def close(self) -> None:
        """Clean up resources (no-op for solid renderer)."""
        pass
