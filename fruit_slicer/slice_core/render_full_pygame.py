"""
Full Pygame Renderer
====================

Glyph-based renderer using pygame. Draws kinds as text glyphs over shaded
discs, sliced halves as rotated half-glyphs, a glowing trail, juice
particles, the HUD and the game-over panel.
Supports both display mode (human play) and headless RGB output.
"""

from __future__ import annotations

import math
from typing import Dict, Any, Optional, Tuple

import numpy as np
import pygame

from fruit_slicer.slice_core.config_loader import GameConfig, get_config
from fruit_slicer.slice_core.display import HudState
from fruit_slicer.slice_core.kind_catalog import EntityKind

EMOJI_FONTS = "segoeuiemoji,applecoloremoji,notocoloremoji,notoemoji,symbola"


class PygameRenderer:
    """
    Full-featured renderer using pygame.

    The HUD numbers come from the renderer's own HudState, which the game
    updates through the DisplaySink interface.
    """

    def __init__(self, config: Optional[GameConfig] = None, hud: Optional[HudState] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
            hud: Display sink holding score/lives/game-over. Created if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self.hud = hud if hud is not None else HudState()

        if not pygame.get_init():
            pygame.init()

        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        pygame.font.init()
        self._font = pygame.font.Font(None, 32)
        self._font_large = pygame.font.Font(None, 72)
        self._font_small = pygame.font.Font(None, 24)

        self._bg_top = (40, 24, 20)
        self._bg_bottom = (70, 45, 30)
        self._text_color = (255, 245, 225)
        self._text_shadow = (20, 10, 10)
        self._panel_fill = (255, 248, 235)
        self._panel_border = (200, 150, 90)
        self._trail_color = (255, 255, 255)

        # Rendered glyphs keyed by (kind, pixel size)
        self._glyph_cache: Dict[Tuple[EntityKind, int], pygame.Surface] = {}
        self._bg_cache: Dict[Tuple[int, int], pygame.Surface] = {}

    # ------------------------------------------------------------------
    # Output targets
    # ------------------------------------------------------------------

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self.draw(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(
        self,
        render_data: Dict[str, Any],
        window_width: Optional[int] = None,
        window_height: Optional[int] = None
    ) -> None:
        """Render to a pygame window, creating it on demand."""
        if window_width is None:
            window_width = int(render_data["field_width"])
        if window_height is None:
            window_height = int(render_data["field_height"])

        if self._screen is None or self._screen_size != (window_width, window_height):
            self._screen = pygame.display.set_mode((window_width, window_height))
            self._screen_size = (window_width, window_height)
            pygame.display.set_caption("Fruit Slicer")

        self.draw(self._screen, render_data)
        pygame.display.flip()

    def draw(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Clear the surface and draw one complete frame."""
        width, height = surface.get_size()
        sx = width / render_data["field_width"]
        sy = height / render_data["field_height"]

        surface.blit(self._background(width, height), (0, 0))

        self._draw_particles(surface, render_data, sx, sy)
        self._draw_trails(surface, render_data, sx, sy)
        for collectible in render_data["fruits"]:
            self._draw_collectible(surface, collectible, sx, sy)
        for collectible in render_data["bombs"]:
            self._draw_collectible(surface, collectible, sx, sy)

        self._draw_hud(surface)
        if self.hud.game_over_visible:
            self._draw_game_over(surface)

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------

    def _background(self, width: int, height: int) -> pygame.Surface:
        key = (width, height)
        if key not in self._bg_cache:
            surface = pygame.Surface((width, height))
            for y in range(height):
                t = y / max(1, height)
                color = tuple(
                    int(a * (1 - t) + b * t) for a, b in zip(self._bg_top, self._bg_bottom)
                )
                pygame.draw.line(surface, color, (0, y), (width, y))
            self._bg_cache[key] = surface
        return self._bg_cache[key]

    def _draw_particles(self, surface: pygame.Surface, render_data: dict, sx: float, sy: float) -> None:
        for p in render_data["particles"]:
            radius = max(1, int(p["size"] * sx))
            dot = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(dot, (*p["color"], int(255 * p["alpha"])), (radius, radius), radius)
            surface.blit(dot, (int(p["x"] * sx) - radius, int(p["y"] * sy) - radius))

    def _draw_trails(self, surface: pygame.Surface, render_data: dict, sx: float, sy: float) -> None:
        width, height = surface.get_size()
        for trail in render_data["trails"]:
            points = [(int(x * sx), int(y * sy)) for x, y in trail["points"]]
            if len(points) < 2 or trail["alpha"] <= 0.0:
                continue
            layer = pygame.Surface((width, height), pygame.SRCALPHA)
            stroke = max(1, int(trail["width"] * sx))
            alpha = trail["alpha"]
            # Glow: wide faint stroke under a thin bright core, thinning toward the tail
            for i in range(1, len(points)):
                t = i / (len(points) - 1)
                glow_w = max(1, int(stroke * 2 * t))
                core_w = max(1, int(stroke * t))
                pygame.draw.line(layer, (*self._trail_color, int(70 * alpha)), points[i - 1], points[i], glow_w)
                pygame.draw.line(layer, (*self._trail_color, int(230 * alpha)), points[i - 1], points[i], core_w)
            surface.blit(layer, (0, 0))

    def _draw_collectible(self, surface: pygame.Surface, data: dict, sx: float, sy: float) -> None:
        size = max(4, int(data["size"] * sx))
        glyph = self._glyph(data["kind"], data["glyph"], data["color_solid"], size)

        if not data["sliced"]:
            rotated = pygame.transform.rotate(glyph, -math.degrees(data["angle"]))
            rect = rotated.get_rect(center=(int(data["x"] * sx), int(data["y"] * sy)))
            surface.blit(rotated, rect)
            return

        half_w = glyph.get_width() // 2
        for frag in data["fragments"]:
            left = frag["side"] < 0
            area = pygame.Rect(0 if left else half_w, 0, half_w, glyph.get_height())
            half = glyph.subsurface(area).copy()
            frag_size = max(1, int(half.get_width() * frag["scale"])), max(1, int(half.get_height() * frag["scale"]))
            half = pygame.transform.smoothscale(half, frag_size)
            half = pygame.transform.rotate(half, -math.degrees(frag["angle"]))
            half.set_alpha(int(255 * frag["alpha"]))
            rect = half.get_rect(center=(int(frag["x"] * sx), int(frag["y"] * sy)))
            surface.blit(half, rect)

    def _draw_hud(self, surface: pygame.Surface) -> None:
        width = surface.get_width()

        score = self._font.render(f"Score: {self.hud.score}", True, self._text_color)
        shadow = self._font.render(f"Score: {self.hud.score}", True, self._text_shadow)
        surface.blit(shadow, (14, 14))
        surface.blit(score, (12, 12))

        # Lives as small hearts-style discs
        radius = 8
        for i in range(self.hud.lives):
            cx = width - 20 - i * (radius * 2 + 6)
            pygame.draw.circle(surface, (220, 40, 60), (cx, 22), radius)
            pygame.draw.circle(surface, (255, 160, 170), (cx - 3, 19), radius // 3)

    def _draw_game_over(self, surface: pygame.Surface) -> None:
        width, height = surface.get_size()

        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        surface.blit(overlay, (0, 0))

        box_w, box_h = 320, 190
        box_x = (width - box_w) // 2
        box_y = (height - box_h) // 2
        pygame.draw.rect(surface, self._panel_fill, (box_x, box_y, box_w, box_h), border_radius=16)
        pygame.draw.rect(surface, self._panel_border, (box_x, box_y, box_w, box_h), 3, border_radius=16)

        dark = (80, 50, 30)
        title = self._font_large.render("GAME OVER", True, dark)
        surface.blit(title, (box_x + (box_w - title.get_width()) // 2, box_y + 25))

        final = self.hud.final_score if self.hud.final_score is not None else self.hud.score
        score_text = self._font.render(f"Score: {final:,}", True, dark)
        surface.blit(score_text, (box_x + (box_w - score_text.get_width()) // 2, box_y + 95))

        hint = self._font_small.render("Press R to restart", True, (140, 110, 80))
        surface.blit(hint, (box_x + (box_w - hint.get_width()) // 2, box_y + 145))

    # ------------------------------------------------------------------
    # Glyphs
    # ------------------------------------------------------------------

    def _glyph(
        self,
        kind: EntityKind,
        text: str,
        color: Tuple[int, int, int],
        size: int
    ) -> pygame.Surface:
        """Shaded disc with the kind's text glyph on top, cached per size."""
        key = (kind, size)
        if key in self._glyph_cache:
            return self._glyph_cache[key]

        surf = pygame.Surface((size, size), pygame.SRCALPHA)
        radius = size // 2
        for r in range(radius, 0, -1):
            brightness = 0.7 + 0.3 * (r / radius)
            c = tuple(int(min(255, ch * brightness)) for ch in color)
            pygame.draw.circle(surf, c, (radius, radius), r)
        pygame.draw.circle(surf, tuple(min(255, ch + 60) for ch in color),
                           (radius - radius // 3, radius - radius // 3), max(1, radius // 4))

        font = pygame.font.SysFont(EMOJI_FONTS, int(size * 0.7))
        label = font.render(text, True, (255, 255, 255))
        if label.get_width() > 0:
            surf.blit(label, label.get_rect(center=(radius, radius)))

        self._glyph_cache[key] = surf
        return surf

    def close(self) -> None:
        """Release the window."""
        if self._screen is not None:
            pygame.display.quit()
            self._screen = None
            self._screen_size = None
