"""
Human Play Mode
================

Play the slicing game interactively with mouse or touch.

Controls:
    - Hold the mouse button (or a finger) and swipe: slice
    - R: Restart game
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional, Tuple

import pygame

from fruit_slicer.slice_core.config_loader import load_config, GameConfig
from fruit_slicer.slice_core.display import CompositeDisplay, DisplaySink, HudState
from fruit_slicer.slice_core.game import SliceGame
from fruit_slicer.slice_core.render_full_pygame import PygameRenderer
from fruit_slicer.slice_core.scheduler import FrameScheduler


class ConsoleDisplay(DisplaySink):
    """Echo score changes and game over to stdout."""

    def __init__(self):
        self._last_score = 0

    def set_score(self, score: int) -> None:
        if score > self._last_score:
            print(f"  +{score - self._last_score} (Total: {score})")
        self._last_score = score

    def set_lives(self, lives: int) -> None:
        print(f"  Lives: {lives}")

    def show_game_over(self, final_score: int) -> None:
        print(f"\nGAME OVER - Score: {final_score}")


class HumanPlayer:
    """
    Interactive game with real-time frames.

    The window size is the field size: resizing the window resizes the
    field, so window pixels and field coordinates always coincide.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: Optional[int] = None,
        window_height: Optional[int] = None,
        target_fps: int = 60
    ):
        if config is None:
            config = load_config()

        self._config = config
        self._seed = seed
        self._target_fps = target_fps
        width = window_width or config.board.width
        height = window_height or config.board.height

        pygame.init()
        self._screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption("Fruit Slicer")
        self._clock = pygame.time.Clock()

        self._hud = HudState()
        self._renderer = PygameRenderer(config, hud=self._hud)

        display = CompositeDisplay([self._hud, ConsoleDisplay()])
        self._game = SliceGame(config=config, seed=seed, display=display)
        self._game.resize(width, height)
        self._scheduler = FrameScheduler(self._game, tick_seconds=1.0 / 60.0)

        self._running = True
        self._last_time = time.time()

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Fruit Slicer ===")
        print("Hold and swipe to slice. Avoid the bombs!")
        print("R to restart, ESC to quit")
        print()

        while self._running:
            self._handle_events()

            now = time.time()
            self._scheduler.advance(now - self._last_time)
            self._last_time = now

            self._render()
            self._clock.tick(self._target_fps)

        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._restart()

            elif event.type == pygame.VIDEORESIZE:
                self._screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self._game.resize(event.w, event.h)

            # Touch events also arrive as synthesized mouse events; skip those
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
                self._game.pointer_down(*event.pos)
            elif event.type == pygame.MOUSEMOTION and not getattr(event, "touch", False):
                self._game.pointer_move(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and not getattr(event, "touch", False):
                self._game.pointer_up(*event.pos)

            elif event.type == pygame.FINGERDOWN:
                self._game.touch_start(*self._finger_pos(event))
            elif event.type == pygame.FINGERMOTION:
                self._game.touch_move(*self._finger_pos(event))
            elif event.type == pygame.FINGERUP:
                self._game.touch_end(*self._finger_pos(event))

            elif event.type == pygame.WINDOWFOCUSLOST:
                self._game.touch_cancel()

    def _finger_pos(self, event) -> Tuple[float, float]:
        """Finger events carry normalized coordinates."""
        width, height = self._screen.get_size()
        return event.x * width, event.y * height

    def _restart(self) -> None:
        """Restart the game."""
        self._game.restart(seed=self._seed)
        self._scheduler.reset()
        self._last_time = time.time()
        print("\n=== Game Restarted ===\n")

    def _render(self) -> None:
        self._renderer.draw(self._screen, self._game.get_render_data())
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play the fruit slicing game interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--width", type=int, default=None, help="Window width (default: from config)")
    parser.add_argument("--height", type=int, default=None, help="Window height (default: from config)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")

    args = parser.parse_args()

    config = load_config()
    player = HumanPlayer(
        config=config,
        seed=args.seed,
        window_width=args.width,
        window_height=args.height,
        target_fps=args.fps
    )
    score = player.run()
    print(f"\nFinal Score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
