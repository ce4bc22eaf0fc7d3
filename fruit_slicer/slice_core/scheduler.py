"""
Frame Scheduler
===============

Drives SliceGame.tick() from a host clock with a fixed timestep.
"""

from __future__ import annotations

from typing import Callable, Optional

from fruit_slicer.slice_core.game import SliceGame, TickResult


class FrameScheduler:
    """
    Fixed-step accumulator around a SliceGame.

    The host reports elapsed wall time; the scheduler runs as many whole
    ticks as fit. The accumulator is clamped so a long stall does not
    trigger a burst of catch-up frames. No frames run once the game is
    over.
    """

    def __init__(
        self,
        game: SliceGame,
        tick_seconds: float = 1.0 / 60.0,
        max_catch_up: float = 0.2,
        on_frame: Optional[Callable[[TickResult], None]] = None
    ):
        """
        Args:
            game: Game to drive.
            tick_seconds: Wall time represented by one tick.
            max_catch_up: Maximum accumulated time carried between calls.
            on_frame: Called after every tick with its result.
        """
        if tick_seconds <= 0:
            raise ValueError(f"tick_seconds must be positive, got {tick_seconds}")

        self._game = game
        self._tick_seconds = float(tick_seconds)
        self._max_catch_up = float(max_catch_up)
        self._on_frame = on_frame
        self._accumulator = 0.0

    @property
    def game(self) -> SliceGame:
        return self._game

    @property
    def tick_seconds(self) -> float:
        return self._tick_seconds

    @property
    def accumulator(self) -> float:
        """Wall time not yet consumed by a tick."""
        return self._accumulator

    def advance(self, elapsed_seconds: float) -> int:
        """
        Consume host time.

        Args:
            elapsed_seconds: Wall time since the previous call.

        Returns:
            Number of ticks run.
        """
        if not self._game.running:
            self._accumulator = 0.0
            return 0

        self._accumulator = min(self._accumulator + max(0.0, elapsed_seconds), self._max_catch_up)

        ticks = 0
        while self._accumulator >= self._tick_seconds and self._game.running:
            self._accumulator -= self._tick_seconds
            self._step()
            ticks += 1
        return ticks

    def run_ticks(self, count: int) -> int:
        """Run up to count ticks, stopping early on game over."""
        ticks = 0
        while ticks < count and self._game.running:
            self._step()
            ticks += 1
        return ticks

    def reset(self) -> None:
        """Drop any accumulated time (after a restart or pause)."""
        self._accumulator = 0.0

    def _step(self) -> None:
        result = self._game.tick()
        if self._on_frame is not None:
            self._on_frame(result)
