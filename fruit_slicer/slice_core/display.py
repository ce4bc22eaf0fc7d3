"""
Display Sinks
=============

The only outputs the simulation pushes to its host: two numeric readouts
and a game-over panel. Hosts subclass DisplaySink; the base class ignores
every update so a headless game needs nothing.
"""

from __future__ import annotations

from typing import List, Optional


class DisplaySink:
    """No-op score/lives/game-over display."""

    def set_score(self, score: int) -> None:
        pass

    def set_lives(self, lives: int) -> None:
        pass

    def show_game_over(self, final_score: int) -> None:
        pass

    def hide_game_over(self) -> None:
        pass


class HudState(DisplaySink):
    """
    Display sink that just remembers the last values it was given.

    Renderers read it to draw the HUD.
    """

    def __init__(self):
        self.score: int = 0
        self.lives: int = 0
        self.game_over_visible: bool = False
        self.final_score: Optional[int] = None

    def set_score(self, score: int) -> None:
        self.score = int(score)

    def set_lives(self, lives: int) -> None:
        self.lives = int(lives)

    def show_game_over(self, final_score: int) -> None:
        self.game_over_visible = True
        self.final_score = int(final_score)

    def hide_game_over(self) -> None:
        self.game_over_visible = False
        self.final_score = None


class CompositeDisplay(DisplaySink):
    """Fans every update out to several sinks."""

    def __init__(self, sinks: List[DisplaySink]):
        self._sinks = list(sinks)

    def set_score(self, score: int) -> None:
        for sink in self._sinks:
            sink.set_score(score)

    def set_lives(self, lives: int) -> None:
        for sink in self._sinks:
            sink.set_lives(lives)

    def show_game_over(self, final_score: int) -> None:
        for sink in self._sinks:
            sink.show_game_over(final_score)

    def hide_game_over(self) -> None:
        for sink in self._sinks:
            sink.hide_game_over()
