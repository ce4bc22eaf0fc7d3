"""
Game Rules
==========

Game phases and the conditions that end a session.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

REASON_OUT_OF_LIVES = "out_of_lives"
REASON_BOMB = "bomb"


class GamePhase(Enum):
    RUNNING = auto()
    GAME_OVER = auto()


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class TerminationRules:
    """
    Handles game termination conditions.

    - Bomb: any bomb slice ends the session, whatever the lives
    - Lives: the session ends when lives reach zero
    """

    def check_termination(self, lives: int, bomb_sliced: bool) -> TerminationResult:
        """
        Check all termination conditions.

        Args:
            lives: Remaining lives after this frame's misses.
            bomb_sliced: True if a bomb was sliced this frame.

        Returns:
            TerminationResult indicating game state.
        """
        if bomb_sliced:
            return TerminationResult.game_over(REASON_BOMB)

        if lives <= 0:
            return TerminationResult.game_over(REASON_OUT_OF_LIVES)

        return TerminationResult.none()
