"""
Scoring System
==============

Tracks score and lives. Score only increases; lives only decrease.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fruit_slicer.slice_core.config_loader import GameConfig, get_config
from fruit_slicer.slice_core.kind_catalog import EntityKind


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    kind: EntityKind
    total: int

    def __repr__(self) -> str:
        return f"ScoreEvent({self.kind.value}=+{self.points}, total={self.total})"


class ScoreTracker:
    """
    Session score and lives.

    A sliced fruit is worth a flat slice_points, awarded once per fruit.
    Each missed fruit costs exactly one life.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._score: int = 0
        self._lives: int = config.scoring.starting_lives
        self._slices: int = 0
        self._misses: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def lives(self) -> int:
        """Remaining lives."""
        return self._lives

    @property
    def slices(self) -> int:
        """Fruits sliced this session."""
        return self._slices

    @property
    def misses(self) -> int:
        """Fruits that fell off the field unsliced."""
        return self._misses

    def apply_slice(self, kind: EntityKind) -> ScoreEvent:
        """
        Award points for a sliced fruit.

        Raises:
            ValueError: If kind is a bomb (bombs never score).
        """
        if kind.is_bomb:
            raise ValueError("Bombs do not score")
        points = self._config.scoring.slice_points
        self._score += points
        self._slices += 1
        return ScoreEvent(points=points, kind=kind, total=self._score)

    def apply_miss(self) -> int:
        """Take one life for a missed fruit. Returns remaining lives."""
        self._misses += 1
        self._lives = max(0, self._lives - 1)
        return self._lives

    def reset(self) -> None:
        """Reset score and lives."""
        self._score = 0
        self._lives = self._config.scoring.starting_lives
        self._slices = 0
        self._misses = 0
