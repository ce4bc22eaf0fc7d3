"""
Core Game
=========

Simulation loop combining spawning, physics, trails, slicing, scoring and rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, List, Dict, Any, Callable
import math
import random

from fruit_slicer.slice_core.config_loader import GameConfig, get_config
from fruit_slicer.slice_core.display import DisplaySink
from fruit_slicer.slice_core.entities import Collectible
from fruit_slicer.slice_core.kind_catalog import KindCatalog, get_catalog
from fruit_slicer.slice_core.particles import ParticleSystem
from fruit_slicer.slice_core.rules import GamePhase, TerminationRules
from fruit_slicer.slice_core.scoring import ScoreTracker, ScoreEvent
from fruit_slicer.slice_core.spawner import Spawner
from fruit_slicer.slice_core.trail import Trail
from fruit_slicer.slice_core.vector import Vec2


@dataclass
class TickResult:
    """Result of a single simulation frame."""
    ran: bool
    delta_score: int = 0
    score_events: List[ScoreEvent] = field(default_factory=list)
    sliced: List[Collectible] = field(default_factory=list)
    missed: int = 0
    spawned: Optional[Collectible] = None
    terminated: bool = False
    termination_reason: str = ""


class SliceGame:
    """
    Main game simulation class.

    Owns every entity collection and the session state. The host calls
    tick() once per frame and forwards pointer/touch input between frames;
    input only creates or extends trails, slicing is resolved inside tick().

    Frame order:
    - Advance and prune particles
    - Advance and prune trails
    - Slice whole collectibles touched by an active trail
    - Advance and prune fruits, then bombs
    - Take a life for every fruit that fell off the field
    - Maybe spawn a new collectible
    - Invoke the render callback (host clears and draws the frame)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        display: Optional[DisplaySink] = None,
        render_callback: Optional[Callable[[], None]] = None,
        debug: bool = False
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility.
            display: Score/lives/game-over sink. Headless if None.
            render_callback: Optional callback invoked at the end of each tick.
            debug: If True, prints state transitions.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._display = display if display is not None else DisplaySink()
        self._render_callback = render_callback
        self._debug = debug

        # Subsystems
        self._catalog = get_catalog(config)
        self._spawner = Spawner(config, seed)
        self._scorer = ScoreTracker(config)
        self._rules = TerminationRules()
        self._particles = ParticleSystem(config, rng=random.Random(seed))

        # Field size (host may resize)
        self._width = float(config.board.width)
        self._height = float(config.board.height)

        # Entity collections
        self._fruits: List[Collectible] = []
        self._bombs: List[Collectible] = []
        self._trails: List[Trail] = []
        self._current_trail: Optional[Trail] = None

        # Session state
        self._phase = GamePhase.RUNNING
        self._termination_reason: str = ""
        self._tick_count: int = 0

        self._push_display()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def catalog(self) -> KindCatalog:
        """Kind catalog."""
        return self._catalog

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def lives(self) -> int:
        """Remaining lives."""
        return self._scorer.lives

    @property
    def running(self) -> bool:
        """True while frames are being simulated."""
        return self._phase is GamePhase.RUNNING

    @property
    def is_over(self) -> bool:
        """True if game has ended."""
        return self._phase is GamePhase.GAME_OVER

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._termination_reason

    @property
    def tick_count(self) -> int:
        """Frames simulated since the last restart."""
        return self._tick_count

    @property
    def field_size(self) -> Tuple[float, float]:
        return (self._width, self._height)

    @property
    def fruits(self) -> Tuple[Collectible, ...]:
        return tuple(self._fruits)

    @property
    def bombs(self) -> Tuple[Collectible, ...]:
        return tuple(self._bombs)

    @property
    def trails(self) -> Tuple[Trail, ...]:
        return tuple(self._trails)

    @property
    def particles(self) -> ParticleSystem:
        return self._particles

    @property
    def scorer(self) -> ScoreTracker:
        return self._scorer

    def resize(self, width: float, height: float) -> None:
        """Apply a new field size from the host."""
        if not (width > 0 and height > 0):
            raise ValueError(f"Field size must be positive, got {width}x{height}")
        self._width = float(width)
        self._height = float(height)

    def restart(self, seed: Optional[int] = None) -> None:
        """
        Start a fresh session.

        Clears every collection, resets score and lives and resumes frames.

        Args:
            seed: New random seed. Keeps the current RNG stream if None.
        """
        if seed is not None:
            self._seed = seed
            self._particles = ParticleSystem(self._config, rng=random.Random(seed))
        else:
            self._particles.clear()

        self._spawner.reset(seed)
        self._scorer.reset()

        self._fruits = []
        self._bombs = []
        self._trails = []
        self._current_trail = None

        self._phase = GamePhase.RUNNING
        self._termination_reason = ""
        self._tick_count = 0

        self._push_display()
        self._display.hide_game_over()

        if self._debug:
            print(f"[DEBUG] Restart (seed={self._seed})")

    def add_collectible(self, collectible: Collectible) -> None:
        """Insert a collectible into the fruit or bomb collection."""
        if collectible.is_bomb:
            self._bombs.append(collectible)
        else:
            self._fruits.append(collectible)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _clamp_point(self, x: float, y: float) -> Optional[Tuple[float, float]]:
        """Clamp into the field; None for non-numeric or non-finite input."""
        try:
            x = float(x)
            y = float(y)
        except (TypeError, ValueError):
            return None
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        return (min(max(x, 0.0), self._width), min(max(y, 0.0), self._height))

    def pointer_down(self, x: float, y: float) -> None:
        """Start a new gesture trail."""
        if not self.running:
            return
        point = self._clamp_point(x, y)
        if point is None:
            return
        if self._current_trail is not None:
            self._current_trail.release()
        self._current_trail = Trail(point[0], point[1], self._config)
        self._trails.append(self._current_trail)

    def pointer_move(self, x: float, y: float) -> None:
        """Extend the current gesture. Moves without a pressed pointer are ignored."""
        if not self.running or self._current_trail is None:
            return
        point = self._clamp_point(x, y)
        if point is None:
            return
        self._current_trail.add_point(point[0], point[1])

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        """End the current gesture, optionally recording the release point."""
        if self._current_trail is None:
            return
        if x is not None and y is not None:
            point = self._clamp_point(x, y)
            if point is not None:
                self._current_trail.add_point(point[0], point[1])
        self._current_trail.release()
        self._current_trail = None

    def touch_start(self, x: float, y: float) -> None:
        self.pointer_down(x, y)

    def touch_move(self, x: float, y: float) -> None:
        self.pointer_move(x, y)

    def touch_end(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        self.pointer_up(x, y)

    def touch_cancel(self) -> None:
        self.pointer_up()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self) -> TickResult:
        """
        Advance the simulation by one frame.

        Returns:
            TickResult describing what happened. ran is False when the game
            is over and nothing was simulated.
        """
        if not self.running:
            return TickResult(
                ran=False,
                terminated=True,
                termination_reason=self._termination_reason
            )

        result = TickResult(ran=True)
        score_before = self._scorer.score

        self._particles.update()
        self._update_trails()

        bomb_sliced = self._resolve_slices(result)
        if bomb_sliced:
            self._finish_tick(result, score_before)
            return result

        self._fruits, missed = self._advance(self._fruits)
        self._bombs, _ = self._advance(self._bombs)

        for _ in missed:
            self._scorer.apply_miss()
            self._display.set_lives(self._scorer.lives)
        result.missed = len(missed)

        term = self._rules.check_termination(self._scorer.lives, bomb_sliced=False)
        if term.terminated:
            self._enter_game_over(term.reason)
            self._finish_tick(result, score_before)
            return result

        spawned = self._spawner.maybe_spawn(self._width, self._height)
        if spawned is not None:
            self.add_collectible(spawned)
            result.spawned = spawned

        self._finish_tick(result, score_before)
        return result

    def _finish_tick(self, result: TickResult, score_before: int) -> None:
        self._tick_count += 1
        result.delta_score = self._scorer.score - score_before
        result.terminated = self.is_over
        result.termination_reason = self._termination_reason
        if self._render_callback is not None:
            self._render_callback()

    def _update_trails(self) -> None:
        self._trails = [t for t in self._trails if t.update()]
        if self._current_trail is not None and not self._current_trail.active:
            self._current_trail = None

    def _resolve_slices(self, result: TickResult) -> bool:
        """
        Slice every whole collectible touched by an active trail.

        Returns:
            True if a bomb was sliced (the session is then over).
        """
        trails = [t for t in self._trails if t.active and len(t) >= 2]
        if not trails:
            return False

        for collectible in self._fruits + self._bombs:
            if collectible.sliced:
                continue
            center = collectible.position.as_tuple()
            for trail in trails:
                if trail.hits(center, collectible.radius):
                    self._slice(collectible, trail.direction(), result)
                    break
            if collectible.is_bomb and collectible.sliced:
                term = self._rules.check_termination(self._scorer.lives, bomb_sliced=True)
                self._enter_game_over(term.reason)
                return True
        return False

    def _slice(self, collectible: Collectible, direction: Vec2, result: TickResult) -> None:
        if not collectible.slice(direction, self._config.slice):
            return
        result.sliced.append(collectible)
        self._particles.burst(
            collectible.position,
            self._catalog.color_juice(collectible.kind)
        )
        if not collectible.is_bomb:
            event = self._scorer.apply_slice(collectible.kind)
            result.score_events.append(event)
            self._display.set_score(self._scorer.score)

    def _advance(self, collectibles: List[Collectible]) -> Tuple[List[Collectible], List[Collectible]]:
        """
        Update collectibles and split them into survivors and misses.

        A miss is a whole, non-bomb collectible that left the field.
        """
        fragment_cfg = self._config.fragment
        kept: List[Collectible] = []
        missed: List[Collectible] = []
        for collectible in collectibles:
            if collectible.update(self._width, self._height, fragment_cfg):
                kept.append(collectible)
            elif not collectible.is_bomb and collectible.has_left_field(self._height):
                missed.append(collectible)
        return kept, missed

    def _enter_game_over(self, reason: str) -> None:
        self._phase = GamePhase.GAME_OVER
        self._termination_reason = reason
        if self._current_trail is not None:
            self._current_trail.release()
            self._current_trail = None
        self._display.show_game_over(self._scorer.score)
        if self._debug:
            print(f"[DEBUG] Game over: {reason} (score={self._scorer.score}, tick={self._tick_count})")

    def _push_display(self) -> None:
        self._display.set_score(self._scorer.score)
        self._display.set_lives(self._scorer.lives)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "lives": self._scorer.lives,
            "slices": self._scorer.slices,
            "misses": self._scorer.misses,
            "tick": self._tick_count,
            "game_over_reason": self._termination_reason,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with entities, fragments, trails, particles and HUD values.
        """
        def collectible_data(c: Collectible) -> Dict[str, Any]:
            kind_type = self._catalog[c.kind]
            return {
                "uid": c.uid,
                "kind": c.kind,
                "glyph": kind_type.glyph,
                "color_solid": kind_type.color_solid,
                "x": c.x,
                "y": c.y,
                "angle": c.body.rotation,
                "size": c.size,
                "sliced": c.sliced,
                "fragments": [
                    {
                        "x": f.position.x,
                        "y": f.position.y,
                        "angle": f.rotation,
                        "alpha": f.alpha,
                        "scale": f.scale,
                        "side": f.side.value,
                    }
                    for f in c.fragments
                ],
            }

        return {
            "field_width": self._width,
            "field_height": self._height,
            "fruits": [collectible_data(c) for c in self._fruits],
            "bombs": [collectible_data(c) for c in self._bombs],
            "trails": [
                {"points": t.points, "alpha": t.alpha, "width": t.width}
                for t in self._trails
            ],
            "particles": [
                {
                    "x": p.position.x,
                    "y": p.position.y,
                    "size": p.size,
                    "alpha": p.alpha,
                    "color": p.color,
                }
                for p in self._particles
            ],
            "score": self._scorer.score,
            "lives": self._scorer.lives,
            "running": self.running,
            "game_over_reason": self._termination_reason,
        }
