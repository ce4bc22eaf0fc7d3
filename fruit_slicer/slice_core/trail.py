"""
Trail Recorder
==============

Bounded, time-decaying polyline of recent pointer positions. Trails are
used both for slice detection and for the glow drawn behind the pointer.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from fruit_slicer.slice_core.config_loader import GameConfig, TrailConfig, get_config
from fruit_slicer.slice_core.collision import hits_polyline
from fruit_slicer.slice_core.vector import Vec2


@dataclass
class TrailPoint:
    """A recorded pointer position and its age in frames."""
    x: float
    y: float
    age: int = 0


class Trail:
    """
    One gesture: created on pointer-down, extended on move, released on up.

    Holds at most max_points points; appending past the bound evicts the
    oldest point. Points older than point_lifetime frames are dropped on
    update; while the pointer is held its newest point never ages, so a
    resting pointer keeps the start of its next cut. After release the alpha fades each frame and the trail becomes
    inactive once it reaches zero.
    """

    def __init__(
        self,
        x: float,
        y: float,
        config: Optional[GameConfig] = None
    ):
        if config is None:
            config = get_config()

        self._cfg: TrailConfig = config.trail
        self._points: Deque[TrailPoint] = deque(maxlen=self._cfg.max_points)
        self._points.append(TrailPoint(float(x), float(y)))
        self._drawing = True
        self.alpha: float = 1.0
        self.active: bool = True

    @property
    def max_points(self) -> int:
        return self._cfg.max_points

    @property
    def width(self) -> float:
        """Visual stroke width in pixels."""
        return self._cfg.width

    @property
    def is_drawing(self) -> bool:
        """True while the pointer that created this trail is held."""
        return self._drawing

    @property
    def points(self) -> List[Tuple[float, float]]:
        """Points from oldest to newest."""
        return [(p.x, p.y) for p in self._points]

    def __len__(self) -> int:
        return len(self._points)

    def add_point(self, x: float, y: float) -> None:
        """Append a pointer position. Ignored once the trail was released."""
        if not self._drawing:
            return
        self._points.append(TrailPoint(float(x), float(y)))

    def release(self) -> None:
        """Pointer lifted: stop accepting points and start fading."""
        self._drawing = False

    def update(self) -> bool:
        """
        Advance one frame.

        Returns:
            True while the trail is still active.
        """
        # A held pointer's newest point is its current position and does not age
        aging = list(self._points)
        if self._drawing:
            aging = aging[:-1]
        for p in aging:
            p.age += 1
        while self._points and self._points[0].age > self._cfg.point_lifetime:
            self._points.popleft()

        if not self._drawing:
            self.alpha = max(0.0, self.alpha - self._cfg.fade_rate)
            if self.alpha <= 0.0:
                self.active = False

        return self.active

    def direction(self) -> Vec2:
        """Unit direction of the most recent non-degenerate segment."""
        pts = self._points
        for i in range(len(pts) - 1, 0, -1):
            d = Vec2(pts[i].x - pts[i - 1].x, pts[i].y - pts[i - 1].y)
            if d.length() > 0.0:
                return d.normalized()
        return Vec2()

    def hits(self, center: Tuple[float, float], radius: float) -> bool:
        """True if a circle of the given radius touches the stroke."""
        if not self.active:
            return False
        return hits_polyline(center, radius + self._cfg.width / 2.0, self.points)
