"""
Collision Detection
===================

Point-to-polyline distance tests between collectible centers and trails.

A single straight cut (previous to current pointer position) is the
two-point case of the polyline test, so both go through the same code.
"""

from __future__ import annotations

from typing import Sequence, Tuple
import math

import numpy as np

Point = Tuple[float, float]


def point_segment_distance(point: Point, a: Point, b: Point) -> float:
    """
    Euclidean distance from point to the segment a-b.

    Projects onto the segment with the parameter clamped to [0, 1].
    A zero-length segment degrades to the distance to a.
    """
    px, py = point
    x1, y1 = a
    x2, y2 = b

    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy

    if length_sq == 0.0:
        return math.hypot(px - x1, py - y1)

    t = ((px - x1) * dx + (py - y1) * dy) / length_sq
    t = max(0.0, min(1.0, t))

    closest_x = x1 + t * dx
    closest_y = y1 + t * dy
    return math.hypot(px - closest_x, py - closest_y)


def polyline_distance(point: Point, points: Sequence[Point]) -> float:
    """
    Minimum distance from point to any segment of a polyline.

    Vectorized over all segments. Returns inf for an empty polyline and the
    point distance for a single vertex.
    """
    if len(points) == 0:
        return math.inf

    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    p = np.asarray(point, dtype=np.float64)

    if len(pts) == 1:
        return float(np.hypot(*(p - pts[0])))

    a = pts[:-1]
    d = pts[1:] - a
    length_sq = np.einsum("ij,ij->i", d, d)

    # Zero-length segments project onto their start point
    safe = np.where(length_sq > 0.0, length_sq, 1.0)
    t = np.einsum("ij,ij->i", p - a, d) / safe
    t = np.clip(np.where(length_sq > 0.0, t, 0.0), 0.0, 1.0)

    closest = a + d * t[:, None]
    dist = np.hypot(p[0] - closest[:, 0], p[1] - closest[:, 1])
    return float(dist.min())


def hits_polyline(center: Point, radius: float, points: Sequence[Point]) -> bool:
    """True if center lies strictly within radius of the polyline."""
    if len(points) < 2:
        return False
    return polyline_distance(center, points) < radius


def hits_segment(center: Point, size: float, p1: Point, p2: Point) -> bool:
    """Single-cut test: center within size/2 of the segment p1-p2."""
    return hits_polyline(center, size / 2.0, (p1, p2))
