"""Geometry helper functions used across the package."""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

from .models import Point


def points_close(a: Point, b: Point, tol: float) -> bool:
    """True when *a* and *b* agree to within *tol* on both axes."""
    return abs(a[0] - b[0]) <= tol and abs(a[1] - b[1]) <= tol


def polygon_signed_area(points: Sequence[Point]) -> float:
    """Signed area of a closed polygon via the shoelace formula.

    Returns a positive value if vertices are wound counter-clockwise,
    negative if clockwise.
    """
    n = len(points)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area / 2.0


def polyline_length(points: Sequence[Point], closed: bool = False) -> float:
    """Total Euclidean length of a polyline."""
    n = len(points)
    if n < 2:
        return 0.0
    total = 0.0
    last = n if closed else n - 1
    for i in range(last):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        total += math.hypot(x2 - x1, y2 - y1)
    return total


def bounding_box(points: Iterable[Point]) -> Tuple[float, float, float, float]:
    """Return ``(min_x, min_y, max_x, max_y)``."""
    pts = list(points)
    if not pts:
        raise ValueError("bounding_box needs at least one point")
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    return min(xs), min(ys), max(xs), max(ys)


def unique_points(points: Iterable[Point], tol: float) -> List[Point]:
    """Points with near-duplicates (within *tol*) removed, first-seen order kept."""
    result: List[Point] = []
    for p in points:
        if not any(points_close(p, q, tol) for q in result):
            result.append(p)
    return result
