"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon

PointLike = Sequence[float]


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula for signed area of an open ring. Positive = CCW in y-up axes."""
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) < 3:
        return 0.0
    x = pts[:, 0]
    y = pts[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(points: NDArray[np.float64]) -> float:
    return abs(signed_area(points))


def polygon_centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Area-weighted centroid; falls back to the vertex mean for degenerate rings."""
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) == 0:
        return (0.0, 0.0)
    if len(pts) >= 3:
        poly = Polygon(pts)
        if poly.area > 1e-12:
            c = poly.centroid
            return (c.x, c.y)
    return (float(np.mean(pts[:, 0])), float(np.mean(pts[:, 1])))


def midpoint(a: PointLike, b: PointLike) -> tuple[int, int]:
    """Integer midpoint: the coordinate sum is truncated toward zero, then halved with a right shift.

    (0, 0) and (3, 3) give (1, 1).
    """
    return (int(a[0] + b[0]) >> 1, int(a[1] + b[1]) >> 1)


def touches_screen(polygon: Sequence[PointLike], width: float, height: float) -> bool:
    """True if any vertex lies in [0, width) × [0, height).

    A triangle whose edge crosses the screen while all three vertices are
    outside counts as not touching.
    """
    for x, y in polygon:
        if 0 <= x < width and 0 <= y < height:
            return True
    return False


def edge_lengths(triangle: NDArray[np.float64]) -> NDArray[np.float64]:
    tri = np.asarray(triangle, dtype=np.float64)
    return np.hypot(*(np.roll(tri, -1, axis=0) - tri).T)


def min_altitude(triangle: NDArray[np.float64]) -> float:
    """Smallest height of a triangle = 2·area / longest edge. 0 for degenerate triangles."""
    longest = float(np.max(edge_lengths(triangle)))
    if longest < 1e-12:
        return 0.0
    return 2.0 * polygon_area(triangle) / longest


def is_backward(a: PointLike, b: PointLike) -> bool:
    """Sign test on the direction a→b: true when its angle is in [-π, 0) or equals π.

    Exactly one of a→b and b→a is backward for distinct points.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return dy < 0 or (dy == 0 and dx < 0)


# ── Sutherland–Hodgman clipping ──


def _clip_half_plane(
    points: list[tuple[float, float]],
    inside: Callable[[tuple[float, float]], bool],
    intersect: Callable[[tuple[float, float], tuple[float, float]], tuple[float, float]],
) -> list[tuple[float, float]]:
    out: list[tuple[float, float]] = []
    if not points:
        return out
    prev = points[-1]
    prev_in = inside(prev)
    for cur in points:
        cur_in = inside(cur)
        if cur_in:
            if not prev_in:
                out.append(intersect(prev, cur))
            out.append(cur)
        elif prev_in:
            out.append(intersect(prev, cur))
        prev, prev_in = cur, cur_in
    return out


def _at_x(x: float) -> Callable[[tuple[float, float], tuple[float, float]], tuple[float, float]]:
    def intersect(p: tuple[float, float], q: tuple[float, float]) -> tuple[float, float]:
        t = (x - p[0]) / (q[0] - p[0])
        return (x, p[1] + t * (q[1] - p[1]))

    return intersect


def _at_y(y: float) -> Callable[[tuple[float, float], tuple[float, float]], tuple[float, float]]:
    def intersect(p: tuple[float, float], q: tuple[float, float]) -> tuple[float, float]:
        t = (y - p[1]) / (q[1] - p[1])
        return (p[0] + t * (q[0] - p[0]), y)

    return intersect


def clip_to_rect(
    polygon: Sequence[PointLike] | NDArray[np.float64],
    width: float,
    height: float,
) -> NDArray[np.float64]:
    """Clip a polygon to [0, width] × [0, height] one half-plane at a time.

    Returns an Nx2 array; empty (0×2) when nothing survives. A polygon that
    is already inside comes back with the same vertices in the same order.
    """
    pts = [(float(x), float(y)) for x, y in polygon]
    planes = (
        (lambda p: p[0] >= 0.0, _at_x(0.0)),
        (lambda p: p[0] <= width, _at_x(float(width))),
        (lambda p: p[1] >= 0.0, _at_y(0.0)),
        (lambda p: p[1] <= height, _at_y(float(height))),
    )
    for inside, intersect in planes:
        pts = _clip_half_plane(pts, inside, intersect)
        if not pts:
            return np.empty((0, 2))
    return np.asarray(pts, dtype=np.float64)


def rect_ring(x0: float, y0: float, x1: float, y1: float) -> NDArray[np.float64]:
    return np.array([[x0, y0], [x1, y0], [x1, y1], [x0, y1]], dtype=np.float64)
