"""Recursive triangle subdivision with blended midpoint colors.

Each call inserts the three edge midpoints of a triangle, gives each a color
mixed from the two endpoint colors, appends them to the shared site sink and
recurses into the four sub-triangles until the level runs out. A call at
``level`` therefore appends ``4**level - 1`` sites in total.
"""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from mosaic.utils.color import mix
from mosaic.utils.geometry import is_backward, midpoint, min_altitude

Point = tuple[float, float]
# (edge start, edge end, midpoint) → blend ratio toward the edge end
RatioFn = Callable[[Point, Point, Point], float]


class SiteSink(Protocol):
    def append(self, point: Point, color: str) -> int: ...


class RandomRatio:
    """Independent uniform ratio per midpoint."""

    def __init__(self, rng: random.Random, low: float = 0.25, high: float = 0.75) -> None:
        self.rng = rng
        self.low = low
        self.high = high

    def __call__(self, a: Point, b: Point, mid: Point) -> float:
        return self.low + self.rng.random() * (self.high - self.low)


class NoiseRatio:
    """Ratio from simplex noise at the midpoint, so neighbouring midpoints blend alike.

    The ratio is flipped for backward edges: the edge shared by two adjacent
    triangles is walked in opposite directions, and mix(a, b, v) equals
    mix(b, a, 1 - v), so both walks give the midpoint the same color.
    """

    def __init__(
        self,
        noise2: Callable[[float, float], float],
        frequency: float = 0.15,
        low: float = 0.15,
        high: float = 0.85,
    ) -> None:
        self.noise2 = noise2
        self.frequency = frequency
        self.low = low
        self.high = high

    def __call__(self, a: Point, b: Point, mid: Point) -> float:
        n = self.noise2(mid[0] * self.frequency, mid[1] * self.frequency)
        v = self.low + (n + 1.0) / 2.0 * (self.high - self.low)
        return 1.0 - v if is_backward(a, b) else v


def subdivide(
    sink: SiteSink,
    triangle: Sequence[Sequence[float]] | NDArray[np.float64],
    colors: Sequence[str],
    level: int,
    ratio: RatioFn,
) -> int:
    """Subdivide ``triangle`` ``level`` times, appending midpoints to ``sink``.

    Returns the number of calls made, (4**level - 1) / 3.
    """
    if level < 1:
        raise ValueError(f"Subdivision level must be >= 1, got {level}")

    p0, p1, p2 = ((v[0], v[1]) for v in triangle)
    c0, c1, c2 = colors

    p3 = midpoint(p0, p1)
    p4 = midpoint(p1, p2)
    p5 = midpoint(p2, p0)

    c3 = mix(c0, c1, ratio(p0, p1, p3))
    c4 = mix(c1, c2, ratio(p1, p2, p4))
    c5 = mix(c2, c0, ratio(p2, p0, p5))

    sink.append(p3, c3)
    sink.append(p4, c4)
    sink.append(p5, c5)

    calls = 1
    next_level = level - 1
    if next_level > 0:
        calls += subdivide(sink, (p0, p3, p5), (c0, c3, c5), next_level, ratio)
        calls += subdivide(sink, (p3, p1, p4), (c3, c1, c4), next_level, ratio)
        calls += subdivide(sink, (p5, p4, p2), (c5, c4, c2), next_level, ratio)
        calls += subdivide(sink, (p3, p4, p5), (c3, c4, c5), next_level, ratio)
    return calls


def expected_sites(level: int) -> int:
    """Sites appended by one top-level call: 3 per call × (4**level - 1) / 3 calls."""
    return 4**level - 1 if level > 0 else 0


# ── Split depth ──


def fixed_split_depth(rng: random.Random, base: int = 4, spread: int = 2) -> int:
    """base + floor(sqrt(r) * spread): with the defaults 4 or 5, biased toward 5."""
    return base + int(math.sqrt(rng.random()) * spread)


def altitude_split_depth(
    triangle: NDArray[np.float64],
    rng: random.Random,
    min_cell_size: float = 6.0,
    power: float = 0.5,
    floor: float = 0.5,
    max_depth: int = 6,
) -> int:
    """Depth from the triangle's smallest altitude; thin triangles get fewer splits.

    log2(h / min_cell_size) is the depth at which sub-triangles reach
    ``min_cell_size``; it is scaled by a random factor r**power mapped into
    [floor, 1] and clamped to [0, max_depth].
    """
    h = min_altitude(triangle)
    if h <= min_cell_size:
        return 0
    factor = floor + (1.0 - floor) * rng.random() ** power
    depth = int(math.log2(h / min_cell_size) * factor)
    return max(0, min(max_depth, depth))
