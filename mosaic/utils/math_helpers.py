"""Math helpers — clamp, easing, min-max scaling, random picks. No engine imports."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

T = TypeVar("T")


def clamp(value: float, max_value: float = 1.0) -> float:
    """Clamp to [0, max_value]."""
    if value < 0:
        return 0.0
    if value > max_value:
        return max_value
    return value


def ease_out_quad(t: float) -> float:
    """Decelerating quadratic: 0 → 0, 1 → 1, slope 2 at the start and 0 at the end."""
    return t * (2 - t)


def min_max_normalize(values: Sequence[float] | NDArray[np.float64]) -> NDArray[np.float64]:
    """Scale values into [0, 1]. A constant sequence maps to all ones."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return arr
    lo = float(np.min(arr))
    span = float(np.max(arr)) - lo
    if span < 1e-12:
        return np.ones_like(arr)
    return (arr - lo) / span


def choice(items: Sequence[T], rng: random.Random) -> T:
    """Uniform pick: items[floor(r * len)]."""
    if not items:
        raise ValueError("Cannot pick from an empty sequence")
    return items[int(rng.random() * len(items))]
