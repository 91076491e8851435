"""Shared test fixtures."""

from __future__ import annotations

import math
import random

import numpy as np
import pytest

from mosaic.engine.config import PaintConfig
from mosaic.engine.pipeline import create_context, register_transforms

# Two colors far apart on the pigment wheel, so mixes are easy to tell apart
TWO_COLOR_PALETTE = ("#1e3a8a", "#f59e0b")

SCREEN_W = 800
SCREEN_H = 600

# A triangle comfortably inside an 800×600 screen
INSIDE_TRIANGLE = np.array([[100.0, 100.0], [400.0, 120.0], [250.0, 380.0]])


def fixed_noise(x: float, y: float) -> float:
    """Deterministic smooth stand-in for simplex noise, in [-1, 1]."""
    return math.sin(x * 1.3 + 0.5) * math.cos(y * 0.7 - 0.25)


@pytest.fixture(scope="session", autouse=True)
def _register_all_transforms() -> None:
    register_transforms()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def palette() -> tuple[str, ...]:
    return TWO_COLOR_PALETTE


@pytest.fixture
def basic_ctx():
    return create_context(
        SCREEN_W,
        SCREEN_H,
        config=PaintConfig.basic(point_count=20),
        seed=42,
        palette=TWO_COLOR_PALETTE,
        noise2=fixed_noise,
    )


@pytest.fixture
def advanced_ctx():
    return create_context(
        SCREEN_W,
        SCREEN_H,
        config=PaintConfig.advanced(point_count=20, blur_radius=20, max_split_depth=4),
        seed=42,
        palette=TWO_COLOR_PALETTE,
        noise2=fixed_noise,
    )
