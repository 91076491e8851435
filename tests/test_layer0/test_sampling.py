"""Tests for Layer 0: palette selection and random sites."""

from __future__ import annotations

import random

import numpy as np

from mosaic.engine.context import PaintContext
from mosaic.engine.layer0.t0_01_palette import palette_selection
from mosaic.engine.layer0.t0_02_random_sites import random_sites, sample_sites, site_count
from mosaic.palettes import ALL_PALETTES_WITH_BLACK
from tests.conftest import SCREEN_H, SCREEN_W, TWO_COLOR_PALETTE


def test_site_count_formula():
    # 1920 * 1.5 * 1.5 * 1080 / 150000 = 31.1
    assert site_count(1920, 1080, 1.5, 150000) == 31
    assert site_count(800, 600, 1.5, 150000) == 7
    assert site_count(10, 10, 1.5, 150000) == 0


def test_sample_sites_bounds_and_colors(rng):
    cloud = sample_sites(TWO_COLOR_PALETTE, 500, SCREEN_W, SCREEN_H, 1.5, rng)
    pts = cloud.points
    assert len(cloud) == 500
    assert pts[:, 0].min() >= -200 and pts[:, 0].max() < 1000
    assert pts[:, 1].min() >= -150 and pts[:, 1].max() < 750
    assert set(cloud.colors) == set(TWO_COLOR_PALETTE)


def test_sample_sites_reproducible():
    a = sample_sites(TWO_COLOR_PALETTE, 30, 100, 100, 1.5, random.Random(8))
    b = sample_sites(TWO_COLOR_PALETTE, 30, 100, 100, 1.5, random.Random(8))
    np.testing.assert_array_equal(a.points, b.points)
    assert a.colors == b.colors


def test_zero_sites(rng):
    assert len(sample_sites(TWO_COLOR_PALETTE, 0, 100, 100, 1.5, rng)) == 0


def test_palette_selection_draws_known_palette():
    ctx = PaintContext(rng=random.Random(2))
    palette_selection(ctx)
    assert ctx.palette in ALL_PALETTES_WITH_BLACK


def test_palette_selection_keeps_given_palette(basic_ctx):
    palette_selection(basic_ctx)
    assert basic_ctx.palette == TWO_COLOR_PALETTE


def test_random_sites_uses_point_count(basic_ctx):
    palette_selection(basic_ctx)
    random_sites(basic_ctx)
    assert len(basic_ctx.cloud) == 20
    assert basic_ctx.stats["initial_sites"] == 20


def test_random_sites_defaults_to_screen_area():
    ctx = PaintContext(width=1920, height=1080, rng=random.Random(0), palette=TWO_COLOR_PALETTE)
    random_sites(ctx)
    assert len(ctx.cloud) == 31
