"""Tests for Layer 4: painting, the area mask and the soft glow."""

from __future__ import annotations

import numpy as np
import pytest

from mosaic.engine.layer4.t4_01_paint_cells import paint_cells
from mosaic.engine.layer4.t4_02_area_mask import area_mask, area_shades
from mosaic.engine.layer4.t4_03_soft_glow import soft_glow, transfer_alpha
from mosaic.utils.surface import Surface


def _two_cells(ctx):
    ctx.clipped = [
        np.array([[0, 0], [400, 0], [400, 600], [0, 600]], dtype=float),
        np.array([[400, 0], [500, 0], [500, 100], [400, 100]], dtype=float),
    ]
    ctx.clipped_colors = ["#ff0000", "#0000ff"]
    ctx.areas = [240000.0, 10000.0]
    return ctx


def test_area_shades_ease_and_scale():
    shades = area_shades([10.0, 20.0, 30.0])
    assert shades == [0, 191, 255]


def test_area_shades_equal_areas_are_white():
    assert area_shades([5.0, 5.0, 5.0]) == [255, 255, 255]
    assert area_shades([]) == []


def test_paint_cells_fills_colors(basic_ctx):
    ctx = _two_cells(basic_ctx)
    paint_cells(ctx)
    data = ctx.canvas.get_image_data()
    assert tuple(data[300, 200, :3]) == (255, 0, 0)
    assert tuple(data[50, 450, :3]) == (0, 0, 255)
    assert tuple(data[300, 700, :3]) == (0, 0, 0)
    assert ctx.render is not None


def test_area_mask_brightest_for_largest(advanced_ctx):
    ctx = _two_cells(advanced_ctx)
    area_mask(ctx)
    data = ctx.mask.get_image_data()
    assert tuple(data[300, 200, :3]) == (255, 255, 255)
    assert tuple(data[50, 450, :3]) == (0, 0, 0)


def test_transfer_alpha_copies_green():
    target = Surface(4, 2, fill="#ff0000")
    mask = Surface(4, 2, fill=(10, 77, 200, 255))
    transfer_alpha(target, mask)
    data = target.get_image_data()
    assert np.all(data[..., 3] == 77)
    assert np.all(data[..., 0] == 255)


def test_transfer_alpha_size_mismatch():
    with pytest.raises(ValueError):
        transfer_alpha(Surface(4, 2), Surface(2, 4))


def test_soft_glow_needs_render_and_mask(advanced_ctx):
    with pytest.raises(ValueError):
        soft_glow(advanced_ctx)


def test_soft_glow_bleeds_large_cells(advanced_ctx):
    ctx = _two_cells(advanced_ctx)
    paint_cells(ctx)
    area_mask(ctx)
    before = ctx.canvas.get_image_data().copy()
    soft_glow(ctx)
    after = ctx.canvas.get_image_data()
    # Red bleeds past the big cell's right edge into the black region
    assert after[300, 420, 0] > before[300, 420, 0]
    # Pixels far from anything stay black
    assert tuple(after[550, 780, :3]) == (0, 0, 0)


def test_paint_cells_clears_canvas_first(basic_ctx):
    basic_ctx.canvas.fill_polygon([(600, 400), (700, 400), (700, 500)], "#ffffff")
    paint_cells(basic_ctx)
    assert basic_ctx.canvas.get_image_data()[..., :3].max() == 0
