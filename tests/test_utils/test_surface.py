"""Tests for the Pillow drawing surface."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from mosaic.utils.surface import Surface


def test_new_surface_is_filled():
    s = Surface(20, 10, fill="#ff0000")
    data = s.get_image_data()
    assert data.shape == (10, 20, 4)
    assert tuple(data[5, 5]) == (255, 0, 0, 255)


def test_non_positive_size_rejected():
    with pytest.raises(ValueError):
        Surface(0, 10)


def test_fill_polygon_paints_inside_only():
    s = Surface(100, 100, fill="#000000")
    s.fill_polygon([(10, 10), (50, 10), (50, 50), (10, 50)], "#00ff00")
    data = s.get_image_data()
    assert tuple(data[30, 30, :3]) == (0, 255, 0)
    assert tuple(data[80, 80, :3]) == (0, 0, 0)


def test_fill_polygon_ignores_degenerate():
    s = Surface(10, 10, fill="#000000")
    s.fill_polygon([(1, 1), (5, 5)], "#ffffff")
    assert s.get_image_data()[..., :3].max() == 0


def test_put_image_data_checks_shape():
    s = Surface(4, 3)
    with pytest.raises(ValueError):
        s.put_image_data(np.zeros((4, 3, 4), dtype=np.uint8))
    s.put_image_data(np.full((3, 4, 4), 7, dtype=np.uint8))
    assert s.get_image_data().min() == 7


def test_draw_image_honours_alpha():
    base = Surface(4, 4, fill="#000000")
    overlay = Surface(4, 4, fill=(255, 255, 255, 0))
    base.draw_image(overlay)
    assert base.get_image_data()[..., :3].max() == 0

    opaque = Surface(4, 4, fill="#ffffff")
    base.draw_image(opaque)
    assert base.get_image_data()[..., :3].min() == 255


def test_blur_softens_edges():
    s = Surface(40, 40, fill="#000000")
    s.fill_rect(0, 0, 20, 40, "#ffffff")
    s.blur(4)
    row = s.get_image_data()[20, :, 0]
    assert 0 < row[20] < 255
    assert row[0] > row[39]


def test_save_writes_png(tmp_path):
    out = Surface(8, 6, fill="#123456").save(tmp_path / "nested" / "out.png")
    with Image.open(out) as img:
        assert img.size == (8, 6)
        assert img.mode == "RGB"
