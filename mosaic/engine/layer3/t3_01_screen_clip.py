"""T3.01 — Screen Clipping.

Clips each mosaic cell to the screen (Sutherland–Hodgman) and drops cells
that vanish or shrink to slivers of area <= 1px².
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from mosaic.engine.context import PaintContext
from mosaic.engine.registry import Layer, transform
from mosaic.utils.geometry import clip_to_rect, polygon_area

logger = logging.getLogger(__name__)


def clip_cells(
    cells: Sequence[NDArray[np.float64] | None],
    colors: Sequence[str],
    width: float,
    height: float,
    min_area: float = 1.0,
) -> tuple[list[NDArray[np.float64]], list[str], list[float]]:
    """Clip cells to the screen. Returns parallel (polygons, colors, areas)."""
    polygons: list[NDArray[np.float64]] = []
    kept_colors: list[str] = []
    areas: list[float] = []

    for cell, color in zip(cells, colors):
        if cell is None or len(cell) < 3:
            continue
        clipped = clip_to_rect(cell, width, height)
        if len(clipped) < 3:
            continue
        area = polygon_area(clipped)
        if area <= min_area:
            continue
        polygons.append(clipped)
        kept_colors.append(color)
        areas.append(area)

    return polygons, kept_colors, areas


@transform(
    id="T3.01",
    layer=Layer.CLIPPING,
    dependencies=["T2.03"],
    description="Clip mosaic cells to the screen and drop slivers",
    tags={"always"},
)
def screen_clip(ctx: PaintContext) -> None:
    ctx.clipped, ctx.clipped_colors, ctx.areas = clip_cells(
        ctx.cells,
        ctx.cloud.colors,
        ctx.width,
        ctx.height,
        ctx.config.min_polygon_area,
    )

    candidates = sum(1 for c in ctx.cells if c is not None)
    ctx.stats["cells_kept"] = len(ctx.clipped)
    ctx.stats["cells_discarded"] = candidates - len(ctx.clipped)
    ctx.stats["covered_area"] = round(float(sum(ctx.areas)), 2)
    logger.info(
        "Clipped: %d cells kept, %d discarded, %.0f of %d px² covered",
        len(ctx.clipped),
        candidates - len(ctx.clipped),
        sum(ctx.areas),
        ctx.width * ctx.height,
    )
