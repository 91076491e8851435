"""T4.01 — Paint Cells.

Clears the canvas to the background, fills and strokes every clipped cell in
its color on an off-screen render, then blits the render onto the canvas.
"""

from __future__ import annotations

import logging

from mosaic.engine.context import PaintContext
from mosaic.engine.registry import Layer, transform
from mosaic.utils.surface import Surface

logger = logging.getLogger(__name__)


@transform(
    id="T4.01",
    layer=Layer.COMPOSITING,
    dependencies=["T3.01"],
    description="Paint the mosaic cells",
    tags={"always"},
)
def paint_cells(ctx: PaintContext) -> None:
    cfg = ctx.config
    if ctx.canvas is None:
        ctx.canvas = Surface(ctx.width, ctx.height, fill=cfg.background)
    ctx.canvas.fill_rect(0, 0, ctx.width, ctx.height, cfg.background)

    render = Surface(ctx.width, ctx.height, fill=cfg.background)
    for polygon, color in zip(ctx.clipped, ctx.clipped_colors):
        render.fill_polygon(polygon, color, stroke=color, stroke_width=cfg.stroke_width)

    ctx.render = render
    ctx.canvas.draw_image(render)
    logger.debug("Painted %d cells", len(ctx.clipped))
