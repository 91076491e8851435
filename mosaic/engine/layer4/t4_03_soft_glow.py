"""T4.03 — Soft Glow Composite.

Blurs the render and the mask, moves the mask's green channel into the
render's alpha and lays the result over the canvas: large cells bleed softly
into their neighbours while small ones stay crisp.
"""

from __future__ import annotations

import logging

from mosaic.engine.context import PaintContext
from mosaic.engine.registry import Layer, transform
from mosaic.utils.surface import Surface

logger = logging.getLogger(__name__)


def transfer_alpha(target: Surface, mask: Surface) -> None:
    """Copy ``mask``'s green channel into ``target``'s alpha channel, pixel for pixel."""
    if (target.width, target.height) != (mask.width, mask.height):
        raise ValueError(
            f"Mask is {mask.width}x{mask.height}, target is {target.width}x{target.height}"
        )
    pixels = target.get_image_data()
    pixels[..., 3] = mask.get_image_data()[..., 1]
    target.put_image_data(pixels)


@transform(
    id="T4.03",
    layer=Layer.COMPOSITING,
    dependencies=["T4.01", "T4.02"],
    description="Blur render and mask, composite the glow",
    tags={"advanced"},
)
def soft_glow(ctx: PaintContext) -> None:
    if ctx.render is None or ctx.mask is None or ctx.canvas is None:
        raise ValueError("Soft glow needs the render, the mask and the canvas")

    radius = ctx.config.blur_radius
    ctx.render.blur(radius)
    ctx.mask.blur(radius)
    transfer_alpha(ctx.render, ctx.mask)
    ctx.canvas.draw_image(ctx.render)
    logger.debug("Composited glow (blur radius %d)", radius)
