"""T4.02 — Area Mask.

Luminance mask where bigger cells are brighter: areas are min-max scaled,
eased out and painted as gray levels on a black surface.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mosaic.engine.context import PaintContext
from mosaic.engine.registry import Layer, transform
from mosaic.utils.color import rgb_to_hex
from mosaic.utils.math_helpers import ease_out_quad, min_max_normalize
from mosaic.utils.surface import Surface

logger = logging.getLogger(__name__)


def area_shades(areas: Sequence[float]) -> list[int]:
    """Gray level 0..255 per area. Equal areas all map to white."""
    return [int(round(ease_out_quad(float(t)) * 255)) for t in min_max_normalize(areas)]


@transform(
    id="T4.02",
    layer=Layer.COMPOSITING,
    dependencies=["T4.01"],
    description="Build the area luminance mask",
    tags={"advanced"},
)
def area_mask(ctx: PaintContext) -> None:
    mask = Surface(ctx.width, ctx.height, fill="#000000")
    shades = area_shades(ctx.areas)
    for polygon, level in zip(ctx.clipped, shades):
        gray = rgb_to_hex((level, level, level))
        mask.fill_polygon(polygon, gray, stroke=gray, stroke_width=ctx.config.stroke_width)

    ctx.mask = mask
    if shades:
        logger.debug("Mask shades: min %d, max %d", min(shades), max(shades))
