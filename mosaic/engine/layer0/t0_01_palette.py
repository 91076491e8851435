"""T0.01 — Palette Selection.

One palette per paint, drawn uniformly from every palette with and without black.
A palette already on the context (CLI or tests) is kept.
"""

from __future__ import annotations

import logging

from mosaic.engine.context import PaintContext
from mosaic.engine.registry import Layer, transform
from mosaic.palettes import ALL_PALETTES_WITH_BLACK
from mosaic.utils.math_helpers import choice

logger = logging.getLogger(__name__)


@transform(
    id="T0.01",
    layer=Layer.SAMPLING,
    description="Pick the palette for this paint",
    tags={"always"},
)
def palette_selection(ctx: PaintContext) -> None:
    if not ctx.palette:
        ctx.palette = choice(ALL_PALETTES_WITH_BLACK, ctx.rng)
    logger.debug("Palette: %s", " ".join(ctx.palette))
