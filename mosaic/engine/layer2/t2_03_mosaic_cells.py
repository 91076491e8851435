"""T2.03 — Mosaic Cells.

Re-partitions the grown cloud: every midpoint becomes a generator, and the
fine Voronoi cells are the tiles of the final mosaic.
"""

from __future__ import annotations

import logging

from mosaic.engine.context import PaintContext
from mosaic.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


@transform(
    id="T2.03",
    layer=Layer.SUBDIVISION,
    dependencies=["T2.02"],
    description="Compute the final Voronoi cells over all sites",
    tags={"always"},
)
def mosaic_cells(ctx: PaintContext) -> None:
    ctx.cells = ctx.diagram().polygons()
    defined = sum(1 for c in ctx.cells if c is not None)
    ctx.stats["cells"] = defined
    logger.info("Mosaic: %d cells for %d sites", defined, len(ctx.cloud))
