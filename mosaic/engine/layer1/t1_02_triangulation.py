"""T1.02 — Delaunay Triangulation & Screen Cull.

Triangulates the sites and flags the triangles with at least one vertex on
screen. Triangles with every vertex off screen are culled even if an edge
crosses the screen.
"""

from __future__ import annotations

import logging

from mosaic.engine.context import PaintContext
from mosaic.engine.registry import Layer, transform
from mosaic.utils.geometry import touches_screen

logger = logging.getLogger(__name__)


@transform(
    id="T1.02",
    layer=Layer.PARTITION,
    dependencies=["T0.02", "T1.01"],
    description="Triangulate sites and cull off-screen triangles",
    tags={"always"},
)
def triangulation(ctx: PaintContext) -> None:
    ctx.triangles = ctx.diagram().triangles()
    ctx.onscreen = [touches_screen(tri, ctx.width, ctx.height) for tri in ctx.triangles]

    drawn = sum(ctx.onscreen)
    culled = len(ctx.triangles) - drawn
    ctx.stats["triangles"] = len(ctx.triangles)
    ctx.stats["triangles_drawn"] = drawn
    ctx.stats["triangles_culled"] = culled
    logger.info("Triangles: %d (drawn = %d, culled = %d)", len(ctx.triangles), drawn, culled)
