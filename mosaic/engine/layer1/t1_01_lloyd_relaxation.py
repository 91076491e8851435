"""T1.01 — Lloyd Relaxation.

Moves every site to the integer-truncated centroid of its Voronoi cell, which
evens out cell sizes. Colors stay with their index, so a site keeps its color
while its position drifts toward the centroid.
"""

from __future__ import annotations

import logging

import numpy as np

from mosaic.engine.context import PaintContext, PointCloud
from mosaic.engine.registry import Layer, transform
from mosaic.utils.voronoi import relax

logger = logging.getLogger(__name__)


@transform(
    id="T1.01",
    layer=Layer.PARTITION,
    dependencies=["T0.02"],
    description="Relax sites toward their cell centroids",
    tags={"relax"},
)
def lloyd_relaxation(ctx: PaintContext) -> None:
    before = ctx.cloud.points
    relaxed = relax(before, ctx.extent, ctx.config.relax_iterations)
    ctx.cloud = PointCloud.from_arrays(relaxed, ctx.cloud.colors)

    if len(before):
        shift = float(np.mean(np.hypot(*(relaxed - before).T)))
        logger.debug(
            "Relaxed %d sites over %d pass(es), mean shift %.1fpx",
            len(before),
            ctx.config.relax_iterations,
            shift,
        )
