"""T2.01 — Split Depth.

Queues every on-screen triangle with its vertex colors and a split depth:
  basic:    4 + floor(sqrt(r) * 2)
  advanced: from the triangle's smallest altitude, so slivers stay coarse

Vertex colors are looked up in the cloud by exact position; a vertex with no
site means points and colors went out of step, and the paint stops.
"""

from __future__ import annotations

import logging
from collections import Counter

from mosaic.engine.context import PaintContext, TriangleJob
from mosaic.engine.registry import Layer, transform
from mosaic.utils.subdivide import altitude_split_depth, fixed_split_depth

logger = logging.getLogger(__name__)


@transform(
    id="T2.01",
    layer=Layer.SUBDIVISION,
    dependencies=["T1.02"],
    description="Pick a split depth per on-screen triangle",
    tags={"always"},
)
def split_depth(ctx: PaintContext) -> None:
    cfg = ctx.config
    ctx.jobs = []

    for tri, visible in zip(ctx.triangles, ctx.onscreen):
        if not visible:
            continue

        colors = tuple(ctx.cloud.color_of((v[0], v[1])) for v in tri)

        if cfg.is_advanced:
            depth = altitude_split_depth(
                tri,
                ctx.rng,
                min_cell_size=cfg.min_cell_size,
                power=cfg.split_power,
                floor=cfg.split_floor,
                max_depth=cfg.max_split_depth,
            )
        else:
            depth = min(
                fixed_split_depth(ctx.rng, cfg.base_split_depth, cfg.split_depth_spread),
                cfg.max_split_depth,
            )

        ctx.jobs.append(TriangleJob(vertices=tri, colors=colors, depth=depth))

    histogram = Counter(job.depth for job in ctx.jobs)
    ctx.stats["split_depths"] = dict(sorted(histogram.items()))
    logger.debug("Split depths: %s", ctx.stats["split_depths"])
