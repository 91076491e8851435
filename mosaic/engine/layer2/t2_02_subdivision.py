"""T2.02 — Recursive Triangle Subdivision.

Grows the cloud with the midpoints of every queued triangle, recursively.
The basic variant blends midpoint colors at random ratios in [0.25, 0.75];
the advanced one reads the ratio from simplex noise so neighbouring cells
shade smoothly.
"""

from __future__ import annotations

import logging

from mosaic.engine.context import PaintContext
from mosaic.engine.registry import Layer, transform
from mosaic.utils.subdivide import NoiseRatio, RandomRatio, RatioFn, subdivide

logger = logging.getLogger(__name__)


def ratio_model(ctx: PaintContext) -> RatioFn:
    cfg = ctx.config
    if cfg.is_advanced and ctx.noise2 is not None:
        return NoiseRatio(ctx.noise2, cfg.noise_frequency, cfg.noise_ratio_min, cfg.noise_ratio_max)
    return RandomRatio(ctx.rng, cfg.random_ratio_min, cfg.random_ratio_max)


@transform(
    id="T2.02",
    layer=Layer.SUBDIVISION,
    dependencies=["T2.01"],
    description="Subdivide triangles and blend midpoint colors",
    tags={"always"},
)
def triangle_subdivision(ctx: PaintContext) -> None:
    ratio = ratio_model(ctx)
    before = len(ctx.cloud)
    calls = 0

    for job in ctx.jobs:
        if job.depth > 0:
            calls += subdivide(ctx.cloud, job.vertices, job.colors, job.depth, ratio)

    appended = len(ctx.cloud) - before
    ctx.stats["subdivision_calls"] = calls
    ctx.stats["sites_appended"] = appended
    logger.info(
        "Subdivided %d triangles: %d calls, %d sites appended (%d total)",
        sum(1 for job in ctx.jobs if job.depth > 0),
        calls,
        appended,
        len(ctx.cloud),
    )
