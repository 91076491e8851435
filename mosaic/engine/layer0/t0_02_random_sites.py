"""T0.02 — Random Sites.

Uniform points over the screen scaled by the overdraw factor (centered), each
with an independent uniform palette color. Sampling past the screen edges
keeps border cells as irregular as the ones in the middle.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence

from mosaic.engine.context import PaintContext, PointCloud
from mosaic.engine.registry import Layer, transform
from mosaic.utils.math_helpers import choice

logger = logging.getLogger(__name__)


def site_count(width: int, height: int, overdraw: float, divisor: int) -> int:
    """One site per ``divisor`` pixels of the overdraw area."""
    return math.floor(width * overdraw * overdraw * height / divisor)


def sample_sites(
    palette: Sequence[str],
    count: int,
    width: int,
    height: int,
    overdraw: float,
    rng: random.Random,
) -> PointCloud:
    border_x = -(overdraw * width - width) / 2
    border_y = -(overdraw * height - height) / 2

    cloud = PointCloud()
    for _ in range(count):
        point = (
            border_x + rng.random() * width * overdraw,
            border_y + rng.random() * height * overdraw,
        )
        cloud.append(point, choice(palette, rng))
    return cloud


@transform(
    id="T0.02",
    layer=Layer.SAMPLING,
    dependencies=["T0.01"],
    description="Sample random sites over the overdraw region",
    tags={"always"},
)
def random_sites(ctx: PaintContext) -> None:
    cfg = ctx.config
    count = cfg.point_count
    if count is None:
        count = site_count(ctx.width, ctx.height, cfg.overdraw, cfg.points_per_pixel_divisor)

    ctx.cloud = sample_sites(ctx.palette, count, ctx.width, ctx.height, cfg.overdraw, ctx.rng)
    ctx.stats["initial_sites"] = count
    logger.info("Sampled %d sites for %dx%d (overdraw %.2f)", count, ctx.width, ctx.height, cfg.overdraw)
