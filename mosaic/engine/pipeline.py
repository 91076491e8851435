"""Pipeline orchestrator — runs paint stages in dependency order with variant gating."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import random
import time
from collections.abc import Callable, Sequence

from opensimplex import OpenSimplex

from mosaic.engine.config import PaintConfig
from mosaic.engine.context import PaintContext
from mosaic.engine.registry import Layer, TransformRegistry, get_registry
from mosaic.utils.surface import Surface

logger = logging.getLogger(__name__)

LAYER_PACKAGES = ["layer0", "layer1", "layer2", "layer3", "layer4"]


class Pipeline:
    """Orchestrates the paint pipeline.

    A stage that raises aborts the paint: the error is recorded on the
    context and every stage depending on it, directly or not, is skipped.
    """

    def __init__(self, registry: TransformRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: PaintContext) -> PaintContext:
        """Run every registered stage the context's variant calls for."""
        start = time.perf_counter()

        skip_ids = self._adaptive_gate(ctx)

        all_specs = self.registry.all()
        requested = {s.id for s in all_specs} - skip_ids
        ordered = self.registry.resolve_order(requested, expand=False)

        logger.info(
            "Pipeline: %d transforms queued (%d skipped, variant=%s)",
            len(ordered),
            len(skip_ids),
            ctx.config.variant,
        )

        failed: set[str] = set()
        for spec in ordered:
            blocked = [dep for dep in spec.dependencies if dep in failed]
            if blocked:
                failed.add(spec.id)
                ctx.skipped_transforms.add(spec.id)
                logger.warning("  %s SKIPPED: %s did not complete", spec.id, ", ".join(blocked))
                continue

            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                failed.add(spec.id)
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.0fms",
            len(ctx.completed_transforms),
            len(ordered),
            total,
        )
        return ctx

    def run_layer(self, ctx: PaintContext, layer: Layer) -> PaintContext:
        """Run only transforms in a specific layer.

        Stages whose dependencies failed or were skipped earlier on this
        context are skipped too.
        """
        specs = self.registry.resolve_order({s.id for s in self.registry.get_layer(layer)}, expand=False)
        failed = set(ctx.errors) | ctx.skipped_transforms
        for spec in specs:
            blocked = [dep for dep in spec.dependencies if dep in failed]
            if blocked:
                failed.add(spec.id)
                ctx.skipped_transforms.add(spec.id)
                logger.warning("  %s SKIPPED: %s did not complete", spec.id, ", ".join(blocked))
                continue

            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                failed.add(spec.id)
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx

    def _adaptive_gate(self, ctx: PaintContext) -> set[str]:
        """Determine which stages to skip for this paint.

        - The basic variant skips the shading stages (tag "advanced")
        - Zero relaxation passes skip Lloyd relaxation (tag "relax")
        """
        skip: set[str] = set()

        if not ctx.config.is_advanced:
            skip.update(s.id for s in self.registry.with_tag("advanced"))

        if ctx.config.relax_iterations <= 0:
            skip.update(s.id for s in self.registry.with_tag("relax"))

        return skip


def create_pipeline() -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline()


def register_transforms() -> None:
    """Import all stage modules so @transform decorators fire.

    A missing layer package is skipped; a stage module that fails to import raises.
    """
    for layer_name in LAYER_PACKAGES:
        package_name = f"mosaic.engine.{layer_name}"
        try:
            package = importlib.import_module(package_name)
        except ModuleNotFoundError as e:
            if e.name != package_name:
                raise
            logger.debug("No stage package %s", package_name)
            continue
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


def create_context(
    width: int,
    height: int,
    config: PaintConfig | None = None,
    seed: int | None = None,
    palette: Sequence[str] | None = None,
    noise2: Callable[[float, float], float] | None = None,
) -> PaintContext:
    """Fresh per-paint state. ``seed`` fixes both the random source and the noise field."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Screen size must be positive, got {width}x{height}")

    rng = random.Random(seed)
    if noise2 is None:
        noise_seed = seed if seed is not None else rng.randrange(2**31)
        noise2 = OpenSimplex(seed=noise_seed).noise2

    config = config or PaintConfig()
    return PaintContext(
        width=int(width),
        height=int(height),
        config=config,
        rng=rng,
        noise2=noise2,
        palette=tuple(palette) if palette else (),
        # Visible canvas starts black; an aborted paint leaves it as far as it got
        canvas=Surface(int(width), int(height), fill=config.background),
    )


def paint(
    width: int,
    height: int,
    config: PaintConfig | None = None,
    seed: int | None = None,
    palette: Sequence[str] | None = None,
    noise2: Callable[[float, float], float] | None = None,
) -> PaintContext:
    """One complete paint: sample, partition, subdivide, clip and composite.

    The finished image is ``ctx.canvas``; check ``ctx.aborted`` for failures.
    """
    register_transforms()
    ctx = create_context(width, height, config=config, seed=seed, palette=palette, noise2=noise2)
    return create_pipeline().run(ctx)
