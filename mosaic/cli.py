"""Command-line painter — every image written is one fresh paint.

Usage:
  mosaic-paint                                   # one advanced paint at the default size
  mosaic-paint -W 800 -H 600 -o out.png          # explicit size and file
  mosaic-paint --variant basic --seed 7          # reproducible basic paint
  mosaic-paint -n 5 -o renders/                  # five paints into a folder
  mosaic-paint --palette lagoon+black            # fixed palette (see --list-palettes)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from mosaic.config import settings
from mosaic.engine.config import VARIANTS, PaintConfig
from mosaic.engine.pipeline import paint
from mosaic.palettes import PALETTES, get_palette

load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    name = (level or settings.mosaic_log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def output_paths(output: str | None, count: int, seed: int | None) -> list[Path]:
    """A single .png path for one paint, otherwise numbered files in a folder."""
    if output and output.lower().endswith(".png"):
        if count == 1:
            return [Path(output)]
        base = Path(output)
        return [base.with_name(f"{base.stem}_{i:03d}.png") for i in range(count)]

    folder = Path(output or settings.mosaic_output_dir)
    tag = f"seed{seed}" if seed is not None else "mosaic"
    if count == 1:
        return [folder / f"{tag}.png"]
    return [folder / f"{tag}_{i:03d}.png" for i in range(count)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Voronoi mosaic painter")
    parser.add_argument("-W", "--width", type=int, default=settings.mosaic_default_width, help="Screen width in px")
    parser.add_argument("-H", "--height", type=int, default=settings.mosaic_default_height, help="Screen height in px")
    parser.add_argument("--variant", choices=VARIANTS, default="advanced", help="Painting variant")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random source and the noise field")
    parser.add_argument("-n", "--count", type=int, default=1, help="Number of paints")
    parser.add_argument("-o", "--output", help="Output .png file or folder")
    parser.add_argument("--points", type=int, default=None, help="Initial site count (default: from screen area)")
    parser.add_argument("--palette", default=None, help="Palette name, optionally with +black")
    parser.add_argument("--list-palettes", action="store_true", help="Print palette names and exit")
    parser.add_argument("--log-level", default=None, help="Override MOSAIC_LOG_LEVEL")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_palettes:
        for name, colors in PALETTES.items():
            print(f"{name:12s} {' '.join(colors)}")
        return 0

    configure_logging(args.log_level)
    logger.debug("Environment: %s", settings.mosaic_env)

    if args.width <= 0 or args.height <= 0:
        parser.error(f"size must be positive, got {args.width}x{args.height}")
    if args.count < 1:
        parser.error("--count must be at least 1")

    try:
        palette = get_palette(args.palette) if args.palette else None
        make_config = PaintConfig.basic if args.variant == "basic" else PaintConfig.advanced
        config = make_config(point_count=args.points)
    except ValueError as e:
        parser.error(str(e))

    aborted = 0
    for i, path in enumerate(output_paths(args.output, args.count, args.seed)):
        seed = args.seed + i if args.seed is not None else None
        ctx = paint(args.width, args.height, config=config, seed=seed, palette=palette)
        ctx.canvas.save(path)
        if ctx.aborted:
            aborted += 1
            logger.error("Paint %d aborted (%s); saved partial image to %s", i, ", ".join(ctx.errors), path)
        else:
            logger.info("Saved %s (%d cells)", path, ctx.stats.get("cells_kept", 0))
        print(path)

    return 1 if aborted else 0


if __name__ == "__main__":
    sys.exit(main())
