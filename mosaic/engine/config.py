"""Paint configuration — the built-in constants of both variants."""

from __future__ import annotations

from dataclasses import dataclass

VARIANTS = ("basic", "advanced")


@dataclass
class PaintConfig:
    """Controls which stages run and how the mosaic is grown."""

    # "basic" = random blend ratios, fixed split depth, no shading.
    # "advanced" = relaxation, noise ratios, altitude split depth, soft glow.
    variant: str = "advanced"

    # Sampling region is the screen scaled by this factor, centered
    overdraw: float = 1.5
    # Site count = floor(w * overdraw² * h / divisor) unless point_count is set
    points_per_pixel_divisor: int = 150000
    point_count: int | None = None

    # Lloyd relaxation passes before triangulation
    relax_iterations: int = 1

    # Blend ratio models
    random_ratio_min: float = 0.25
    random_ratio_max: float = 0.75
    noise_frequency: float = 0.15
    noise_ratio_min: float = 0.15
    noise_ratio_max: float = 0.85

    # Split depth: basic = base + floor(sqrt(r) * spread)
    base_split_depth: int = 4
    split_depth_spread: int = 2
    # Split depth: advanced = log2(min_altitude / min_cell_size) scaled by a
    # power-curved random factor in [split_floor, 1]
    min_cell_size: float = 6.0
    split_power: float = 0.5
    split_floor: float = 0.5
    max_split_depth: int = 6

    # Clipped cells at or below this area are dropped
    min_polygon_area: float = 1.0

    # Rendering
    background: str = "#000000"
    stroke_width: int = 2
    blur_radius: int = 100

    def __post_init__(self) -> None:
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown variant: {self.variant!r} (expected one of {VARIANTS})")
        if self.overdraw < 1.0:
            raise ValueError(f"overdraw must be >= 1.0, got {self.overdraw}")
        if self.point_count is not None and self.point_count < 0:
            raise ValueError(f"point_count must be >= 0, got {self.point_count}")
        if not 0 <= self.max_split_depth <= 8:
            raise ValueError(f"max_split_depth must be in [0, 8], got {self.max_split_depth}")

    @property
    def is_advanced(self) -> bool:
        return self.variant == "advanced"

    @classmethod
    def basic(cls, **overrides) -> PaintConfig:
        overrides.setdefault("relax_iterations", 0)
        return cls(variant="basic", **overrides)

    @classmethod
    def advanced(cls, **overrides) -> PaintConfig:
        return cls(variant="advanced", **overrides)
