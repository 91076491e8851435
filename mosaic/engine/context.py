"""PaintContext — the single mutable state object flowing through all transforms.

Sites (point + color) → PointCloud
Everything derived from them → PaintContext.* (diagram, triangles, cells, surfaces)
"""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from mosaic.engine.config import PaintConfig
from mosaic.errors import SiteLookupError
from mosaic.utils.surface import Surface
from mosaic.utils.voronoi import Extent, VoronoiDiagram

Point = tuple[float, float]


@dataclass(frozen=True)
class Site:
    """A generator point paired with its color."""

    point: Point
    color: str


class PointCloud:
    """Ordered sites. Append-only during a paint; points[i] always pairs with colors[i]."""

    def __init__(self, sites: list[Site] | None = None) -> None:
        self._sites: list[Site] = []
        self._index: dict[Point, int] = {}
        for site in sites or []:
            self.append(site.point, site.color)

    @classmethod
    def from_arrays(cls, points: NDArray[np.float64] | list[Point], colors: list[str]) -> PointCloud:
        if len(points) != len(colors):
            raise ValueError(f"{len(points)} points but {len(colors)} colors")
        cloud = cls()
        for (x, y), color in zip(points, colors):
            cloud.append((x, y), color)
        return cloud

    def append(self, point: Point, color: str) -> int:
        key = (float(point[0]), float(point[1]))
        self._sites.append(Site(key, color))
        idx = len(self._sites) - 1
        # First occurrence wins, matching which duplicate owns a Voronoi cell
        self._index.setdefault(key, idx)
        return idx

    def index_of(self, point: Point) -> int:
        """Index of the first site at exactly this position."""
        key = (float(point[0]), float(point[1]))
        try:
            return self._index[key]
        except KeyError:
            raise SiteLookupError(key) from None

    def color_of(self, point: Point) -> str:
        return self._sites[self.index_of(point)].color

    def __len__(self) -> int:
        return len(self._sites)

    def __getitem__(self, idx: int) -> Site:
        return self._sites[idx]

    def __iter__(self):
        return iter(self._sites)

    @property
    def points(self) -> NDArray[np.float64]:
        if not self._sites:
            return np.empty((0, 2))
        return np.array([s.point for s in self._sites], dtype=np.float64)

    @property
    def colors(self) -> list[str]:
        return [s.color for s in self._sites]


@dataclass
class TriangleJob:
    """An on-screen Delaunay triangle waiting to be subdivided."""

    vertices: NDArray[np.float64]
    colors: tuple[str, str, str]
    depth: int = 0


@dataclass
class PaintContext:
    """Shared state flowing through the entire pipeline."""

    # Screen size in pixels
    width: int = 800
    height: int = 600
    config: PaintConfig = field(default_factory=PaintConfig)

    # Randomness: uniform [0, 1) source and 2D coherent noise in [-1, 1]
    rng: random.Random = field(default_factory=random.Random)
    noise2: Callable[[float, float], float] | None = None

    # --- Layer 0: sampling ---
    palette: tuple[str, ...] = ()
    cloud: PointCloud = field(default_factory=PointCloud)

    # --- Layer 1: partition ---
    # Top-level Delaunay triangles and whether each touches the screen
    triangles: list[NDArray[np.float64]] = field(default_factory=list)
    onscreen: list[bool] = field(default_factory=list)

    # --- Layer 2: subdivision ---
    jobs: list[TriangleJob] = field(default_factory=list)
    # Final mosaic cells, index-aligned with the cloud (None = no cell)
    cells: list[NDArray[np.float64] | None] = field(default_factory=list)

    # --- Layer 3: clipping ---
    clipped: list[NDArray[np.float64]] = field(default_factory=list)
    clipped_colors: list[str] = field(default_factory=list)
    areas: list[float] = field(default_factory=list)

    # --- Layer 4: compositing ---
    canvas: Surface | None = None
    render: Surface | None = None
    mask: Surface | None = None

    # --- Pipeline metadata ---
    stats: dict[str, Any] = field(default_factory=dict)
    completed_transforms: set[str] = field(default_factory=set)
    skipped_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def overdraw_border(self) -> tuple[float, float]:
        """Margin added on each side of the screen by the overdraw factor."""
        f = self.config.overdraw
        return ((f - 1) * self.width / 2, (f - 1) * self.height / 2)

    @property
    def extent(self) -> Extent:
        bx, by = self.overdraw_border
        return ((-bx, -by), (self.width + bx, self.height + by))

    @property
    def aborted(self) -> bool:
        return bool(self.errors)

    def diagram(self) -> VoronoiDiagram:
        """Fresh diagram of the current cloud over the overdraw extent."""
        return VoronoiDiagram(self.cloud.points, self.extent)
