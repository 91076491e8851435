"""Voronoi / Delaunay facade over GEOS (shapely) with a KD-tree for cell ownership.

Cells are bounded to an extent rectangle. GEOS returns cells in its own
order, so each cell is matched back to its generator through a point that is
guaranteed to lie inside the cell: by definition the nearest site to any
interior point is the cell's own generator.
"""

from __future__ import annotations

import logging

import numpy as np
import shapely
from numpy.typing import NDArray
from scipy.spatial import cKDTree
from shapely.errors import GEOSException
from shapely.geometry import MultiPoint, box

from mosaic.utils.geometry import polygon_centroid, rect_ring

logger = logging.getLogger(__name__)

Extent = tuple[tuple[float, float], tuple[float, float]]


class VoronoiDiagram:
    """Read-only diagram over a point array.

    ``polygons()`` is index-aligned with the input points. A point gets
    ``None`` when it lies outside the extent or repeats an earlier point.
    """

    def __init__(self, points: NDArray[np.float64], extent: Extent) -> None:
        self.points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        (x0, y0), (x1, y1) = extent
        self.extent: Extent = ((float(x0), float(y0)), (float(x1), float(y1)))
        self._owners = self._find_owners()
        self._polygons: list[NDArray[np.float64] | None] | None = None
        self._triangles: list[NDArray[np.float64]] | None = None

    def _find_owners(self) -> NDArray[np.int64]:
        """Indices of the points that own a cell: inside the extent, first of their coordinates."""
        if len(self.points) == 0:
            return np.empty(0, dtype=np.int64)
        (x0, y0), (x1, y1) = self.extent
        x = self.points[:, 0]
        y = self.points[:, 1]
        inside = np.isfinite(x) & np.isfinite(y) & (x >= x0) & (x <= x1) & (y >= y0) & (y <= y1)
        candidates = np.flatnonzero(inside)
        if len(candidates) == 0:
            return candidates
        _, first = np.unique(self.points[candidates], axis=0, return_index=True)
        return np.sort(candidates[first])

    @property
    def site_count(self) -> int:
        return len(self._owners)

    def polygons(self) -> list[NDArray[np.float64] | None]:
        if self._polygons is None:
            self._polygons = self._compute_polygons()
        return self._polygons

    def triangles(self) -> list[NDArray[np.float64]]:
        """Delaunay triangles as 3×2 vertex arrays whose coordinates are copies of input points."""
        if self._triangles is None:
            self._triangles = self._compute_triangles()
        return self._triangles

    def _compute_polygons(self) -> list[NDArray[np.float64] | None]:
        polygons: list[NDArray[np.float64] | None] = [None] * len(self.points)
        owners = self._owners
        (x0, y0), (x1, y1) = self.extent

        if len(owners) == 0:
            return polygons
        if len(owners) == 1:
            polygons[int(owners[0])] = rect_ring(x0, y0, x1, y1)
            return polygons

        sites = self.points[owners]
        region = box(x0, y0, x1, y1)
        try:
            cells = shapely.voronoi_polygons(MultiPoint(sites), extend_to=region)
        except GEOSException as e:
            logger.warning("Voronoi failed for %d sites: %s", len(sites), e)
            return polygons

        clipped_cells = []
        anchors = []
        for cell in cells.geoms:
            clipped = cell.intersection(region)
            if clipped.is_empty or clipped.geom_type != "Polygon":
                continue
            anchor = clipped.representative_point()
            clipped_cells.append(clipped)
            anchors.append((anchor.x, anchor.y))

        if not anchors:
            return polygons

        _, nearest = cKDTree(sites).query(np.asarray(anchors))
        for cell, k in zip(clipped_cells, np.atleast_1d(nearest)):
            polygons[int(owners[k])] = np.asarray(cell.exterior.coords, dtype=np.float64)[:-1]

        missing = sum(1 for i in owners if polygons[int(i)] is None)
        if missing:
            logger.debug("Voronoi: %d of %d sites without a cell", missing, len(owners))
        return polygons

    def _compute_triangles(self) -> list[NDArray[np.float64]]:
        if len(self._owners) < 3:
            return []
        sites = self.points[self._owners]
        try:
            tris = shapely.delaunay_triangles(MultiPoint(sites))
        except GEOSException as e:
            logger.warning("Delaunay failed for %d sites: %s", len(sites), e)
            return []
        return [np.asarray(t.exterior.coords, dtype=np.float64)[:3] for t in tris.geoms]


def relax(points: NDArray[np.float64], extent: Extent, iterations: int = 1) -> NDArray[np.float64]:
    """Lloyd relaxation: move each point to the integer-truncated centroid of its cell.

    Points without a cell stay where they are, so indices keep lining up.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2).copy()
    for _ in range(iterations):
        for i, poly in enumerate(VoronoiDiagram(pts, extent).polygons()):
            if poly is None:
                continue
            cx, cy = polygon_centroid(poly)
            pts[i] = (int(cx), int(cy))
    return pts
