"""Tests for the Voronoi / Delaunay facade and Lloyd relaxation."""

from __future__ import annotations

import numpy as np
import pytest
from shapely.geometry import Point, Polygon

from mosaic.utils.geometry import polygon_area
from mosaic.utils.voronoi import VoronoiDiagram, relax

EXTENT = ((0.0, 0.0), (100.0, 100.0))

FOUR_POINTS = np.array([[20.0, 20.0], [80.0, 25.0], [30.0, 70.0], [75.0, 80.0]])


class TestPolygons:
    def test_index_aligned_and_owning(self):
        polys = VoronoiDiagram(FOUR_POINTS, EXTENT).polygons()
        assert len(polys) == len(FOUR_POINTS)
        for pt, poly in zip(FOUR_POINTS, polys):
            assert poly is not None
            assert Polygon(poly).covers(Point(pt))

    def test_cells_tile_the_extent(self):
        polys = VoronoiDiagram(FOUR_POINTS, EXTENT).polygons()
        assert sum(polygon_area(p) for p in polys) == pytest.approx(100 * 100, rel=1e-6)

    def test_rings_are_open(self):
        for poly in VoronoiDiagram(FOUR_POINTS, EXTENT).polygons():
            assert not np.allclose(poly[0], poly[-1])

    def test_duplicate_point_gets_no_cell(self):
        pts = np.vstack([FOUR_POINTS, FOUR_POINTS[1]])
        polys = VoronoiDiagram(pts, EXTENT).polygons()
        assert polys[1] is not None
        assert polys[4] is None
        assert sum(polygon_area(p) for p in polys if p is not None) == pytest.approx(10000, rel=1e-6)

    def test_point_outside_extent_gets_no_cell(self):
        pts = np.vstack([FOUR_POINTS, [[150.0, 50.0]]])
        polys = VoronoiDiagram(pts, EXTENT).polygons()
        assert polys[4] is None
        assert all(p is not None for p in polys[:4])

    def test_single_point_owns_extent(self):
        polys = VoronoiDiagram(np.array([[10.0, 10.0]]), EXTENT).polygons()
        assert polygon_area(polys[0]) == pytest.approx(10000)

    def test_empty_input(self):
        diagram = VoronoiDiagram(np.empty((0, 2)), EXTENT)
        assert diagram.polygons() == []
        assert diagram.triangles() == []
        assert diagram.site_count == 0

    def test_collinear_points_do_not_crash(self):
        pts = np.array([[10.0, 50.0], [50.0, 50.0], [90.0, 50.0]])
        polys = VoronoiDiagram(pts, EXTENT).polygons()
        assert len(polys) == 3
        covered = sum(polygon_area(p) for p in polys if p is not None)
        assert covered <= 10000 + 1e-6


class TestTriangles:
    def test_square_gives_two_triangles(self):
        pts = np.array([[10.0, 10.0], [90.0, 10.0], [90.0, 90.0], [10.0, 90.0]])
        tris = VoronoiDiagram(pts, EXTENT).triangles()
        assert len(tris) == 2
        assert sum(polygon_area(t) for t in tris) == pytest.approx(80 * 80)

    def test_vertices_are_input_points(self):
        tris = VoronoiDiagram(FOUR_POINTS, EXTENT).triangles()
        known = {tuple(p) for p in FOUR_POINTS}
        assert tris
        for tri in tris:
            assert tri.shape == (3, 2)
            assert all(tuple(v) in known for v in tri)

    def test_fewer_than_three_sites(self):
        assert VoronoiDiagram(FOUR_POINTS[:2], EXTENT).triangles() == []

    def test_collinear_has_no_triangles(self):
        pts = np.array([[10.0, 50.0], [50.0, 50.0], [90.0, 50.0]])
        assert VoronoiDiagram(pts, EXTENT).triangles() == []


class TestRelax:
    def test_moves_points_to_integer_centroids(self):
        relaxed = relax(FOUR_POINTS, EXTENT, iterations=1)
        assert relaxed.shape == FOUR_POINTS.shape
        np.testing.assert_array_equal(relaxed, np.trunc(relaxed))
        assert not np.array_equal(relaxed, FOUR_POINTS)

    def test_keeps_points_inside_extent(self):
        rng = np.random.default_rng(0)
        pts = rng.uniform(0, 100, size=(40, 2))
        relaxed = relax(pts, EXTENT, iterations=3)
        assert np.all(relaxed >= 0) and np.all(relaxed <= 100)

    def test_point_without_cell_stays(self):
        pts = np.vstack([FOUR_POINTS, [[150.5, 50.5]]])
        relaxed = relax(pts, EXTENT, iterations=1)
        np.testing.assert_array_equal(relaxed[4], [150.5, 50.5])

    def test_zero_iterations_is_identity(self):
        np.testing.assert_array_equal(relax(FOUR_POINTS, EXTENT, iterations=0), FOUR_POINTS)

    def test_input_not_mutated(self):
        pts = FOUR_POINTS.copy()
        relax(pts, EXTENT, iterations=2)
        np.testing.assert_array_equal(pts, FOUR_POINTS)
