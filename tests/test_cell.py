"""Tests for Voronoi cell polygon assembly."""

import math
from itertools import permutations
from types import SimpleNamespace

import numpy as np
import pytest

from py_voronoi.core.cell import Cell
from py_voronoi.core.delaunay import DelaunayTriangulation, triangulate
from py_voronoi.core.field import PointCloud
from py_voronoi.core.geometry import Point2D, orientation
from py_voronoi.core.sorting import LexicographicSorting
from py_voronoi.core.voronoi_diagram import assign_triangles


def stub_triangle(x, y):
    """Only the circumcenter matters to a cell."""
    return SimpleNamespace(center=Point2D(x, y))


CLOCKWISE_HEXAGON = [(1, -1), (0, -2), (-1, -1), (-1, 1), (0, 2), (1, 1)]


class TestNeighbors:
    """Test the adjacency set."""

    def test_symmetric(self):
        """Adding a neighbor links both cells."""
        a, b = Cell((0, 0)), Cell((1, 0))
        a.add_neighbor(b)

        assert b in a.neighbors
        assert a in b.neighbors

    def test_idempotent(self):
        """Adding the same neighbor twice has no further effect."""
        a, b = Cell((0, 0)), Cell((1, 0))
        a.add_neighbor(b)
        b.add_neighbor(a)

        assert len(a.neighbors) == 1
        assert len(b.neighbors) == 1

    def test_ignores_self_and_missing(self):
        """Self references and absent cells are skipped."""
        a = Cell((0, 0))
        a.add_neighbor(a)
        a.add_neighbor(None)

        assert a.neighbors == set()

    def test_cells_with_equal_centers_are_distinct(self):
        """Cells are compared by identity."""
        a, b = Cell((0, 0)), Cell((0, 0))
        a.add_neighbor(b)
        assert len(a.neighbors) == 1


class TestPolygonOrder:
    """Test incremental angular insertion."""

    def test_known_order(self):
        """Vertices end up clockwise, starting with those below the generator."""
        cell = Cell((0, 0))
        for x, y in [(0, 2), (1, -1), (-1, 1), (-1, -1), (1, 1), (0, -2)]:
            cell.add_triangle(stub_triangle(x, y))

        assert cell.vertices == [Point2D(x, y) for x, y in CLOCKWISE_HEXAGON]

    def test_insertion_order_does_not_matter(self):
        """Every insertion order produces the same polygon."""
        expected = [Point2D(x, y) for x, y in CLOCKWISE_HEXAGON]

        for order in permutations(CLOCKWISE_HEXAGON):
            cell = Cell((0, 0))
            for x, y in order:
                cell.add_triangle(stub_triangle(x, y))
            assert cell.vertices == expected

    def test_vertex_level_with_generator_joins_upper_run(self):
        """A vertex at the generator's height belongs after the lower run."""
        cell = Cell((0, 0))
        for x, y in [(0, -1), (2, 0), (0, 1)]:
            cell.add_triangle(stub_triangle(x, y))

        assert cell.vertices == [Point2D(0, -1), Point2D(0, 1), Point2D(2, 0)]

    def test_offset_generator(self):
        """Ordering is relative to the generator, not the origin."""
        cell = Cell((10, 10))
        for x, y in [(11, 11), (9, 9), (9, 11), (11, 9)]:
            cell.add_triangle(stub_triangle(x, y))

        polygon = cell.vertices
        for i in range(len(polygon)):
            assert orientation(cell.center, polygon[i], polygon[(i + 1) % len(polygon)]) < 0


class TestPolygonOutputs:
    """Test derived polygon data."""

    @pytest.fixture
    def square(self):
        cell = Cell((0, 0))
        for x, y in [(1, 1), (-1, 1), (-1, -1), (1, -1)]:
            cell.add_triangle(stub_triangle(x, y))
        return cell

    def test_polygon_array(self, square):
        """The polygon is an (k, 2) float array."""
        polygon = square.polygon()
        assert polygon.shape == (4, 2)
        assert polygon.dtype == float

    def test_vertices_3d(self, square):
        """Lifting adds a constant z column."""
        lifted = square.vertices_3d(z=2.5)

        assert lifted.shape == (4, 3)
        np.testing.assert_array_equal(lifted[:, 2], 2.5)
        np.testing.assert_array_equal(lifted[:, :2], square.polygon())

    def test_area_and_centroid(self, square):
        """Shoelace area and centroid of a centered square."""
        assert square.area() == pytest.approx(4.0)
        np.testing.assert_allclose(square.centroid(), [0.0, 0.0], atol=1e-12)

    def test_off_center_rectangle(self):
        """Area and centroid of a rectangle not centered on the generator."""
        cell = Cell((1, 1))
        for x, y in [(0, 0), (4, 0), (4, 2), (0, 2)]:
            cell.add_triangle(stub_triangle(x, y))

        assert cell.area() == pytest.approx(8.0)
        np.testing.assert_allclose(cell.centroid(), [2.0, 1.0])

    def test_empty_cell(self):
        """A cell without triangles has no area."""
        cell = Cell((3, 4))
        assert cell.area() == 0.0
        assert cell.polygon().shape == (0, 2)
        np.testing.assert_array_equal(cell.centroid(), [3, 4])


class TestCellsFromTriangulation:
    """Test cells built from a real triangulation."""

    def test_central_point(self):
        """The inner point's polygon has one vertex per incident triangle and neighbor."""
        points = [(0, 0), (4, 0), (0, 4), (4, 4), (2, 1)]
        engine = triangulate(points)
        cells = {Point2D(float(x), float(y)): Cell((x, y)) for x, y in points}

        assign_triangles(engine.triangles, cells)

        center = cells[Point2D(2.0, 1.0)]
        incident = [t for t in engine.triangles if t.has_vertex(center.center)]

        assert len(center.vertices) == len(incident) == 4
        assert len(center.neighbors) == 4

        expected = [Point2D(2, -1.5), Point2D(0.25, 2), Point2D(2, 19 / 6), Point2D(3.75, 2)]
        np.testing.assert_allclose(center.polygon(), np.array(expected), atol=1e-9)

    def test_hull_cells_are_open(self):
        """Hull generators only see their incident triangles."""
        points = [(0, 0), (4, 0), (0, 4), (4, 4), (2, 1)]
        engine = triangulate(points)
        cells = {Point2D(float(x), float(y)): Cell((x, y)) for x, y in points}

        assign_triangles(engine.triangles, cells)

        corner = cells[Point2D(0.0, 0.0)]
        assert len(corner.vertices) == 2
        assert {n.center for n in corner.neighbors} == {
            Point2D(4, 0), Point2D(0, 4), Point2D(2, 1)
        }

    @pytest.mark.parametrize("seed", [3, 11, 58, 2024])
    def test_random_interior_cells_wind_once(self, seed):
        """Every cell away from the hull is a simple clockwise polygon around its generator."""
        rng = np.random.default_rng(seed)
        engine = DelaunayTriangulation(PointCloud(rng.random((120, 2)) * 50.0),
                                       LexicographicSorting()).build()
        cells = {point: Cell(point) for point in engine.source.points}
        assign_triangles(engine.triangles, cells)

        hull = {point for edge in engine.boundary_edges() for point in (edge.start, edge.end)}
        interior = [cell for point, cell in cells.items() if point not in hull]
        assert interior

        for cell in interior:
            polygon = cell.vertices
            incident = [t for t in engine.triangles if t.has_vertex(cell.center)]
            assert len(polygon) == len(incident) == len(cell.neighbors)

            turning = 0.0
            for i in range(len(polygon)):
                a, b = polygon[i], polygon[(i + 1) % len(polygon)]
                assert orientation(cell.center, a, b) < 0
                step = (math.atan2(b.y - cell.center.y, b.x - cell.center.x)
                        - math.atan2(a.y - cell.center.y, a.x - cell.center.x))
                turning += (step + math.pi) % (2 * math.pi) - math.pi
            assert turning == pytest.approx(-2 * math.pi)
