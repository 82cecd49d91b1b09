"""Voronoi cell assembled from the Delaunay triangles around one generator."""

from typing import List, Optional, Set

import numpy as np

from .geometry import Point2D, Triangle, orientation


def _shoelace_terms(polygon: np.ndarray):
    """Per-edge coordinate sums and cross products of a closed polygon."""
    x, y = polygon[:, 0], polygon[:, 1]
    x_next, y_next = np.roll(x, -1), np.roll(y, -1)
    return x + x_next, y + y_next, x * y_next - x_next * y


class Cell:
    """
    Voronoi cell owned by one generator point.

    ``vertices`` holds the circumcenters of the incident triangles in
    clockwise order around the generator. The list is kept as two angular
    runs: first the vertices strictly below the generator, then those at or
    above it. Within each run a cross product orders vertices without any
    wraparound, so each new vertex needs a single insertion step.
    """

    def __init__(self, center):
        self.center = Point2D(float(center[0]), float(center[1]))
        self.vertices: List[Point2D] = []
        self.neighbors: Set["Cell"] = set()
        self._below_count = 0

    def add_neighbor(self, other: Optional["Cell"]) -> None:
        """Record a mutual adjacency. Self and missing cells are ignored."""
        if other is None or other is self:
            return
        self.neighbors.add(other)
        other.neighbors.add(self)

    def add_triangle(self, triangle: Triangle) -> None:
        """Insert the triangle's circumcenter into the ordered polygon."""
        vertex = triangle.center

        if vertex.y < self.center.y:
            index = self._find_slot(vertex, 0, self._below_count)
            self._below_count += 1
        else:
            index = self._find_slot(vertex, self._below_count, len(self.vertices))

        self.vertices.insert(index, vertex)

    def _find_slot(self, vertex: Point2D, start: int, stop: int) -> int:
        # First existing vertex that is clockwise of (or collinear with) the new one
        for i in range(start, stop):
            if orientation(self.center, vertex, self.vertices[i]) <= 0:
                return i
        return stop

    def polygon(self) -> np.ndarray:
        """Vertices as an (k, 2) array."""
        return np.array(self.vertices, dtype=float).reshape(-1, 2)

    def vertices_3d(self, z: float = 0.0) -> np.ndarray:
        """Vertices lifted to 3D, as consumed by mesh builders."""
        polygon = self.polygon()
        return np.column_stack([polygon, np.full(len(polygon), z)])

    def area(self) -> float:
        """Unsigned polygon area (shoelace formula)."""
        polygon = self.polygon()
        if len(polygon) < 3:
            return 0.0
        _, _, cross = _shoelace_terms(polygon)
        return 0.5 * abs(cross.sum())

    def centroid(self) -> np.ndarray:
        """
        Compute the centroid of the cell polygon.

        Falls back to the vertex mean for degenerate polygons.

        Returns:
            [x, y] centroid coordinates
        """
        polygon = self.polygon()
        if len(polygon) < 3:
            return polygon.mean(axis=0) if len(polygon) else np.array(self.center)

        x_sum, y_sum, cross = _shoelace_terms(polygon)
        signed_area = 0.5 * cross.sum()

        if abs(signed_area) < 1e-10:
            return polygon.mean(axis=0)

        cx = np.dot(x_sum, cross) / (6.0 * signed_area)
        cy = np.dot(y_sum, cross) / (6.0 * signed_area)
        return np.array([cx, cy])

    def __repr__(self):
        return f"Cell(center={self.center}, vertices={len(self.vertices)}, neighbors={len(self.neighbors)})"
