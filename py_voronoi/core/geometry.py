"""Planar value types used by the Delaunay engine.

Points are plain ``(x, y)`` tuples, edges are canonical undirected segments,
triangles carry their circumcenter, and a Diagonoid records the apex points
of the one or two triangles that share an edge.
"""

import math
from dataclasses import dataclass, field, InitVar
from typing import NamedTuple, Optional, Tuple

from .errors import DegenerateGeometry, TopologyInconsistency


class Point2D(NamedTuple):
    """2D coordinate. Tuple ordering is lexicographic (x, then y)."""
    x: float
    y: float

    def __str__(self):
        return f"({self.x:g}, {self.y:g})"


def orientation(origin: Point2D, a: Point2D, b: Point2D) -> float:
    """Z-component of the cross product ``(a - origin) x (b - origin)``.

    Positive when ``b`` lies counterclockwise of ``a`` as seen from ``origin``.
    """
    return (a.x - origin.x) * (b.y - origin.y) - (b.x - origin.x) * (a.y - origin.y)


def squared_distance(a: Point2D, b: Point2D) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def circumcenter(a: Point2D, b: Point2D, c: Point2D, tolerance: float = 0.0) -> Point2D:
    """
    Compute the center of the circle through three points.

    Args:
        a, b, c: Triangle vertices
        tolerance: Denominator bound relative to the longest squared edge,
            so the check does not depend on the coordinate scale

    Returns:
        Circumcenter coordinates

    Raises:
        DegenerateGeometry: If the points are collinear (or nearly so)
    """
    denominator = 2 * (a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y))
    scale = max(squared_distance(a, b), squared_distance(b, c), squared_distance(a, c))
    if abs(denominator) <= tolerance * scale:
        raise DegenerateGeometry(
            f"Collinear points have no circumcenter: {a}, {b}, {c}", points=(a, b, c)
        )

    ad = a.x * a.x + a.y * a.y
    bd = b.x * b.x + b.y * b.y
    cd = c.x * c.x + c.y * c.y

    x = (ad * (b.y - c.y) + bd * (c.y - a.y) + cd * (a.y - b.y)) / denominator
    y = (ad * (c.x - b.x) + bd * (a.x - c.x) + cd * (b.x - a.x)) / denominator

    if not (math.isfinite(x) and math.isfinite(y)):
        raise DegenerateGeometry(
            f"Circumcenter overflowed for {a}, {b}, {c}", points=(a, b, c)
        )
    return Point2D(x, y)


@dataclass(frozen=True)
class Edge:
    """Undirected segment; ``start`` is always the lexicographically smaller end."""
    start: Point2D
    end: Point2D

    def __post_init__(self):
        start, end = Point2D(*self.start), Point2D(*self.end)
        if start == end:
            raise DegenerateGeometry(f"Zero-length edge at {start}", points=(start,))
        if end < start:
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @property
    def length(self) -> float:
        return math.sqrt(squared_distance(self.start, self.end))

    @property
    def midpoint(self) -> Point2D:
        return Point2D((self.start.x + self.end.x) / 2, (self.start.y + self.end.y) / 2)

    @property
    def direction(self) -> Point2D:
        return Point2D(self.end.x - self.start.x, self.end.y - self.start.y)

    def points_on_same_side(self, p: Point2D, q: Point2D) -> bool:
        """True if both points lie strictly on the same side of the edge's line."""
        return orientation(self.start, self.end, p) * orientation(self.start, self.end, q) > 0

    def __str__(self):
        return f"From {self.start} to {self.end}"


@dataclass(frozen=True, eq=False)
class Triangle:
    """Three vertices plus their circumcenter.

    Equality and hashing use only the vertex set, so the same triangle found
    through different edges collapses to one entry in a set.
    """
    v1: Point2D
    v2: Point2D
    v3: Point2D
    tolerance: InitVar[float] = 0.0
    center: Point2D = field(init=False)

    def __post_init__(self, tolerance):
        object.__setattr__(self, "center", circumcenter(self.v1, self.v2, self.v3, tolerance))

    @property
    def vertices(self) -> Tuple[Point2D, Point2D, Point2D]:
        return (self.v1, self.v2, self.v3)

    @property
    def circumradius_squared(self) -> float:
        return squared_distance(self.v1, self.center)

    def has_vertex(self, point: Point2D) -> bool:
        return point == self.v1 or point == self.v2 or point == self.v3

    def circumcircle_contains(self, point: Point2D, epsilon: float = 0.0) -> bool:
        """True if ``point`` lies strictly inside the circumcircle by more than ``epsilon``."""
        return squared_distance(point, self.center) < self.circumradius_squared - epsilon

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return (Edge(self.v1, self.v2), Edge(self.v2, self.v3), Edge(self.v1, self.v3))

    def __eq__(self, other):
        if not isinstance(other, Triangle):
            return NotImplemented
        return all(self.has_vertex(vertex) for vertex in other.vertices)

    def __hash__(self):
        return hash(tuple(sorted(self.vertices)))

    def __str__(self):
        return f"{self.v1}, {self.v2}, {self.v3}"


@dataclass(frozen=True)
class Diagonoid:
    """Registry entry for one edge: the apexes of its one or two triangles.

    ``v2`` is ``None`` while only one triangle is known (a border edge).
    """
    edge: Edge
    v1: Point2D
    v2: Optional[Point2D] = None

    def __post_init__(self):
        if self.v2 is not None and self.v2 == self.v1:
            raise TopologyInconsistency(
                f"Both apexes of {self.edge} are {self.v1}", edge=self.edge, point=self.v1
            )

    @property
    def edge_start(self) -> Point2D:
        return self.edge.start

    @property
    def edge_end(self) -> Point2D:
        return self.edge.end

    @property
    def apexes(self) -> Tuple[Point2D, ...]:
        if self.v2 is None:
            return (self.v1,)
        return (self.v1, self.v2)

    def is_complete(self) -> bool:
        return self.v2 is not None

    def main_edge_is_legal(self, epsilon: float = 0.0, tolerance: float = 0.0) -> bool:
        """
        Check the edge against the empty-circumcircle criterion.

        Each apex must not lie inside the circumcircle of the triangle formed
        by the edge and the other apex. Incomplete diagonoids are always legal.

        Args:
            epsilon: Slack on squared distances before a point counts as inside
            tolerance: Degeneracy bound forwarded to the circumcenter computation

        Returns:
            True if the edge should be kept
        """
        if self.v2 is None:
            return True

        first = Triangle(self.edge_start, self.edge_end, self.v1, tolerance)
        second = Triangle(self.edge_start, self.edge_end, self.v2, tolerance)

        return (
            squared_distance(self.v1, first.center) <= squared_distance(self.v2, first.center) + epsilon
            and squared_distance(self.v2, second.center) <= squared_distance(self.v1, second.center) + epsilon
        )

    def with_apex(self, point: Point2D) -> "Diagonoid":
        """Merge a newly found apex, replacing whichever apex shares its side."""
        if not self.edge.points_on_same_side(point, self.v1):
            return Diagonoid(self.edge, point, self.v1)
        return Diagonoid(self.edge, point, self.v2)

    def replacing_apex_facing(self, point: Point2D) -> "Diagonoid":
        """Candidate for ``point`` as new apex; keeps the apex on the opposite side."""
        if self.edge.points_on_same_side(point, self.v1):
            return Diagonoid(self.edge, point, self.v2)
        return Diagonoid(self.edge, point, self.v1)

    def flipped(self) -> "Diagonoid":
        """The alternative diagonal of the quadrilateral, with this edge's ends as apexes."""
        if self.v2 is None:
            raise TopologyInconsistency(
                f"Cannot flip border edge {self.edge}", edge=self.edge, point=self.v1
            )
        return Diagonoid(Edge(self.v1, self.v2), self.edge_end, self.edge_start)

    def apexes_on_same_side(self) -> bool:
        """True when the quadrilateral is not convex across this edge."""
        return self.v2 is not None and self.edge.points_on_same_side(self.v1, self.v2)

    def triangles(self, tolerance: float = 0.0) -> Tuple[Triangle, ...]:
        return tuple(
            Triangle(self.edge_start, self.edge_end, apex, tolerance) for apex in self.apexes
        )

    def __str__(self):
        return f"{self.edge}, v:{self.v1}, {self.v2}"
