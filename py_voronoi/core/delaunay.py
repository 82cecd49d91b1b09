"""Incremental Delaunay triangulation by left-to-right sweep.

Points are inserted in sorted order. Each new point lies outside the region
triangulated so far, so it is connected to every border edge it can see and
the affected edges are legalised with Lawson flips.

The border is a plain list standing in for a circular one: the seed triangle
is written as ``[upper, lower, rightmost, upper, lower]`` so that the edge
closing the loop appears at both ends. That closing edge is never visible
from a later point, so walks that reach the list ends can simply stop.
"""

import math
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

import structlog

from ..config import settings
from .errors import InputError, StateError, TopologyInconsistency
from .field import PointCloud, PointSource
from .geometry import Diagonoid, Edge, Point2D, Triangle, orientation
from .sorting import LexicographicSorting, SortingStrategy

logger = structlog.get_logger()


class TriangulationState(Enum):
    EMPTY = "empty"
    SEEDED = "seeded"
    BUILDING = "building"
    COMPLETE = "complete"


def _rise(point: Point2D, origin: Point2D) -> float:
    """Cosine between the up vector and the direction origin -> point."""
    return (point.y - origin.y) / math.hypot(point.x - origin.x, point.y - origin.y)


class DelaunayTriangulation:
    """
    Delaunay triangulation engine.

    Owns the Edge -> Diagonoid registry and the border for the duration of a
    build. Outputs are only readable once the state is ``COMPLETE``.
    """

    def __init__(self, source: PointSource, sorting: Optional[SortingStrategy] = None,
                 legality_epsilon: Optional[float] = None,
                 degeneracy_epsilon: Optional[float] = None):
        """
        Initialize the engine.

        Args:
            source: Point source; its list is reordered in place by ``sorting``
            sorting: Ordering strategy, lexicographic (x, y) by default
            legality_epsilon: Slack for the empty-circumcircle test
            degeneracy_epsilon: Collinearity bound relative to the longest squared edge
        """
        self.source = source
        self.sorting = sorting or LexicographicSorting()
        self.legality_epsilon = (settings.legality_epsilon
                                 if legality_epsilon is None else legality_epsilon)
        self.degeneracy_epsilon = (settings.degeneracy_epsilon
                                   if degeneracy_epsilon is None else degeneracy_epsilon)

        self.state = TriangulationState.EMPTY
        self.flip_count = 0
        self._border: List[Point2D] = []
        self._edges: Dict[Edge, Diagonoid] = {}
        self._triangles: List[Triangle] = []

    @property
    def edges(self) -> Dict[Edge, Diagonoid]:
        self._require_complete()
        return self._edges

    @property
    def triangles(self) -> List[Triangle]:
        self._require_complete()
        return self._triangles

    @property
    def border(self) -> List[Point2D]:
        self._require_complete()
        return list(self._border)

    def boundary_edges(self) -> List[Edge]:
        return [edge for edge, diagonoid in self.edges.items() if not diagonoid.is_complete()]

    def interior_edges(self) -> List[Edge]:
        return [edge for edge, diagonoid in self.edges.items() if diagonoid.is_complete()]

    def _require_complete(self):
        if self.state is not TriangulationState.COMPLETE:
            raise StateError(f"Triangulation is {self.state.value}, call build() first")

    def build(self) -> "DelaunayTriangulation":
        """
        Run the whole construction: sort, seed, insert every point, collect triangles.

        Returns:
            self, for chaining

        Raises:
            InputError: Fewer than 3 points
            DegenerateGeometry: Collinear seed or triangle
            TopologyInconsistency: Registry invariant broken during insertion
        """
        self.state = TriangulationState.EMPTY
        self.flip_count = 0
        self._border = []
        self._edges = {}
        self._triangles = []

        points = self.source.points
        if points is None or len(points) < 3:
            count = 0 if points is None else len(points)
            raise InputError(f"Triangulation needs at least 3 points, got {count}")

        logger.info("Starting triangulation", points=len(points))

        self.sorting.sort(points)

        last_index = self._seed(points)
        self.state = TriangulationState.SEEDED

        self.state = TriangulationState.BUILDING
        for i in range(3, len(points)):
            last_index = self._insert(points[i], last_index)

        self._triangles = self._collect_triangles()
        self.state = TriangulationState.COMPLETE

        logger.info("Triangulation complete",
                    points=len(points), edges=len(self._edges),
                    triangles=len(self._triangles), flips=self.flip_count)
        return self

    def _seed(self, points: Sequence[Point2D]) -> int:
        p0, p1, p2 = points[0], points[1], points[2]

        # Collinear seeds fail here rather than producing NaN circumcenters later
        Triangle(p0, p1, p2, self.degeneracy_epsilon)

        e2 = Edge(p0, p1)
        e0 = Edge(p1, p2)
        e1 = Edge(p0, p2)
        self._edges[e2] = Diagonoid(e2, p2)
        self._edges[e0] = Diagonoid(e0, p0)
        self._edges[e1] = Diagonoid(e1, p1)

        # p2 has the largest x so it is always visible; the point pointing
        # further down from it precedes it on the border
        lower = p0 if _rise(p0, p2) < _rise(p1, p2) else p1
        upper = p1 if lower == p0 else p0

        self._border = [upper, lower, p2, upper, lower]

        logger.debug("Seed triangle created", vertices=[str(p) for p in (p0, p1, p2)])
        return 2

    def _insert(self, point: Point2D, last_index: int) -> int:
        """Connect ``point`` to the visible border and splice it in. Returns its border index."""
        border = self._border

        after = last_index
        while after + 1 < len(border):
            here, ahead = border[after], border[after + 1]
            if orientation(here, ahead, point) > 0:
                break
            self._check_edge(here, ahead, point)
            after += 1

        before = last_index
        while before > 0:
            here, behind = border[before], border[before - 1]
            if orientation(here, behind, point) < 0:
                break
            self._check_edge(here, behind, point)
            before -= 1

        # Everything strictly between the two stopping points is now interior
        del border[before + 1:after]
        border.insert(before + 1, point)
        return before + 1

    def _check_edge(self, start: Point2D, end: Point2D, point: Point2D) -> None:
        """
        Attach ``point`` across a border edge and legalise with flips.

        Flips push the two far edges of the flipped quadrilateral onto a
        stack; the start-side edge is popped (and fully resolved) first.
        """
        pending = [(start, end)]

        while pending:
            start, end = pending.pop()
            main_edge = Edge(start, end)
            to_start = Edge(start, point)
            to_end = Edge(end, point)

            current = self._edges.get(main_edge)
            if current is None:
                logger.error("Edge missing from registry", edge=str(main_edge), point=str(point))
                raise TopologyInconsistency(
                    f"Edge {main_edge} is not registered while inserting {point}",
                    edge=main_edge, point=point
                )

            candidate = current.replacing_apex_facing(point)

            if self._keeps_edge(candidate):
                self._edges[main_edge] = candidate
                self._attach_apex(to_start, end)
                self._attach_apex(to_end, start)
                continue

            opposite = candidate.v2
            flipped = candidate.flipped()

            del self._edges[main_edge]
            self._edges[flipped.edge] = flipped
            self._attach_apex(to_end, opposite)
            self._attach_apex(to_start, opposite)
            self.flip_count += 1

            pending.append((end, opposite))
            pending.append((start, opposite))

    def _keeps_edge(self, candidate: Diagonoid) -> bool:
        if not candidate.is_complete():
            return True
        if candidate.main_edge_is_legal(self.legality_epsilon, self.degeneracy_epsilon):
            return True
        # A non-convex quadrilateral cannot be flipped
        return candidate.flipped().apexes_on_same_side()

    def _attach_apex(self, edge: Edge, apex: Point2D) -> None:
        existing = self._edges.get(edge)
        if existing is None:
            self._edges[edge] = Diagonoid(edge, apex)
        else:
            self._edges[edge] = existing.with_apex(apex)

    def _collect_triangles(self) -> List[Triangle]:
        triangles: Dict[Triangle, None] = {}
        for diagonoid in self._edges.values():
            for triangle in diagonoid.triangles(self.degeneracy_epsilon):
                triangles.setdefault(triangle, None)
        return list(triangles)


def triangulate(points: Iterable[Sequence[float]], sorting: Optional[SortingStrategy] = None,
                **kwargs) -> DelaunayTriangulation:
    """Triangulate raw coordinates and return the completed engine."""
    return DelaunayTriangulation(PointCloud(points), sorting, **kwargs).build()
