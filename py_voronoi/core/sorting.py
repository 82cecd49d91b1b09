"""Point orderings consumed by the incremental Delaunay sweep.

The engine inserts points left to right, so every strategy must leave the
first three points as the leftmost ones and put each later point at or beyond
the x-extent of everything before it.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

import structlog

from .errors import InputError
from .geometry import Point2D

logger = structlog.get_logger()


class SortingStrategy(ABC):
    """Reorders a point list in place before triangulation."""

    @abstractmethod
    def sort(self, points: List[Point2D]) -> None:
        ...


class GridColumnSorting(SortingStrategy):
    """
    Ascending-x selection sort inside equal-length column blocks.

    Precondition: the point source lays its points out as ``width`` column
    blocks of ``height`` points each, where every point of block ``i`` lies
    left of every point of block ``i + 1``. Block boundaries are left intact,
    so this is not a general-purpose sort. ``JitteredField`` produces this
    layout; use ``LexicographicSorting`` for arbitrary point sets.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise InputError(f"Grid layout needs positive dimensions, got {width}x{height}")
        self.width = width
        self.height = height

    def sort(self, points: List[Point2D]) -> None:
        expected = self.width * self.height
        if len(points) != expected:
            raise InputError(
                f"Grid column layout expects {expected} points "
                f"({self.width}x{self.height}), got {len(points)}"
            )

        for column in range(self.width):
            start = column * self.height
            self._sort_block(points, start, start + self.height)

        logger.debug("Sorted point columns", columns=self.width, rows=self.height)

    @staticmethod
    def _sort_block(points: List[Point2D], start: int, stop: int) -> None:
        for i in range(start, stop):
            smallest = i
            for j in range(i, stop):
                if points[j].x < points[smallest].x:
                    smallest = j
            if smallest != i:
                points[i], points[smallest] = points[smallest], points[i]


class LexicographicSorting(SortingStrategy):
    """General ordering by ``(x, y)``, or by a caller-supplied key."""

    def __init__(self, key: Optional[Callable[[Point2D], object]] = None):
        self.key = key or (lambda point: (point.x, point.y))

    def sort(self, points: List[Point2D]) -> None:
        points.sort(key=self.key)
