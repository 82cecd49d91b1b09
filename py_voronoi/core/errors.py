"""Error taxonomy for Delaunay/Voronoi construction. Every error aborts the current build."""


class VoronoiError(Exception):
    """Base class for all triangulation and Voronoi errors."""


class InputError(VoronoiError, ValueError):
    """The point source or a parameter is unusable before construction starts."""


class TopologyInconsistency(VoronoiError, RuntimeError):
    """An internal invariant of the edge registry was broken.

    Attributes:
        edge: Offending edge, if known
        point: Point being inserted when the failure was detected, if known
    """

    def __init__(self, message, edge=None, point=None):
        super().__init__(message)
        self.edge = edge
        self.point = point


class DegenerateGeometry(VoronoiError, ArithmeticError):
    """Collinear or coincident points made a geometric quantity undefined."""

    def __init__(self, message, points=()):
        super().__init__(message)
        self.points = tuple(points)


class StateError(VoronoiError, RuntimeError):
    """Engine output was requested before the build completed."""
