"""
Core triangulation and Voronoi functionality.
"""

from .errors import VoronoiError, InputError, TopologyInconsistency, DegenerateGeometry, StateError
from .geometry import Point2D, Edge, Triangle, Diagonoid
from .sorting import SortingStrategy, GridColumnSorting, LexicographicSorting
from .field import PointSource, PointCloud, FieldConfig, JitteredField
from .delaunay import DelaunayTriangulation, TriangulationState, triangulate
from .cell import Cell
from .mesh import PolygonMesh
from .voronoi_diagram import VoronoiDiagram, assign_triangles, generate_voronoi_diagram

__all__ = ['VoronoiError', 'InputError', 'TopologyInconsistency', 'DegenerateGeometry', 'StateError',
           'Point2D', 'Edge', 'Triangle', 'Diagonoid',
           'SortingStrategy', 'GridColumnSorting', 'LexicographicSorting',
           'PointSource', 'PointCloud', 'FieldConfig', 'JitteredField',
           'DelaunayTriangulation', 'TriangulationState', 'triangulate',
           'Cell', 'PolygonMesh',
           'VoronoiDiagram', 'assign_triangles', 'generate_voronoi_diagram']
