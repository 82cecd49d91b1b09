"""Incremental Delaunay triangulation and Voronoi cell construction."""

from .core import (
    Cell, DelaunayTriangulation, FieldConfig, PointCloud, VoronoiDiagram,
    generate_voronoi_diagram, triangulate
)

__version__ = "0.1.0"

__all__ = ['Cell', 'DelaunayTriangulation', 'FieldConfig', 'PointCloud', 'VoronoiDiagram',
           'generate_voronoi_diagram', 'triangulate']
