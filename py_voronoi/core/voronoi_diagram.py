"""Voronoi diagram assembly from a completed Delaunay triangulation."""

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import structlog

from .cell import Cell
from .delaunay import DelaunayTriangulation
from .field import FieldConfig, JitteredField, as_point
from .geometry import Point2D, Triangle
from .mesh import PolygonMesh

logger = structlog.get_logger()


def assign_triangles(triangles: Iterable[Triangle], cells: Dict[Point2D, Cell]) -> None:
    """
    Dispatch every triangle to the cells owning its vertices.

    Each owning cell gains the triangle's circumcenter as a polygon vertex,
    and the owners of the three vertices become mutual neighbors. Vertices
    without a cell (padding points) are skipped.

    Args:
        triangles: Triangles of a completed triangulation
        cells: Cells keyed by generator point
    """
    for triangle in triangles:
        owners = [cells.get(vertex) for vertex in triangle.vertices]

        for cell in owners:
            if cell is not None:
                cell.add_triangle(triangle)

        for first, second in combinations(owners, 2):
            if first is not None:
                first.add_neighbor(second)


@dataclass
class VoronoiDiagram:
    """Voronoi cells for the inner generators of a jittered field."""
    config: FieldConfig
    seed: int
    generators: np.ndarray
    cells: Dict[Point2D, Cell]
    triangulation: DelaunayTriangulation

    def cell_for(self, point) -> Optional[Cell]:
        return self.cells.get(as_point(point))

    def cell_polygons(self) -> List[np.ndarray]:
        """Polygon of each cell, in generator order."""
        return [cell.polygon() for cell in self.cells.values()]

    def build_mesh(self, z: float = 0.0) -> Tuple[np.ndarray, np.ndarray]:
        """Fan-triangulate every closed cell into one mesh."""
        mesh = PolygonMesh()
        for cell in self.cells.values():
            if len(cell.vertices) >= 3:
                mesh.add_polygon(cell.vertices_3d(z))
        mesh.remove_duplicate_vertices()
        return mesh.build()

    def cell_neighbors(self) -> List[List[int]]:
        """Neighbor cell indices for each cell, in generator order."""
        index = {id(cell): i for i, cell in enumerate(self.cells.values())}
        return [
            sorted(index[id(neighbor)] for neighbor in cell.neighbors)
            for cell in self.cells.values()
        ]


def generate_voronoi_diagram(config: Optional[FieldConfig] = None,
                             seed: Optional[int] = None) -> VoronoiDiagram:
    """
    Generate a jittered field and compute the Voronoi cell of every inner generator.

    Args:
        config: Field configuration, defaults from settings
        seed: Jitter seed, defaults from settings

    Returns:
        Completed Voronoi diagram
    """
    field = JitteredField(config, seed)
    cells = {point: Cell(point) for point in field.generators}

    triangulation = DelaunayTriangulation(field, field.sorting()).build()
    assign_triangles(triangulation.triangles, cells)

    logger.info("Voronoi diagram assembled",
                cells=len(cells), triangles=len(triangulation.triangles))

    return VoronoiDiagram(
        config=field.config,
        seed=field.seed,
        generators=field.lattice.reshape(-1, 2),
        cells=cells,
        triangulation=triangulation,
    )
