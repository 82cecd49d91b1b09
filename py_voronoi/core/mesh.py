"""Fan triangulation of cell polygons into indexed meshes."""

from typing import Dict, List, Sequence, Tuple

import numpy as np

from .errors import InputError


class PolygonMesh:
    """
    Accumulates convex polygons into one vertex/face list.

    Each polygon is split into a fan around its first vertex. Several
    polygons can share one mesh; their vertex indices are offset accordingly.
    """

    def __init__(self, reverse_winding: bool = False):
        self.reverse_winding = reverse_winding
        self.vertices: List[Tuple[float, ...]] = []
        self.faces: List[Tuple[int, int, int]] = []

    def add_polygon(self, vertices: Sequence[Sequence[float]]) -> None:
        if len(vertices) < 3:
            raise InputError(f"A polygon needs at least 3 vertices, got {len(vertices)}")

        start = len(self.vertices)
        self.vertices.extend(tuple(float(c) for c in vertex) for vertex in vertices)

        for i in range(1, len(vertices) - 1):
            if self.reverse_winding:
                self.faces.append((start, start + i, start + i + 1))
            else:
                self.faces.append((start, start + i + 1, start + i))

    def remove_duplicate_vertices(self) -> None:
        """Merge identical vertices, e.g. corners shared by neighboring cells."""
        unique: Dict[Tuple[float, ...], int] = {}
        remap = []
        for vertex in self.vertices:
            remap.append(unique.setdefault(vertex, len(unique)))

        self.vertices = list(unique)
        self.faces = [(remap[a], remap[b], remap[c]) for a, b, c in self.faces]

    def build(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(vertices, faces)`` arrays."""
        dimension = len(self.vertices[0]) if self.vertices else 3
        vertices = np.array(self.vertices, dtype=float).reshape(-1, dimension)
        faces = np.array(self.faces, dtype=np.int64).reshape(-1, 3)
        return vertices, faces
