"""
Example drawing a jittered field's Delaunay triangulation and Voronoi cells.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection, PolyCollection

from py_voronoi.config import configure_logging
from py_voronoi.core import FieldConfig, generate_voronoi_diagram


def main():
    configure_logging(fmt="console")

    config = FieldConfig(width=12, height=9, cell_size=10.0, gap=0.1)
    diagram = generate_voronoi_diagram(config, seed=2024)
    triangulation = diagram.triangulation

    print(f"Generators: {len(diagram.cells)}")
    print(f"Triangles: {len(triangulation.triangles)}")
    print(f"Edges: {len(triangulation.edges)} ({len(triangulation.boundary_edges())} on the hull)")
    print(f"Flips during legalization: {triangulation.flip_count}")

    fig, axes = plt.subplots(1, 2, figsize=(14, 6))

    # Triangulation of the padded field
    ax = axes[0]
    segments = [[edge.start, edge.end] for edge in triangulation.edges]
    ax.add_collection(LineCollection(segments, colors='gray', linewidths=0.5))
    points = np.array(triangulation.source.points)
    ax.scatter(points[:, 0], points[:, 1], s=4, c='lightgray')
    ax.scatter(diagram.generators[:, 0], diagram.generators[:, 1], s=6, c='black')
    ax.set_title('Delaunay triangulation (padded)')
    ax.set_aspect('equal')
    ax.autoscale()

    # Voronoi cells colored by area
    ax = axes[1]
    polygons = diagram.cell_polygons()
    areas = np.array([cell.area() for cell in diagram.cells.values()])
    cells = PolyCollection(polygons, array=areas, cmap='viridis', edgecolors='white', linewidths=0.5)
    ax.add_collection(cells)
    centroids = np.array([cell.centroid() for cell in diagram.cells.values()])
    ax.scatter(diagram.generators[:, 0], diagram.generators[:, 1], s=6, c='black')
    ax.scatter(centroids[:, 0], centroids[:, 1], s=6, c='red', marker='x')
    ax.set_xlim(0, config.width * config.cell_size)
    ax.set_ylim(0, config.height * config.cell_size)
    ax.set_title('Voronoi cells')
    ax.set_aspect('equal')
    plt.colorbar(cells, ax=ax, label='Area')

    plt.tight_layout()
    plt.savefig('voronoi_demo.png', dpi=150)
    print("\nVisualization saved to voronoi_demo.png")

    vertices, faces = diagram.build_mesh()
    print(f"Cell mesh: {len(vertices)} vertices, {len(faces)} faces")


if __name__ == "__main__":
    main()
