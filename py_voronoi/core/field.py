"""Point sources for triangulation.

``PointCloud`` wraps an arbitrary list of coordinates. ``JitteredField`` places
one generator per lattice cell with seeded jitter and pads the lattice with
mirrored copies of its outer rows and columns, so that every inner generator
ends up with a closed Voronoi cell.
"""

import math
from typing import Iterable, List, NamedTuple, Optional, Protocol, Sequence

import numpy as np
import structlog

from ..config import settings
from .errors import InputError
from .geometry import Point2D
from .sorting import GridColumnSorting

logger = structlog.get_logger()


class PointSource(Protocol):
    """Anything exposing a mutable, ordered list of points."""
    points: List[Point2D]


def as_point(value: Sequence[float]) -> Point2D:
    """Convert an ``(x, y)`` pair to a finite ``Point2D``."""
    x, y = float(value[0]), float(value[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise InputError(f"Point coordinates must be finite, got ({x}, {y})")
    return Point2D(x, y)


class PointCloud:
    """Plain point source over caller-supplied coordinates."""

    def __init__(self, points: Iterable[Sequence[float]]):
        self.points: List[Point2D] = [as_point(point) for point in points]

    def __len__(self):
        return len(self.points)


class FieldConfig(NamedTuple):
    """Lattice configuration for a jittered field."""
    width: int
    height: int
    cell_size: float = 10.0
    gap: float = 0.1


def validate_field_config(config: FieldConfig) -> None:
    # A single row or column pads into collinear triples
    if config.width < 2 or config.height < 2:
        raise InputError(f"Field needs at least two cells per axis, got {config.width}x{config.height}")
    if config.cell_size <= 0:
        raise InputError(f"Cell size must be positive, got {config.cell_size}")
    if not 0 <= config.gap <= 0.4:
        raise InputError(f"Gap must lie in [0, 0.4], got {config.gap}")


def get_jittered_lattice(config: FieldConfig, seed: Optional[int] = None) -> np.ndarray:
    """
    Generate one jittered point per lattice cell.

    With gap = 0.1 each coordinate is clamped between 10% and 90% of its cell.

    Args:
        config: Field configuration
        seed: Seed for numpy's generator

    Returns:
        Array of shape (width, height, 2); ``lattice[i, j]`` lies in cell (i, j)
    """
    rng = np.random.default_rng(seed)
    gap_mult = 1 - config.gap * 2

    columns, rows = np.meshgrid(np.arange(config.width), np.arange(config.height), indexing="ij")
    cells = np.stack([columns, rows], axis=-1).astype(float)
    offsets = rng.random((config.width, config.height, 2))

    return (cells + config.gap + offsets * gap_mult) * config.cell_size


def get_padded_columns(lattice: np.ndarray, config: FieldConfig) -> np.ndarray:
    """
    Lay the lattice out as column blocks padded with mirrored points.

    Each column gains its first point mirrored across y = 0 and its last
    point mirrored across the top edge. A mirrored copy of the first column
    is prepended (across x = 0) and one of the last column appended (across
    the right edge).

    Returns:
        Array of shape ((width + 2) * (height + 2), 2)
    """
    extent_x = config.width * config.cell_size
    extent_y = config.height * config.cell_size

    def column(i):
        points = lattice[i]
        first = np.array([points[0, 0], -points[0, 1]])
        last = np.array([points[-1, 0], 2 * extent_y - points[-1, 1]])
        return np.vstack([first, points, last])

    left = column(0)
    left[:, 0] = -left[:, 0]
    right = column(config.width - 1)
    right[:, 0] = 2 * extent_x - right[:, 0]

    return np.vstack([left] + [column(i) for i in range(config.width)] + [right])


class JitteredField:
    """Jittered lattice of generators laid out for ``GridColumnSorting``."""

    def __init__(self, config: Optional[FieldConfig] = None, seed: Optional[int] = None):
        if config is None:
            config = FieldConfig(
                width=settings.field_width,
                height=settings.field_height,
                cell_size=settings.cell_size,
                gap=settings.gap,
            )
        validate_field_config(config)

        self.config = config
        self.seed = settings.seed if seed is None else seed

        self.lattice = get_jittered_lattice(config, self.seed)
        self.points: List[Point2D] = [as_point(point) for point in get_padded_columns(self.lattice, config)]

        logger.info("Field generated",
                    width=config.width, height=config.height,
                    seed=self.seed, points=len(self.points))

    @property
    def outer_width(self) -> int:
        return self.config.width + 2

    @property
    def outer_height(self) -> int:
        return self.config.height + 2

    @property
    def generators(self) -> List[Point2D]:
        """Inner points only, column by column."""
        return [as_point(point) for point in self.lattice.reshape(-1, 2)]

    def sorting(self) -> GridColumnSorting:
        return GridColumnSorting(self.outer_width, self.outer_height)
