"""
Proximity field: soft clutter-avoidance cost per grid cell.

Cells close to blocked cells score near 1, cells with no blocked cell
within the influence radius score 0. The search adds the score times
a caller-supplied weight to each step, so routes drift away from
obstacles without treating near cells as impassable.
"""

from typing import List
import logging

from ..core.exceptions import InvalidConfigurationError
from .grid import Grid

logger = logging.getLogger(__name__)

ProximityField = List[List[float]]


def build_proximity_field(grid: Grid, influence_radius_cells: int) -> ProximityField:
    """
    Score every cell by its Chebyshev distance to the nearest blocked cell.

    Args:
        grid: Rasterized query grid
        influence_radius_cells: Scan radius in cells

    Returns:
        rows x cols field of scores in [0, 1]; blocked cells score exactly 1

    Raises:
        InvalidConfigurationError: If the radius is not positive
    """
    if influence_radius_cells <= 0:
        raise InvalidConfigurationError(
            f"influence_radius_cells must be positive, got {influence_radius_cells}"
        )

    radius = influence_radius_cells
    blocked = grid.blocked
    field: ProximityField = [[0.0] * grid.cols for _ in range(grid.rows)]

    for row in range(grid.rows):
        for col in range(grid.cols):
            if blocked[row][col]:
                field[row][col] = 1.0
                continue

            nearest = None
            for r in range(max(0, row - radius), min(grid.rows, row + radius + 1)):
                line = blocked[r]
                for c in range(max(0, col - radius), min(grid.cols, col + radius + 1)):
                    if line[c]:
                        d = max(abs(r - row), abs(c - col))
                        if nearest is None or d < nearest:
                            nearest = d

            if nearest is not None:
                score = (radius - nearest) / radius
                field[row][col] = max(0.0, min(1.0, score))

    logger.debug(f"Built proximity field {grid.rows}x{grid.cols} with radius {radius}")
    return field
