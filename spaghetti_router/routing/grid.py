"""
Grid system for A* pathfinding between placed objects.

Rasterizes the query area into a uniform grid, marking cells covered
by blocking rectangles (plus a safety margin) and providing cell
lookup, world/grid conversion and line-of-sight sampling.
"""

from typing import Iterable, List, Sequence
from dataclasses import dataclass
import logging
import math

from ..core.exceptions import DegenerateQueryError, InvalidConfigurationError
from ..core.models import Point, Rect
from .geometry import bounding_box

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridCell:
    """Represents a cell in the routing grid."""
    row: int
    col: int


class Grid:
    """
    Boolean blocked grid covering one routing query.

    Converts continuous world coordinates to discrete cells and tracks
    which cells are blocked. A grid lives for a single routing call.
    """

    def __init__(self, origin_x: float, origin_y: float, rows: int, cols: int, cell_size: float):
        """
        Initialize an empty (fully free) grid.

        Args:
            origin_x: World x of the left edge of column 0
            origin_y: World y of the top edge of row 0
            rows: Number of rows
            cols: Number of columns
            cell_size: World units per cell

        Raises:
            InvalidConfigurationError: If cell_size is not positive
            DegenerateQueryError: If rows or cols is not positive
        """
        if cell_size <= 0:
            raise InvalidConfigurationError(f"cell_size must be positive, got {cell_size}")
        if rows <= 0 or cols <= 0:
            raise DegenerateQueryError(f"Grid has no area: {rows} rows x {cols} cols")

        self.origin_x = origin_x
        self.origin_y = origin_y
        self.rows = rows
        self.cols = cols
        self.cell_size = cell_size

        self.blocked: List[List[bool]] = [[False] * cols for _ in range(rows)]

    def cell_of(self, x: float, y: float) -> GridCell:
        """Cell containing a world point, without clamping to the grid."""
        col = math.floor((x - self.origin_x) / self.cell_size)
        row = math.floor((y - self.origin_y) / self.cell_size)
        return GridCell(row, col)

    def to_grid(self, x: float, y: float) -> GridCell:
        """Convert world coordinates to a grid cell, clamped to the grid."""
        cell = self.cell_of(x, y)
        row = max(0, min(self.rows - 1, cell.row))
        col = max(0, min(self.cols - 1, cell.col))
        return GridCell(row, col)

    def from_grid(self, cell: GridCell) -> Point:
        """Convert grid cell to world coordinates (cell center)."""
        x = self.origin_x + cell.col * self.cell_size + self.cell_size / 2
        y = self.origin_y + cell.row * self.cell_size + self.cell_size / 2
        return (x, y)

    def mark_obstacle(self, rect: Rect, margin: float = 0.0) -> int:
        """
        Mark a rectangular region as blocked.

        Args:
            rect: Obstacle rectangle in world coordinates
            margin: Additional clearance around the rectangle in world units

        Returns:
            Number of cells newly marked
        """
        box = rect.expanded(margin) if margin else rect

        first = self.cell_of(box.x, box.y)
        last = self.cell_of(box.right, box.bottom)

        row_start, row_end = max(0, first.row), min(self.rows - 1, last.row)
        col_start, col_end = max(0, first.col), min(self.cols - 1, last.col)

        marked = 0
        for row in range(row_start, row_end + 1):
            line = self.blocked[row]
            for col in range(col_start, col_end + 1):
                if not line[col]:
                    line[col] = True
                    marked += 1
        return marked

    def clear(self, cell: GridCell) -> None:
        """Force a single cell free."""
        self.blocked[cell.row][cell.col] = False

    def is_valid(self, cell: GridCell) -> bool:
        """Check if a cell is within grid bounds."""
        return 0 <= cell.row < self.rows and 0 <= cell.col < self.cols

    def is_blocked(self, cell: GridCell) -> bool:
        """Check if a cell is blocked."""
        return self.blocked[cell.row][cell.col]

    def is_traversable(self, cell: GridCell) -> bool:
        """Check if a cell can be traversed (valid and not blocked)."""
        return self.is_valid(cell) and not self.is_blocked(cell)

    def blocked_count(self) -> int:
        return sum(sum(line) for line in self.blocked)

    def has_line_of_sight(self, p1: Point, p2: Point) -> bool:
        """
        Check that a straight world-space segment stays on free cells.

        The segment is sampled in sub-steps of half a cell width, both
        endpoints included. Samples falling outside the grid count as
        obstructed.
        """
        dx = p2[0] - p1[0]
        dy = p2[1] - p1[1]
        steps = max(1, math.ceil(max(abs(dx), abs(dy)) / (self.cell_size / 2)))

        for i in range(steps + 1):
            t = i / steps
            cell = self.cell_of(p1[0] + dx * t, p1[1] + dy * t)
            if not self.is_traversable(cell):
                return False
        return True


def compute_query_bounds(
    start: Rect,
    end: Rect,
    blocking: Sequence[Rect],
    padding: float
) -> Rect:
    """
    Bounding box of the start rect, end rect and all blocking rects, padded.

    Args:
        start: Start entity rectangle
        end: End entity rectangle
        blocking: Blocking rectangles for the query
        padding: Extra room on every side so routes can pass around edge obstacles

    Returns:
        Padded query bounds
    """
    box = bounding_box([start, end, *blocking])
    return box.expanded(padding)


def rasterize(
    blocking_rects: Iterable[Rect],
    query_bounds: Rect,
    cell_size: float,
    margin: float = 6.0
) -> Grid:
    """
    Convert blocking rectangles into a boolean blocked grid.

    Every world point inside a blocking rect expanded by margin maps to a
    blocked cell; cells outside all rects stay free.

    Args:
        blocking_rects: Rectangles that block routing for this query
        query_bounds: Area covered by the grid
        cell_size: World units per cell
        margin: Safety margin added around each blocking rect

    Returns:
        Grid covering query_bounds

    Raises:
        InvalidConfigurationError: If cell_size is not positive
        DegenerateQueryError: If the bounds yield zero or negative dimensions
    """
    if cell_size <= 0:
        raise InvalidConfigurationError(f"cell_size must be positive, got {cell_size}")

    cols = math.ceil(query_bounds.width / cell_size)
    rows = math.ceil(query_bounds.height / cell_size)

    grid = Grid(query_bounds.x, query_bounds.y, rows, cols, cell_size)

    rect_count = 0
    for rect in blocking_rects:
        grid.mark_obstacle(rect, margin)
        rect_count += 1

    logger.debug(
        f"Rasterized {rect_count} blocking rects into {rows}x{cols} grid "
        f"(cell={cell_size}, margin={margin}, blocked={grid.blocked_count()})"
    )
    return grid

