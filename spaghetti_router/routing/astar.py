"""
A* pathfinding on the rasterized routing grid.

Implements A* with 8-directional movement and a cost function that considers:
- Step length (1 orthogonal, sqrt(2) diagonal)
- Optional proximity penalty (prefer routes away from clutter)

Nodes live in a flat list and reference their parent by index. The open
set is a binary heap ordered by (f_cost, insertion sequence) so ties are
broken by discovery order.
"""

from typing import Dict, List, Optional, Tuple
import heapq
import logging
import math
from dataclasses import dataclass

from .grid import Grid, GridCell
from .proximity import ProximityField

logger = logging.getLogger(__name__)

SQRT2 = math.sqrt(2)

# (d_row, d_col, step cost)
DIRECTIONS: List[Tuple[int, int, float]] = [
    (-1, 0, 1.0),
    (1, 0, 1.0),
    (0, -1, 1.0),
    (0, 1, 1.0),
    (-1, -1, SQRT2),
    (-1, 1, SQRT2),
    (1, -1, SQRT2),
    (1, 1, SQRT2),
]

DEFAULT_MAX_ITERATIONS = 20000


@dataclass
class Node:
    """Node in A* search."""
    cell: GridCell
    g_cost: float
    f_cost: float
    parent: Optional[int] = None  # index into the node list


def chebyshev_distance(cell1: GridCell, cell2: GridCell) -> int:
    """Calculate Chebyshev distance between two cells."""
    return max(abs(cell1.row - cell2.row), abs(cell1.col - cell2.col))


def reconstruct_path(nodes: List[Node], index: int) -> List[GridCell]:
    """Reconstruct path from goal node by following parent indices."""
    path = []
    current: Optional[int] = index

    while current is not None:
        node = nodes[current]
        path.append(node.cell)
        current = node.parent

    path.reverse()
    return path


def _can_step(grid: Grid, cell: GridCell, d_row: int, d_col: int) -> Optional[GridCell]:
    """Neighbor reached by one step, or None if out of bounds, blocked or cutting a corner."""
    neighbor = GridCell(cell.row + d_row, cell.col + d_col)
    if not grid.is_traversable(neighbor):
        return None

    if d_row and d_col:
        if grid.blocked[cell.row][cell.col + d_col] or grid.blocked[cell.row + d_row][cell.col]:
            return None

    return neighbor


def find_path(
    grid: Grid,
    field: Optional[ProximityField],
    start: GridCell,
    end: GridCell,
    proximity_weight: float = 0.0,
    max_iterations: int = DEFAULT_MAX_ITERATIONS
) -> Optional[List[GridCell]]:
    """
    Find the minimum-cost path from start to end using A*.

    A blocked start or end cell is forcibly cleared before searching.

    Args:
        grid: Grid with obstacles (start/end cells may be cleared in place)
        field: Proximity field, or None to disable the proximity penalty
        start: Starting grid cell
        end: Goal grid cell
        proximity_weight: Multiplier applied to field[target] for each step
        max_iterations: Expansion budget; exhausting it counts as no route

    Returns:
        List of grid cells from start to end inclusive, or None if no path exists
    """
    if not grid.is_valid(start) or not grid.is_valid(end):
        logger.warning(f"Start {start} or end {end} lies outside the {grid.rows}x{grid.cols} grid")
        return None

    for label, cell in (('start', start), ('end', end)):
        if grid.is_blocked(cell):
            logger.warning(f"{label.capitalize()} cell ({cell.row}, {cell.col}) is blocked, clearing it")
            grid.clear(cell)

    use_field = field is not None and proximity_weight > 0

    nodes: List[Node] = []
    open_set: List[Tuple[float, int, int]] = []  # (f_cost, sequence, node index)
    best_g_cost: Dict[GridCell, float] = {start: 0.0}
    closed_set = set()
    sequence = 0

    h = chebyshev_distance(start, end)
    nodes.append(Node(cell=start, g_cost=0.0, f_cost=h))
    heapq.heappush(open_set, (h, sequence, 0))

    expansions = 0

    while open_set:
        _, _, index = heapq.heappop(open_set)
        current = nodes[index]

        # Stale heap entry
        if current.cell in closed_set:
            continue

        if current.cell == end:
            path = reconstruct_path(nodes, index)
            logger.debug(f"A* reached goal after {expansions} expansions, {len(path)} cells")
            return path

        if expansions >= max_iterations:
            logger.warning(f"A* iteration cap of {max_iterations} reached without finding a route")
            return None
        expansions += 1

        closed_set.add(current.cell)

        for d_row, d_col, step_cost in DIRECTIONS:
            neighbor = _can_step(grid, current.cell, d_row, d_col)
            if neighbor is None or neighbor in closed_set:
                continue

            g_cost = current.g_cost + step_cost
            if use_field:
                g_cost += field[neighbor.row][neighbor.col] * proximity_weight

            # Only strictly better paths replace a known one
            if neighbor in best_g_cost and g_cost >= best_g_cost[neighbor]:
                continue
            best_g_cost[neighbor] = g_cost

            f_cost = g_cost + chebyshev_distance(neighbor, end)
            sequence += 1
            nodes.append(Node(cell=neighbor, g_cost=g_cost, f_cost=f_cost, parent=index))
            heapq.heappush(open_set, (f_cost, sequence, len(nodes) - 1))

    logger.debug(f"A* open set exhausted after {expansions} expansions")
    return None
