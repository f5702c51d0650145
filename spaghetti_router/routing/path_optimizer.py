"""
Path optimization for routed and freehand paths.

Post-processes raw pathfinding output into sparse polylines:
- Convert grid cells to world coordinates
- Thin closely spaced points
- Line-of-sight reduction over the blocked grid
- Validate clearance from blocking rectangles
"""

from typing import List, Sequence
import logging

from ..core.models import Point, Rect
from .geometry import distance, segment_intersects_rect
from .grid import Grid, GridCell

logger = logging.getLogger(__name__)


def cells_to_world(cells: Sequence[GridCell], grid: Grid) -> List[Point]:
    """
    Convert grid cells to world coordinates.

    Args:
        cells: List of grid cells
        grid: Grid the cells belong to

    Returns:
        List of (x, y) cell centers
    """
    return [grid.from_grid(cell) for cell in cells]


def simplify_path(points: Sequence[Point], tolerance: float) -> List[Point]:
    """
    Thin a polyline by minimum spacing.

    Keeps the first and last point. An intermediate point survives only
    if it lies at least tolerance away from the last kept point. Works on
    freehand input as well as search output.

    Args:
        points: Polyline vertices
        tolerance: Minimum distance between kept points

    Returns:
        Simplified point list (input unchanged if it has fewer than 2 points)
    """
    if len(points) < 2:
        logger.debug(f"Simplify skipped: {len(points)} point(s)")
        return list(points)

    kept = [points[0]]

    for i in range(1, len(points) - 1):
        if distance(points[i], kept[-1]) >= tolerance:
            kept.append(points[i])

    kept.append(points[-1])
    return kept


def line_of_sight_reduce(points: Sequence[Point], grid: Grid) -> List[Point]:
    """
    Drop grid zig-zags while staying on free cells.

    From the current point, jump to the farthest later point reachable by
    an unobstructed straight segment, and repeat until the last point.

    Args:
        points: World-space path (typically cell centers from A*)
        grid: Blocked grid used for visibility checks

    Returns:
        Reduced path sharing first and last points with the input
    """
    if len(points) <= 2:
        return list(points)

    reduced = [points[0]]
    i = 0
    last = len(points) - 1

    while i < last:
        j = last
        while j > i + 1 and not grid.has_line_of_sight(points[i], points[j]):
            j -= 1
        reduced.append(points[j])
        i = j

    logger.debug(f"Line-of-sight reduction: {len(points)} -> {len(reduced)} points")
    return reduced


def remove_duplicate_points(points: Sequence[Point], tolerance: float = 0.1) -> List[Point]:
    """
    Remove consecutive duplicate points.

    Rounded corners that meet in the middle of a short segment leave two
    identical points behind; this collapses them. The first and last
    points are always kept.

    Args:
        points: List of (x, y) coordinates
        tolerance: Distance threshold for considering points duplicate

    Returns:
        Deduplicated point list
    """
    if not points:
        return []

    cleaned = [points[0]]

    for point in points[1:]:
        if distance(cleaned[-1], point) > tolerance:
            cleaned.append(point)

    if len(points) > 1 and cleaned[-1] != points[-1]:
        if len(cleaned) > 1:
            cleaned[-1] = points[-1]
        else:
            cleaned.append(points[-1])

    return cleaned


def path_on_free_cells(points: Sequence[Point], grid: Grid) -> bool:
    """Whether every segment of the polyline stays on traversable cells."""
    return all(grid.has_line_of_sight(points[i], points[i + 1]) for i in range(len(points) - 1))


def validate_clearance(points: Sequence[Point], rects: Sequence[Rect]) -> bool:
    """
    Check that no polyline segment touches any of the given rectangles.

    Args:
        points: Polyline vertices
        rects: Blocking rectangles

    Returns:
        True if all segments are clear
    """
    for i in range(len(points) - 1):
        for rect in rects:
            if segment_intersects_rect(points[i], points[i + 1], rect):
                return False
    return True


def find_endpoint_conflicts(points: Sequence[Point], rects: Sequence[Rect]) -> List[Rect]:
    """
    Blocking rectangles crossed by the first or last segment of a path.

    Used after an endpoint is dragged: the move is always allowed, the
    conflicts are only reported back.

    Args:
        points: Path vertices after the drag
        rects: Blocking rectangles (excluding the path's own start/end objects)

    Returns:
        Rectangles hit by an end segment, in input order without repeats
    """
    if len(points) < 2:
        return []

    segments = [(points[0], points[1]), (points[-2], points[-1])]
    conflicts = []
    for rect in rects:
        if any(segment_intersects_rect(a, b, rect) for a, b in segments):
            conflicts.append(rect)
    return conflicts
