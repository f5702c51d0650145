"""
Grid-based routing for diagram paths.

Rasterizes blocking rectangles, runs A* and post-processes the result
into a smooth polyline. PathRouter in router.py ties the stages together.
"""

from .geometry import (
    point_in_rect,
    point_segment_distance,
    segments_intersect,
    segment_intersects_rect,
    point_near_polyline,
    object_at,
    normalize_rect,
)
from .grid import Grid, GridCell, rasterize, compute_query_bounds
from .proximity import build_proximity_field
from .astar import find_path
from .path_optimizer import (
    simplify_path,
    line_of_sight_reduce,
    remove_duplicate_points,
    path_on_free_cells,
    validate_clearance,
    find_endpoint_conflicts,
)
from .smoothing import round_corners, catmull_rom, smooth_path

__all__ = [
    'point_in_rect',
    'point_segment_distance',
    'segments_intersect',
    'segment_intersects_rect',
    'point_near_polyline',
    'object_at',
    'normalize_rect',
    'Grid',
    'GridCell',
    'rasterize',
    'compute_query_bounds',
    'build_proximity_field',
    'find_path',
    'simplify_path',
    'line_of_sight_reduce',
    'remove_duplicate_points',
    'path_on_free_cells',
    'validate_clearance',
    'find_endpoint_conflicts',
    'round_corners',
    'catmull_rom',
    'smooth_path',
]
