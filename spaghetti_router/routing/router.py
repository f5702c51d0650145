"""
Automatic path routing between two placed entities.

Pipeline per query:
1. Rasterize the blocking rects over the padded query bounds
2. Optionally build the proximity field
3. A* from the start center cell to the end center cell
4. Convert to world points, pin the endpoints to the entity centers
5. Line-of-sight reduction, simplification, smoothing that stays on free cells
6. Re-pin the endpoints

Every query allocates its own grid and search state; nothing is shared
between calls.
"""

from typing import List, Optional, Sequence
import logging

from ..analysis.path_metrics import path_length, record_from_route
from ..core.config import RouterConfig
from ..core.exceptions import DegenerateQueryError, NoPendingRouteError
from ..core.models import Entity, Point, Rect, RouteErrorKind, RouteResult, SmoothingMode
from ..core.scene import Scene
from .astar import find_path
from .geometry import point_near_polyline
from .grid import Grid, compute_query_bounds, rasterize
from .path_optimizer import (
    cells_to_world,
    find_endpoint_conflicts,
    line_of_sight_reduce,
    path_on_free_cells,
    remove_duplicate_points,
    simplify_path,
)
from .proximity import build_proximity_field
from .smoothing import round_corners, smooth_path

logger = logging.getLogger(__name__)

# Smallest corner radius tried before giving up on rounding
MIN_CORNER_RADIUS = 1.0


class PathRouter:
    """Computes obstacle-avoiding routes using one RouterConfig"""

    def __init__(self, config: Optional[RouterConfig] = None):
        self.config = config or RouterConfig()

    def route(self, start: Entity, end: Entity, blocking: Sequence[Rect]) -> RouteResult:
        """
        Route from the center of start to the center of end.

        Args:
            start: Start entity (must not be part of blocking)
            end: End entity (must not be part of blocking)
            blocking: Read-only snapshot of blocking rects for this query

        Returns:
            RouteResult; failures are reported with ok=False, never raised
        """
        cfg = self.config
        start_center = start.rect.center
        end_center = end.rect.center

        if start.id == end.id:
            return self._failure(
                start, end, RouteErrorKind.DEGENERATE_QUERY,
                f"Start and end are the same entity ({start.label})"
            )

        bounds = compute_query_bounds(start.rect, end.rect, blocking, cfg.padding)
        try:
            grid = rasterize(blocking, bounds, cfg.cell_size, cfg.safety_margin)
        except DegenerateQueryError as e:
            return self._failure(start, end, RouteErrorKind.DEGENERATE_QUERY, str(e))

        start_cell = grid.to_grid(*start_center)
        end_cell = grid.to_grid(*end_center)

        field = None
        if cfg.proximity_weight > 0:
            field = build_proximity_field(grid, cfg.proximity_radius_cells)

        cells = find_path(grid, field, start_cell, end_cell, cfg.proximity_weight, cfg.max_iterations)
        if cells is None:
            return self._failure(
                start, end, RouteErrorKind.NO_ROUTE_FOUND,
                f"No path found from {start.label} to {end.label}"
            )

        points = cells_to_world(cells, grid)
        if len(points) < 2:
            points = [start_center, end_center]
        else:
            points[0] = start_center
            points[-1] = end_center

        if cfg.line_of_sight:
            points = line_of_sight_reduce(points, grid)
        simplified = simplify_path(points, cfg.route_tolerance)
        points = self._smooth_on_free_cells(simplified, points, grid)

        if len(points) < 2:
            points = [start_center, end_center]
        else:
            points[0] = start_center
            points[-1] = end_center

        length = path_length(points)
        logger.info(f"Routed {start.label} -> {end.label}: {len(points)} points, length {length:.1f}")

        return RouteResult(
            ok=True,
            points=points,
            length=length,
            message=f"Auto Path: {start.label} -> {end.label}",
            start_id=start.id,
            end_id=end.id
        )

    def route_between(self, scene: Scene, start_id: str, end_id: str) -> RouteResult:
        """
        Route between two scene entities by id.

        The start and end entities are excluded from the blocking set;
        every other object, obstacle and restricted zone blocks.

        Raises:
            UnknownEntityError: If either id is not in the scene
        """
        start = scene.get(start_id)
        end = scene.get(end_id)
        blocking = scene.blocking_rects(exclude_ids=(start_id, end_id))
        return self.route(start, end, blocking)

    def simplify_freehand(self, points: Sequence[Point]) -> List[Point]:
        """Thin a hand-drawn path with the freehand tolerance."""
        return simplify_path(points, self.config.freehand_tolerance)

    def hit_test(self, point: Point, points: Sequence[Point], zoom: float = 1.0) -> bool:
        """Whether a click at point (world coordinates) lands on the path."""
        return point_near_polyline(point, points, self.config.path_threshold / zoom)

    def check_endpoint_drag(
        self,
        scene: Scene,
        points: Sequence[Point],
        start_id: Optional[str] = None,
        end_id: Optional[str] = None
    ) -> List[Rect]:
        """
        Report blocking rects crossed after a path endpoint was dragged.

        The drag is never refused; conflicts are logged and returned.
        """
        exclude = [i for i in (start_id, end_id) if i is not None]
        conflicts = find_endpoint_conflicts(points, scene.blocking_rects(exclude_ids=exclude))
        if conflicts:
            logger.warning(f"Dragged path endpoint passes through {len(conflicts)} blocking entity(ies)")
        return conflicts

    def _smooth_on_free_cells(self, points: List[Point], unsimplified: List[Point], grid: Grid) -> List[Point]:
        """
        Smooth a route without letting it swing into blocked cells.

        A Catmull-Rom spline that leaves the free cells falls back to
        rounded corners. Rounded corners are retried with a halved radius
        until they fit. If nothing fits, the simplified polyline is
        returned, or the unsimplified one when thinning cut a corner.
        """
        cfg = self.config
        mode = cfg.smoothing_mode

        if mode == SmoothingMode.CATMULL_ROM:
            smoothed = smooth_path(
                points,
                mode,
                substeps=cfg.spline_substeps,
                min_sample_distance=cfg.min_sample_distance
            )
            if path_on_free_cells(smoothed, grid):
                return smoothed
            logger.debug("Catmull-Rom spline crosses blocked cells, falling back to rounded corners")
            mode = SmoothingMode.ROUNDED

        if mode == SmoothingMode.ROUNDED:
            radius = cfg.corner_radius
            while radius >= MIN_CORNER_RADIUS:
                smoothed = remove_duplicate_points(round_corners(points, radius))
                if path_on_free_cells(smoothed, grid):
                    return smoothed
                radius /= 2
            logger.debug("Rounded corners cross blocked cells at every radius, keeping sharp corners")

        if path_on_free_cells(points, grid):
            return list(points)
        return list(unsimplified)

    @staticmethod
    def _failure(start: Entity, end: Entity, kind: RouteErrorKind, message: str) -> RouteResult:
        logger.warning(f"Route {start.label} -> {end.label} failed ({kind.value}): {message}")
        return RouteResult(ok=False, error=kind, message=message, start_id=start.id, end_id=end.id)


class AutoRouteSession:
    """
    Two-phase routing: pick a start entity, then an end entity.

    Debouncing between the two picks is left to the caller's event loop.
    A successful route is appended to the scene's path collection.
    """

    def __init__(self, router: PathRouter, scene: Scene):
        self.router = router
        self.scene = scene
        self.pending_start_id: Optional[str] = None

    @property
    def has_pending(self) -> bool:
        return self.pending_start_id is not None

    def begin_route(self, start_id: str) -> None:
        """
        Remember the start entity.

        Raises:
            UnknownEntityError: If start_id is not in the scene
        """
        start = self.scene.get(start_id)
        self.pending_start_id = start.id
        logger.debug(f"Auto route started at {start.label}")

    def begin_route_at(self, point: Point) -> bool:
        """
        Start a route at the top-most object under a click.

        Returns:
            False when no object lies under point
        """
        obj = self.scene.object_at(point)
        if obj is None:
            return False
        self.begin_route(obj.id)
        return True

    def complete_route_at(self, point: Point) -> Optional[RouteResult]:
        """
        Finish the pending route at the top-most object under a click.

        A click on empty space returns None and keeps the pending start.

        Raises:
            NoPendingRouteError: If begin_route() was not called first
        """
        if self.pending_start_id is None:
            raise NoPendingRouteError("complete_route_at() called without a pending start")

        obj = self.scene.object_at(point)
        if obj is None:
            return None
        return self.complete_route(obj.id)

    def cancel(self) -> None:
        self.pending_start_id = None

    def complete_route(self, end_id: str) -> RouteResult:
        """
        Route from the pending start to end_id.

        The pending start is cleared afterwards, whether or not a route
        was found.

        Raises:
            NoPendingRouteError: If begin_route() was not called first
            UnknownEntityError: If end_id is not in the scene
        """
        if self.pending_start_id is None:
            raise NoPendingRouteError("complete_route() called without a pending start")

        end = self.scene.get(end_id)
        start_id = self.pending_start_id
        try:
            result = self.router.route_between(self.scene, start_id, end.id)
        finally:
            self.pending_start_id = None

        if result.ok:
            record = record_from_route(result, self.scene.get(start_id), end)
            self.scene.add_path(record)

        return result
