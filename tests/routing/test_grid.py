"""
Tests for the grid rasterizer
"""

import pytest

from spaghetti_router.core.exceptions import DegenerateQueryError, InvalidConfigurationError
from spaghetti_router.core.models import Rect
from spaghetti_router.routing.grid import Grid, GridCell, compute_query_bounds, rasterize


class TestGridBasics:
    """Coordinate conversion and cell queries"""

    def test_dimensions(self, open_grid):
        assert open_grid.rows == 10
        assert open_grid.cols == 10
        assert open_grid.blocked_count() == 0

    def test_to_grid(self, open_grid):
        assert open_grid.to_grid(15, 35) == GridCell(3, 1)

    def test_to_grid_clamps_outside_points(self, open_grid):
        assert open_grid.to_grid(-50, -50) == GridCell(0, 0)
        assert open_grid.to_grid(500, 500) == GridCell(9, 9)

    def test_cell_of_does_not_clamp(self, open_grid):
        assert open_grid.cell_of(-5, 105) == GridCell(10, -1)

    def test_from_grid_returns_center(self, open_grid):
        assert open_grid.from_grid(GridCell(3, 1)) == (15.0, 35.0)

    def test_from_grid_respects_origin(self):
        grid = Grid(-40, -90, 5, 5, 20)
        assert grid.from_grid(GridCell(0, 0)) == (-30.0, -80.0)

    def test_is_valid(self, open_grid):
        assert open_grid.is_valid(GridCell(0, 0))
        assert open_grid.is_valid(GridCell(9, 9))
        assert not open_grid.is_valid(GridCell(10, 0))
        assert not open_grid.is_valid(GridCell(0, -1))

    def test_clear(self, open_grid):
        open_grid.mark_obstacle(Rect(0, 0, 5, 5))
        assert open_grid.is_blocked(GridCell(0, 0))
        open_grid.clear(GridCell(0, 0))
        assert not open_grid.is_blocked(GridCell(0, 0))

    def test_non_positive_cell_size(self):
        with pytest.raises(InvalidConfigurationError):
            Grid(0, 0, 5, 5, 0)

    def test_empty_grid(self):
        with pytest.raises(DegenerateQueryError):
            Grid(0, 0, 0, 5, 10)


class TestMarkObstacle:
    """Blocking rectangles with margin"""

    def test_marks_covered_cells(self, open_grid):
        marked = open_grid.mark_obstacle(Rect(22, 22, 15, 5))
        assert marked == 2
        assert open_grid.is_blocked(GridCell(2, 2))
        assert open_grid.is_blocked(GridCell(2, 3))
        assert not open_grid.is_blocked(GridCell(3, 2))

    def test_margin_expands_obstacle(self, open_grid):
        open_grid.mark_obstacle(Rect(45, 45, 0, 0), margin=6)
        # 39..51 covers columns/rows 3..5
        for row in range(3, 6):
            for col in range(3, 6):
                assert open_grid.is_blocked(GridCell(row, col))
        assert not open_grid.is_blocked(GridCell(2, 2))
        assert not open_grid.is_blocked(GridCell(6, 6))

    def test_obstacle_partially_outside(self, open_grid):
        open_grid.mark_obstacle(Rect(-50, -50, 60, 60))
        assert open_grid.is_blocked(GridCell(0, 0))
        assert open_grid.is_blocked(GridCell(1, 1))
        assert not open_grid.is_blocked(GridCell(2, 2))

    def test_obstacle_fully_outside(self, open_grid):
        assert open_grid.mark_obstacle(Rect(500, 500, 10, 10)) == 0
        assert open_grid.blocked_count() == 0


class TestLineOfSight:
    """Half-cell sampling visibility"""

    def test_clear_line(self, open_grid):
        assert open_grid.has_line_of_sight((5, 5), (95, 95))

    def test_blocked_line(self, open_grid):
        open_grid.mark_obstacle(Rect(40, 0, 10, 100))
        assert not open_grid.has_line_of_sight((5, 50), (95, 50))

    def test_same_point(self, open_grid):
        assert open_grid.has_line_of_sight((5, 5), (5, 5))

    def test_outside_grid_is_not_visible(self, open_grid):
        assert not open_grid.has_line_of_sight((5, 5), (150, 5))


class TestRasterize:
    """rasterize() and query bounds"""

    def test_query_bounds_include_padding(self):
        bounds = compute_query_bounds(Rect(0, 0, 40, 40), Rect(300, 0, 40, 40), [Rect(140, -50, 20, 140)], 40)
        assert bounds == Rect(-40, -90, 420, 220)

    def test_dimensions_from_bounds(self):
        grid = rasterize([], Rect(-40, -90, 420, 220), 20)
        assert (grid.rows, grid.cols) == (11, 21)
        assert (grid.origin_x, grid.origin_y) == (-40, -90)

    def test_partial_cells_round_up(self):
        grid = rasterize([], Rect(0, 0, 45, 10), 20)
        assert (grid.rows, grid.cols) == (1, 3)

    def test_every_point_in_expanded_rect_is_blocked(self):
        """Sampled points inside a rect grown by the margin land on blocked cells"""
        wall = Rect(140, -50, 20, 140)
        bounds = Rect(-40, -90, 420, 220)
        grid = rasterize([wall], bounds, 20, margin=6)
        grown = wall.expanded(6)

        y = grown.y
        while y <= grown.bottom:
            x = grown.x
            while x <= grown.right:
                assert grid.is_blocked(grid.to_grid(x, y)), (x, y)
                x += 2
            y += 2

    def test_cells_outside_rects_are_free(self):
        wall = Rect(140, -50, 20, 140)
        grid = rasterize([wall], Rect(-40, -90, 420, 220), 20, margin=6)
        assert not grid.is_blocked(grid.to_grid(20, 20))
        assert not grid.is_blocked(grid.to_grid(320, 20))
        assert not grid.is_blocked(grid.to_grid(150, -80))
        assert not grid.is_blocked(grid.to_grid(150, 120))

    @pytest.mark.parametrize("cell_size", [0, -20])
    def test_invalid_cell_size(self, cell_size):
        with pytest.raises(InvalidConfigurationError):
            rasterize([], Rect(0, 0, 100, 100), cell_size)

    def test_invalid_cell_size_is_value_error(self):
        with pytest.raises(ValueError):
            rasterize([], Rect(0, 0, 100, 100), 0)

    def test_zero_area_bounds(self):
        with pytest.raises(DegenerateQueryError):
            rasterize([], Rect(10, 10, 0, 50), 20)
