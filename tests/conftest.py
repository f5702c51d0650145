"""
Shared pytest fixtures and utilities for testing
"""

import pytest

from spaghetti_router.core.config import RouterConfig
from spaghetti_router.core.models import Entity, EntityKind, Rect, ZoneKind
from spaghetti_router.core.scene import Scene
from spaghetti_router.routing.grid import Grid, compute_query_bounds, rasterize


@pytest.fixture
def start_entity():
    """Start object on the left"""
    return Entity(id='A', rect=Rect(0, 0, 40, 40), name='Dock')


@pytest.fixture
def end_entity():
    """End object on the right, same row as start"""
    return Entity(id='B', rect=Rect(300, 0, 40, 40), name='Storage')


@pytest.fixture
def wall_rect():
    """Tall obstacle spanning the straight line between start and end"""
    return Rect(140, -50, 20, 140)


@pytest.fixture
def enclosure_rects():
    """Closed ring of obstacles around the end object"""
    return [
        Rect(260, -40, 120, 10),
        Rect(260, 70, 120, 10),
        Rect(260, -40, 10, 120),
        Rect(370, -40, 10, 120),
    ]


@pytest.fixture
def open_grid():
    """10x10 grid with no obstacles, cell size 10, origin at (0, 0)"""
    return Grid(0, 0, 10, 10, 10)


@pytest.fixture
def plain_config():
    """Default config with smoothing disabled"""
    return RouterConfig({'smoothing': {'mode': 'none'}})


@pytest.fixture
def sample_scene():
    """Scene with three objects, one obstacle and two zones"""
    objects = [
        Entity(id='A', rect=Rect(0, 0, 40, 40), name='Dock'),
        Entity(id='B', rect=Rect(300, 0, 40, 40), name='Storage'),
        Entity(id='C', rect=Rect(0, 200, 40, 40), name='Office'),
    ]
    obstacles = [
        Entity(id='W', rect=Rect(140, -50, 20, 140), kind=EntityKind.OBSTACLE),
    ]
    zones = [
        Entity(id='Z1', rect=Rect(100, 180, 100, 80), kind=EntityKind.ZONE, zone_kind=ZoneKind.TRAVERSABLE),
        Entity(id='Z2', rect=Rect(400, 300, 50, 50), kind=EntityKind.ZONE, zone_kind=ZoneKind.RESTRICTED),
    ]
    return Scene(objects=objects, obstacles=obstacles, zones=zones)


@pytest.fixture
def scene_yaml():
    """Scene file contents matching sample_scene's start/end/wall layout"""
    return """
objects:
  - {id: A, x: 0, y: 0, width: 40, height: 40, name: Dock}
  - {id: B, x: 300, y: 0, width: 40, height: 40, name: Storage}
obstacles:
  - {id: W, x: 140, y: -50, width: 20, height: 140}
zones:
  - {id: Z1, x: 100, y: 180, width: 100, height: 80, kind: traversable}
"""


def query_grid(config, start, end, blocking):
    """Rebuild the grid the router uses for a query, start and end cells cleared"""
    bounds = compute_query_bounds(start.rect, end.rect, blocking, config.padding)
    grid = rasterize(blocking, bounds, config.cell_size, config.safety_margin)
    grid.clear(grid.to_grid(*start.rect.center))
    grid.clear(grid.to_grid(*end.rect.center))
    return grid


def assert_route_ok(result, start, end):
    """Route succeeded and is pinned to both entity centers"""
    assert result.ok, result.message
    assert result.error is None
    assert len(result.points) >= 2
    assert result.points[0] == start.rect.center
    assert result.points[-1] == end.rect.center


def assert_points_close(actual, expected, tol=1e-9):
    """Point lists match element-wise within tol"""
    assert len(actual) == len(expected), f"{actual} != {expected}"
    for a, e in zip(actual, expected):
        assert abs(a[0] - e[0]) <= tol and abs(a[1] - e[1]) <= tol, f"{a} != {e}"
