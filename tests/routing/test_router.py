"""
Tests for PathRouter and the two-phase AutoRouteSession
"""

import math

import pytest
from hypothesis import given, settings, strategies as st

from spaghetti_router.core.config import RouterConfig
from spaghetti_router.core.exceptions import NoPendingRouteError, UnknownEntityError
from spaghetti_router.core.models import Entity, Rect, RouteErrorKind
from spaghetti_router.core.scene import Scene
from spaghetti_router.routing.geometry import distance
from spaghetti_router.routing.path_optimizer import validate_clearance
from spaghetti_router.routing.router import AutoRouteSession, PathRouter
from tests.conftest import assert_points_close, assert_route_ok, query_grid


class TestRouteOpenSpace:
    """No obstacles between start and end"""

    def test_straight_route(self, start_entity, end_entity):
        result = PathRouter().route(start_entity, end_entity, [])
        assert_route_ok(result, start_entity, end_entity)
        assert result.length == pytest.approx(300.0)

    def test_diagonal_route_is_direct(self, start_entity):
        end = Entity(id='B', rect=Rect(300, 200, 40, 40))
        result = PathRouter().route(start_entity, end, [])
        assert_route_ok(result, start_entity, end)
        assert result.length == pytest.approx(distance(start_entity.rect.center, end.rect.center))

    def test_overlapping_entities_fall_back_to_centers(self):
        start = Entity(id='A', rect=Rect(0, 0, 10, 10))
        end = Entity(id='B', rect=Rect(2, 2, 10, 10))
        result = PathRouter().route(start, end, [])
        assert result.ok
        assert result.points == [(5.0, 5.0), (7.0, 7.0)]

    @settings(max_examples=40, deadline=None)
    @given(
        st.integers(0, 400), st.integers(0, 400), st.integers(1, 80), st.integers(1, 80),
        st.integers(0, 400), st.integers(0, 400), st.integers(1, 80), st.integers(1, 80),
    )
    def test_unobstructed_route_is_near_euclidean(self, x1, y1, w1, h1, x2, y2, w2, h2):
        start = Entity(id='A', rect=Rect(x1, y1, w1, h1))
        end = Entity(id='B', rect=Rect(x2, y2, w2, h2))
        result = PathRouter().route(start, end, [])
        assert result.ok
        straight = distance(start.rect.center, end.rect.center)
        assert result.length <= 1.1 * straight + 1e-9


class TestRouteAroundObstacles:
    """Detours and negative outcomes"""

    def test_detours_around_wall(self, start_entity, end_entity, wall_rect):
        result = PathRouter().route(start_entity, end_entity, [wall_rect])
        assert_route_ok(result, start_entity, end_entity)
        assert validate_clearance(result.points, [wall_rect])
        assert any(y < wall_rect.y or y > wall_rect.bottom for x, y in result.points)
        assert result.length > 300

    def test_unsmoothed_route_stays_on_free_cells(self, start_entity, end_entity, wall_rect, plain_config):
        result = PathRouter(plain_config).route(start_entity, end_entity, [wall_rect])
        assert_route_ok(result, start_entity, end_entity)

        grid = query_grid(plain_config, start_entity, end_entity, [wall_rect])
        for a, b in zip(result.points, result.points[1:]):
            assert grid.has_line_of_sight(a, b)

    @pytest.mark.parametrize("mode", ['none', 'rounded', 'catmull_rom'])
    def test_every_smoothing_mode_pins_endpoints(self, start_entity, end_entity, wall_rect, mode):
        router = PathRouter(RouterConfig({'smoothing': {'mode': mode}}))
        result = router.route(start_entity, end_entity, [wall_rect])
        assert_route_ok(result, start_entity, end_entity)

    @settings(max_examples=60, deadline=None)
    @given(
        st.sampled_from(['none', 'rounded', 'catmull_rom']),
        st.integers(80, 400), st.integers(-100, 300),
        st.lists(
            st.tuples(st.integers(-50, 400), st.integers(-100, 300), st.integers(5, 80), st.integers(5, 80)),
            max_size=5,
        ),
    )
    def test_smoothed_route_stays_on_free_cells(self, mode, end_x, end_y, obstacles):
        config = RouterConfig({'smoothing': {'mode': mode}})
        start = Entity(id='A', rect=Rect(0, 0, 40, 40))
        end = Entity(id='B', rect=Rect(end_x, end_y, 40, 40))
        blocking = [Rect(*o) for o in obstacles]

        result = PathRouter(config).route(start, end, blocking)

        if result.ok:
            grid = query_grid(config, start, end, blocking)
            for a, b in zip(result.points, result.points[1:]):
                assert grid.has_line_of_sight(a, b)

    def test_rounded_route_has_no_repeated_points(self, start_entity, end_entity, wall_rect):
        result = PathRouter().route(start_entity, end_entity, [wall_rect])
        assert_route_ok(result, start_entity, end_entity)
        for a, b in zip(result.points, result.points[1:]):
            assert distance(a, b) > 0

    def test_without_line_of_sight_keeps_more_points(self, start_entity, end_entity, wall_rect):
        reduced = PathRouter(RouterConfig({'smoothing': {'mode': 'none'}})).route(
            start_entity, end_entity, [wall_rect]
        )
        raw = PathRouter(RouterConfig({
            'smoothing': {'mode': 'none'},
            'simplify': {'line_of_sight': False}
        })).route(start_entity, end_entity, [wall_rect])
        assert raw.ok and reduced.ok
        assert len(raw.points) > len(reduced.points)

    def test_proximity_weight(self, start_entity, end_entity, wall_rect):
        router = PathRouter(RouterConfig({'search': {'proximity_weight': 2.0}}))
        result = router.route(start_entity, end_entity, [wall_rect])
        assert_route_ok(result, start_entity, end_entity)
        assert validate_clearance(result.points, [wall_rect])

    def test_enclosed_end_is_no_route(self, start_entity, end_entity, enclosure_rects, caplog):
        with caplog.at_level('WARNING'):
            result = PathRouter().route(start_entity, end_entity, enclosure_rects)
        assert not result.ok
        assert result.error == RouteErrorKind.NO_ROUTE_FOUND
        assert result.points == []
        assert 'Dock' in result.message and 'Storage' in result.message
        assert 'no_route_found' in caplog.text

    def test_iteration_cap_is_no_route(self, start_entity, end_entity, wall_rect):
        router = PathRouter(RouterConfig({'search': {'max_iterations': 5}}))
        result = router.route(start_entity, end_entity, [wall_rect])
        assert result.error == RouteErrorKind.NO_ROUTE_FOUND

    def test_same_entity_is_degenerate(self, start_entity):
        result = PathRouter().route(start_entity, start_entity, [])
        assert not result.ok
        assert result.error == RouteErrorKind.DEGENERATE_QUERY

    def test_zero_area_query_is_degenerate(self):
        router = PathRouter(RouterConfig({'grid': {'padding': 0}}))
        start = Entity(id='A', rect=Rect(10, 10, 0, 0))
        end = Entity(id='B', rect=Rect(10, 10, 0, 0))
        result = router.route(start, end, [])
        assert not result.ok
        assert result.error == RouteErrorKind.DEGENERATE_QUERY

    def test_blocked_start_cell_is_cleared(self, start_entity, end_entity):
        """An obstacle overlapping the start object does not prevent routing"""
        overlap = Rect(10, 10, 20, 20)
        result = PathRouter().route(start_entity, end_entity, [overlap])
        assert_route_ok(result, start_entity, end_entity)


class TestSmoothingFallback:
    """Smoothing never leaves the free cells of the query grid"""

    def test_rounded_radius_shrinks_to_fit(self, open_grid):
        open_grid.blocked[1][4] = True
        router = PathRouter(RouterConfig({'smoothing': {'mode': 'rounded', 'corner_radius': 20}}))
        points = [(5, 5), (55, 5), (55, 55)]

        smoothed = router._smooth_on_free_cells(points, points, open_grid)

        assert_points_close(smoothed, [(5, 5), (45, 5), (55, 15), (55, 55)])

    def test_catmull_rom_falls_back_to_rounded(self, open_grid):
        """The spline dips below the first leg into a blocked cell"""
        open_grid.blocked[0][3] = True
        router = PathRouter(RouterConfig({'smoothing': {'mode': 'catmull_rom'}}))
        points = [(5, 11), (55, 11), (55, 61)]

        smoothed = router._smooth_on_free_cells(points, points, open_grid)

        assert_points_close(smoothed, [(5, 11), (43, 11), (55, 23), (55, 61)])

    def test_unsimplified_route_when_thinning_cuts_a_corner(self, open_grid):
        open_grid.blocked[2][2] = True
        router = PathRouter(RouterConfig({'smoothing': {'mode': 'none'}}))
        unsimplified = [(5, 5), (55, 5), (55, 55)]

        smoothed = router._smooth_on_free_cells([(5, 5), (55, 55)], unsimplified, open_grid)

        assert smoothed == unsimplified


class TestSceneRouting:
    """route_between and scene blocking snapshots"""

    def test_route_between_excludes_endpoints(self, sample_scene):
        result = PathRouter().route_between(sample_scene, 'A', 'B')
        assert result.ok
        assert result.start_id == 'A' and result.end_id == 'B'
        assert validate_clearance(result.points, [sample_scene.get('W').rect])

    def test_direct_route_between_objects(self, sample_scene):
        """Nothing blocks the vertical line from A down to C"""
        result = PathRouter().route_between(sample_scene, 'A', 'C')
        assert result.ok
        assert result.length == pytest.approx(200.0)

    def test_other_objects_block(self, sample_scene):
        """B blocks the straight line once it is not an endpoint"""
        objects = sample_scene.objects + [Entity(id='D', rect=Rect(600, 0, 40, 40))]
        scene = Scene(objects, sample_scene.obstacles, sample_scene.zones)
        result = PathRouter().route_between(scene, 'A', 'D')
        assert result.ok
        assert validate_clearance(result.points, [scene.get('B').rect, scene.get('W').rect])
        assert result.length > 600

    def test_unknown_entity(self, sample_scene):
        with pytest.raises(UnknownEntityError):
            PathRouter().route_between(sample_scene, 'A', 'missing')

    def test_endpoint_drag_reports_conflicts(self, sample_scene, caplog):
        dragged = [(20, 20), (150, 20), (320, 20)]
        with caplog.at_level('WARNING'):
            conflicts = PathRouter().check_endpoint_drag(sample_scene, dragged, 'A', 'B')
        assert conflicts == [sample_scene.get('W').rect]
        assert 'Dragged path endpoint' in caplog.text

    def test_endpoint_drag_without_conflicts(self, sample_scene):
        clear = [(20, 20), (20, -100), (320, -100), (320, 20)]
        assert PathRouter().check_endpoint_drag(sample_scene, clear, 'A', 'B') == []

    def test_hit_test_scales_with_zoom(self):
        router = PathRouter()
        path = [(0, 0), (100, 0)]
        assert router.hit_test((50, 4), path)
        assert not router.hit_test((50, 4), path, zoom=2.0)

    def test_simplify_freehand(self):
        points = [(0, 0), (3, 0), (6, 0), (9, 0), (12, 0)]
        assert PathRouter().simplify_freehand(points) == [(0, 0), (9, 0), (12, 0)]


class TestAutoRouteSession:
    """Two-phase begin/complete API"""

    def test_complete_without_begin(self, sample_scene):
        session = AutoRouteSession(PathRouter(), sample_scene)
        with pytest.raises(NoPendingRouteError):
            session.complete_route('B')

    def test_begin_with_unknown_id(self, sample_scene):
        session = AutoRouteSession(PathRouter(), sample_scene)
        with pytest.raises(UnknownEntityError):
            session.begin_route('nope')
        assert not session.has_pending

    def test_successful_route_is_recorded(self, sample_scene):
        session = AutoRouteSession(PathRouter(), sample_scene)
        session.begin_route('A')
        assert session.has_pending

        result = session.complete_route('B')

        assert result.ok
        assert not session.has_pending
        assert len(sample_scene.paths) == 1
        record = sample_scene.paths[0]
        assert record.description == 'Auto Path: Dock -> Storage'
        assert record.auto_generated
        assert record.length == pytest.approx(result.length)

    def test_complete_on_start_entity(self, sample_scene):
        session = AutoRouteSession(PathRouter(), sample_scene)
        session.begin_route('A')
        result = session.complete_route('A')
        assert result.error == RouteErrorKind.DEGENERATE_QUERY
        assert not session.has_pending
        assert sample_scene.paths == []

    def test_failed_route_clears_pending(self, sample_scene):
        router = PathRouter(RouterConfig({'search': {'max_iterations': 1}}))
        session = AutoRouteSession(router, sample_scene)
        session.begin_route('A')
        result = session.complete_route('B')
        assert not result.ok
        assert not session.has_pending
        assert sample_scene.paths == []

    def test_route_by_clicks(self, sample_scene):
        session = AutoRouteSession(PathRouter(), sample_scene)
        assert session.begin_route_at((10, 30))
        assert session.pending_start_id == 'A'

        result = session.complete_route_at((330, 5))

        assert result.ok
        assert result.end_id == 'B'
        assert len(sample_scene.paths) == 1

    def test_click_on_empty_space(self, sample_scene):
        session = AutoRouteSession(PathRouter(), sample_scene)
        assert not session.begin_route_at((150, 0))  # obstacle, not an object
        assert not session.has_pending

        session.begin_route('A')
        assert session.complete_route_at((500, 500)) is None
        assert session.pending_start_id == 'A'

    def test_click_complete_without_begin(self, sample_scene):
        session = AutoRouteSession(PathRouter(), sample_scene)
        with pytest.raises(NoPendingRouteError):
            session.complete_route_at((320, 20))

    def test_cancel(self, sample_scene):
        session = AutoRouteSession(PathRouter(), sample_scene)
        session.begin_route('A')
        session.cancel()
        with pytest.raises(NoPendingRouteError):
            session.complete_route('B')

    def test_results_are_independent(self, sample_scene):
        """Two identical queries give identical routes"""
        router = PathRouter()
        first = router.route_between(sample_scene, 'A', 'B')
        second = router.route_between(sample_scene, 'A', 'B')
        assert first.points == second.points
        assert math.isclose(first.length, second.length)
