"""
Geometric collision primitives.

Pure functions shared by the router and by interactive hit-testing
(clicking near a path, validating a dragged endpoint).
"""

from typing import Iterable, List, Optional, Sequence
import math

from ..core.models import Entity, Point, Rect


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def point_in_rect(p: Point, r: Rect) -> bool:
    """Inclusive bounds test of a point against a rectangle."""
    return r.x <= p[0] <= r.x + r.width and r.y <= p[1] <= r.y + r.height


def point_segment_distance(p: Point, a: Point, b: Point) -> float:
    """
    Distance from p to the closed segment a-b.

    Args:
        p: Query point
        a: Segment start
        b: Segment end

    Returns:
        Perpendicular distance when the projection falls inside the segment,
        distance to the nearest endpoint otherwise (point distance if a == b)
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length_sq = dx * dx + dy * dy

    if length_sq == 0:
        return distance(p, a)

    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))

    projection = (a[0] + t * dx, a[1] + t * dy)
    return distance(p, projection)


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """
    Parametric intersection test between segments p1-p2 and p3-p4.

    Parallel and collinear segments (zero denominator) never intersect.

    Returns:
        True when both intersection parameters lie in [0, 1]
    """
    denominator = (p4[1] - p3[1]) * (p2[0] - p1[0]) - (p4[0] - p3[0]) * (p2[1] - p1[1])
    if denominator == 0:
        return False

    ua = ((p4[0] - p3[0]) * (p1[1] - p3[1]) - (p4[1] - p3[1]) * (p1[0] - p3[0])) / denominator
    ub = ((p2[0] - p1[0]) * (p1[1] - p3[1]) - (p2[1] - p1[1]) * (p1[0] - p3[0])) / denominator

    return 0 <= ua <= 1 and 0 <= ub <= 1


def rect_edges(r: Rect) -> List[tuple]:
    """Four edges of a rectangle as (start, end) point pairs: top, right, bottom, left."""
    top_left = (r.x, r.y)
    top_right = (r.x + r.width, r.y)
    bottom_right = (r.x + r.width, r.y + r.height)
    bottom_left = (r.x, r.y + r.height)
    return [
        (top_left, top_right),
        (top_right, bottom_right),
        (bottom_right, bottom_left),
        (bottom_left, top_left),
    ]


def segment_intersects_rect(a: Point, b: Point, rect: Rect) -> bool:
    """
    Check whether segment a-b touches a rectangle.

    True when either endpoint lies inside the rectangle or the segment
    crosses any of its four edges.
    """
    if point_in_rect(a, rect) or point_in_rect(b, rect):
        return True

    return any(segments_intersect(a, b, e1, e2) for e1, e2 in rect_edges(rect))


def point_near_polyline(p: Point, points: Sequence[Point], threshold: float) -> bool:
    """
    Hit-test a point against a polyline.

    Args:
        p: Query point (world coordinates)
        points: Polyline vertices
        threshold: Maximum distance counted as a hit, already divided by zoom

    Returns:
        True if any segment is within threshold of p
    """
    if len(points) == 1:
        return distance(p, points[0]) <= threshold

    for i in range(len(points) - 1):
        if point_segment_distance(p, points[i], points[i + 1]) <= threshold:
            return True
    return False


def object_at(p: Point, entities: Iterable[Entity]) -> Optional[Entity]:
    """Return the top-most entity (last in drawing order) containing p."""
    hit = None
    for entity in entities:
        if point_in_rect(p, entity.rect):
            hit = entity
    return hit


def bounding_box(rects: Iterable[Rect]) -> Optional[Rect]:
    """Smallest rectangle enclosing all rects, or None when empty."""
    rects = list(rects)
    if not rects:
        return None

    min_x = min(r.x for r in rects)
    min_y = min(r.y for r in rects)
    max_x = max(r.x + r.width for r in rects)
    max_y = max(r.y + r.height for r in rects)
    return Rect(min_x, min_y, max_x - min_x, max_y - min_y)


def normalize_rect(x: float, y: float, width: float, height: float) -> Rect:
    """Rectangle from a drag gesture, flipping negative width/height."""
    return Rect.normalized(x, y, width, height)
