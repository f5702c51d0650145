"""
Path smoothing strategies.

Both strategies take a sparse polyline and return a denser, render-ready
one. Callers re-pin the first and last points to the exact entity centers.
"""

from typing import List, Sequence
import logging

from ..core.models import Point, SmoothingMode
from .geometry import distance

logger = logging.getLogger(__name__)


def round_corners(points: Sequence[Point], radius: float = 12.0) -> List[Point]:
    """
    Flatten each interior corner into two shrink points.

    For every interior vertex the path is cut back along both adjacent
    segments by min(radius, half of either segment length), and the two
    cut points replace the sharp vertex.

    Args:
        points: Polyline vertices
        radius: Corner radius in world units

    Returns:
        Smoothed polyline with the same first and last points
    """
    if len(points) < 3:
        return list(points)

    smoothed = [points[0]]

    for i in range(1, len(points) - 1):
        prev, curr, next_pt = points[i - 1], points[i], points[i + 1]

        len_in = distance(prev, curr)
        len_out = distance(curr, next_pt)

        # Zero-length neighbor segment: keep the vertex as is
        if len_in == 0 or len_out == 0:
            smoothed.append(curr)
            continue

        r = min(radius, len_in / 2, len_out / 2)

        ux_in = (prev[0] - curr[0]) / len_in
        uy_in = (prev[1] - curr[1]) / len_in
        ux_out = (next_pt[0] - curr[0]) / len_out
        uy_out = (next_pt[1] - curr[1]) / len_out

        smoothed.append((curr[0] + ux_in * r, curr[1] + uy_in * r))
        smoothed.append((curr[0] + ux_out * r, curr[1] + uy_out * r))

    smoothed.append(points[-1])
    return smoothed


def _catmull_rom_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Uniform Catmull-Rom blend between p1 and p2 at parameter t."""
    t2 = t * t
    t3 = t2 * t

    def blend(a: float, b: float, c: float, d: float) -> float:
        return 0.5 * (
            2 * b
            + (-a + c) * t
            + (2 * a - 5 * b + 4 * c - d) * t2
            + (-a + 3 * b - 3 * c + d) * t3
        )

    return (
        blend(p0[0], p1[0], p2[0], p3[0]),
        blend(p0[1], p1[1], p2[1], p3[1]),
    )


def catmull_rom(
    points: Sequence[Point],
    substeps: int = 8,
    min_sample_distance: float = 0.5
) -> List[Point]:
    """
    Interpolate a polyline with a uniform Catmull-Rom spline.

    The control polygon is padded by repeating the first and last points,
    so the curve interpolates every span, the first and last included, and
    passes through every input point. Samples closer than
    min_sample_distance to the previously kept sample are dropped.

    Args:
        points: Control points (at least 3)
        substeps: Samples per span
        min_sample_distance: Duplicate suppression distance

    Returns:
        Interpolated polyline ending at the last input point, or the input
        unchanged when fewer than 3 points are given
    """
    if len(points) < 3:
        logger.debug(f"Catmull-Rom needs at least 3 points, got {len(points)}")
        return list(points)

    controls = [points[0], *points, points[-1]]
    samples = [points[0]]

    for i in range(len(controls) - 3):
        p0, p1, p2, p3 = controls[i], controls[i + 1], controls[i + 2], controls[i + 3]
        for step in range(1, substeps + 1):
            sample = _catmull_rom_point(p0, p1, p2, p3, step / substeps)
            if distance(sample, samples[-1]) > min_sample_distance:
                samples.append(sample)

    if samples[-1] != points[-1]:
        if len(samples) > 1 and distance(samples[-1], points[-1]) <= min_sample_distance:
            samples[-1] = points[-1]
        else:
            samples.append(points[-1])

    return samples


def smooth_path(
    points: Sequence[Point],
    mode: SmoothingMode,
    corner_radius: float = 12.0,
    substeps: int = 8,
    min_sample_distance: float = 0.5
) -> List[Point]:
    """
    Apply the configured smoothing strategy.

    Catmull-Rom on fewer than 3 points returns the input unchanged.
    """
    if mode == SmoothingMode.ROUNDED:
        return round_corners(points, corner_radius)
    if mode == SmoothingMode.CATMULL_ROM:
        return catmull_rom(points, substeps, min_sample_distance)
    return list(points)
