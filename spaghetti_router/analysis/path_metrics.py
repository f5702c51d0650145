"""
Path analytics: lengths, frequency-weighted cost and object hotspots
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import uuid

from pydantic import BaseModel, Field, model_validator

from ..core.models import Entity, Point, RouteResult
from ..routing.geometry import distance, object_at

logger = logging.getLogger(__name__)

DEFAULT_HOTSPOT_LIMIT = 5


def path_length(points: Sequence[Point]) -> float:
    """Cumulative Euclidean length of a polyline."""
    return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))


class PathRecord(BaseModel):
    """One accepted path in the editor's path collection"""
    id: str = Field(..., min_length=1)
    points: List[Point] = Field(..., min_length=2, description="Polyline vertices")
    frequency: int = Field(1, ge=1, description="How often this path is walked")
    description: str = ''
    auto_generated: bool = False
    length: float = 0.0

    @model_validator(mode='after')
    def compute_length(self):
        """Length is always derived from the points"""
        self.length = path_length(self.points)
        return self

    @property
    def weighted_cost(self) -> float:
        return self.length * self.frequency


class PathSummary(BaseModel):
    """Aggregate metrics over a path collection"""
    total_paths: int = 0
    total_distance: float = 0.0
    weighted_cost: float = 0.0
    average_length: float = 0.0


def summarize_paths(records: Iterable[PathRecord]) -> PathSummary:
    """
    Aggregate length metrics over all paths.

    Args:
        records: Path records

    Returns:
        PathSummary; average_length is 0 for an empty collection
    """
    records = list(records)
    total_distance = sum(r.length for r in records)
    weighted_cost = sum(r.weighted_cost for r in records)
    average = total_distance / len(records) if records else 0.0

    return PathSummary(
        total_paths=len(records),
        total_distance=total_distance,
        weighted_cost=weighted_cost,
        average_length=average
    )


def count_object_visits(records: Iterable[PathRecord], objects: Sequence[Entity]) -> Dict[str, int]:
    """
    Count how often each object is a path endpoint.

    The top-most object under a path's first point and the one under its
    last point each gain the path's frequency.

    Args:
        records: Path records
        objects: Objects in drawing order

    Returns:
        Mapping of object id to visit count (every object present, possibly 0)
    """
    visits = {obj.id: 0 for obj in objects}

    for record in records:
        for point in (record.points[0], record.points[-1]):
            hit = object_at(point, objects)
            if hit is not None:
                visits[hit.id] += record.frequency

    return visits


def top_hotspots(visits: Dict[str, int], limit: int = DEFAULT_HOTSPOT_LIMIT) -> List[Tuple[str, int]]:
    """Objects with at least one visit, busiest first."""
    ranked = sorted(
        ((object_id, count) for object_id, count in visits.items() if count > 0),
        key=lambda item: item[1],
        reverse=True
    )
    return ranked[:limit]


def record_from_route(
    result: RouteResult,
    start: Entity,
    end: Entity,
    record_id: Optional[str] = None
) -> PathRecord:
    """
    Build an auto-generated path record from a successful route.

    Raises:
        ValueError: If the route failed
    """
    if not result.ok:
        raise ValueError(f"Cannot record a failed route: {result.message}")

    return PathRecord(
        id=record_id or f"path-{uuid.uuid4().hex[:8]}",
        points=result.points,
        description=f"Auto Path: {start.label} -> {end.label}",
        auto_generated=True
    )
