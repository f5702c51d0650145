"""
Value types shared by the routing engine: rectangles, entities and route results
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


Point = Tuple[float, float]


class EntityKind(str, Enum):
    """What a placed rectangle represents in the editor"""
    OBJECT = 'object'
    OBSTACLE = 'obstacle'
    ZONE = 'zone'


class ZoneKind(str, Enum):
    """Zone tag; only restricted zones block routes"""
    TRAVERSABLE = 'traversable'
    RESTRICTED = 'restricted'


class SmoothingMode(str, Enum):
    """Post-processing strategy applied to a simplified route"""
    NONE = 'none'
    ROUNDED = 'rounded'
    CATMULL_ROM = 'catmull_rom'


class RouteErrorKind(str, Enum):
    """Negative routing outcomes (normal results, not exceptions)"""
    NO_ROUTE_FOUND = 'no_route_found'
    DEGENERATE_QUERY = 'degenerate_query'


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in world coordinates."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def normalized(cls, x: float, y: float, width: float, height: float) -> 'Rect':
        """
        Build a rect with non-negative width/height.

        A rectangle drawn by dragging up or left arrives with negative
        dimensions; the origin is moved so the same area is covered.
        """
        if width < 0:
            x += width
            width = -width
        if height < 0:
            y += height
            height = -height
        return cls(x, y, width, height)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def expanded(self, margin: float) -> 'Rect':
        """Return a copy grown by margin on every side."""
        return Rect(
            self.x - margin,
            self.y - margin,
            self.width + 2 * margin,
            self.height + 2 * margin
        )


@dataclass(frozen=True)
class Entity:
    """A rectangle owned by the editor, identified by a stable id."""
    id: str
    rect: Rect
    kind: EntityKind = EntityKind.OBJECT
    zone_kind: Optional[ZoneKind] = None
    name: str = ''

    @property
    def blocks(self) -> bool:
        """Whether this entity participates in blocking (start/end exclusion aside)"""
        if self.kind == EntityKind.ZONE:
            return self.zone_kind == ZoneKind.RESTRICTED
        return True

    @property
    def label(self) -> str:
        return self.name or self.id


class RouteResult(BaseModel):
    """Outcome of one routing query

    Attributes:
        ok: True when a path was found
        points: Ordered world points, first/last pinned to the entity centers
        length: Cumulative polyline length of points
        error: Kind of failure when ok is False
        message: Human-readable outcome for the UI layer
    """
    ok: bool
    points: List[Point] = Field(default_factory=list)
    length: float = 0.0
    error: Optional[RouteErrorKind] = None
    message: str = ''
    start_id: Optional[str] = None
    end_id: Optional[str] = None
