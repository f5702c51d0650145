"""
Scene snapshot: the placed objects, obstacles and zones a route is computed against
"""

from typing import Dict, Iterable, List, Optional, Union
from pathlib import Path
import logging

import yaml
from pydantic import BaseModel, Field, model_validator

from .exceptions import UnknownEntityError
from .models import Entity, EntityKind, Point, Rect, ZoneKind
from ..routing.geometry import object_at

logger = logging.getLogger(__name__)


# ============================================================================
# Pydantic Models for Scene Files
# ============================================================================

class EntitySpec(BaseModel):
    """One rectangle as written in a scene file"""
    id: str = Field(..., min_length=1, description="Stable entity id")
    x: float
    y: float
    width: float
    height: float
    name: str = Field('', description="Display name")


class ZoneSpec(EntitySpec):
    """Zone rectangle; only restricted zones block routes"""
    kind: ZoneKind = Field(ZoneKind.TRAVERSABLE, description="traversable or restricted")


class SceneModel(BaseModel):
    """Pydantic model for scene file validation"""
    objects: List[EntitySpec] = Field(default_factory=list)
    obstacles: List[EntitySpec] = Field(default_factory=list)
    zones: List[ZoneSpec] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_unique_ids(self):
        """Entity ids must be unique across all collections"""
        seen = set()
        for spec in [*self.objects, *self.obstacles, *self.zones]:
            if spec.id in seen:
                raise ValueError(f"Duplicate entity id '{spec.id}'")
            seen.add(spec.id)
        return self


def _to_entity(spec: EntitySpec, kind: EntityKind) -> Entity:
    rect = Rect.normalized(spec.x, spec.y, spec.width, spec.height)
    zone_kind = spec.kind if isinstance(spec, ZoneSpec) else None
    return Entity(id=spec.id, rect=rect, kind=kind, zone_kind=zone_kind, name=spec.name)


# ============================================================================
# Scene
# ============================================================================

class Scene:
    """
    Read-only view of the editor's collections for routing.

    Objects are drawn in list order, so later objects sit on top.
    Accepted paths are appended after each successful route.
    """

    def __init__(
        self,
        objects: Optional[Iterable[Entity]] = None,
        obstacles: Optional[Iterable[Entity]] = None,
        zones: Optional[Iterable[Entity]] = None
    ):
        self.objects: List[Entity] = list(objects or [])
        self.obstacles: List[Entity] = list(obstacles or [])
        self.zones: List[Entity] = list(zones or [])
        self.paths: List = []

        self._index: Dict[str, Entity] = {e.id: e for e in self.entities}

    @property
    def entities(self) -> List[Entity]:
        return [*self.objects, *self.obstacles, *self.zones]

    def get(self, entity_id: str) -> Entity:
        """
        Look up an entity by id.

        Raises:
            UnknownEntityError: If no entity has this id
        """
        try:
            return self._index[entity_id]
        except KeyError:
            raise UnknownEntityError(f"Unknown entity id: {entity_id}") from None

    def blocking_rects(self, exclude_ids: Iterable[str] = ()) -> List[Rect]:
        """
        Blocking snapshot for one query.

        Args:
            exclude_ids: Ids of the route's own start and end entities

        Returns:
            Rects of all obstacles, restricted zones and remaining objects
        """
        excluded = set(exclude_ids)
        return [e.rect for e in self.entities if e.blocks and e.id not in excluded]

    def object_at(self, point: Point) -> Optional[Entity]:
        """Top-most object containing point."""
        return object_at(point, self.objects)

    def add_path(self, record) -> None:
        """Append an accepted path record."""
        self.paths.append(record)
        logger.debug(f"Scene now holds {len(self.paths)} path(s)")

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'Scene':
        """Build a scene from a parsed scene file"""
        try:
            model = SceneModel(**(data or {}))
        except Exception as e:
            raise ValueError(f"Scene validation failed: {str(e)}") from e

        return cls(
            objects=[_to_entity(s, EntityKind.OBJECT) for s in model.objects],
            obstacles=[_to_entity(s, EntityKind.OBSTACLE) for s in model.obstacles],
            zones=[_to_entity(s, EntityKind.ZONE) for s in model.zones],
        )


def load_scene(yaml_path: Union[str, Path]) -> Scene:
    """Load a scene from a YAML file with validation"""
    try:
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file: {str(e)}") from e
    except FileNotFoundError:
        raise FileNotFoundError(f"Scene file not found: {yaml_path}")

    scene = Scene.from_dict(data)
    logger.info(
        f"Loaded scene from {yaml_path}: {len(scene.objects)} objects, "
        f"{len(scene.obstacles)} obstacles, {len(scene.zones)} zones"
    )
    return scene
