from .exceptions import (
    RouterError,
    InvalidConfigurationError,
    DegenerateQueryError,
    UnknownEntityError,
    NoPendingRouteError,
)
from .models import (
    Point,
    Rect,
    Entity,
    EntityKind,
    ZoneKind,
    SmoothingMode,
    RouteErrorKind,
    RouteResult,
)
from .config import RouterConfig

__all__ = [
    'RouterError',
    'InvalidConfigurationError',
    'DegenerateQueryError',
    'UnknownEntityError',
    'NoPendingRouteError',
    'Point',
    'Rect',
    'Entity',
    'EntityKind',
    'ZoneKind',
    'SmoothingMode',
    'RouteErrorKind',
    'RouteResult',
    'RouterConfig',
]
