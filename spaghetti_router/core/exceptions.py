"""
Custom exceptions for the routing engine
"""


class RouterError(Exception):
    """Base exception for all routing errors"""
    pass


class InvalidConfigurationError(RouterError, ValueError):
    """Raised when a routing parameter is invalid (e.g. non-positive cell size)"""
    pass


class DegenerateQueryError(RouterError):
    """Raised when a query cannot be rasterized into a usable grid

    The router converts this into a negative RouteResult; it is never
    surfaced to callers of PathRouter.route().
    """
    pass


class UnknownEntityError(RouterError, KeyError):
    """Raised when an entity id is not present in the scene"""
    pass


class NoPendingRouteError(RouterError):
    """Raised when complete_route() is called before begin_route()"""
    pass
