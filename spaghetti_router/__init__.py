"""
Spaghetti Router - automatic path routing for diagram editors
Grid rasterization, A* search and path smoothing between placed objects
"""

from importlib.metadata import version, PackageNotFoundError

from .core.config import RouterConfig
from .core.scene import Scene, load_scene
from .routing.router import PathRouter, AutoRouteSession

try:
    __version__ = version("spaghetti-router")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = ["PathRouter", "AutoRouteSession", "RouterConfig", "Scene", "load_scene"]
