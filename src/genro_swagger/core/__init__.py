"""Core runtime aggregator for Genro Swagger.

Exposes the registration building blocks from a single module:
``RouterAdapter``, ``Route``, ``RouteRegistry``, ``BaseRouter``, ``Router``,
``SubRouter``.

Importing this module performs only imports; it does not instantiate
routers or touch any backend.
"""

from .base_router import BaseRouter
from .registry import HTTP_METHODS, Route, RouteRegistry, join_paths, normalize_path
from .router import (
    DEFAULT_JSON_DOCUMENTATION_PATH,
    DEFAULT_YAML_DOCUMENTATION_PATH,
    Router,
    SubRouter,
)
from .router_interface import RouterAdapter

__all__ = [
    "BaseRouter",
    "DEFAULT_JSON_DOCUMENTATION_PATH",
    "DEFAULT_YAML_DOCUMENTATION_PATH",
    "HTTP_METHODS",
    "Route",
    "RouteRegistry",
    "Router",
    "RouterAdapter",
    "SubRouter",
    "join_paths",
    "normalize_path",
]
