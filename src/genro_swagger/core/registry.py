# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Route table for Genro Swagger routers.

Objects
-------
``Route``
    Dataclass capturing one declaration at registration time. Fields:
        - ``method``: upper-case HTTP verb
        - ``path``: normalized path local to the owning router
        - ``prefix``: accumulated prefix of the owning router ("" for the root)
        - ``handler``: backend-native callable
        - ``operation``: documentation fragment (``Operation``)
        - ``include_in_schema``: False for system routes kept out of the document

``RouteRegistry``
    Insertion-ordered mapping ``local path -> method -> Route``. The prefix is
    stored separately from the local path so the documented full path can be
    computed without applying the prefix twice (the adapter scope already
    applies it to live dispatch).

Path helpers
------------
``normalize_path`` collapses repeated slashes and strips the trailing slash
(except for the root). ``join_paths`` concatenates a prefix and a local
path with the same normalization. ``validate_path`` enforces the canonical
placeholder syntax: named ``{param}`` segments only.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from genro_swagger.exceptions import InvalidRoute

if TYPE_CHECKING:
    from genro_swagger.openapi.model import Operation

__all__ = [
    "HTTP_METHODS",
    "Route",
    "RouteRegistry",
    "join_paths",
    "normalize_method",
    "normalize_path",
    "path_parameters",
    "validate_path",
]

# Verbs an OpenAPI 3.0 path item can describe.
HTTP_METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"})

_SLASHES = re.compile(r"/{2,}")
_PLACEHOLDER = re.compile(r"\{([^{}]*)\}")
_PARAM_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def normalize_path(path: str) -> str:
    """Collapse repeated slashes and strip the trailing slash (root excluded)."""
    path = _SLASHES.sub("/", path)
    if len(path) > 1 and path.endswith("/"):
        path = path.rstrip("/") or "/"
    return path


def join_paths(prefix: str, path: str) -> str:
    """Concatenate ``prefix`` and ``path`` with normalized separators."""
    if not prefix or prefix == "/":
        return normalize_path(path)
    if path == "/":
        return normalize_path(prefix)
    return normalize_path(f"{prefix}/{path}")


def normalize_method(method: Any) -> str:
    """Return the upper-case verb or raise ``InvalidRoute``."""
    if not isinstance(method, str) or method.upper() not in HTTP_METHODS:
        raise InvalidRoute(method, None, f"unsupported HTTP method {method!r}")
    return method.upper()


def path_parameters(path: str) -> list[str]:
    """Return placeholder names of a canonical path, in order."""
    return _PLACEHOLDER.findall(path)


def validate_path(method: str, path: Any) -> str:
    """Check a canonical path template and return it normalized.

    Raises:
        InvalidRoute: empty path, missing leading "/", malformed or duplicated
            placeholders, or regex-constrained parameters.
    """
    if not isinstance(path, str) or not path:
        raise InvalidRoute(method, path, "path must be a non-empty string")
    if not path.startswith("/"):
        raise InvalidRoute(method, path, "path must start with '/'")
    names = path_parameters(path)
    stripped = _PLACEHOLDER.sub("", path)
    if "{" in stripped or "}" in stripped:
        raise InvalidRoute(method, path, "unbalanced placeholder braces")
    for name in names:
        if not _PARAM_NAME.match(name):
            raise InvalidRoute(
                method, path, f"placeholder {{{name}}} is not a plain named parameter"
            )
    if len(set(names)) != len(names):
        raise InvalidRoute(method, path, "duplicated placeholder names")
    return normalize_path(path)


@dataclass
class Route:
    """A registered (method, path) pair and its documentation fragment.

    Attributes:
        method: Upper-case HTTP method.
        path: Normalized path local to the owning router.
        prefix: Accumulated prefix of the owning router.
        handler: Backend-native handler.
        operation: Documentation fragment, mutable until the next generation.
        include_in_schema: Whether generation documents this route.
    """

    method: str
    path: str
    prefix: str
    handler: Callable[..., Any]
    operation: Operation
    include_in_schema: bool = True

    @property
    def full_path(self) -> str:
        """Documented path: prefix plus local path."""
        return join_paths(self.prefix, self.path)

    @property
    def identity(self) -> tuple[str, str]:
        return (self.method, self.full_path)


@dataclass
class RouteRegistry:
    """Insertion-ordered route table of a single router, keyed by full path."""

    _routes: dict[str, dict[str, Route]] = field(default_factory=dict)

    def get(self, method: str, full_path: str) -> Route | None:
        return self._routes.get(full_path, {}).get(method)

    def __contains__(self, identity: tuple[str, str]) -> bool:
        method, path = identity
        return self.get(method, path) is not None

    def add(self, route: Route) -> None:
        self._routes.setdefault(route.full_path, {})[route.method] = route

    def __iter__(self) -> Iterator[Route]:
        for methods in self._routes.values():
            yield from methods.values()

    def __len__(self) -> int:
        return sum(len(methods) for methods in self._routes.values())
