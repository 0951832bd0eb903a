"""Registration runtime shared by ``Router`` and ``SubRouter``.

This module exposes :class:`BaseRouter`, which owns one ``RouteRegistry``
and one bound ``RouterAdapter``, registers routes on both atomically and
spawns nested sub-routers. Document ownership and generation live in
``Router``; subclasses must preserve the semantics below.

Slots
-----
- ``adapter``: the ``RouterAdapter`` (or adapter scope) routes are made live on.
- ``path_prefix``: accumulated prefix ("" for the root router).
- ``document``: the Document Model shared by the whole router tree.
- ``context``: opaque caller context, handed down to sub-routers untouched.
- ``_registry``: this router's ``RouteRegistry``.
- ``_children``: sub-routers in declaration order.
- ``_root``: the root ``Router`` (identity checks span the whole tree).

Registration
------------
``add_route`` / ``add_raw_route`` validate the method, translate the path
from the backend's native syntax, validate and normalize it, then check the
(method, full path) identity against every registry of the tree. Only then
the adapter is called, and only on success the route is recorded, so a
failing call leaves no trace in either the backend or the registry.

Route options
-------------
``add_route`` accepts ``openapi_<field>`` keyword options merged into the
operation, following the ``<plugin>_<key>`` convention of the ``route``
decorator::

    router.add_route("GET", "/users", list_users, openapi_tags=["users"])

Sub-routers
-----------
``sub_router(path_prefix, adapter=None)`` builds a ``SubRouter`` whose
registrations go to ``adapter`` (by default ``self.adapter.new_scope``). The
adapter scope prefixes live dispatch; the registry keeps the prefix apart so
the documented path is ``prefix + local path`` exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from genro_toolbox import dictExtract
from genro_toolbox.typeutils import safe_is_instance
from pydantic import ValidationError

from genro_swagger.exceptions import (
    DuplicateRoute,
    InvalidPathPrefix,
    InvalidRoute,
    InvalidRouterOptions,
)
from genro_swagger.openapi.model import Document, Operation

from .registry import Route, RouteRegistry, join_paths, normalize_method, validate_path
from .router_interface import RouterAdapter

if TYPE_CHECKING:
    from .router import Router, SubRouter

__all__ = ["BaseRouter"]

logger = logging.getLogger("genro_swagger")

_ADAPTER_CLASS = "genro_swagger.core.router_interface.RouterAdapter"


def check_adapter(adapter: Any) -> RouterAdapter:
    if adapter is None or not safe_is_instance(adapter, _ADAPTER_CLASS):
        raise InvalidRouterOptions(
            f"adapter must be a RouterAdapter instance, got {type(adapter).__name__}"
        )
    return adapter


class BaseRouter:
    """Route declarations against one adapter scope.

    Responsibilities:
        - Register routes on the adapter and in the registry, atomically
        - Enforce (method, full path) uniqueness across the router tree
        - Spawn nested sub-routers with composed prefixes
        - Walk the tree depth-first for generation
    """

    __slots__ = (
        "adapter",
        "path_prefix",
        "document",
        "context",
        "_registry",
        "_children",
        "_root",
    )

    def __init__(
        self,
        adapter: RouterAdapter,
        *,
        document: Document,
        path_prefix: str = "",
        context: Any = None,
        root: Router | None = None,
    ) -> None:
        self.adapter = check_adapter(adapter)
        self.path_prefix = path_prefix
        self.document = document
        self.context = context
        self._registry = RouteRegistry()
        self._children: list[SubRouter] = []
        self._root = root if root is not None else self

    # ------------------------------------------------------------------
    # Route declaration
    # ------------------------------------------------------------------
    def add_route(
        self,
        method: str,
        path: str,
        handler: Callable[..., Any],
        operation: Operation | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Route:
        """Register a documented route.

        Args:
            method: HTTP method (case-insensitive).
            path: Path template, canonical ``{name}`` or backend-native syntax.
            handler: Backend-native handler.
            operation: ``Operation``, mapping coerced to one, or None for a
                minimally documented route.
            **options: ``openapi_<field>`` overrides merged into the operation.

        Returns:
            The registered ``Route``.

        Raises:
            InvalidRoute: bad method, path, handler or operation.
            DuplicateRoute: identity already registered in the router tree.
            AdapterError: the backend rejected the route.
            TypeError: unknown keyword option.
        """
        openapi_options = dictExtract(options, "openapi_", slice_prefix=True, pop=False)
        unknown = sorted(key for key in options if not key.startswith("openapi_"))
        if unknown:
            raise TypeError(f"Unexpected route options: {', '.join(unknown)}")
        fragment = self._coerce_operation(method, path, operation, openapi_options)
        return self._register(method, path, handler, fragment, include_in_schema=True)

    def add_raw_route(
        self,
        method: str,
        path: str,
        handler: Callable[..., Any],
        operation: Operation | None = None,
        *,
        include_in_schema: bool = True,
    ) -> Route:
        """Register a route with a ready-made ``Operation``.

        ``include_in_schema=False`` keeps the route out of the document
        while still reserving its identity (system routes such as the
        documentation endpoint).
        """
        if operation is None:
            operation = Operation()
        elif not isinstance(operation, Operation):
            raise InvalidRoute(method, path, "raw routes require an Operation instance")
        return self._register(method, path, handler, operation, include_in_schema=include_in_schema)

    def route(
        self,
        method: str,
        path: str,
        operation: Operation | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Callable[[Callable], Callable]:
        """Decorator form of ``add_route``; returns the handler unchanged.

        Example::

            @router.route("GET", "/users/{user_id}", openapi_summary="Fetch a user")
            def get_user(request, user_id):
                ...
        """

        def decorator(handler: Callable) -> Callable:
            self.add_route(method, path, handler, operation, **options)
            return handler

        return decorator

    # ------------------------------------------------------------------
    # Sub-routers
    # ------------------------------------------------------------------
    def sub_router(self, path_prefix: str, adapter: RouterAdapter | None = None) -> SubRouter:
        """Create a nested router bound to ``path_prefix``.

        Args:
            path_prefix: Non-empty prefix starting with "/", relative to this router.
            adapter: Adapter scope already bound to the prefix. When omitted,
                ``self.adapter.new_scope(path_prefix)`` is used.

        Raises:
            InvalidPathPrefix: malformed prefix.
            InvalidRouterOptions: ``adapter`` is not a RouterAdapter.
        """
        from .router import SubRouter

        prefix = self._validate_prefix(path_prefix)
        if adapter is None:
            adapter = self.adapter.new_scope(prefix)
        child = SubRouter(
            adapter,
            document=self.document,
            path_prefix=join_paths(self.path_prefix, prefix),
            context=self.context,
            root=self._root,
        )
        self._children.append(child)
        logger.debug("sub-router created at %s", child.path_prefix)
        return child

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def iter_routes(self) -> Iterator[Route]:
        """Yield own routes, then each sub-router's, depth-first in declaration order."""
        yield from self._registry
        for child in self._children:
            yield from child.iter_routes()

    @property
    def routes(self) -> list[Route]:
        """Routes registered directly on this router (sub-routers excluded)."""
        return list(self._registry)

    @property
    def children(self) -> list[SubRouter]:
        return list(self._children)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _register(
        self,
        method: str,
        path: str,
        handler: Callable[..., Any],
        operation: Operation,
        *,
        include_in_schema: bool,
    ) -> Route:
        method = normalize_method(method)
        if isinstance(path, str):
            try:
                path = self.adapter.from_native_path(path)
            except ValueError as exc:
                raise InvalidRoute(method, path, str(exc)) from exc
        path = validate_path(method, path)
        if not callable(handler):
            raise InvalidRoute(method, path, "handler must be callable")
        full_path = validate_path(method, join_paths(self.path_prefix, path))
        if self._root._has_route(method, full_path):
            raise DuplicateRoute(method, full_path)

        self.adapter.register_route(method, path, handler)
        route = Route(
            method=method,
            path=path,
            prefix=self.path_prefix,
            handler=handler,
            operation=operation,
            include_in_schema=include_in_schema,
        )
        self._registry.add(route)
        logger.debug("registered %s %s", method, full_path)
        return route

    def _iter_routers(self) -> Iterator[BaseRouter]:
        yield self
        for child in self._children:
            yield from child._iter_routers()

    def _has_route(self, method: str, full_path: str) -> bool:
        return any((method, full_path) in router._registry for router in self._iter_routers())

    @staticmethod
    def _coerce_operation(
        method: str,
        path: str,
        operation: Operation | Mapping[str, Any] | None,
        overrides: dict[str, Any],
    ) -> Operation:
        if operation is None:
            operation = Operation()
        try:
            if isinstance(operation, Mapping):
                operation = Operation.model_validate(dict(operation))
            elif not isinstance(operation, Operation):
                raise InvalidRoute(
                    method, path, f"operation must be an Operation or a mapping, "
                    f"got {type(operation).__name__}"
                )
            if overrides:
                data = operation.model_dump(exclude_none=True)
                data.update(overrides)
                operation = Operation.model_validate(data)
        except ValidationError as exc:
            raise InvalidRoute(method, path, f"invalid operation: {exc}") from exc
        return operation

    def _validate_prefix(self, path_prefix: Any) -> str:
        if not isinstance(path_prefix, str) or not path_prefix:
            raise InvalidPathPrefix(path_prefix, "prefix must be a non-empty string")
        try:
            return validate_path(None, self.adapter.from_native_path(path_prefix))
        except ValueError as exc:
            raise InvalidPathPrefix(path_prefix, str(exc)) from exc
        except InvalidRoute as exc:
            raise InvalidPathPrefix(path_prefix, exc.reason) from exc
