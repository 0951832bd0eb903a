# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Starlette backend for Genro Swagger.

``StarletteAdapter`` wraps a ``starlette.routing.Router`` and is itself an
ASGI application. ``new_scope`` mounts a fresh child router at the prefix,
so routes added to the scope later are live without re-mounting. A scope
route at ``/`` is registered on the parent at the mount path, since a
``Mount`` does not match its bare prefix. Explicit HEAD routes are
inserted first so they win over the HEAD that GET routes answer.

Handlers are Starlette endpoints::

    async def get_user(request):
        return PlainTextResponse(request.path_params["user_id"])

Canonical ``{name}`` placeholders are Starlette's native syntax; convertor
forms such as ``{name:int}`` are rejected.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import BaseRoute, Mount, Route
from starlette.routing import Router as StarletteRouter
from starlette.types import Receive, Scope, Send

from genro_swagger.core.router_interface import RouterAdapter
from genro_swagger.exceptions import AdapterError

__all__ = ["StarletteAdapter"]

_CONVERTOR = re.compile(r"\{[^{}:]*:[^{}]*\}")


class StarletteAdapter(RouterAdapter):
    """RouterAdapter over a Starlette router; also an ASGI application."""

    __slots__ = ("router", "_parent", "_mount_path")

    def __init__(
        self,
        router: StarletteRouter | None = None,
        *,
        parent: StarletteAdapter | None = None,
        mount_path: str = "",
    ) -> None:
        self.router = router if router is not None else StarletteRouter()
        self._parent = parent
        self._mount_path = mount_path

    def register_route(self, method: str, path: str, handler: Callable[..., Any]) -> None:
        if path == "/" and self._parent is not None:
            # A Mount never matches its bare prefix: serve it from the parent.
            self._parent.register_route(method, self._mount_path, handler)
            return
        try:
            route = Route(path, endpoint=handler, methods=[method])
        except ValueError as exc:
            raise AdapterError(method, path, str(exc)) from exc
        self._insert(route, first=method == "HEAD")

    def new_scope(self, path_prefix: str) -> StarletteAdapter:
        child = StarletteRouter()
        self.router.routes.append(Mount(path_prefix, app=child))
        return StarletteAdapter(child, parent=self, mount_path=path_prefix)

    def document_handler(self, render: Callable[[], bytes], media_type: str) -> Callable[..., Any]:
        async def serve_document(request: Request) -> Response:
            return Response(render(), media_type=media_type)

        return serve_document

    def from_native_path(self, path: str) -> str:
        match = _CONVERTOR.search(path)
        if match:
            raise ValueError(f"convertor placeholder {match.group(0)} is not supported")
        return path

    def _insert(self, route: BaseRoute, first: bool = False) -> None:
        # Mounts match every path below their prefix: plain routes go first.
        # Explicit HEAD routes go before the GET routes that also answer HEAD.
        routes = self.router.routes
        if first:
            routes.insert(0, route)
            return
        for index, existing in enumerate(routes):
            if isinstance(existing, Mount):
                routes.insert(index, route)
                return
        routes.append(route)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.router(scope, receive, send)
