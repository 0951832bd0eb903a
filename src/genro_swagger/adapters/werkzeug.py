# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Werkzeug backend for Genro Swagger.

``WerkzeugAdapter`` registers ``werkzeug.routing.Rule`` objects on a
``Map`` and doubles as the WSGI application dispatching on that map.
Scopes created with ``new_scope`` share the parent's map and only carry a
longer prefix, so any adapter of the tree serves every route.

Handlers receive the ``Request`` and the path parameters as keyword
arguments and return a ``Response``::

    def get_user(request, user_id):
        return Response(user_id)

Native placeholders are ``<name>``; converter forms such as ``<int:name>``
are rejected because they cannot be expressed as plain OpenAPI templates.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Any

from werkzeug.exceptions import HTTPException
from werkzeug.routing import Map, Rule
from werkzeug.wrappers import Request, Response

from genro_swagger.core.registry import join_paths
from genro_swagger.core.router_interface import RouterAdapter
from genro_swagger.exceptions import AdapterError

__all__ = ["WerkzeugAdapter"]

_CANONICAL = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")
_NATIVE = re.compile(r"<([^<>]*)>")


class WerkzeugAdapter(RouterAdapter):
    """RouterAdapter over a werkzeug URL map; also a WSGI application."""

    __slots__ = ("url_map", "prefix")

    def __init__(self, url_map: Map | None = None, prefix: str = "") -> None:
        self.url_map = url_map if url_map is not None else Map()
        self.prefix = prefix

    def register_route(self, method: str, path: str, handler: Callable[..., Any]) -> None:
        native = join_paths(self.prefix, self.to_native_path(path))
        try:
            rule = Rule(native, methods=[method], endpoint=handler)
        except ValueError as exc:
            raise AdapterError(method, native, str(exc)) from exc
        # Rules for GET also answer HEAD; an explicit HEAD rule takes it over.
        shape = _NATIVE.sub("<>", native)
        shadowing = []
        for existing in self.url_map.iter_rules():
            if not existing.methods or _NATIVE.sub("<>", existing.rule) != shape:
                continue
            if method == "HEAD" and "GET" in existing.methods:
                shadowing.append(existing)
            elif method == "GET" and existing.methods == {"HEAD"}:
                rule.methods.discard("HEAD")
        try:
            self.url_map.add(rule)
        except ValueError as exc:
            raise AdapterError(method, native, str(exc)) from exc
        for existing in shadowing:
            existing.methods.discard("HEAD")

    def new_scope(self, path_prefix: str) -> WerkzeugAdapter:
        return WerkzeugAdapter(
            self.url_map, join_paths(self.prefix, self.to_native_path(path_prefix))
        )

    def document_handler(self, render: Callable[[], bytes], media_type: str) -> Callable[..., Any]:
        def serve_document(request: Request, **values: Any) -> Response:
            return Response(render(), mimetype=media_type)

        return serve_document

    def to_native_path(self, path: str) -> str:
        return _CANONICAL.sub(r"<\1>", path)

    def from_native_path(self, path: str) -> str:
        def replace(match: re.Match) -> str:
            inner = match.group(1)
            if ":" in inner:
                raise ValueError(f"converter placeholder <{inner}> is not supported")
            return "{" + inner + "}"

        return _NATIVE.sub(replace, path)

    # ------------------------------------------------------------------
    # WSGI
    # ------------------------------------------------------------------
    def dispatch(self, request: Request) -> Response | HTTPException:
        urls = self.url_map.bind_to_environ(request.environ)
        try:
            handler, values = urls.match()
            return handler(request, **values)
        except HTTPException as exc:
            return exc

    def __call__(self, environ: dict[str, Any], start_response: Callable) -> Iterable[bytes]:
        response = self.dispatch(Request(environ))
        return response(environ, start_response)
