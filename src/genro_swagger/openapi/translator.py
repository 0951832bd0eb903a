# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Translation of registered routes into the OpenAPI document.

``OpenAPITranslator`` walks the routes of a router tree (already flattened
depth-first by ``Router.iter_routes``), resolves each documentation
fragment and writes it into the shared ``Document`` under its full path.

Fragment resolution
-------------------
- Missing ``responses`` become ``{"default": {"description": ""}}``.
- Schema slots holding Python types are converted to JSON schema through
  pydantic's ``TypeAdapter``; nested definitions land in
  ``components.schemas`` and are referenced as ``#/components/schemas/...``.
- Every ``{name}`` placeholder the fragment does not declare gets a required
  string path parameter.

Registered fragments are never modified: resolution works on deep copies,
so the document only changes on the next generation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import TypeAdapter

from genro_swagger.core.registry import Route, path_parameters
from genro_swagger.openapi.model import Document, MediaType, Operation, Parameter, Response

__all__ = ["OpenAPITranslator"]

REF_TEMPLATE = "#/components/schemas/{model}"


class OpenAPITranslator:
    """Static helpers converting routes to OpenAPI objects."""

    @staticmethod
    def populate(document: Document, routes: Iterable[Route], components: dict[str, Any]) -> None:
        """Rebuild ``document.paths`` and ``document.components`` from ``routes``.

        Args:
            document: Document to fill, mutated in place.
            routes: Routes in document order.
            components: Base components given at router construction.
        """
        collected_defs: dict[str, Any] = {}
        document.paths.clear()
        for route in routes:
            if not route.include_in_schema:
                continue
            full_path = route.full_path
            operation = OpenAPITranslator.resolve_operation(
                route.operation, full_path, collected_defs
            )
            document.paths.setdefault(full_path, {})[route.method.lower()] = operation

        merged = {
            key: dict(value) if isinstance(value, dict) else value
            for key, value in components.items()
        }
        if collected_defs:
            schemas = merged.setdefault("schemas", {})
            for name, schema in collected_defs.items():
                schemas.setdefault(name, schema)
        document.components = merged

    @staticmethod
    def resolve_operation(
        operation: Operation, full_path: str, collected_defs: dict[str, Any]
    ) -> Operation:
        """Return a resolved deep copy of ``operation`` for ``full_path``."""
        resolved = operation.model_copy(deep=True)

        if not resolved.responses:
            resolved.responses = {"default": Response(description="")}
        for response in resolved.responses.values():
            OpenAPITranslator._resolve_content(response.content, collected_defs)
        if resolved.request_body is not None:
            OpenAPITranslator._resolve_content(resolved.request_body.content, collected_defs)

        parameters = list(resolved.parameters or [])
        for parameter in parameters:
            parameter.schema_ = OpenAPITranslator.schema_for(parameter.schema_, collected_defs)
        declared = {param.name for param in parameters if param.in_ == "path"}
        for name in path_parameters(full_path):
            if name not in declared:
                parameters.append(
                    Parameter(name=name, in_="path", required=True, schema_={"type": "string"})
                )
        resolved.parameters = parameters or None
        return resolved

    @staticmethod
    def _resolve_content(
        content: dict[str, MediaType] | None, collected_defs: dict[str, Any]
    ) -> None:
        for media in (content or {}).values():
            media.schema_ = OpenAPITranslator.schema_for(media.schema_, collected_defs)

    @staticmethod
    def schema_for(value: Any, collected_defs: dict[str, Any]) -> Any:
        """Convert a schema slot to JSON schema.

        Mappings and ``None`` pass through; anything else is treated as a
        Python type and handed to pydantic.
        """
        if value is None or isinstance(value, dict):
            return value
        schema = OpenAPITranslator.python_type_to_openapi_schema(value)
        collected_defs.update(schema.pop("$defs", {}))
        return schema

    @staticmethod
    def python_type_to_openapi_schema(python_type: Any) -> dict[str, Any]:
        """Convert a Python type to JSON schema using pydantic's TypeAdapter."""
        adapter = TypeAdapter(python_type)
        return adapter.json_schema(ref_template=REF_TEMPLATE)
