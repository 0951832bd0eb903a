# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""OpenAPI 3.0 document model built on pydantic.

Only the subset of the OpenAPI object graph the router populates is
modelled; ``components`` stays a free-form mapping so callers can seed
security schemes or shared schemas.

Schema slots (``Parameter.schema_``, ``MediaType.schema_``) accept either a
JSON schema mapping or a Python type (typically a pydantic model). Types are
resolved into JSON schema by the translator at generation time, so the
dump helpers here must only be called on a resolved document.

Serialization
-------------
``Document.to_json()`` emits compact JSON with sorted keys, which yields the
canonical ``components, info, openapi, paths`` top-level order::

    {"components":{},"info":{"title":"t","version":"v"},"openapi":"3.0.0","paths":{}}
"""

from __future__ import annotations

import json
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "OPENAPI_VERSION",
    "Document",
    "Info",
    "MediaType",
    "Operation",
    "Parameter",
    "RequestBody",
    "Response",
]

OPENAPI_VERSION = "3.0.0"


class _OpenAPIObject(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump by alias, leaving out optional fields that were never set."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Info(_OpenAPIObject):
    title: str
    version: str
    description: str | None = None


class MediaType(_OpenAPIObject):
    schema_: Any = Field(default=None, alias="schema")


class Parameter(_OpenAPIObject):
    name: str
    in_: str = Field(alias="in")
    required: bool | None = None
    description: str | None = None
    schema_: Any = Field(default=None, alias="schema")

    @field_validator("in_")
    @classmethod
    def _check_location(cls, value: str) -> str:
        if value not in ("path", "query", "header", "cookie"):
            raise ValueError(f"unsupported parameter location {value!r}")
        return value


class RequestBody(_OpenAPIObject):
    content: dict[str, MediaType]
    description: str | None = None
    required: bool | None = None


class Response(_OpenAPIObject):
    description: str = ""
    content: dict[str, MediaType] | None = None


class Operation(_OpenAPIObject):
    """Documentation fragment for one (method, path) pair.

    An empty ``Operation()`` is valid: generation documents it with a single
    ``default`` response carrying an empty description.
    """

    summary: str | None = None
    description: str | None = None
    operation_id: str | None = Field(default=None, alias="operationId")
    tags: list[str] | None = None
    parameters: list[Parameter] | None = None
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Response] | None = None
    deprecated: bool | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_as_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("responses", mode="before")
    @classmethod
    def _status_codes_as_str(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value


class Document(_OpenAPIObject):
    """In-memory OpenAPI document shared by a Router tree."""

    components: dict[str, Any] = Field(default_factory=dict)
    info: Info
    openapi: str = OPENAPI_VERSION
    paths: dict[str, dict[str, Operation]] = Field(default_factory=dict)

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":")).encode()

    def to_yaml(self) -> bytes:
        return yaml.safe_dump(self.to_dict(), sort_keys=True, allow_unicode=True).encode()
