"""OpenAPI document model, translation and exposure."""

from .model import (
    OPENAPI_VERSION,
    Document,
    Info,
    MediaType,
    Operation,
    Parameter,
    RequestBody,
    Response,
)

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
