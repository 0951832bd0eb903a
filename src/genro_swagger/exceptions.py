# Copyright 2025 Softwell S.r.l. - All Rights Reserved
# SPDX-License-Identifier: Apache-2.0
"""Exceptions for Genro Swagger.

This module defines the errors raised while configuring routers, registering
routes and generating the OpenAPI document. Every error is raised
synchronously to the caller; nothing is retried.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "SwaggerRouterError",
    "InvalidRouterOptions",
    "InvalidRoute",
    "InvalidPathPrefix",
    "DuplicateRoute",
    "AdapterError",
    "DocumentValidationError",
]


class SwaggerRouterError(Exception):
    """Base class for all Genro Swagger errors."""


class InvalidRouterOptions(SwaggerRouterError):
    """Raised when a Router cannot be constructed (missing info, bad adapter).

    Attributes:
        reason: Human readable description of the problem.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid router options: {reason}")


class InvalidRoute(SwaggerRouterError):
    """Raised when a route declaration is rejected before reaching the backend.

    Attributes:
        method: HTTP method as given by the caller.
        path: Path template as given by the caller.
        reason: Why the declaration was rejected.
    """

    def __init__(self, method: Any, path: Any, reason: str) -> None:
        self.method = method
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid route {method} {path!r}: {reason}")


class InvalidPathPrefix(SwaggerRouterError):
    """Raised when a sub-router path prefix is malformed.

    Attributes:
        prefix: The rejected prefix.
        reason: Why the prefix was rejected.
    """

    def __init__(self, prefix: Any, reason: str) -> None:
        self.prefix = prefix
        self.reason = reason
        super().__init__(f"Invalid path prefix {prefix!r}: {reason}")


class DuplicateRoute(SwaggerRouterError):
    """Raised when (method, full path) is already registered in the router tree.

    Attributes:
        method: Upper-case HTTP method.
        path: Normalized full path (sub-router prefixes applied).
    """

    def __init__(self, method: str, path: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"Route {method} {path} already registered")


class AdapterError(SwaggerRouterError):
    """Raised when the router backend rejects a registration.

    The backend exception is available as ``__cause__``.

    Attributes:
        method: Upper-case HTTP method.
        path: Path as handed to the backend.
        reason: Backend error message.
    """

    def __init__(self, method: str, path: str, reason: str) -> None:
        self.method = method
        self.path = path
        self.reason = reason
        super().__init__(f"Backend rejected route {method} {path}: {reason}")


class DocumentValidationError(SwaggerRouterError):
    """Raised when the aggregated OpenAPI document fails validation.

    Live routes keep serving; only the documentation endpoint is left stale
    (or absent if generation never succeeded).

    Attributes:
        reason: Validator message.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Generated OpenAPI document is invalid: {reason}")
