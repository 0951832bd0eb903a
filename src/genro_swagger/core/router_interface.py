# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""RouterAdapter - Abstract base for HTTP router backends.

Defines the minimal capability the core drives on a concrete router
library. The core never branches on backend identity: everything it needs
goes through this interface.

Required methods:
    - register_route(method, path, handler): make a handler live
    - new_scope(path_prefix) -> nested adapter bound to a prefix
    - document_handler(render, media_type) -> backend-native handler

Optional overrides:
    - to_native_path(path) / from_native_path(path): placeholder translation
      between the canonical ``{name}`` syntax and the backend's own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

__all__ = ["RouterAdapter"]


class RouterAdapter(ABC):
    """Uniform interface over a concrete HTTP router backend.

    Paths handed to ``register_route`` are canonical: normalized, relative to
    the adapter scope, with named ``{param}`` placeholders. Adapters translate
    them with ``to_native_path`` before talking to the backend.

    Adapter failures are programming errors: implementations raise
    ``AdapterError`` and never retry.
    """

    @abstractmethod
    def register_route(self, method: str, path: str, handler: Callable[..., Any]) -> None:
        """Register ``handler`` for ``method`` on ``path``.

        The handler must be live for matching requests as soon as this
        returns.

        Args:
            method: Upper-case HTTP method.
            path: Canonical path template relative to this scope.
            handler: Backend-native handler.

        Raises:
            AdapterError: The backend rejected the method/path combination.
        """
        ...

    @abstractmethod
    def new_scope(self, path_prefix: str) -> RouterAdapter:
        """Return a nested adapter whose registrations are prefixed.

        Args:
            path_prefix: Normalized prefix starting with "/".
        """
        ...

    @abstractmethod
    def document_handler(self, render: Callable[[], bytes], media_type: str) -> Callable[..., Any]:
        """Build a handler answering ``200`` with ``render()`` as body.

        ``render`` only reads already-serialized bytes, so the handler is
        safe to invoke concurrently.
        """
        ...

    def to_native_path(self, path: str) -> str:
        """Translate a canonical path template into backend syntax."""
        return path

    def from_native_path(self, path: str) -> str:
        """Translate a backend path template into canonical syntax."""
        return path


if __name__ == "__main__":
    pass
