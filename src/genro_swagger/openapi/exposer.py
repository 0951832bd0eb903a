# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Documentation endpoint for a Router tree.

The exposer keeps the bytes serialized by the last successful generation
and, on its first publication, registers one GET route per format on the
root router. The handlers only read the current bytes reference, so they
are safe under concurrent requests and never reflect routes added after
the last generation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from genro_swagger.core.router import Router

__all__ = ["DocumentationExposer"]

JSON_MEDIA_TYPE = "application/json"
YAML_MEDIA_TYPE = "text/plain"


class DocumentationExposer:
    """Serve the serialized document of one Router tree."""

    __slots__ = ("_router", "json_path", "yaml_path", "_json", "_yaml", "_registered")

    def __init__(self, router: Router, json_path: str, yaml_path: str | None = None) -> None:
        self._router = router
        self.json_path = json_path
        self.yaml_path = yaml_path
        self._json: bytes | None = None
        self._yaml: bytes | None = None
        self._registered: set[str] = set()

    @property
    def json_bytes(self) -> bytes | None:
        return self._json

    @property
    def yaml_bytes(self) -> bytes | None:
        return self._yaml

    def pending_paths(self) -> list[str]:
        """Documentation paths not registered yet, JSON first."""
        paths = [self.json_path]
        if self.yaml_path is not None:
            paths.append(self.yaml_path)
        return [path for path in paths if path not in self._registered]

    def publish(self, json_bytes: bytes, yaml_bytes: bytes | None = None) -> None:
        """Register missing routes, then swap in freshly serialized bytes."""
        adapter = self._router.adapter
        renderers = {self.json_path: (self._render_json, JSON_MEDIA_TYPE)}
        if self.yaml_path is not None:
            renderers[self.yaml_path] = (self._render_yaml, YAML_MEDIA_TYPE)
        for path in self.pending_paths():
            render, media_type = renderers[path]
            self._router.add_raw_route(
                "GET", path, adapter.document_handler(render, media_type), include_in_schema=False
            )
            self._registered.add(path)
        self._json = json_bytes
        self._yaml = yaml_bytes

    def _render_json(self) -> bytes:
        return self._json or b""

    def _render_yaml(self) -> bytes:
        return self._yaml or b""
