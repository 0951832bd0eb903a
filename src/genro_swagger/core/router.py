"""Root router and sub-routers for Genro Swagger.

``Router`` extends ``BaseRouter`` with ownership of the Document Model and
the generation pipeline; ``SubRouter`` is a prefixed registration scope that
only contributes routes.

Construction
------------
Constructor signature::

    Router(adapter, info, *, context=None, components=None,
           json_documentation_path="/documentation/json",
           yaml_documentation_path="/documentation/yaml")

- ``info`` is an ``Info`` or a mapping with non-empty ``title`` and
  ``version``; anything else raises ``InvalidRouterOptions``.
- ``components`` seeds the document's ``components`` object on every
  generation (schemas collected from routes are merged in).
- ``yaml_documentation_path=None`` disables the YAML endpoint.

Generation
----------
``generate_and_expose_swagger()``:

1. walks ``iter_routes()`` (root first, then sub-routers depth-first);
2. builds paths and components into a scratch document and validates it
   with ``openapi-spec-validator``; a failure raises
   ``DocumentValidationError`` and leaves both the shared document and the
   exposed bytes untouched;
3. serializes the result once and hands the bytes to the
   ``DocumentationExposer``, which registers the documentation routes on
   the first successful call, then copies it into the shared document.

A documentation path already taken by a user route raises
``DuplicateRoute`` before any of the above.

Routes added afterwards are live immediately but only documented by the
next explicit generation.

Example::

    from werkzeug.wrappers import Response

    from genro_swagger import Router
    from genro_swagger.adapters.werkzeug import WerkzeugAdapter

    adapter = WerkzeugAdapter()
    router = Router(adapter, {"title": "Shop", "version": "1.0.0"})
    router.add_route("GET", "/hello", lambda request: Response("OK"))
    router.generate_and_expose_swagger()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsonschema.exceptions import ValidationError as SchemaValidationError
from openapi_spec_validator import validate
from pydantic import PydanticUserError, ValidationError
from referencing.exceptions import Unresolvable

from genro_swagger.exceptions import (
    DocumentValidationError,
    DuplicateRoute,
    InvalidRoute,
    InvalidRouterOptions,
)
from genro_swagger.openapi.exposer import DocumentationExposer
from genro_swagger.openapi.model import Document, Info
from genro_swagger.openapi.translator import OpenAPITranslator

from .base_router import BaseRouter, logger
from .registry import validate_path
from .router_interface import RouterAdapter

__all__ = [
    "DEFAULT_JSON_DOCUMENTATION_PATH",
    "DEFAULT_YAML_DOCUMENTATION_PATH",
    "Router",
    "SubRouter",
]

DEFAULT_JSON_DOCUMENTATION_PATH = "/documentation/json"
DEFAULT_YAML_DOCUMENTATION_PATH = "/documentation/yaml"


def _build_info(info: Any) -> Info:
    if isinstance(info, Info):
        data = info.model_dump()
    elif isinstance(info, Mapping):
        data = dict(info)
    else:
        raise InvalidRouterOptions("info must be an Info or a mapping with title and version")
    for key in ("title", "version"):
        if not isinstance(data.get(key), str) or not data[key]:
            raise InvalidRouterOptions(f"info.{key} is required")
    try:
        return Info.model_validate(data)
    except ValidationError as exc:
        raise InvalidRouterOptions(f"invalid info: {exc}") from exc


def _documentation_path(path: str) -> str:
    try:
        return validate_path("GET", path)
    except InvalidRoute as exc:
        raise InvalidRouterOptions(f"documentation path {path!r}: {exc.reason}") from exc


class Router(BaseRouter):
    """Root of a router tree: owns the document and exposes it.

    Extends BaseRouter with:
        - Document Model ownership (shared by reference with sub-routers)
        - Aggregation, validation and serialization of the document
        - A per-instance documentation endpoint
    """

    __slots__ = ("_components", "_exposer", "_generated")

    def __init__(
        self,
        adapter: RouterAdapter,
        info: Info | Mapping[str, Any],
        *,
        context: Any = None,
        components: Mapping[str, Any] | None = None,
        json_documentation_path: str = DEFAULT_JSON_DOCUMENTATION_PATH,
        yaml_documentation_path: str | None = DEFAULT_YAML_DOCUMENTATION_PATH,
    ) -> None:
        document = Document(info=_build_info(info))
        json_path = _documentation_path(json_documentation_path)
        yaml_path = None
        if yaml_documentation_path is not None:
            yaml_path = _documentation_path(yaml_documentation_path)
        if json_path == yaml_path:
            raise InvalidRouterOptions("JSON and YAML documentation paths must differ")
        self._components: dict[str, Any] = dict(components or {})
        self._exposer = DocumentationExposer(self, json_path, yaml_path)
        self._generated = False
        super().__init__(adapter, document=document, context=context)
        self.document.components = dict(self._components)

    @property
    def generated(self) -> bool:
        """True once a generation has been exposed."""
        return self._generated

    @property
    def documentation(self) -> DocumentationExposer:
        return self._exposer

    def json_bytes(self) -> bytes | None:
        """JSON served by the documentation endpoint, None before generation."""
        return self._exposer.json_bytes

    def yaml_bytes(self) -> bytes | None:
        """YAML served by the documentation endpoint, None before generation."""
        return self._exposer.yaml_bytes

    def generate_and_expose_swagger(self) -> Document:
        """Rebuild, validate and expose the document from the current routes.

        Returns:
            The shared Document Model.

        Raises:
            DuplicateRoute: a documentation path is already taken by a route
                of the tree; raised before anything is built or exposed.
            DocumentValidationError: the aggregated document is not valid
                OpenAPI; nothing is exposed or replaced.
        """
        for path in self._exposer.pending_paths():
            if self._has_route("GET", path):
                logger.warning("documentation path GET %s is taken by a route", path)
                raise DuplicateRoute("GET", path)

        scratch = Document(info=self.document.info, openapi=self.document.openapi)
        try:
            OpenAPITranslator.populate(scratch, self.iter_routes(), self._components)
        except PydanticUserError as exc:
            logger.warning("cannot build OpenAPI schema: %s", exc)
            raise DocumentValidationError(str(exc)) from exc

        try:
            validate(scratch.to_dict())
        except (SchemaValidationError, Unresolvable) as exc:
            reason = exc.message if isinstance(exc, SchemaValidationError) else str(exc)
            logger.warning("OpenAPI document rejected by validator: %s", reason)
            raise DocumentValidationError(reason) from exc

        yaml_bytes = scratch.to_yaml() if self._exposer.yaml_path is not None else None
        self._exposer.publish(scratch.to_json(), yaml_bytes)
        self.document.paths = scratch.paths
        self.document.components = scratch.components
        self._generated = True
        logger.info(
            "OpenAPI document generated: %d paths, %d operations",
            len(self.document.paths),
            sum(len(operations) for operations in self.document.paths.values()),
        )
        return self.document


class SubRouter(BaseRouter):
    """Prefixed registration scope of a Router tree.

    Holds its own registry and adapter scope and a non-owning reference to
    the root's document. ``path_prefix`` is the full accumulated prefix.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"<SubRouter {self.path_prefix} routes={len(self._registry)}>"
