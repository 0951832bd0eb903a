"""Genro Swagger - OpenAPI-documenting routing layer over HTTP router backends.

Routes are declared once: each declaration is made live on the wrapped
backend immediately and recorded as an OpenAPI fragment. Generation merges
the fragments of the whole router tree into one validated document and
serves it from a documentation endpoint.

Public exports:
    - ``Router``: root router owning the OpenAPI document
    - ``SubRouter``: prefixed registration scope returned by ``sub_router``
    - ``RouterAdapter``: interface every backend adapter implements
    - ``Route``: handle returned by route declarations
    - ``Info``, ``Operation``, ``Parameter``, ``RequestBody``, ``Response``,
      ``MediaType``, ``Document``: the OpenAPI document model

Backend adapters live in ``genro_swagger.adapters`` and are imported
explicitly, so only the backend actually used needs to be installed.

Example::

    from werkzeug.wrappers import Response

    from genro_swagger import Router
    from genro_swagger.adapters.werkzeug import WerkzeugAdapter

    app = WerkzeugAdapter()
    router = Router(app, {"title": "Shop", "version": "1.0.0"})

    @router.route("GET", "/hello", openapi_summary="Say hello")
    def hello(request):
        return Response("OK")

    router.generate_and_expose_swagger()
"""

__version__ = "0.1.0"

from .core import (
    DEFAULT_JSON_DOCUMENTATION_PATH,
    DEFAULT_YAML_DOCUMENTATION_PATH,
    Route,
    Router,
    RouterAdapter,
    SubRouter,
)
from .exceptions import (
    AdapterError,
    DocumentValidationError,
    DuplicateRoute,
    InvalidPathPrefix,
    InvalidRoute,
    InvalidRouterOptions,
    SwaggerRouterError,
)
from .openapi import Document, Info, MediaType, Operation, Parameter, RequestBody, Response

__all__ = [
    "DEFAULT_JSON_DOCUMENTATION_PATH",
    "DEFAULT_YAML_DOCUMENTATION_PATH",
    "Route",
    "Router",
    "RouterAdapter",
    "SubRouter",
    "Document",
    "Info",
    "MediaType",
    "Operation",
    "Parameter",
    "RequestBody",
    "Response",
    "SwaggerRouterError",
    "InvalidRouterOptions",
    "InvalidRoute",
    "InvalidPathPrefix",
    "DuplicateRoute",
    "AdapterError",
    "DocumentValidationError",
]
