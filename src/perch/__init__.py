"""Perch — schema-validated request dispatch for ASGI.

Matches each request against an ordered list of regex routes, validates
body, path parameters, and query string, runs the handlers with a shared
per-request context, and answers in JSON.

Basic usage::

    from pydantic import BaseModel
    from perch import App, TypeSchema

    class ItemIn(BaseModel):
        name: str

    app = App()

    @app.route(r"^/items$", methods=["POST"], body=TypeSchema(ItemIn))
    def create_item(context, request, response):
        return {"name": context.body.name}

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Context",
    "HTTPError",
    "ImATeapot",
    "InternalServerError",
    "NotFound",
    "PayloadTooLarge",
    "PerchError",
    "Request",
    "RequestHandler",
    "ResponseWriter",
    "Route",
    "Rules",
    "Schema",
    "SchemaError",
    "TypeSchema",
    "UnprocessableEntity",
    "create_server",
    "use_middleware",
]

_LAZY_IMPORTS: dict[str, str] = {
    "App": "perch.app",
    "create_server": "perch.app",
    "AppConfig": "perch.config",
    "Context": "perch.context",
    "ConfigurationError": "perch.errors",
    "HTTPError": "perch.errors",
    "ImATeapot": "perch.errors",
    "InternalServerError": "perch.errors",
    "NotFound": "perch.errors",
    "PayloadTooLarge": "perch.errors",
    "PerchError": "perch.errors",
    "UnprocessableEntity": "perch.errors",
    "Request": "perch.http.request",
    "ResponseWriter": "perch.http.response",
    "RequestHandler": "perch.routing.route",
    "Route": "perch.routing.route",
    "Rules": "perch.validation",
    "Schema": "perch.schema",
    "SchemaError": "perch.schema",
    "TypeSchema": "perch.schema",
    "use_middleware": "perch.middleware.adapter",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast (pydantic loads on first schema use)
    while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
