"""Locate the app named on the command line.

``perch run`` and ``perch routes`` take a ``"module:attribute"`` string.
The attribute may hold any of::

    app = App()                       # an App, used as is
    routes = [Route(...), Route(...)] # a route list, wrapped in a new App
    def build(): return App(...)      # a zero-argument factory of either
"""

import importlib
from collections.abc import Iterable

from perch.app import App
from perch.errors import ConfigurationError
from perch.routing.route import Route


def resolve_app(target: str) -> App:
    """Import *target* and turn what it names into an ``App``.

    The attribute defaults to ``app`` when omitted (``"service"`` means
    ``"service:app"``). A route list is wrapped in an unfrozen ``App`` so
    CLI flags can still replace its config.

    Raises:
        ConfigurationError: The module cannot be imported, the attribute
            is missing, or it names something that is not an app, a
            factory, or a list of ``Route`` records.
    """
    module_name, _, attr = target.partition(":")
    attr = attr or "app"
    if not module_name:
        msg = f"Expected 'module:attribute', got {target!r}"
        raise ConfigurationError(msg)

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import {module_name!r}: {exc}"
        raise ConfigurationError(msg) from exc

    try:
        obj = getattr(module, attr)
    except AttributeError as exc:
        msg = f"Module {module_name!r} has no attribute {attr!r}"
        raise ConfigurationError(msg) from exc

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"App factory {target!r} raised: {exc}"
            raise ConfigurationError(msg) from exc

    return _coerce(obj, target)


def _coerce(obj: object, target: str) -> App:
    if isinstance(obj, App):
        return obj
    if isinstance(obj, Route):
        return App(routes=[obj])
    if isinstance(obj, Iterable) and not isinstance(obj, (str, bytes)):
        routes = list(obj)
        if all(isinstance(route, Route) for route in routes):
            return App(routes=routes)
    msg = (
        f"{target!r} resolved to {type(obj).__name__}; expected a perch App, "
        "a list of Route records, or a factory returning one"
    )
    raise ConfigurationError(msg)
