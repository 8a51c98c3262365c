"""Perch application class.

Mutable during setup (route registration, lifespan hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import re
import threading
from collections.abc import Callable, Iterable
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import invoke
from perch.config import AppConfig
from perch.errors import ConfigurationError
from perch.routing.route import Handler, RequestHandler, Route
from perch.routing.router import Router
from perch.schema import Schema
from perch.server.errors import ErrorMapper
from perch.server.handler import handle_request

logger = logging.getLogger("perch.server")


class App:
    """The perch application: an ASGI callable over an ordered route list.

    Routes can be passed up front, added as ``Route`` records, or declared
    with the ``route()`` decorator; all three append to the same list, in
    call order, and that order decides which route runs first::

        app = App(AppConfig.from_env())

        @app.route(r"^/", methods=["*"])
        async def authenticate(context, request, response):
            context.user = await lookup(request.headers.get("authorization"))

        @app.route(r"^/users/(?P<id>\\d+)$", params=TypeSchema(UserParams))
        def show_user(context, request, response):
            return {"id": context.params.id, "viewer": context.user}

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the router, even when several ASGI workers call
        ``__call__()`` concurrently on the first request.
    """

    __slots__ = (
        "_error_mapper",
        "_freeze_lock",
        "_frozen",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "_config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        routes: Iterable[Route] = (),
    ) -> None:
        self._config: AppConfig = config or AppConfig()
        self._router = Router(routes)
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._error_mapper = ErrorMapper(production=self._config.production)
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    @property
    def config(self) -> AppConfig:
        return self._config

    @config.setter
    def config(self, config: AppConfig) -> None:
        """Swap the configuration; only allowed before the app is frozen."""
        self._check_not_frozen()
        self._config = config
        self._error_mapper = ErrorMapper(production=config.production)

    # -- Route registration --

    def add_route(self, route: Route) -> Route:
        """Append a route after every route registered so far."""
        self._check_not_frozen()
        self._router.add(route)
        return route

    def route(
        self,
        pattern: str | re.Pattern[str],
        *,
        methods: Iterable[str] = ("GET",),
        body: Schema | None = None,
        params: Schema | None = None,
        query: Schema | None = None,
        response: Schema | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a handler via decorator.

        Each call appends one new ``Route``; the same schemas gate every
        listed method.

        Args:
            pattern: Regular expression tested against the path with
                ``re.search``. Use named groups for params.
            methods: HTTP methods, or ``"*"`` for a handler that runs
                ahead of the method-specific ones. Defaults to ``["GET"]``.
            body: Schema for the JSON request body.
            params: Schema for the pattern's named groups.
            query: Schema for the flattened query string.
            response: Schema the return value must already satisfy.
        """

        def decorator(func: Handler) -> Handler:
            request_handler = RequestHandler(
                func,
                body_schema=body,
                params_schema=params,
                query_schema=query,
                response_schema=response,
            )
            self.add_route(Route(pattern, dict.fromkeys(methods, request_handler)))
            return func

        return decorator

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes, in dispatch order."""
        return self._router.routes

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run once when the server starts (ASGI lifespan)."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run once when the server stops (ASGI lifespan)."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Server --

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        reload: bool = False,
        app_path: str | None = None,
    ) -> None:
        """Freeze the app and serve it with pounce.

        Args:
            host: Override ``config.host``.
            port: Override ``config.port``.
            reload: Restart on file changes (ignored in production).
            app_path: ``"module:attribute"`` string pounce reimports on reload.
        """
        from perch.log import configure_logging
        from perch.server.dev import run_server

        configure_logging(self.config.log_level)
        self._ensure_frozen()
        run_server(
            self,
            self.config.host if host is None else host,
            self.config.port if port is None else port,
            reload=reload and not self.config.production,
            app_path=app_path,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            config=self.config,
            error_mapper=self._error_mapper,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs registered hooks and signals completion back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        await invoke(hook)
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                logger.info(
                    "perch started with %d route(s)%s",
                    len(self._router),
                    " (production)" if self.config.production else "",
                )
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    for hook in self._shutdown_hooks:
                        await invoke(hook)
                except Exception as exc:
                    logger.exception("Shutdown hook failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                logger.info("perch stopped")
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._router.compile()
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and hooks before calling app.run()."
            )
            raise ConfigurationError(msg)


def create_server(routes: Iterable[Route], config: AppConfig | None = None) -> App:
    """Build a frozen ASGI application over a fixed route list.

    Suitable for handing straight to any ASGI server::

        app = create_server([
            Route(r"^/health$", {"GET": lambda **_: {"ok": True}}),
        ])
    """
    app = App(config, routes=routes)
    app._ensure_frozen()
    return app
