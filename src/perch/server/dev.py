"""Serve a perch app with the pounce ASGI server.

Pounce's ``run()`` takes an import string (e.g. ``"myapp:app"``), but
perch hands over a live app object, so ``pounce.Server`` is used
directly with the ASGI callable.
"""

from __future__ import annotations

from typing import Any

from perch.errors import ConfigurationError


def run_server(
    app: Any,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a single-worker pounce server for *app*.

    Args:
        app: ASGI callable (a perch ``App`` or ``create_server()`` result).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes (development only).
        app_path: Optional ``"module:attribute"`` import string so pounce
            can reimport the app on reload.

    Raises:
        ConfigurationError: If pounce is not installed.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install perch[server]"
        raise ConfigurationError(msg) from exc

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    server = Server(config, app, app_path=app_path)
    server.run()
