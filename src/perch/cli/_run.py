"""``perch run`` — serve an app with pounce."""

import argparse
import dataclasses
import sys

from perch.cli._resolve import resolve_app
from perch.errors import ConfigurationError


def run_app(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override app config."""
    try:
        app = resolve_app(args.app)
        if args.production and not app.config.production:
            app.config = dataclasses.replace(app.config, production=True)
        app.run(args.host, args.port, reload=args.reload, app_path=args.app)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
