"""``perch routes`` — list routes in the order they are tried."""

import argparse
import sys

from perch.cli._resolve import resolve_app
from perch.errors import ConfigurationError
from perch.routing.route import WILDCARD, Route


def format_routes(routes: tuple[Route, ...]) -> str:
    """Render routes as a PATTERN / METHOD / HANDLER table.

    One row per declared handler; the wildcard handler is listed first
    because it runs first.
    """
    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods = sorted(route.handlers, key=lambda m: (m != WILDCARD, m))
        for method in methods:
            rows.append((route.pattern.pattern, method, route.handlers[method].name))

    max_pattern = max([len(r[0]) for r in rows] + [len("PATTERN")])
    max_method = max([len(r[1]) for r in rows] + [len("METHOD")])

    fmt = f"{{:<{max_pattern}}}  {{:<{max_method}}}  {{}}"
    lines = [fmt.format("PATTERN", "METHOD", "HANDLER")]
    sep_len = max_pattern + max_method + 4 + max((len(r[2]) for r in rows), default=7)
    lines.append("-" * min(sep_len, 80))
    lines.extend(fmt.format(*row) for row in rows)
    return "\n".join(lines)


def run_routes(args: argparse.Namespace) -> None:
    """Print the route table for ``args.app``."""
    try:
        app = resolve_app(args.app)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not app.routes:
        print("No routes registered.")
        return

    print(format_routes(app.routes))
