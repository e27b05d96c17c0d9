"""``wayfinder routes`` — list registered routes.

Resolves an import string to a Router and prints every registered route
with method, pattern, and (on request) handler.
"""

import argparse
from typing import Any

from wayfinder.cli._resolve import load_router
from wayfinder.routing.route import Route

# Shown in the HANDLER column unless --show-handlers is given.
HIDDEN_HANDLER = "-"


def describe_handler(handler: Any) -> str:
    """Render a handler for display without assuming its type."""
    if isinstance(handler, str):
        return handler
    if callable(handler):
        module = getattr(handler, "__module__", None)
        name = getattr(handler, "__qualname__", None) or getattr(handler, "__name__", None)
        if name:
            return f"{module}.{name}" if module else name
    return repr(handler)


def format_routes(routes: list[Route], *, show_handlers: bool = False) -> str:
    """Format routes as a METHOD / PATTERN / HANDLER table."""
    rows: list[tuple[str, str, str]] = [
        (
            route.method,
            route.pattern,
            describe_handler(route.handler) if show_handlers else HIDDEN_HANDLER,
        )
        for route in routes
    ]

    max_method = max(max((len(r[0]) for r in rows), default=0), 6)  # "METHOD" header
    max_pattern = max(max((len(r[1]) for r in rows), default=0), 7)  # "PATTERN" header

    fmt = f"{{:<{max_method}}}  {{:<{max_pattern}}}  {{}}"
    lines = [fmt.format("METHOD", "PATTERN", "HANDLER")]
    sep_len = max_method + max_pattern + 4 + max((len(r[2]) for r in rows), default=0)
    lines.append("-" * min(sep_len, 80))
    lines.extend(fmt.format(*row) for row in rows)
    return "\n".join(lines)


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a wayfinder Router.

    An empty table is reported as such and is not an error.
    """
    router = load_router(args.target)

    routes = router.get_routes()
    if not routes:
        print("The router has no routes.")
        return

    print(format_routes(routes, show_handlers=args.show_handlers))
