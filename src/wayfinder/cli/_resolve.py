"""Locate the route table a CLI command should inspect.

Both ``wayfinder routes`` and ``wayfinder resolve`` take a TARGET naming
where the table lives, e.g. ``myapp.urls:router``.
"""

import importlib
import sys

from wayfinder.routing.router import Router

# Attribute looked up when TARGET names only a module.
DEFAULT_ATTRIBUTE = "router"


def resolve_router(target: str) -> Router:
    """Import *target* and return the route table it names.

    ``"myapp.urls"`` means ``myapp.urls.router``. The attribute may also
    be a zero-argument function that builds the table, such as
    ``"myapp.urls:build_routes"``; it is called once.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the module has no such attribute.
        TypeError: If the attribute is neither a ``Router`` nor a function
            returning one, or that function fails.
    """
    module_path, _, attr_name = target.partition(":")
    table = getattr(importlib.import_module(module_path), attr_name or DEFAULT_ATTRIBUTE)

    if callable(table) and not isinstance(table, Router):
        try:
            table = table()
        except Exception as exc:
            msg = f"Building the route table from {target!r} failed: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(table, Router):
        msg = f"{target!r} is a {type(table).__name__}, not a wayfinder.Router route table"
        raise TypeError(msg)
    return table


def load_router(target: str) -> Router:
    """Like ``resolve_router``, but print the failure and exit with status 1."""
    try:
        return resolve_router(target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
