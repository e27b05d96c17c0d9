"""Wayfinder CLI — route table inspection.

Entry point registered as ``wayfinder`` in ``pyproject.toml``::

    [project.scripts]
    wayfinder = "wayfinder.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wayfinder`` command."""
    parser = argparse.ArgumentParser(
        prog="wayfinder",
        description="wayfinder — inspect and exercise path routing tables.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wayfinder routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "target",
        help="Import string (e.g. myapp.routing:router)",
    )
    routes_parser.add_argument(
        "--show-handlers",
        action="store_true",
        help="Include the handler registered for each route",
    )

    # -- wayfinder resolve ------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a path against a router")
    resolve_parser.add_argument(
        "target",
        help="Import string (e.g. myapp.routing:router)",
    )
    resolve_parser.add_argument("path", help="Request path, query string allowed")
    resolve_parser.add_argument(
        "--method",
        default=None,
        help="HTTP method (defaults to the router's default method)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from wayfinder.cli._routes import run_routes

        run_routes(args)
    elif args.command == "resolve":
        from wayfinder.cli._match import run_resolve

        run_resolve(args)
