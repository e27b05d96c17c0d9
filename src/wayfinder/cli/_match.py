"""``wayfinder resolve`` — resolve a single path against a router."""

import argparse
import sys

from wayfinder.cli._resolve import load_router
from wayfinder.cli._routes import describe_handler
from wayfinder.errors import HTTPError, InvalidMethod


def run_resolve(args: argparse.Namespace) -> None:
    """Print the handler and variables *args.path* resolves to.

    Resolution errors are printed to stderr and exit with status 1.
    """
    router = load_router(args.target)

    try:
        resolved = router.parse_route(args.path, args.method)
    except (HTTPError, InvalidMethod) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"handler: {describe_handler(resolved.handler)}")
    for name, value in resolved.variables.items():
        print(f"  {name} = {value}")
