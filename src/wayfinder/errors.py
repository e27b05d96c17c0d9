"""Wayfinder exception hierarchy.

Shared across the pattern compiler, the route table, the REST wrapper and
the CLI so every module raises and catches the same types.
"""

from collections.abc import Iterable
from dataclasses import dataclass


class WayfinderError(Exception):
    """Base for all wayfinder-specific errors."""


class ConfigurationError(WayfinderError):
    """Raised when a route registration is invalid.

    Always raised while the table is being built, never during resolution.
    """


class InvalidPatternSegment(ConfigurationError):
    """A route pattern contains a segment that cannot be compiled."""

    def __init__(self, pattern: str, segment: str, reason: str = "") -> None:
        self.pattern = pattern
        self.segment = segment
        msg = f"Invalid segment {segment!r} in route pattern {pattern!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class MapDefinitionError(ConfigurationError):
    """A raw route map is missing its ``pattern`` or ``controller`` key."""


class InvalidMethod(WayfinderError, ValueError):
    """The HTTP method is not one of the methods the route table tracks."""

    def __init__(self, method: str, detail: str = "") -> None:
        self.method = method
        super().__init__(detail or f"{method!r} is not a valid HTTP method.")


@dataclass(frozen=True, slots=True)
class HTTPError(WayfinderError):
    """An error that maps directly to an HTTP status code.

    Raised by ``Router.parse_route``. The calling application decides how
    to turn it into a response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFound(HTTPError):  # noqa: N818 — conventional name in routers
    """404 — no pattern under any method matches the path."""

    def __init__(self, route: str, detail: str = "") -> None:
        super().__init__(
            status=404,
            detail=detail or f"Unable to handle request for route `{route}`.",
        )
        object.__setattr__(self, "route", route)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in routers
    """405 — the path matches, but only under other HTTP methods.

    ``allowed_methods`` is sorted and deduplicated and mirrored in the
    ``Allow`` header.
    """

    def __init__(
        self,
        allowed_methods: Iterable[str],
        route: str = "",
        method: str = "",
        detail: str = "",
    ) -> None:
        allowed = tuple(sorted({m.upper() for m in allowed_methods}))
        allow_value = ", ".join(allowed)
        default_detail = (
            f"Route `{route}` does not support `{method}` requests. "
            f"Allowed methods: {allow_value}"
        )
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
        object.__setattr__(self, "allowed_methods", allowed)
        object.__setattr__(self, "route", route)
        object.__setattr__(self, "method", method)
