"""Deprecated REST convenience layer.

Wraps a ``Router`` and appends a method-derived suffix to the resolved
handler name, so ``"Article"`` becomes ``"ArticleGet"`` or
``"ArticleCreate"``. Prefer registering one handler per method on the
plain ``Router`` instead.
"""

import warnings
from collections.abc import Mapping
from urllib.parse import parse_qs

from wayfinder.errors import InvalidMethod
from wayfinder.routing.route import ResolvedRoute
from wayfinder.routing.router import Router

DEFAULT_SUFFIXES: dict[str, str] = {
    "GET": "Get",
    "POST": "Create",
    "PUT": "Update",
    "PATCH": "Update",
    "DELETE": "Delete",
    "HEAD": "Head",
    "OPTIONS": "Options",
}

# Query parameter that may override the method of a POST request.
METHOD_OVERRIDE_PARAM = "_method"


class RestRouter:
    """Suffix-appending wrapper around a ``Router``.

    Usage::

        rest = RestRouter(router, method_in_post_request=True)
        rest.parse_route("articles/4?_method=PUT", "POST").handler
        # "ArticleUpdate"
    """

    def __init__(
        self,
        router: Router,
        *,
        suffix_map: Mapping[str, str] | None = None,
        method_in_post_request: bool = False,
    ) -> None:
        warnings.warn(
            "RestRouter is deprecated; register one handler per method on Router instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        self.router = router
        self.method_in_post_request = method_in_post_request
        self._suffixes = dict(DEFAULT_SUFFIXES)
        for method, suffix in (suffix_map or {}).items():
            self.set_http_method_suffix(method, suffix)

    @property
    def suffix_map(self) -> dict[str, str]:
        return dict(self._suffixes)

    def set_http_method_suffix(self, method: str, suffix: str) -> "RestRouter":
        """Set the handler suffix used for *method*. Returns the wrapper."""
        self._suffixes[method.upper()] = str(suffix)
        return self

    def effective_method(self, route: str, method: str) -> str:
        """Return the method a request is handled as.

        A POST request may name another mapped method through the
        ``_method`` query parameter when ``method_in_post_request`` is on.
        """
        method = method.upper()
        if method not in self._suffixes:
            msg = f"Unable to support the HTTP method `{method}`."
            raise InvalidMethod(method, msg)

        if self.method_in_post_request and method == "POST":
            query = route.partition("?")[2].partition("#")[0]
            override = parse_qs(query).get(METHOD_OVERRIDE_PARAM, [""])[0].upper()
            if override in self._suffixes:
                return override
        return method

    def parse_route(self, route: str, method: str = "GET") -> ResolvedRoute:
        """Resolve *route* and append the suffix of the effective method."""
        effective = self.effective_method(route, method)
        resolved = self.router.parse_route(route, effective)
        suffix = self._suffixes[effective]
        handler = f"{resolved.handler}{suffix[:1].upper()}{suffix[1:]}"
        return ResolvedRoute(handler=handler, variables=resolved.variables)
