"""Route table with per-method buckets and first-match-wins resolution.

Routes are registered during setup, optionally frozen, and then consulted
read-only by ``parse_route``. Resolution holds no locks and keeps no state
between calls.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from wayfinder.config import RouterConfig
from wayfinder.errors import (
    ConfigurationError,
    InvalidMethod,
    MapDefinitionError,
    MethodNotAllowed,
    RouteNotFound,
)
from wayfinder.routing.pattern import normalize_path
from wayfinder.routing.route import ResolvedRoute, Route

logger = logging.getLogger("wayfinder.routing")


class Router:
    """Ordered route table keyed by HTTP method.

    Usage::

        router = Router()
        router.get("articles/:article_id", "ArticleController")
        router.post("articles", "ArticleController")
        router.freeze()
        resolved = router.parse_route("articles/4", "GET")
        resolved.variables  # {"article_id": "4"}

    Within a method bucket the first route whose pattern matches wins, so
    register mutually ambiguous patterns most specific first.
    """

    __slots__ = ("_config", "_frozen", "_routes")

    def __init__(
        self,
        maps: Iterable[Route | Mapping[str, Any]] | None = None,
        *,
        config: RouterConfig | None = None,
    ) -> None:
        self._config = config or RouterConfig()
        self._routes: dict[str, list[Route]] = {m: [] for m in self._config.methods}
        self._frozen = False
        if maps:
            self.add_routes(maps)

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def methods(self) -> tuple[str, ...]:
        """HTTP methods this table tracks."""
        return self._config.methods

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._frozen = True

    # -- Registration ------------------------------------------------------

    def add_route(self, route: Route) -> "Router":
        """Append a route to its method's bucket. Returns the router."""
        self._check_mutable()
        bucket = self._routes.get(route.method)
        if bucket is None:
            raise InvalidMethod(route.method)
        bucket.append(route)
        logger.debug("Registered %s %r -> %r", route.method, route.pattern, route.handler)
        return self

    def add_routes(self, items: Iterable[Route | Mapping[str, Any]]) -> "Router":
        """Register routes in order.

        Each item is a ``Route`` or a raw map with ``pattern`` and
        ``controller`` (or ``handler``) keys and optional ``method``,
        ``rules`` and ``defaults``.

        Raises ``MapDefinitionError`` if a raw map lacks a required key.
        """
        for item in items:
            route = item if isinstance(item, Route) else self._route_from_map(item)
            self.add_route(route)
        return self

    def _route_from_map(self, item: Mapping[str, Any]) -> Route:
        if "pattern" not in item:
            msg = "Route map must contain a pattern variable."
            raise MapDefinitionError(msg)
        if "controller" in item:
            handler = item["controller"]
        elif "handler" in item:
            handler = item["handler"]
        else:
            msg = "Route map must contain a controller variable."
            raise MapDefinitionError(msg)
        return Route(
            method=item.get("method") or self._config.default_method,
            pattern=item["pattern"],
            handler=handler,
            rules=item.get("rules") or {},
            defaults=item.get("defaults") or {},
        )

    def _add(
        self,
        method: str,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None,
        defaults: Mapping[str, str] | None,
    ) -> "Router":
        return self.add_route(
            Route(
                method=method,
                pattern=pattern,
                handler=handler,
                rules=rules or {},
                defaults=defaults or {},
            )
        )

    def get(
        self,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> "Router":
        """Add a GET route."""
        return self._add("GET", pattern, handler, rules, defaults)

    def post(
        self,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> "Router":
        """Add a POST route."""
        return self._add("POST", pattern, handler, rules, defaults)

    def put(
        self,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> "Router":
        """Add a PUT route."""
        return self._add("PUT", pattern, handler, rules, defaults)

    def delete(
        self,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> "Router":
        """Add a DELETE route."""
        return self._add("DELETE", pattern, handler, rules, defaults)

    def head(
        self,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> "Router":
        """Add a HEAD route."""
        return self._add("HEAD", pattern, handler, rules, defaults)

    def options(
        self,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> "Router":
        """Add an OPTIONS route."""
        return self._add("OPTIONS", pattern, handler, rules, defaults)

    def trace(
        self,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> "Router":
        """Add a TRACE route."""
        return self._add("TRACE", pattern, handler, rules, defaults)

    def patch(
        self,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> "Router":
        """Add a PATCH route."""
        return self._add("PATCH", pattern, handler, rules, defaults)

    def all(
        self,
        pattern: str,
        handler: Any,
        rules: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> "Router":
        """Add the same route under every tracked method.

        The pattern is compiled once and every copy shares the matcher.
        """
        first = Route(
            method=self._config.methods[0],
            pattern=pattern,
            handler=handler,
            rules=rules or {},
            defaults=defaults or {},
        )
        for method in self._config.methods:
            self.add_route(replace(first, method=method))
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            msg = "Cannot add routes to a frozen router. Build a new Router and swap it in."
            raise ConfigurationError(msg)

    # -- Introspection -----------------------------------------------------

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes, bucket by bucket in insertion order."""
        return [route for bucket in self._routes.values() for route in bucket]

    def get_routes(self) -> list[Route]:
        """Return all registered routes. Useful for debug listings."""
        return self.routes

    def routes_for(self, method: str) -> list[Route]:
        """Return a copy of one method's bucket."""
        return list(self._bucket(method))

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._routes.values())

    def _bucket(self, method: str) -> list[Route]:
        bucket = self._routes.get(method.upper())
        if bucket is None:
            raise InvalidMethod(method.upper())
        return bucket

    # -- Resolution --------------------------------------------------------

    def parse_route(self, route: str, method: str | None = None) -> ResolvedRoute:
        """Resolve a request path and method to a handler.

        Returns a ``ResolvedRoute`` on success.
        Raises ``InvalidMethod`` if *method* is not tracked.
        Raises ``MethodNotAllowed`` if the path matches under other methods only.
        Raises ``RouteNotFound`` if the path matches nothing at all.
        """
        method = (method or self._config.default_method).upper()
        bucket = self._bucket(method)
        path = normalize_path(route)

        for candidate in bucket:
            captured = candidate.match(path)
            if captured is None:
                continue
            variables = {**candidate.defaults, **captured}
            logger.debug("Matched %s %r -> %r", method, path, candidate.pattern)
            return ResolvedRoute(handler=candidate.handler, variables=variables)

        allowed = self._allowed_methods(path, exclude=method)
        if allowed:
            logger.debug("Method %s not allowed for %r (allowed: %s)", method, path, allowed)
            raise MethodNotAllowed(allowed, route=path, method=method)

        logger.debug("No route matches %s %r", method, path)
        raise RouteNotFound(path)

    def _allowed_methods(self, path: str, exclude: str) -> set[str]:
        """Collect the other methods with a route matching *path*."""
        allowed: set[str] = set()
        for other, bucket in self._routes.items():
            if other == exclude:
                continue
            if any(candidate.match(path) is not None for candidate in bucket):
                allowed.add(other)
        return allowed
