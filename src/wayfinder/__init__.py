"""Wayfinder — a path router that maps a request path and HTTP method to a handler.

Patterns mix literal segments, named variables with optional validation
rules, and wildcard splats::

    from wayfinder import Router

    router = Router()
    router.get("articles/:article_id", "ArticleController", rules={"article_id": r"\\d+"})
    router.get("content/*category/:article", "ArticleController")

    resolved = router.parse_route("content/news/world/article-1")
    resolved.handler    # "ArticleController"
    resolved.variables  # {"category": "news/world", "article": "article-1"}

Templates (``pip install wayfinder[templates]``)::

    from wayfinder.templating import TemplateRenderer
    renderer = TemplateRenderer()
    renderer.add_folder("templates")
    html = renderer.render("page.html", {"title": "Home"})
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "HTTPError",
    "InvalidMethod",
    "InvalidPatternSegment",
    "MapDefinitionError",
    "MethodNotAllowed",
    "ResolvedRoute",
    "RestRouter",
    "Route",
    "RouteNotFound",
    "Router",
    "RouterConfig",
    "WayfinderError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wayfinder`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from wayfinder.routing.router import Router

        return Router

    if name in ("Route", "ResolvedRoute"):
        from wayfinder.routing import route as _route

        return getattr(_route, name)

    if name == "RestRouter":
        from wayfinder.routing.rest import RestRouter

        return RestRouter

    if name == "RouterConfig":
        from wayfinder.config import RouterConfig

        return RouterConfig

    if name in (
        "WayfinderError",
        "ConfigurationError",
        "HTTPError",
        "InvalidMethod",
        "InvalidPatternSegment",
        "MapDefinitionError",
        "MethodNotAllowed",
        "RouteNotFound",
    ):
        from wayfinder import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
