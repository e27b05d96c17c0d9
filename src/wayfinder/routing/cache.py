"""Route table persistence.

Dumps a ``Router`` to JSON and rebuilds it later, so a compiled table can
be cached across process restarts. Plain-data handlers are stored as is.
Callable handlers are stored by import path and imported again on load::

    {"$callable": "myapp.views:show_article"}

Lambdas, closures, methods bound to an instance and other callables
without an import path cannot be stored; leave them out and re-attach
them after loading.
"""

import importlib
import inspect
import json
from pathlib import Path
from typing import Any

from wayfinder.config import RouterConfig
from wayfinder.errors import ConfigurationError
from wayfinder.routing.route import Route
from wayfinder.routing.router import Router

FORMAT_VERSION = 1
CALLABLE_KEY = "$callable"

_SCALAR_TYPES = (str, int, float, bool, type(None))


def encode_handler(handler: Any) -> Any:
    """Return the JSON form of a handler.

    Lists and dicts are encoded item by item, so they may hold importable
    callables as well as plain data.
    """
    if isinstance(handler, _SCALAR_TYPES):
        return handler
    if isinstance(handler, list):
        return [encode_handler(item) for item in handler]
    if isinstance(handler, dict):
        encoded: dict[str, Any] = {}
        for key, value in handler.items():
            if not isinstance(key, str):
                msg = f"Handler mapping key {key!r} is not a string and cannot be persisted."
                raise ConfigurationError(msg)
            encoded[key] = encode_handler(value)
        return encoded
    if inspect.ismethod(handler) and not isinstance(handler.__self__, type):
        msg = f"Bound method {handler!r} is tied to an instance and cannot be persisted."
        raise ConfigurationError(msg)
    if callable(handler):
        module = getattr(handler, "__module__", None)
        qualname = getattr(handler, "__qualname__", None)
        if not module or not qualname or "<" in qualname:
            msg = f"Handler {handler!r} has no import path and cannot be persisted."
            raise ConfigurationError(msg)
        return {CALLABLE_KEY: f"{module}:{qualname}"}
    msg = f"Handler of type {type(handler).__name__} cannot be persisted."
    raise ConfigurationError(msg)


def decode_handler(value: Any) -> Any:
    """Reverse ``encode_handler``, importing callables by path."""
    if isinstance(value, list):
        return [decode_handler(item) for item in value]
    if isinstance(value, dict):
        if set(value) == {CALLABLE_KEY}:
            return import_object(value[CALLABLE_KEY])
        return {key: decode_handler(item) for key, item in value.items()}
    return value


def import_object(import_string: str) -> Any:
    """Import ``"module:qualified.name"`` and return the object.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute path does not exist.
    """
    module_path, _, attr_path = import_string.partition(":")
    obj: Any = importlib.import_module(module_path)
    for attr in attr_path.split(".") if attr_path else ():
        obj = getattr(obj, attr)
    return obj


def dump_routes(router: Router) -> str:
    """Serialize every bucket of *router* to a JSON string."""
    buckets: dict[str, list[dict[str, Any]]] = {}
    for method in router.methods:
        buckets[method] = [
            {
                "method": route.method,
                "pattern": route.pattern,
                "handler": encode_handler(route.handler),
                "rules": dict(route.rules),
                "defaults": dict(route.defaults),
            }
            for route in router.routes_for(method)
        ]
    return json.dumps({"version": FORMAT_VERSION, "routes": buckets}, indent=2)


def load_routes(text: str, *, config: RouterConfig | None = None) -> Router:
    """Rebuild a ``Router`` from ``dump_routes`` output.

    Bucket order and insertion order are preserved, so first-match-wins
    resolution behaves exactly as it did before the dump.
    """
    data = json.loads(text)
    if data.get("version") != FORMAT_VERSION:
        msg = f"Unsupported route cache version: {data.get('version')!r}"
        raise ConfigurationError(msg)

    router = Router(config=config)
    for method, entries in data["routes"].items():
        for entry in entries:
            router.add_route(
                Route(
                    method=entry.get("method", method),
                    pattern=entry["pattern"],
                    handler=decode_handler(entry["handler"]),
                    rules=entry.get("rules", {}),
                    defaults=entry.get("defaults", {}),
                )
            )
    return router


def save_routes(router: Router, path: str | Path) -> None:
    """Write ``dump_routes`` output to *path*."""
    Path(path).write_text(dump_routes(router), encoding="utf-8")


def read_routes(path: str | Path, *, config: RouterConfig | None = None) -> Router:
    """Load a router previously written with ``save_routes``."""
    return load_routes(Path(path).read_text(encoding="utf-8"), config=config)
