"""Configuration-driven route registration.

Reads raw route maps from a JSON file::

    [
        {"pattern": "login", "controller": "LoginController"},
        {"pattern": "articles/:id", "controller": "ArticleController",
         "method": "GET", "rules": {"id": "\\\\d+"}}
    ]

A top-level object with a ``"routes"`` list is accepted as well.
"""

import json
from pathlib import Path
from typing import Any

from wayfinder.errors import ConfigurationError, MapDefinitionError


def parse_maps(data: Any, source: str = "<data>") -> list[dict[str, Any]]:
    """Validate decoded JSON and return the list of raw route maps."""
    if isinstance(data, dict):
        data = data.get("routes")
    if not isinstance(data, list):
        msg = f"{source}: expected a list of route maps or an object with a 'routes' list."
        raise ConfigurationError(msg)

    maps: list[dict[str, Any]] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            msg = f"{source}: route map #{index} is {type(item).__name__}, not an object."
            raise MapDefinitionError(msg)
        maps.append(item)
    return maps


def load_maps(path: str | Path) -> list[dict[str, Any]]:
    """Read raw route maps from a JSON file.

    The result is meant for ``Router(maps)`` or ``Router.add_routes``,
    which enforce the required ``pattern`` and ``controller`` keys.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"{path}: invalid JSON ({exc})"
        raise ConfigurationError(msg) from exc
    return parse_maps(data, source=str(path))
