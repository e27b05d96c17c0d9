"""Template renderer wrapping kida.

Folders are grouped by namespace. The main namespace holds plain template
names (``"page.html"``); an aliased folder is addressed with an ``@alias/``
prefix (``"@mail/welcome.html"``). One kida Environment is built per
namespace on first render and rebuilt when a folder is added to it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from wayfinder.templating.errors import TemplateFolderError, TemplatesNotInstalledError

if TYPE_CHECKING:
    from kida import Environment

logger = logging.getLogger("wayfinder.templating")

MAIN_NAMESPACE: str | None = None


class TemplateRenderer:
    """Render kida templates with shared context data.

    Args:
        autoescape: HTML-escape rendered values (default on).
    """

    def __init__(self, *, autoescape: bool = True) -> None:
        self.autoescape = autoescape
        self._folders: dict[str | None, list[Path]] = {MAIN_NAMESPACE: []}
        self._environments: dict[str | None, Environment] = {}
        self._data: dict[str, Any] = {}

    # -- Folders ----------------------------------------------------------

    def add_folder(self, directory: str | Path, alias: str | None = None) -> TemplateRenderer:
        """Add a template folder, optionally under an alias."""
        path = Path(directory)
        if not path.is_dir():
            msg = f"Template folder {str(path)!r} does not exist."
            raise TemplateFolderError(msg)

        self._folders.setdefault(alias, []).append(path)
        self._environments.pop(alias, None)
        logger.debug("Added template folder %s (alias=%s)", path, alias)
        return self

    def path_exists(self, path: str) -> bool:
        """Check whether an alias, folder, or template exists.

        ``"@mail"`` checks the alias, ``"@mail/welcome.html"`` and
        ``"page.html"`` check for the file in the namespace's folders.
        """
        namespace, name = _split_name(path)
        folders = self._folders.get(namespace)
        if not folders:
            return False
        if not name:
            return True
        return any((folder / name).exists() for folder in folders)

    # -- Shared data ------------------------------------------------------

    @property
    def data(self) -> dict[str, Any]:
        return dict(self._data)

    def set(self, key: str, value: Any) -> TemplateRenderer:
        """Set a single shared context value."""
        self._data[key] = value
        return self

    def set_data(self, data: Mapping[str, Any]) -> TemplateRenderer:
        """Merge *data* into the shared context."""
        self._data.update(data)
        return self

    def clear_data(self) -> TemplateRenderer:
        """Drop all shared context."""
        self._data.clear()
        return self

    # -- Rendering --------------------------------------------------------

    def render(self, template: str, data: Mapping[str, Any] | None = None) -> str:
        """Render a template; *data* overrides the shared context."""
        namespace, name = _split_name(template)
        env = self._environment(namespace)
        context = {**self._data, **(data or {})}
        return env.get_template(name).render(context)

    def render_string(self, source: str, data: Mapping[str, Any] | None = None) -> str:
        """Render inline template source without any folder lookup."""
        env = _create_environment([], autoescape=self.autoescape)
        context = {**self._data, **(data or {})}
        return env.from_string(source).render(context)

    def _environment(self, namespace: str | None) -> Environment:
        env = self._environments.get(namespace)
        if env is not None:
            return env

        folders = self._folders.get(namespace)
        if not folders:
            label = "main namespace" if namespace is None else f"alias {namespace!r}"
            msg = f"No template folders registered for the {label}."
            raise TemplateFolderError(msg)

        env = _create_environment(folders, autoescape=self.autoescape)
        self._environments[namespace] = env
        return env


def _split_name(path: str) -> tuple[str | None, str]:
    """Split ``"@alias/name"`` into ``("alias", "name")``."""
    if path.startswith("@"):
        alias, _, name = path[1:].partition("/")
        return alias, name
    return MAIN_NAMESPACE, path


def _create_environment(folders: list[Path], *, autoescape: bool) -> Environment:
    """Create a kida Environment, raising a clear error if kida is missing."""
    try:
        from kida import ChoiceLoader, Environment, FileSystemLoader
    except ImportError:
        msg = (
            "wayfinder.templating requires 'kida' for template rendering. "
            "Install with: pip install wayfinder[templates]"
        )
        raise TemplatesNotInstalledError(msg) from None

    if not folders:
        return Environment(autoescape=autoescape)

    loader = ChoiceLoader([FileSystemLoader(str(folder)) for folder in folders])
    return Environment(loader=loader, autoescape=autoescape)
