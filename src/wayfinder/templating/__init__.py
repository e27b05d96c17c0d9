"""Template rendering backed by kida.

Requires the ``templates`` extra::

    pip install wayfinder[templates]

Usage::

    from wayfinder.templating import TemplateRenderer

    renderer = TemplateRenderer()
    renderer.add_folder("templates")
    renderer.add_folder("vendor/mail", alias="mail")
    renderer.render("page.html", {"title": "Home"})
    renderer.render("@mail/welcome.html", {"user": "ada"})
"""

from wayfinder.templating.errors import (
    TemplateFolderError,
    TemplatesNotInstalledError,
    TemplatingError,
)
from wayfinder.templating.renderer import TemplateRenderer

__all__ = [
    "TemplateFolderError",
    "TemplateRenderer",
    "TemplatesNotInstalledError",
    "TemplatingError",
]
