"""Templating layer error hierarchy."""

from wayfinder.errors import ConfigurationError, WayfinderError


class TemplatingError(WayfinderError):
    """Base for all wayfinder.templating errors."""


class TemplatesNotInstalledError(TemplatingError):
    """Raised when kida is not installed."""


class TemplateFolderError(TemplatingError, ConfigurationError):
    """A template folder does not exist or a namespace has no folders."""
