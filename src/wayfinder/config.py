"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from wayfinder.errors import ConfigurationError

# Every method bucket a default table tracks, in listing order.
HTTP_METHODS: tuple[str, ...] = (
    "GET",
    "PUT",
    "POST",
    "DELETE",
    "HEAD",
    "OPTIONS",
    "TRACE",
    "PATCH",
)


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(methods=("GET", "POST"))
    """

    methods: tuple[str, ...] = HTTP_METHODS
    default_method: str = "GET"

    def __post_init__(self) -> None:
        methods = tuple(dict.fromkeys(m.upper() for m in self.methods))
        if not methods:
            msg = "RouterConfig.methods must name at least one HTTP method."
            raise ConfigurationError(msg)
        default = self.default_method.upper()
        if default not in methods:
            msg = f"Default method {default!r} is not one of {', '.join(methods)}."
            raise ConfigurationError(msg)
        object.__setattr__(self, "methods", methods)
        object.__setattr__(self, "default_method", default)
