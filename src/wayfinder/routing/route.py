"""Route and ResolvedRoute frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from wayfinder.routing.pattern import CompiledPattern, compile_pattern


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    The pattern is compiled once, at construction. ``handler`` is stored
    and handed back on resolution; the router never inspects or calls it.
    """

    method: str
    pattern: str
    handler: Any
    rules: Mapping[str, str] = field(default_factory=dict)
    defaults: Mapping[str, str] = field(default_factory=dict)
    compiled: CompiledPattern | None = field(default=None, repr=False, compare=False)
    _matcher: CompiledPattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))
        matcher = self.compiled
        if matcher is None:
            matcher = compile_pattern(self.pattern, self.rules)
            object.__setattr__(self, "compiled", matcher)
        object.__setattr__(self, "_matcher", matcher)

    @property
    def variables(self) -> tuple[str, ...]:
        """Names captured by the pattern, in capture order."""
        return self._matcher.variables

    def match(self, path: str) -> dict[str, str] | None:
        """Match a normalized path. Returns captured values or None."""
        return self._matcher.match(path)


@dataclass(frozen=True, slots=True)
class ResolvedRoute:
    """Result of a successful resolution."""

    handler: Any
    variables: dict[str, str]
