"""Route pattern parsing and compilation.

Patterns are translated one segment at a time, so an escape only ever
applies to the leading character of its own segment::

    "articles/:article_id"        -> ^articles/([^/]*)$
    "content/*category/:article"  -> ^content/(.*)/([^/]*)$
    "content/:/\\*"               -> ^content/[^/]*/\\*$
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from wayfinder.errors import InvalidPatternSegment

# Characters trimmed from both ends of patterns and request paths.
STRIP_CHARS = " \t\r\n/"

# Regex body for each segment kind that matches variable text.
SEGMENT_BODY = r"[^/]*"
SPLAT_BODY = r".*"


class SegmentKind(Enum):
    LITERAL = "literal"
    SPLAT = "splat"
    NAMED_SPLAT = "named_splat"
    ANONYMOUS = "anonymous"
    VARIABLE = "variable"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:  ``articles``   (kind=LITERAL, value="articles")
    Escaped:  ``\\*raw``      (kind=LITERAL, value="*raw")
    Variable: ``:id``        (kind=VARIABLE, name="id")
    Splat:    ``*path``      (kind=NAMED_SPLAT, name="path")
    """

    kind: SegmentKind
    value: str = ""
    name: str | None = None

    @property
    def captures(self) -> bool:
        return self.name is not None


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """Matchable form of a route pattern.

    ``groups[i]`` is the regex group that holds the value of
    ``variables[i]``.
    """

    regex: re.Pattern[str]
    variables: tuple[str, ...]
    groups: tuple[int, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Match a normalized path, returning captured values or None."""
        m = self.regex.match(path)
        if m is None:
            return None
        return {
            name: m.group(index) or ""
            for name, index in zip(self.variables, self.groups, strict=True)
        }


def normalize_path(path: str) -> str:
    """Drop the query string and fragment, then trim slashes and whitespace."""
    path = path.split("?", 1)[0].split("#", 1)[0]
    return path.strip(STRIP_CHARS)


def parse_segment(segment: str) -> PathSegment:
    """Classify a single pattern segment."""
    if segment == "*":
        return PathSegment(SegmentKind.SPLAT)
    if segment.startswith("*"):
        return PathSegment(SegmentKind.NAMED_SPLAT, name=segment[1:])
    if segment == ":":
        return PathSegment(SegmentKind.ANONYMOUS)
    if segment.startswith(":"):
        return PathSegment(SegmentKind.VARIABLE, name=segment[1:])
    if segment.startswith(("\\*", "\\:")):
        return PathSegment(SegmentKind.LITERAL, value=segment[1:])
    return PathSegment(SegmentKind.LITERAL, value=segment)


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        ""                      -> []
        "articles"              -> [PathSegment(LITERAL, "articles")]
        "articles/:article_id"  -> [..., PathSegment(VARIABLE, name="article_id")]
        "files/*path"           -> [..., PathSegment(NAMED_SPLAT, name="path")]

    Raises ``InvalidPatternSegment`` for an empty interior segment such as
    the one in ``"a//b"``.
    """
    normalized = normalize_path(pattern)
    if not normalized:
        return []

    segments: list[PathSegment] = []
    for part in normalized.split("/"):
        if not part:
            raise InvalidPatternSegment(pattern, part, "empty segment")
        segments.append(parse_segment(part))
    return segments


def compile_pattern(
    pattern: str,
    rules: Mapping[str, str] | None = None,
) -> CompiledPattern:
    """Compile a route pattern and its validation rules.

    ``rules`` maps a variable name to the regex its segment must match.
    The rule is wrapped in its own group, so it may contain groups of its
    own without disturbing which group holds each variable.
    """
    rules = rules or {}
    fragments: list[str] = []
    variables: list[str] = []
    groups: list[int] = []
    group_count = 0

    for seg in parse_pattern(pattern):
        match seg.kind:
            case SegmentKind.LITERAL:
                fragment = re.escape(seg.value)
            case SegmentKind.SPLAT:
                fragment = SPLAT_BODY
            case SegmentKind.ANONYMOUS:
                fragment = SEGMENT_BODY
            case SegmentKind.NAMED_SPLAT:
                fragment = f"({SPLAT_BODY})"
            case SegmentKind.VARIABLE:
                rule = rules.get(seg.name or "")
                fragment = f"({rule})" if rule is not None else f"({SEGMENT_BODY})"

        try:
            fragment_groups = re.compile(fragment).groups
        except re.error as exc:
            raise InvalidPatternSegment(pattern, f":{seg.name}", str(exc)) from exc

        if seg.captures:
            variables.append(seg.name or "")
            groups.append(group_count + 1)
        group_count += fragment_groups
        fragments.append(fragment)

    try:
        regex = re.compile("^" + "/".join(fragments) + "$")
    except re.error as exc:
        raise InvalidPatternSegment(pattern, pattern, str(exc)) from exc
    return CompiledPattern(regex=regex, variables=tuple(variables), groups=tuple(groups))
