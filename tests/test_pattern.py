"""Tests for wayfinder.routing.pattern — segment parsing and regex compilation."""

import pytest

from wayfinder.errors import ConfigurationError, InvalidPatternSegment
from wayfinder.routing.pattern import (
    SegmentKind,
    compile_pattern,
    normalize_path,
    parse_pattern,
)


class TestNormalizePath:
    def test_strips_slashes(self) -> None:
        assert normalize_path("/articles/4/") == "articles/4"

    def test_strips_whitespace(self) -> None:
        assert normalize_path("  /login  ") == "login"

    def test_drops_query_string(self) -> None:
        assert normalize_path("articles/4?format=json&x=1") == "articles/4"

    def test_drops_fragment(self) -> None:
        assert normalize_path("/articles/4#comments") == "articles/4"

    def test_root_is_empty(self) -> None:
        assert normalize_path("/") == ""
        assert normalize_path("") == ""
        assert normalize_path("?page=2") == ""

    def test_interior_slashes_kept(self) -> None:
        assert normalize_path("/a/b/c/") == "a/b/c"


class TestParsePattern:
    def test_empty(self) -> None:
        assert parse_pattern("") == []
        assert parse_pattern("/") == []

    def test_literal(self) -> None:
        segments = parse_pattern("api/v2/users")
        assert [s.kind for s in segments] == [SegmentKind.LITERAL] * 3
        assert [s.value for s in segments] == ["api", "v2", "users"]

    def test_variable(self) -> None:
        segments = parse_pattern("articles/:article_id")
        assert segments[1].kind is SegmentKind.VARIABLE
        assert segments[1].name == "article_id"
        assert segments[1].captures is True

    def test_anonymous_variable(self) -> None:
        segments = parse_pattern("content/:")
        assert segments[1].kind is SegmentKind.ANONYMOUS
        assert segments[1].captures is False

    def test_splat(self) -> None:
        segments = parse_pattern("files/*")
        assert segments[1].kind is SegmentKind.SPLAT
        assert segments[1].captures is False

    def test_named_splat(self) -> None:
        segments = parse_pattern("content/*category")
        assert segments[1].kind is SegmentKind.NAMED_SPLAT
        assert segments[1].name == "category"

    def test_escaped_splat(self) -> None:
        segments = parse_pattern("content/\\*raw")
        assert segments[1].kind is SegmentKind.LITERAL
        assert segments[1].value == "*raw"

    def test_escaped_colon(self) -> None:
        segments = parse_pattern("tags/\\:name")
        assert segments[1].kind is SegmentKind.LITERAL
        assert segments[1].value == ":name"

    def test_query_string_ignored(self) -> None:
        segments = parse_pattern("/search?q=:term")
        assert [s.value for s in segments] == ["search"]

    def test_empty_interior_segment_rejected(self) -> None:
        with pytest.raises(InvalidPatternSegment) as exc_info:
            parse_pattern("articles//edit")
        assert exc_info.value.pattern == "articles//edit"
        assert "articles//edit" in str(exc_info.value)

    def test_invalid_segment_is_configuration_error(self) -> None:
        assert issubclass(InvalidPatternSegment, ConfigurationError)


class TestCompilePattern:
    def test_empty_pattern_matches_only_root(self) -> None:
        compiled = compile_pattern("")
        assert compiled.match("") == {}
        assert compiled.match("anything") is None

    def test_literal(self) -> None:
        compiled = compile_pattern("login")
        assert compiled.variables == ()
        assert compiled.match("login") == {}
        assert compiled.match("logout") is None
        assert compiled.match("login/extra") is None

    def test_literal_escapes_regex_characters(self) -> None:
        compiled = compile_pattern("feeds/rss.xml")
        assert compiled.match("feeds/rss.xml") == {}
        assert compiled.match("feeds/rssXxml") is None

    def test_literal_with_plus_and_parens(self) -> None:
        compiled = compile_pattern("c++/(beta)")
        assert compiled.match("c++/(beta)") == {}

    def test_named_variable(self) -> None:
        compiled = compile_pattern("articles/:article_id")
        assert compiled.variables == ("article_id",)
        assert compiled.match("articles/4") == {"article_id": "4"}
        assert compiled.match("articles/4/crap") is None

    def test_values_are_strings(self) -> None:
        compiled = compile_pattern("articles/:article_id")
        captured = compiled.match("articles/42")
        assert captured == {"article_id": "42"}
        assert isinstance(captured["article_id"], str)

    def test_multiple_variables_in_order(self) -> None:
        compiled = compile_pattern("test/:seg1/path/:seg2")
        assert compiled.variables == ("seg1", "seg2")
        assert compiled.match("test/foo/path/bar") == {"seg1": "foo", "seg2": "bar"}

    def test_anonymous_variable_not_captured(self) -> None:
        compiled = compile_pattern("content/:/edit")
        assert compiled.variables == ()
        assert compiled.match("content/anything/edit") == {}

    def test_unnamed_splat(self) -> None:
        compiled = compile_pattern("files/*")
        assert compiled.match("files/a/b/c") == {}

    def test_named_splat_spans_segments(self) -> None:
        compiled = compile_pattern("content/*category/:article")
        assert compiled.match("content/cat-1/cat-2/article-1") == {
            "category": "cat-1/cat-2",
            "article": "article-1",
        }

    def test_escaped_splat_is_literal(self) -> None:
        compiled = compile_pattern("content/:/\\*")
        assert compiled.match("content/article-1/*") == {}
        assert compiled.match("content/article-1/other") is None

    def test_escape_only_applies_to_leading_character(self) -> None:
        compiled = compile_pattern("\\*stars*")
        assert compiled.match("*stars*") == {}
        assert compiled.match("*starsXX") is None

    def test_escaped_colon_is_literal(self) -> None:
        compiled = compile_pattern("tags/\\:all")
        assert compiled.variables == ()
        assert compiled.match("tags/:all") == {}
        assert compiled.match("tags/anything") is None

    def test_rule_restricts_variable(self) -> None:
        compiled = compile_pattern("requests/:request_id", {"request_id": r"\d+"})
        assert compiled.match("requests/12") == {"request_id": "12"}
        assert compiled.match("requests/abc") is None

    def test_rule_with_own_group_keeps_positions(self) -> None:
        compiled = compile_pattern(
            "user/:name/:id",
            {"name": r"(\w+)", "id": r"(\d+)"},
        )
        assert compiled.match("user/ada/7") == {"name": "ada", "id": "7"}

    def test_rule_with_alternation(self) -> None:
        compiled = compile_pattern("export/:format", {"format": "json|csv"})
        assert compiled.match("export/csv") == {"format": "csv"}
        assert compiled.match("export/xml") is None

    def test_rule_for_unknown_variable_ignored(self) -> None:
        compiled = compile_pattern("articles/:id", {"other": r"\d+"})
        assert compiled.match("articles/abc") == {"id": "abc"}

    def test_invalid_rule_rejected(self) -> None:
        with pytest.raises(InvalidPatternSegment) as exc_info:
            compile_pattern("articles/:id", {"id": "(unclosed"})
        assert exc_info.value.segment == ":id"

    def test_rules_conflicting_in_combined_pattern(self) -> None:
        rules = {"a": r"(?P<n>\d+)", "b": r"(?P<n>\d+)"}
        with pytest.raises(InvalidPatternSegment, match="redefinition") as exc_info:
            compile_pattern(":a/:b", rules)
        assert exc_info.value.pattern == ":a/:b"

    def test_pure(self) -> None:
        first = compile_pattern("a/:b/*c", {"b": r"\d+"})
        second = compile_pattern("a/:b/*c", {"b": r"\d+"})
        assert first.regex.pattern == second.regex.pattern
        assert first.variables == second.variables
        assert first.groups == second.groups
