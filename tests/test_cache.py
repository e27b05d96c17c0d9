"""Tests for wayfinder.routing.cache — JSON persistence of route tables."""

import json
from pathlib import Path

import pytest

from wayfinder.errors import ConfigurationError
from wayfinder.routing.cache import (
    CALLABLE_KEY,
    decode_handler,
    dump_routes,
    encode_handler,
    import_object,
    load_routes,
    read_routes,
    save_routes,
)
from wayfinder.routing.router import Router


def show_article() -> str:
    return "article"


class ArticleViews:
    @staticmethod
    def edit() -> str:
        return "edit"

    @classmethod
    def listing(cls) -> str:
        return "listing"

    def show(self) -> str:
        return "show"


def _router() -> Router:
    r = Router()
    r.get("articles/:id", "ArticleController", rules={"id": r"\d+"}, defaults={"tab": "body"})
    r.get("articles/:slug", show_article)
    r.post("articles", {"controller": "ArticleController", "action": "create"})
    r.put("articles/:id/edit", ArticleViews.edit)
    return r


class TestHandlerEncoding:
    def test_plain_data_passthrough(self) -> None:
        for handler in ("Controller", 3, None, ["a", "b"], {"k": "v"}):
            assert encode_handler(handler) == handler

    def test_function_by_import_path(self) -> None:
        encoded = encode_handler(show_article)
        assert encoded == {CALLABLE_KEY: f"{__name__}:show_article"}
        assert decode_handler(encoded) is show_article

    def test_nested_qualname(self) -> None:
        encoded = encode_handler(ArticleViews.edit)
        assert encoded[CALLABLE_KEY].endswith(":ArticleViews.edit")
        assert decode_handler(encoded) is ArticleViews.edit

    def test_lambda_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="import path"):
            encode_handler(lambda: "nope")

    def test_closure_rejected(self) -> None:
        def local_view() -> str:
            return "local"

        with pytest.raises(ConfigurationError):
            encode_handler(local_view)

    def test_bound_method_rejected(self) -> None:
        r = Router()
        r.get("articles/:id", ArticleViews().show)
        with pytest.raises(ConfigurationError, match="Bound method"):
            dump_routes(r)

    def test_classmethod_by_import_path(self) -> None:
        encoded = encode_handler(ArticleViews.listing)
        assert encoded == {CALLABLE_KEY: f"{__name__}:ArticleViews.listing"}
        assert decode_handler(encoded) == ArticleViews.listing

    def test_callable_nested_in_mapping(self) -> None:
        handler = {"controller": show_article, "actions": ["show", show_article]}
        encoded = encode_handler(handler)
        assert encoded == {
            "controller": {CALLABLE_KEY: f"{__name__}:show_article"},
            "actions": ["show", {CALLABLE_KEY: f"{__name__}:show_article"}],
        }
        assert decode_handler(encoded) == handler

    def test_lambda_nested_in_list_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="import path"):
            encode_handler(["show", lambda: "nope"])

    def test_non_string_mapping_key_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="not a string"):
            encode_handler({1: "one"})

    def test_arbitrary_object_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="object"):
            encode_handler(object())

    def test_import_object(self) -> None:
        assert import_object("json:dumps") is json.dumps


class TestRoundTrip:
    def test_dump_is_json(self) -> None:
        data = json.loads(dump_routes(_router()))
        assert data["version"] == 1
        assert [e["pattern"] for e in data["routes"]["GET"]] == ["articles/:id", "articles/:slug"]
        assert data["routes"]["DELETE"] == []

    def test_resolution_survives_round_trip(self) -> None:
        original = _router()
        restored = load_routes(dump_routes(original))

        for path, method in [
            ("articles/4", "GET"),
            ("articles/hello", "GET"),
            ("articles", "POST"),
            ("articles/4/edit", "PUT"),
        ]:
            before = original.parse_route(path, method)
            after = restored.parse_route(path, method)
            assert after.handler == before.handler
            assert after.variables == before.variables

    def test_order_preserved(self) -> None:
        restored = load_routes(dump_routes(_router()))
        assert [r.pattern for r in restored.get_routes()] == [
            r.pattern for r in _router().get_routes()
        ]

    def test_unsupported_version(self) -> None:
        with pytest.raises(ConfigurationError, match="version"):
            load_routes(json.dumps({"version": 99, "routes": {}}))

    def test_file_helpers(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.cache.json"
        save_routes(_router(), path)
        restored = read_routes(path)
        assert restored.parse_route("articles/7").variables == {"id": "7", "tab": "body"}
