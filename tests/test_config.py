"""Tests for request config parsing (reqbag._config).

Validates the dict → RequestConfig conversion and YAML loading.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from reqbag import (
    ConfigParseError,
    RequestConfig,
    RequestContext,
    load_request_config,
    parse_request_config,
)
from reqbag.testing import RecordingFilter, basic_credentials

if TYPE_CHECKING:
    from pathlib import Path


class TestParseRequestConfig:
    """Tests for parse_request_config()."""

    def test_full(self) -> None:
        data = {
            "query": {"a": "2"},
            "body": {"b": "4"},
            "attributes": {"a": "1"},
            "cookies": {"session": "abc"},
            "files": {},
            "environ": {"HTTP_HOST": "example.org"},
            "content": "raw body",
        }
        config = parse_request_config(data)
        assert config.query == {"a": "2"}
        assert config.attributes == {"a": "1"}
        assert config.environ == {"HTTP_HOST": "example.org"}
        assert config.content == "raw body"

    def test_empty_dict(self) -> None:
        assert parse_request_config({}) == RequestConfig()

    def test_none_document(self) -> None:
        assert parse_request_config(None) == RequestConfig()

    def test_null_sections(self) -> None:
        config = parse_request_config({"query": None, "environ": None})
        assert config.query == {}
        assert config.environ == {}

    def test_environ_values_coerced(self) -> None:
        config = parse_request_config({"environ": {"CONTENT_LENGTH": 12, "PHP_AUTH_PW": None}})
        assert config.environ == {"CONTENT_LENGTH": "12", "PHP_AUTH_PW": ""}

    def test_parameter_values_kept(self) -> None:
        config = parse_request_config({"query": {"ids": [1, 2], "flag": None}})
        assert config.query == {"ids": [1, 2], "flag": None}

    def test_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="expected dict"):
            parse_request_config(["query"])  # type: ignore[arg-type]

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigParseError, match="unknown request config keys"):
            parse_request_config({"server": {}})

    def test_section_not_a_dict(self) -> None:
        with pytest.raises(ConfigParseError, match="'query' must be a dict"):
            parse_request_config({"query": ["a"]})

    def test_non_string_key(self) -> None:
        with pytest.raises(ConfigParseError, match="'body' keys must be strings"):
            parse_request_config({"body": {1: "a"}})

    def test_bad_content(self) -> None:
        with pytest.raises(ConfigParseError, match="'content' must be"):
            parse_request_config({"content": 42})


class TestBuild:
    def test_build_context(self) -> None:
        config = parse_request_config(
            {
                "query": {"a": "2"},
                "attributes": {"a": "1"},
                "environ": {"PHP_AUTH_USER": "alice", "PHP_AUTH_PW": "secret"},
            }
        )
        request = config.build()
        assert isinstance(request, RequestContext)
        assert request.get("a") == "1"
        assert request.headers.get("authorization") == [basic_credentials("alice", "secret")]

    def test_build_twice_gives_independent_contexts(self) -> None:
        config = parse_request_config({"query": {"a": "1"}})
        first = config.build()
        first.query.set("a", "changed")
        assert config.build().query.get("a") == "1"

    def test_build_with_filter(self) -> None:
        engine = RecordingFilter()
        request = parse_request_config({"query": {"a": "1"}}).build(engine)
        request.filter("a")
        assert engine.calls == [("1", "cmd")]


class TestLoadRequestConfig:
    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "request.yaml"
        path.write_text(
            "query:\n"
            "  page: '2'\n"
            "environ:\n"
            "  HTTP_HOST: example.org\n"
            "  CONTENT_LENGTH: 3\n"
        )
        config = load_request_config(path)
        assert config.query == {"page": "2"}
        assert config.environ == {"HTTP_HOST": "example.org", "CONTENT_LENGTH": "3"}

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_request_config(path) == RequestConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("query: [unclosed\n")
        with pytest.raises(ConfigParseError, match="invalid YAML"):
            load_request_config(str(path))
