"""Config types for building a RequestContext from plain data.

Config-driven construction path:
  dict → parse_request_config() → RequestConfig → RequestConfig.build() → RequestContext

The dict shape is the same whether it comes from YAML, JSON or code::

    query: {page: "2"}
    body: {}
    attributes: {}
    cookies: {session: abc}
    files: {}
    environ:
      HTTP_HOST: example.org
      CONTENT_TYPE: text/plain
    content: null

Every section is optional.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from reqbag._errors import ConfigParseError
from reqbag._request import RequestContext

if TYPE_CHECKING:
    from reqbag._types import FilterEngine

_STORE_SECTIONS = ("query", "body", "attributes", "cookies", "files")
_KNOWN_KEYS = frozenset({*_STORE_SECTIONS, "environ", "content"})


@dataclass(frozen=True, slots=True)
class RequestConfig:
    """Raw inputs for one RequestContext."""

    query: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    attributes: dict[str, Any] = field(default_factory=dict)
    cookies: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)
    environ: dict[str, str] = field(default_factory=dict)
    content: str | bytes | None = None

    def build(self, input_filter: FilterEngine | None = None) -> RequestContext:
        """Construct a fresh RequestContext from this config."""
        return RequestContext(
            query=self.query,
            body=self.body,
            attributes=self.attributes,
            cookies=self.cookies,
            files=self.files,
            environ=self.environ,
            content=self.content,
            input_filter=input_filter,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → RequestConfig)
# ═══════════════════════════════════════════════════════════════════════════════


def parse_request_config(data: dict[str, Any] | None) -> RequestConfig:
    """Parse a dict into a RequestConfig.

    Environment values are coerced to strings, matching what a gateway
    would hand over. A null document yields an empty config.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if data is None:
        return RequestConfig()
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(str(k) for k in data.keys() - _KNOWN_KEYS)
    if unknown:
        msg = f"unknown request config keys: {unknown}"
        raise ConfigParseError(msg)

    sections = {name: _parse_section(name, data.get(name)) for name in _STORE_SECTIONS}
    environ = {
        key: "" if value is None else str(value)
        for key, value in _parse_section("environ", data.get("environ")).items()
    }

    content = data.get("content")
    if content is not None and not isinstance(content, (str, bytes)):
        msg = f"'content' must be a string, bytes or null, got {type(content).__name__}"
        raise ConfigParseError(msg)

    return RequestConfig(environ=environ, content=content, **sections)


def load_request_config(path: str | Path) -> RequestConfig:
    """Load a RequestConfig from a YAML file.

    Raises:
        ConfigParseError: If the file is not valid YAML or is malformed.
        OSError: If the file cannot be read.
    """
    with Path(path).open() as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"invalid YAML in {path}: {e}"
            raise ConfigParseError(msg) from e
    return parse_request_config(data)


def _parse_section(name: str, data: Any) -> dict[str, Any]:
    """Parse one store section: a mapping with string keys."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"'{name}' must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    for key in data:
        if not isinstance(key, str):
            msg = f"'{name}' keys must be strings, got {type(key).__name__}"
            raise ConfigParseError(msg)
    return dict(data)
