"""Filter registry: the default value-cleaning engine.

Architecture follows a builder / frozen registry split:
- FilterRegistryBuilder → .build() → FilterRegistry (immutable)
- Filters are plain callables: (scalar value) → cleaned value
- FilterRegistry.clean() walks lists, tuples and dicts and applies the
  filter to every scalar leaf

Example::

    builder = FilterRegistryBuilder()
    builder.filter("upper", lambda v: str(v).upper())
    registry = builder.build()

    registry.clean(["a", "b"], "upper")  # ["A", "B"]

Patterns are compiled with ``google-re2`` for linear-time matching on
untrusted request data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from collections.abc import Callable
from typing import Any, TypeAlias

import re2

from reqbag._errors import UnknownFilterError

# The "generic identifier" spec used when callers do not name one.
DEFAULT_FILTER = "cmd"

FilterFunc: TypeAlias = Callable[[Any], Any]


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════


class FilterRegistryBuilder:
    """Builder for constructing a FilterRegistry.

    Filter names are case-insensitive. Registering a name twice keeps the
    last factory.
    """

    def __init__(self) -> None:
        self._filters: dict[str, FilterFunc] = {}

    def filter(self, name: str, func: FilterFunc) -> FilterRegistryBuilder:
        """Register a filter function under a spec name."""
        self._filters[name.lower()] = func
        return self

    def build(self) -> FilterRegistry:
        """Freeze the registry. No further registration is possible."""
        return FilterRegistry(_filters=MappingProxyType(dict(self._filters)))


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class FilterRegistry:
    """Immutable registry of filter functions. Implements FilterEngine."""

    _filters: MappingProxyType[str, FilterFunc] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def clean(self, value: Any, filter_spec: str, /) -> Any:
        """Apply the named filter to ``value``.

        None passes through untouched. Lists and tuples are cleaned
        element-wise into a list; dict values are cleaned recursively.

        Raises:
            UnknownFilterError: filter_spec is not registered.
        """
        func = self._filters.get(filter_spec.lower())
        if func is None:
            raise UnknownFilterError(filter_spec, list(self._filters.keys()))
        return _apply(func, value)

    @property
    def filter_count(self) -> int:
        """Number of registered filters."""
        return len(self._filters)

    def contains_filter(self, name: str) -> bool:
        """Check if a filter spec is registered."""
        return name.lower() in self._filters

    def filter_names(self) -> list[str]:
        """Return all registered filter names (sorted)."""
        return sorted(self._filters.keys())


def _apply(func: FilterFunc, value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [_apply(func, v) for v in value]
    if isinstance(value, dict):
        return {k: _apply(func, v) for k, v in value.items()}
    return func(value)


# ═══════════════════════════════════════════════════════════════════════════════
# Core filters
# ═══════════════════════════════════════════════════════════════════════════════

_INT_RE = re2.compile(r"-?[0-9]+")
_FLOAT_RE = re2.compile(r"-?[0-9]+(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?")
_NOT_WORD_RE = re2.compile(r"[^A-Za-z_]")
_NOT_ALNUM_RE = re2.compile(r"[^A-Za-z0-9]")
_NOT_CMD_RE = re2.compile(r"[^A-Za-z0-9._-]")
_NOT_BASE64_RE = re2.compile(r"[^A-Za-z0-9/+=]")
_TAG_RE = re2.compile(r"<[^>]*>")
_PATH_RE = re2.compile(r"^/?[A-Za-z0-9_-][A-Za-z0-9_.-]*(?:/[A-Za-z0-9_-][A-Za-z0-9_.-]*)*$")
_USERNAME_RE = re2.compile(r"[\x00-\x1f\x7f<>\"'%&]")


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def _int_filter(value: Any) -> int:
    if isinstance(value, (int, float)):
        return int(value)
    m = _INT_RE.search(_text(value))
    return int(m.group(0)) if m else 0


def _uint_filter(value: Any) -> int:
    return abs(_int_filter(value))


def _float_filter(value: Any) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    m = _FLOAT_RE.search(_text(value))
    return float(m.group(0)) if m else 0.0


def _bool_filter(value: Any) -> bool:
    return bool(value)


def _word_filter(value: Any) -> str:
    return _NOT_WORD_RE.sub("", _text(value))


def _alnum_filter(value: Any) -> str:
    return _NOT_ALNUM_RE.sub("", _text(value))


def _cmd_filter(value: Any) -> str:
    return _NOT_CMD_RE.sub("", _text(value)).lstrip(".")


def _base64_filter(value: Any) -> str:
    return _NOT_BASE64_RE.sub("", _text(value))


def _string_filter(value: Any) -> str:
    return _TAG_RE.sub("", _text(value))


def _trim_filter(value: Any) -> str:
    return _text(value).strip()


def _path_filter(value: Any) -> str:
    text = _text(value)
    return text if _PATH_RE.search(text) else ""


def _username_filter(value: Any) -> str:
    return _USERNAME_RE.sub("", _text(value))


def _raw_filter(value: Any) -> Any:
    return value


def register_core_filters(builder: FilterRegistryBuilder) -> FilterRegistryBuilder:
    """Register the built-in filter vocabulary."""
    return (
        builder.filter("int", _int_filter)
        .filter("integer", _int_filter)
        .filter("uint", _uint_filter)
        .filter("float", _float_filter)
        .filter("double", _float_filter)
        .filter("bool", _bool_filter)
        .filter("boolean", _bool_filter)
        .filter("word", _word_filter)
        .filter("alnum", _alnum_filter)
        .filter("cmd", _cmd_filter)
        .filter("base64", _base64_filter)
        .filter("string", _string_filter)
        .filter("trim", _trim_filter)
        .filter("path", _path_filter)
        .filter("username", _username_filter)
        .filter("raw", _raw_filter)
    )


_DEFAULT_REGISTRY = register_core_filters(FilterRegistryBuilder()).build()


def default_filter() -> FilterRegistry:
    """Return the shared registry holding the core filters."""
    return _DEFAULT_REGISTRY
