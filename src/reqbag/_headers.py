"""HeaderStore: request headers keyed by normalized name.

Header names are case- and separator-insensitive. ``Content_Type``,
``CONTENT-TYPE`` and ``content-type`` all address the single entry
``content-type``. Every header holds an ordered list of values, and
setting a header again appends to that list instead of replacing it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from reqbag._filter import DEFAULT_FILTER, default_filter

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from reqbag._types import FilterEngine


def normalize_header_key(key: str) -> str:
    """Lower-case a header name and fold ``_`` into ``-``."""
    return key.lower().replace("_", "-")


class HeaderStore:
    """Store holding a request's header data."""

    def __init__(
        self,
        headers: Mapping[str, Any] | None = None,
        input_filter: FilterEngine | None = None,
    ) -> None:
        self._filter = input_filter if input_filter is not None else default_filter()
        self._headers: dict[str, list[str]] = {}
        self.add(headers or {})

    def count(self) -> int:
        """Number of distinct normalized header names."""
        return len(self._headers)

    def all(self) -> dict[str, list[str]]:
        """Return ``{normalized name: [values]}``. Lists are copies."""
        return {key: list(values) for key, values in self._headers.items()}

    def add(self, headers: Mapping[str, Any]) -> None:
        """Set every header in ``headers``, accumulating onto existing values."""
        for key, values in headers.items():
            self.set(key, values)

    def exists(self, key: str) -> bool:
        return normalize_header_key(key) in self._headers

    def get(self, key: str, default: str | None = None) -> list[str]:
        """Get the header's unfiltered values.

        An unset header yields ``[]``, or ``[default]`` when a default is
        given. The result is always a list.
        """
        values = self._headers.get(normalize_header_key(key))
        if values is None:
            return [] if default is None else [default]
        return list(values)

    def first(self, key: str, default: str | None = None) -> str | None:
        """Get the first value of a header, or ``default`` if unset."""
        values = self._headers.get(normalize_header_key(key))
        return values[0] if values else default

    def filter(
        self, key: str, default: str | None = None, filter_spec: str = DEFAULT_FILTER
    ) -> Any:
        """Get the header's values with ``filter_spec`` applied to each."""
        return self._filter.clean(self.get(key, default), filter_spec)

    def remove(self, key: str) -> None:
        self._headers.pop(normalize_header_key(key), None)

    def set(self, key: str, values: str | list[str] | tuple[str, ...]) -> None:
        """Append one value, or a sequence of values, to a header."""
        key = normalize_header_key(key)
        new = list(values) if isinstance(values, (list, tuple)) else [values]
        if not new:
            return  # headers never hold an empty value list
        if key in self._headers:
            self._headers[key].extend(new)
        else:
            self._headers[key] = new

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.exists(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.all())

    def __repr__(self) -> str:
        return f"HeaderStore({self._headers!r})"
