"""ParameterStore: a key/value store for one source of request data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from reqbag._filter import DEFAULT_FILTER, default_filter
from reqbag._types import ABSENT, Found

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from reqbag._types import FilterEngine, Lookup


class ParameterStore:
    """Simple store holding key/value pairs of request data.

    Keys are case-sensitive. A stored None is a real value: ``get`` returns
    it instead of the default, and ``lookup`` reports it as ``Found(None)``.
    """

    def __init__(
        self,
        parameters: Mapping[str, Any] | None = None,
        input_filter: FilterEngine | None = None,
    ) -> None:
        self._filter = input_filter if input_filter is not None else default_filter()
        self._parameters: dict[str, Any] = dict(parameters or {})

    def count(self) -> int:
        """Number of stored parameters."""
        return len(self._parameters)

    def all(self) -> dict[str, Any]:
        """Return a copy of the stored parameters."""
        return dict(self._parameters)

    def add(self, parameters: Mapping[str, Any]) -> None:
        """Merge parameters into the store, replacing existing keys."""
        self._parameters.update(parameters)

    def exists(self, key: str) -> bool:
        return key in self._parameters

    def get(self, key: str, default: Any = None) -> Any:
        """Get the parameter's unfiltered value, or ``default`` if unset."""
        return self._parameters.get(key, default)

    def lookup(self, key: str) -> Lookup[Any]:
        """Get the parameter as ``Found(value)``, or ``Absent`` if unset."""
        if key in self._parameters:
            return Found(self._parameters[key])
        return ABSENT

    def filter(self, key: str, default: Any = None, filter_spec: str = DEFAULT_FILTER) -> Any:
        """Get the parameter's value with ``filter_spec`` applied."""
        return self._filter.clean(self.get(key, default), filter_spec)

    def remove(self, key: str) -> None:
        self._parameters.pop(key, None)

    def set(self, key: str, value: Any) -> None:
        self._parameters[key] = value

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        return key in self._parameters

    def __iter__(self) -> Iterator[str]:
        return iter(self.all())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._parameters!r})"
