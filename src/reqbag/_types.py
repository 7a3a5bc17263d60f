"""Core protocols and type aliases for reqbag.

- Found / Absent is the tagged lookup result shared by every store
- FilterEngine is the value-cleaning port invoked by every ``filter`` method
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeAlias, TypeVar, Union, runtime_checkable

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Found(Generic[T]):
    """A key is present. ``value`` may itself be None."""

    value: T


@dataclass(frozen=True, slots=True)
class Absent:
    """A key is not present in the store."""


# Present-but-None and not-present are different outcomes.
Lookup: TypeAlias = Union[Found[T], Absent]

ABSENT = Absent()


@runtime_checkable
class FilterEngine(Protocol):
    """Clean a raw request value according to a named filter spec.

    Implementations decide the spec vocabulary. reqbag only invokes
    ``clean`` and never interprets the spec itself.
    """

    def clean(self, value: Any, filter_spec: str, /) -> Any: ...
