"""Test utilities for reqbag.

Provides a FilterEngine that records its calls, and helpers for building
authorization values. These are NOT production filters: RecordingFilter
returns every value unchanged.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class RecordingFilter:
    """FilterEngine that records ``(value, filter_spec)`` and cleans nothing.

    >>> from reqbag import RequestContext
    >>> from reqbag.testing import RecordingFilter
    >>> engine = RecordingFilter()
    >>> RequestContext(query={"id": "7"}, input_filter=engine).filter("id")
    '7'
    >>> engine.calls
    [('7', 'cmd')]
    """

    calls: list[tuple[Any, str]] = field(default_factory=list)

    def clean(self, value: Any, filter_spec: str, /) -> Any:
        self.calls.append((value, filter_spec))
        return value


def basic_credentials(user: str, password: str = "") -> str:
    """Build a ``Basic`` authorization value for ``user:password``."""
    token = base64.b64encode(f"{user}:{password}".encode()).decode("ascii")
    return f"Basic {token}"
