"""Error types raised by reqbag."""

from __future__ import annotations


class RequestError(Exception):
    """Base class for reqbag errors."""


class AccessViolationError(RequestError):
    """Read access to internal request state through ``RequestContext.store``."""

    def __init__(self, owner: str, name: str) -> None:
        self.owner = owner
        self.name = name
        super().__init__(f"read access to {owner}.{name} is not allowed")


class UnknownFilterError(RequestError):
    """A filter spec was not found in the filter registry."""

    def __init__(self, filter_spec: str, available: list[str]) -> None:
        self.filter_spec = filter_spec
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown filter spec: {filter_spec!r} (registered: {registered})"
        else:
            msg = f"unknown filter spec: {filter_spec!r} (no filters are registered)"
        super().__init__(msg)


class ConfigParseError(RequestError):
    """Error parsing a dict into a request config."""
