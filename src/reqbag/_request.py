"""RequestContext: one incoming HTTP request as a set of read-only stores.

The context owns one store per data source (query, body, attributes,
cookies), the server environment, and the header store reconstructed from
that environment at construction time.

``get`` resolves a parameter across sources with a fixed precedence:
attributes, then query, then body. First source holding the key wins,
even when the stored value is None.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from reqbag._environ import EnvironmentStore
from reqbag._errors import AccessViolationError
from reqbag._filter import DEFAULT_FILTER, default_filter
from reqbag._headers import HeaderStore
from reqbag._store import ParameterStore
from reqbag._types import Found

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reqbag._types import FilterEngine

logger = logging.getLogger(__name__)

# Stores readable through RequestContext.store().
STORE_NAMES = ("query", "body", "attributes", "cookies", "environ", "headers")

# Internal state that exists on every context but is never handed out.
_PRIVATE_STATE = frozenset({"files", "content", "input_filter"})


class RequestContext:
    """Typed, read-only view over the data of one HTTP request."""

    def __init__(
        self,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        attributes: Mapping[str, Any] | None = None,
        cookies: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        environ: Mapping[str, Any] | None = None,
        content: Any = None,
        *,
        input_filter: FilterEngine | None = None,
    ) -> None:
        self._input_filter = input_filter if input_filter is not None else default_filter()
        self._query = ParameterStore(query, self._input_filter)
        self._body = ParameterStore(body, self._input_filter)
        self._attributes = ParameterStore(attributes, self._input_filter)
        self._cookies = ParameterStore(cookies, self._input_filter)
        self._files = dict(files or {})
        self._environ = EnvironmentStore(environ, self._input_filter)
        self._headers = HeaderStore(self._environ.get_headers(), self._input_filter)
        self._content = content

    @property
    def query(self) -> ParameterStore:
        """Query string parameters."""
        return self._query

    @property
    def body(self) -> ParameterStore:
        """Request body parameters."""
        return self._body

    @property
    def attributes(self) -> ParameterStore:
        """Miscellaneous request attributes set by the application."""
        return self._attributes

    @property
    def cookies(self) -> ParameterStore:
        return self._cookies

    @property
    def environ(self) -> EnvironmentStore:
        """Server and environment data."""
        return self._environ

    @property
    def headers(self) -> HeaderStore:
        """Headers reconstructed from the environment at construction."""
        return self._headers

    def store(self, name: str) -> ParameterStore | HeaderStore | None:
        """Resolve one of the exposed stores by name.

        Returns None, with a warning logged, for a name that is neither a
        store nor internal state.

        Raises:
            AccessViolationError: name refers to internal request state.
        """
        if name in STORE_NAMES:
            return getattr(self, name)
        if name in _PRIVATE_STATE:
            raise AccessViolationError(type(self).__name__, name)
        logger.warning("undefined request store: %s", name)
        return None

    def get(self, key: str, default: Any = None) -> Any:
        """Get an unfiltered parameter from attributes, query or body."""
        for source in (self._attributes, self._query, self._body):
            match source.lookup(key):
                case Found(value=value):
                    return value
        return default

    def filter(self, key: str, default: Any = None, filter_spec: str = DEFAULT_FILTER) -> Any:
        """Get a parameter from attributes, query or body, with a filter applied."""
        return self._input_filter.clean(self.get(key, default), filter_spec)

    def __repr__(self) -> str:
        return (
            f"RequestContext(query={self._query.count()}, body={self._body.count()}, "
            f"attributes={self._attributes.count()}, cookies={self._cookies.count()}, "
            f"headers={self._headers.count()})"
        )
