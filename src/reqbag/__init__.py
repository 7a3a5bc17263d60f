"""reqbag: HTTP request data as typed, read-only stores.

All public types are exported from this module for flat imports:

    from reqbag import RequestContext, HeaderStore, from_cgi
"""

__version__ = "0.1.0"

# Process-boundary adapters
from reqbag._adapters import from_cgi, from_wsgi

# Config types, see reqbag._config for details
from reqbag._config import RequestConfig, load_request_config, parse_request_config

# Stores
from reqbag._environ import Credentials, EnvironmentStore

# Errors
from reqbag._errors import (
    AccessViolationError,
    ConfigParseError,
    RequestError,
    UnknownFilterError,
)

# Filtering
from reqbag._filter import (
    DEFAULT_FILTER,
    FilterRegistry,
    FilterRegistryBuilder,
    default_filter,
    register_core_filters,
)
from reqbag._headers import HeaderStore, normalize_header_key
from reqbag._request import STORE_NAMES, RequestContext
from reqbag._store import ParameterStore
from reqbag._types import ABSENT, Absent, FilterEngine, Found, Lookup

__all__ = [
    # Protocols and lookup results
    "FilterEngine",
    "Found",
    "Absent",
    "ABSENT",
    "Lookup",
    # Stores
    "ParameterStore",
    "HeaderStore",
    "EnvironmentStore",
    "Credentials",
    "normalize_header_key",
    # Request
    "RequestContext",
    "STORE_NAMES",
    "from_cgi",
    "from_wsgi",
    # Filtering
    "DEFAULT_FILTER",
    "FilterRegistry",
    "FilterRegistryBuilder",
    "default_filter",
    "register_core_filters",
    # Config
    "RequestConfig",
    "parse_request_config",
    "load_request_config",
    # Errors
    "RequestError",
    "AccessViolationError",
    "UnknownFilterError",
    "ConfigParseError",
]
