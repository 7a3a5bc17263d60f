"""Process-boundary adapters: build a RequestContext from ambient request data.

These are the only functions that read the process environment or a body
stream. Everything they decode is already transported data (the query
string, the cookie header, a url-encoded form body). Multipart bodies and
file uploads are left alone.
"""

from __future__ import annotations

import logging
import os
import sys
from http.cookies import CookieError, SimpleCookie
from typing import TYPE_CHECKING, Any, BinaryIO
from urllib.parse import parse_qsl

from reqbag._request import RequestContext

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reqbag._types import FilterEngine

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def from_cgi(
    environ: Mapping[str, Any] | None = None,
    stdin: BinaryIO | None = None,
    *,
    input_filter: FilterEngine | None = None,
) -> RequestContext:
    """Build a RequestContext for a CGI process.

    ``environ`` defaults to ``os.environ`` and ``stdin`` to the process's
    binary standard input.
    """
    if environ is None:
        environ = os.environ
    if stdin is None:
        stdin = sys.stdin.buffer
    return _build(environ, stdin, input_filter)


def from_wsgi(
    environ: Mapping[str, Any],
    *,
    input_filter: FilterEngine | None = None,
) -> RequestContext:
    """Build a RequestContext from a WSGI environ dict."""
    return _build(environ, environ.get("wsgi.input"), input_filter)


def _build(
    environ: Mapping[str, Any],
    stream: BinaryIO | None,
    input_filter: FilterEngine | None,
) -> RequestContext:
    # Only string values are transport metadata; WSGI also carries objects.
    server = {key: value for key, value in environ.items() if isinstance(value, str)}

    query = dict(parse_qsl(server.get("QUERY_STRING", ""), keep_blank_values=True))
    cookies = _parse_cookies(server.get("HTTP_COOKIE", ""))

    content = _read_body(server, stream)
    body: dict[str, str] = {}
    if content is not None and _media_type(server.get("CONTENT_TYPE", "")) == FORM_CONTENT_TYPE:
        body = dict(parse_qsl(content.decode("utf-8", "replace"), keep_blank_values=True))

    logger.debug(
        "built request from environment: %d query, %d body, %d cookie parameters",
        len(query),
        len(body),
        len(cookies),
    )
    return RequestContext(
        query=query,
        body=body,
        cookies=cookies,
        environ=server,
        content=content,
        input_filter=input_filter,
    )


def _parse_cookies(header: str) -> dict[str, str]:
    if not header:
        return {}
    jar: SimpleCookie = SimpleCookie()
    try:
        jar.load(header)
    except CookieError:
        logger.debug("ignoring malformed cookie header")
        return {}
    return {name: morsel.value for name, morsel in jar.items()}


def _read_body(server: Mapping[str, str], stream: BinaryIO | None) -> bytes | None:
    try:
        length = int(server.get("CONTENT_LENGTH") or 0)
    except ValueError:
        logger.debug("ignoring non-numeric CONTENT_LENGTH")
        return None
    if length <= 0 or stream is None:
        return None
    return stream.read(length)


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()
