"""EnvironmentStore: CGI-style server environment plus header reconstruction.

CGI and similar gateways do not hand over request headers as such. They
encode them as environment variables (``HTTP_ACCEPT``, ``CONTENT_TYPE``)
and, depending on the server, move the ``Authorization`` header into
``PHP_AUTH_USER`` / ``PHP_AUTH_PW`` / ``PHP_AUTH_DIGEST`` or into
``REDIRECT_HTTP_AUTHORIZATION``. ``get_headers()`` rebuilds a header map
from whichever of those signals is present.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass

from reqbag._store import ParameterStore

logger = logging.getLogger(__name__)

HTTP_PREFIX = "HTTP_"

# Headers a gateway passes without the HTTP_ prefix.
CONTENT_HEADERS = frozenset({"CONTENT_LENGTH", "CONTENT_MD5", "CONTENT_TYPE"})

AUTHORIZATION = "AUTHORIZATION"


@dataclass(frozen=True, slots=True)
class Credentials:
    """Authentication signal recovered from the environment.

    Exactly one shape is populated:
    - user and password (password defaults to "") for Basic credentials
    - digest for a raw Digest authorization value
    - token for a raw Bearer authorization value
    """

    user: str | None = None
    password: str | None = None
    digest: str | None = None
    token: str | None = None

    def authorization(self) -> str | None:
        """The ``Authorization`` header value these credentials stand for."""
        if self.token is not None:
            return self.token
        if self.user is not None:
            pair = f"{self.user}:{self.password or ''}".encode()
            return "Basic " + base64.b64encode(pair).decode("ascii")
        return self.digest


class EnvironmentStore(ParameterStore):
    """Store holding the request's server and environment data."""

    def get_credentials(self) -> Credentials | None:
        """Recover credentials from the environment, without side effects.

        Priority: explicit ``PHP_AUTH_USER``, then the ``HTTP_AUTHORIZATION``
        (or ``REDIRECT_HTTP_AUTHORIZATION``) value decoded as Basic, Digest
        or Bearer. A Basic payload that does not decode into ``user:password``
        yields None.
        """
        if self.exists("PHP_AUTH_USER"):
            return Credentials(
                user=self.get("PHP_AUTH_USER"),
                password=self.get("PHP_AUTH_PW", ""),
            )

        header = self._authorization_value()
        if header is None:
            return None

        scheme = header.lower()
        if scheme.startswith("basic "):
            return _decode_basic(header[6:])
        if not self.get("PHP_AUTH_DIGEST") and scheme.startswith("digest "):
            return Credentials(digest=header)
        if scheme.startswith("bearer "):
            return Credentials(token=header)
        return None

    def get_headers(self) -> dict[str, str]:
        """Reconstruct the request headers from the environment.

        Keys stay in environment form (``ACCEPT_LANGUAGE``); HeaderStore
        normalizes them. ``AUTHORIZATION`` is synthesized from recovered
        credentials unless the environment already carried it.

        Explicit ``PHP_AUTH_USER`` / ``PHP_AUTH_PW`` variables are recorded
        as headers. A Digest value found in the authorization header is
        recorded as ``PHP_AUTH_DIGEST`` and written back to this store.
        Basic credentials decoded from the authorization header add no
        ``PHP_AUTH_*`` entries.
        """
        headers: dict[str, str] = {}
        for key, value in self.all().items():
            if key.startswith(HTTP_PREFIX):
                headers[key[len(HTTP_PREFIX):]] = value
            elif key in CONTENT_HEADERS:
                headers[key] = value

        credentials = self.get_credentials()
        if credentials is None:
            return headers

        if self.exists("PHP_AUTH_USER"):
            headers["PHP_AUTH_USER"] = credentials.user
            headers["PHP_AUTH_PW"] = credentials.password
        elif credentials.digest is not None:
            logger.debug("persisting digest authorization as PHP_AUTH_DIGEST")
            headers["PHP_AUTH_DIGEST"] = credentials.digest
            self.set("PHP_AUTH_DIGEST", credentials.digest)

        if credentials.token is not None:
            headers[AUTHORIZATION] = credentials.token
        elif AUTHORIZATION not in headers:
            authorization = credentials.authorization()
            if authorization is not None:
                headers[AUTHORIZATION] = authorization
        return headers

    def _authorization_value(self) -> str | None:
        for key in ("HTTP_AUTHORIZATION", "REDIRECT_HTTP_AUTHORIZATION"):
            if self.exists(key):
                return str(self.get(key))
        return None


def _decode_basic(payload: str) -> Credentials | None:
    # Clients may drop the trailing "=" padding.
    padded = payload + "=" * (-len(payload) % 4)
    try:
        decoded = base64.b64decode(padded).decode("utf-8")
    except ValueError:
        logger.debug("ignoring basic authorization: payload is not base64 text")
        return None

    user, sep, password = decoded.partition(":")
    if not sep:
        logger.debug("ignoring basic authorization: payload has no ':' separator")
        return None
    return Credentials(user=user, password=password)
