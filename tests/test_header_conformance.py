"""Header reconstruction conformance tests.

Runs every case in tests/fixtures/headers/ through both the
EnvironmentStore and the RequestContext construction path.
"""

from __future__ import annotations

from reqbag import EnvironmentStore, HeaderStore, RequestContext


def test_environment_store(header_case) -> None:  # noqa: ANN001
    environ = EnvironmentStore(header_case.environ)
    headers = HeaderStore(environ.get_headers())

    assert headers.all() == header_case.expect_headers, (
        f"Fixture '{header_case.id}': expected {header_case.expect_headers!r}, "
        f"got {headers.all()!r}"
    )
    for key, expected in header_case.expect_environ.items():
        assert environ.get(key) == expected


def test_request_context(header_case) -> None:  # noqa: ANN001
    request = RequestContext(environ=header_case.environ)

    assert request.headers.all() == header_case.expect_headers
    for key, expected in header_case.expect_environ.items():
        assert request.environ.get(key) == expected
