"""Command-line inspection of request data.

Usage:
    reqbag headers [FIXTURE]
    reqbag get KEY [FIXTURE] [--default VALUE] [--filter SPEC] [--source STORE]

FIXTURE is a YAML request config (see reqbag._config). Without it the
request is read from the CGI environment of the current process, which
makes the command usable as a CGI script for debugging a gateway setup.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from reqbag._adapters import from_cgi
from reqbag._config import load_request_config
from reqbag._errors import ConfigParseError, RequestError
from reqbag._request import STORE_NAMES, RequestContext

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_fixture_argument = click.argument(
    "fixture",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level for diagnostics on stderr",
)
def main(log_level: str) -> None:
    """Inspect request stores and reconstructed headers."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@main.command()
@_fixture_argument
def headers(fixture: Path | None) -> None:
    """Print the header map reconstructed from the environment."""
    request = _load(fixture)
    _echo_json(request.headers.all())


@main.command()
@click.argument("key")
@_fixture_argument
@click.option("--default", "default", default=None, help="Value returned when KEY is unset")
@click.option("--filter", "filter_spec", default=None, help="Filter spec applied to the value")
@click.option(
    "--source",
    default=None,
    type=click.Choice(STORE_NAMES),
    help="Read from a single store instead of attributes, query, body",
)
def get(
    key: str,
    fixture: Path | None,
    default: str | None,
    filter_spec: str | None,
    source: str | None,
) -> None:
    """Print a request parameter as JSON."""
    request = _load(fixture)
    target: Any = request if source is None else request.store(source)
    try:
        if filter_spec is None:
            value = target.get(key, default)
        else:
            value = target.filter(key, default, filter_spec)
    except RequestError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    _echo_json(value)


def _load(fixture: Path | None) -> RequestContext:
    if fixture is None:
        return from_cgi()
    try:
        return load_request_config(fixture).build()
    except ConfigParseError as e:
        raise click.BadParameter(str(e), param_hint="FIXTURE") from e


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(value, indent=2, sort_keys=True, default=str))


if __name__ == "__main__":
    main()
