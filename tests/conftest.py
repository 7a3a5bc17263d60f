"""Header reconstruction fixture loader.

Loads YAML fixtures from tests/fixtures/headers/ for parametrized
testing. Each document names a group of cases; each case gives an
environment mapping, the header map expected from it, and optionally
environment entries expected after reconstruction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import yaml

from reqbag.testing import RecordingFilter

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures" / "headers"


@dataclass
class HeaderFixtureCase:
    """A single case from a header reconstruction fixture."""

    fixture_name: str
    case_name: str
    environ: dict[str, str]
    expect_headers: dict[str, list[str]]
    expect_environ: dict[str, str] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_header_fixtures() -> list[HeaderFixtureCase]:
    """Load every header fixture file, in file name order."""
    cases: list[HeaderFixtureCase] = []
    for yaml_file in sorted(FIXTURE_DIR.glob("*.yaml")):
        cases.extend(_load_header_file(yaml_file))
    return cases


def _load_header_file(path: Path) -> list[HeaderFixtureCase]:
    """Load a single fixture YAML file (may contain multiple documents)."""
    cases: list[HeaderFixtureCase] = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            for case in doc["cases"]:
                cases.append(
                    HeaderFixtureCase(
                        fixture_name=doc["name"],
                        case_name=case["name"],
                        environ=_strings(case.get("environ")),
                        expect_headers={
                            str(k): [str(v) for v in values]
                            for k, values in (case.get("expect_headers") or {}).items()
                        },
                        expect_environ=_strings(case.get("expect_environ")),
                    )
                )
    return cases


def _strings(data: dict[str, Any] | None) -> dict[str, str]:
    return {str(k): str(v) for k, v in (data or {}).items()}


# ─── Shared fixtures ────────────────────────────────────────────────────────


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """Parametrize any test taking ``header_case`` over the YAML fixtures."""
    if "header_case" in metafunc.fixturenames:
        cases = load_header_fixtures()
        metafunc.parametrize("header_case", cases, ids=[c.id for c in cases])


@pytest.fixture
def recording_filter() -> RecordingFilter:
    return RecordingFilter()
