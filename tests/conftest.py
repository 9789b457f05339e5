"""Shared test fixtures for specparse.

Provides raw document fixtures, minimal documents for each dialect, and an
isolated environment for option resolution. These fixtures are discovered
by pytest and available to every test module.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from specparse.output import reset_output

FIXTURES_DIR = Path(__file__).parent / "fixtures"

MINIMAL_SWAGGER = {"swagger": "2.0", "info": {"title": "T", "version": "1"}, "paths": {}}
MINIMAL_OPENAPI_30 = {"openapi": "3.0.0", "info": {"title": "T", "version": "1"}, "paths": {}}
MINIMAL_OPENAPI_31 = {"openapi": "3.1.0", "info": {"title": "T", "version": "1"}, "paths": {}}


def load_fixture(name: str) -> dict[str, Any]:
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager keeps references to sys.stdout/sys.stderr from when it
    was created. CliRunner swaps those streams per invocation, so a stale
    manager would write to a closed file.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def swagger_raw() -> dict[str, Any]:
    """Full Swagger 2.0 petstore document."""
    return load_fixture("swagger_2.0.json")


@pytest.fixture
def openapi30_raw() -> dict[str, Any]:
    """Full OpenAPI 3.0 petstore document with callbacks and components."""
    return load_fixture("openapi_3.0.json")


@pytest.fixture
def openapi31_raw() -> dict[str, Any]:
    """Full OpenAPI 3.1 document with webhooks and 2020-12 schema keywords."""
    return load_fixture("openapi_3.1.json")


@pytest.fixture
def minimal_swagger() -> dict[str, Any]:
    return copy.deepcopy(MINIMAL_SWAGGER)


@pytest.fixture
def minimal_openapi30() -> dict[str, Any]:
    return copy.deepcopy(MINIMAL_OPENAPI_30)


@pytest.fixture
def minimal_openapi31() -> dict[str, Any]:
    return copy.deepcopy(MINIMAL_OPENAPI_31)


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty working directory with no SPECPARSE_* variables set.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in ["SPECPARSE_FORMAT", "SPECPARSE_VALIDATE", "SPECPARSE_RESOLVE_REFS"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
