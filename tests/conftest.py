"""Shared test fixtures for fetchgen.

Provides reusable fixtures for loading document fixtures, building schema
nodes, isolating configuration, managing output state, and running CLI
commands. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from fetchgen.models import OpenAPIDocument, Schema
from fetchgen.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def users_api_raw() -> dict[str, Any]:
    """Load the raw users API document (JSON, OpenAPI 3.1)."""
    with open(FIXTURES_DIR / "users_api.json") as f:
        return json.load(f)


@pytest.fixture
def complex_api_raw() -> dict[str, Any]:
    """Load the raw complex API document (YAML, OpenAPI 3.0)."""
    with open(FIXTURES_DIR / "complex_api.yaml") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# Typed document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def users_api(users_api_raw: dict[str, Any]) -> OpenAPIDocument:
    return OpenAPIDocument.model_validate(users_api_raw)


@pytest.fixture
def complex_api(complex_api_raw: dict[str, Any]) -> OpenAPIDocument:
    return OpenAPIDocument.model_validate(complex_api_raw)


@pytest.fixture
def schema() -> Callable[..., Schema]:
    """Factory building a :class:`Schema` from its raw mapping.

    Usage::

        def test_x(schema):
            node = schema({"type": "string"})
    """

    def _make(raw: dict[str, Any] | None = None, **fields: Any) -> Schema:
        data = dict(raw or {})
        data.update(fields)
        return Schema.model_validate(data)

    return _make


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Clears all FETCHGEN_* environment variables and changes the working
    directory to tmp_path so ``fetchgen.json`` lookups never see a real
    project file.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in ["FETCHGEN_INPUT", "FETCHGEN_OUTPUT", "FETCHGEN_INSTANCE"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
