"""Shared test fixtures for openapi2http.

Provides reusable fixtures for loading spec fixtures, creating isolated
config environments, managing output state, and running the CLI. These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from openapi2http.models import ParsedDocument, SourceDescriptor, SourceKind
from openapi2http.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Force plain output and reset the global OutputManager after every test.

    With ``NO_COLOR`` set every message goes through a plain ``print`` to
    the *current* ``sys.stderr``, which keeps ``capsys`` and ``CliRunner``
    captures reliable.
    """
    monkeypatch.setenv("NO_COLOR", "1")
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    """Path to the OpenAPI 3.0 petstore fixture."""
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """Load raw petstore spec dict."""
    with open(petstore_path) as f:
        return json.load(f)


@pytest.fixture
def petstore_text(petstore_path: Path) -> str:
    """Raw petstore JSON text."""
    return petstore_path.read_text(encoding="utf-8")


@pytest.fixture
def swagger2_raw() -> dict[str, Any]:
    """Load raw Swagger 2.0 spec dict."""
    with open(FIXTURES_DIR / "swagger_2.0.json") as f:
        return json.load(f)


@pytest.fixture
def invalid_path() -> Path:
    """Path to a 3.0 document missing required ``responses``."""
    return FIXTURES_DIR / "invalid.json"


@pytest.fixture
def no_servers_path() -> Path:
    """Path to a valid 3.0 document that declares no servers."""
    return FIXTURES_DIR / "no_servers.json"


@pytest.fixture
def todo_yaml_path() -> Path:
    """Path to the OpenAPI 3.1 YAML fixture."""
    return FIXTURES_DIR / "todo_3.1.yaml"


# ---------------------------------------------------------------------------
# Parsed document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_document(petstore_raw: dict[str, Any]) -> ParsedDocument:
    """Parsed petstore document."""
    from openapi2http.parser.extractor import extract_document

    return extract_document(petstore_raw, "3.0.3")


@pytest.fixture
def file_source() -> SourceDescriptor:
    """Descriptor for a local ``petstore.json``."""
    return SourceDescriptor(raw="petstore.json", kind=SourceKind.FILE, name="petstore")


@pytest.fixture
def url_source() -> SourceDescriptor:
    """Descriptor for a remote ``swagger.json``."""
    return SourceDescriptor(
        raw="https://petstore.swagger.io/v2/swagger.json",
        kind=SourceKind.URL,
        name="swagger",
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path so
    that tests never touch real user config. Clears all OPENAPI2HTTP_*
    environment variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("openapi2http.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["OPENAPI2HTTP_TIMEOUT", "OPENAPI2HTTP_VERIFY_SSL"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    ``result.output`` carries both stdout and stderr, which is where every
    openapi2http message goes.
    """
    from typer.testing import CliRunner

    return CliRunner()
