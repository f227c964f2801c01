"""Canonical Pydantic models shared across all openapi2http modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory
or the project directory:
    :class:`ConverterConfig`.

**Parser output models** -- produced by the document loader and consumed by
the endpoint resolver and request renderer:
    :class:`SourceKind`, :class:`SourceDescriptor`, :class:`ApiInfo`,
    :class:`ServerInfo`, :class:`RequestBodyInfo`, :class:`Operation`,
    :class:`ParsedDocument`, :class:`Diagnostics`, and :class:`ErrorPolicy`.

**Pipeline results** -- returned to the CLI after a run:
    :class:`ConversionResult`.

Every entity is scoped to one invocation; nothing here is persisted except
the configuration.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from openapi2http import __version__


# --- Configuration ---


class ConverterConfig(BaseModel):
    """Settings that apply to every conversion.

    Loaded from ``~/.config/openapi2http/config.json`` and
    ``./openapi2http.json`` by :func:`~openapi2http.config.resolve_config`,
    then overridden by environment variables and CLI flags.
    """

    timeout: int = Field(
        default=30, ge=1, description="Network fetch timeout in seconds"
    )
    verify_ssl: bool = Field(
        default=True, description="Verify TLS certificates when downloading specs"
    )
    user_agent: str = Field(
        default=f"openapi2http/{__version__}",
        description="User-Agent header sent when downloading specs",
    )


# --- Source ---


class SourceKind(str, enum.Enum):
    """Where the OpenAPI document comes from."""

    FILE = "file"
    URL = "url"


class SourceDescriptor(BaseModel):
    """A classified source string.

    Built once by :func:`~openapi2http.parser.source.resolve_source` and never
    modified afterwards. ``name`` is the human-readable stem used to derive
    the default output file name.
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    kind: SourceKind
    name: str = "openapi"

    @property
    def is_url(self) -> bool:
        return self.kind == SourceKind.URL


# --- Parsed document ---


class ApiInfo(BaseModel):
    """API metadata from the document's *Info Object*."""

    title: str = "Untitled API"
    description: Optional[str] = None
    version: Optional[str] = None


class ServerInfo(BaseModel):
    """A server entry from the document's ``servers`` array.

    The first server's ``url`` is the default endpoint when no override is
    given.
    """

    url: str
    description: Optional[str] = None


class RequestBodyInfo(BaseModel):
    """Request body metadata: only the declared media types matter here."""

    required: bool = False
    content_types: list[str] = Field(default_factory=list)

    @property
    def has_json(self) -> bool:
        return "application/json" in self.content_types


class Operation(BaseModel):
    """A single OpenAPI *Operation Object* bound to one HTTP method.

    ``security`` is ``None`` when the operation does not declare the field
    and a (possibly empty) list when it does.
    """

    method: str
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = None
    request_body: Optional[RequestBodyInfo] = None
    security: Optional[list[dict[str, Any]]] = None
    parameters: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def has_json_body(self) -> bool:
        return self.request_body is not None and self.request_body.has_json


PathItem = dict[str, Operation]
"""Mapping of lower-case HTTP method to operation, in declaration order."""


class ParsedDocument(BaseModel):
    """Typed view of an OpenAPI document, as much as the renderer needs.

    ``paths`` preserves the document's key order; the renderer sorts it.
    ``security`` mirrors the top-level ``security`` field (``None`` when
    absent).
    """

    info: ApiInfo = Field(default_factory=ApiInfo)
    servers: list[ServerInfo] = Field(default_factory=list)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    security: Optional[list[dict[str, Any]]] = None
    spec_version: Optional[str] = Field(
        default=None,
        description="Declared 'openapi' or 'swagger' version string",
    )


class Diagnostics(BaseModel):
    """Messages reported while loading a document. Never mutated after loading."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class ErrorPolicy(str, enum.Enum):
    """What the document loader does when the validator reports errors.

    ``FAIL`` surfaces every error and aborts, ``WARN`` surfaces them and
    proceeds, ``SILENT`` proceeds without a word.
    """

    FAIL = "fail"
    WARN = "warn"
    SILENT = "silent"

    @classmethod
    def from_flags(cls, ignore_errors: bool, verbose: bool) -> "ErrorPolicy":
        """Map the ``--ignore`` and ``--verbose`` flags to a policy."""
        if not ignore_errors:
            return cls.FAIL
        return cls.WARN if verbose else cls.SILENT


# --- Results ---


class ConversionResult(BaseModel):
    """Outcome of a successful :func:`~openapi2http.converter.convert` run."""

    output_path: Path
    request_count: int
    endpoint: str
    diagnostics: Diagnostics = Field(default_factory=Diagnostics)
