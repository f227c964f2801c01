"""Load raw OpenAPI text from a local file or a remote URL.

This module handles all I/O for fetching raw OpenAPI documents and decoding
them into Python dictionaries. It supports both JSON and YAML with automatic
format detection.

The public functions are:

* :func:`load_source` -- read the text behind a
  :class:`~openapi2http.models.SourceDescriptor`, returning it together with
  a format hint.
* :func:`fetch_spec` -- download a spec with a per-call timeout.
* :func:`parse_content` -- decode JSON or YAML text into a ``dict``.

Network failures are split in two: exceeding the timeout raises
:class:`~openapi2http.exceptions.FetchTimeoutError`, everything else
(non-2xx status, DNS, refused connection) raises
:class:`~openapi2http.exceptions.FetchError`. Nothing is retried.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from openapi2http.exceptions import (
    FetchError,
    FetchTimeoutError,
    SourceNotFoundError,
    SpecParseError,
)
from openapi2http.models import SourceDescriptor
from openapi2http.output import debug


def load_source(
    source: SourceDescriptor,
    timeout: float,
    *,
    verify: bool = True,
    user_agent: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> tuple[str, str]:
    """Read the document text behind *source*.

    Args:
        source: The resolved source descriptor.
        timeout: Network timeout in seconds (ignored for files).
        verify: Verify TLS certificates for HTTPS downloads.
        user_agent: Optional ``User-Agent`` header for downloads.
        transport: Optional httpx transport, mainly for tests.

    Returns:
        A ``(text, hint)`` tuple where *hint* is ``"json"``, ``"yaml"``, or
        ``""`` when the format could not be inferred.
    """
    if source.is_url:
        debug(f"Downloading OpenAPI spec from: {source.raw}")
        return fetch_spec(
            source.raw,
            timeout,
            verify=verify,
            user_agent=user_agent,
            transport=transport,
        )

    debug(f"Reading OpenAPI file: {source.raw}")
    return _read_file(source.raw)


def fetch_spec(
    url: str,
    timeout: float,
    *,
    verify: bool = True,
    user_agent: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> tuple[str, str]:
    """Download a spec from *url*.

    A new :class:`httpx.Client` is created for every call so that *timeout*
    applies to this request only. httpx enforces it per phase (connect,
    read, ...); the body is streamed against a deadline as well, so a server
    trickling bytes cannot stretch the download past *timeout* in total.

    Returns:
        A ``(text, hint)`` tuple; the hint comes from the response
        ``Content-Type`` header.

    Raises:
        FetchTimeoutError: If the request exceeded *timeout*.
        FetchError: On a non-2xx status or any other transport failure.
    """
    headers = {"User-Agent": user_agent} if user_agent else None
    deadline = time.monotonic() + timeout
    try:
        with httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            verify=verify,
            headers=headers,
            transport=transport,
        ) as client:
            with client.stream("GET", url) as response:
                debug(f"HTTP {response.status_code} {response.reason_phrase}")
                debug(f"Content-Type: {response.headers.get('content-type', '')}")
                response.raise_for_status()
                body = _read_within(response, deadline)
                charset = response.charset_encoding or "utf-8"
    except httpx.TimeoutException as exc:
        raise FetchTimeoutError(
            f"Failed to download OpenAPI spec: Request timed out after {timeout:g}s"
        ) from exc
    except httpx.HTTPStatusError as exc:
        raise FetchError(
            "Failed to download OpenAPI spec: HTTP request failed: "
            f"{exc.response.status_code} {exc.response.reason_phrase} ({url})"
        ) from exc
    except httpx.RequestError as exc:
        raise FetchError(
            f"Failed to download OpenAPI spec: HTTP request failed: {exc}"
        ) from exc

    try:
        content = body.decode(charset, errors="replace")
    except LookupError:
        content = body.decode("utf-8", errors="replace")

    debug(f"Downloaded {len(content)} characters")
    return content, _hint_from_content_type(response.headers.get("content-type", ""))


def _read_within(response: httpx.Response, deadline: float) -> bytes:
    """Read the streamed body, raising ``httpx.ReadTimeout`` once *deadline* passes."""
    chunks: list[bytes] = []
    for chunk in response.iter_bytes():
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout("Total download time exceeded", request=response.request)
        chunks.append(chunk)
    return b"".join(chunks)


def _read_file(path: str) -> tuple[str, str]:
    """Read a local spec file as UTF-8 text.

    Raises:
        SourceNotFoundError: If the file does not exist.
        SpecParseError: If the file cannot be read or is empty.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SourceNotFoundError(f"File does not exist: {path}")

    try:
        content = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    return content, _hint_from_suffix(file_path.suffix)


def _hint_from_suffix(suffix: str) -> str:
    suffix = suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return ""


def _hint_from_content_type(content_type: str) -> str:
    content_type = content_type.lower()
    if "json" in content_type:
        return "json"
    if "yaml" in content_type or "yml" in content_type:
        return "yaml"
    return ""


def parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is ``'yaml'``), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.
    A ``'json'`` hint from a server is not trusted exclusively: plenty of
    hosts serve YAML as ``application/json``, so YAML is still tried.

    Args:
        content: The raw string content.
        hint: Optional format hint (``'json'`` or ``'yaml'``).

    Returns:
        The parsed dictionary.

    Raises:
        SpecParseError: If the content is not a JSON or YAML object.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse spec as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise SpecParseError(msg) from exc

    return _stringify_keys(_require_mapping(result))


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
    return result


def _stringify_keys(node: Any) -> Any:
    """Turn every mapping key into a string.

    YAML reads unquoted response codes (``200:``) as integers. The
    validator and the extractor expect the string keys JSON would give.
    """
    if isinstance(node, dict):
        return {str(key): _stringify_keys(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_stringify_keys(item) for item in node]
    return node
