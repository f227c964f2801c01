"""Classify a source string and derive a file-name-safe name from it.

A *source* is whatever the user passed to ``--source``: either an ``http`` /
``https`` URL or a local file path. :func:`resolve_source` turns it into an
immutable :class:`~openapi2http.models.SourceDescriptor` carrying the kind and
the name used for the default output file (``<name>.http``).

Naming rules:

* URL -- the last path segment when it looks like a file name (contains a
  ``.``), without its extension; otherwise the host name without a leading
  ``www.``. Anything unparsable falls back to ``openapi``.
* File -- the file name without its extension.
"""

from __future__ import annotations

import re
from pathlib import Path
from urllib.parse import unquote, urlsplit

from openapi2http.exceptions import SourceNotFoundError
from openapi2http.models import SourceDescriptor, SourceKind

DEFAULT_SOURCE_NAME = "openapi"

# Characters that are illegal in a file name on at least one major platform.
_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]+')
_WHITESPACE = re.compile(r"\s+")


def is_url(source: str) -> bool:
    """Return True if *source* is an absolute ``http`` or ``https`` URL."""
    try:
        parts = urlsplit(source.strip())
    except ValueError:
        return False
    return parts.scheme.lower() in ("http", "https") and bool(parts.netloc)


def sanitize_file_name(name: str) -> str:
    """Make *name* safe to use as a file name.

    Runs of illegal characters become a single ``_`` (leading and trailing
    runs are dropped), the result is trimmed, and whitespace runs collapse to
    ``_``. An empty result yields ``openapi``.

    Example::

        >>> sanitize_file_name('file<>:"|?*name')
        'file_name'
        >>> sanitize_file_name("file with spaces")
        'file_with_spaces'
    """
    pieces = [piece for piece in _INVALID_FILENAME_CHARS.split(name) if piece]
    sanitized = "_".join(pieces).strip()
    sanitized = _WHITESPACE.sub("_", sanitized)
    return sanitized or DEFAULT_SOURCE_NAME


def derive_source_name(url: str) -> str:
    """Derive a short, file-name-safe name from a spec URL.

    Example::

        >>> derive_source_name("https://x.io/v1/my-api.json")
        'my-api'
        >>> derive_source_name("https://www.example.com/")
        'example.com'
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
    except ValueError:
        return DEFAULT_SOURCE_NAME

    last_segment = unquote(parts.path.rstrip("/").rsplit("/", 1)[-1])
    if "." in last_segment:
        stem = last_segment.rsplit(".", 1)[0]
        if stem:
            return sanitize_file_name(stem)

    if host.startswith("www."):
        host = host[len("www."):]
    if not host:
        return DEFAULT_SOURCE_NAME
    return sanitize_file_name(host)


def resolve_source(source: str) -> SourceDescriptor:
    """Classify *source* and build its descriptor.

    Args:
        source: A URL (http/https) or a local file path.

    Returns:
        The immutable :class:`~openapi2http.models.SourceDescriptor`.

    Raises:
        SourceNotFoundError: If *source* is a file path that does not exist.
    """
    if is_url(source):
        return SourceDescriptor(
            raw=source,
            kind=SourceKind.URL,
            name=derive_source_name(source),
        )

    path = Path(source)
    if not source or not path.is_file():
        raise SourceNotFoundError(f"File does not exist: {source}")

    return SourceDescriptor(
        raw=source,
        kind=SourceKind.FILE,
        name=path.stem or DEFAULT_SOURCE_NAME,
    )
