"""Decide where the ``.http`` file goes and write it atomically."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from openapi2http.config import atomic_write
from openapi2http.exceptions import OutputWriteError
from openapi2http.parser.source import DEFAULT_SOURCE_NAME


def default_output_path(source_name: str, cwd: Optional[Path] = None) -> Path:
    """Return ``<cwd>/<source_name>.http``, falling back to ``openapi.http``."""
    directory = cwd if cwd is not None else Path.cwd()
    return directory / f"{source_name or DEFAULT_SOURCE_NAME}.http"


def write_output(text: str, path: Path) -> Path:
    """Write *text* to *path*, replacing any existing file.

    The write goes through :func:`~openapi2http.config.atomic_write`, so the
    target either keeps its old content or receives the complete new one.

    Returns:
        The absolute path written.

    Raises:
        OutputWriteError: If the file or its parent directory cannot be
            created or written.
    """
    target = Path(path).expanduser().resolve()
    try:
        atomic_write(target, text)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise OutputWriteError(f"Failed to write output file {target}: {reason}") from exc
    return target
