"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles the small amount of persistent state openapi2http has:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.openapi2http/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir` (crash logs).
* **User config** -- a single :class:`~openapi2http.models.ConverterConfig`
  JSON file (``config.json``) in the config directory.
* **Project config** -- ``./openapi2http.json`` with the same keys, for
  repositories that pin a timeout or disable TLS verification for an
  internal spec host.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project config, and user config into the effective
  configuration.

All file writes, including the generated ``.http`` file, use an atomic
temp-file-then-rename strategy (:func:`atomic_write`) so that a failed run
never leaves a half-written file behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from openapi2http.exceptions import ConfigError
from openapi2http.models import ConverterConfig

_APP_NAME = "openapi2http"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "openapi2http.json"

ENV_TIMEOUT = "OPENAPI2HTTP_TIMEOUT"
ENV_VERIFY_SSL = "OPENAPI2HTTP_VERIFY_SSL"

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/openapi2http/`` (default
    ``~/.config/openapi2http/``). On macOS/Windows: ``~/.openapi2http/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/openapi2http/`` (default
    ``~/.local/share/openapi2http/``). On macOS/Windows: ``~/.openapi2http/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On success the temp
    file replaces *path* (overwriting any existing file); on any failure the
    temp file is removed and *path* is left untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            newline="\n",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Config files ---


def _user_config_path() -> Path:
    """Path to the user config file."""
    return get_config_dir() / _CONFIG_FILENAME


def _read_json_object(path: Path, label: str) -> Optional[dict[str, Any]]:
    """Read *path* as a JSON object, or return ``None`` when it does not exist."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def load_user_config() -> ConverterConfig:
    """Load the user configuration from the config directory.

    Returns:
        The deserialised :class:`~openapi2http.models.ConverterConfig`, or a
        default instance if the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = _user_config_path()
    data = _read_json_object(path, "user config")
    if data is None:
        return ConverterConfig()
    try:
        return ConverterConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid user config at {path}: {exc}") from exc


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local overrides from ``./openapi2http.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    return _read_json_object(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project config")


def _env_overrides() -> dict[str, Any]:
    """Collect ``OPENAPI2HTTP_*`` environment overrides."""
    overrides: dict[str, Any] = {}

    timeout = os.environ.get(ENV_TIMEOUT)
    if timeout:
        try:
            overrides["timeout"] = int(timeout)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_TIMEOUT} must be an integer number of seconds, got {timeout!r}"
            ) from exc

    verify = os.environ.get(ENV_VERIFY_SSL)
    if verify:
        overrides["verify_ssl"] = verify.strip().lower() not in _FALSE_VALUES

    return overrides


# --- Precedence resolution ---


def resolve_config(cli_timeout: Optional[int] = None) -> ConverterConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_timeout``)
        2. Environment variables (``OPENAPI2HTTP_TIMEOUT``,
           ``OPENAPI2HTTP_VERIFY_SSL``)
        3. Project config (``./openapi2http.json``)
        4. User config (``~/.config/openapi2http/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer is malformed.
    """
    merged = load_user_config().model_dump()

    project = load_project_config()
    if project is not None:
        merged.update(project)

    merged.update(_env_overrides())

    if cli_timeout is not None:
        merged["timeout"] = cli_timeout

    try:
        return ConverterConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
