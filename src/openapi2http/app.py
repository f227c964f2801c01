"""Typer application and CLI entry point for openapi2http.

The application has a single command that converts one OpenAPI document::

    openapi2http --source https://petstore.swagger.io/v2/swagger.json
    openapi2http -f ./openapi.yaml -e http://localhost:8080 -o local.http -v

Argument conflicts (``--source`` together with ``--file``, or neither) are
rejected before any file or network I/O. Known failures print
``Error: <message>`` and exit with the code of their
:class:`~openapi2http.exceptions.Openapi2HttpError` subclass; ``--verbose``
adds the full exception chain.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler and writes a crash log for
unexpected exceptions.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer

from openapi2http import __version__
from openapi2http.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="openapi2http",
    help="Convert OpenAPI specifications to .http files for API testing.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"openapi2http {__version__}")
        raise typer.Exit()


def _pick_source(source: Optional[str], file: Optional[str]) -> str:
    """Return the one source given via ``--source`` or the legacy ``--file``.

    Raises:
        InvalidUsageError: If both or neither are given.
    """
    from openapi2http.exceptions import InvalidUsageError

    if not source and not file:
        raise InvalidUsageError("Either --source or --file must be specified")
    if source and file:
        raise InvalidUsageError("Cannot specify both --source and --file")
    return source or file  # type: ignore[return-value]


@app.command()
def convert_command(
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="OpenAPI source (file path or HTTP/HTTPS URL)."
    ),
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Input OpenAPI file path (use --source for URLs)."
    ),
    endpoint: Optional[str] = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="Base URL for the API endpoint (overrides servers in spec).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        help="Output .http file (defaults to a name derived from the source).",
    ),
    ignore: bool = typer.Option(
        False,
        "--ignore",
        "-i",
        help="Ignore validation errors and generate the .http file anyway.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show verbose output."
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        "-t",
        min=1,
        help="HTTP timeout in seconds (default: 30).",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Convert an OpenAPI document into a .http request collection."""
    from openapi2http.config import resolve_config
    from openapi2http.converter import convert
    from openapi2http.exceptions import Openapi2HttpError
    from openapi2http.output import OutputManager, detail, error, info, set_output, success

    set_output(OutputManager(no_color=no_color, verbose=verbose))

    try:
        actual_source = _pick_source(source, file)
        config = resolve_config(cli_timeout=timeout)
        result = convert(
            actual_source,
            endpoint=endpoint,
            output=output,
            ignore_errors=ignore,
            verbose=verbose,
            config=config,
        )
    except Openapi2HttpError as exc:
        error(str(exc))
        if verbose:
            detail(
                "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            )
        raise typer.Exit(code=exc.exit_code) from None

    success(f"Successfully generated {result.output_path.name}")
    if verbose:
        info(f"Generated {result.request_count} HTTP requests")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to the data directory and return its path."""
    from openapi2http.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        encoding="utf-8",
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``openapi2http`` console script.

    Known errors are handled inside the command. Anything else produces a
    crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from openapi2http.output import error

        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
