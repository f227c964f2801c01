"""Exception hierarchy for openapi2http.

All exceptions inherit from :class:`Openapi2HttpError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`openapi2http.exit_codes`.
The CLI command in :mod:`openapi2http.app` catches ``Openapi2HttpError``,
prints ``Error: <message>`` and exits with the appropriate code, while
:func:`openapi2http.app.main` turns unexpected exceptions into a crash log
and :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    Openapi2HttpError (exit 1)
    +-- ConfigError            (exit 1)
    +-- OutputWriteError       (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- SourceNotFoundError    (exit 4)
    +-- FetchError             (exit 6)
    +-- SpecParseError         (exit 7)
    +-- ValidationFailedError  (exit 7)
    +-- FetchTimeoutError      (exit 8)
    +-- NoEndpointError        (exit 9)

``FetchTimeoutError`` deliberately does not inherit from ``FetchError`` so
that ``except FetchError`` never catches a timeout.
"""

from openapi2http.exit_codes import (
    EXIT_FETCH_FAILED,
    EXIT_FETCH_TIMEOUT,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NO_ENDPOINT,
    EXIT_SOURCE_NOT_FOUND,
    EXIT_SPEC_INVALID,
)


class Openapi2HttpError(Exception):
    """Base exception for all openapi2http errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`openapi2http.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(Openapi2HttpError):
    """Raised for unreadable or invalid configuration files."""

    exit_code = EXIT_GENERIC_FAILURE


class OutputWriteError(Openapi2HttpError):
    """Raised when the .http file cannot be written."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(Openapi2HttpError):
    """Raised when ``--source``/``--file`` are both given or both missing."""

    exit_code = EXIT_INVALID_USAGE


class SourceNotFoundError(Openapi2HttpError):
    """Raised when a local OpenAPI file does not exist."""

    exit_code = EXIT_SOURCE_NOT_FOUND


class FetchError(Openapi2HttpError):
    """Raised when a remote spec cannot be downloaded (non-2xx, DNS, refused)."""

    exit_code = EXIT_FETCH_FAILED


class FetchTimeoutError(Openapi2HttpError):
    """Raised when downloading a remote spec exceeds the configured timeout."""

    exit_code = EXIT_FETCH_TIMEOUT


class SpecParseError(Openapi2HttpError):
    """Raised when the document is neither a JSON nor a YAML object."""

    exit_code = EXIT_SPEC_INVALID


class ValidationFailedError(Openapi2HttpError):
    """Raised when the validator reports errors and ``--ignore`` was not given.

    Args:
        message: Summary printed to stderr.
        errors: Every validation message, in the order reported.
    """

    exit_code = EXIT_SPEC_INVALID

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors or [])


class NoEndpointError(Openapi2HttpError):
    """Raised when no endpoint override is given and the document has no servers."""

    exit_code = EXIT_NO_ENDPOINT
