"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific failure category and is referenced by the
corresponding :class:`~openapi2http.exceptions.Openapi2HttpError` subclass.
Shell scripts and CI jobs can inspect the exit code to tell a slow server
from a broken one without parsing stderr.

Example::

    $ openapi2http -s https://slow.example.com/openapi.json -t 1
    Error: Failed to download OpenAPI spec: Request timed out after 1s
    $ echo $?
    8   # EXIT_FETCH_TIMEOUT
"""

EXIT_SUCCESS = 0
"""The conversion completed and the output file was written."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with conflicting or missing arguments."""

EXIT_SOURCE_NOT_FOUND = 4
"""The local OpenAPI file does not exist."""

EXIT_FETCH_FAILED = 6
"""The remote spec could not be downloaded (non-2xx status, DNS, refused connection)."""

EXIT_SPEC_INVALID = 7
"""The OpenAPI document could not be decoded or failed validation."""

EXIT_FETCH_TIMEOUT = 8
"""Downloading the remote spec exceeded the configured timeout."""

EXIT_NO_ENDPOINT = 9
"""No ``--endpoint`` was given and the document declares no servers."""

EXIT_INTERRUPTED = 130
"""The user cancelled with Ctrl-C."""
