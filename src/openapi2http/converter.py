"""End-to-end conversion pipeline: source -> document -> ``.http`` file.

:func:`convert` runs the stages strictly in order:

1. resolve the source (:mod:`openapi2http.parser.source`)
2. read or download it (:mod:`openapi2http.parser.loader`)
3. decode, validate and extract (:mod:`openapi2http.parser.document`)
4. resolve the endpoint (:mod:`openapi2http.generator.endpoint`)
5. render (:mod:`openapi2http.generator.renderer`)
6. write (:mod:`openapi2http.generator.writer`)

Every failure propagates as an
:class:`~openapi2http.exceptions.Openapi2HttpError` subclass. Rendering
finishes before the output path is touched, so a failed run never creates or
truncates the output file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import httpx

from openapi2http.generator.endpoint import resolve_endpoint
from openapi2http.generator.renderer import count_requests, render_http_file
from openapi2http.generator.writer import default_output_path, write_output
from openapi2http.models import ConversionResult, ConverterConfig, ErrorPolicy
from openapi2http.output import debug
from openapi2http.parser.document import apply_error_policy, load_document, report_warnings
from openapi2http.parser.loader import load_source
from openapi2http.parser.source import resolve_source


def convert(
    source: str,
    *,
    endpoint: Optional[str] = None,
    output: Optional[Path] = None,
    ignore_errors: bool = False,
    verbose: bool = False,
    timeout: Optional[int] = None,
    config: Optional[ConverterConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> ConversionResult:
    """Convert the OpenAPI document at *source* into a ``.http`` file.

    Args:
        source: Local file path or http(s) URL of the document.
        endpoint: Base URL overriding the document's servers.
        output: Target file; defaults to ``<source name>.http`` in the
            current directory.
        ignore_errors: Render even if the validator reports errors.
        verbose: Report validation details and document warnings.
        timeout: Download timeout in seconds; defaults to ``config.timeout``.
        config: Effective configuration (defaults apply when ``None``).
        transport: Optional httpx transport, mainly for tests.

    Returns:
        A :class:`~openapi2http.models.ConversionResult` describing the
        written file.

    Raises:
        SourceNotFoundError: The local file does not exist.
        FetchError: The remote document could not be downloaded.
        FetchTimeoutError: The download exceeded the timeout.
        SpecParseError: The text is not a JSON or YAML object.
        ValidationFailedError: Validation failed and *ignore_errors* is off.
        NoEndpointError: No endpoint override and no servers in the document.
        OutputWriteError: The target file could not be written.
    """
    config = config or ConverterConfig()
    effective_timeout = timeout if timeout is not None else config.timeout

    descriptor = resolve_source(source)
    text, hint = load_source(
        descriptor,
        effective_timeout,
        verify=config.verify_ssl,
        user_agent=config.user_agent,
        transport=transport,
    )

    document, diagnostics = load_document(text, hint)
    apply_error_policy(diagnostics, ErrorPolicy.from_flags(ignore_errors, verbose))
    if verbose:
        report_warnings(diagnostics)

    resolved_endpoint = resolve_endpoint(document, endpoint)

    target = output if output is not None else default_output_path(descriptor.name)
    debug(f"Output file: {Path(target).expanduser().resolve()}")

    content = render_http_file(document, resolved_endpoint, descriptor)
    written = write_output(content, target)

    return ConversionResult(
        output_path=written,
        request_count=count_requests(document),
        endpoint=resolved_endpoint,
        diagnostics=diagnostics,
    )
