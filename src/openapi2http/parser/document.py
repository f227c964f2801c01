"""Document loader: decode, validate and extract in one step.

:func:`load_document` is the ``parse(text) -> (document, diagnostics)``
capability the converter relies on. It never raises for problems the
validator can describe; those land in
:class:`~openapi2http.models.Diagnostics` and :func:`apply_error_policy`
decides whether the run may continue.

Only text that is not a JSON or YAML object at all raises
(:class:`~openapi2http.exceptions.SpecParseError`), since there is no
document to render even with ``--ignore``.
"""

from __future__ import annotations

from openapi2http.exceptions import ValidationFailedError
from openapi2http.models import Diagnostics, ErrorPolicy, ParsedDocument
from openapi2http.output import info
from openapi2http.parser.extractor import extract_document
from openapi2http.parser.loader import parse_content
from openapi2http.parser.validator import collect_validation_errors, detect_spec_version


def load_document(text: str, hint: str = "") -> tuple[ParsedDocument, Diagnostics]:
    """Decode, validate and extract an OpenAPI document.

    Args:
        text: Raw JSON or YAML text.
        hint: Optional format hint (``"json"`` or ``"yaml"``).

    Returns:
        A ``(document, diagnostics)`` tuple. The document is extracted
        best-effort even when the diagnostics contain errors.

    Raises:
        SpecParseError: If *text* is not a JSON or YAML object.
    """
    spec = parse_content(text, hint)

    version, validator_cls, errors, warnings = detect_spec_version(spec)
    if validator_cls is not None:
        errors.extend(collect_validation_errors(spec, validator_cls))

    document = extract_document(spec, version, warnings)
    return document, Diagnostics(errors=errors, warnings=warnings)


def apply_error_policy(diagnostics: Diagnostics, policy: ErrorPolicy) -> None:
    """Surface validation errors and abort when *policy* says so.

    * ``FAIL`` -- list every error, then raise.
    * ``WARN`` -- list every error and continue.
    * ``SILENT`` -- continue without output.

    Raises:
        ValidationFailedError: If there are errors and *policy* is ``FAIL``.
    """
    if not diagnostics.has_errors:
        return

    if policy in (ErrorPolicy.FAIL, ErrorPolicy.WARN):
        _report("validation error(s)", diagnostics.errors)

    if policy == ErrorPolicy.FAIL:
        raise ValidationFailedError(
            "OpenAPI spec contains validation errors. Use --ignore to proceed anyway.",
            errors=diagnostics.errors,
        )


def report_warnings(diagnostics: Diagnostics) -> None:
    """List the document warnings. Callers only do this in verbose mode."""
    if diagnostics.warnings:
        _report("warning(s)", diagnostics.warnings)


def _report(label: str, messages: list[str]) -> None:
    info(f"Found {len(messages)} {label}:")
    for message in messages:
        info(f"  - {message}")
