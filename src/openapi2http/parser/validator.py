"""Structural validation of OpenAPI documents via ``openapi-spec-validator``.

The validator library does the heavy lifting (JSON Schema validation of the
whole document plus OpenAPI-specific checks such as duplicate operation ids
and undeclared path parameters). This module only picks the right validator
for the declared version and turns everything it reports into plain
messages for :class:`~openapi2http.models.Diagnostics`.

Supported versions:

* ``swagger: "2.0"`` -- :class:`openapi_spec_validator.OpenAPIV2SpecValidator`
* ``openapi: 3.0.x`` -- :class:`openapi_spec_validator.OpenAPIV30SpecValidator`
* ``openapi: 3.1.x`` -- :class:`openapi_spec_validator.OpenAPIV31SpecValidator`
* later ``3.x`` versions are validated as 3.1 with a warning.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from openapi_spec_validator import (
    OpenAPIV2SpecValidator,
    OpenAPIV30SpecValidator,
    OpenAPIV31SpecValidator,
)

logger = logging.getLogger(__name__)


def detect_spec_version(
    spec: dict[str, Any],
) -> tuple[Optional[str], Optional[type], list[str], list[str]]:
    """Work out which validator applies to *spec*.

    Returns:
        A ``(version, validator_cls, errors, warnings)`` tuple. ``version``
        and ``validator_cls`` are ``None`` when the document declares no
        usable version; *errors* then says why.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if "openapi" in spec:
        version = str(spec["openapi"])
        if version.startswith("3.0"):
            return version, OpenAPIV30SpecValidator, errors, warnings
        if version.startswith("3.1"):
            return version, OpenAPIV31SpecValidator, errors, warnings
        if version.startswith("3."):
            warnings.append(
                f"OpenAPI {version} is newer than 3.1; validating against 3.1 rules"
            )
            return version, OpenAPIV31SpecValidator, errors, warnings
        errors.append(
            f"Unsupported OpenAPI version: {version}. "
            "Only Swagger 2.0 and OpenAPI 3.x are supported."
        )
        return version, None, errors, warnings

    if "swagger" in spec:
        version = str(spec["swagger"])
        if version == "2.0":
            return version, OpenAPIV2SpecValidator, errors, warnings
        errors.append(f"Unsupported Swagger version: {version}")
        return version, None, errors, warnings

    errors.append(
        "Missing 'openapi' or 'swagger' version field. Is this an OpenAPI document?"
    )
    return None, None, errors, warnings


def collect_validation_errors(spec: dict[str, Any], validator_cls: type) -> list[str]:
    """Run *validator_cls* over *spec* and return every message it reports.

    Messages are prefixed with the dotted location of the offending node
    (``paths./pets.get: 'responses' is a required property``) and
    de-duplicated while keeping their order.

    Documents newer than 3.1 are checked as if they declared ``3.1.0``.
    """
    declared = str(spec.get("openapi", ""))
    if validator_cls is OpenAPIV31SpecValidator and not declared.startswith("3.1"):
        # The 3.1 schema pins the version field itself.
        spec = {**spec, "openapi": "3.1.0"}

    messages: list[str] = []
    try:
        for err in validator_cls(spec).iter_errors():
            location = ".".join(str(part) for part in getattr(err, "absolute_path", ()))
            text = getattr(err, "message", None) or str(err)
            message = f"{location}: {text}" if location else text
            if message not in messages:
                messages.append(message)
    except Exception as exc:
        # The validator itself can fail on badly broken documents (for
        # example unresolvable references); report that as one more error.
        logger.debug("OpenAPI validator crashed", exc_info=True)
        messages.append(f"Validator could not finish: {exc}")
    return messages
