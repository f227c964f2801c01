"""Pick the base URL bound to ``@endpoint`` in the generated file."""

from __future__ import annotations

from typing import Optional

from openapi2http.exceptions import NoEndpointError
from openapi2http.models import ParsedDocument
from openapi2http.output import debug


def resolve_endpoint(document: ParsedDocument, override: Optional[str] = None) -> str:
    """Return the effective endpoint for *document*.

    A non-empty *override* wins unconditionally; otherwise the URL of the
    first declared server is used.

    Raises:
        NoEndpointError: If there is no override and no server.
    """
    if override:
        debug(f"Using endpoint override: {override}")
        return override

    if document.servers and document.servers[0].url:
        endpoint = document.servers[0].url
        debug(f"Using server from spec: {endpoint}")
        return endpoint

    raise NoEndpointError(
        "No servers found in OpenAPI spec. Please provide an endpoint with --endpoint"
    )
