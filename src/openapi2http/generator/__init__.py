"""Request file generator -- turn a parsed document into ``.http`` text.

This sub-package is responsible for the second half of the openapi2http
pipeline: picking the endpoint, rendering one request block per operation,
and writing the result.

Typical usage::

    from openapi2http.generator import render_http_file, resolve_endpoint, write_output

    endpoint = resolve_endpoint(document, override=None)
    text = render_http_file(document, endpoint, source)
    write_output(text, Path("petstore.http"))

Sub-modules:

* :mod:`~openapi2http.generator.endpoint` -- Endpoint override vs. first
  declared server.
* :mod:`~openapi2http.generator.renderer` -- Header, variable declaration and
  request blocks in deterministic order.
* :mod:`~openapi2http.generator.writer` -- Default output naming and atomic
  writes.
"""

from openapi2http.generator.endpoint import resolve_endpoint
from openapi2http.generator.renderer import render_http_file
from openapi2http.generator.writer import write_output

__all__ = ["resolve_endpoint", "render_http_file", "write_output"]
