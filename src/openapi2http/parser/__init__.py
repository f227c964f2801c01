"""OpenAPI document parser -- locate, load, validate and extract a spec.

This sub-package is responsible for the first half of the openapi2http
pipeline: turning a source string (local file or remote URL, JSON or YAML)
into a :class:`~openapi2http.models.ParsedDocument` plus the
:class:`~openapi2http.models.Diagnostics` collected along the way.

Typical usage::

    from openapi2http.parser import load_document, load_source, resolve_source

    source = resolve_source("https://petstore.swagger.io/v2/swagger.json")
    text, hint = load_source(source, timeout=30)
    document, diagnostics = load_document(text, hint)

Sub-modules:

* :mod:`~openapi2http.parser.source` -- URL/file classification and name
  derivation.
* :mod:`~openapi2http.parser.loader` -- I/O layer (URL, file) plus JSON/YAML
  decoding.
* :mod:`~openapi2http.parser.validator` -- Version detection and structural
  validation.
* :mod:`~openapi2http.parser.resolver` -- On-demand ``$ref`` following.
* :mod:`~openapi2http.parser.extractor` -- Builds the typed document.
* :mod:`~openapi2http.parser.document` -- Ties decoding, validation and
  extraction together and applies the error policy.
"""

from openapi2http.parser.document import apply_error_policy, load_document
from openapi2http.parser.loader import load_source
from openapi2http.parser.source import resolve_source

__all__ = ["resolve_source", "load_source", "load_document", "apply_error_policy"]
