"""Render a :class:`~openapi2http.models.ParsedDocument` as ``.http`` text.

The output follows the format understood by VS Code REST Client and the
JetBrains HTTP Client::

    #
    # Pet Store API
    # Version: 1.0.0
    # Generated: 2024-05-01 12:00:00
    #

    # Production server
    @endpoint = https://petstore.swagger.io/v2

    ### List all pets
    GET {{endpoint}}/pets


    ### Create a pet
    POST {{endpoint}}/pets
    Content-Type: application/json
    # Authorization: Bearer {{token}}
    # X-API-Key: {{apiKey}}

    {
      // Add your request body here
    }


Paths are emitted in lexicographic order and the operations of each path in
:data:`METHOD_ORDER`, so regenerating from the same document only changes the
``Generated`` line. The text is built completely in memory; nothing is
written here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from openapi2http.models import Operation, ParsedDocument, PathItem, SourceDescriptor

METHOD_ORDER = ("get", "post", "put", "patch", "delete", "head", "options", "trace")
"""Render order of operations within one path. Other methods follow, as declared."""

METHODS_WITH_BODY = frozenset({"post", "put", "patch"})

JSON_CONTENT_TYPE = "application/json"
DEFAULT_SERVER_DESCRIPTION = "API Endpoint"
EXAMPLE_BODY = "{\n  // Add your request body here\n}"
AUTH_HEADER_HINTS = (
    "# Authorization: Bearer {{token}}",
    "# X-API-Key: {{apiKey}}",
)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_as_comment(text: str) -> str:
    """Continue a multi-line text as ``#`` comment lines.

    Every line after the first is prefixed with ``# ``; the caller supplies
    the prefix of the first line.

    Example::

        >>> format_as_comment("L1\\nL2")
        'L1\\n# L2'
    """
    return text.replace("\r\n", "\n").replace("\n", "\n# ")


def order_operations(path_item: PathItem) -> list[tuple[str, Operation]]:
    """Sort the operations of one path by :data:`METHOD_ORDER`.

    Methods outside the list keep their declaration order after all listed
    ones (``sorted`` is stable).
    """
    rank = {method: index for index, method in enumerate(METHOD_ORDER)}
    return sorted(
        path_item.items(),
        key=lambda pair: rank.get(pair[0].lower(), len(METHOD_ORDER)),
    )


def operation_comment(operation: Operation, method: str, path: str) -> str:
    """Pick the ``###`` title of a request block.

    Summary, then the first line of the description, then the operation id,
    and finally ``METHOD path``.
    """
    if operation.summary:
        return operation.summary
    if operation.description:
        return operation.description.replace("\r\n", "\n").split("\n")[0].strip()
    if operation.operation_id:
        return operation.operation_id
    return f"{method} {path}"


def requires_auth(operation: Operation, document: ParsedDocument) -> bool:
    """True if the operation or the document declares a security requirement."""
    return bool(operation.security) or bool(document.security)


def count_requests(document: ParsedDocument) -> int:
    """Total number of (path, method) pairs, i.e. request blocks rendered."""
    return sum(len(path_item) for path_item in document.paths.values())


def render_http_file(
    document: ParsedDocument,
    endpoint: str,
    source: SourceDescriptor,
    *,
    now: Optional[datetime] = None,
) -> str:
    """Render the complete ``.http`` file.

    Args:
        document: The parsed document.
        endpoint: The resolved base URL bound to ``@endpoint``.
        source: Where the document came from; URL sources are echoed in
            the header.
        now: Timestamp for the ``Generated`` line (defaults to local now).

    Returns:
        The file content, newline-terminated.
    """
    lines: list[str] = []
    _render_header(lines, document, endpoint, source, now or datetime.now())

    for path in sorted(document.paths):
        for method, operation in order_operations(document.paths[path]):
            _render_request(lines, document, path, method, operation)

    return "\n".join(lines) + "\n"


def _render_header(
    lines: list[str],
    document: ParsedDocument,
    endpoint: str,
    source: SourceDescriptor,
    now: datetime,
) -> None:
    info = document.info
    title = format_as_comment(info.title)
    description = format_as_comment(info.description) if info.description else None

    lines.append("#")
    lines.append(f"# {title}")
    if description and description != title:
        lines.append(f"# {description}")
    if info.version:
        lines.append(f"# Version: {info.version}")
    if source.is_url:
        lines.append(f"# Source: {source.raw}")
    lines.append(f"# Generated: {now.strftime(TIMESTAMP_FORMAT)}")
    lines.append("#")
    lines.append("")

    server_description = DEFAULT_SERVER_DESCRIPTION
    if document.servers and document.servers[0].description:
        server_description = document.servers[0].description
    lines.append(f"# {format_as_comment(server_description)}")
    lines.append(f"@endpoint = {endpoint}")
    lines.append("")


def _render_request(
    lines: list[str],
    document: ParsedDocument,
    path: str,
    method: str,
    operation: Operation,
) -> None:
    method_upper = method.upper()
    comment = operation_comment(operation, method_upper, path)

    lines.append(f"### {format_as_comment(comment)}")
    lines.append(f"{method_upper} {{{{endpoint}}}}{path}")

    if operation.has_json_body:
        lines.append(f"Content-Type: {JSON_CONTENT_TYPE}")

    if requires_auth(operation, document):
        lines.extend(AUTH_HEADER_HINTS)

    lines.append("")

    if method.lower() in METHODS_WITH_BODY and operation.has_json_body:
        lines.append(EXAMPLE_BODY)
        lines.append("")

    lines.append("")
