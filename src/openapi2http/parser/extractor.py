"""Extract a :class:`~openapi2http.models.ParsedDocument` from a decoded spec.

This module walks an OpenAPI 3.x or Swagger 2.0 dictionary and builds the
typed document the renderer consumes: API metadata, servers, and every path
with its operations in declaration order.

The single public entry point is :func:`extract_document`. Internally it
delegates to private helpers that each handle one section:

* ``_extract_info`` -- the ``info`` object.
* ``_extract_servers`` -- the ``servers`` array (3.x, with server variables
  replaced by their defaults) or ``schemes``/``host``/``basePath`` (2.0).
* ``_extract_paths`` -- the ``paths`` object, one
  :class:`~openapi2http.models.Operation` per HTTP method.

Extraction is lenient: when ``--ignore`` lets an invalid document through,
malformed nodes are skipped rather than raising, since the validator has
already reported them.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from openapi2http.models import (
    ApiInfo,
    Operation,
    ParsedDocument,
    PathItem,
    RequestBodyInfo,
    ServerInfo,
)
from openapi2http.parser.resolver import RefResolver

# Operation keys of a Path Item Object. "query" arrived with OpenAPI 3.2.
HTTP_METHODS = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
    "query",
)

_SERVER_VARIABLE = re.compile(r"\{([^{}]+)\}")


def extract_document(
    spec: dict[str, Any],
    spec_version: Optional[str] = None,
    warnings: Optional[list[str]] = None,
) -> ParsedDocument:
    """Build the typed document for *spec*.

    Args:
        spec: The decoded OpenAPI document.
        spec_version: The declared version, as detected by
            :func:`~openapi2http.parser.validator.detect_spec_version`.
        warnings: Optional list receiving messages about references that
            could not be followed.

    Returns:
        A populated :class:`~openapi2http.models.ParsedDocument`.

    Example::

        doc = extract_document(parse_content(text), "3.0.3")
        for path, item in doc.paths.items():
            print(path, list(item))
    """
    resolver = RefResolver(spec, warnings)
    is_swagger2 = "swagger" in spec and "openapi" not in spec

    security = spec.get("security")
    return ParsedDocument(
        info=_extract_info(spec),
        servers=_extract_swagger2_servers(spec) if is_swagger2 else _extract_servers(spec),
        paths=_extract_paths(spec, resolver, is_swagger2),
        security=security if isinstance(security, list) else None,
        spec_version=spec_version,
    )


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _extract_info(spec: dict[str, Any]) -> ApiInfo:
    """Extract title, description and version from the ``info`` object."""
    info = _as_dict(spec.get("info"))
    return ApiInfo(
        title=_as_str(info.get("title")) or "Untitled API",
        description=_as_str(info.get("description")),
        version=_as_str(info.get("version")),
    )


def _extract_servers(spec: dict[str, Any]) -> list[ServerInfo]:
    """Extract the 3.x ``servers`` array.

    Server variables (``https://{region}.example.com``) are replaced with
    their declared ``default`` so the endpoint is usable as-is; variables
    without a default are kept verbatim.
    """
    servers = spec.get("servers")
    if not isinstance(servers, list):
        return []

    result: list[ServerInfo] = []
    for server in servers:
        if not isinstance(server, dict) or _as_str(server.get("url")) is None:
            continue
        result.append(
            ServerInfo(
                url=_substitute_variables(str(server["url"]), _as_dict(server.get("variables"))),
                description=_as_str(server.get("description")),
            )
        )
    return result


def _substitute_variables(url: str, variables: dict[str, Any]) -> str:
    def _replace(match: re.Match[str]) -> str:
        default = _as_dict(variables.get(match.group(1))).get("default")
        return str(default) if default is not None else match.group(0)

    return _SERVER_VARIABLE.sub(_replace, url)


def _extract_swagger2_servers(spec: dict[str, Any]) -> list[ServerInfo]:
    """Build servers from Swagger 2.0 ``schemes``, ``host`` and ``basePath``.

    One server is produced per scheme (``https`` when none is declared). A
    document with only a ``basePath`` yields a relative server URL; one with
    neither yields no servers.
    """
    host = _as_str(spec.get("host"))
    base_path = _as_str(spec.get("basePath")) or ""
    if base_path and not base_path.startswith("/"):
        base_path = "/" + base_path

    if not host:
        return [ServerInfo(url=base_path)] if base_path else []

    schemes = [s for s in spec.get("schemes") or [] if isinstance(s, str)] or ["https"]
    return [ServerInfo(url=f"{scheme}://{host}{base_path}") for scheme in schemes]


def _extract_paths(
    spec: dict[str, Any], resolver: RefResolver, is_swagger2: bool
) -> dict[str, PathItem]:
    """Extract every path and its operations, keeping declaration order."""
    paths: dict[str, PathItem] = {}

    for path, raw_item in _as_dict(spec.get("paths")).items():
        path_item = resolver.resolve(raw_item)
        if not isinstance(path_item, dict):
            continue

        path_params = _resolve_parameters(path_item.get("parameters"), resolver)
        operations: PathItem = {}

        for key, raw_op in path_item.items():
            method = str(key).lower()
            if method not in HTTP_METHODS:
                continue
            operation = _extract_operation(
                method, raw_op, path_params, spec, resolver, is_swagger2
            )
            if operation is not None:
                operations[method] = operation

        # OpenAPI 3.2 additionalOperations: {"COPY": {...}, ...}
        for key, raw_op in _as_dict(path_item.get("additionalOperations")).items():
            method = str(key).lower()
            if method in operations:
                continue
            operation = _extract_operation(
                method, raw_op, path_params, spec, resolver, is_swagger2
            )
            if operation is not None:
                operations[method] = operation

        paths[str(path)] = operations

    return paths


def _extract_operation(
    method: str,
    raw_op: Any,
    path_params: list[dict[str, Any]],
    spec: dict[str, Any],
    resolver: RefResolver,
    is_swagger2: bool,
) -> Optional[Operation]:
    if not isinstance(raw_op, dict):
        return None

    parameters = _merge_parameters(
        path_params, _resolve_parameters(raw_op.get("parameters"), resolver)
    )
    if is_swagger2:
        request_body = _swagger2_request_body(raw_op, parameters, spec)
    else:
        request_body = _extract_request_body(raw_op.get("requestBody"), resolver)

    security = raw_op.get("security")
    return Operation(
        method=method,
        summary=_as_str(raw_op.get("summary")),
        description=_as_str(raw_op.get("description")),
        operation_id=_as_str(raw_op.get("operationId")),
        request_body=request_body,
        security=security if isinstance(security, list) else None,
        parameters=parameters,
    )


def _resolve_parameters(raw: Any, resolver: RefResolver) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    resolved = (resolver.resolve(param) for param in raw)
    return [param for param in resolved if isinstance(param, dict)]


def _merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level parameters with the same
    ``name`` and ``in``, per the OpenAPI specification.
    """
    overridden = {(p.get("name"), p.get("in")) for p in op_params}
    merged = [p for p in path_params if (p.get("name"), p.get("in")) not in overridden]
    merged.extend(op_params)
    return merged


def _extract_request_body(raw: Any, resolver: RefResolver) -> Optional[RequestBodyInfo]:
    """Extract the media types of a 3.x ``requestBody``."""
    if raw is None:
        return None
    body = resolver.resolve(raw)
    if not isinstance(body, dict):
        return None
    return RequestBodyInfo(
        required=bool(body.get("required", False)),
        content_types=[str(ct) for ct in _as_dict(body.get("content"))],
    )


def _swagger2_request_body(
    raw_op: dict[str, Any],
    parameters: list[dict[str, Any]],
    spec: dict[str, Any],
) -> Optional[RequestBodyInfo]:
    """Derive a request body from Swagger 2.0 ``body``/``formData`` parameters.

    Media types come from the operation's ``consumes`` list, then the
    document's; a body parameter without either defaults to
    ``application/json`` and form fields to
    ``application/x-www-form-urlencoded``.
    """
    body_params = [p for p in parameters if p.get("in") == "body"]
    form_params = [p for p in parameters if p.get("in") == "formData"]
    if not body_params and not form_params:
        return None

    consumes = raw_op.get("consumes")
    if not isinstance(consumes, list):
        consumes = spec.get("consumes")
    content_types = [str(ct) for ct in consumes] if isinstance(consumes, list) else []
    if not content_types:
        content_types = (
            ["application/json"] if body_params else ["application/x-www-form-urlencoded"]
        )

    return RequestBodyInfo(
        required=any(bool(p.get("required")) for p in body_params + form_params),
        content_types=content_types,
    )
