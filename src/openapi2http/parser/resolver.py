"""Resolve ``$ref`` JSON Reference pointers in OpenAPI documents.

OpenAPI documents commonly share path items, request bodies and parameters
through ``$ref`` pointers (e.g. ``{"$ref": "#/components/requestBodies/Pet"}``).
The renderer needs those objects to tell whether an operation takes a JSON
body, so the extractor follows references on demand through a
:class:`RefResolver`. Schemas are never inlined: nothing downstream reads
them, and inlining large specs is expensive.

Only **internal** references (``#/...``) are followed. External references,
pointers to missing keys and reference cycles are left in place and reported
as warnings: the validator already flags broken documents, and ``--ignore``
must still be able to render them.
"""

from __future__ import annotations

from typing import Any, Optional


class UnresolvableRefError(LookupError):
    """A ``$ref`` that cannot be followed inside the document."""


def resolve_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Resolve a single internal ``$ref`` string against *root*.

    Handles RFC 6901 escaping (``~0`` for ``~``, ``~1`` for ``/``).

    Args:
        ref: The ``$ref`` string (e.g., ``"#/components/requestBodies/Pet"``).
        root: The document to resolve against.

    Returns:
        The value found at the referenced location.

    Raises:
        UnresolvableRefError: If the reference is external or any segment
            does not exist.
    """
    if not ref.startswith("#/"):
        raise UnresolvableRefError("external references are not followed")

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise UnresolvableRefError(f"key '{segment}' not found")
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise UnresolvableRefError(
                    f"invalid array index '{segment}'"
                ) from exc
        else:
            raise UnresolvableRefError(
                f"cannot navigate into {type(current).__name__}"
            )

    return current


class RefResolver:
    """Follow ``$ref`` chains inside one document, collecting warnings.

    Args:
        root: The decoded OpenAPI document.
        warnings: List that receives one message per reference that could
            not be followed. Each distinct ``$ref`` is reported once.

    Example::

        resolver = RefResolver(raw, warnings)
        body = resolver.resolve(operation.get("requestBody"))
    """

    def __init__(self, root: dict[str, Any], warnings: Optional[list[str]] = None) -> None:
        self._root = root
        self._warnings = warnings if warnings is not None else []
        self._reported: set[str] = set()

    @property
    def warnings(self) -> list[str]:
        return self._warnings

    def resolve(self, node: Any) -> Any:
        """Return *node* with its ``$ref`` chain followed.

        Only the node itself is resolved; nested references are left to the
        caller. When a reference cannot be followed the last reachable node
        (still carrying its ``$ref``) is returned.
        """
        seen: set[str] = set()
        while isinstance(node, dict) and isinstance(node.get("$ref"), str):
            ref = node["$ref"]
            if ref in seen:
                self._warn(ref, "circular reference")
                return node
            seen.add(ref)
            try:
                node = resolve_pointer(ref, self._root)
            except UnresolvableRefError as exc:
                self._warn(ref, str(exc))
                return node
        return node

    def _warn(self, ref: str, reason: str) -> None:
        if ref not in self._reported:
            self._reported.add(ref)
            self._warnings.append(f"Unresolved $ref '{ref}': {reason}")
