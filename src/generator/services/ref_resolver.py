"""Internal ``$ref`` resolution for OpenAPI documents.

Only document-local references (``#/components/schemas/User``) are
supported.  A reference that cannot be followed resolves to ``None``;
callers treat that as "no example available", never as an error.
"""

from __future__ import annotations

from typing import Any

_LOCAL_PREFIX = "#/"


def resolve_ref(doc: Any, ref: Any) -> Any | None:
    """Walk *doc* along the JSON pointer in *ref* and return the subtree.

    Returns ``None`` if *ref* is not a local reference or any segment is
    missing.
    """
    if not isinstance(ref, str) or not ref.startswith(_LOCAL_PREFIX):
        return None

    current = doc
    for raw_segment in ref[len(_LOCAL_PREFIX):].split("/"):
        segment = raw_segment.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list):
            if not segment.isdigit() or int(segment) >= len(current):
                return None
            current = current[int(segment)]
        else:
            return None
    return current


def resolve_node(doc: Any, node: Any) -> Any | None:
    """Follow *node*'s ``$ref`` when it has one, else return *node* itself."""
    if isinstance(node, dict) and "$ref" in node:
        return resolve_ref(doc, node["$ref"])
    return node
