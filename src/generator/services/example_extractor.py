"""Example extraction from request bodies, responses and schemas.

Finds the best available example value for a media-type node, in this
order (first match wins):

1. the first entry of ``examples`` (its ``value``),
2. ``example``,
3. the schema (``$ref`` resolved): its own ``example``, else an object
   built from every property carrying an ``example``.

Partial examples are fine: properties without an example are omitted.
"""

from __future__ import annotations

import logging
from typing import Any

from src.generator.services.ref_resolver import resolve_node
from src.shared.constants import JSON_MEDIA_TYPE

logger = logging.getLogger(__name__)


def media_example(media: Any, doc: dict[str, Any]) -> Any | None:
    """Return the best example for a media-type object, or ``None``."""
    if not isinstance(media, dict):
        return None

    found = _first_example_value(media.get("examples"), doc)
    if found is not None:
        return found

    if media.get("example") is not None:
        return media["example"]

    schema = resolve_node(doc, media.get("schema"))
    return schema_example(schema, doc)


def schema_example(schema: Any, doc: dict[str, Any]) -> Any | None:
    """Return ``schema.example`` or an object of per-property examples."""
    schema = resolve_node(doc, schema)
    if not isinstance(schema, dict):
        return None
    if schema.get("example") is not None:
        return schema["example"]

    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return None
    built = {
        name: prop["example"]
        for name, prop in properties.items()
        if isinstance(prop, dict) and "example" in prop
    }
    return built or None


def fields_with_examples(schema: Any, doc: dict[str, Any] | None = None) -> list[str]:
    """Names of properties that carry an explicit ``example``, in declaration order."""
    if doc is not None:
        schema = resolve_node(doc, schema)
    if not isinstance(schema, dict):
        return []
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return []
    return [
        name
        for name, prop in properties.items()
        if isinstance(prop, dict) and "example" in prop
    ]


def extract_request_example(operation: Any, doc: dict[str, Any]) -> Any | None:
    """Example request body for *operation* (JSON content only)."""
    if not isinstance(operation, dict):
        return None
    request_body = resolve_node(doc, operation.get("requestBody"))
    return media_example(_json_media(request_body), doc)


def extract_response_example(response: Any, doc: dict[str, Any]) -> Any | None:
    """Example body for a response object, following a top-level ``$ref``.

    When the JSON content yields nothing, the resolved component's own
    ``examples``/``example`` are read as a softer fallback.
    """
    resolved = resolve_node(doc, response)
    if not isinstance(resolved, dict):
        return None

    found = media_example(_json_media(resolved), doc)
    if found is not None:
        return found

    found = _first_example_value(resolved.get("examples"), doc, bare_values=True)
    if found is not None:
        logger.debug("Using component-level examples for response")
        return found
    return resolved.get("example")


def response_schema(response: Any, doc: dict[str, Any]) -> dict[str, Any] | None:
    """The resolved JSON schema of a response, if any."""
    resolved = resolve_node(doc, response)
    media = _json_media(resolved)
    if media is None:
        return None
    schema = resolve_node(doc, media.get("schema"))
    return schema if isinstance(schema, dict) else None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json_media(node: Any) -> dict[str, Any] | None:
    if not isinstance(node, dict):
        return None
    content = node.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(JSON_MEDIA_TYPE)
    return media if isinstance(media, dict) else None


def _first_example_value(
    examples: Any, doc: dict[str, Any], bare_values: bool = False
) -> Any | None:
    """Value of the first entry in an ``examples`` mapping.

    Media-type examples are Example objects (``{"value": ...}``).  With
    *bare_values* the entry itself is the example when it has no
    ``value`` key, as in Swagger 2 response ``examples``.
    """
    if not isinstance(examples, dict) or not examples:
        return None
    first = resolve_node(doc, next(iter(examples.values())))
    if isinstance(first, dict) and "value" in first:
        return first["value"]
    return first if bare_values else None
