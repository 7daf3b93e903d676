"""Derive the HTTP origin generated test cases will target."""

from __future__ import annotations

import logging
from typing import Any, Callable
from urllib.parse import urlsplit

from src.shared.errors import InvalidUrlError, MissingBaseUrlError

logger = logging.getLogger(__name__)

BASE_URL_PROMPT = "Enter the base URL for API requests"


def origin_of(link: str) -> str:
    """Return ``scheme://host[:port]`` of *link*.

    Raises:
        InvalidUrlError: If *link* has no scheme or host.
    """
    try:
        parts = urlsplit(link.strip())
    except (AttributeError, ValueError) as exc:
        raise InvalidUrlError(str(link)) from exc
    host = parts.netloc.rpartition("@")[2]
    if not parts.scheme or not host:
        raise InvalidUrlError(link)
    return f"{parts.scheme.lower()}://{host}"


def first_server_url(doc: dict[str, Any]) -> str | None:
    """``servers[0].url`` when the document declares one."""
    servers = doc.get("servers") if isinstance(doc, dict) else None
    if not isinstance(servers, list) or not servers:
        return None
    first = servers[0]
    if isinstance(first, dict) and isinstance(first.get("url"), str):
        return first["url"]
    return None


def derive_base_url(
    doc: dict[str, Any],
    swagger_ui_link: str | None = None,
    ask: Callable[[str], str | None] | None = None,
) -> str:
    """Compute the base URL, first applicable rule wins.

    1. An absolute ``http(s)`` first server URL, trailing slash removed.
    2. A relative (or otherwise non-absolute) server URL: origin of the
       documentation link.
    3. No servers: origin of the documentation link.
    4. Ask the operator through *ask*; without it (non-interactive) or on
       a blank answer, raise :class:`MissingBaseUrlError`.
    """
    server_url = first_server_url(doc)
    if server_url is not None and server_url.startswith("http"):
        return server_url.rstrip("/")

    if swagger_ui_link:
        if server_url is not None:
            logger.info(
                "Server URL %r is not absolute; using documentation origin", server_url
            )
        return origin_of(swagger_ui_link)

    if ask is not None:
        answer = (ask(BASE_URL_PROMPT) or "").strip()
        if answer:
            return answer.rstrip("/")

    raise MissingBaseUrlError()
