"""Thin async HTTP wrapper used by generated test modules.

Requests are described as ``"METHOD /path"`` strings and resolved against
a process-wide base URL configured once with :func:`set_base_url`.
Transport failures never raise: they come back as a :class:`ReqResponse`
with status ``0`` and the error message as body.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from src.shared.constants import JSON_MEDIA_TYPE, TRANSPORT_ERROR_STATUS
from src.shared.display import print_warning
from src.shared.errors import BaseUrlNotSetError
from src.shared.models.execution import ReqResponse

logger = logging.getLogger(__name__)

_base_url: str | None = None
_timeout: float | None = None


def set_base_url(base_url: str) -> None:
    """Configure the base URL every request path is joined onto."""
    global _base_url
    _base_url = base_url
    logger.debug("Base URL set to %s", base_url)


def get_base_url() -> str | None:
    return _base_url


def set_timeout(timeout: float | None) -> None:
    """Per-request timeout in seconds; ``None`` waits indefinitely."""
    global _timeout
    _timeout = timeout


def build_url(path: str) -> str:
    """Join *path* onto the configured base URL.

    Raises
    ------
    BaseUrlNotSetError
        If :func:`set_base_url` was never called.
    """
    if not _base_url:
        raise BaseUrlNotSetError()
    return _base_url.rstrip("/") + path


async def request(
    method_path: str,
    body: Any = None,
    headers: dict[str, str] | None = None,
    params: dict[str, str] | None = None,
    client: httpx.AsyncClient | None = None,
) -> ReqResponse:
    """Send one request described by ``"METHOD /path"``.

    Parameters
    ----------
    method_path:
        Method and path separated by a single space.  A descriptor without
        both parts yields status ``0`` instead of a request.
    body:
        Sent only when non-empty; dicts and lists are JSON-encoded, strings
        are sent as-is.  ``content-type: application/json`` is added unless
        *headers* already carry a content type.
    params:
        Query parameters appended to the URL.
    client:
        Optional shared ``httpx.AsyncClient``; a short-lived one is created
        otherwise.

    Returns
    -------
    ReqResponse
        Parsed JSON body when the response content type says JSON, the
        raw text otherwise.
    """
    method, _, path = method_path.partition(" ")
    if not method or not path:
        return ReqResponse(TRANSPORT_ERROR_STATUS, f"Invalid methodPath: {method_path}")

    url = build_url(path)
    request_headers = httpx.Headers(headers or {})
    payload = _encode_body(body)
    if payload is not None and "content-type" not in request_headers:
        request_headers["content-type"] = JSON_MEDIA_TYPE

    try:
        if client is not None:
            response = await client.request(
                method.upper(), url, headers=request_headers, content=payload, params=params,
            )
        else:
            async with httpx.AsyncClient(timeout=_timeout, follow_redirects=True) as own_client:
                response = await own_client.request(
                    method.upper(), url, headers=request_headers, content=payload, params=params,
                )
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error("Request %s %s failed: %s", method.upper(), url, exc)
        print_warning(f"fetch error: {exc}")
        return ReqResponse(TRANSPORT_ERROR_STATUS, str(exc))

    logger.debug("%s %s -> %d", method.upper(), url, response.status_code)
    return ReqResponse(response.status_code, _decode_body(response))


def _encode_body(body: Any) -> str | None:
    if isinstance(body, str):
        return body or None
    if isinstance(body, (dict, list)) and body:
        return json.dumps(body)
    return None


def _decode_body(response: httpx.Response) -> Any:
    if JSON_MEDIA_TYPE in response.headers.get("content-type", ""):
        try:
            return response.json()
        except ValueError:
            logger.warning("Response declared JSON but could not be decoded")
    return response.text
