"""Spec acquisition: local JSON files or a live Swagger UI bundle."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from src.generator.services.script_extractor import extract_swagger_doc
from src.shared.constants import DEFAULT_INIT_SCRIPT_SUFFIX
from src.shared.errors import InvalidSpecFileError

logger = logging.getLogger(__name__)


def load_spec_file(path: str | Path) -> Any:
    """Read and parse a local OpenAPI JSON document.

    Raises:
        InvalidSpecFileError: If *path* does not exist or is not valid JSON.
    """
    spec_path = Path(path)
    if not spec_path.is_file():
        raise InvalidSpecFileError(f"File not found: {spec_path}")

    try:
        text = spec_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidSpecFileError(f"Error reading the spec file: {exc}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidSpecFileError(
            f"Failed to parse the spec file as JSON: {exc}"
        ) from exc


def init_script_url(swagger_ui_link: str, suffix: str = DEFAULT_INIT_SCRIPT_SUFFIX) -> str:
    """``https://docs.example.com/`` -> ``https://docs.example.com/swagger-ui-init.js``."""
    return swagger_ui_link.rstrip("/") + suffix


async def fetch_init_script(
    swagger_ui_link: str,
    suffix: str = DEFAULT_INIT_SCRIPT_SUFFIX,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> str:
    """Download the Swagger UI init script as text.

    Any HTTP failure degrades to an empty string; the subsequent parse then
    fails explicitly with :class:`SpecNotFoundError`.
    """
    url = init_script_url(swagger_ui_link, suffix)
    logger.info("Fetching %s", url)
    try:
        if client is not None:
            response = await client.get(url)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned:
                response = await owned.get(url)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Failed to download %s, continuing with empty script: %s", url, exc)
        return ""
    return response.text


async def acquire_spec(
    spec_file_path: str | Path | None = None,
    swagger_ui_link: str | None = None,
    suffix: str = DEFAULT_INIT_SCRIPT_SUFFIX,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Any:
    """Obtain the raw OpenAPI document; a local file wins over a link."""
    if spec_file_path:
        logger.info("Loading spec from file %s", spec_file_path)
        return load_spec_file(spec_file_path)
    if not swagger_ui_link:
        raise ValueError("Either spec_file_path or swagger_ui_link is required")

    source = await fetch_init_script(swagger_ui_link, suffix, client=client, timeout=timeout)
    return extract_swagger_doc(source)
