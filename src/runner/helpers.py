"""Helper surface imported by generated test modules.

A generated module looks like::

    from src.runner.helpers import random_int, run_queued_tests, set_base_url, t

    set_base_url("https://api.example.com")
    t("POST /users", False, 201, {"username": "bob"})
    t("GET /users/$id", True, 200)

    if __name__ == "__main__":
        run_queued_tests()

``t`` registers cases on a module-level :class:`CaseQueue`;
``run_queued_tests`` executes them and exits the process with ``0`` when
all passed and ``1`` otherwise.
"""

from __future__ import annotations

import asyncio
import logging
import random
import sys
from typing import Any

import httpx

from src.runner.assertions import (  # noqa: F401
    TArray,
    TBoolean,
    TNumber,
    TObject,
    TString,
    expect,
    expect_field,
    expect_field_match,
    expect_status,
    expect_struct,
    has_structure,
)
from src.runner.case_queue import CaseQueue
from src.runner.http_client import request as req  # noqa: F401
from src.runner.http_client import set_base_url, set_timeout  # noqa: F401
from src.runner.suite import log_state, print_summary, run_tests, state, test  # noqa: F401
from src.shared.config import GeneratorSettings
from src.shared.constants import SERVICE_NAME
from src.shared.display import print_warning
from src.shared.errors import SkipTestError  # noqa: F401
from src.shared.logging import setup_logging
from src.shared.models.execution import OnPass, RunReport

logger = logging.getLogger(__name__)

default_queue = CaseQueue()
ctx = default_queue.context


def t(
    endpoint: str,
    requires_auth: bool,
    expected_status: int,
    body: Any = None,
    on_pass: OnPass | None = None,
) -> None:
    """Queue a case on the default queue."""
    default_queue.add(endpoint, requires_auth, expected_status, body, on_pass)


def warn(message: str) -> None:
    """Print an advisory line; does not affect the run."""
    print_warning(message)


def random_int(low: int, high: int) -> int:
    """Random integer between *low* and *high*, both inclusive."""
    return random.randint(low, high)


async def run_queue(queue: CaseQueue | None = None) -> RunReport:
    """Run *queue* (the default queue when omitted) with one shared client."""
    settings = GeneratorSettings()
    async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True) as client:
        return await (queue or default_queue).run(client=client)


def run_queued_tests(queue: CaseQueue | None = None) -> None:
    """Run the queued cases and exit: status 0 if all passed, 1 otherwise."""
    settings = GeneratorSettings()
    setup_logging(SERVICE_NAME, settings.log_level)
    set_timeout(settings.http_timeout)
    report = asyncio.run(run_queue(queue))
    sys.exit(0 if report.ok else 1)
