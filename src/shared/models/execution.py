"""Data models for queued test execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union


class CaseStatus(str, Enum):
    """Lifecycle of a queued test case."""
    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


class SharedContext(dict):
    """Run-scoped store carrying values from one case into later cases.

    Written by ``on_pass`` callbacks, read for ``$name`` substitution and
    for the ``Authorization`` header.
    """

    @property
    def token(self) -> Any:
        return self.get("token")


@dataclass
class ReqResponse:
    """Outcome of one HTTP request; status 0 means it never reached the server."""
    status: int
    body: Any = None


OnPass = Callable[[ReqResponse, SharedContext], Union[None, Awaitable[None]]]


@dataclass
class QueuedCase:
    """A declarative test case waiting in the execution queue."""
    url: str
    auth: bool
    expected_status: int
    body: Any = None
    on_pass: Optional[OnPass] = None
    status: CaseStatus = CaseStatus.PENDING

    @property
    def method(self) -> str:
        return self.url.split(" ", 1)[0]

    @property
    def endpoint(self) -> str:
        parts = self.url.split(" ", 1)
        return parts[1] if len(parts) > 1 else ""


@dataclass
class CaseResult:
    """Result of executing a single queued case."""
    url: str
    expected_status: int
    actual_status: int
    status: CaseStatus
    error: str = ""


@dataclass
class RunReport:
    """Aggregated result of one queue run."""
    passed: int = 0
    failed: int = 0
    total: int = 0
    results: list[CaseResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0
