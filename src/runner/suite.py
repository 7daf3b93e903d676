"""Minimal sequential runner for named tests.

Tests are registered with :func:`test` and executed by :func:`run_tests`
in registration order.  A test function may be sync or async.  Raising
:class:`SkipTestError` marks a test as skipped; any other exception fails
it and stops the run.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from src.shared.display import print_run_summary, print_state, print_test_outcome, print_test_title
from src.shared.errors import AppError, SkipTestError

logger = logging.getLogger(__name__)

TestFn = Callable[[], Union[None, Awaitable[None]]]


@dataclass
class SuiteResults:
    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    def reset(self) -> None:
        self.passed = self.failed = self.skipped = 0


_registered: list[tuple[str, TestFn]] = []
test_results = SuiteResults()
state: dict[str, Any] = {}


def test(description: str, fn: TestFn) -> None:
    """Register a named test."""
    _registered.append((description, fn))


def registered_tests() -> list[str]:
    return [description for description, _ in _registered]


def reset() -> None:
    """Forget registered tests, results and state."""
    _registered.clear()
    test_results.reset()
    state.clear()


async def _run_single(description: str, fn: TestFn) -> str:
    print_test_title(description)
    try:
        outcome = fn()
        if inspect.isawaitable(outcome):
            await outcome
    except SkipTestError as exc:
        print_test_outcome("skip", exc.detail)
        test_results.skipped += 1
        return "skip"
    except Exception as exc:
        message = exc.detail if isinstance(exc, AppError) else str(exc)
        logger.warning("Test %r failed: %s", description, message)
        print_test_outcome("fail", message)
        test_results.failed += 1
        return "fail"

    print_test_outcome("pass")
    test_results.passed += 1
    return "pass"


async def run_tests() -> SuiteResults:
    """Run registered tests in order, stopping after the first failure."""
    for description, fn in _registered:
        if await _run_single(description, fn) == "fail":
            break
    print_summary()
    return test_results


def print_summary() -> None:
    print_run_summary(test_results.passed, test_results.failed, test_results.skipped)


def log_state(key: str, value: Any) -> None:
    """Store *value* under *key* in the shared state and echo it."""
    state[key] = value
    print_state(key, value)
