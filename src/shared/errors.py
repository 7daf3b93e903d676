"""Custom exception classes for test generation and test execution."""
from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


# ---------------------------------------------------------------------------
# Generation errors -- all fatal, reported by the generation entry point
# ---------------------------------------------------------------------------


class GenerationError(AppError):
    """Base class for errors that abort test-file generation."""


class InvalidSpecFileError(GenerationError):
    """Spec file path does not exist or does not hold valid JSON."""

    def __init__(self, detail: str = "Invalid spec file") -> None:
        super().__init__(detail=detail)


class SpecNotFoundError(GenerationError):
    """No embedded ``swaggerDoc`` literal found in a Swagger UI script."""

    def __init__(self, detail: str = "Could not find swaggerDoc in swagger-ui-init.js") -> None:
        super().__init__(detail=detail)


class InvalidUrlError(GenerationError):
    """A documentation link could not be parsed into an origin."""

    def __init__(self, url: str = "") -> None:
        self.url = url
        super().__init__(detail=f"Could not parse URL to extract base URL: {url!r}")


class MissingBaseUrlError(GenerationError):
    """No API base URL could be derived and none was supplied."""

    def __init__(self, detail: str = "API base URL is required to generate test script") -> None:
        super().__init__(detail=detail)


# ---------------------------------------------------------------------------
# Runner errors
# ---------------------------------------------------------------------------


class RunnerError(AppError):
    """Base class for errors raised while executing queued tests."""


class BaseUrlNotSetError(RunnerError):
    """The process-wide base URL was never configured."""

    def __init__(self) -> None:
        super().__init__(
            detail="BASE_URL is not defined. Call set_base_url(BASE_URL) at the top of the test file."
        )


class AssertionMismatchError(RunnerError):
    """Actual status code differs from the expected one."""

    def __init__(self, url: str, expected: int, actual: int, body: object = None) -> None:
        self.url = url
        self.expected = expected
        self.actual = actual
        self.body = body
        super().__init__(detail=f"{url} expected {expected}, got {actual}")


class ExpectationFailedError(RunnerError):
    """An ``expect*`` helper assertion did not hold."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail=f"FAIL: {detail}")


class SkipTestError(AppError):
    """Raised inside a named test to mark it as skipped."""

    def __init__(self, detail: str = "Condition not met") -> None:
        super().__init__(detail=detail)
