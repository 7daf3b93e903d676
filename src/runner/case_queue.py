"""FIFO queue of declarative HTTP test cases.

Cases are registered with :meth:`CaseQueue.add` and executed strictly in
registration order by :meth:`CaseQueue.run`.  Each case sends one request,
compares the status code with the expected one and, on a match, hands the
response to an optional ``on_pass`` callback that may record values (such
as ``token`` or an ``id``) in the shared context for later cases.

The first failing case halts the run.
"""

from __future__ import annotations

import inspect
import logging
import re
from typing import Any

import httpx

from src.runner.http_client import request
from src.shared.display import (
    print_callback_failure,
    print_case_header,
    print_fail,
    print_pass,
    print_request,
    print_response,
)
from src.shared.errors import AssertionMismatchError, ExpectationFailedError
from src.shared.logging import new_run_id
from src.shared.models.execution import (
    CaseResult,
    CaseStatus,
    OnPass,
    QueuedCase,
    ReqResponse,
    RunReport,
    SharedContext,
)

logger = logging.getLogger(__name__)

# Matches: $id, $userId, $item_2
_PLACEHOLDER_PATTERN = re.compile(r"\$([a-zA-Z]\w*)")


def substitute_placeholders(url: str, context: dict[str, Any]) -> str:
    """Replace ``$name`` tokens in *url* with values from *context*.

    Tokens without a matching context key are left in place.
    """
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in context:
            logger.debug("No context value for placeholder $%s", key)
            return match.group(0)
        return str(context[key])

    return _PLACEHOLDER_PATTERN.sub(_replace, url)


class CaseQueue:
    """Ordered collection of :class:`QueuedCase` objects plus their shared context."""

    def __init__(self) -> None:
        self._cases: list[QueuedCase] = []
        self.context = SharedContext()

    @property
    def cases(self) -> list[QueuedCase]:
        return list(self._cases)

    def __len__(self) -> int:
        return len(self._cases)

    def add(
        self,
        url: str,
        auth: bool,
        expected_status: int,
        body: Any = None,
        on_pass: OnPass | None = None,
    ) -> QueuedCase:
        """Append a case; nothing is sent until :meth:`run`."""
        case = QueuedCase(
            url=url,
            auth=auth,
            expected_status=expected_status,
            body=body,
            on_pass=on_pass,
        )
        self._cases.append(case)
        return case

    def clear(self) -> None:
        self._cases.clear()
        self.context.clear()

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def run(self, client: httpx.AsyncClient | None = None) -> RunReport:
        """Execute queued cases in order, stopping at the first failure.

        Parameters
        ----------
        client:
            Optional shared ``httpx.AsyncClient`` reused for every request.

        Returns
        -------
        RunReport
            Counts and per-case results; cases after a failure stay
            ``pending`` and are not part of ``results``.
        """
        run_id = new_run_id()
        report = RunReport(total=len(self._cases))
        logger.info("Running %d queued cases (run %s)", report.total, run_id)

        for case in self._cases:
            result = await self._run_case(case, client)
            report.results.append(result)
            if result.status == CaseStatus.PASSED:
                report.passed += 1
                continue
            report.failed += 1
            logger.warning("Halting run after failed case: %s", result.error)
            break

        logger.info(
            "Queue run complete: %d passed, %d failed, %d total",
            report.passed, report.failed, report.total,
        )
        return report

    async def _run_case(
        self, case: QueuedCase, client: httpx.AsyncClient | None
    ) -> CaseResult:
        case.status = CaseStatus.RUNNING
        path = substitute_placeholders(case.url, self.context)
        headers: dict[str, str] = {}
        if case.auth and self.context.token:
            headers["Authorization"] = f"Bearer {self.context.token}"

        print_case_header(case.method, case.endpoint, case.body, case.expected_status)
        print_request(case.method, case.endpoint, case.body)

        res = await request(path, body=case.body, headers=headers, client=client)
        print_response(res.status, res.body)

        if res.status != case.expected_status:
            error = AssertionMismatchError(case.url, case.expected_status, res.status, case.body)
            print_fail(case.url, case.expected_status, res.status, case.body, case.auth)
            return self._finish(case, res, CaseStatus.FAILED, error.detail)

        print_pass(case.url, case.expected_status, case.auth)
        if case.on_pass is not None:
            try:
                outcome = case.on_pass(res, self.context)
                if inspect.isawaitable(outcome):
                    await outcome
            except ExpectationFailedError as exc:
                print_callback_failure(case.url, exc.detail)
                return self._finish(case, res, CaseStatus.FAILED, exc.detail)

        return self._finish(case, res, CaseStatus.PASSED)

    @staticmethod
    def _finish(
        case: QueuedCase, res: ReqResponse, status: CaseStatus, error: str = ""
    ) -> CaseResult:
        case.status = status
        return CaseResult(
            url=case.url,
            expected_status=case.expected_status,
            actual_status=res.status,
            status=status,
            error=error,
        )
