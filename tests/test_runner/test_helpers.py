"""Tests for the helper surface imported by generated modules."""
from __future__ import annotations

import httpx
import pytest

from src.runner import helpers, http_client
from src.runner.case_queue import CaseQueue
from src.shared.models.execution import RunReport


@pytest.fixture(autouse=True)
def clean_default_queue(monkeypatch):
    monkeypatch.setattr(http_client, "_base_url", None)
    helpers.default_queue.clear()
    yield
    helpers.default_queue.clear()


class TestQueueHelpers:
    """Tests for t() and the default queue."""

    def test_t_registers_on_default_queue(self):
        helpers.t("POST /users", False, 201, {"username": "bob"})
        helpers.t("GET /users/$id", True, 200)
        cases = helpers.default_queue.cases
        assert [(c.url, c.auth, c.expected_status) for c in cases] == [
            ("POST /users", False, 201),
            ("GET /users/$id", True, 200),
        ]
        assert cases[0].body == {"username": "bob"}

    def test_ctx_is_default_queue_context(self):
        assert helpers.ctx is helpers.default_queue.context

    def test_set_base_url_reexport(self):
        helpers.set_base_url("http://localhost:3000")
        assert http_client.get_base_url() == "http://localhost:3000"

    @pytest.mark.asyncio
    async def test_queued_case_hits_configured_base_url(self):
        helpers.set_base_url("http://api.test")
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200)

        queue = CaseQueue()
        queue.add("GET /ping", False, 200)
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            report = await queue.run(client=client)
        assert report.ok
        assert seen == ["/ping"]


class TestRunQueuedTests:
    """Tests for run_queued_tests exit codes."""

    def test_exit_zero_when_all_pass(self, monkeypatch):
        async def fake_run_queue(queue=None):
            return RunReport(passed=2, total=2)

        monkeypatch.setattr(helpers, "run_queue", fake_run_queue)
        with pytest.raises(SystemExit) as exc_info:
            helpers.run_queued_tests()
        assert exc_info.value.code == 0

    def test_exit_one_on_failure(self, monkeypatch):
        async def fake_run_queue(queue=None):
            return RunReport(passed=1, failed=1, total=3)

        monkeypatch.setattr(helpers, "run_queue", fake_run_queue)
        with pytest.raises(SystemExit) as exc_info:
            helpers.run_queued_tests()
        assert exc_info.value.code == 1

    def test_empty_queue_exits_zero(self):
        with pytest.raises(SystemExit) as exc_info:
            helpers.run_queued_tests(CaseQueue())
        assert exc_info.value.code == 0


class TestMiscHelpers:
    """Tests for random_int and warn."""

    def test_random_int_inclusive_bounds(self):
        values = {helpers.random_int(1, 3) for _ in range(300)}
        assert values <= {1, 2, 3}
        assert helpers.random_int(5, 5) == 5

    def test_warn_prints_advisory(self, capsys):
        helpers.warn("No duplicate user check")
        assert "WARNING: No duplicate user check" in capsys.readouterr().out
