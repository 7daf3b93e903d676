"""Test-case emitter and generated-module renderer.

Turns a :class:`RoutePlan` into declarative test cases and renders them
as a standalone Python module that queues one ``t(...)`` call per case
and ends with ``run_queued_tests()``.  Case order is the plan order:
later cases may read context written by earlier ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from src.generator.services.example_extractor import (
    extract_request_example,
    extract_response_example,
    fields_with_examples,
    response_schema,
)
from src.generator.services.route_planner import is_error_status
from src.shared.constants import BODYLESS_METHODS, VERSION
from src.shared.models.plan import PlanStepKind, PriorityClass, RoutePlan, RoutePlanItem
from src.shared.utils import now_iso

logger = logging.getLogger(__name__)

_NO_BODY = object()

HELPERS_MODULE = "src.runner.helpers"

_CREDENTIALS_BODY = '{"username": username, "password": password}'


@dataclass
class EmittedCase:
    """One declarative test case ready to render."""
    method: str
    route: str
    expected_status: int
    body: Any = _NO_BODY
    assert_fields: list[str] = field(default_factory=list)

    @property
    def endpoint(self) -> str:
        return f"{self.method.upper()} {self.route}"

    @property
    def has_body(self) -> bool:
        return self.body is not _NO_BODY


class CaseEmitter:
    """Decides body and response assertion for each planned triple."""

    def __init__(self, doc: dict[str, Any]) -> None:
        self._doc = doc
        paths = doc.get("paths")
        self._paths = paths if isinstance(paths, dict) else {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def emit(self, plan: RoutePlan) -> list[EmittedCase]:
        """Emit one case per test item of *plan*, in plan order."""
        return [self.emit_item(item) for item in plan.items]

    def emit_item(self, item: RoutePlanItem) -> EmittedCase:
        method = item.method.lower()
        status = int(item.status_code)
        if method in BODYLESS_METHODS:
            return EmittedCase(method=method, route=item.route, expected_status=status)

        operation = self._operation(item.route, method)
        prioritized = item.priority_class != PriorityClass.GENERAL.value

        # identity and session routes may carry an operation-level example
        body = operation.get("example") if prioritized else None
        if not body:
            body = extract_request_example(operation, self._doc)

        if prioritized and operation.get("callback"):
            assert_fields = ["message"]
        else:
            assert_fields = self._assert_fields(operation, item.status_code)

        return EmittedCase(
            method=method,
            route=item.route,
            expected_status=status,
            body=body if body is not None else {},
            assert_fields=assert_fields,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _operation(self, route: str, method: str) -> dict[str, Any]:
        path_item = self._paths.get(route)
        if not isinstance(path_item, dict):
            return {}
        for key, operation in path_item.items():
            if isinstance(key, str) and key.lower() == method and isinstance(operation, dict):
                return operation
        return {}

    def _assert_fields(self, operation: dict[str, Any], status_code: str) -> list[str]:
        """Response fields to assert, by precedence.

        (a) several schema fields with examples: all of them;
        (b) a non-empty object example: its first key;
        (c) an error status: ``message``;
        (d) nothing.
        """
        responses = operation.get("responses")
        response = responses.get(status_code) if isinstance(responses, dict) else None

        schema_fields = fields_with_examples(response_schema(response, self._doc), self._doc)
        if len(schema_fields) > 1:
            return schema_fields

        example = extract_response_example(response, self._doc)
        if isinstance(example, dict) and example:
            return [next(iter(example))]

        if is_error_status(status_code):
            return ["message"]
        return []


# ---------------------------------------------------------------------------
# Module rendering
# ---------------------------------------------------------------------------


def render_case(case: EmittedCase) -> str:
    """Render one ``t(...)`` registration line."""
    args = [repr(case.endpoint), "False", str(case.expected_status)]
    if case.has_body or case.assert_fields:
        args.append(repr(case.body) if case.has_body else "None")
    if case.assert_fields:
        args.append(_render_callback(case.assert_fields))
    return f"t({', '.join(args)})"


def _render_callback(fields: list[str]) -> str:
    target = repr(fields[0]) if len(fields) == 1 else repr(list(fields))
    return f"lambda res, ctx: expect_field(res.body, {target})"


def render_test_module(
    cases: list[EmittedCase],
    plan: RoutePlan,
    base_url: str,
    swagger_ui_link: str | None = None,
    title: str = "",
) -> str:
    """Render the generated test module as Python source."""
    case_iter = iter(cases)
    body_lines: list[str] = []

    for step in plan.steps:
        if step.kind == PlanStepKind.PROBE and step.item is not None:
            body_lines.append(
                f"t({step.item.endpoint!r}, False, {step.item.status_code}, {_CREDENTIALS_BODY})"
            )
            body_lines.append("")
        elif step.kind == PlanStepKind.WARNING:
            body_lines.append(f"warn({step.message!r})")
        elif step.kind == PlanStepKind.TEST:
            body_lines.append(render_case(next(case_iter)))

    helpers = ["random_int", "run_queued_tests", "set_base_url", "t"]
    if any(case.assert_fields for case in cases):
        helpers.append("expect_field")
    if plan.warnings:
        helpers.append("warn")

    lines: list[str] = [
        f'"""Generated API smoke tests{f" for {title}" if title else ""}.',
        "",
        f"Generated by testgen {VERSION} at {now_iso()}.",
        '"""',
        f"from {HELPERS_MODULE} import {', '.join(sorted(helpers))}",
        "",
    ]
    if swagger_ui_link:
        lines.append(f"SWAGGER_URL = {swagger_ui_link!r}")
    lines.append(f"BASE_URL = {base_url!r}")
    lines.append("set_base_url(BASE_URL)")
    lines.append("")
    lines.append("# Generate random user")
    lines.append('username = f"testuser_{random_int(1000, 9999)}"')
    lines.append('password = f"testpass_{random_int(1000, 9999)}"')
    lines.append("")
    lines.extend(body_lines)
    lines.append("")
    lines.append('if __name__ == "__main__":')
    lines.append("    run_queued_tests()")
    lines.append("")

    logger.debug("Rendered %d cases", len(cases))
    return "\n".join(lines)
