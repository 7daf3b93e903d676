"""Route planner: ordering of (route, method, status code) test triples.

Routes are bucketed by an ordered list of :class:`PriorityRule` objects
(first match wins, default class 3) and stably sorted by class, so routes
in the same class keep document order.  The plan then contains:

1. the synthetic sanity probe,
2. the priority method (POST) of every class-1 route, followed by a
   warning step when no duplicate-conflict status is declared,
3. the priority method of every class-2 route,
4. every other (route, method) pair in sorted route order.

Inside each (route, method) group status codes are ordered by
:func:`sort_status_codes`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from src.generator.config import PlannerConfig
from src.shared.constants import HTTP_METHODS
from src.shared.errors import InvalidSpecFileError
from src.shared.models.plan import (
    PlanStep,
    PlanStepKind,
    PriorityClass,
    RoutePlan,
    RoutePlanItem,
)

logger = logging.getLogger(__name__)

RoutePredicate = Callable[[str, dict[str, Any]], bool]


@dataclass(frozen=True)
class PriorityRule:
    """Assigns *priority_class* to routes matching *predicate*."""

    predicate: RoutePredicate
    priority_class: int
    name: str = ""


def route_in(routes: list[str], method: str) -> RoutePredicate:
    """Predicate: route is one of *routes* and declares *method*."""
    wanted = set(routes)

    def _matches(route: str, path_item: dict[str, Any]) -> bool:
        return route in wanted and method in dict(_operations(path_item))

    return _matches


def default_priority_rules(config: PlannerConfig | None = None) -> list[PriorityRule]:
    """Identity-creation routes first, session-creation routes second."""
    cfg = config or PlannerConfig()
    method = cfg.priority_method.lower()
    return [
        PriorityRule(
            route_in(cfg.identity_routes, method),
            PriorityClass.IDENTITY_CREATION.value,
            name="identity-creation",
        ),
        PriorityRule(
            route_in(cfg.session_routes, method),
            PriorityClass.SESSION_CREATION.value,
            name="session-creation",
        ),
    ]


# ---------------------------------------------------------------------------
# Status codes
# ---------------------------------------------------------------------------


def _as_int(code: str) -> int | None:
    try:
        return int(code)
    except (TypeError, ValueError):
        return None


def is_error_status(code: str | int) -> bool:
    """True for 400-599."""
    value = _as_int(str(code))
    return value is not None and 400 <= value < 600


def sort_status_codes(codes: list[str]) -> list[str]:
    """Error codes (400-599) first, then the rest; ascending numeric in each group.

    Non-numeric codes (``default``, ``2XX``) go after every numeric code,
    in their original order.
    """
    def _key(indexed: tuple[int, str]) -> tuple[int, int, int]:
        index, code = indexed
        value = _as_int(code)
        if value is None:
            return (2, 0, index)
        return (0 if is_error_status(value) else 1, value, index)

    return [code for _, code in sorted(enumerate(codes), key=_key)]


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------


class RoutePlanner:
    """Builds the ordered test plan for an OpenAPI ``paths`` mapping."""

    def __init__(
        self,
        config: PlannerConfig | None = None,
        rules: list[PriorityRule] | None = None,
    ) -> None:
        self._config = config or PlannerConfig()
        self._rules = rules if rules is not None else default_priority_rules(self._config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify(self, route: str, path_item: dict[str, Any]) -> int:
        """Priority class of *route*; first matching rule wins."""
        for rule in self._rules:
            if rule.predicate(route, path_item):
                return rule.priority_class
        return PriorityClass.GENERAL.value

    def plan(self, paths: dict[str, Any] | None) -> RoutePlan:
        """Return the ordered plan for *paths*.

        Raises :class:`InvalidSpecFileError` when *paths* is present but
        not a mapping.
        """
        if paths is not None and not isinstance(paths, dict):
            raise InvalidSpecFileError(
                f"OpenAPI 'paths' must be an object, got {type(paths).__name__}"
            )
        cfg = self._config
        priority_method = cfg.priority_method.lower()

        routes = [
            (route, path_item, self.classify(route, path_item))
            for route, path_item in (paths or {}).items()
            if isinstance(path_item, dict)
        ]
        # sorted() is stable: same-class routes keep document order
        routes = sorted(routes, key=lambda entry: entry[2])

        steps: list[PlanStep] = [self._probe_step()]

        for wanted_class in (
            PriorityClass.IDENTITY_CREATION.value,
            PriorityClass.SESSION_CREATION.value,
        ):
            for route, path_item, priority_class in routes:
                if priority_class != wanted_class:
                    continue
                operation = dict(_operations(path_item)).get(priority_method)
                codes = self._plannable_codes(operation)
                steps.extend(
                    self._test_step(route, priority_method, code, priority_class)
                    for code in codes
                )
                if (
                    priority_class == PriorityClass.IDENTITY_CREATION.value
                    and cfg.duplicate_status_code not in codes
                ):
                    logger.info("No %s response declared for %s %s",
                                cfg.duplicate_status_code, priority_method.upper(), route)
                    steps.append(
                        PlanStep(kind=PlanStepKind.WARNING, message=cfg.duplicate_warning)
                    )

        for route, path_item, priority_class in routes:
            for method, operation in _operations(path_item):
                if (
                    priority_class != PriorityClass.GENERAL.value
                    and method == priority_method
                ):
                    continue
                codes = self._plannable_codes(operation)
                steps.extend(
                    self._test_step(route, method, code, PriorityClass.GENERAL.value)
                    for code in codes
                )

        logger.debug("Planned %d steps for %d routes", len(steps), len(routes))
        return RoutePlan(steps=steps)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _probe_step(self) -> PlanStep:
        probe = self._config.probe
        return PlanStep(
            kind=PlanStepKind.PROBE,
            item=RoutePlanItem(
                route=probe.route,
                method=probe.method.lower(),
                status_code=str(probe.expected_status),
                priority_class=PriorityClass.SESSION_CREATION.value,
            ),
        )

    @staticmethod
    def _test_step(route: str, method: str, code: str, priority_class: int) -> PlanStep:
        return PlanStep(
            kind=PlanStepKind.TEST,
            item=RoutePlanItem(
                route=route,
                method=method,
                status_code=code,
                priority_class=priority_class,
            ),
        )

    def _plannable_codes(self, operation: Any) -> list[str]:
        """Sorted status codes of *operation*, minus excluded and non-numeric ones."""
        if not isinstance(operation, dict):
            return []
        responses = operation.get("responses")
        if not isinstance(responses, dict):
            return []

        codes: list[str] = []
        for code in sort_status_codes([str(key) for key in responses]):
            if code in self._config.excluded_status_codes:
                continue
            if _as_int(code) is None:
                logger.debug("Skipping non-numeric status code %r", code)
                continue
            codes.append(code)
        return codes


def _operations(path_item: dict[str, Any]) -> list[tuple[str, Any]]:
    """(lower-cased method, operation) pairs of a path item, in document order."""
    return [
        (key.lower(), operation)
        for key, operation in path_item.items()
        if isinstance(key, str) and key.lower() in HTTP_METHODS
    ]
