"""Route planning Pydantic v2 data models."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PriorityClass(int, Enum):
    """Buckets used to reorder routes ahead of document order."""
    IDENTITY_CREATION = 1
    SESSION_CREATION = 2
    GENERAL = 3


class PlanStepKind(str, Enum):
    """Kinds of steps in a route plan."""
    PROBE = "probe"
    TEST = "test"
    WARNING = "warning"


class RoutePlanItem(BaseModel):
    """A single (route, method, status code) triple to test."""
    route: str
    method: str
    status_code: str
    priority_class: int = Field(default=PriorityClass.GENERAL.value, ge=1, le=3)

    @property
    def endpoint(self) -> str:
        """Return the ``"METHOD /path"`` descriptor for this item."""
        return f"{self.method.upper()} {self.route}"


class PlanStep(BaseModel):
    """One ordered entry of a route plan."""
    kind: PlanStepKind
    item: RoutePlanItem | None = None
    message: str = ""


class RoutePlan(BaseModel):
    """Ordered plan produced by the route planner."""
    steps: list[PlanStep] = Field(default_factory=list)

    @property
    def items(self) -> list[RoutePlanItem]:
        """Test items only, in plan order."""
        return [s.item for s in self.steps if s.kind == PlanStepKind.TEST and s.item is not None]

    @property
    def warnings(self) -> list[str]:
        return [s.message for s in self.steps if s.kind == PlanStepKind.WARNING]

    @property
    def probe(self) -> RoutePlanItem | None:
        for step in self.steps:
            if step.kind == PlanStepKind.PROBE:
                return step.item
        return None
