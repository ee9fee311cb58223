"""Workflow domain types.

Steps, results and workflows are plain dataclasses. A workflow is mutated in
place by the runner; everything a step produces flows back through
`StepResult`.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class StepKind(str, Enum):
    ACTION = "action"
    CONDITION = "condition"
    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"


SUPPORTED_STEP_KINDS: frozenset[StepKind] = frozenset({StepKind.ACTION})


class WorkflowStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    max_retries: int = 0
    backoff_ms: int = 1000

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.backoff_ms <= 0:
            raise ValueError("backoff_ms must be > 0")

    def delay_seconds(self, attempt_index: int) -> float:
        """Delay before retry `attempt_index` (0 for the first retry)."""

        return self.backoff_ms * (2**attempt_index) / 1000.0


@dataclass(frozen=True, slots=True)
class StepResult:
    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None
    # Declared for step authors; the runner does not follow them.
    next_steps: tuple[str, ...] = ()

    @classmethod
    def ok(cls, data: dict[str, Any] | None = None) -> StepResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> StepResult:
        return cls(success=False, error=error)

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {"success": self.success}
        if self.data is not None:
            out["data"] = self.data
        if self.error is not None:
            out["error"] = self.error
        return out


# The overall outcome of a run has the same shape as a single step's result.
WorkflowResult = StepResult


@dataclass(slots=True)
class WorkflowContext:
    """Mutable data bag threaded through the steps of one execution."""

    workflow_id: str
    data: dict[str, Any] = field(default_factory=dict)
    step_id: str = ""
    env: object | None = None


StepBody = Callable[[WorkflowContext], Awaitable[StepResult]]


@dataclass(frozen=True, slots=True)
class WorkflowStep:
    id: str
    name: str
    execute: StepBody
    kind: StepKind = StepKind.ACTION
    # Informational only: steps always run in declaration order.
    depends_on: tuple[str, ...] = ()
    retry_policy: RetryPolicy | None = None


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(slots=True)
class Workflow:
    id: str
    name: str
    steps: list[WorkflowStep]
    status: WorkflowStatus = WorkflowStatus.PENDING
    created_at: datetime = field(default_factory=_utc_now)
    started_at: datetime | None = None
    completed_at: datetime | None = None
    current_step: str | None = None

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "steps": [
                {
                    "id": step.id,
                    "name": step.name,
                    "kind": step.kind.value,
                    "depends_on": list(step.depends_on),
                }
                for step in self.steps
            ],
            "created_at": self.created_at.isoformat(),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "current_step": self.current_step,
        }
